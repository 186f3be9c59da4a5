"""Render parser trees as indented text.

Useful for debugging grammars: each node is printed on its own line with
its arguments, children indented beneath it. A Rule is expanded the first
time it is reached and printed by name afterwards, so recursive grammars
render finitely.

Python 3.13+.
"""

from .parser.nodes import (
    Anchor,
    CharRange,
    Count,
    Expect,
    Fail,
    LiftValue,
    LiteralChar,
    LiteralString,
    NoneOf,
    OneOf,
    Parser,
    Rule,
    Satisfy,
    Tag,
)

__all__ = ["ParserDescriber", "describe"]

_INDENT: str = "  "


class ParserDescriber:
    """Converts a parser tree into an indented outline.

    Thread-safe describer with no mutable instance state.
    All traversal state is local to the describe() call.

    Usage:
        >>> from parsecomb import char, many, or_, fold_concat
        >>> print(ParserDescriber().describe(many(or_(char("a"), char("b")), fold_concat)))
        many [fold_concat]
          choice
            char 'a'
            char 'b'
    """

    def describe(self, parser: Parser) -> str:
        """Describe parser and everything reachable from it.

        Undefined rules are printed as ``rule name (undefined)``.
        """
        output: list[str] = []
        self._describe_node(parser, 0, output, set())
        return "\n".join(output)

    def _describe_node(
        self, parser: Parser, depth: int, output: list[str], seen: set[int]
    ) -> None:
        """Append parser's line and its children's lines to output."""
        stack: list[tuple[Parser, int]] = [(parser, depth)]
        while stack:
            node, level = stack.pop()
            prefix = _INDENT * level

            if isinstance(node, Rule):
                if not node.is_defined:
                    output.append(f"{prefix}rule {node.name} (undefined)")
                    continue
                if id(node) in seen:
                    output.append(f"{prefix}rule {node.name} (see above)")
                    continue
                seen.add(id(node))
                output.append(f"{prefix}rule {node.name}")
                stack.append((node.parser, level + 1))
                continue

            output.append(prefix + self._label(node))
            stack.extend((child, level + 1) for child in reversed(_children(node)))

    @staticmethod
    def _label(node: Parser) -> str:
        """One-line summary of a node without its children."""
        match node:
            case LiteralChar(char=c):
                return f"char {c!r}"
            case CharRange(lo=lo, hi=hi):
                return f"range {lo!r}-{hi!r}"
            case OneOf(chars=chars) | NoneOf(chars=chars):
                return f"{node.kind} {chars!r}"
            case Satisfy(label=label) | Anchor(label=label):
                return f"{node.kind} <{label}>"
            case LiteralString(text=text):
                return f"string {text!r}"
            case Fail(message=message):
                return f"fail {message!r}"
            case LiftValue(value=value):
                return f"lift_value {value.kind}"
            case Tag(label=label) | Expect(label=label):
                return f"{node.kind} {label!r}"
            case _:
                fold = getattr(node, "fold", None)
                if fold is not None:
                    name = getattr(fold, "__name__", type(fold).__name__)
                    if isinstance(node, Count):
                        return f"{node.kind} {node.n} [{name}]"
                    return f"{node.kind} [{name}]"
                return str(node.kind)


def _children(node: Parser) -> tuple[Parser, ...]:
    """Direct child parsers of node, in evaluation order."""
    if hasattr(node, "parsers"):
        return node.parsers
    if hasattr(node, "item"):
        return (node.item, node.sep)
    child = getattr(node, "parser", None)
    return () if child is None else (child,)


def describe(parser: Parser) -> str:
    """Describe parser as an indented outline.

    Convenience function for ParserDescriber().describe(parser).
    """
    return ParserDescriber().describe(parser)
