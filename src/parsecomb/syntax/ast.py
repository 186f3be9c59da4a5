"""AST node produced by the annotation layer.

An AstNode is the tree shape that tagged parse results are converted into:
leaves carry matched text, inner nodes carry children. Tags name the
grammatical role of each node. Building nodes from parse Values lives in
parsecomb.syntax.annotate; this module only defines the node and its
printing and lookup helpers.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from dataclasses import dataclass, replace

from .state import Position

__all__ = ["ROOT_TAG", "AstNode"]

# Tag given to nodes produced by root().
ROOT_TAG: str = "root"


@dataclass(frozen=True, slots=True)
class AstNode:
    """Immutable AST node.

    Attributes:
        tag: Grammatical role ("" for anonymous groups)
        contents: Matched text for leaves ("" for inner nodes)
        position: Where the node starts, when a state probe recorded it
        children: Child nodes in source order

    Example:
        >>> leaf = AstNode("number", "42")
        >>> node = AstNode("expr", children=(leaf,))
        >>> print(node.pretty())
        expr
          number: '42'
    """

    tag: str
    contents: str = ""
    position: Position | None = None
    children: tuple["AstNode", ...] = ()

    @property
    def children_num(self) -> int:
        """Number of direct children."""
        return len(self.children)

    @property
    def is_leaf(self) -> bool:
        """True when the node has no children."""
        return not self.children

    def with_tag(self, tag: str) -> "AstNode":
        """Copy of this node with a different tag."""
        return replace(self, tag=tag)

    def with_position(self, position: Position) -> "AstNode":
        """Copy of this node with a recorded start position."""
        return replace(self, position=position)

    def walk(self) -> Iterator["AstNode"]:
        """Yield this node and every descendant, depth first, in source order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_all(self, tag: str) -> list["AstNode"]:
        """All nodes (including this one) whose tag equals tag."""
        return [node for node in self.walk() if node.tag == tag]

    def text(self) -> str:
        """Concatenated contents of all leaves, in source order."""
        return "".join(node.contents for node in self.walk() if node.is_leaf)

    def pretty(self, indent: str = "  ") -> str:
        """Render the tree, one node per line, children indented."""
        lines: list[str] = []
        stack: list[tuple[AstNode, int]] = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            label = node.tag or "<group>"
            if node.contents or node.is_leaf:
                lines.append(f"{indent * depth}{label}: {node.contents!r}")
            else:
                lines.append(f"{indent * depth}{label}")
            stack.extend((child, depth + 1) for child in reversed(node.children))
        return "\n".join(lines)
