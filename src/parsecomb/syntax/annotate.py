"""Building AST nodes from parse values.

Grammars that want a uniform tree instead of hand-written folds combine
tag() with fold_ast: every tagged value becomes a node named after its
tag, and sequences collapse into their children.

Example:
    >>> from parsecomb import char, digits, parse, seq, tag
    >>> number = tag(digits(), "number")
    >>> expr = seq([number, tag(char("+"), "op"), number], fold_ast)
    >>> print(to_ast(parse("calc", "1+2", expr).value).pretty())
    <group>
      number: '1'
      op: '+'
      number: '2'

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from parsecomb.diagnostics import ErrorTemplate, TypeMismatchError
from parsecomb.enums import ValueKind

from .ast import AstNode
from .parser.combinators import seq
from .parser.nodes import Parser
from .parser.primitives import state
from .value import Value

__all__ = ["ast_with_state", "fold_ast", "fold_state_ast", "to_ast"]


def to_ast(value: Value) -> AstNode:
    """Convert any Value into an AstNode.

    Conversion by kind:
        TEXT     -> leaf holding the text
        INTEGER  -> leaf holding the decimal digits
        LIST     -> inner node with converted children
        UNIT     -> empty leaf
        STATE    -> empty leaf carrying the position
        AST      -> the node itself
        CUSTOM   -> leaf holding repr(payload)

    The value's tag, when set, becomes the node's tag.
    """
    tag = value.tag or ""
    match value.kind:
        case ValueKind.TEXT:
            node = AstNode(tag, value.payload)
        case ValueKind.INTEGER:
            node = AstNode(tag, str(value.payload))
        case ValueKind.LIST:
            node = AstNode(tag, children=tuple(to_ast(child) for child in value.payload))
        case ValueKind.UNIT:
            node = AstNode(tag)
        case ValueKind.STATE:
            node = AstNode(tag, position=value.payload.position)
        case ValueKind.AST:
            node = value.payload
            if tag and not node.tag:
                node = node.with_tag(tag)
        case _:
            node = AstNode(tag, repr(value.payload))
    return node


def fold_ast(values: Sequence[Value]) -> Value:
    """Fold children into one AST node.

    Rules:
        - Untagged UNIT children are dropped
        - No remaining children gives UNIT
        - A single remaining child is returned as it is
        - Untagged inner children are flattened into the new node
        - The new node itself is untagged; wrap the parser in tag() to name it
    """
    nodes = [to_ast(v) for v in values if not (v.is_unit and v.tag is None)]
    if not nodes:
        return Value.unit()
    if len(nodes) == 1:
        return Value.ast(nodes[0])

    children: list[AstNode] = []
    for node in nodes:
        if not node.tag and not node.is_leaf:
            children.extend(node.children)
        else:
            children.append(node)
    return Value.ast(AstNode("", children=tuple(children)))


def fold_state_ast(values: Sequence[Value]) -> Value:
    """Fold ``[STATE, value]`` into the value's AST node stamped with the position.

    Raises:
        TypeMismatchError: If values is not a state followed by one value
    """
    if len(values) != 2:
        raise TypeMismatchError(
            ErrorTemplate.type_mismatch("state and value", f"{len(values)} values", "fold_state_ast"),
            expected_kind="state and value",
            actual_kind=f"{len(values)} values",
        )
    position = values[0].as_state().position
    return Value.ast(to_ast(values[1]).with_position(position))


def ast_with_state(parser: Parser) -> Parser:
    """parser whose result becomes an AST node recording where it started."""
    return seq([state(), parser], fold_state_ast)
