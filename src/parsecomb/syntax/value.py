"""Tagged result values and the fold protocol.

A Value holds exactly one payload from a closed set of kinds (ValueKind).
Combinators never look inside a Value; fold functions do, through typed
accessors that raise TypeMismatchError on the wrong kind instead of
returning a wrong-type payload.

Every Value also carries annotation metadata (tag, is_root) set by the
tag() and root() parsers. Metadata never affects matching.

Fold Protocol:
    A fold is any callable taking the ordered child Values of a combinator
    (one per sub-parser for sequences, one per repetition for loops) and
    returning a single Value. Folds only see Values, never the input.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from parsecomb.diagnostics import ErrorTemplate, TypeMismatchError
from parsecomb.enums import ValueKind

from .ast import AstNode
from .state import State

__all__ = [
    "Fold",
    "Value",
    "fold_concat",
    "fold_first",
    "fold_last",
    "fold_list",
    "fold_nth",
    "fold_null",
]


@dataclass(frozen=True, slots=True)
class Value:
    """Type-erased parse result with a checked payload.

    Attributes:
        kind: Which payload type this Value holds
        payload: The payload (str, int, tuple[Value, ...], None, State, AstNode, or any)
        type_tag: Application type name for CUSTOM values
        tag: Grammatical role attached by tag() (metadata only)
        is_root: Set by root() on the overall result (metadata only)

    Example:
        >>> v = Value.text("ab")
        >>> v.as_text()
        'ab'
        >>> v.as_int()
        Traceback (most recent call last):
        ...
        parsecomb.diagnostics.errors.TypeMismatchError: Type mismatch in as_int(): expected integer, got text
    """

    kind: ValueKind
    payload: Any = None
    type_tag: str | None = None
    tag: str | None = None
    is_root: bool = False

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @staticmethod
    def text(text: str) -> "Value":
        """TEXT value."""
        return Value(ValueKind.TEXT, text)

    @staticmethod
    def integer(number: int) -> "Value":
        """INTEGER value."""
        return Value(ValueKind.INTEGER, number)

    @staticmethod
    def list(items: Sequence["Value"]) -> "Value":
        """LIST value holding child Values in order."""
        return Value(ValueKind.LIST, tuple(items))

    @staticmethod
    def unit() -> "Value":
        """UNIT value (no payload)."""
        return _UNIT

    @staticmethod
    def of_state(state: State) -> "Value":
        """STATE value."""
        return Value(ValueKind.STATE, state)

    @staticmethod
    def ast(node: AstNode) -> "Value":
        """AST value."""
        return Value(ValueKind.AST, node)

    @staticmethod
    def custom(type_tag: str, payload: object) -> "Value":
        """CUSTOM value identified by an application type tag."""
        return Value(ValueKind.CUSTOM, payload, type_tag=type_tag)

    @staticmethod
    def of(obj: object) -> "Value":
        """Wrap a plain Python object in the matching Value kind.

        str -> TEXT, int/bool -> INTEGER, None -> UNIT, list/tuple -> LIST
        (items wrapped recursively), State -> STATE, AstNode -> AST.
        A Value is returned unchanged.

        Raises:
            TypeMismatchError: For any other type; use Value.custom() instead
        """
        match obj:
            case Value():
                return obj
            case str():
                return Value.text(obj)
            case int():
                return Value.integer(int(obj))
            case None:
                return _UNIT
            case list() | tuple():
                return Value.list([Value.of(item) for item in obj])
            case State():
                return Value.of_state(obj)
            case AstNode():
                return Value.ast(obj)
            case _:
                type_name = type(obj).__name__
                raise TypeMismatchError(
                    ErrorTemplate.unsupported_payload(type_name),
                    expected_kind="value",
                    actual_kind=type_name,
                )

    # ------------------------------------------------------------------
    # Checked accessors
    # ------------------------------------------------------------------

    def _require(self, kind: ValueKind, context: str) -> None:
        if self.kind is not kind:
            raise TypeMismatchError(
                ErrorTemplate.type_mismatch(kind, self.kind, context),
                expected_kind=kind,
                actual_kind=self.kind,
            )

    def as_text(self) -> str:
        """Payload of a TEXT value."""
        self._require(ValueKind.TEXT, "as_text()")
        return self.payload

    def as_int(self) -> int:
        """Payload of an INTEGER value."""
        self._require(ValueKind.INTEGER, "as_int()")
        return self.payload

    def as_list(self) -> tuple["Value", ...]:
        """Children of a LIST value."""
        self._require(ValueKind.LIST, "as_list()")
        return self.payload

    def as_state(self) -> State:
        """Payload of a STATE value."""
        self._require(ValueKind.STATE, "as_state()")
        return self.payload

    def as_ast(self) -> AstNode:
        """Payload of an AST value."""
        self._require(ValueKind.AST, "as_ast()")
        return self.payload

    def as_custom(self, type_tag: str) -> Any:
        """Payload of a CUSTOM value whose type tag equals type_tag."""
        self._require(ValueKind.CUSTOM, "as_custom()")
        if self.type_tag != type_tag:
            raise TypeMismatchError(
                ErrorTemplate.custom_tag_mismatch(type_tag, str(self.type_tag)),
                expected_kind=type_tag,
                actual_kind=str(self.type_tag),
            )
        return self.payload

    @property
    def is_unit(self) -> bool:
        """True for UNIT values."""
        return self.kind is ValueKind.UNIT

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def with_tag(self, tag: str) -> "Value":
        """Copy of this value annotated with a tag."""
        return replace(self, tag=tag)

    def as_root(self) -> "Value":
        """Copy of this value marked as the root result."""
        return replace(self, is_root=True)

    def to_python(self) -> Any:
        """Payload with LIST children unwrapped recursively (metadata dropped)."""
        if self.kind is ValueKind.LIST:
            return [child.to_python() for child in self.payload]
        return self.payload


_UNIT = Value(ValueKind.UNIT)

type Fold = Callable[[Sequence[Value]], Value]


# ============================================================================
# STOCK FOLDS
# ============================================================================


def fold_first(values: Sequence[Value]) -> Value:
    """Keep the first child, drop the rest (used to drop delimiters)."""
    if not values:
        return _UNIT
    return values[0]


def fold_last(values: Sequence[Value]) -> Value:
    """Keep the last child."""
    if not values:
        return _UNIT
    return values[-1]


def fold_nth(index: int) -> Fold:
    """Build a fold keeping the child at index.

    Raises (when the fold runs):
        TypeMismatchError: If index is outside the children

    Example:
        >>> fold_nth(1)([Value.text("("), Value.text("x"), Value.text(")")]).as_text()
        'x'
    """

    def fold(values: Sequence[Value]) -> Value:
        if not -len(values) <= index < len(values):
            expected = f"child {index}"
            actual = f"{len(values)} values"
            raise TypeMismatchError(
                ErrorTemplate.type_mismatch(expected, actual, f"fold_nth({index})"),
                expected_kind=expected,
                actual_kind=actual,
            )
        return values[index]

    fold.__name__ = f"fold_nth_{index}"
    return fold


def fold_concat(values: Sequence[Value]) -> Value:
    """Concatenate TEXT children in order.

    UNIT children count as empty text so optional pieces can be folded.

    Raises:
        TypeMismatchError: If a child is neither TEXT nor UNIT
    """
    parts: list[str] = []
    for value in values:
        if value.kind is ValueKind.UNIT:
            continue
        if value.kind is not ValueKind.TEXT:
            raise TypeMismatchError(
                ErrorTemplate.type_mismatch(ValueKind.TEXT, value.kind, "fold_concat"),
                expected_kind=ValueKind.TEXT,
                actual_kind=value.kind,
            )
        parts.append(value.payload)
    return Value.text("".join(parts))


def fold_null(values: Sequence[Value]) -> Value:
    """Discard all children."""
    return _UNIT


def fold_list(values: Sequence[Value]) -> Value:
    """Collect the children into a LIST value."""
    return Value.list(values)
