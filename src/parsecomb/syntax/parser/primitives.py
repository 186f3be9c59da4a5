"""Primitive parser constructors.

Each primitive consumes a bounded, well-defined amount of input or fails
without consuming anything. Character matchers succeed with a TEXT value
holding the matched character.

Expected Labels:
    Failures report what would have matched. Labels are plain text:
        char('a')            -> "a"
        char_range('0', '9') -> "0-9"
        one_of("+-")         -> "one of '+-'"
        string("let")        -> "let"
"""

from collections.abc import Callable

from parsecomb.diagnostics import ErrorTemplate, GrammarError

from ..value import Value
from .nodes import (
    Anchor,
    AnchorPredicate,
    AnyChar,
    CharPredicate,
    CharRange,
    Fail,
    Lift,
    LiftValue,
    LiteralChar,
    LiteralString,
    NoneOf,
    OneOf,
    Pass,
    Satisfy,
    StateProbe,
)

__all__ = [
    "any_char",
    "anchor",
    "boundary",
    "char",
    "char_range",
    "eoi",
    "fail",
    "lift",
    "lift_value",
    "none_of",
    "one_of",
    "pass_",
    "satisfy",
    "soi",
    "state",
    "string",
]

# Shared instances: primitives without arguments carry no state.
_ANY = AnyChar()
_PASS = Pass()
_STATE = StateProbe()


def _require_char(argument: str, constructor: str) -> None:
    if not isinstance(argument, str) or len(argument) != 1:
        raise GrammarError(ErrorTemplate.not_a_character(str(argument), constructor))


def any_char() -> AnyChar:
    """Any single character; fails only at end of input."""
    return _ANY


def char(c: str) -> LiteralChar:
    """Exactly the character c.

    Raises:
        GrammarError: If c is not a single character
    """
    _require_char(c, "char")
    return LiteralChar(c)


def char_range(lo: str, hi: str) -> CharRange:
    """Any character with code point in [lo, hi] (inclusive).

    Raises:
        GrammarError: If a bound is not a single character or lo > hi
    """
    _require_char(lo, "char_range")
    _require_char(hi, "char_range")
    if lo > hi:
        raise GrammarError(ErrorTemplate.invalid_range(lo, hi))
    return CharRange(lo, hi)


def one_of(chars: str) -> OneOf:
    """Any character contained in chars."""
    return OneOf(chars)


def none_of(chars: str) -> NoneOf:
    """Any character not contained in chars (fails at end of input)."""
    return NoneOf(chars)


def satisfy(predicate: CharPredicate, label: str = "character satisfying predicate") -> Satisfy:
    """Any character for which predicate returns True.

    Args:
        predicate: Called with the current character
        label: Expected item reported on failure
    """
    return Satisfy(predicate, label)


def string(text: str) -> LiteralString:
    """Exactly text. All of it is consumed or none of it."""
    return LiteralString(text)


def pass_() -> Pass:
    """Always succeed with unit, consuming nothing."""
    return _PASS


def fail(message: str) -> Fail:
    """Always fail with a literal message, consuming nothing."""
    return Fail(message)


def lift(factory: Callable[[], object]) -> Lift:
    """Succeed with factory(), consuming nothing.

    The factory may return a Value or a plain Python object accepted by
    Value.of(). It is called once per evaluation.
    """
    return Lift(factory)


def lift_value(value: object) -> LiftValue:
    """Succeed with a fixed value, consuming nothing.

    Plain Python objects are wrapped with Value.of() at construction.
    """
    return LiftValue(Value.of(value))


def anchor(predicate: AnchorPredicate, label: str = "anchor") -> Anchor:
    """Zero-width assertion.

    Args:
        predicate: Called with (previous character or None, next character or None)
        label: Expected item reported on failure
    """
    return Anchor(predicate, label)


def state() -> StateProbe:
    """Succeed with the current State (offset, row, column), consuming nothing."""
    return _STATE


def _at_start(prev: str | None, nxt: str | None) -> bool:
    return prev is None


def _at_end(prev: str | None, nxt: str | None) -> bool:
    return nxt is None


def _is_word_char(c: str | None) -> bool:
    return c is not None and (c.isalnum() or c == "_")


def _at_boundary(prev: str | None, nxt: str | None) -> bool:
    return _is_word_char(prev) != _is_word_char(nxt)


_SOI = Anchor(_at_start, "start of input")
_EOI = Anchor(_at_end, "end of input")
_BOUNDARY = Anchor(_at_boundary, "boundary")


def soi() -> Anchor:
    """Zero-width: succeeds only at offset 0."""
    return _SOI


def eoi() -> Anchor:
    """Zero-width: succeeds only when all input is consumed."""
    return _EOI


def boundary() -> Anchor:
    """Zero-width: succeeds between a word character and a non-word character."""
    return _BOUNDARY
