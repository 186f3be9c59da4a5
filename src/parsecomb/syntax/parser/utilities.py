"""Derived convenience parsers.

Everything here is a composition of primitives and combinators; nothing
reaches into the evaluator. Character classes are labelled with expect()
so failures read "expected digit" rather than "expected 0-9".

Value Conventions:
    - Character classes and their repetitions produce TEXT
    - integer(), hexadecimal() and octal() produce INTEGER
    - whitespace skippers produce UNIT

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from ..value import Fold, Value, fold_concat, fold_first, fold_nth, fold_null
from .combinators import expect, many, many1, or_, seq
from .nodes import Parser
from .primitives import char, char_range, eoi, none_of, one_of, pass_, soi

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Whitespace
    "whitespace",
    "whitespaces",
    "blank",
    "blanks",
    "newline",
    "tab",
    "escape",
    # Digits
    "digit",
    "digits",
    "hexdigit",
    "hexdigits",
    "octdigit",
    "octdigits",
    # Letters
    "lower",
    "upper",
    "alpha",
    "underscore",
    "alphanum",
    # Numbers and identifiers
    "integer",
    "hexadecimal",
    "octal",
    "ident",
    "string_literal",
    # Wrappers
    "maybe",
    "token",
    "between",
    "total",
]


# ============================================================================
# WHITESPACE
# ============================================================================


def whitespace() -> Parser:
    """One of space, tab, newline or carriage return."""
    return expect(one_of(" \t\n\r"), "whitespace")


def whitespaces() -> Parser:
    """Zero or more whitespace characters, concatenated."""
    return many(whitespace(), fold_concat)


def blank() -> Parser:
    """Space or tab."""
    return expect(one_of(" \t"), "blank")


def blanks() -> Parser:
    """Zero or more blanks, discarded."""
    return many(blank(), fold_null)


def newline() -> Parser:
    return expect(char("\n"), "newline")


def tab() -> Parser:
    return expect(char("\t"), "tab")


def escape() -> Parser:
    """Backslash followed by any character, as two-character TEXT."""
    return expect(seq([char("\\"), none_of("")], fold_concat), "escape sequence")


# ============================================================================
# DIGITS
# ============================================================================


def digit() -> Parser:
    return expect(char_range("0", "9"), "digit")


def digits() -> Parser:
    """One or more decimal digits as TEXT."""
    return expect(many1(digit(), fold_concat), "digits")


def hexdigit() -> Parser:
    return expect(
        or_(char_range("0", "9"), char_range("a", "f"), char_range("A", "F")),
        "hex digit",
    )


def hexdigits() -> Parser:
    return expect(many1(hexdigit(), fold_concat), "hex digits")


def octdigit() -> Parser:
    return expect(char_range("0", "7"), "oct digit")


def octdigits() -> Parser:
    return expect(many1(octdigit(), fold_concat), "oct digits")


# ============================================================================
# LETTERS
# ============================================================================


def lower() -> Parser:
    return expect(char_range("a", "z"), "lowercase letter")


def upper() -> Parser:
    return expect(char_range("A", "Z"), "uppercase letter")


def alpha() -> Parser:
    """ASCII letter."""
    return expect(or_(char_range("a", "z"), char_range("A", "Z")), "letter")


def underscore() -> Parser:
    return expect(char("_"), "underscore")


def alphanum() -> Parser:
    """ASCII letter or decimal digit."""
    return expect(
        or_(char_range("a", "z"), char_range("A", "Z"), char_range("0", "9")),
        "letter or digit",
    )


# ============================================================================
# NUMBERS AND IDENTIFIERS
# ============================================================================


def _to_int(base: int) -> Fold:
    def fold(values: Sequence[Value]) -> Value:
        return Value.integer(int(fold_concat(values).as_text(), base))

    fold.__name__ = f"fold_int_base{base}"
    return fold


def integer() -> Parser:
    """Optionally signed decimal integer as INTEGER.

    Example:
        >>> from parsecomb import parse
        >>> parse("num", "-42", integer()).value.as_int()
        -42
    """
    return expect(seq([maybe(char("-")), digits()], _to_int(10)), "integer")


def hexadecimal() -> Parser:
    """Hex digits after a ``0x`` prefix, as INTEGER."""
    return expect(seq([char("0"), one_of("xX"), hexdigits()], _hex_fold), "hexadecimal")


def _hex_fold(values: Sequence[Value]) -> Value:
    return Value.integer(int(values[2].as_text(), 16))


def octal() -> Parser:
    """Octal digits after a leading ``0``, as INTEGER."""
    return expect(seq([char("0"), octdigits()], _oct_fold), "octal")


def _oct_fold(values: Sequence[Value]) -> Value:
    return Value.integer(int(values[1].as_text(), 8))


def ident() -> Parser:
    """Letter or underscore followed by letters, digits or underscores."""
    start = or_(alpha(), underscore())
    rest = many(or_(alphanum(), underscore()), fold_concat)
    return expect(seq([start, rest], fold_concat), "identifier")


def string_literal() -> Parser:
    """Double-quoted string with backslash escapes; value is the raw body.

    Escape sequences are kept as written, backslash included.
    """
    body = many(or_(escape(), none_of('"\\')), fold_concat)
    return expect(seq([char('"'), body, char('"')], fold_nth(1)), "string literal")


# ============================================================================
# WRAPPERS
# ============================================================================


def maybe(parser: Parser) -> Parser:
    """parser, or UNIT without consuming input when it fails."""
    return or_(parser, pass_())


def token(parser: Parser) -> Parser:
    """parser followed by optional whitespace; value is parser's."""
    return seq([parser, many(whitespace(), fold_null)], fold_first)


def between(open_: Parser, parser: Parser, close: Parser) -> Parser:
    """open_ parser close; value is parser's."""
    return seq([open_, parser, close], fold_nth(1))


def total(parser: Parser) -> Parser:
    """parser anchored to the whole input (leading whitespace allowed)."""
    return seq([soi(), many(whitespace(), fold_null), parser, eoi()], fold_nth(2))
