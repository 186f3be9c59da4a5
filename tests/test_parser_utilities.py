"""Tests for syntax/parser/utilities.py: derived convenience parsers."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from parsecomb import ParseError, ParseResult, Parser, Value, char, parse
from parsecomb.syntax.parser.utilities import (
    alpha,
    alphanum,
    between,
    blanks,
    digit,
    digits,
    escape,
    hexadecimal,
    hexdigits,
    ident,
    integer,
    lower,
    maybe,
    newline,
    octal,
    octdigits,
    string_literal,
    tab,
    token,
    total,
    underscore,
    upper,
    whitespace,
    whitespaces,
)


def _value(text: str, parser: Parser) -> Value:
    outcome = parse("util", text, parser)
    assert isinstance(outcome, ParseResult), outcome
    return outcome.value


def _err(text: str, parser: Parser) -> ParseError:
    outcome = parse("util", text, parser)
    assert isinstance(outcome, ParseError), outcome
    return outcome


class TestCharacterClasses:
    """Test labelled character classes."""

    @pytest.mark.parametrize(
        ("parser", "good", "bad", "label"),
        [
            (digit(), "7", "x", "digit"),
            (lower(), "q", "Q", "lowercase letter"),
            (upper(), "Q", "q", "uppercase letter"),
            (alpha(), "Z", "1", "letter"),
            (alphanum(), "5", "_", "letter or digit"),
            (underscore(), "_", "-", "underscore"),
            (whitespace(), "\t", "x", "whitespace"),
            (newline(), "\n", " ", "newline"),
            (tab(), "\t", " ", "tab"),
        ],
    )
    def test_class(self, parser: Parser, good: str, bad: str, label: str) -> None:
        """Each class accepts its members and reports its label."""
        assert _value(good, parser).as_text() == good
        assert _err(bad, parser).expected == (label,)

    def test_escape(self) -> None:
        """escape() takes a backslash and the next character."""
        assert _value("\\n", escape()).as_text() == "\\n"


class TestRuns:
    """Test repeated classes."""

    def test_digits(self) -> None:
        """digits() reads the whole run."""
        assert _value("0123x", digits()).as_text() == "0123"

    def test_digits_label(self) -> None:
        """digits() failing at the start reports 'digits'."""
        assert _err("x", digits()).expected == ("digits",)

    def test_hexdigits_and_octdigits(self) -> None:
        """hexdigits() and octdigits() stop at the first non-member."""
        assert _value("fF09g", hexdigits()).as_text() == "fF09"
        assert _value("0178", octdigits()).as_text() == "017"

    def test_whitespaces(self) -> None:
        """whitespaces() may be empty."""
        assert _value(" \n\tx", whitespaces()).as_text() == " \n\t"
        assert _value("x", whitespaces()).as_text() == ""

    def test_blanks(self) -> None:
        """blanks() discards spaces and tabs."""
        assert _value(" \t", blanks()).is_unit


class TestNumbers:
    """Test INTEGER-producing parsers."""

    def test_integer(self) -> None:
        """integer() reads an optional sign and digits."""
        assert _value("42", integer()).as_int() == 42
        assert _value("-7", integer()).as_int() == -7

    def test_integer_label(self) -> None:
        """integer() without digits reports 'integer'."""
        assert _err("x", integer()).expected == ("integer",)

    def test_hexadecimal(self) -> None:
        """hexadecimal() needs the 0x prefix."""
        assert _value("0xff", hexadecimal()).as_int() == 255

    def test_octal(self) -> None:
        """octal() reads digits after a leading zero."""
        assert _value("017", octal()).as_int() == 15

    @given(st.integers(min_value=-(10**12), max_value=10**12))
    @settings(max_examples=200)
    def test_integer_property(self, number: int) -> None:
        """PROPERTY: integer() reads back any rendered int."""
        assert _value(str(number), integer()).as_int() == number


class TestIdentifiersAndStrings:
    """Test identifiers and string literals."""

    def test_ident(self) -> None:
        """ident() reads letters, digits and underscores after a letter or underscore."""
        assert _value("_a1 b", ident()).as_text() == "_a1"

    def test_ident_rejects_digit_start(self) -> None:
        """ident() cannot start with a digit."""
        assert _err("1a", ident()).expected == ("identifier",)

    def test_string_literal(self) -> None:
        """string_literal() returns the raw body, escapes included."""
        assert _value('"a\\"b"', string_literal()).as_text() == 'a\\"b'


class TestWrappers:
    """Test maybe(), token(), between() and total()."""

    def test_maybe(self) -> None:
        """maybe() yields unit without consuming when the parser fails."""
        result = parse("util", "b", maybe(char("a")))
        assert isinstance(result, ParseResult)
        assert result.value.is_unit
        assert result.state.offset == 0

    def test_token(self) -> None:
        """token() eats trailing whitespace and keeps the value."""
        result = parse("util", "x  y", token(char("x")))
        assert isinstance(result, ParseResult)
        assert result.value.as_text() == "x"
        assert result.state.offset == 3

    def test_between(self) -> None:
        """between() keeps the middle value."""
        assert _value("[5]", between(char("["), digits(), char("]"))).as_text() == "5"

    def test_total(self) -> None:
        """total() requires the whole input."""
        assert _value("  42", total(integer())).as_int() == 42
        assert _err("42x", total(integer())).expected == ("end of input",)
