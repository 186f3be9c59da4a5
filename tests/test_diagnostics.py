"""Tests for the diagnostics package: codes, templates, errors and formatter."""

from __future__ import annotations

import json

import pytest

from parsecomb import GrammarParseError, ParseError, Parser, char, fold_concat, parse, seq
from parsecomb.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    GrammarError,
    OutputFormat,
    ParsecError,
    SourceSpan,
    TypeMismatchError,
)
from parsecomb.syntax.state import State

# ============================================================================
# Codes and spans
# ============================================================================


class TestDiagnosticCode:
    """Test code numbering."""

    def test_codes_are_unique(self) -> None:
        """Every code has its own number."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "low"),
        [
            (DiagnosticCode.INVALID_RANGE, 1000),
            (DiagnosticCode.TYPE_MISMATCH, 2000),
            (DiagnosticCode.MATCH_FAILED, 3000),
            (DiagnosticCode.NESTING_DEPTH_EXCEEDED, 4000),
        ],
    )
    def test_code_ranges(self, code: DiagnosticCode, low: int) -> None:
        """Codes fall in their category's range."""
        assert low < code.value < low + 1000


class TestSourceSpan:
    """Test SourceSpan validation."""

    def test_valid(self) -> None:
        """A well-formed span is accepted."""
        span = SourceSpan(start=0, end=3, line=1, column=1)
        assert span.end == 3

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start": -1, "end": 0, "line": 1, "column": 1},
            {"start": 2, "end": 1, "line": 1, "column": 1},
            {"start": 0, "end": 0, "line": 0, "column": 1},
            {"start": 0, "end": 0, "line": 1, "column": 0},
        ],
    )
    def test_invalid(self, kwargs: dict[str, int]) -> None:
        """Invalid spans raise ValueError."""
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(**kwargs)


# ============================================================================
# Templates
# ============================================================================


class TestErrorTemplate:
    """Test template output."""

    def test_invalid_range(self) -> None:
        """invalid_range names both bounds and suggests the swap."""
        diagnostic = ErrorTemplate.invalid_range("z", "a")
        assert diagnostic.code == DiagnosticCode.INVALID_RANGE
        assert "'z'-'a'" in diagnostic.message
        assert diagnostic.hint == "Write the range as char_range('a', 'z')"

    def test_rule_undefined(self) -> None:
        """rule_undefined names the rule."""
        diagnostic = ErrorTemplate.rule_undefined("expr")
        assert diagnostic.message == "Rule 'expr' was used before it was defined"

    def test_type_mismatch(self) -> None:
        """type_mismatch records both kinds."""
        diagnostic = ErrorTemplate.type_mismatch("text", "integer", "fold_concat")
        assert diagnostic.message == "Type mismatch in fold_concat: expected text, got integer"
        assert (diagnostic.expected_type, diagnostic.received_type) == ("text", "integer")

    def test_match_failed_span(self) -> None:
        """match_failed places a zero-width span at the failure."""
        diagnostic = ErrorTemplate.match_failed(
            "expected a", source_name="s", offset=4, line=2, column=3, expected=("a",)
        )
        assert diagnostic.span == SourceSpan(start=4, end=4, line=2, column=3)
        assert diagnostic.code == DiagnosticCode.MATCH_FAILED

    def test_source_too_large(self) -> None:
        """source_too_large formats sizes with separators."""
        diagnostic = ErrorTemplate.source_too_large(2000, 1000)
        assert "2,000" in diagnostic.message
        assert "1,000" in diagnostic.message


# ============================================================================
# Exceptions
# ============================================================================


class TestExceptions:
    """Test the exception hierarchy."""

    def test_hierarchy(self) -> None:
        """All errors derive from ParsecError."""
        assert issubclass(GrammarError, ParsecError)
        assert issubclass(TypeMismatchError, ParsecError)
        assert issubclass(GrammarParseError, ParsecError)

    def test_plain_message(self) -> None:
        """A string message leaves diagnostic unset."""
        error = ParsecError("plain")
        assert str(error) == "plain"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        """A Diagnostic supplies the message and is kept."""
        diagnostic = ErrorTemplate.negative_count(-2)
        error = GrammarError(diagnostic)
        assert str(error) == "Repetition count must be >= 0, got -2"
        assert error.diagnostic is diagnostic

    def test_type_mismatch_kinds(self) -> None:
        """TypeMismatchError keeps the kinds as attributes."""
        error = TypeMismatchError("m", expected_kind="text", actual_kind="unit")
        assert (error.expected_kind, error.actual_kind) == ("text", "unit")

    def test_grammar_parse_error_carries_record(self) -> None:
        """GrammarParseError keeps the ParseError it was raised for."""
        record = ParseError.at(State("x"), "a")
        error = GrammarParseError(record.to_diagnostic(), error=record)
        assert error.error is record


# ============================================================================
# Formatter
# ============================================================================


def _one_then_plus() -> Parser:
    return seq([char("1"), char("+")], fold_concat)


def _match_diagnostic() -> Diagnostic:
    outcome = parse("calc", "1x", _one_then_plus())
    assert isinstance(outcome, ParseError)
    return outcome.to_diagnostic()


class TestDiagnosticFormatter:
    """Test RUST, SIMPLE and JSON output."""

    def test_rust_format(self) -> None:
        """RUST output shows code, location and expected items."""
        output = DiagnosticFormatter().format(_match_diagnostic())
        assert output.split("\n") == [
            "error[MATCH_FAILED]: expected + at 'x'",
            "  --> calc 1:2",
            "  = expected: '+'",
        ]

    def test_rust_format_with_hint(self) -> None:
        """Hints render as help lines."""
        output = DiagnosticFormatter().format(ErrorTemplate.rule_undefined("expr"))
        assert output.endswith("  = help: Call expr.define(parser) before parsing")

    def test_simple_format(self) -> None:
        """SIMPLE output is one line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        assert formatter.format(_match_diagnostic()) == "MATCH_FAILED: expected + at 'x'"

    def test_json_format(self) -> None:
        """JSON output is machine readable."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(_match_diagnostic()))
        assert data["code"] == "MATCH_FAILED"
        assert data["code_value"] == 3002
        assert data["line"] == 1
        assert data["column"] == 2
        assert data["expected"] == ["+"]
        assert data["source_name"] == "calc"

    def test_sanitize_truncates(self) -> None:
        """Sanitizing shortens long messages."""
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        diagnostic = Diagnostic(code=DiagnosticCode.MATCH_FAILED, message="x" * 50)
        assert formatter.format(diagnostic) == "MATCH_FAILED: " + "x" * 10 + "..."

    def test_color(self) -> None:
        """Color output wraps the severity in ANSI codes."""
        output = DiagnosticFormatter(color=True).format(ErrorTemplate.negative_count(-1))
        assert output.startswith("\033[1;31merror\033[0m[NEGATIVE_COUNT]")

    def test_format_all(self) -> None:
        """format_all separates diagnostics with blank lines."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format_all(
            [ErrorTemplate.negative_count(-1), ErrorTemplate.rule_redefined("r")]
        )
        assert output.count("\n\n") == 1

    def test_diagnostic_format_error_delegates(self) -> None:
        """Diagnostic.format_error() uses the RUST formatter."""
        diagnostic = ErrorTemplate.rule_undefined("expr")
        assert diagnostic.format_error() == DiagnosticFormatter().format(diagnostic)
