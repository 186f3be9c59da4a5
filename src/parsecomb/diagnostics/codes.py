"""Diagnostic codes, spans and the Diagnostic record.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Grammar construction errors
        2000-2999: Value errors (fold and accessor contract violations)
        3000-3999: Match errors (input rejected by a grammar)
        4000-4999: Evaluation limits
    """

    # Grammar construction errors (1000-1999)
    INVALID_RANGE = 1001
    NEGATIVE_COUNT = 1002
    RULE_UNDEFINED = 1003
    RULE_REDEFINED = 1004
    EMPTY_ALTERNATIVES = 1005
    UNSUPPORTED_PAYLOAD = 1006
    NOT_A_CHARACTER = 1007

    # Value errors (2000-2999)
    TYPE_MISMATCH = 2001
    CUSTOM_TAG_MISMATCH = 2002

    # Match errors (3000-3999)
    MATCH_FAILED = 3002
    ALTERNATIVES_EXHAUSTED = 3003  # several alternatives tied at the furthest offset

    # Evaluation limits (4000-4999)
    NESTING_DEPTH_EXCEEDED = 4001
    SOURCE_TOO_LARGE = 4002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Where a diagnostic points in the parsed text.

    Offsets are str indices (code points). Match errors use an empty span
    (start == end) at the failure offset.

    Attributes:
        start: First offset covered
        end: Offset just past the covered text
        line: 1-based row of start
        column: 1-based column of start
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        problem = None
        if self.start < 0:
            problem = f"start is negative ({self.start})"
        elif self.end < self.start:
            problem = f"end {self.end} is before start {self.start}"
        elif self.line < 1 or self.column < 1:
            problem = f"line/column are 1-based, got {self.line}:{self.column}"
        if problem is not None:
            msg = f"Invalid SourceSpan: {problem}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reportable problem in a grammar, a fold or the parsed input.

    Match errors carry a span and the expected items; value errors carry
    the expected and received kinds instead.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for grammar and value errors)
        hint: Suggestion for fixing the error
        source_name: Label of the parsed source (match errors)
        expected: Items that would have matched (match errors)
        expected_type: Expected value kind (value errors)
        received_type: Actual value kind (value errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    source_name: str | None = None
    expected: tuple[str, ...] = ()
    expected_type: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return self.message

    def format_error(self) -> str:
        """Render with the default (rustc-like) formatter.

        Example:
            error[MATCH_FAILED]: expected '+' at 'x'
              --> calc 1:2
              = expected: '+'
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
