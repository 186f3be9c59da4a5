"""Rendering diagnostics as text or JSON.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_SEVERITY_COLORS: dict[str, str] = {
    "error": "\033[1;31m",
    "warning": "\033[1;33m",
}
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """How DiagnosticFormatter lays out a diagnostic."""

    RUST = "rust"  # header plus indented location and notes
    SIMPLE = "simple"  # CODE: message
    JSON = "json"  # one JSON object


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns Diagnostic records into printable output.

    Attributes:
        output_format: Layout to produce
        sanitize: Cut user-controlled text down to max_content_length
        color: Wrap the severity in ANSI colour codes
        max_content_length: Cut-off used when sanitize is set

    Example:
        >>> diagnostic = ErrorTemplate.rule_undefined("expr")
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[RULE_UNDEFINED]: Rule 'expr' was used before it was defined
          = help: Call expr.define(parser) before parsing
        >>> print(DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic))
        RULE_UNDEFINED: Rule 'expr' was used before it was defined
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        match self.output_format:
            case OutputFormat.RUST:
                return "\n".join(self._rust_lines(diagnostic))
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._clip(diagnostic.message)}"
            case OutputFormat.JSON:
                return json.dumps(self._as_dict(diagnostic), ensure_ascii=False)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format each diagnostic, separated by a blank line."""
        return "\n\n".join(map(self.format, diagnostics))

    def _rust_lines(self, diagnostic: Diagnostic) -> Iterator[str]:
        """Header, then ``-->`` location, then ``=`` notes.

            error[MATCH_FAILED]: expected + at 'x'
              --> calc 1:2
              = expected: '+'
        """
        severity = diagnostic.severity
        if self.color:
            severity = f"{_SEVERITY_COLORS[severity]}{severity}{_RESET}"
        yield f"{severity}[{diagnostic.code.name}]: {self._clip(diagnostic.message)}"

        span = diagnostic.span
        if span is not None:
            where = f"{span.line}:{span.column}"
            if diagnostic.source_name:
                where = f"{diagnostic.source_name} {where}"
            yield f"  --> {where}"

        if diagnostic.expected:
            items = ", ".join(f"'{item}'" for item in diagnostic.expected)
            yield f"  = expected: {self._clip(items)}"
        if diagnostic.expected_type:
            yield f"  = expected: {diagnostic.expected_type}"
        if diagnostic.received_type:
            yield f"  = received: {diagnostic.received_type}"
        if diagnostic.hint:
            yield f"  = help: {self._clip(diagnostic.hint)}"

    def _as_dict(self, diagnostic: Diagnostic) -> dict[str, object]:
        data: dict[str, object] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._clip(diagnostic.message),
            "severity": diagnostic.severity,
        }
        if diagnostic.span is not None:
            span = diagnostic.span
            data |= {"line": span.line, "column": span.column, "start": span.start, "end": span.end}
        optional = {
            "source_name": diagnostic.source_name,
            "expected": list(diagnostic.expected),
            "expected_type": diagnostic.expected_type,
            "received_type": diagnostic.received_type,
            "hint": diagnostic.hint and self._clip(diagnostic.hint),
        }
        data |= {key: value for key, value in optional.items() if value}
        return data

    def _clip(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
