"""Parse outcomes: successful results and positioned failure records.

Every evaluation step returns either a ParseResult (the value and the state
after the match) or a ParseError (where and why the match failed). Failures
are ordinary values; only ordered choice inspects them, to try the next
alternative and to merge the errors of alternatives that all failed.

Merge Rule (furthest failure):
    - Compare errors by offset only; the furthest error wins verbatim.
    - Errors tied at the furthest offset are combined: expected items are
      unioned in first-seen order without duplicates, and a literal failure
      message survives only if every tied error that carries one agrees.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from parsecomb.constants import CONTEXT_LINES
from parsecomb.diagnostics import Diagnostic, ErrorTemplate

from .state import State

__all__ = ["ParseError", "ParseResult", "merge_errors"]


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Successful match: parsed value and the state after it.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> state = State("hello")
        >>> result = ParseResult("h", state.advance("h"))
        >>> result.state.offset
        1
    """

    value: T
    state: State


@dataclass(frozen=True, slots=True)
class ParseError:
    """Failed match with location and context.

    Design:
        - Stores the state at the failure point (for row, column and source name)
        - Expected items tuple (insertion order, no duplicates)
        - Optional literal failure message from fail()
        - Immutable, so merged errors never alias their inputs

    Attributes:
        state: State at the failure position
        expected: Descriptions of what would have matched
        failure: Literal failure message, if any
        received: Character found at the failure position (None at end of input)
        merged: True when several alternatives failed at the same furthest
            offset and were combined. A choice whose furthest failure is
            unique returns that error unchanged, with merged False.

    Example:
        >>> error = ParseError(State("b", "test"), expected=("a",), received="b")
        >>> error.format_error()
        "test 1:1: expected a at 'b'"
    """

    state: State
    expected: tuple[str, ...] = field(default_factory=tuple)
    failure: str | None = None
    received: str | None = None
    merged: bool = False

    @staticmethod
    def at(state: State, *expected: str) -> "ParseError":
        """Error at state expecting the given items, recording the received character."""
        return ParseError(state, _dedupe(expected), received=state.peek())

    @staticmethod
    def fail(state: State, message: str) -> "ParseError":
        """Error at state with a literal failure message and no expected items."""
        return ParseError(state, (), failure=message, received=state.peek())

    @property
    def offset(self) -> int:
        """Character offset of the failure."""
        return self.state.offset

    @property
    def row(self) -> int:
        """0-based line of the failure."""
        return self.state.row

    @property
    def col(self) -> int:
        """0-based column of the failure."""
        return self.state.col

    @property
    def source_name(self) -> str:
        """Label of the parsed source."""
        return self.state.name

    def merge(self, other: "ParseError") -> "ParseError":
        """Combine with another failure using the furthest-failure rule."""
        return merge_errors((self, other))

    def with_expected(self, *expected: str) -> "ParseError":
        """Copy with the expected items replaced and no literal message."""
        return ParseError(self.state, _dedupe(expected), None, self.received, self.merged)

    def describe(self) -> str:
        """Failure text without the location prefix.

        Returns the literal failure message when present, otherwise an
        expected list such as ``expected a, b or c at 'x'``.
        """
        if self.failure is not None:
            return self.failure
        found = "end of input" if self.received is None else repr(self.received)
        if not self.expected:
            return f"unexpected {found}"
        if len(self.expected) == 1:
            items = self.expected[0]
        else:
            items = ", ".join(self.expected[:-1]) + " or " + self.expected[-1]
        return f"expected {items} at {found}"

    def format_error(self) -> str:
        """Format error as ``<source_name> <row+1>:<col+1>: <message>``.

        Example:
            >>> error = ParseError.at(State("", "calc"), "a")
            >>> error.format_error()
            'calc 1:1: expected a at end of input'
        """
        return f"{self.state.name} {self.state.row + 1}:{self.state.col + 1}: {self.describe()}"

    def format_with_context(self, context_lines: int = CONTEXT_LINES) -> str:
        """Format error with source context and pointer.

        Shows the failing line with its neighbours and a caret under the
        failure column.

        Args:
            context_lines: Number of lines to show before/after error

        Returns:
            Multi-line formatted error with context
        """
        line = self.state.row + 1
        col = self.state.col + 1
        lines = self.state.source.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                pointer = " " * (len(line_num_str) + col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)

    def to_diagnostic(self) -> Diagnostic:
        """Structured diagnostic for this failure."""
        return ErrorTemplate.match_failed(
            self.describe(),
            source_name=self.state.name,
            offset=self.state.offset,
            line=self.state.row + 1,
            column=self.state.col + 1,
            expected=self.expected,
            merged=self.merged,
        )

    def __str__(self) -> str:
        return self.format_error()


def merge_errors(errors: Iterable[ParseError]) -> ParseError:
    """Merge failed alternatives by the furthest-failure rule.

    Args:
        errors: Failures of every alternative, in alternative order

    Returns:
        The single furthest error verbatim (merged stays False), or a
        combined error with merged=True when several errors share the
        furthest offset

    Raises:
        ValueError: If errors is empty
    """
    errors = list(errors)
    if not errors:
        msg = "merge_errors() requires at least one error"
        raise ValueError(msg)

    furthest_offset = max(error.offset for error in errors)
    furthest = [error for error in errors if error.offset == furthest_offset]
    if len(furthest) == 1:
        return furthest[0]

    expected: list[str] = []
    for error in furthest:
        expected.extend(error.expected)

    messages = {error.failure for error in furthest if error.failure is not None}
    failure = messages.pop() if len(messages) == 1 else None

    first = furthest[0]
    return ParseError(first.state, _dedupe(expected), failure, first.received, merged=True)


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated items, keeping first-seen order."""
    return tuple(dict.fromkeys(items))
