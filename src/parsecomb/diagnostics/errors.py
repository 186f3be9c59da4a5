"""parsecomb exception hierarchy with structured diagnostics.

Match failures are ordinary return values (see parsecomb.syntax.result).
The exceptions here cover contract violations: malformed grammars,
wrong-kind value access, evaluation limits, and the opt-in raising driver.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from parsecomb.syntax.result import ParseError


class ParsecError(Exception):
    """Root of every exception parsecomb raises.

    Built from a plain message or from a Diagnostic; in the latter case the
    record stays available as .diagnostic and str() is its message.
    """

    def __init__(self, message: str | Diagnostic) -> None:
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class GrammarError(ParsecError):
    """Malformed grammar construction.

    Examples:
    - char_range() with lo > hi
    - count() with a negative repetition count
    - a Rule defined twice, or evaluated before definition
    """


class TypeMismatchError(ParsecError):
    """A Value was read as a kind it does not hold.

    Raised by Value accessors and by stock folds. Indicates a fold function
    composed with parsers whose results it does not expect.

    Attributes:
        expected_kind: The kind the caller asked for
        actual_kind: The kind the Value holds
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        expected_kind: str = "",
        actual_kind: str = "",
    ) -> None:
        super().__init__(message)
        self.expected_kind = expected_kind
        self.actual_kind = actual_kind


class DepthLimitExceededError(ParsecError):
    """Evaluation nested deeper than the engine allows.

    Usually a left-recursive rule, otherwise input nested deeper than the
    grammar was meant to handle.
    """


class GrammarParseError(ParsecError):
    """Input rejected by a grammar, raised by parse_or_raise().

    Attributes:
        error: The ParseError record describing the failure
    """

    def __init__(self, message: str | Diagnostic, *, error: "ParseError") -> None:
        super().__init__(message)
        self.error = error
