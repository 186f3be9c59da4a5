"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # =========================================================================
    # GRAMMAR CONSTRUCTION ERRORS (1000-1999)
    # =========================================================================

    @staticmethod
    def invalid_range(lo: str, hi: str) -> Diagnostic:
        """Character range with lower bound above upper bound.

        Args:
            lo: Lower bound character
            hi: Upper bound character

        Returns:
            Diagnostic for INVALID_RANGE
        """
        msg = f"Invalid character range '{lo}'-'{hi}': lower bound exceeds upper bound"
        return Diagnostic(
            code=DiagnosticCode.INVALID_RANGE,
            message=msg,
            hint=f"Write the range as char_range('{hi}', '{lo}')",
        )

    @staticmethod
    def negative_count(count: int) -> Diagnostic:
        """Repetition count below zero.

        Args:
            count: The rejected repetition count

        Returns:
            Diagnostic for NEGATIVE_COUNT
        """
        msg = f"Repetition count must be >= 0, got {count}"
        return Diagnostic(
            code=DiagnosticCode.NEGATIVE_COUNT,
            message=msg,
        )

    @staticmethod
    def rule_undefined(rule_name: str) -> Diagnostic:
        """Rule evaluated before Rule.define() was called.

        Args:
            rule_name: Name of the undefined rule

        Returns:
            Diagnostic for RULE_UNDEFINED
        """
        msg = f"Rule '{rule_name}' was used before it was defined"
        return Diagnostic(
            code=DiagnosticCode.RULE_UNDEFINED,
            message=msg,
            hint=f"Call {rule_name}.define(parser) before parsing",
        )

    @staticmethod
    def rule_redefined(rule_name: str) -> Diagnostic:
        """Rule.define() called on an already defined rule.

        Args:
            rule_name: Name of the rule

        Returns:
            Diagnostic for RULE_REDEFINED
        """
        msg = f"Rule '{rule_name}' is already defined"
        return Diagnostic(
            code=DiagnosticCode.RULE_REDEFINED,
            message=msg,
            hint="Rules are immutable once defined; create a new Rule instead",
        )

    @staticmethod
    def not_a_character(argument: str, constructor: str) -> Diagnostic:
        """Parser argument that must be exactly one character.

        Args:
            argument: The rejected argument
            constructor: Name of the parser constructor

        Returns:
            Diagnostic for NOT_A_CHARACTER
        """
        msg = f"{constructor}() expects a single character, got {argument!r}"
        return Diagnostic(
            code=DiagnosticCode.NOT_A_CHARACTER,
            message=msg,
            hint="Use string() to match multi-character literals",
        )

    @staticmethod
    def empty_alternatives(combinator: str) -> Diagnostic:
        """Combinator built without any child parser.

        Args:
            combinator: Name of the combinator constructor

        Returns:
            Diagnostic for EMPTY_ALTERNATIVES
        """
        msg = f"{combinator}() requires at least one parser"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_ALTERNATIVES,
            message=msg,
        )

    @staticmethod
    def unsupported_payload(type_name: str) -> Diagnostic:
        """Python object that has no Value kind.

        Args:
            type_name: Name of the rejected Python type

        Returns:
            Diagnostic for UNSUPPORTED_PAYLOAD
        """
        msg = f"Cannot wrap object of type '{type_name}' in a Value"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_PAYLOAD,
            message=msg,
            hint="Use Value.custom(type_tag, payload) for application objects",
            received_type=type_name,
        )

    # =========================================================================
    # VALUE ERRORS (2000-2999)
    # =========================================================================

    @staticmethod
    def type_mismatch(expected_kind: str, received_kind: str, context: str) -> Diagnostic:
        """Value read as a kind it does not hold.

        Args:
            expected_kind: Kind requested by the caller
            received_kind: Kind actually held
            context: Accessor or fold that performed the read

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        msg = f"Type mismatch in {context}: expected {expected_kind}, got {received_kind}"
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=msg,
            hint="Check that the fold matches the values its child parsers produce",
            expected_type=expected_kind,
            received_type=received_kind,
        )

    @staticmethod
    def custom_tag_mismatch(expected_tag: str, received_tag: str) -> Diagnostic:
        """Custom Value read with the wrong type tag.

        Args:
            expected_tag: Type tag requested by the caller
            received_tag: Type tag actually held

        Returns:
            Diagnostic for CUSTOM_TAG_MISMATCH
        """
        msg = f"Custom value tag mismatch: expected '{expected_tag}', got '{received_tag}'"
        return Diagnostic(
            code=DiagnosticCode.CUSTOM_TAG_MISMATCH,
            message=msg,
            expected_type=expected_tag,
            received_type=received_tag,
        )

    # =========================================================================
    # MATCH ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def match_failed(
        message: str,
        *,
        source_name: str,
        offset: int,
        line: int,
        column: int,
        expected: tuple[str, ...],
        merged: bool = False,
    ) -> Diagnostic:
        """Input rejected by a grammar.

        Args:
            message: Rendered failure text (literal message or expected list)
            source_name: Label of the parsed source
            offset: Character offset of the failure
            line: 1-indexed line of the failure
            column: 1-indexed column of the failure
            expected: Items that would have matched
            merged: Whether several alternatives tied at the furthest offset

        Returns:
            Diagnostic for ALTERNATIVES_EXHAUSTED when merged, else MATCH_FAILED
        """
        code = DiagnosticCode.ALTERNATIVES_EXHAUSTED if merged else DiagnosticCode.MATCH_FAILED
        return Diagnostic(
            code=code,
            message=message,
            span=SourceSpan(start=offset, end=offset, line=line, column=column),
            source_name=source_name,
            expected=expected,
        )

    # =========================================================================
    # EVALUATION LIMITS (4000-4999)
    # =========================================================================

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> Diagnostic:
        """Evaluator nesting exceeded the configured depth.

        Args:
            max_depth: The configured maximum depth

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum grammar nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            hint="Check for a rule that recurses without consuming input",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Input larger than the configured source size limit.

        Args:
            size: Length of the rejected input
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = (
            f"Source size ({size:,} characters) exceeds maximum ({limit:,} characters). "
            "Configure max_source_size in ParserEngine constructor to increase limit."
        )
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
        )
