"""Parser node definitions.

A parser is an immutable description of a parsing strategy. Nodes are
frozen dataclasses; the evaluator in parsecomb.syntax.parser.core
interprets them against a State. Because nodes never change after
construction, one grammar can be shared by any number of parse calls.

Recursive grammars use Rule: a named handle created first, referenced
freely while building the grammar, and defined exactly once afterwards.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

from parsecomb.diagnostics import ErrorTemplate, GrammarError
from parsecomb.enums import ParserKind
from parsecomb.syntax.value import Fold, Value

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base
    "Parser",
    # Primitives
    "AnyChar",
    "LiteralChar",
    "CharRange",
    "OneOf",
    "NoneOf",
    "Satisfy",
    "LiteralString",
    "Pass",
    "Fail",
    "Lift",
    "LiftValue",
    "Anchor",
    "StateProbe",
    # Combinators
    "Seq",
    "Choice",
    "Many",
    "Many1",
    "Count",
    "SepBy",
    "SepBy1",
    # Annotations
    "Tag",
    "Root",
    "Expect",
    # Late binding
    "Rule",
    # Type aliases
    "AnchorPredicate",
    "CharPredicate",
]

logger = logging.getLogger(__name__)

type CharPredicate = Callable[[str], bool]
type AnchorPredicate = Callable[[str | None, str | None], bool]


class Parser:
    """Base class of every parser node."""

    __slots__ = ()

    kind: ClassVar[ParserKind]


# ============================================================================
# PRIMITIVES
# ============================================================================


@dataclass(frozen=True, slots=True)
class AnyChar(Parser):
    """Any single character."""

    kind: ClassVar[ParserKind] = ParserKind.ANY


@dataclass(frozen=True, slots=True)
class LiteralChar(Parser):
    """One specific character."""

    kind: ClassVar[ParserKind] = ParserKind.CHAR
    char: str


@dataclass(frozen=True, slots=True)
class CharRange(Parser):
    """Character whose code point lies in [lo, hi]."""

    kind: ClassVar[ParserKind] = ParserKind.RANGE
    lo: str
    hi: str


@dataclass(frozen=True, slots=True)
class OneOf(Parser):
    """Character contained in chars."""

    kind: ClassVar[ParserKind] = ParserKind.ONE_OF
    chars: str


@dataclass(frozen=True, slots=True)
class NoneOf(Parser):
    """Character (not end of input) absent from chars."""

    kind: ClassVar[ParserKind] = ParserKind.NONE_OF
    chars: str


@dataclass(frozen=True, slots=True)
class Satisfy(Parser):
    """Character accepted by predicate."""

    kind: ClassVar[ParserKind] = ParserKind.SATISFY
    predicate: CharPredicate
    label: str


@dataclass(frozen=True, slots=True)
class LiteralString(Parser):
    """Exact text, matched atomically."""

    kind: ClassVar[ParserKind] = ParserKind.STRING
    text: str


@dataclass(frozen=True, slots=True)
class Pass(Parser):
    """Always succeeds with unit, consuming nothing."""

    kind: ClassVar[ParserKind] = ParserKind.PASS


@dataclass(frozen=True, slots=True)
class Fail(Parser):
    """Always fails with a literal message, consuming nothing."""

    kind: ClassVar[ParserKind] = ParserKind.FAIL
    message: str


@dataclass(frozen=True, slots=True)
class Lift(Parser):
    """Succeeds with factory(), consuming nothing."""

    kind: ClassVar[ParserKind] = ParserKind.LIFT
    factory: Callable[[], object]


@dataclass(frozen=True, slots=True)
class LiftValue(Parser):
    """Succeeds with a fixed Value, consuming nothing."""

    kind: ClassVar[ParserKind] = ParserKind.LIFT_VALUE
    value: Value


@dataclass(frozen=True, slots=True)
class Anchor(Parser):
    """Zero-width assertion on the characters around the position."""

    kind: ClassVar[ParserKind] = ParserKind.ANCHOR
    predicate: AnchorPredicate
    label: str


@dataclass(frozen=True, slots=True)
class StateProbe(Parser):
    """Succeeds with the current State, consuming nothing."""

    kind: ClassVar[ParserKind] = ParserKind.STATE


# ============================================================================
# COMBINATORS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Seq(Parser):
    """All parsers in order; fold combines their values."""

    kind: ClassVar[ParserKind] = ParserKind.SEQUENCE
    parsers: tuple[Parser, ...]
    fold: Fold


@dataclass(frozen=True, slots=True)
class Choice(Parser):
    """First parser that succeeds."""

    kind: ClassVar[ParserKind] = ParserKind.CHOICE
    parsers: tuple[Parser, ...]


@dataclass(frozen=True, slots=True)
class Many(Parser):
    """Zero or more repetitions."""

    kind: ClassVar[ParserKind] = ParserKind.MANY
    parser: Parser
    fold: Fold


@dataclass(frozen=True, slots=True)
class Many1(Parser):
    """One or more repetitions."""

    kind: ClassVar[ParserKind] = ParserKind.MANY1
    parser: Parser
    fold: Fold


@dataclass(frozen=True, slots=True)
class Count(Parser):
    """Exactly n repetitions."""

    kind: ClassVar[ParserKind] = ParserKind.COUNT
    n: int
    parser: Parser
    fold: Fold


@dataclass(frozen=True, slots=True)
class SepBy(Parser):
    """Zero or more items separated by sep."""

    kind: ClassVar[ParserKind] = ParserKind.SEP_BY
    item: Parser
    sep: Parser
    fold: Fold


@dataclass(frozen=True, slots=True)
class SepBy1(Parser):
    """One or more items separated by sep."""

    kind: ClassVar[ParserKind] = ParserKind.SEP_BY1
    item: Parser
    sep: Parser
    fold: Fold


# ============================================================================
# ANNOTATIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Tag(Parser):
    """Attach a grammatical role to the result."""

    kind: ClassVar[ParserKind] = ParserKind.TAG
    parser: Parser
    label: str


@dataclass(frozen=True, slots=True)
class Root(Parser):
    """Mark the result as the root of the parse."""

    kind: ClassVar[ParserKind] = ParserKind.ROOT
    parser: Parser


@dataclass(frozen=True, slots=True)
class Expect(Parser):
    """Report label as the expected item when parser fails without progress."""

    kind: ClassVar[ParserKind] = ParserKind.EXPECT
    parser: Parser
    label: str


# ============================================================================
# LATE BINDING
# ============================================================================


class Rule(Parser):
    """Named placeholder for recursive grammars.

    Create the rule, use it inside other parsers (including its own
    definition), then call define() exactly once before parsing.

    Example:
        >>> expr = Rule("expr")
        >>> expr.define(or_(seq([char("("), expr, char(")")], fold_concat), char("x")))
        >>> parse("test", "((x))", expr).value.as_text()
        '((x))'
    """

    __slots__ = ("_name", "_parser")

    kind: ClassVar[ParserKind] = ParserKind.RULE

    def __init__(self, name: str) -> None:
        """Create an undefined rule.

        Args:
            name: Rule name, used in diagnostics and by describe()
        """
        self._name = name
        self._parser: Parser | None = None

    @property
    def name(self) -> str:
        """Rule name."""
        return self._name

    @property
    def is_defined(self) -> bool:
        """True once define() has been called."""
        return self._parser is not None

    @property
    def parser(self) -> Parser:
        """The rule definition.

        Raises:
            GrammarError: If the rule has not been defined
        """
        if self._parser is None:
            raise GrammarError(ErrorTemplate.rule_undefined(self._name))
        return self._parser

    def define(self, parser: Parser) -> "Rule":
        """Bind the rule to its definition.

        Args:
            parser: The parser this rule stands for

        Returns:
            The rule itself, for chaining

        Raises:
            GrammarError: If the rule is already defined
        """
        if self._parser is not None:
            raise GrammarError(ErrorTemplate.rule_redefined(self._name))
        self._parser = parser
        logger.debug("Defined rule '%s' as %s", self._name, parser.kind)
        return self

    def __repr__(self) -> str:
        return f"Rule({self._name!r})"
