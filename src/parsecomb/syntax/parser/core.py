"""Backtracking evaluator and parse driver.

The Evaluator interprets a parser tree against an immutable State. Every
evaluation step is a function of (parser, state) returning either a
ParseResult or a ParseError. Because State never changes in place,
backtracking is free: a combinator that wants to retry simply evaluates
the next alternative against the State it started from.

Architecture:
    - ParserEngine holds configuration (input size and nesting limits)
    - Each parse() call builds a fresh Evaluator with its own DepthGuard
    - Evaluator.evaluate() dispatches on the node type with match
    - Ordered choice merges the errors of failed alternatives with
      merge_errors() (furthest failure wins, ties are combined)

Failure Model:
    Match failures are returned as ParseError values and never raised.
    Contract violations are raised: TypeMismatchError from folds and
    accessors, GrammarError for undefined rules, DepthLimitExceededError
    when the nesting limit is reached. Ordered choice does not catch them.

Python 3.13+. Zero external dependencies.
"""

import logging
from dataclasses import replace

from parsecomb.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from parsecomb.core.depth_guard import DepthGuard, depth_clamp
from parsecomb.diagnostics import ErrorTemplate, GrammarParseError
from parsecomb.enums import ValueKind

from ..ast import ROOT_TAG
from ..result import ParseError, ParseResult, merge_errors
from ..state import State
from ..value import Fold, Value
from .nodes import (
    Anchor,
    AnyChar,
    CharRange,
    Choice,
    Count,
    Expect,
    Fail,
    Lift,
    LiftValue,
    LiteralChar,
    LiteralString,
    Many,
    Many1,
    NoneOf,
    OneOf,
    Parser,
    Pass,
    Root,
    Rule,
    Satisfy,
    SepBy,
    SepBy1,
    Seq,
    StateProbe,
    Tag,
)

__all__ = ["Evaluator", "Outcome", "ParserEngine", "parse", "parse_or_raise"]

logger = logging.getLogger(__name__)

type Outcome = ParseResult[Value] | ParseError

# Frames left free below the recursion limit for the caller, folds and lifts.
_STACK_RESERVE = 150


def _matched(state: State, text: str) -> ParseResult[Value]:
    """Success consuming text at state."""
    return ParseResult(Value.text(text), state.advance(text))


def _retag(value: Value, label: str) -> Value:
    """Attach label to value; AST payloads are retagged as well."""
    if value.kind is ValueKind.AST:
        return replace(value, payload=value.payload.with_tag(label), tag=label)
    return value.with_tag(label)


def _make_root(value: Value) -> Value:
    """Mark value as root; AST payloads are retagged "root"."""
    if value.kind is ValueKind.AST:
        return replace(value, payload=value.payload.with_tag(ROOT_TAG), is_root=True)
    return value.as_root()


class Evaluator:
    """Single-use interpreter for parser trees.

    One Evaluator serves one parse call. It owns the DepthGuard counting
    nested evaluations, so separate parses never share mutable state.

    Example:
        >>> from parsecomb.syntax.parser.primitives import char
        >>> outcome = Evaluator().evaluate(char("a"), State("abc"))
        >>> outcome.value.as_text(), outcome.state.offset
        ('a', 1)
    """

    __slots__ = ("_guard",)

    def __init__(self, max_nesting_depth: int = MAX_DEPTH) -> None:
        """Create an evaluator.

        Args:
            max_nesting_depth: Maximum number of nested evaluation frames.
                Clamped to the recursion limit minus a reserve for the caller.
        """
        self._guard = DepthGuard(
            max_depth=depth_clamp(max_nesting_depth, reserve_frames=_STACK_RESERVE)
        )

    @property
    def max_depth(self) -> int:
        """Effective nesting limit after clamping."""
        return self._guard.max_depth

    @property
    def peak_depth(self) -> int:
        """Deepest nesting reached by evaluate() so far."""
        return self._guard.peak_depth

    def evaluate(self, parser: Parser, state: State) -> Outcome:
        """Run parser at state.

        Args:
            parser: Parser node to interpret
            state: Position to start matching from

        Returns:
            ParseResult with the value and the state after the match, or
            ParseError describing the failure

        Raises:
            DepthLimitExceededError: If nesting exceeds the limit
            GrammarError: If an undefined Rule is reached
            TypeMismatchError: If a fold or lift produces an invalid value
        """
        with self._guard:
            match parser:
                # Character primitives
                case AnyChar():
                    c = state.peek()
                    if c is None:
                        return ParseError.at(state, "any character")
                    return _matched(state, c)
                case LiteralChar(char=expected):
                    if state.peek() == expected:
                        return _matched(state, expected)
                    return ParseError.at(state, expected)
                case CharRange(lo=lo, hi=hi):
                    c = state.peek()
                    if c is not None and lo <= c <= hi:
                        return _matched(state, c)
                    return ParseError.at(state, f"{lo}-{hi}")
                case OneOf(chars=chars):
                    c = state.peek()
                    if c is not None and c in chars:
                        return _matched(state, c)
                    return ParseError.at(state, f"one of '{chars}'")
                case NoneOf(chars=chars):
                    c = state.peek()
                    if c is not None and c not in chars:
                        return _matched(state, c)
                    return ParseError.at(state, f"none of '{chars}'")
                case Satisfy(predicate=predicate, label=label):
                    c = state.peek()
                    if c is not None and predicate(c):
                        return _matched(state, c)
                    return ParseError.at(state, label)
                case LiteralString(text=text):
                    if state.startswith(text):
                        return _matched(state, text)
                    return ParseError.at(state, text)

                # Zero-width primitives
                case Pass():
                    return ParseResult(Value.unit(), state)
                case Fail(message=message):
                    return ParseError.fail(state, message)
                case Lift(factory=factory):
                    return ParseResult(Value.of(factory()), state)
                case LiftValue(value=value):
                    return ParseResult(value, state)
                case Anchor(predicate=predicate, label=label):
                    if predicate(state.previous, state.peek()):
                        return ParseResult(Value.unit(), state)
                    return ParseError.at(state, label)
                case StateProbe():
                    return ParseResult(Value.of_state(state), state)

                # Combinators
                case Seq(parsers=parsers, fold=fold):
                    values: list[Value] = []
                    current = state
                    for child in parsers:
                        outcome = self.evaluate(child, current)
                        if isinstance(outcome, ParseError):
                            return outcome
                        values.append(outcome.value)
                        current = outcome.state
                    return ParseResult(fold(values), current)
                case Choice(parsers=parsers):
                    errors: list[ParseError] = []
                    for child in parsers:
                        outcome = self.evaluate(child, state)
                        if isinstance(outcome, ParseResult):
                            return outcome
                        errors.append(outcome)
                    return merge_errors(errors)
                case Many(parser=child, fold=fold):
                    values = []
                    current = self._collect(child, state, values)
                    return ParseResult(fold(values), current)
                case Many1(parser=child, fold=fold):
                    first = self.evaluate(child, state)
                    if isinstance(first, ParseError):
                        return first
                    values = [first.value]
                    current = first.state
                    if current.offset != state.offset:
                        current = self._collect(child, current, values)
                    return ParseResult(fold(values), current)
                case Count(n=n, parser=child, fold=fold):
                    values = []
                    current = state
                    for _ in range(n):
                        outcome = self.evaluate(child, current)
                        if isinstance(outcome, ParseError):
                            return outcome
                        values.append(outcome.value)
                        current = outcome.state
                    return ParseResult(fold(values), current)
                case SepBy(item=item, sep=sep, fold=fold):
                    return self._separated(item, sep, fold, state, required=False)
                case SepBy1(item=item, sep=sep, fold=fold):
                    return self._separated(item, sep, fold, state, required=True)

                # Annotations
                case Tag(parser=child, label=label):
                    outcome = self.evaluate(child, state)
                    if isinstance(outcome, ParseError):
                        return outcome
                    return ParseResult(_retag(outcome.value, label), outcome.state)
                case Root(parser=child):
                    outcome = self.evaluate(child, state)
                    if isinstance(outcome, ParseError):
                        return outcome
                    return ParseResult(_make_root(outcome.value), outcome.state)
                case Expect(parser=child, label=label):
                    outcome = self.evaluate(child, state)
                    if isinstance(outcome, ParseError) and outcome.offset == state.offset:
                        return outcome.with_expected(label)
                    return outcome

                # Late binding
                case Rule():
                    return self.evaluate(parser.parser, state)

                case _:
                    msg = f"Unknown parser node: {type(parser).__name__}"
                    raise TypeError(msg)

    def _collect(self, parser: Parser, state: State, values: list[Value]) -> State:
        """Apply parser repeatedly from state, appending values.

        Stops at the first failure (its state changes are discarded) or
        after the first repetition that consumed nothing.

        Returns:
            State after the last successful repetition
        """
        with self._guard:
            current = state
            while True:
                outcome = self.evaluate(parser, current)
                if isinstance(outcome, ParseError):
                    return current
                values.append(outcome.value)
                if outcome.state.offset == current.offset:
                    return outcome.state
                current = outcome.state

    def _separated(
        self,
        item: Parser,
        sep: Parser,
        fold: Fold,
        state: State,
        *,
        required: bool,
    ) -> Outcome:
        """Evaluate ``item (sep item)*``, folding the item values only."""
        with self._guard:
            first = self.evaluate(item, state)
            if isinstance(first, ParseError):
                if required:
                    return first
                return ParseResult(fold([]), state)

            values = [first.value]
            current = first.state
            while True:
                separator = self.evaluate(sep, current)
                if isinstance(separator, ParseError):
                    break
                following = self.evaluate(item, separator.state)
                if isinstance(following, ParseError):
                    break
                values.append(following.value)
                if following.state.offset == current.offset:
                    current = following.state
                    break
                current = following.state
            return ParseResult(fold(values), current)


class ParserEngine:
    """Configured entry point for running parsers.

    Security:
        - Configurable max_source_size rejects oversized input up front
        - Configurable max_nesting_depth bounds evaluator recursion

    Attributes:
        max_source_size: Maximum allowed input length in characters (default: 10 MB)
        max_nesting_depth: Maximum nested parser evaluations (default: MAX_DEPTH)

    Example:
        >>> from parsecomb.syntax.parser.primitives import string
        >>> engine = ParserEngine(max_source_size=1024)
        >>> engine.parse("demo", "hello", string("hello")).value.as_text()
        'hello'
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize engine with limits.

        Args:
            max_source_size: Maximum input length in characters (default: 10 MB).
                Set to 0 to disable the limit (not recommended for untrusted input).
            max_nesting_depth: Maximum nested evaluations (default: MAX_DEPTH).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed input length in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nested parser evaluations."""
        return self._max_nesting_depth

    def parse(self, source_name: str, text: str, parser: Parser) -> Outcome:
        """Run parser against text from offset 0.

        No end-of-input check is added: a parser that does not end with
        eoi() may succeed with input left over.

        Args:
            source_name: Label used in error messages
            text: Input to parse
            parser: Top-level parser

        Returns:
            ParseResult on success, ParseError on failure

        Raises:
            ValueError: If text exceeds max_source_size
            DepthLimitExceededError: If nesting exceeds max_nesting_depth
        """
        if self._max_source_size > 0 and len(text) > self._max_source_size:
            raise ValueError(
                ErrorTemplate.source_too_large(len(text), self._max_source_size).message
            )

        logger.debug("Parsing %s (%d chars) with %s parser", source_name, len(text), parser.kind)
        evaluator = Evaluator(self._max_nesting_depth)
        outcome = evaluator.evaluate(parser, State(text, source_name))
        if isinstance(outcome, ParseError):
            logger.debug("Parse of %s failed: %s", source_name, outcome.format_error())
        else:
            logger.debug(
                "Parse of %s succeeded at offset %d (peak depth %d)",
                source_name,
                outcome.state.offset,
                evaluator.peak_depth,
            )
        return outcome

    def parse_or_raise(self, source_name: str, text: str, parser: Parser) -> Value:
        """Run parser and return its value, raising on failure.

        Raises:
            GrammarParseError: If the parse fails (carries the ParseError)
            ValueError: If text exceeds max_source_size
        """
        outcome = self.parse(source_name, text, parser)
        if isinstance(outcome, ParseError):
            raise GrammarParseError(outcome.to_diagnostic(), error=outcome)
        return outcome.value


_DEFAULT_ENGINE = ParserEngine()


def parse(source_name: str, text: str, parser: Parser) -> Outcome:
    """Run parser against text with the default engine.

    Example:
        >>> from parsecomb.syntax.parser.primitives import char
        >>> print(parse("test", "", char("a")))
        test 1:1: expected a at end of input
    """
    return _DEFAULT_ENGINE.parse(source_name, text, parser)


def parse_or_raise(source_name: str, text: str, parser: Parser) -> Value:
    """Run parser with the default engine, raising GrammarParseError on failure."""
    return _DEFAULT_ENGINE.parse_or_raise(source_name, text, parser)

