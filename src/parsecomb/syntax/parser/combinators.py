"""Combinator and annotation parser constructors.

Combinators compose child parsers. Sequencing and repetition take a fold
that combines the children's values into one value; see
parsecomb.syntax.value for the stock folds.
"""

from collections.abc import Iterable

from parsecomb.diagnostics import ErrorTemplate, GrammarError

from ..value import Fold, fold_list
from .nodes import (
    Choice,
    Count,
    Expect,
    Many,
    Many1,
    Parser,
    Root,
    SepBy,
    SepBy1,
    Seq,
    Tag,
)

__all__ = [
    "and_",
    "count",
    "expect",
    "many",
    "many1",
    "or_",
    "root",
    "sep_by",
    "sep_by1",
    "seq",
    "tag",
]


def seq(parsers: Iterable[Parser], fold: Fold = fold_list) -> Seq:
    """Run parsers in order; succeed with fold([v1, ..., vn]).

    If any parser fails the whole sequence fails and nothing is consumed.
    An empty sequence succeeds with fold([]) without consuming input.
    """
    return Seq(tuple(parsers), fold)


def and_(fold: Fold, *parsers: Parser) -> Seq:
    """Variadic form of seq(): and_(fold, p1, p2, ...)."""
    return seq(parsers, fold)


def or_(*parsers: Parser) -> Choice:
    """First parser that succeeds, tried in order.

    When every alternative fails, their errors are merged by the
    furthest-failure rule.

    Raises:
        GrammarError: If no parser is given
    """
    if not parsers:
        raise GrammarError(ErrorTemplate.empty_alternatives("or_"))
    return Choice(parsers)


def many(parser: Parser, fold: Fold = fold_list) -> Many:
    """Zero or more repetitions; never fails.

    A repetition that consumes nothing is collected once and ends the loop.
    """
    return Many(parser, fold)


def many1(parser: Parser, fold: Fold = fold_list) -> Many1:
    """One or more repetitions; fails with parser's own error if none match."""
    return Many1(parser, fold)


def count(n: int, parser: Parser, fold: Fold = fold_list) -> Count:
    """Exactly n repetitions, all or nothing.

    Raises:
        GrammarError: If n is negative
    """
    if n < 0:
        raise GrammarError(ErrorTemplate.negative_count(n))
    return Count(n, parser, fold)


def sep_by(item: Parser, sep: Parser, fold: Fold = fold_list) -> SepBy:
    """Zero or more items separated by sep (no trailing separator).

    The fold receives the item values only.
    """
    return SepBy(item, sep, fold)


def sep_by1(item: Parser, sep: Parser, fold: Fold = fold_list) -> SepBy1:
    """One or more items separated by sep (no trailing separator)."""
    return SepBy1(item, sep, fold)


def tag(parser: Parser, label: str) -> Tag:
    """Attach label to the result value. Matching is unchanged."""
    return Tag(parser, label)


def root(parser: Parser) -> Root:
    """Mark the result value as the root of the parse. Matching is unchanged."""
    return Root(parser)


def expect(parser: Parser, label: str) -> Expect:
    """Report label instead of parser's own expected items.

    Applies only when parser fails at the position it started from, so
    errors deep inside a partially matched construct stay precise.
    """
    return Expect(parser, label)
