"""Tests for syntax/parser/combinators.py.

Covers sequencing, ordered choice with furthest-failure merging,
repetition (including the no-progress stop), separated lists,
annotations and late-bound rules.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from parsecomb import (
    GrammarError,
    ParseError,
    ParseResult,
    Parser,
    Rule,
    TypeMismatchError,
    Value,
    and_,
    any_char,
    char,
    count,
    digits,
    expect,
    fail,
    fold_concat,
    fold_first,
    fold_list,
    fold_nth,
    fold_null,
    integer,
    many,
    many1,
    one_of,
    or_,
    parse,
    pass_,
    root,
    sep_by,
    sep_by1,
    seq,
    string,
    tag,
)
from parsecomb.diagnostics import DiagnosticCode


def _ok(text: str, parser: Parser) -> ParseResult:
    outcome = parse("test", text, parser)
    assert isinstance(outcome, ParseResult), outcome
    return outcome


def _err(text: str, parser: Parser) -> ParseError:
    outcome = parse("test", text, parser)
    assert isinstance(outcome, ParseError), outcome
    return outcome


# ============================================================================
# Sequence
# ============================================================================


class TestSequence:
    """Test seq() and and_()."""

    def test_folds_values_in_order(self) -> None:
        """seq() passes child values to the fold in order."""
        result = _ok("abc", seq([char("a"), char("b"), char("c")], fold_concat))
        assert result.value.as_text() == "abc"
        assert result.state.offset == 3

    def test_default_fold_is_list(self) -> None:
        """Without a fold, seq() collects a LIST."""
        assert _ok("ab", seq([char("a"), char("b")])).value.to_python() == ["a", "b"]

    def test_first_failure_returned_unchanged(self) -> None:
        """The failing child's error is the sequence's error."""
        error = _err("abx", seq([char("a"), char("b"), char("c")], fold_concat))
        assert error.offset == 2
        assert error.expected == ("c",)

    def test_fold_not_called_on_failure(self) -> None:
        """The fold only runs when every child succeeded."""
        calls: list[int] = []

        def fold(values: Sequence[Value]) -> Value:
            calls.append(len(values))
            return Value.unit()

        _err("ax", seq([char("a"), char("b")], fold))
        assert calls == []

    def test_empty_sequence(self) -> None:
        """An empty sequence succeeds with fold([])."""
        result = _ok("abc", seq([], fold_concat))
        assert result.value.as_text() == ""
        assert result.state.offset == 0

    def test_and_is_variadic_seq(self) -> None:
        """and_(fold, p1, p2) equals seq([p1, p2], fold)."""
        assert _ok("ab", and_(fold_concat, char("a"), char("b"))).value.as_text() == "ab"

    def test_quoted_string(self) -> None:
        """A quote, non-quote characters and a quote fold to the body."""
        quoted = seq([char('"'), many(one_of("ab"), fold_concat), char('"')], fold_nth(1))
        assert _ok('"ab"', quoted).value.as_text() == "ab"


# ============================================================================
# Ordered choice
# ============================================================================


class TestChoice:
    """Test or_() and error merging."""

    def test_first_success_wins(self) -> None:
        """Alternatives are tried in order."""
        result = _ok("ab", or_(string("a"), string("ab")))
        assert result.value.as_text() == "a"

    def test_zero_width_success_wins(self) -> None:
        """A zero-width success ends the choice even if later alternatives would consume."""
        result = _ok("abc", or_(pass_(), string("abc")))
        assert result.value.is_unit
        assert result.state.offset == 0

    def test_backtracks_after_partial_match(self) -> None:
        """A failed alternative's consumption is undone."""
        parser = or_(seq([char("a"), char("x")], fold_concat), seq([char("a"), char("b")], fold_concat))
        assert _ok("ab", parser).value.as_text() == "ab"

    def test_same_offset_unions_expected(self) -> None:
        """Alternatives failing at the same offset combine their expectations."""
        error = _err("z", or_(char("a"), char("b"), char("a")))
        assert error.expected == ("a", "b")
        assert error.format_error() == "test 1:1: expected a or b at 'z'"

    def test_furthest_failure_wins(self) -> None:
        """The alternative that got furthest determines the error."""
        near = seq([string("ab"), char("!")], fold_concat)
        far = seq([string("abcde"), char("?")], fold_concat)
        error = _err("abcdeX", or_(near, far))
        assert error.offset == 5
        assert error.expected == ("?",)
        assert error.received == "X"

    def test_unique_furthest_failure_keeps_match_failed(self) -> None:
        """A single furthest alternative is reported as its own MATCH_FAILED error."""
        deep = seq([char("a"), char("b")], fold_concat)
        error = _err("ac", or_(deep, char("x")))
        assert not error.merged
        assert error.to_diagnostic().code == DiagnosticCode.MATCH_FAILED

    def test_tied_failures_report_alternatives_exhausted(self) -> None:
        """Alternatives tied at the furthest offset map to ALTERNATIVES_EXHAUSTED."""
        error = _err("z", or_(char("a"), char("b")))
        assert error.merged
        assert error.to_diagnostic().code == DiagnosticCode.ALTERNATIVES_EXHAUSTED

    def test_failure_message_kept_when_alone(self) -> None:
        """A fail() message survives when it is the only one at the furthest offset."""
        error = _err("x", or_(fail("custom"), char("a")))
        assert error.failure == "custom"
        assert error.expected == ("a",)

    def test_empty_choice_rejected(self) -> None:
        """or_() needs at least one alternative."""
        with pytest.raises(GrammarError) as exc_info:
            or_()
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.EMPTY_ALTERNATIVES

    def test_type_mismatch_is_not_masked(self) -> None:
        """A fold raising TypeMismatchError propagates through or_()."""
        bad = seq([char("a"), tag(pass_(), "x")], lambda values: Value.integer(values[0].as_int()))
        with pytest.raises(TypeMismatchError):
            parse("test", "a", or_(bad, char("a")))


# ============================================================================
# Repetition
# ============================================================================


class TestRepetition:
    """Test many(), many1() and count()."""

    def test_many_collects(self) -> None:
        """many() collects every repetition."""
        result = _ok("aaab", many(char("a"), fold_concat))
        assert result.value.as_text() == "aaa"
        assert result.state.offset == 3

    def test_many_zero_times(self) -> None:
        """many() succeeds with no repetitions and unchanged position."""
        result = _ok("b", many(char("a")))
        assert result.value.to_python() == []
        assert result.state.offset == 0

    def test_many_discards_failed_partial_attempt(self) -> None:
        """The last, failing repetition consumes nothing."""
        pair = seq([char("a"), char("b")], fold_concat)
        result = _ok("ababa", many(pair, fold_list))
        assert result.state.offset == 4
        assert len(result.value.as_list()) == 2

    def test_many_stops_on_zero_width_success(self) -> None:
        """A repetition consuming nothing is collected once and ends the loop."""
        result = _ok("abc", many(pass_(), fold_list))
        assert len(result.value.as_list()) == 1
        assert result.state.offset == 0

    def test_many1_requires_one(self) -> None:
        """many1() fails with the child's error when nothing matches."""
        error = _err("b", many1(char("a"), fold_concat))
        assert error.expected == ("a",)

    def test_many1_collects(self) -> None:
        """many1() collects like many() once it has one match."""
        assert _ok("aab", many1(char("a"), fold_concat)).value.as_text() == "aa"

    def test_many1_zero_width(self) -> None:
        """many1() with a zero-width child stops after one repetition."""
        result = _ok("", many1(pass_(), fold_list))
        assert len(result.value.as_list()) == 1

    def test_count_exact(self) -> None:
        """count(n) needs exactly n repetitions and stops there."""
        result = _ok("aaaa", count(3, char("a"), fold_concat))
        assert result.value.as_text() == "aaa"
        assert result.state.offset == 3

    def test_count_too_few(self) -> None:
        """count(n) fails when fewer than n repetitions match."""
        error = _err("aab", count(3, char("a"), fold_concat))
        assert error.offset == 2

    def test_count_zero(self) -> None:
        """count(0) succeeds without consuming."""
        assert _ok("a", count(0, char("a"), fold_concat)).value.as_text() == ""

    def test_count_negative(self) -> None:
        """count() with n < 0 is a grammar error."""
        with pytest.raises(GrammarError) as exc_info:
            count(-1, char("a"))
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.NEGATIVE_COUNT


class TestSeparated:
    """Test sep_by() and sep_by1()."""

    def test_sep_by_items_only(self) -> None:
        """The fold receives item values, not separators."""
        result = _ok("1,2,3", sep_by(integer(), char(","), fold_list))
        assert result.value.to_python() == [1, 2, 3]

    def test_sep_by_empty(self) -> None:
        """sep_by() accepts zero items."""
        result = _ok("x", sep_by(integer(), char(","), fold_list))
        assert result.value.to_python() == []
        assert result.state.offset == 0

    def test_trailing_separator_not_consumed(self) -> None:
        """A separator without a following item is left in the input."""
        result = _ok("1,2,", sep_by(digits(), char(","), fold_concat))
        assert result.value.as_text() == "12"
        assert result.state.offset == 3

    def test_sep_by1_requires_item(self) -> None:
        """sep_by1() fails when there is no first item."""
        error = _err(",", sep_by1(char("a"), char(","), fold_concat))
        assert error.expected == ("a",)

    def test_sep_by1_single(self) -> None:
        """sep_by1() accepts a single item."""
        assert _ok("a", sep_by1(char("a"), char(","), fold_concat)).value.as_text() == "a"

    def test_zero_width_items_terminate(self) -> None:
        """Zero-width item and separator do not loop forever."""
        result = _ok("abc", sep_by(pass_(), pass_(), fold_list))
        assert result.state.offset == 0


# ============================================================================
# Annotations
# ============================================================================


class TestAnnotations:
    """Test tag(), root() and expect()."""

    def test_tag(self) -> None:
        """tag() annotates the value without changing matching."""
        result = _ok("a", tag(char("a"), "letter"))
        assert result.value.tag == "letter"
        assert result.value.as_text() == "a"

    def test_tag_failure_passes_through(self) -> None:
        """tag() does not alter errors."""
        assert _err("b", tag(char("a"), "letter")).expected == ("a",)

    def test_root(self) -> None:
        """root() marks the value as root."""
        assert _ok("a", root(char("a"))).value.is_root

    def test_expect_relabels_without_progress(self) -> None:
        """expect() replaces expected items when the child failed at the start."""
        number = expect(many1(one_of("0123456789"), fold_concat), "number")
        error = _err("x", number)
        assert error.expected == ("number",)
        assert error.format_error() == "test 1:1: expected number at 'x'"

    def test_expect_keeps_inner_error_after_progress(self) -> None:
        """expect() leaves errors from inside a partial match alone."""
        pair = expect(seq([char("("), char(")")], fold_concat), "pair")
        error = _err("(x", pair)
        assert error.offset == 1
        assert error.expected == (")",)


# ============================================================================
# Rules
# ============================================================================


class TestRule:
    """Test late binding for recursive grammars."""

    def test_recursive_rule(self) -> None:
        """A rule can refer to itself."""
        nested = Rule("nested")
        nested.define(or_(seq([char("("), nested, char(")")], fold_concat), char("x")))
        assert _ok("((x))", nested).value.as_text() == "((x))"

    def test_undefined_rule_raises(self) -> None:
        """Running an undefined rule is a grammar error."""
        with pytest.raises(GrammarError) as exc_info:
            parse("test", "x", Rule("missing"))
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.RULE_UNDEFINED

    def test_redefinition_raises(self) -> None:
        """A rule is defined exactly once."""
        rule = Rule("r").define(char("a"))
        with pytest.raises(GrammarError, match="already defined"):
            rule.define(char("b"))

    def test_is_defined(self) -> None:
        """is_defined reflects define()."""
        rule = Rule("r")
        assert not rule.is_defined
        rule.define(pass_())
        assert rule.is_defined
        assert repr(rule) == "Rule('r')"

    def test_grammar_reused_across_parses(self) -> None:
        """One grammar value serves any number of parses."""
        word = many1(any_char(), fold_concat)
        assert _ok("one", word).value.as_text() == "one"
        assert _ok("two", word).value.as_text() == "two"


# ============================================================================
# Properties
# ============================================================================


class TestCombinatorProperties:
    """Property-based checks for repetition and choice."""

    @given(st.text(alphabet="ab", max_size=30))
    @settings(max_examples=300)
    def test_many_never_fails(self, text: str) -> None:
        """PROPERTY: many() always succeeds and consumes the leading run."""
        result = parse("prop", text, many(char("a"), fold_concat))
        assert isinstance(result, ParseResult)
        run = len(text) - len(text.lstrip("a"))
        assert result.state.offset == run
        assert result.value.as_text() == "a" * run

    @given(st.text(alphabet="abc", max_size=10))
    @settings(max_examples=300)
    def test_failed_parse_never_consumes(self, text: str) -> None:
        """PROPERTY: on failure the caller's state is unchanged; only the error moves."""
        parser = seq([char("a"), char("b"), char("c")], fold_null)
        outcome = parse("prop", text, or_(parser, pass_()))
        assert isinstance(outcome, ParseResult)
        if text.startswith("abc"):
            assert outcome.state.offset == 3
        else:
            assert outcome.state.offset == 0

    @given(st.lists(st.integers(min_value=0, max_value=999), min_size=1, max_size=10))
    @settings(max_examples=200)
    def test_sep_by_round_trips_lists(self, numbers: list[int]) -> None:
        """PROPERTY: sep_by() over comma-joined integers yields the integers."""
        text = ",".join(str(n) for n in numbers)
        result = parse("prop", text, sep_by(integer(), char(","), fold_list))
        assert isinstance(result, ParseResult)
        assert result.value.to_python() == numbers

    def test_first_fold_drops_delimiters(self) -> None:
        """fold_first keeps the item in an item-terminator sequence."""
        stmt = seq([char("x"), char(";")], fold_first)
        assert _ok("x;", stmt).value.as_text() == "x"
