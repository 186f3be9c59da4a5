"""Parser construction and evaluation.

Modules:
    nodes: Immutable parser node dataclasses and Rule
    primitives: Primitive constructors (char, string, anchors, lift)
    combinators: Sequencing, choice, repetition and annotations
    core: Evaluator and ParserEngine
    utilities: Derived convenience parsers

Python 3.13+.
"""

from .combinators import (
    and_,
    count,
    expect,
    many,
    many1,
    or_,
    root,
    sep_by,
    sep_by1,
    seq,
    tag,
)
from .core import Evaluator, Outcome, ParserEngine, parse, parse_or_raise
from .nodes import Parser, Rule
from .primitives import (
    anchor,
    any_char,
    boundary,
    char,
    char_range,
    eoi,
    fail,
    lift,
    lift_value,
    none_of,
    one_of,
    pass_,
    satisfy,
    soi,
    state,
    string,
)

__all__ = [
    "Evaluator",
    "Outcome",
    "Parser",
    "ParserEngine",
    "Rule",
    "anchor",
    "and_",
    "any_char",
    "boundary",
    "char",
    "char_range",
    "count",
    "eoi",
    "expect",
    "fail",
    "lift",
    "lift_value",
    "many",
    "many1",
    "none_of",
    "one_of",
    "or_",
    "parse",
    "parse_or_raise",
    "pass_",
    "root",
    "satisfy",
    "sep_by",
    "sep_by1",
    "seq",
    "soi",
    "state",
    "string",
    "tag",
]
