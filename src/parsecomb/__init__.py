"""parsecomb - parser combinators with furthest-failure error reporting.

Grammars are built from immutable parser values: primitives that match
characters, strings and zero-width conditions, and combinators that
sequence, choose and repeat them. Results are tagged Values combined by
fold functions. Failures carry their position and the set of items that
would have matched; ordered choice reports the failure that got furthest.

Public API:
    parse - Run a parser, returning ParseResult or ParseError
    parse_or_raise - Run a parser, returning its Value or raising GrammarParseError
    ParserEngine - Configurable driver (input size and nesting limits)
    Rule - Late-bound parser for recursive grammars
    Value - Tagged parse value; fold_* - stock fold functions

Exceptions:
    ParsecError - Base exception class
    GrammarError - Invalid grammar construction
    TypeMismatchError - Value accessed as the wrong kind
    GrammarParseError - Failed parse_or_raise()
    DepthLimitExceededError - Nesting limit reached

Submodules:
    parsecomb.syntax.parser.utilities - Digits, letters, whitespace, identifiers
    parsecomb.syntax.annotate - AST building folds
    parsecomb.diagnostics - Diagnostic codes, templates and formatter
"""

from .diagnostics import (
    DepthLimitExceededError,
    Diagnostic,
    DiagnosticCode,
    GrammarError,
    GrammarParseError,
    ParsecError,
    TypeMismatchError,
)
from .enums import ParserKind, ValueKind
from .syntax import (
    AstNode,
    Fold,
    ParseError,
    ParseResult,
    Parser,
    ParserEngine,
    Position,
    Rule,
    State,
    Value,
    ast_with_state,
    describe,
    fold_ast,
    fold_concat,
    fold_first,
    fold_last,
    fold_list,
    fold_nth,
    fold_null,
    merge_errors,
    parse,
    parse_or_raise,
    to_ast,
)
from .syntax.parser.combinators import (
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
from .syntax.parser.primitives import (
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
from .syntax.parser.utilities import (
    alpha,
    alphanum,
    digit,
    digits,
    ident,
    integer,
    maybe,
    token,
    whitespace,
    whitespaces,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("parsecomb")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AstNode",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "Fold",
    "GrammarError",
    "GrammarParseError",
    "ParseError",
    "ParseResult",
    "ParsecError",
    "Parser",
    "ParserEngine",
    "ParserKind",
    "Position",
    "Rule",
    "State",
    "TypeMismatchError",
    "Value",
    "ValueKind",
    "__version__",
    "alpha",
    "alphanum",
    "anchor",
    "and_",
    "any_char",
    "ast_with_state",
    "boundary",
    "char",
    "char_range",
    "count",
    "describe",
    "digit",
    "digits",
    "eoi",
    "expect",
    "fail",
    "fold_ast",
    "fold_concat",
    "fold_first",
    "fold_last",
    "fold_list",
    "fold_nth",
    "fold_null",
    "ident",
    "integer",
    "lift",
    "lift_value",
    "many",
    "many1",
    "maybe",
    "merge_errors",
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
    "to_ast",
    "token",
    "whitespace",
    "whitespaces",
]
