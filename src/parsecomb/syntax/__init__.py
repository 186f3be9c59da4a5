"""Parsing engine: state, values, results, parsers and AST helpers.

Python 3.13+.
"""

from .annotate import ast_with_state, fold_ast, fold_state_ast, to_ast
from .ast import ROOT_TAG, AstNode
from .describe import ParserDescriber, describe
from .parser import Evaluator, Parser, ParserEngine, Rule, parse, parse_or_raise
from .result import ParseError, ParseResult, merge_errors
from .state import Position, State
from .value import (
    Fold,
    Value,
    fold_concat,
    fold_first,
    fold_last,
    fold_list,
    fold_nth,
    fold_null,
)

__all__ = [
    "ROOT_TAG",
    "AstNode",
    "Evaluator",
    "Fold",
    "ParseError",
    "ParseResult",
    "Parser",
    "ParserDescriber",
    "ParserEngine",
    "Position",
    "Rule",
    "State",
    "Value",
    "ast_with_state",
    "describe",
    "fold_ast",
    "fold_concat",
    "fold_first",
    "fold_last",
    "fold_list",
    "fold_nth",
    "fold_null",
    "fold_state_ast",
    "merge_errors",
    "parse",
    "parse_or_raise",
    "to_ast",
]
