"""Enumerations for parsecomb type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ValueKind(StrEnum):
    """Kind of payload held by a parse Value.

    StrEnum provides automatic string conversion: str(ValueKind.TEXT) == "text"
    """

    TEXT = "text"
    """Text fragment (str)"""

    INTEGER = "integer"
    """Integer (int)"""

    LIST = "list"
    """Ordered tuple of child Values"""

    UNIT = "unit"
    """No payload (None)"""

    STATE = "state"
    """Input State captured by a state probe"""

    AST = "ast"
    """AstNode built by the AST layer"""

    CUSTOM = "custom"
    """Opaque payload identified by a type tag"""


class ParserKind(StrEnum):
    """Kind of parser node.

    Used by the evaluator dispatch and the tree describer.
    """

    # Primitives
    ANY = "any"
    CHAR = "char"
    RANGE = "range"
    ONE_OF = "one_of"
    NONE_OF = "none_of"
    SATISFY = "satisfy"
    STRING = "string"
    PASS = "pass"
    FAIL = "fail"
    LIFT = "lift"
    LIFT_VALUE = "lift_value"
    ANCHOR = "anchor"
    STATE = "state"

    # Combinators
    SEQUENCE = "sequence"
    CHOICE = "choice"
    MANY = "many"
    MANY1 = "many1"
    COUNT = "count"
    SEP_BY = "sep_by"
    SEP_BY1 = "sep_by1"

    # Annotations
    TAG = "tag"
    ROOT = "root"
    EXPECT = "expect"

    # Late binding
    RULE = "rule"


__all__ = [
    "ParserKind",
    "ValueKind",
]
