"""
Template expression language.

A small, side-effect-free grammar (property paths, indexing, comparisons,
logical and arithmetic operators, literals) parsed by recursive descent and
evaluated against a layered :class:`Scope`.
"""

from .evaluator import ExpressionEvaluator, evaluate, evaluate_boolean
from .lexer import ExpressionLexer, Token
from .parser import ExpressionParser, parse_expression
from .scope import INDEX_NAME, ROOT_NAME, Scope, flatten_data
from .values import MISSING, is_nullish, is_sequence, to_display, truthy

__all__ = [
    # Main entry points
    "evaluate",
    "evaluate_boolean",
    "parse_expression",
    # Scope
    "Scope",
    "flatten_data",
    "ROOT_NAME",
    "INDEX_NAME",
    # Values
    "MISSING",
    "is_nullish",
    "is_sequence",
    "to_display",
    "truthy",
    # Low-level (tests and debugging)
    "ExpressionEvaluator",
    "ExpressionLexer",
    "ExpressionParser",
    "Token",
]
