"""
Tree evaluator for template expressions.

Walks an AST produced by :mod:`.parser` against a :class:`~.scope.Scope`.
Evaluation is read-only: values are looked up, compared and combined but
never mutated, and only data reachable from the scope is visible.

Lookup rules:
- Unknown identifiers, missing keys, out-of-range indexes and any property
  of ``null``/``undefined`` evaluate to ``MISSING`` instead of raising.
- Mappings expose their keys, sequences their integer indexes and
  ``length``, strings their characters and ``length``, other objects their
  public (non-underscore), non-callable attributes.

Type errors (ordering a string against a number, arithmetic on non-numbers,
division by zero) raise :class:`ExpressionEvaluationError`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Callable, Dict

from stencil.core.exceptions import ExpressionEvaluationError

from .model import (
    ArrayLiteral,
    Binary,
    Conditional,
    Identifier,
    Index,
    Literal,
    Logical,
    Member,
    Node,
    Unary,
)
from .parser import parse_expression
from .scope import Scope
from .values import MISSING, is_nullish, is_number, is_sequence, to_display, truthy, type_name


class EvaluationFailure(Exception):
    """Internal failure raised mid-walk; wrapped with the expression text."""


def get_member(obj: Any, name: str) -> Any:
    """Read ``obj.name`` under template lookup rules."""
    if is_nullish(obj):
        return MISSING
    if isinstance(obj, Mapping):
        return obj[name] if name in obj else MISSING
    if isinstance(obj, str) or is_sequence(obj):
        return len(obj) if name == "length" else MISSING
    if name.startswith("_"):
        return MISSING
    value = getattr(obj, name, MISSING)
    if callable(value):
        return MISSING
    return value


def get_index(obj: Any, key: Any) -> Any:
    """Read ``obj[key]`` under template lookup rules."""
    if is_nullish(obj):
        return MISSING
    if isinstance(obj, Mapping):
        try:
            if key in obj:
                return obj[key]
        except TypeError as exc:
            raise EvaluationFailure(f"Invalid key of type {type_name(key)}") from exc
        if not isinstance(key, str) and not is_nullish(key) and to_display(key) in obj:
            return obj[to_display(key)]
        return MISSING
    if isinstance(obj, str) or is_sequence(obj):
        if isinstance(key, str):
            return get_member(obj, key)
        if isinstance(key, float) and key.is_integer():
            key = int(key)
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(obj):
            return obj[key]
        return MISSING
    if isinstance(key, str):
        return get_member(obj, key)
    return MISSING


def _require_numbers(op: str, left: Any, right: Any) -> None:
    if not (is_number(left) and is_number(right)):
        raise EvaluationFailure(
            f"Unsupported operand types for {op}: {type_name(left)} and {type_name(right)}"
        )


def _add(left: Any, right: Any) -> Any:
    if isinstance(left, str) or isinstance(right, str):
        return to_display(left) + to_display(right)
    _require_numbers("+", left, right)
    return left + right


def _sub(left: Any, right: Any) -> Any:
    _require_numbers("-", left, right)
    return left - right


def _mul(left: Any, right: Any) -> Any:
    _require_numbers("*", left, right)
    return left * right


def _div(left: Any, right: Any) -> Any:
    _require_numbers("/", left, right)
    if right == 0:
        raise EvaluationFailure("Division by zero")
    return left / right


def _mod(left: Any, right: Any) -> Any:
    _require_numbers("%", left, right)
    if right == 0:
        raise EvaluationFailure("Modulo by zero")
    result = math.fmod(left, right)
    if isinstance(left, int) and isinstance(right, int):
        return int(result)
    return result


def _compare(op: str) -> Callable[[Any, Any], bool]:
    def compare(left: Any, right: Any) -> bool:
        both_numbers = is_number(left) and is_number(right)
        both_strings = isinstance(left, str) and isinstance(right, str)
        if not (both_numbers or both_strings):
            raise EvaluationFailure(
                f"Cannot compare {type_name(left)} {op} {type_name(right)}"
            )
        if op == "<":
            return left < right
        if op == "<=":
            return left <= right
        if op == ">":
            return left > right
        return left >= right

    return compare


def loose_equals(left: Any, right: Any) -> bool:
    """``==``: null and undefined are equal to each other and nothing else."""
    if is_nullish(left) or is_nullish(right):
        return is_nullish(left) and is_nullish(right)
    try:
        return bool(left == right)
    except Exception as exc:  # comparisons on foreign objects
        raise EvaluationFailure(f"Cannot compare values: {exc}") from exc


def strict_equals(left: Any, right: Any) -> bool:
    """``===``: like ``==`` but booleans, numbers, null and undefined never mix."""
    if left is MISSING or right is MISSING:
        return left is right
    if left is None or right is None:
        return left is right
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return loose_equals(left, right)


_BINARY_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": _add,
    "-": _sub,
    "*": _mul,
    "/": _div,
    "%": _mod,
    "<": _compare("<"),
    "<=": _compare("<="),
    ">": _compare(">"),
    ">=": _compare(">="),
    "==": loose_equals,
    "!=": lambda left, right: not loose_equals(left, right),
    "===": strict_equals,
    "!==": lambda left, right: not strict_equals(left, right),
}


class ExpressionEvaluator:
    """
    Evaluates expression ASTs against a scope.

    Stateless apart from the scope it was created with, so one evaluator can
    be reused for every expression in the same scope.
    """

    def __init__(self, scope: Scope) -> None:
        self.scope = scope
        self._handlers: Dict[type, Callable[[Any], Any]] = {
            Literal: self._eval_literal,
            Identifier: self._eval_identifier,
            Member: self._eval_member,
            Index: self._eval_index,
            ArrayLiteral: self._eval_array,
            Unary: self._eval_unary,
            Binary: self._eval_binary,
            Logical: self._eval_logical,
            Conditional: self._eval_conditional,
        }

    def evaluate(self, node: Node) -> Any:
        handler = self._handlers.get(type(node))
        if handler is None:
            raise EvaluationFailure(f"Unknown expression node: {type(node).__name__}")
        return handler(node)

    def _eval_literal(self, node: Literal) -> Any:
        return node.value

    def _eval_identifier(self, node: Identifier) -> Any:
        return self.scope.resolve(node.name)

    def _eval_member(self, node: Member) -> Any:
        return get_member(self.evaluate(node.object), node.name)

    def _eval_index(self, node: Index) -> Any:
        obj = self.evaluate(node.object)
        return get_index(obj, self.evaluate(node.index))

    def _eval_array(self, node: ArrayLiteral) -> Any:
        return [self.evaluate(item) for item in node.items]

    def _eval_unary(self, node: Unary) -> Any:
        value = self.evaluate(node.operand)
        if node.operator == "!":
            return not truthy(value)
        if not is_number(value):
            raise EvaluationFailure(f"Unsupported operand type for unary {node.operator}: {type_name(value)}")
        return -value if node.operator == "-" else +value

    def _eval_binary(self, node: Binary) -> Any:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return _BINARY_OPERATORS[node.operator](left, right)

    def _eval_logical(self, node: Logical) -> Any:
        left = self.evaluate(node.left)
        if node.operator == "&&":
            return self.evaluate(node.right) if truthy(left) else left
        if node.operator == "||":
            return left if truthy(left) else self.evaluate(node.right)
        return self.evaluate(node.right) if is_nullish(left) else left

    def _eval_conditional(self, node: Conditional) -> Any:
        if truthy(self.evaluate(node.test)):
            return self.evaluate(node.consequent)
        return self.evaluate(node.alternate)


def evaluate(expression: str, scope: Scope) -> Any:
    """
    Evaluate expression text against ``scope``.

    Returns:
        The resulting value; ``MISSING`` for unresolved names

    Raises:
        ExpressionEvaluationError: Naming ``expression`` and the cause, for
            syntax errors and runtime type errors alike
    """
    node = parse_expression(expression)
    try:
        return ExpressionEvaluator(scope).evaluate(node)
    except EvaluationFailure as exc:
        raise ExpressionEvaluationError(expression, str(exc)) from exc
    except (TypeError, ValueError, ArithmeticError) as exc:
        raise ExpressionEvaluationError(expression, f"{type(exc).__name__}: {exc}") from exc


def evaluate_boolean(expression: str, scope: Scope) -> bool:
    """Evaluate and coerce with template truthiness."""
    return truthy(evaluate(expression, scope))


__all__ = [
    "ExpressionEvaluator",
    "EvaluationFailure",
    "evaluate",
    "evaluate_boolean",
    "get_member",
    "get_index",
    "loose_equals",
    "strict_equals",
]
