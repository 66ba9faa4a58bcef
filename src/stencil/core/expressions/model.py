"""
AST node types for template expressions.

Nodes are immutable so parsed trees can be cached and shared between
concurrent renders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class Literal:
    """Number, string, boolean, null or undefined literal."""
    value: Any


@dataclass(frozen=True)
class Identifier:
    """Bare name resolved against the scope."""
    name: str


@dataclass(frozen=True)
class Member:
    """Property access: ``object.name``."""
    object: "Node"
    name: str


@dataclass(frozen=True)
class Index:
    """Computed access: ``object[index]``."""
    object: "Node"
    index: "Node"


@dataclass(frozen=True)
class ArrayLiteral:
    """``[a, b, c]``"""
    items: Tuple["Node", ...]


@dataclass(frozen=True)
class Unary:
    """Prefix operator: ``!x``, ``-x``, ``+x``."""
    operator: str
    operand: "Node"


@dataclass(frozen=True)
class Binary:
    """Arithmetic, comparison or equality operator."""
    operator: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Logical:
    """Short-circuit operator: ``&&``, ``||`` or ``??``.

    Evaluates to one of its operands, not to a boolean.
    """
    operator: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Conditional:
    """Ternary: ``test ? consequent : alternate``."""
    test: "Node"
    consequent: "Node"
    alternate: "Node"


Node = Union[Literal, Identifier, Member, Index, ArrayLiteral, Unary, Binary, Logical, Conditional]

__all__ = [
    "Node",
    "Literal",
    "Identifier",
    "Member",
    "Index",
    "ArrayLiteral",
    "Unary",
    "Binary",
    "Logical",
    "Conditional",
]
