"""Value helpers shared by the evaluator and the renderer.

``MISSING`` marks a name or property that does not exist. It is distinct
from ``None`` (a present null) but both render as an empty string and both
are falsy.
"""
from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any


class _Missing:
    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_nullish(value: Any) -> bool:
    """True for ``None`` and ``MISSING``."""
    return value is None or value is MISSING


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float))


def is_sequence(value: Any) -> bool:
    """Ordered, indexable collections (strings and bytes excluded)."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def truthy(value: Any) -> bool:
    """Template truthiness.

    ``None``, ``MISSING``, ``False``, ``0``, ``NaN`` and ``""`` are false.
    Everything else is true, including empty lists and mappings.
    """
    if is_nullish(value) or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if is_number(value):
        return not (value == 0 or (isinstance(value, float) and math.isnan(value)))
    return True


def to_display(value: Any) -> str:
    """Convert a value to the text that is emitted into markup."""
    if is_nullish(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if is_sequence(value):
        return ",".join(to_display(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def type_name(value: Any) -> str:
    """Short type label used in error messages."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_sequence(value):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


__all__ = ["MISSING", "is_nullish", "is_number", "is_sequence", "truthy", "to_display", "type_name"]
