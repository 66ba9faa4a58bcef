"""Layered variable scope.

A :class:`Scope` is an ordered tuple of read-only mappings searched from the
innermost layer outwards. Creating a child scope never copies or mutates the
caller's data; it only appends one new layer. Names found in no layer
resolve to ``MISSING`` - there is no fallback to Python globals or builtins.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping as MappingT, Tuple

from .values import MISSING

ROOT_NAME = "$root"
INDEX_NAME = "$index"


def flatten_data(data: Any) -> Dict[str, Any]:
    """Top-level bindings for a root scope.

    Mappings contribute their items; dataclass instances and plain objects
    contribute their public attributes; anything else contributes nothing.
    """
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return {str(k): v for k, v in data.items()}
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {f.name: getattr(data, f.name) for f in dataclasses.fields(data) if not f.name.startswith("_")}
    attrs = getattr(data, "__dict__", None)
    if isinstance(attrs, Mapping):
        return {k: v for k, v in attrs.items() if not k.startswith("_")}
    return {}


class Scope:
    """Immutable stack of binding layers.

    Example:
        >>> root = Scope.root({"title": "T", "items": [1, 2]})
        >>> row = root.child({"item": 1, "$index": 0})
        >>> row.resolve("title"), row.resolve("item")
        ('T', 1)
    """

    __slots__ = ("_layers",)

    def __init__(self, layers: Tuple[MappingT[str, Any], ...] = ()) -> None:
        self._layers: Tuple[MappingT[str, Any], ...] = tuple(
            layer if isinstance(layer, MappingProxyType) else MappingProxyType(dict(layer))
            for layer in layers
        )

    @classmethod
    def root(cls, data: Any) -> "Scope":
        """Scope for a top-level render: flattened data plus ``$root``."""
        return cls((flatten_data(data), {ROOT_NAME: data}))

    def child(self, bindings: MappingT[str, Any]) -> "Scope":
        """New scope with ``bindings`` layered innermost."""
        scope = Scope.__new__(Scope)
        scope._layers = self._layers + (MappingProxyType(dict(bindings)),)
        return scope

    def resolve(self, name: str) -> Any:
        """Innermost binding for ``name``, or ``MISSING``."""
        for layer in reversed(self._layers):
            if name in layer:
                return layer[name]
        return MISSING

    @property
    def layers(self) -> Tuple[MappingT[str, Any], ...]:
        return self._layers

    def __contains__(self, name: object) -> bool:
        return any(name in layer for layer in self._layers)

    def __iter__(self) -> Iterator[str]:
        seen = set()
        for layer in reversed(self._layers):
            for key in layer:
                if key not in seen:
                    seen.add(key)
                    yield key

    def __repr__(self) -> str:
        return f"Scope(depth={len(self._layers)}, names={sorted(self)!r})"


__all__ = ["Scope", "flatten_data", "ROOT_NAME", "INDEX_NAME"]
