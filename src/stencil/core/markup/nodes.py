"""Markup node tree.

Nodes keep the exact source text of every tag so that markup without
directives is emitted byte-for-byte as written.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Attribute:
    """One attribute as written in an open tag.

    Attributes:
        name: Attribute name as written
        value: Unquoted value, or None for a valueless attribute
        raw: Original source text, e.g. ``class="card"``
    """
    name: str
    value: Optional[str]
    raw: str


@dataclass(frozen=True)
class Text:
    """Literal text, comments and raw-text element bodies."""
    text: str


@dataclass(frozen=True)
class Element:
    """An element with its (possibly empty) children.

    ``close_tag`` is None for void, self-closing and unclosed elements.
    """
    tag: str
    attributes: Tuple[Attribute, ...]
    open_tag: str
    children: Tuple["Node", ...] = ()
    close_tag: Optional[str] = None
    self_closing: bool = False

    def get(self, name: str) -> Optional[Attribute]:
        """First attribute called ``name`` (case-insensitive)."""
        lowered = name.lower()
        for attr in self.attributes:
            if attr.name.lower() == lowered:
                return attr
        return None

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def without(self, *names: str) -> Tuple[Attribute, ...]:
        """Attributes minus the given names (case-insensitive)."""
        drop = {n.lower() for n in names}
        return tuple(a for a in self.attributes if a.name.lower() not in drop)

    def build_open_tag(self, attributes: Tuple[Attribute, ...]) -> str:
        """Re-emit the open tag with a different attribute list."""
        attrs = "".join(f" {a.raw}" for a in attributes)
        return f"<{self.tag}{attrs}{'/' if self.self_closing else ''}>"


Node = Union[Text, Element]

__all__ = ["Attribute", "Text", "Element", "Node"]
