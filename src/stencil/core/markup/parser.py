"""Tag-structure parser for template markup.

Builds a :class:`~.nodes.Node` tree in a single left-to-right scan:

- Same-named nested elements pair by depth, not by first close tag.
- Void elements (``<br>``, ``<img>``, ...) and ``<x/>`` never take children.
- ``script``, ``style``, ``textarea`` and ``title`` bodies are raw text.
- Comments, doctypes and processing instructions are opaque text.
- ``{{ ... }}`` regions are skipped while looking for tags, so an
  expression like ``{{ a<b }}`` is never mistaken for markup. Braces with no
  closer, or whose closer lies past real markup, are plain text.
- A close tag with no matching open element is kept as text; an element
  that is never closed keeps its open tag and its would-be children become
  following siblings.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Tuple

from .attributes import parse_attributes
from .nodes import Attribute, Element, Node, Text

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
})

RAW_TEXT_ELEMENTS = frozenset({"script", "style", "textarea", "title"})

_TAG_NAME = r"[A-Za-z][\w:.\-]*"
_ATTRS = r"""(?:\s+[^\s"'<>/=]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'=<>`]+))?)*"""

OPEN_TAG_PATTERN = re.compile(rf"<({_TAG_NAME})({_ATTRS})\s*(/?)>", re.DOTALL)
CLOSE_TAG_PATTERN = re.compile(rf"</({_TAG_NAME})\s*>")
COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
DECLARATION_PATTERN = re.compile(r"<![^>]*>|<\?.*?\?>", re.DOTALL)


@dataclass
class _OpenElement:
    tag: str
    attributes: Tuple[Attribute, ...]
    open_tag: str
    children: List[Node] = field(default_factory=list)

    def close(self, close_tag: str) -> Element:
        return Element(
            tag=self.tag,
            attributes=self.attributes,
            open_tag=self.open_tag,
            children=tuple(self.children),
            close_tag=close_tag,
        )

    def abandon(self) -> List[Node]:
        """Unclosed: the bare open tag followed by its children as siblings."""
        bare = Element(tag=self.tag, attributes=self.attributes, open_tag=self.open_tag)
        return [bare, *self.children]


class MarkupParser:
    """Single-use parser; call :func:`parse_markup` instead."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._root: List[Node] = []
        self._stack: List[_OpenElement] = []
        self._text: List[str] = []

    def parse(self) -> Tuple[Node, ...]:
        src = self.source
        pos = 0
        length = len(src)

        while pos < length:
            next_tag = src.find("<", pos)
            next_expr = src.find("{{", pos)

            if next_expr != -1 and (next_tag == -1 or next_expr < next_tag):
                end = _expression_end(src, next_expr)
                if end == -1:
                    # Stray braces: keep them as text and go on looking for tags
                    self._text.append(src[pos:next_expr + 2])
                    pos = next_expr + 2
                    continue
                self._text.append(src[pos:end])
                pos = end
                continue

            if next_tag == -1:
                self._text.append(src[pos:])
                break

            self._text.append(src[pos:next_tag])
            pos = self._consume_markup(next_tag)

        self._flush_text()
        while self._stack:
            self._append_all(self._stack.pop().abandon())
        return tuple(self._root)

    def _consume_markup(self, start: int) -> int:
        """Handle the construct at ``start`` (a ``<``) and return the next position."""
        src = self.source

        for pattern in (COMMENT_PATTERN, DECLARATION_PATTERN):
            match = pattern.match(src, start)
            if match:
                self._text.append(match.group(0))
                return match.end()

        match = CLOSE_TAG_PATTERN.match(src, start)
        if match:
            self._close(match.group(1), match.group(0))
            return match.end()

        match = OPEN_TAG_PATTERN.match(src, start)
        if match:
            return self._open(match)

        self._text.append("<")
        return start + 1

    def _open(self, match: "re.Match[str]") -> int:
        self._flush_text()
        tag, attr_text, slash = match.group(1), match.group(2), match.group(3)
        attributes = parse_attributes(attr_text)
        lowered = tag.lower()

        if slash or lowered in VOID_ELEMENTS:
            self._append(Element(
                tag=tag,
                attributes=attributes,
                open_tag=match.group(0),
                self_closing=bool(slash),
            ))
            return match.end()

        if lowered in RAW_TEXT_ELEMENTS:
            closer = re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE)
            end_match = closer.search(self.source, match.end())
            if end_match:
                body = self.source[match.end():end_match.start()]
                self._append(Element(
                    tag=tag,
                    attributes=attributes,
                    open_tag=match.group(0),
                    children=(Text(body),) if body else (),
                    close_tag=end_match.group(0),
                ))
                return end_match.end()

        self._stack.append(_OpenElement(tag=tag, attributes=attributes, open_tag=match.group(0)))
        return match.end()

    def _close(self, tag: str, raw: str) -> None:
        lowered = tag.lower()
        target: Optional[int] = None
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index].tag.lower() == lowered:
                target = index
                break

        if target is None:
            self._text.append(raw)
            return

        self._flush_text()
        while len(self._stack) - 1 > target:
            self._append_all(self._stack.pop().abandon())
        self._append(self._stack.pop().close(raw))

    def _flush_text(self) -> None:
        if self._text:
            text = "".join(self._text)
            self._text = []
            if text:
                self._append(Text(text))

    def _append(self, node: Node) -> None:
        container = self._stack[-1].children if self._stack else self._root
        # Merge adjacent text so interpolation sees whole runs.
        if isinstance(node, Text) and container and isinstance(container[-1], Text):
            container[-1] = Text(container[-1].text + node.text)
        else:
            container.append(node)

    def _append_all(self, nodes: List[Node]) -> None:
        for node in nodes:
            self._append(node)


_QUOTED_VALUE = re.compile(r"""=\s*["']""")


def _expression_end(src: str, start: int) -> int:
    """Index just past the ``}}``/``}}}`` closing the expression at ``start``.

    Returns -1 when the braces at ``start`` do not open an expression: there
    is no closer, another ``{{`` comes first, or markup sits in between.
    """
    delimiter = "}}}" if src.startswith("{{{", start) else "}}"
    body_start = start + len(delimiter)
    end = src.find(delimiter, body_start)
    if end == -1:
        return -1
    if src.find("{{", body_start, end) != -1 or _contains_tag(src, body_start, end):
        return -1
    return end + len(delimiter)


def _contains_tag(src: str, start: int, stop: int) -> bool:
    """Whether a close tag, or an open tag with a quoted attribute, lies in ``src[start:stop]``."""
    pos = src.find("<", start, stop)
    while pos != -1:
        if CLOSE_TAG_PATTERN.match(src, pos, stop):
            return True
        match = OPEN_TAG_PATTERN.match(src, pos, stop)
        if match and _QUOTED_VALUE.search(match.group(2)):
            return True
        pos = src.find("<", pos + 1, stop)
    return False


@lru_cache(maxsize=512)
def parse_markup(source: str) -> Tuple[Node, ...]:
    """Parse template source into a node tree (cached per distinct source)."""
    return MarkupParser(source).parse()


__all__ = [
    "MarkupParser",
    "parse_markup",
    "VOID_ELEMENTS",
    "RAW_TEXT_ELEMENTS",
]
