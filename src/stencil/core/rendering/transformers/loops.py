"""Loop transformer.

Handles the ``x-for`` directive:

    <li x-for="users" x-row="user">{{ user.name }}</li>

The element is repeated once per item. Each copy is rendered in a child
scope binding the row alias (``item`` when ``x-row`` is absent or blank) and
``$index`` (0-based). A value that is not a sequence drops the element; an
empty ``x-for`` leaves it untouched.
"""
from __future__ import annotations

import logging
from typing import List

from stencil.core.expressions import INDEX_NAME, evaluate, is_sequence
from stencil.core.markup import Element

from ..context import RenderContext
from .base import ElementTransformer, Proceed, strip_attributes

logger = logging.getLogger(__name__)

FOR_ATTRIBUTE = "x-for"
ROW_ATTRIBUTE = "x-row"
DEFAULT_ALIAS = "item"


class LoopTransformer(ElementTransformer):
    """Expand ``x-for`` elements into one copy per sequence item."""

    def applies(self, element: Element, context: RenderContext) -> bool:
        directive = element.get(FOR_ATTRIBUTE)
        return directive is not None and bool((directive.value or "").strip())

    def transform(self, element: Element, context: RenderContext, proceed: Proceed) -> str:
        expression = element.get(FOR_ATTRIBUTE).value or ""
        items = evaluate(expression, context.scope)
        context.stats.expressions_evaluated += 1
        if not is_sequence(items):
            logger.debug("x-for=%r did not yield a sequence; dropping <%s>", expression, element.tag)
            context.stats.loops_dropped += 1
            return ""

        row = element.get(ROW_ATTRIBUTE)
        alias = (row.value or "").strip() if row is not None else ""
        alias = alias or DEFAULT_ALIAS

        body = strip_attributes(element, FOR_ATTRIBUTE, ROW_ATTRIBUTE)
        parts: List[str] = []
        for index, item in enumerate(items):
            scope = context.scope.child({alias: item, INDEX_NAME: index})
            parts.append(proceed(body, context.descend(scope=scope)))
        context.stats.loops_expanded += 1
        return "".join(parts)


__all__ = ["LoopTransformer", "DEFAULT_ALIAS"]
