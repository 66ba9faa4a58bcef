"""Conditional transformer for the ``x-if`` directive.

    <p x-if="user.isAdmin && !user.suspended">Admin</p>

A truthy expression keeps the element (minus the directive); anything else
removes it together with its whole subtree. An empty ``x-if`` is left as is.
"""
from __future__ import annotations

import logging

from stencil.core.expressions import evaluate_boolean
from stencil.core.markup import Element

from ..context import RenderContext
from .base import ElementTransformer, Proceed, strip_attributes

logger = logging.getLogger(__name__)

IF_ATTRIBUTE = "x-if"


class ConditionalTransformer(ElementTransformer):
    """Keep or drop ``x-if`` elements."""

    def applies(self, element: Element, context: RenderContext) -> bool:
        directive = element.get(IF_ATTRIBUTE)
        return directive is not None and bool((directive.value or "").strip())

    def transform(self, element: Element, context: RenderContext, proceed: Proceed) -> str:
        expression = element.get(IF_ATTRIBUTE).value or ""
        context.stats.conditionals_evaluated += 1
        context.stats.expressions_evaluated += 1
        if not evaluate_boolean(expression, context.scope):
            return ""
        return proceed(strip_attributes(element, IF_ATTRIBUTE), context.descend())


__all__ = ["ConditionalTransformer"]
