"""Include transformer.

A self-closing element whose tag names a registered template is replaced by
that template's full rendering:

    <UserCard name="{{ user.name }}" role="admin" featured />

Attribute values that are exactly one ``{{ expr }}`` (or ``{{{ expr }}}``)
are evaluated in the caller's scope; other values are passed as literal
strings; valueless attributes bind ``True``. The bindings form a child
scope layered over the caller's, so the included template also sees every
outer name.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict

from stencil.core.exceptions import CyclicIncludeError
from stencil.core.expressions import evaluate
from stencil.core.markup import Element

from ..context import RenderContext
from .base import ElementTransformer, Proceed

logger = logging.getLogger(__name__)

# Whole-value expression: {{{ expr }}} or {{ expr }} with no inner "}}"
SINGLE_EXPRESSION_PATTERN = re.compile(
    r"^\{\{\{\s*((?:(?!\}\}\}).)+?)\s*\}\}\}$|^\{\{\s*((?:(?!\}\}).)+?)\s*\}\}$",
    re.DOTALL,
)

RenderSource = Callable[[str, RenderContext], str]


def include_bindings(element: Element, context: RenderContext) -> Dict[str, Any]:
    """Evaluate an include element's attributes into scope bindings."""
    bindings: Dict[str, Any] = {}
    for attr in element.attributes:
        if attr.value is None:
            bindings[attr.name] = True
            continue
        match = SINGLE_EXPRESSION_PATTERN.match(attr.value)
        if match:
            bindings[attr.name] = evaluate(match.group(1) or match.group(2), context.scope)
            context.stats.expressions_evaluated += 1
        else:
            bindings[attr.name] = attr.value
    return bindings


class IncludeTransformer(ElementTransformer):
    """Replace self-closing template tags with the rendered template.

    Args:
        render_source: Callback rendering template source in a context
    """

    def __init__(self, render_source: RenderSource) -> None:
        self._render_source = render_source

    def applies(self, element: Element, context: RenderContext) -> bool:
        return element.self_closing and context.lookup(element.tag) is not None

    def transform(self, element: Element, context: RenderContext, proceed: Proceed) -> str:
        record = context.lookup(element.tag)
        name = record.name
        if name in context.stack:
            raise CyclicIncludeError([*context.stack, name])

        bindings = include_bindings(element, context)
        child = context.descend(
            scope=context.scope.child(bindings),
            stack=(*context.stack, name),
            template=name,
        )
        logger.debug("Including '%s' at depth %d", name, child.depth)
        context.stats.includes_rendered += 1
        return self._render_source(record.source, child)


__all__ = ["IncludeTransformer", "include_bindings", "SINGLE_EXPRESSION_PATTERN"]
