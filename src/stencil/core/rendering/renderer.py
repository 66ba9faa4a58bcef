"""Tree renderer driving the directive transformers."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from stencil.core.markup import Element, Node, Text, parse_markup
from stencil.core.registry.registry import BOM

from .context import RenderContext
from .transformers import (
    ConditionalTransformer,
    ElementTransformer,
    IncludeTransformer,
    Interpolator,
    LoopTransformer,
)

logger = logging.getLogger(__name__)


class DirectiveRenderer:
    """Render template source: expand directives, then interpolate.

    Each element passes through the transformer chain in order (loops,
    conditionals, includes). Text nodes and the source of every emitted tag
    are interpolated in the scope of the element that encloses them.
    """

    def __init__(self, transformers: Optional[Sequence[ElementTransformer]] = None) -> None:
        self.interpolator = Interpolator()
        if transformers is None:
            transformers = (
                LoopTransformer(),
                ConditionalTransformer(),
                IncludeTransformer(self.render_source),
            )
        self.transformers: List[ElementTransformer] = list(transformers)

    def render_source(self, source: str, context: RenderContext) -> str:
        """Parse and render one template's source."""
        if source.startswith(BOM):
            source = source[1:]
        return self.render_nodes(parse_markup(source), context)

    def render_nodes(self, nodes: Sequence[Node], context: RenderContext) -> str:
        return "".join(self.render_node(node, context) for node in nodes)

    def render_node(self, node: Node, context: RenderContext) -> str:
        if isinstance(node, Text):
            return self.interpolator.interpolate(node.text, context)
        return self._render_element(node, context, 0)

    def _render_element(self, element: Element, context: RenderContext, stage: int) -> str:
        for index in range(stage, len(self.transformers)):
            transformer = self.transformers[index]
            if transformer.applies(element, context):
                def proceed(el: Element, ctx: RenderContext, _next: int = index + 1) -> str:
                    return self._render_element(el, ctx, _next)

                return transformer.transform(element, context, proceed)
        return self._emit(element, context)

    def _emit(self, element: Element, context: RenderContext) -> str:
        parts = [self.interpolator.interpolate(element.open_tag, context)]
        parts.extend(self.render_node(child, context) for child in element.children)
        if element.close_tag is not None:
            parts.append(element.close_tag)
        return "".join(parts)


__all__ = ["DirectiveRenderer"]
