"""Base class for directive transformers.

The renderer hands every element to an ordered chain of transformers:

1. LOOPS        - ``x-for`` / ``x-row``
2. CONDITIONALS - ``x-if``
3. INCLUDES     - self-closing elements named after a registered template

A transformer that applies to an element renders it, usually by stripping
its own directive and passing the element on to ``proceed`` (the rest of the
chain) with a derived context. Elements no transformer claims are emitted
as-is with their children rendered. Text is handled by the Interpolator.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable

from stencil.core.markup import Element

from ..context import RenderContext

Proceed = Callable[[Element, RenderContext], str]


class ElementTransformer(ABC):
    """Abstract base class for element directive transformers.

    Example:
        class HiddenTransformer(ElementTransformer):
            def applies(self, element, context):
                return element.has("x-hidden")

            def transform(self, element, context, proceed):
                return ""
    """

    @abstractmethod
    def applies(self, element: Element, context: RenderContext) -> bool:
        """Whether this transformer handles ``element``."""
        ...

    @abstractmethod
    def transform(self, element: Element, context: RenderContext, proceed: Proceed) -> str:
        """Render ``element``.

        Args:
            element: Element carrying this transformer's directive
            context: Current render context
            proceed: Renders an element through the remaining transformers

        Returns:
            Rendered markup
        """
        ...

    def get_name(self) -> str:
        """Get transformer name for logging/debugging."""
        return self.__class__.__name__


def strip_attributes(element: Element, *names: str) -> Element:
    """Copy of ``element`` with the named attributes removed from its open tag."""
    attributes = element.without(*names)
    return replace(element, attributes=attributes, open_tag=element.build_open_tag(attributes))


__all__ = ["ElementTransformer", "Proceed", "strip_attributes"]
