"""Per-render state passed down the directive transformers."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Mapping, Optional, Tuple

from stencil.core.exceptions import RenderDepthExceededError
from stencil.core.expressions import Scope
from stencil.core.registry import TemplateRecord


@dataclass
class RenderStats:
    """Counters shared by one render call tree (used for debug logging)."""
    includes_rendered: int = 0
    loops_expanded: int = 0
    loops_dropped: int = 0
    conditionals_evaluated: int = 0
    expressions_evaluated: int = 0


@dataclass(frozen=True)
class RenderContext:
    """Everything a transformer needs to render one subtree.

    A context is immutable; :meth:`descend` returns a copy one level deeper.

    Attributes:
        records: Registry snapshot held for the whole render
        normalize: Template name normalizer from the registry
        scope: Variable scope for this subtree
        stack: Include chain (normalized names) leading here
        depth: Nesting depth of this subtree
        max_depth: Ceiling for ``depth``
        template: Name of the template being rendered
        stats: Counters shared across the render
    """

    records: Mapping[str, TemplateRecord]
    normalize: Callable[[str], str]
    scope: Scope
    stack: Tuple[str, ...] = ()
    depth: int = 0
    max_depth: int = 50
    template: Optional[str] = None
    stats: RenderStats = field(default_factory=RenderStats)

    def descend(
        self,
        *,
        scope: Optional[Scope] = None,
        stack: Optional[Tuple[str, ...]] = None,
        template: Optional[str] = None,
    ) -> "RenderContext":
        """Context for a nested re-render.

        Raises:
            RenderDepthExceededError: If the new depth passes ``max_depth``
        """
        depth = self.depth + 1
        if depth > self.max_depth:
            raise RenderDepthExceededError(self.max_depth, template=template or self.template)
        return replace(
            self,
            scope=self.scope if scope is None else scope,
            stack=self.stack if stack is None else stack,
            template=self.template if template is None else template,
            depth=depth,
        )

    def lookup(self, tag: str) -> Optional[TemplateRecord]:
        """Registered template a tag name refers to, if any."""
        return self.records.get(self.normalize(tag))


__all__ = ["RenderContext", "RenderStats"]
