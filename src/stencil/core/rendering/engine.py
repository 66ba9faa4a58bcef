"""Template engine facade.

Wires the registry, the directive renderer and the configuration together
behind the public ``render`` / ``render_with_layout`` API.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from stencil.core.config import EngineConfig, coerce_config
from stencil.core.expressions import Scope, flatten_data
from stencil.core.registry import TemplateRecord, TemplateRegistry

from .context import RenderContext, RenderStats
from .renderer import DirectiveRenderer

logger = logging.getLogger(__name__)

ConfigLike = Union[EngineConfig, Mapping[str, Any], str, Path, Iterable[Union[str, Path]]]


class TemplateEngine:
    """Render registered templates against caller data.

    Usage:
        engine = TemplateEngine(EngineConfig(directories=("templates",)))
        engine.reload()
        html = engine.render("page", {"title": "Hello"})

    A render takes one registry snapshot up front, so a concurrent
    :meth:`reload` never changes the templates seen mid-render.
    """

    def __init__(self, config: ConfigLike) -> None:
        self.config = coerce_config(config)
        self.registry = TemplateRegistry(self.config)
        self.renderer = DirectiveRenderer()

    def reload(self) -> int:
        """Rescan the configured directories. Returns the template count."""
        return self.registry.reload()

    def list_template_names(self) -> List[str]:
        return self.registry.list_template_names()

    def register(self, name: str, source: str) -> TemplateRecord:
        """Register a template from a string (kept until the next reload)."""
        return self.registry.register(name, source)

    def render(self, name: str, data: Any = None) -> str:
        """Render a registered template.

        Args:
            name: Template name (case rules as configured)
            data: Mapping or object whose fields become top-level variables

        Returns:
            Rendered HTML

        Raises:
            TemplateNotFoundError: If ``name`` is not registered
            CyclicIncludeError: If includes form a cycle
            RenderDepthExceededError: If nesting passes ``max_depth``
            ExpressionEvaluationError: If any expression fails
        """
        records = self.registry.snapshot()
        record = self.registry.get(name, records)
        stats = RenderStats()
        context = RenderContext(
            records=records,
            normalize=self.registry.normalize,
            scope=Scope.root(data),
            max_depth=self.config.max_depth,
            template=record.name,
            stats=stats,
        )
        html = self.renderer.render_source(record.source, context)
        logger.debug(
            "Rendered '%s' (%d include(s), %d loop(s), %d expression(s))",
            record.name,
            stats.includes_rendered,
            stats.loops_expanded,
            stats.expressions_evaluated,
        )
        return html

    def render_with_layout(
        self,
        layout_name: str,
        inner_name: str,
        data: Any = None,
        content_var_name: Optional[str] = None,
    ) -> str:
        """Render ``inner_name``, then render ``layout_name`` with it bound.

        The inner HTML is exposed to the layout under ``content_var_name``
        (default from config, ``content``); use ``{{{ content }}}`` in the
        layout to insert it unescaped.
        """
        var_name = content_var_name or self.config.content_var_name
        inner = self.render(inner_name, data)
        layout_data: Dict[str, Any] = flatten_data(data)
        layout_data[var_name] = inner
        return self.render(layout_name, layout_data)


def create_template_engine(config: ConfigLike) -> TemplateEngine:
    """Build an engine and load its templates."""
    engine = TemplateEngine(config)
    engine.reload()
    return engine


__all__ = ["TemplateEngine", "create_template_engine"]
