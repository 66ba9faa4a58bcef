"""Directive expansion and rendering."""
from __future__ import annotations

from .context import RenderContext, RenderStats
from .engine import TemplateEngine, create_template_engine
from .renderer import DirectiveRenderer

__all__ = [
    "TemplateEngine",
    "create_template_engine",
    "DirectiveRenderer",
    "RenderContext",
    "RenderStats",
]
