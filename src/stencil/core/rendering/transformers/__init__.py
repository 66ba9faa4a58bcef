"""Directive transformers for the template renderer.

- base: Abstract base class and shared helpers
- loops: ``x-for`` / ``x-row`` repetition
- conditionals: ``x-if`` removal
- includes: self-closing template tags
- interpolation: ``{{ }}`` and ``{{{ }}}`` substitution
"""
from __future__ import annotations

from .base import ElementTransformer, Proceed, strip_attributes
from .conditionals import ConditionalTransformer
from .includes import IncludeTransformer, include_bindings
from .interpolation import Interpolator, escape_html
from .loops import LoopTransformer

__all__ = [
    # Base classes
    "ElementTransformer",
    "Proceed",
    "strip_attributes",
    # Directives
    "LoopTransformer",
    "ConditionalTransformer",
    "IncludeTransformer",
    "include_bindings",
    # Interpolation
    "Interpolator",
    "escape_html",
]
