"""
Stencil - server-side HTML templates with directives

Stencil discovers templates on disk, expands loop, conditional and include
directives, and interpolates escaped or raw expressions against caller data.
"""

from stencil.core.config import EngineConfig, load_config
from stencil.core.exceptions import (
    ConfigurationError,
    CyclicIncludeError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    RenderDepthExceededError,
    StencilError,
    TemplateNotFoundError,
)
from stencil.core.rendering.engine import TemplateEngine, create_template_engine

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "EngineConfig",
    "load_config",
    "TemplateEngine",
    "create_template_engine",
    "StencilError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "CyclicIncludeError",
    "RenderDepthExceededError",
    "ExpressionEvaluationError",
    "ExpressionSyntaxError",
]
