"""Expression interpolation for text and tag source.

``{{{ expr }}}`` inserts the value verbatim; ``{{ expr }}`` inserts it
HTML-escaped. Both forms are replaced in a single left-to-right pass, so
text produced by one substitution is never scanned again.
"""
from __future__ import annotations

import re

from stencil.core.expressions import evaluate, to_display

from ..context import RenderContext

# Triple braces are tried first at each position. A region never spans
# another opening ``{{``, so stray braces stay literal.
INTERPOLATION_PATTERN = re.compile(
    r"\{\{\{\s*((?:(?!\}\}\}|\{\{).)+?)\s*\}\}\}|\{\{\s*((?:(?!\}\}|\{\{).)+?)\s*\}\}",
    re.DOTALL,
)

_ESCAPES = (
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters (``&`` first)."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


class Interpolator:
    """Replace ``{{ }}`` and ``{{{ }}}`` regions with evaluated values."""

    def interpolate(self, text: str, context: RenderContext) -> str:
        if "{{" not in text:
            return text

        def replace(match: "re.Match[str]") -> str:
            raw, escaped = match.group(1), match.group(2)
            context.stats.expressions_evaluated += 1
            if raw is not None:
                return to_display(evaluate(raw, context.scope))
            return escape_html(to_display(evaluate(escaped, context.scope)))

        return INTERPOLATION_PATTERN.sub(replace, text)


__all__ = ["Interpolator", "escape_html", "INTERPOLATION_PATTERN"]
