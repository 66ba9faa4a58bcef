from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence


class StencilError(Exception):
    """Base exception for Stencil."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(StencilError, ValueError):
    """Raised when the engine configuration is missing or invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        StencilError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class TemplateNotFoundError(StencilError, LookupError):
    """Raised when a render or include target is not registered."""

    def __init__(self, name: str, *, context: Mapping[str, Any] | None = None) -> None:
        self.name = name
        ctx = dict(context or {})
        ctx["name"] = name
        StencilError.__init__(self, f"Template not found: {name}", context=ctx)
        LookupError.__init__(self, f"Template not found: {name}")


class CyclicIncludeError(StencilError, RuntimeError):
    """Raised when an include target is already on the active render stack."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        message = f"Cyclic include detected: {' -> '.join(self.chain)}"
        StencilError.__init__(self, message, context={"chain": self.chain})
        RuntimeError.__init__(self, message)


class RenderDepthExceededError(StencilError, RecursionError):
    """Raised when nested rendering goes deeper than the configured ceiling."""

    def __init__(self, max_depth: int, *, template: Optional[str] = None) -> None:
        self.max_depth = max_depth
        message = f"Template render depth exceeded (max {max_depth}). Potential infinite recursion."
        ctx: Dict[str, Any] = {"max_depth": max_depth}
        if template:
            ctx["template"] = template
        StencilError.__init__(self, message, context=ctx)
        RecursionError.__init__(self, message)


class ExpressionEvaluationError(StencilError, ValueError):
    """Raised when an expression is malformed or fails while evaluating."""

    def __init__(self, expression: str, cause: str) -> None:
        self.expression = expression
        self.cause = cause
        message = f'Expression evaluation failed for "{expression}": {cause}'
        StencilError.__init__(self, message, context={"expression": expression, "cause": cause})
        ValueError.__init__(self, message)


class ExpressionSyntaxError(ExpressionEvaluationError):
    """Expression text could not be tokenized or parsed."""

    def __init__(self, expression: str, cause: str, position: int) -> None:
        self.position = position
        super().__init__(expression, f"{cause} (at position {position})")
        self.context["position"] = position


__all__ = [
    "StencilError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "CyclicIncludeError",
    "RenderDepthExceededError",
    "ExpressionEvaluationError",
    "ExpressionSyntaxError",
]
