"""CLI output formatting utilities.

Supports both JSON and text output modes.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict

from stencil.core.exceptions import StencilError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def error(self, error: Exception, *, error_code: str = "error") -> None:
        """Output an error to stderr.

        Stencil errors contribute their code and context in JSON mode.
        """
        if self.json_mode:
            if isinstance(error, StencilError):
                output: Dict[str, Any] = {"error": error_code, **error.to_json_error()}
            else:
                output = {"error": error_code, "message": str(error)}
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {error}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)


__all__ = ["OutputFormatter"]
