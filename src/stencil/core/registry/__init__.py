"""Template registry: discovery, naming and snapshot storage."""
from __future__ import annotations

from .discovery import TemplateFile, iter_template_files
from .naming import extract_template_name, fallback_name, normalize_name
from .registry import TemplateRecord, TemplateRegistry

__all__ = [
    "TemplateFile",
    "iter_template_files",
    "extract_template_name",
    "fallback_name",
    "normalize_name",
    "TemplateRecord",
    "TemplateRegistry",
]
