"""Template name resolution.

A template is registered under the name declared by a directive comment
anywhere in its source::

    <!-- @template name="user-card" -->
    <!-- @template: user-card -->

and otherwise under its file name without the matched extension. Every
stored or looked-up name passes through :func:`normalize_name`.
"""
from __future__ import annotations

from typing import Optional, Pattern, Sequence


def normalize_name(name: str, case_insensitive: bool = True) -> str:
    """Trim whitespace and, unless case-sensitive, lowercase."""
    trimmed = name.strip()
    return trimmed.lower() if case_insensitive else trimmed


def extract_template_name(source: str, pattern: Pattern[str]) -> Optional[str]:
    """Return the name declared by the directive comment, if any.

    The first non-empty capture group wins; a pattern with a ``name`` group
    uses that group.
    """
    match = pattern.search(source)
    if not match:
        return None
    if "name" in pattern.groupindex:
        candidates = [match.group("name")]
    else:
        candidates = list(match.groups()) or [match.group(0)]
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def fallback_name(file_name: str, extensions: Sequence[str]) -> str:
    """Base file name with the longest matching configured extension removed.

    Example:
        >>> fallback_name("card.tpl.html", [".html", ".tpl.html"])
        'card'
    """
    lowered = file_name.lower()
    for ext in sorted(extensions, key=len, reverse=True):
        if ext and lowered.endswith(ext.lower()):
            return file_name[: len(file_name) - len(ext)]
    stem, dot, _ = file_name.rpartition(".")
    return stem if dot and stem else file_name


__all__ = ["normalize_name", "extract_template_name", "fallback_name"]
