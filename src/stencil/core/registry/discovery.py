"""Directory walker yielding template sources.

Walks each configured root recursively and yields every file whose name ends
with one of the configured extensions. Roots that do not exist are skipped.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateFile:
    """A discovered template file."""
    path: Path
    file_name: str
    content: bytes


def _matches(file_name: str, extensions: Sequence[str]) -> bool:
    lowered = file_name.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions if ext)


def iter_template_files(root: Path, extensions: Sequence[str]) -> Iterator[TemplateFile]:
    """Recursively yield template files below ``root``.

    Files are visited in sorted order (directories and names) so that name
    collisions resolve the same way on every platform.

    Args:
        root: Directory to scan
        extensions: File suffixes to include

    Yields:
        TemplateFile for each matching file
    """
    root = Path(root)
    if not root.is_dir():
        logger.warning("Template directory does not exist: %s", root)
        return

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if not _matches(name, extensions):
                continue
            path = Path(dirpath) / name
            yield TemplateFile(path=path, file_name=name, content=path.read_bytes())


__all__ = ["TemplateFile", "iter_template_files"]
