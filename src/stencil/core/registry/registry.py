"""Template registry.

Holds the name -> record mapping for every discovered template. The mapping
is never mutated in place: :meth:`TemplateRegistry.reload` and
:meth:`TemplateRegistry.register` build a replacement off to the side and
publish it with a single reference swap, so a render that grabbed
:meth:`TemplateRegistry.snapshot` keeps seeing one consistent record set
for its whole call tree.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from stencil.core.config import EngineConfig
from stencil.core.exceptions import StencilError, TemplateNotFoundError

from .discovery import iter_template_files
from .naming import extract_template_name, fallback_name, normalize_name

logger = logging.getLogger(__name__)

BOM = "\ufeff"


@dataclass(frozen=True)
class TemplateRecord:
    """One registered template."""
    name: str
    source: str
    path: Optional[Path] = None


class TemplateRegistry:
    """Name -> :class:`TemplateRecord` store with atomic whole-set reloads.

    Usage:
        registry = TemplateRegistry(EngineConfig(directories=("templates",)))
        registry.reload()
        record = registry.get("UserCard")
    """

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self._lock = threading.Lock()
        self._records: Mapping[str, TemplateRecord] = MappingProxyType({})

    def normalize(self, name: str) -> str:
        """Normalize a template name using the configured case rule."""
        return normalize_name(name, self.config.case_insensitive_names)

    def reload(self) -> int:
        """Rescan every configured directory and replace all records.

        Later files overwrite earlier ones that resolve to the same
        normalized name. Programmatic registrations are discarded.

        Returns:
            Number of registered templates
        """
        records: Dict[str, TemplateRecord] = {}
        for directory in self.config.directories:
            for item in iter_template_files(directory, self.config.extensions):
                source = self._decode(item.content, item.path)
                declared = extract_template_name(source, self.config.name_directive_pattern)
                name = self.normalize(declared or fallback_name(item.file_name, self.config.extensions))
                previous = records.get(name)
                if previous is not None:
                    logger.warning(
                        "Template '%s' from %s overrides %s", name, item.path, previous.path
                    )
                records[name] = TemplateRecord(name=name, source=source, path=item.path)
                logger.debug("Registered template '%s' from %s", name, item.path)

        with self._lock:
            self._records = MappingProxyType(records)
        logger.info(
            "Loaded %d template(s) from %d director%s",
            len(records),
            len(self.config.directories),
            "y" if len(self.config.directories) == 1 else "ies",
        )
        return len(records)

    def register(self, name: str, source: str, path: Optional[Path] = None) -> TemplateRecord:
        """Add or overwrite a single template without touching the filesystem."""
        normalized = self.normalize(name)
        if not normalized:
            raise ValueError("Template name must not be empty")
        record = TemplateRecord(name=normalized, source=_strip_bom(source), path=path)
        with self._lock:
            records = dict(self._records)
            records[normalized] = record
            self._records = MappingProxyType(records)
        logger.debug("Registered template '%s' programmatically", normalized)
        return record

    def snapshot(self) -> Mapping[str, TemplateRecord]:
        """Return the current read-only record mapping."""
        return self._records

    def get(self, name: str, records: Optional[Mapping[str, TemplateRecord]] = None) -> TemplateRecord:
        """Look up a template by (unnormalized) name.

        Args:
            name: Requested name
            records: Snapshot to search (default: the current one)

        Raises:
            TemplateNotFoundError: Carrying ``name`` exactly as requested
        """
        source = self._records if records is None else records
        record = source.get(self.normalize(name))
        if record is None:
            raise TemplateNotFoundError(name)
        return record

    def contains(self, name: str) -> bool:
        return self.normalize(name) in self._records

    def list_template_names(self) -> List[str]:
        """All registered names in lexicographic order."""
        return sorted(self._records)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __len__(self) -> int:
        return len(self._records)

    def _decode(self, content: bytes, path: Path) -> str:
        try:
            text = content.decode(self.config.encoding)
        except UnicodeDecodeError as exc:
            raise StencilError(
                f"Cannot decode template {path} as {self.config.encoding}: {exc}",
                context={"path": str(path), "encoding": self.config.encoding},
            ) from exc
        return _strip_bom(text)


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith(BOM) else text


__all__ = ["TemplateRecord", "TemplateRegistry", "BOM"]
