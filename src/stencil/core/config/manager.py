"""Engine configuration.

Settings are layered the same way everywhere:

1. Bundled defaults (``stencil/data/config/defaults.yaml``)
2. A user mapping or YAML file, deep-merged over the defaults

The merged mapping is validated against ``schemas/config.schema.yaml`` with
jsonschema before an :class:`EngineConfig` is built from it. Keys may be
given in camelCase (as in YAML files) or snake_case (as in Python callers).
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Pattern, Tuple, Union

import yaml
from jsonschema import Draft202012Validator

from stencil.core.exceptions import ConfigurationError
from stencil.core.utils import deep_merge
from stencil.data import read_yaml

logger = logging.getLogger(__name__)

# snake_case attribute -> camelCase config key
_KEY_MAP: Dict[str, str] = {
    "directories": "directories",
    "extensions": "extensions",
    "name_directive_pattern": "nameDirectivePattern",
    "case_insensitive_names": "caseInsensitiveNames",
    "max_depth": "maxDepth",
    "content_var_name": "contentVarName",
    "encoding": "encoding",
}
_CAMEL_TO_SNAKE = {camel: snake for snake, camel in _KEY_MAP.items()}

PatternLike = Union[str, Pattern[str]]


def _defaults() -> Dict[str, Any]:
    return dict(read_yaml("config", "defaults.yaml"))


def _default_extensions() -> Tuple[str, ...]:
    return tuple(_defaults()["extensions"])


def _default_pattern() -> Pattern[str]:
    return re.compile(_defaults()["nameDirectivePattern"], re.IGNORECASE)


def _compile_pattern(pattern: PatternLike) -> Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise ConfigurationError(
            f"Invalid name directive pattern: {exc}",
            context={"pattern": pattern},
        ) from exc


@dataclass(frozen=True)
class EngineConfig:
    """Construction-time settings for a :class:`~stencil.TemplateEngine`.

    Attributes:
        directories: Template source directories (required, non-empty)
        extensions: File suffixes to scan, matched case-insensitively
        name_directive_pattern: Regex locating an explicit template name; the
            first non-empty capture group is the name
        case_insensitive_names: Lowercase names when normalizing
        max_depth: Ceiling for nested re-renders
        content_var_name: Variable receiving the inner page in layouts
        encoding: Encoding used to decode template files
    """

    directories: Tuple[Path, ...]
    extensions: Tuple[str, ...] = field(default_factory=_default_extensions)
    name_directive_pattern: Pattern[str] = field(default_factory=_default_pattern)
    case_insensitive_names: bool = True
    max_depth: int = 50
    content_var_name: str = "content"
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        directories = self.directories
        if isinstance(directories, (str, Path)):
            directories = (directories,)
        if not directories:
            raise ConfigurationError("TemplateEngine requires at least one directory to scan.")
        object.__setattr__(self, "directories", tuple(Path(d) for d in directories))
        object.__setattr__(self, "extensions", tuple(str(e) for e in self.extensions))
        object.__setattr__(self, "name_directive_pattern", _compile_pattern(self.name_directive_pattern))
        if self.max_depth < 0:
            raise ConfigurationError("maxDepth must not be negative", context={"max_depth": self.max_depth})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, base_dir: Optional[Path] = None) -> "EngineConfig":
        """Build a config from a user mapping merged over the bundled defaults.

        Args:
            data: Settings using camelCase or snake_case keys
            base_dir: Directory that relative ``directories`` resolve against

        Raises:
            ConfigurationError: On unknown keys, schema violations or an
                empty directory list
        """
        user = _to_camel(data)

        # A precompiled pattern cannot go through the JSON schema.
        pattern: Optional[Pattern[str]] = None
        if isinstance(user.get("nameDirectivePattern"), re.Pattern):
            pattern = user.pop("nameDirectivePattern")

        user_dirs = user.get("directories")
        if isinstance(user_dirs, (str, Path)):
            user["directories"] = [user_dirs]
        if user.get("directories") is not None:
            user["directories"] = [str(d) for d in user["directories"]]

        merged = deep_merge(_defaults(), user)
        validate_config(merged)

        directories = [_resolve_dir(d, base_dir) for d in merged["directories"]]
        return cls(
            directories=tuple(directories),
            extensions=tuple(merged["extensions"]),
            name_directive_pattern=pattern or merged["nameDirectivePattern"],
            case_insensitive_names=bool(merged["caseInsensitiveNames"]),
            max_depth=int(merged["maxDepth"]),
            content_var_name=str(merged["contentVarName"]),
            encoding=str(merged["encoding"]),
        )


def _to_camel(data: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in (data or {}).items():
        if key in _CAMEL_TO_SNAKE:
            out[key] = value
        elif key in _KEY_MAP:
            out[_KEY_MAP[key]] = value
        else:
            # Left in place so schema validation reports it.
            out[key] = value
    return out


def _resolve_dir(raw: str, base_dir: Optional[Path]) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path


def validate_config(config: Mapping[str, Any]) -> None:
    """Validate a merged config mapping against the bundled JSON schema.

    Raises:
        ConfigurationError: With every violation listed in ``context["errors"]``
    """
    schema = read_yaml("schemas", "config.schema.yaml")
    validator = Draft202012Validator(schema)
    errors: List[str] = []
    for err in sorted(validator.iter_errors(dict(config)), key=lambda e: list(e.path)):
        location = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"{location}: {err.message}")
    if errors:
        if any(e.startswith("directories") or "'directories'" in e for e in errors):
            summary = "TemplateEngine requires at least one directory to scan."
        else:
            summary = "Invalid engine configuration"
        raise ConfigurationError(f"{summary} ({'; '.join(errors)})", context={"errors": errors})


def load_config(path: Union[str, Path]) -> EngineConfig:
    """Load an :class:`EngineConfig` from a YAML file.

    Relative template directories are resolved against the file's folder.

    Args:
        path: YAML file path

    Returns:
        Validated EngineConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable, not a mapping
            or fails validation
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigurationError(f"Config file not found: {cfg_path}", context={"path": str(cfg_path)})
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {cfg_path}: {exc}", context={"path": str(cfg_path)}) from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Config file must contain a mapping: {cfg_path}",
            context={"path": str(cfg_path)},
        )
    logger.debug("Loaded engine config from %s", cfg_path)
    return EngineConfig.from_mapping(data, base_dir=cfg_path.parent.resolve())


def coerce_config(config: Union[EngineConfig, Mapping[str, Any], Iterable[Union[str, Path]]]) -> EngineConfig:
    """Accept an EngineConfig, a settings mapping or a bare directory list."""
    if isinstance(config, EngineConfig):
        return config
    if isinstance(config, Mapping):
        return EngineConfig.from_mapping(config)
    if isinstance(config, (str, Path)):
        return EngineConfig(directories=(Path(config),))
    return EngineConfig(directories=tuple(Path(d) for d in config))


__all__ = ["EngineConfig", "load_config", "validate_config", "coerce_config"]
