"""Shared helpers for CLI commands."""
from __future__ import annotations

import argparse
import dataclasses
import json
from pathlib import Path
from typing import Any

from stencil.core.config import EngineConfig, load_config
from stencil.core.exceptions import ConfigurationError, StencilError
from stencil.core.rendering import TemplateEngine, create_template_engine


def build_engine(args: argparse.Namespace) -> TemplateEngine:
    """Create and load an engine from ``--config`` and ``--dir`` arguments.

    Directories given with ``--dir`` replace those from the config file.

    Raises:
        ConfigurationError: If neither source yields a directory
    """
    dirs = [Path(d) for d in (getattr(args, "dirs", None) or [])]
    config_path = getattr(args, "config", None)
    if config_path:
        config = load_config(config_path)
        if dirs:
            config = dataclasses.replace(config, directories=tuple(dirs))
    elif dirs:
        config = EngineConfig(directories=tuple(dirs))
    else:
        raise ConfigurationError("No template directories: pass --dir or --config")
    return create_template_engine(config)


def load_data_file(path: str) -> Any:
    """Read render data from a JSON file."""
    data_path = Path(path)
    try:
        return json.loads(data_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise StencilError(f"Cannot read data file {data_path}: {exc}", context={"path": str(data_path)}) from exc
    except json.JSONDecodeError as exc:
        raise StencilError(f"Invalid JSON in {data_path}: {exc}", context={"path": str(data_path)}) from exc


__all__ = ["build_engine", "load_data_file"]
