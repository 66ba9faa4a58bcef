"""Engine configuration: defaults, YAML loading and schema validation."""
from __future__ import annotations

from .manager import EngineConfig, coerce_config, load_config, validate_config

__all__ = ["EngineConfig", "coerce_config", "load_config", "validate_config"]
