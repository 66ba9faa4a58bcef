"""
Stencil CLI package.

Sub-commands live in ``commands/`` and are discovered automatically.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Engine construction from parsed arguments
"""
from ._output import OutputFormatter
from ._args import add_config_flag, add_dir_flag, add_json_flag, add_verbose_flag
from ._utils import build_engine, load_data_file

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_config_flag",
    "add_dir_flag",
    "add_json_flag",
    "add_verbose_flag",
    # Utilities
    "build_engine",
    "load_data_file",
]
