"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --dir flag for template directories."""
    parser.add_argument(
        "--dir",
        "-d",
        dest="dirs",
        action="append",
        default=[],
        metavar="DIR",
        help="Template directory (repeatable; later directories win name clashes)",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag pointing at a YAML engine config."""
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="YAML engine config file",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


__all__ = ["add_json_flag", "add_dir_flag", "add_config_flag", "add_verbose_flag"]
