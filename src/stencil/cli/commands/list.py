"""
Stencil list command.

SUMMARY: List registered template names
"""

from __future__ import annotations

import argparse
import sys

from stencil.cli import OutputFormatter, add_config_flag, add_dir_flag, add_json_flag, build_engine
from stencil.core.exceptions import StencilError

SUMMARY = "List registered template names"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_dir_flag(parser)
    add_config_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
    except StencilError as e:
        formatter.error(e, error_code="list_error")
        return 1

    names = engine.list_template_names()
    if formatter.json_mode:
        formatter.json_output({"templates": names, "count": len(names)})
    elif not names:
        formatter.text("No templates found.")
    else:
        for name in names:
            formatter.text(name)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
