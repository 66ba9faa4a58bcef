"""
Stencil render command.

SUMMARY: Render a template (optionally inside a layout)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from stencil.cli import (
    OutputFormatter,
    add_config_flag,
    add_dir_flag,
    add_json_flag,
    build_engine,
    load_data_file,
)
from stencil.core.exceptions import StencilError

SUMMARY = "Render a template (optionally inside a layout)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", help="Template name")
    add_dir_flag(parser)
    add_config_flag(parser)
    parser.add_argument("--data", type=str, help="JSON file with render data")
    parser.add_argument("--layout", type=str, help="Layout template wrapping the output")
    parser.add_argument(
        "--content-var",
        dest="content_var",
        type=str,
        help="Layout variable receiving the rendered template (default from config)",
    )
    parser.add_argument("--output", "-o", type=str, help="Write to this file instead of stdout")
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
        data = load_data_file(args.data) if args.data else {}
        if args.layout:
            html = engine.render_with_layout(args.layout, args.name, data, args.content_var)
        else:
            html = engine.render(args.name, data)
    except StencilError as e:
        formatter.error(e, error_code="render_error")
        return 1

    if args.output:
        Path(args.output).write_text(html, encoding="utf-8")
        if formatter.json_mode:
            formatter.json_output({"template": args.name, "output": args.output, "length": len(html)})
        return 0

    if formatter.json_mode:
        formatter.json_output({"template": args.name, "html": html})
    else:
        sys.stdout.write(html)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
