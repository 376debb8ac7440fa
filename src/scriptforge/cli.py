"""Command line interface for the scriptforge utilities."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import ValidationError

from .config import ScriptConfig, create_builder
from .dialects import DIALECTS
from .errors import ScriptBuilderError
from .schema import BuildScriptDescription, apply_description, load_description

LOGGER = logging.getLogger(__name__)


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    properties: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(
                f"invalid key/value pair '{pair}'. Expected KEY=VALUE syntax."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise argparse.ArgumentTypeError("keys must not be empty")
        properties[key] = value
    return properties


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate build scripts from a JSON description")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug information to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="render a build script description")
    render_parser.add_argument(
        "description",
        type=Path,
        nargs="?",
        help="Path to the JSON description; an empty script is rendered when omitted",
    )
    render_parser.add_argument(
        "--dsl",
        choices=sorted(DIALECTS),
        default="groovy",
        help="Syntax of the generated script",
    )
    render_parser.add_argument(
        "-p",
        "--property",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Extra top-level string property assignments",
    )
    render_parser.add_argument(
        "--incubating",
        action="store_true",
        help="Warn in the header that the script uses incubating APIs",
    )
    render_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the script into this directory instead of stdout",
    )

    return parser


def _handle_render(args: argparse.Namespace) -> int:
    config = ScriptConfig.from_dsl(args.dsl, use_incubating_apis=args.incubating)
    properties = _parse_key_value_pairs(args.property)
    if args.description is not None:
        description = load_description(args.description)
    else:
        description = BuildScriptDescription()

    builder = apply_description(description, create_builder(config))
    for key, value in properties.items():
        builder.property_assignment(None, key, value)
    rendered = builder.generate()

    if args.output:
        target = config.file_path(args.output)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered, encoding="utf-8")
        LOGGER.info("wrote %s", target)
        print(f"Build script written to {target}")
    else:
        sys.stdout.write(rendered)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if args.command == "render":
        try:
            return _handle_render(args)
        except (
            ScriptBuilderError,
            ValidationError,
            ValueError,
            argparse.ArgumentTypeError,
            FileNotFoundError,
        ) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
