"""Command-line entry point for chain resolution."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from compartment.config import build_from_config, build_from_config_file, build_summary
from compartment.core.errors import CompartmentError
from compartment.log import configure_logging, get_logger
from compartment.resolution import SUPPORTED_ORDERINGS

logger = get_logger(__name__)


def run_resolve_cli(argv: Sequence[str] | None = None) -> int:
    """Resolve a manifest selection and emit a JSON summary.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        CLI argument list. When ``None``, process arguments are used.

    Returns
    -------
    int
        Exit code (`0` on success, `1` on resolution or config errors).
    """

    parser = argparse.ArgumentParser(
        prog="compartment",
        description="Resolve component dependencies into an ordered chain and per-type paths.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--config", help="Path to build JSON or YAML config.")
    source.add_argument("--manifest", help="Path to manifest JSON or YAML file.")
    parser.add_argument(
        "--type",
        dest="types",
        action="append",
        default=[],
        metavar="NAME[=ROOT]",
        help="File type to aggregate, optionally with its root path. Repeatable.",
    )
    parser.add_argument(
        "--component",
        dest="components",
        action="append",
        default=[],
        metavar="KEY",
        help="Component to resolve. Repeatable; defaults to the whole manifest.",
    )
    parser.add_argument(
        "--category",
        dest="categories",
        action="append",
        default=[],
        help="Keep only components in this category. Repeatable.",
    )
    parser.add_argument(
        "--ordering",
        choices=SUPPORTED_ORDERINGS,
        default=None,
        help="Chain ordering strategy (default: priority).",
    )
    parser.add_argument("--output", default=None, help="Write the summary JSON here instead of stdout.")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    try:
        if args.config is not None:
            if args.types or args.components or args.categories or args.ordering:
                parser.error("--config cannot be combined with --type/--component/--category/--ordering")
            result = build_from_config_file(args.config)
        else:
            result = build_from_config(_config_from_args(args))
    except (CompartmentError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(build_summary(result), indent=2)
    if args.output is None:
        print(text)
    else:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
        logger.info("summary written to %s", output_path)
    return 0


def main() -> None:
    """Console-script entry point."""

    sys.exit(run_resolve_cli())


def _config_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Translate ad-hoc CLI flags into a build config mapping."""

    types: dict[str, str] = {}
    for item in args.types:
        name, _, root = str(item).partition("=")
        if not name:
            raise ValueError(f"--type needs a name; got {item!r}")
        types[name] = root

    config: dict[str, Any] = {"manifest": str(args.manifest), "types": types}
    if args.components:
        config["components"] = list(args.components)
    if args.categories:
        config["category"] = list(args.categories)
    if args.ordering:
        config["ordering"] = str(args.ordering)
    return config


__all__ = ["main", "run_resolve_cli"]
