"""CLI entrypoint for implgen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Sequence

from .config import load_config
from .driver import BuildDriver
from .errors import ImplerError
from .logging import configure_logging


class UsageError(Exception):
    """Raised instead of exiting when the command line is malformed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="implgen",
        usage="%(prog)s [options] <type> <output-root>\n"
        "       %(prog)s [options] -jar <type> <archive>",
        description="Generate a compilable stub implementation of a Java class or interface.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .implgen.yml (defaults to the current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="FILE",
        help="Append a DEBUG-level build log to FILE.",
    )
    parser.add_argument(
        "--catalog",
        dest="catalogs",
        action="append",
        type=Path,
        default=[],
        metavar="FILE",
        help="Type catalog to load; may be given more than once.",
    )
    parser.add_argument(
        "--source-path",
        dest="source_paths",
        action="append",
        type=Path,
        default=[],
        metavar="DIR",
        help="Java source root to read declarations from; may be given more than once.",
    )
    parser.add_argument(
        "-jar",
        dest="jar",
        action="store_true",
        help="Compile the implementation and package it into a jar archive.",
    )
    parser.add_argument("arguments", nargs="*", help=argparse.SUPPRESS)
    return parser


def _parse(parser: argparse.ArgumentParser, argv: Sequence[str]) -> argparse.Namespace:
    args = parser.parse_args(list(argv))
    if len(args.arguments) != 2:
        raise UsageError(f"expected 2 arguments, got {len(args.arguments)}")
    if not all(item.strip() for item in args.arguments):
        raise UsageError("arguments must not be empty")
    return args


def main(argv: List[str] | None = None) -> int:
    """Run implgen and return the process exit status."""
    parser = _build_parser()
    try:
        args = _parse(parser, sys.argv[1:] if argv is None else argv)
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"implgen: error: {exc}", file=sys.stderr)
        return 2

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        print(f"implgen: cannot open log file {args.log_file}: {exc}", file=sys.stderr)
        return 1
    type_name, target = args.arguments

    try:
        config = load_config(args.config or Path.cwd())
        config.sources.catalogs.extend(args.catalogs)
        config.sources.source_paths.extend(args.source_paths)
        driver = BuildDriver.from_config(config)
        if args.jar:
            result = driver.implement_jar(type_name, Path(target))
        else:
            result = driver.implement(type_name, Path(target))
    except ImplerError as exc:
        print(f"implgen: {exc}", file=sys.stderr)
        return 1

    print(_relativize(result))
    return 0


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    sys.exit(main())
