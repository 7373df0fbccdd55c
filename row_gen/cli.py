"""Command-line entry point.

Usage:
    row-gen myapp.models:User -o myapp/user_mapping.py
    row-gen myapp.models:User --config pyproject.toml -v
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

import structlog

from row_gen.core.config import GeneratorConfig
from row_gen.core.engine import MapperGenerator
from row_gen.core.exceptions import DiscoveryError, RowGenError

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_APPLICABLE = 2


def configure_logging(verbose: bool = False) -> None:
    """Route structlog output to stderr so generated source can go to stdout."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # Resolve sys.stderr per call; it may be swapped after configuration
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
        cache_logger_on_first_use=False,
    )


def load_class(target: str) -> type:
    """Import ``package.module:ClassName`` and return the class.

    Raises:
        DiscoveryError: If the module or class can't be found.
    """
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise DiscoveryError(target, "expected 'module:ClassName'")
    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as e:
        raise DiscoveryError(target, f"cannot import module '{module_name}': {e}") from e
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise DiscoveryError(target, f"'{part}' not found in '{module_name}'") from None
    if not isinstance(obj, type):
        raise DiscoveryError(target, "not a class")
    return obj


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="row-gen",
        description="Generate cursor mapping code for a value class.",
    )
    parser.add_argument("target", help="value class as 'package.module:ClassName'")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="file to write the generated module to (default: stdout)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="TOML file with generator settings ([tool.row-gen] or top level)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = GeneratorConfig.from_toml(args.config) if args.config else GeneratorConfig()
        cls = load_class(args.target)
        unit = MapperGenerator(config).generate(cls)
    except RowGenError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if unit is None:
        print(
            f"error: {args.target} declares no cursor or content values hook",
            file=sys.stderr,
        )
        return EXIT_NOT_APPLICABLE

    if args.output is None:
        sys.stdout.write(unit.source)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(unit.source, encoding="utf-8")
        logger.info("unit_written", target=args.target, path=str(args.output))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
