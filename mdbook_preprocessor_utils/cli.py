"""Command line protocol spoken between mdBook and a preprocessor.

``<command> supports <renderer>`` answers through the exit status. Without a
subcommand the ``[context, book]`` pair is read from stdin and the processed
book is written to stdout as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import IO, List, Optional, Type

from . import __version__
from .errors import PreprocessorError
from .context import parse_input
from .processor import DriverOptions, PreprocessorDriver, SimplePreprocessor

LOG_ENV = "MDBOOK_LOG"
LOG_FORMAT = "%(asctime)s [%(levelname)s] (%(name)s): %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_parser(name: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"mdbook-{name}",
        description=f"mdBook preprocessor '{name}'. Reads [context, book] JSON from stdin.",
    )
    parser.add_argument("-j", "--jobs", type=int, help="Number of chapters processed in parallel")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print warnings and errors")
    parser.add_argument("--version", action="version", version=f"mdbook-{name} {__version__}")

    subparsers = parser.add_subparsers(dest="command")
    supports = subparsers.add_parser("supports", help="Check whether a renderer is supported")
    supports.add_argument("renderer", help="Renderer name, e.g. html")
    return parser


def configure_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(os.getenv(LOG_ENV, "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO
    # stdout carries the processed book, so logs go to stderr.
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, stream=sys.stderr)


def handle_supports(preprocessor_cls: Type[SimplePreprocessor], renderer: str) -> int:
    return 0 if preprocessor_cls.supports_renderer(renderer) else 1


def handle_preprocessing(driver: PreprocessorDriver, stdin: IO[str], stdout: IO[str]) -> None:
    ctx, book = parse_input(stdin)
    processed = driver.run(ctx, book)
    json.dump(processed.to_json(), stdout)
    stdout.flush()


def main(
    preprocessor_cls: Type[SimplePreprocessor],
    argv: Optional[List[str]] = None,
    *,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
) -> int:
    parser = build_parser(preprocessor_cls.name())
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if args.command == "supports":
        return handle_supports(preprocessor_cls, args.renderer)

    try:
        driver = PreprocessorDriver(preprocessor_cls, DriverOptions(max_workers=args.jobs))
        handle_preprocessing(driver, stdin or sys.stdin, stdout or sys.stdout)
    except (PreprocessorError, OSError, ValueError) as exc:
        logging.getLogger(__name__).error(str(exc))
        return 1
    return 0


__all__ = ["build_parser", "configure_logging", "main"]
