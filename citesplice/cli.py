#!/usr/bin/env python3
"""citesplice CLI - resolve citations in a Pandoc JSON document.

Usage:
    pandoc paper.md -t json | citesplice | pandoc -f json -o paper.pdf
    citesplice --version

The document's ``meta`` section must name the CSL style (``csl``) and the
bibliography file (``bibliography``). ``nocite`` entries are added to the
bibliography without being rendered.
"""

import argparse
import logging
import sys

from .config import Config
from .exceptions import CitespliceError, InputError
from .pipeline import CitationPipeline
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def get_version():
    """Get package version."""
    from citesplice import __version__
    return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="citesplice",
        description="Replace citations in a Pandoc JSON document read from stdin.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--env-file", help="Load configuration from this .env file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def read_input() -> str:
    """Read all of standard input as UTF-8.

    Raises:
        InputError: If the input is not valid UTF-8
    """
    data = sys.stdin.buffer.read()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"Input is not valid UTF-8: {e}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env(args.env_file)
        level = logging.DEBUG if args.verbose else config.log_level_value
    except CitespliceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(level=level, log_file=config.log_file)

    try:
        output = CitationPipeline(config).run(read_input())
    except CitespliceError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.buffer.write(output.encode("utf-8"))
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
