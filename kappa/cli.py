"""Command-line driver: read a whole program, run it, stop at the first error."""

from __future__ import annotations

import argparse
import logging
import sys

from kappa import __version__
from kappa.config import get_log_level, get_recursion_limit
from kappa.diagnostics import format_error
from kappa.errors import KappaError
from kappa.interpreter import Interpreter
from kappa.types.result import Err

logger = logging.getLogger(__name__)


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kappa",
        description="Run a kappa program read from a file or standard input.",
    )
    parser.add_argument(
        "program_file",
        nargs="?",
        default="-",
        help="program to run (default: standard input)",
    )
    parser.add_argument("--debug", action="store_true", help="log parse and evaluation steps")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(source: str, filename: str = "<stdin>") -> int:
    """Run `source`, returning the process exit status."""
    try:
        result = Interpreter().eval(source)
    except RecursionError:
        error = KappaError("maximum recursion depth exceeded")
        print(format_error(error, source, filename), file=sys.stderr)
        return 1
    if isinstance(result, Err):
        print(format_error(result.error, source, filename), file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = create_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else get_log_level())

    if args.program_file == "-":
        source, filename = sys.stdin.read(), "<stdin>"
    else:
        filename = args.program_file
        try:
            with open(filename, encoding="utf-8") as program_file:
                source = program_file.read()
        except OSError as e:
            error = KappaError(f"{filename!r} could not be opened: {e.strerror}")
            print(format_error(error), file=sys.stderr)
            return 1
    logger.debug("read %d characters from %s", len(source), filename)

    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))
    return run(source, filename)
