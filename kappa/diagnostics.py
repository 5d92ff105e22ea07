"""Error reports for the command-line driver.

Syntax errors are reported with the file, line and column where parsing
stopped, followed by the offending line and a caret.
"""

from __future__ import annotations

from termcolor import colored

from kappa.errors import KappaError, KappaSyntaxError

ERROR = "red"


def position(source: str, remaining: str) -> tuple[int, int]:
    """1-based (line, column) of the point where `remaining` starts in `source`."""
    offset = max(len(source) - len(remaining), 0)
    consumed = source[:offset]
    line = consumed.count("\n") + 1
    column = offset - (consumed.rfind("\n") + 1) + 1
    return line, column


def diagnose(source: str, line: int, column: int) -> str:
    """Offending source line with a caret under `column`."""
    lines = source.split("\n")
    text = lines[line - 1] if line <= len(lines) else ""
    diagnosis = "  " + text + "\n"
    diagnosis += "  " + " " * (column - 1) + colored("^", ERROR, attrs=["bold"])
    return diagnosis


def format_error(error: KappaError, source: str = "", filename: str = "<stdin>") -> str:
    message = colored("error: ", ERROR, attrs=["bold"]) + str(error)
    if isinstance(error, KappaSyntaxError):
        line, column = position(source, error.remaining)
        location = colored(f"{filename}:{line}:{column}: ", attrs=["bold"])
        return location + message + "\n" + diagnose(source, line, column)
    return message

