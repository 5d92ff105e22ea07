"""
  Parser combinators

A parser is a plain function from the remaining input to a Result:

    Ok((remaining_input, value))   on success
    Err(KappaSyntaxError)          on failure

Parsers never mutate their input and never raise for a failed parse; every
combinator below builds a new parser out of existing ones. Choice (`any_of`)
backtracks by retrying each alternative on the same input, with no
memoization, so grammars are expected to make alternatives diverge early.

Parsers may carry a `description` attribute, used when building error
messages (see `describe`).
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, TypeVar

from kappa.errors import KappaSyntaxError
from kappa.types.result import Err, Ok, Result, and_then as result_and_then, first
from kappa.types.result import map_err as result_map_err, map_ok

T = TypeVar("T")
U = TypeVar("U")

Parser = Callable[[str], Result[tuple[str, Any], KappaSyntaxError]]

WHITESPACE = (" ", "\n")


def describe(parser: Parser) -> str:
    """Human-readable name of a parser for error messages."""
    description = getattr(parser, "description", None)
    if description:
        return description
    return getattr(parser, "__name__", repr(parser))


def labelled(description: str, parser: Parser) -> Parser:
    """Wrap `parser` so that errors and `describe` refer to it by name."""

    def parse(source: str):
        return parser(source)

    parse.description = description
    return parse


def lift(result: Result[T, KappaSyntaxError]) -> Parser:
    """Parser that consumes nothing and yields `result`."""
    return lift_lazy(lambda: result)


def lift_lazy(thunk: Callable[[], Result[T, KappaSyntaxError]]) -> Parser:
    """Parser that consumes nothing and yields the result of `thunk()`."""

    def parse(source: str):
        return map_ok(thunk(), lambda value: (source, value))

    return parse


def succeed(value: T) -> Parser:
    return lift(Ok(value))


def fmap(f: Callable[[T], U], parser: Parser) -> Parser:
    """Transform the value of a successful parse; failures pass through."""

    def parse(source: str):
        return map_ok(parser(source), lambda step: (step[0], f(step[1])))

    parse.description = describe(parser)
    return parse


def and_then(f: Callable[[T], Parser], parser: Parser) -> Parser:
    """Monadic bind: feed the parsed value into `f` to pick the next parser."""

    def parse(source: str):
        return result_and_then(parser(source), lambda step: f(step[1])(step[0]))

    return parse


def map_err(
    f: Callable[[str, KappaSyntaxError], KappaSyntaxError], parser: Parser
) -> Parser:
    """Rewrite the error of a failed parse. `f` also sees the original input."""

    def parse(source: str):
        return result_map_err(parser(source), lambda error: f(source, error))

    parse.description = describe(parser)
    return parse


def any_of(parsers: list[Parser]) -> Parser:
    """Ordered choice.

    Each parser is tried on the same input in order and the first success
    wins. When all of them fail, the error of the last one is returned.
    With no alternatives at all every parse fails.
    """
    parsers = list(parsers)

    def parse(source: str):
        if not parsers:
            return Err(KappaSyntaxError("no alternatives to choose from", source))
        return first(lambda p=p: p(source) for p in parsers)

    parse.description = " | ".join(describe(p) for p in parsers)
    return parse


def sequence(parsers: list[Parser]) -> Parser:
    """Run parsers one after another, collecting their values in a list."""
    parsers = list(parsers)

    def parse(source: str):
        values = []
        rest = source
        for parser in parsers:
            result = parser(rest)
            if isinstance(result, Err):
                return result
            rest, value = result.value
            values.append(value)
        return Ok((rest, values))

    return parse


def many(parser: Parser) -> Parser:
    """Zero or more repetitions. Never fails.

    Stops at the first failure, leaving the input where that attempt started.
    A success that consumes nothing is recorded once and ends the repetition.
    """

    def parse(source: str):
        values = []
        rest = source
        while True:
            result = parser(rest)
            if isinstance(result, Err):
                break
            remaining, value = result.value
            values.append(value)
            if len(remaining) == len(rest):
                break
            rest = remaining
        return Ok((rest, values))

    parse.description = f"many({describe(parser)})"
    return parse


def one_or_more(parser: Parser) -> Parser:
    """Like `many`, but fails when there is not at least one repetition."""

    def check(values: list) -> Parser:
        if values:
            return succeed(values)
        return lambda source: Err(
            KappaSyntaxError(
                f"expected one or more of {describe(parser)} but got 0", source
            )
        )

    return labelled(f"one_or_more({describe(parser)})", and_then(check, many(parser)))


def excluding(value: T, parser: Parser) -> Parser:
    """Succeed only when `parser` yields something other than `value`."""

    def parse(source: str):
        result = parser(source)
        if isinstance(result, Ok) and result.value[1] == value:
            return Err(KappaSyntaxError(f"not {value}", source))
        return result

    parse.description = f"not {value!r}"
    return parse


def surrounded(open_: Parser, close: Parser, parser: Parser) -> Parser:
    """Parse `open_`, `parser`, `close` and keep only the middle value."""
    return and_then(
        lambda _: and_then(lambda value: fmap(lambda _: value, close), parser), open_
    )


def recursive(thunk: Callable[[], Parser]) -> Parser:
    """Defer obtaining the parser until parse time.

    Lets grammar rules refer to rules that are defined later in the module.
    """

    def parse(source: str):
        return thunk()(source)

    return parse


class Forward:
    """A parser slot that is filled in after the rules referring to it exist.

    Mutually recursive rules are built against the Forward and `define` is
    called once the real parser is available.
    """

    __slots__ = ("description", "parser")

    def __init__(self, description: str = "forward"):
        self.description = description
        self.parser: Parser | None = None

    def define(self, parser: Parser) -> Forward:
        if self.parser is not None:
            raise ValueError(f"{self.description} is already defined")
        self.parser = parser
        return self

    def __call__(self, source: str):
        if self.parser is None:
            raise ValueError(f"{self.description} used before it was defined")
        return self.parser(source)


# ----------------------
# Character level
# ----------------------

def any_char(source: str):
    if not source:
        return Err(KappaSyntaxError("expected char found empty string", source))
    return Ok((source[1:], source[0]))


any_char.description = "any character"


def char(expected: str) -> Parser:
    def check(found: str) -> Parser:
        if found == expected:
            return succeed(found)
        return lambda rest: Err(
            KappaSyntaxError(f"expected {expected!r} found {found!r}", found + rest)
        )

    def at_end(source: str, error: KappaSyntaxError) -> KappaSyntaxError:
        if source:
            return error
        return KappaSyntaxError(f"expected {expected!r} found end of input", source)

    parse = map_err(at_end, and_then(check, any_char))
    parse.description = repr(expected)
    return parse


def word(expected: str) -> Parser:
    parse = map_err(
        lambda source, _: KappaSyntaxError(
            f"expected {expected!r} found {source[:len(expected)]!r}", source
        ),
        fmap("".join, sequence([char(c) for c in expected])),
    )
    parse.description = repr(expected)
    return parse


digit = labelled("digit", fmap(int, any_of([char(str(i)) for i in range(10)])))


uint = labelled(
    "unsigned integer",
    fmap(lambda digits: reduce(lambda number, d: number * 10 + d, digits), one_or_more(digit)),
)

ws = labelled("whitespace", fmap("".join, many(any_of([char(c) for c in WHITESPACE]))))


def end_of_input(source: str):
    if source:
        return Err(KappaSyntaxError(f"unexpected input {source[:20]!r}", source))
    return Ok((source, None))


end_of_input.description = "end of input"
