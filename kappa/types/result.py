"""
Result type for kappa.

Parsing and evaluation never raise for language-level failures: every parser
and the evaluator return an `Ok` or an `Err`, and the caller decides what to do
with the failure. The error carried by an `Err` is normally a KappaError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, TypeVar, Union

from kappa.types.option import Nothing, Option, Some, unwrap_some

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful computation."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents a failed computation."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]


def and_then(result: Result[T, E], f: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Feed the value of an Ok into `f`; an Err passes through untouched."""
    if isinstance(result, Ok):
        return f(result.value)
    return result


def map_ok(result: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:
    return and_then(result, lambda value: Ok(f(value)))


def map_err(result: Result[T, E], f: Callable[[E], F]) -> Result[T, F]:
    if isinstance(result, Err):
        return Err(f(result.error))
    return result


def unwrap(result: Result[T, E]) -> T:
    """Return the value of an Ok, raising the carried error of an Err."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result.error, BaseException):
        raise result.error
    raise ValueError(f"Called unwrap on Err: {result.error}")


def unwrap_or_else(result: Result[T, E], f: Callable[[], T]) -> T:
    return result.value if isinstance(result, Ok) else f()


def unwrap_or(result: Result[T, E], default: T) -> T:
    return unwrap_or_else(result, lambda: default)


def discard_err(result: Result[T, E]) -> Option[T]:
    return Some(result.value) if isinstance(result, Ok) else Nothing


def first(results: Iterable[Callable[[], Result[T, E]]]) -> Result[T, E]:
    """Run each thunk in order and return the first Ok.

    When every thunk fails, the error of the last one is returned; no attempt
    is made to pick the most specific failure.
    """
    error: Option[E] = Nothing
    attempted = False
    for thunk in results:
        attempted = True
        result = thunk()
        if isinstance(result, Ok):
            return result
        error = Some(result.error)
    if not attempted:
        raise ValueError("first must receive at least one result")
    return Err(unwrap_some(error))
