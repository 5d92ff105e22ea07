"""Optional values for kappa.

`Nothing` is a falsy singleton in the manner of a Nil sentinel; `Some` wraps a
present value. Used where absence is an expected outcome rather than an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Some(Generic[T]):
    value: T

    def __bool__(self) -> bool:
        return True


class NothingType:
    _instance: NothingType | None = None

    def __new__(cls) -> NothingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Nothing"
    def __bool__(self): return False


Nothing = NothingType()

Option = Union[Some[T], NothingType]


def map_some(option: Option[T], f: Callable[[T], U]) -> Option[U]:
    return and_then_some(option, lambda value: Some(f(value)))


def and_then_some(option: Option[T], f: Callable[[T], Option[U]]) -> Option[U]:
    if isinstance(option, Some):
        return f(option.value)
    return Nothing


def unwrap_some(option: Option[T]) -> T:
    if isinstance(option, Some):
        return option.value
    raise ValueError("Called unwrap_some on Nothing")


def unwrap_some_or(option: Option[T], default: T) -> T:
    return option.value if isinstance(option, Some) else default
