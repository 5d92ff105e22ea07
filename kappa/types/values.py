"""Runtime values for kappa.

Each value class carries a `tag` naming its kind; the `type` builtin reports
it and type errors quote it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Mapping, Union

from kappa.types.option import Nothing, Option, Some

if TYPE_CHECKING:
    from kappa.errors import KappaError
    from kappa.types.environment import Environment
    from kappa.types.expr import Expr
    from kappa.types.result import Result


@dataclass(frozen=True)
class Number:
    value: int
    tag: ClassVar[str] = "number"


@dataclass(frozen=True)
class String:
    value: str
    tag: ClassVar[str] = "string"


@dataclass(frozen=True)
class Boolean:
    value: bool
    tag: ClassVar[str] = "boolean"


@dataclass(frozen=True, eq=False)
class Function:
    """A single-argument closure: formal argument, body and captured env."""

    arg: str
    body: Expr
    env: Environment = field(repr=False)
    tag: ClassVar[str] = "func"


@dataclass(frozen=True, eq=False)
class Builtin:
    """A native single-argument operation.

    Multi-argument builtins return another Builtin until the last argument
    arrives.
    """

    name: str
    fn: Callable[[Value], Result[Value, KappaError]] = field(repr=False)
    tag: ClassVar[str] = "builtin"

    def apply(self, arg: Value) -> Result[Value, KappaError]:
        return self.fn(arg)


@dataclass(frozen=True)
class Object:
    """A record of named fields. Updates build a new Object."""

    fields: Mapping[str, Value]
    tag: ClassVar[str] = "object"

    def get(self, name: str) -> Option[Value]:
        if name in self.fields:
            return Some(self.fields[name])
        return Nothing

    def with_field(self, name: str, value: Value) -> Object:
        return Object({**self.fields, name: value})


Value = Union[Number, String, Boolean, Function, Builtin, Object]
