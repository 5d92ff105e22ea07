"""Runtime environment for kappa.

An Environment maps identifiers to evaluated values and is never mutated once
it has been handed out: binding a name produces a new Environment holding the
old entries plus the new pair. Closures therefore capture a fixed snapshot, and
anyone still holding the previous Environment keeps seeing the old bindings.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterator, Mapping

from kappa.errors import KappaUnboundSymbol
from kappa.types.option import Nothing, Option, Some
from kappa.types.result import Err, Ok, Result

if TYPE_CHECKING:
    from kappa.types.values import Value


class Environment:
    """Immutable mapping from identifiers to kappa values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Mapping[str, Value] | None = None):
        self.vars: Mapping[str, Value] = MappingProxyType(dict(bindings or {}))

    def get(self, name: str) -> Option[Value]:
        if name in self.vars:
            return Some(self.vars[name])
        return Nothing

    def lookup(self, name: str) -> Result[Value, KappaUnboundSymbol]:
        """Look up the value bound to `name`, failing with KappaUnboundSymbol."""
        if name in self.vars:
            return Ok(self.vars[name])
        return Err(KappaUnboundSymbol(f"variable not found {name}"))

    def extend(self, name: str, value: Value) -> Environment:
        """Return a new Environment with `name` bound to `value`."""
        return Environment({**self.vars, name: value})

    def extend_recursive(
        self, name: str, make: Callable[[Environment], Value]
    ) -> tuple[Environment, Value]:
        """Bind `name` to a value that must see the binding of `name` itself.

        `make` receives the new Environment before `name` is bound in it and
        returns the value to bind (typically a closure over that Environment).
        The binding is filled in before the Environment is returned, and it is
        not changed afterwards.
        """
        bindings = dict(self.vars)
        env = Environment.__new__(Environment)
        env.vars = MappingProxyType(bindings)
        value = make(env)
        bindings[name] = value
        return env, value

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write the bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(self.vars))
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment ")
            self._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()
