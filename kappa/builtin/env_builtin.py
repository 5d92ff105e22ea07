"""Built-in functions for the kappa runtime environment.

Every builtin takes exactly one argument. Operations of several arguments
are curried: applying `add` to a number returns another Builtin waiting for
the second operand. Argument checks happen as soon as the argument they
concern arrives, and failures are returned as Err values.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from kappa.errors import KappaError, KappaFieldError, KappaTypeError
from kappa.debug_utils.pprint import render
from kappa.evaluation.evaluator import call_function
from kappa.types.environment import Environment
from kappa.types.result import Err, Ok, Result
from kappa.types.values import Boolean, Builtin, Function, Number, Object, String, Value

BuiltinResult = Result[Value, KappaError]


def binary(name: str, op: Callable[[Value, Value], BuiltinResult]) -> Builtin:
    """Curry a two-argument operation into nested single-argument builtins."""
    return Builtin(name, lambda a: Ok(Builtin(name, lambda b: op(a, b))))


# -------------------------------
# Arithmetic
# -------------------------------
def arithmetic(name: str, message: str, op: Callable[[int, int], int]):
    """`message` is formatted with the tags of the operands `a` and `b`."""

    def apply(a: Value, b: Value) -> BuiltinResult:
        if not isinstance(a, Number) or not isinstance(b, Number):
            return Err(KappaTypeError(f"{name}: " + message.format(a=a.tag, b=b.tag)))
        return Ok(Number(op(a.value, b.value)))

    return apply


add = arithmetic("add", "tried to add {a} to {b}", lambda a, b: a + b)
sub = arithmetic("sub", "tried to subtract {b} from {a}", lambda a, b: a - b)
mul = arithmetic("mul", "tried to multiply {a} with {b}", lambda a, b: a * b)


# -------------------------------
# Comparison
# -------------------------------
COMPARABLE = (Number, String, Boolean)


def comparison(name: str, op: Callable[[object, object], bool]):
    def apply(a: Value, b: Value) -> BuiltinResult:
        if a.tag != b.tag:
            return Err(KappaTypeError(f"{name}: tried to compare {a.tag} with {b.tag}"))
        if not isinstance(a, COMPARABLE):
            return Err(KappaTypeError(f"{name}: cannot compare {a.tag}"))
        return Ok(Boolean(op(a.value, b.value)))

    return apply


eq = comparison("eq", lambda a, b: a == b)
le = comparison("le", lambda a, b: a < b)


# -------------------------------
# Objects
# -------------------------------
def get_field(field: Value) -> BuiltinResult:
    """getField name obj: the value of field `name` of `obj`."""
    if not isinstance(field, String):
        return Err(KappaTypeError(f"getField: expected string field name, got {field.tag}"))

    def get(obj: Value) -> BuiltinResult:
        if not isinstance(obj, Object):
            return Err(KappaTypeError(f"getField: tried to access field of {obj.tag}"))
        value = obj.get(field.value)
        if not value:
            return Err(KappaFieldError(f"getField: field {field.value} does not exist"))
        return Ok(value.value)

    return Ok(Builtin("getField", get))


def set_field(field: Value) -> BuiltinResult:
    """setField name value obj: a copy of `obj` with `name` set to `value`."""
    if not isinstance(field, String):
        return Err(KappaTypeError(f"setField: expected string field name, got {field.tag}"))

    def with_value(value: Value) -> BuiltinResult:
        def update(obj: Value) -> BuiltinResult:
            if not isinstance(obj, Object):
                return Err(KappaTypeError(f"setField: tried to set field of {obj.tag}"))
            return Ok(obj.with_field(field.value, value))

        return Ok(Builtin("setField", update))

    return Ok(Builtin("setField", with_value))


# -------------------------------
# Control
# -------------------------------
def if_builtin(condition: Value) -> BuiltinResult:
    """if cond onTrue onFalse.

    The selected branch is called with the condition when it is a function
    and returned as it is otherwise. The true branch must be a function.
    """
    if not isinstance(condition, Boolean):
        return Err(KappaTypeError(f"if: cannot use {condition.tag} in if"))

    def on_true(when_true: Value) -> BuiltinResult:
        if not isinstance(when_true, Function):
            return Err(KappaTypeError(f"if: tried to use {when_true.tag} as branch in if"))

        def on_false(when_false: Value) -> BuiltinResult:
            selected = when_true if condition.value else when_false
            if isinstance(selected, Function):
                return call_function(selected, condition)
            return Ok(selected)

        return Ok(Builtin("if", on_false))

    return Ok(Builtin("if", on_true))


# -------------------------------
# Introspection and output
# -------------------------------
def print_builtin(value: Value) -> BuiltinResult:
    """Print the structural rendering of `value`; returns `value` unchanged."""
    print(render(value))
    return Ok(value)


def type_builtin(value: Value) -> BuiltinResult:
    return Ok(String(value.tag))


BUILTINS: Mapping[str, Value] = MappingProxyType(
    {
        "add": binary("add", add),
        "sub": binary("sub", sub),
        "mul": binary("mul", mul),
        "eq": binary("eq", eq),
        "le": binary("le", le),
        "getField": Builtin("getField", get_field),
        "setField": Builtin("setField", set_field),
        "if": Builtin("if", if_builtin),
        "print": Builtin("print", print_builtin),
        "type": Builtin("type", type_builtin),
    }
)


def default_environment() -> Environment:
    return Environment(BUILTINS)
