"""Tree-walking evaluator for kappa.

`evaluate(env, expr)` returns either Ok((env, value)) or Err(KappaError). The
returned environment is the one the next sibling expression should see: only
declarations and named functions extend it. Runtime errors are returned rather
than raised, and the first one stops `interpret_many`.
"""

from __future__ import annotations

import logging

from kappa.errors import KappaError, KappaTypeError
from kappa.types.environment import Environment
from kappa.types.expr import (
    BooleanLiteral,
    CallExpr,
    DeclExpr,
    Expr,
    FuncExpr,
    Literal,
    LiteralExpr,
    NamedFuncExpr,
    NumberLiteral,
    ObjExpr,
    StringLiteral,
    VariableExpr,
)
from kappa.types.result import Err, Ok, Result, and_then, map_ok
from kappa.types.values import Boolean, Builtin, Function, Number, Object, String, Value

logger = logging.getLogger(__name__)

Evaluation = Result[tuple[Environment, Value], KappaError]


def literal_value(literal: Literal) -> Value:
    match literal:
        case NumberLiteral(value=n):
            return Number(n)
        case StringLiteral(value=s):
            return String(s)
        case BooleanLiteral(value=b):
            return Boolean(b)
    raise TypeError(f"unknown literal {literal!r}")


def evaluate(env: Environment, expr: Expr) -> Evaluation:
    """Evaluate `expr` in `env`."""
    match expr:
        case LiteralExpr(value=literal):
            return Ok((env, literal_value(literal)))

        case VariableExpr(ident=name):
            return map_ok(env.lookup(name), lambda value: (env, value))

        case CallExpr(f=callee, arg=arg):
            return evaluate_call(env, callee, arg)

        case DeclExpr(ident=name, value=value_expr):
            return map_ok(
                evaluate_value(env, value_expr),
                lambda value: (env.extend(name, value), value),
            )

        case FuncExpr(arg=arg, body=body):
            return Ok((env, Function(arg, body, env)))

        case NamedFuncExpr(ident=name, func=func):
            return evaluate_named_func(env, name, func)

        case ObjExpr(fields=fields):
            return evaluate_object(env, fields)

    raise TypeError(f"unknown expression {expr!r}")


def evaluate_value(env: Environment, expr: Expr) -> Result[Value, KappaError]:
    """Evaluate `expr` for its value only, dropping any environment change."""
    return map_ok(evaluate(env, expr), lambda step: step[1])


def evaluate_call(env: Environment, callee: Expr, arg: Expr) -> Evaluation:
    """Single-argument application.

    The argument is evaluated in the caller's environment. A builtin call
    yields the environment left by evaluating the callee, a function call
    yields the caller's environment unchanged.
    """
    result = evaluate(env, callee)
    if isinstance(result, Err):
        return result
    callee_env, fn = result.value

    if isinstance(fn, Builtin):
        return map_ok(
            and_then(evaluate_value(env, arg), fn.apply),
            lambda value: (callee_env, value),
        )
    if isinstance(fn, Function):
        return map_ok(
            and_then(evaluate_value(env, arg), lambda value: call_function(fn, value)),
            lambda value: (env, value),
        )
    return Err(KappaTypeError(f"cannot call {fn.tag}"))


def call_function(fn: Function, arg: Value) -> Result[Value, KappaError]:
    """Run the body of `fn` in its captured environment plus the argument.

    Bindings made inside the body are scoped to this call.
    """
    return evaluate_value(fn.env.extend(fn.arg, arg), fn.body)


def evaluate_named_func(env: Environment, name: str, func: FuncExpr) -> Evaluation:
    """Bind `name` to a function whose closure includes `name` itself."""
    extended, fn = env.extend_recursive(
        name, lambda self_env: Function(func.arg, func.body, self_env)
    )
    return Ok((extended, fn))


def evaluate_object(
    env: Environment, fields: tuple[tuple[str, Expr], ...]
) -> Evaluation:
    values: dict[str, Value] = {}
    for name, field_expr in fields:
        result = evaluate_value(env, field_expr)
        if isinstance(result, Err):
            return result
        # Later duplicates overwrite earlier ones.
        values[name] = result.value
    return Ok((env, Object(values)))


def interpret_many(
    env: Environment, exprs: list[Expr]
) -> Result[tuple[Environment, list[Value]], KappaError]:
    """Evaluate top-level expressions in order, threading the environment."""
    values: list[Value] = []
    for expr in exprs:
        result = evaluate(env, expr)
        if isinstance(result, Err):
            logger.debug("runtime error: %s", result.error)
            return result
        env, value = result.value
        logger.debug("%r => %r", expr, value)
        values.append(value)
    return Ok((env, values))
