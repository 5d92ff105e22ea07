"""
  kappa grammar

Built entirely from the combinators in kappa.reader.combinators:

    expr      := ws ( "(" (call | expr) ")" | literal | namedFunc | decl
                    | func | variable | obj ) ws
    call      := expr (ws expr)+            -- folded into single-arg calls
    decl      := ident ws "=" ws expr
    func      := (ident ws)* "=>" ws expr   -- curried into single-arg funcs
    namedFunc := ident ws "=" ws func
    obj       := "{" ws (ws ident ws ":" ws expr)* ws "}"
    program   := (ws expr ws)+ <end of input>

The order of the `expr` alternatives is the precedence: `x = 5` must be tried
as a declaration before `x` alone is accepted as a variable. A call is only
reachable between parentheses, because its head is itself an `expr`.
"""

from __future__ import annotations

import logging
import string
from functools import reduce

from kappa.errors import KappaSyntaxError
from kappa.types.expr import (
    PLACEHOLDER_ARG,
    BooleanLiteral,
    CallExpr,
    DeclExpr,
    Expr,
    FuncExpr,
    LiteralExpr,
    NamedFuncExpr,
    NumberLiteral,
    ObjExpr,
    StringLiteral,
    VariableExpr,
)
from kappa.types.result import Err, Ok, Result
from kappa.reader.combinators import (
    Forward,
    Parser,
    and_then,
    any_char,
    any_of,
    char,
    end_of_input,
    excluding,
    fmap,
    labelled,
    many,
    one_or_more,
    sequence,
    surrounded,
    uint,
    word,
    ws,
)

logger = logging.getLogger(__name__)

IDENT_CHARS = string.ascii_letters + "#."


def _then(prefix: Parser, parser: Parser) -> Parser:
    """Parse `prefix`, discard its value, then parse `parser`."""
    return and_then(lambda _: parser, prefix)


def _before(parser: Parser, suffix: Parser) -> Parser:
    """Parse `parser` then `suffix`, keeping the value of `parser`."""
    return and_then(lambda value: fmap(lambda _: value, suffix), parser)


# Referenced by the rules below before it can be built.
expr = Forward("expression")

ident = labelled(
    "identifier", fmap("".join, one_or_more(any_of([char(c) for c in IDENT_CHARS])))
)

# ----------------------
# Literals
# ----------------------

escaped = _then(char("\\"), any_char)

string_literal = labelled(
    "string",
    surrounded(
        char('"'),
        char('"'),
        fmap("".join, many(any_of([escaped, excluding('"', any_char)]))),
    ),
)

literal = labelled(
    "literal",
    any_of(
        [
            fmap(NumberLiteral, uint),
            fmap(StringLiteral, string_literal),
            fmap(lambda _: BooleanLiteral(True), word("true")),
            fmap(lambda _: BooleanLiteral(False), word("false")),
        ]
    ),
)

variable = fmap(VariableExpr, ident)

# ----------------------
# Application
# ----------------------


def build_curried_call(f: Expr, args: list[Expr]) -> CallExpr:
    """`f a b c` -> ((f a) b) c"""
    return reduce(CallExpr, args, f)


call = labelled(
    "call",
    surrounded(
        ws,
        ws,
        and_then(
            lambda head: fmap(
                lambda args: build_curried_call(head, args),
                one_or_more(_then(ws, expr)),
            ),
            expr,
        ),
    ),
)

# ----------------------
# Functions and declarations
# ----------------------


def build_curried_func(body: Expr, args: list[str]) -> FuncExpr:
    """`a b => body` -> a => (b => body); no arguments binds a placeholder."""
    if not args:
        return FuncExpr(PLACEHOLDER_ARG, body)
    for arg in reversed(args):
        body = FuncExpr(arg, body)
    return body


func = labelled(
    "function",
    and_then(
        lambda args: fmap(
            lambda body: build_curried_func(body, args),
            _then(word("=>"), _then(ws, expr)),
        ),
        many(_before(ident, ws)),
    ),
)


def generic_decl(value: Parser) -> Parser:
    """`ident ws "=" ws <value>`, yielding (ident, value)."""
    return fmap(
        lambda parts: (parts[0], parts[4]),
        sequence([ident, ws, char("="), ws, value]),
    )


decl = labelled("declaration", fmap(lambda pair: DeclExpr(*pair), generic_decl(expr)))

named_func = labelled(
    "named function", fmap(lambda pair: NamedFuncExpr(*pair), generic_decl(func))
)

# ----------------------
# Objects
# ----------------------

obj_field = fmap(
    lambda parts: (parts[1], parts[5]),
    sequence([ws, ident, ws, char(":"), ws, expr]),
)

obj = labelled(
    "object",
    surrounded(
        char("{"),
        char("}"),
        fmap(lambda fields: ObjExpr(tuple(fields)), surrounded(ws, ws, many(obj_field))),
    ),
)

# ----------------------
# Expressions
# ----------------------

inner_expr = any_of([call, expr])

expr.define(
    surrounded(
        ws,
        ws,
        any_of(
            [
                surrounded(char("("), char(")"), inner_expr),
                fmap(LiteralExpr, literal),
                named_func,
                decl,
                func,
                variable,
                obj,
            ]
        ),
    )
)

program = labelled(
    "program", _before(one_or_more(surrounded(ws, ws, expr)), end_of_input)
)


def parse_program(source: str) -> Result[list[Expr], KappaSyntaxError]:
    """Parse a whole program into its top-level expressions.

    The entire source must be consumed; trailing input that is not an
    expression is reported where it starts.
    """
    result = program(source)
    if isinstance(result, Err):
        logger.debug("parse failed: %s", result.error)
        return result
    _, exprs = result.value
    logger.debug("parsed %d top-level expressions", len(exprs))
    return Ok(exprs)


def parse_expr(source: str) -> Result[Expr, KappaSyntaxError]:
    """Parse exactly one expression, requiring the whole source to be consumed."""
    result = _before(expr, end_of_input)(source)
    if isinstance(result, Err):
        return result
    return Ok(result.value[1])
