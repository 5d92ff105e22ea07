"""Syntax tree produced by the grammar and consumed by the evaluator.

Every node is a frozen dataclass so trees can be compared structurally and
shared freely between closures.

    - literals    -> LiteralExpr(NumberLiteral | StringLiteral | BooleanLiteral)
    - application -> CallExpr, always single-argument; `f a b` is ((f a) b)
    - functions   -> FuncExpr, always single-argument; `a b => e` is a => (b => e)
    - bindings    -> DeclExpr and NamedFuncExpr (self-referential functions)
    - records     -> ObjExpr, ordered (field, expression) pairs
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Argument name used for `=> body`; the body can never reference it.
PLACEHOLDER_ARG = "_"


@dataclass(frozen=True)
class NumberLiteral:
    value: int


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


Literal = Union[NumberLiteral, StringLiteral, BooleanLiteral]


@dataclass(frozen=True)
class LiteralExpr:
    value: Literal


@dataclass(frozen=True)
class CallExpr:
    f: Expr
    arg: Expr


@dataclass(frozen=True)
class VariableExpr:
    ident: str


@dataclass(frozen=True)
class DeclExpr:
    ident: str
    value: Expr


@dataclass(frozen=True)
class FuncExpr:
    arg: str
    body: Expr


@dataclass(frozen=True)
class NamedFuncExpr:
    ident: str
    func: FuncExpr


@dataclass(frozen=True)
class ObjExpr:
    fields: tuple[tuple[str, Expr], ...]


Expr = Union[
    LiteralExpr, CallExpr, VariableExpr, DeclExpr, FuncExpr, NamedFuncExpr, ObjExpr
]
