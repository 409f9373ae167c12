"""AST node definitions for the Bantam expression language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NameExpr:
    name: str


@dataclass(frozen=True)
class NumberExpr:
    value: int | float


@dataclass(frozen=True)
class AssignExpr:
    name: str
    value: Expr


@dataclass(frozen=True)
class PrefixExpr:
    op: str
    operand: Expr


@dataclass(frozen=True)
class PostfixExpr:
    op: str
    operand: Expr


@dataclass(frozen=True)
class OperatorExpr:
    left: Expr
    op: str
    right: Expr


@dataclass(frozen=True)
class ConditionalExpr:
    condition: Expr
    then_arm: Expr
    else_arm: Expr


@dataclass(frozen=True)
class CallExpr:
    function: Expr
    args: tuple[Expr, ...]


Expr = Union[
    NameExpr, NumberExpr, AssignExpr, PrefixExpr, PostfixExpr,
    OperatorExpr, ConditionalExpr, CallExpr,
]
