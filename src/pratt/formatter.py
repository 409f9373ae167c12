"""Renders Bantam ASTs in fully parenthesized form, e.g. `(a+(b*c))`."""

from __future__ import annotations

from pratt.ast_nodes import (
    AssignExpr,
    CallExpr,
    ConditionalExpr,
    NameExpr,
    NumberExpr,
    OperatorExpr,
    PostfixExpr,
    PrefixExpr,
)


class BantamFormatter:
    """Walks an expression tree and emits one parenthesized string.

    Groups leave no trace in the tree, so `a + (b + c)` and `a+(b+c)` format
    the same way.
    """

    def format(self, expr: object) -> str:
        if isinstance(expr, NameExpr):
            return expr.name
        if isinstance(expr, NumberExpr):
            return self._format_number(expr.value)
        if isinstance(expr, AssignExpr):
            return f"({expr.name}={self.format(expr.value)})"
        if isinstance(expr, PrefixExpr):
            return f"({expr.op}{self.format(expr.operand)})"
        if isinstance(expr, PostfixExpr):
            return f"({self.format(expr.operand)}{expr.op})"
        if isinstance(expr, OperatorExpr):
            return f"({self.format(expr.left)}{expr.op}{self.format(expr.right)})"
        if isinstance(expr, ConditionalExpr):
            return (
                f"({self.format(expr.condition)}?{self.format(expr.then_arm)}"
                f":{self.format(expr.else_arm)})"
            )
        if isinstance(expr, CallExpr):
            args = ",".join(self.format(arg) for arg in expr.args)
            return f"{self.format(expr.function)}({args})"
        raise TypeError(f"cannot format {type(expr).__name__}: {expr!r}")

    @staticmethod
    def _format_number(value: int | float) -> str:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)


def format_expr(expr: object) -> str:
    return BantamFormatter().format(expr)
