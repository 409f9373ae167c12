"""Numeric evaluation of Bantam expressions.

`fold` is the one-node constant folder used as the fused-mode interpreter:
it only looks at the node it is given, relying on the engine to have folded
the operands already. `evaluate` walks a finished tree. For an expression
made of numbers and operators whose evaluation succeeds, folding during the
parse yields `NumberExpr(evaluate(tree))`; where some operation fails, the
folded tree keeps that operation and `evaluate` raises on it.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, MutableMapping
from typing import Union

from pratt.ast_nodes import (
    AssignExpr,
    CallExpr,
    ConditionalExpr,
    Expr,
    NameExpr,
    NumberExpr,
    OperatorExpr,
    PostfixExpr,
    PrefixExpr,
)
from pratt.errors import PrattError

Number = Union[int, float]
Value = Union[Number, Callable[..., Number]]


class EvaluationError(PrattError):
    code = "P500"


# Largest integer result, in bits, that `^` and postfix `!` will compute.
MAX_INT_BITS = 1 << 16


# ── Operator semantics ───────────────────────────────────────────


def apply_prefix(op: str, value: Number) -> Number:
    if op == '+':
        return value
    if op == '-':
        return -value
    if op == '~':
        return ~_require_int(op, value)
    if op == '!':
        return int(value == 0)
    raise EvaluationError(f"unknown prefix operator {op!r}")


def apply_postfix(op: str, value: Number) -> Number:
    if op == '!':
        n = _require_int(op, value)
        if n < 0:
            raise EvaluationError(f"factorial of negative number {n}")
        if n > MAX_INT_BITS or math.lgamma(n + 1) / math.log(2) > MAX_INT_BITS:
            raise EvaluationError(f"factorial of {n} is too large")
        return math.factorial(n)
    raise EvaluationError(f"unknown postfix operator {op!r}")


def apply_binary(op: str, left: Number, right: Number) -> Number:
    if op == '+':
        return left + right
    if op == '-':
        return left - right
    if op == '*':
        return left * right
    if op == '/':
        if right == 0:
            raise EvaluationError("division by zero")
        return left / right
    if op == '^':
        _check_power_size(left, right)
        try:
            result = left ** right
        except (OverflowError, ZeroDivisionError) as e:
            raise EvaluationError(f"cannot compute {left} ^ {right}: {e}") from e
        if isinstance(result, complex):
            raise EvaluationError(f"{left} ^ {right} is not a real number")
        return result
    if op == ';':
        return right
    raise EvaluationError(f"unknown binary operator {op!r}")


def _check_power_size(base: Number, exponent: Number) -> None:
    # Float powers overflow on their own; integer powers grow without bound.
    if not (isinstance(base, int) and isinstance(exponent, int)):
        return
    if exponent > 0 and abs(base) > 1 and exponent * math.log2(abs(base)) > MAX_INT_BITS:
        raise EvaluationError(f"{base} ^ {exponent} is too large")


def _require_int(op: str, value: Number) -> int:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise EvaluationError(f"operator {op!r} needs an integer, got {value}")
    return value


# ── Fused-mode folding ───────────────────────────────────────────


def fold(expr: Expr) -> Expr:
    """Collapse `expr` to a NumberExpr when its operands are numbers.

    Nodes that cannot be folded (names, calls, assignments, or operations
    that would fail) are returned unchanged, so the error, if any, is left
    for `evaluate` to report.
    """
    try:
        if isinstance(expr, PrefixExpr) and isinstance(expr.operand, NumberExpr):
            return NumberExpr(apply_prefix(expr.op, expr.operand.value))
        if isinstance(expr, PostfixExpr) and isinstance(expr.operand, NumberExpr):
            return NumberExpr(apply_postfix(expr.op, expr.operand.value))
        if (isinstance(expr, OperatorExpr)
                and isinstance(expr.left, NumberExpr)
                and isinstance(expr.right, NumberExpr)):
            return NumberExpr(apply_binary(expr.op, expr.left.value, expr.right.value))
    except EvaluationError:
        return expr
    if isinstance(expr, ConditionalExpr) and isinstance(expr.condition, NumberExpr):
        chosen = expr.then_arm if expr.condition.value != 0 else expr.else_arm
        # Only a number may replace the conditional.
        if isinstance(chosen, NumberExpr):
            return chosen
    return expr


# ── Tree evaluation ──────────────────────────────────────────────


def evaluate(expr: Expr, env: MutableMapping[str, Value] | None = None) -> Number:
    """Evaluate a whole tree. Assignments write to `env`; names and calls read from it."""
    if env is None:
        env = {}
    if isinstance(expr, NumberExpr):
        return expr.value
    if isinstance(expr, NameExpr):
        return _lookup_number(env, expr.name)
    if isinstance(expr, AssignExpr):
        value = evaluate(expr.value, env)
        env[expr.name] = value
        return value
    if isinstance(expr, PrefixExpr):
        return apply_prefix(expr.op, evaluate(expr.operand, env))
    if isinstance(expr, PostfixExpr):
        return apply_postfix(expr.op, evaluate(expr.operand, env))
    if isinstance(expr, OperatorExpr):
        left = evaluate(expr.left, env)
        return apply_binary(expr.op, left, evaluate(expr.right, env))
    if isinstance(expr, ConditionalExpr):
        if evaluate(expr.condition, env) != 0:
            return evaluate(expr.then_arm, env)
        return evaluate(expr.else_arm, env)
    if isinstance(expr, CallExpr):
        if not isinstance(expr.function, NameExpr):
            raise EvaluationError("only named functions can be called")
        fn = env.get(expr.function.name)
        if not callable(fn):
            raise EvaluationError(f"{expr.function.name!r} is not a function")
        return fn(*(evaluate(arg, env) for arg in expr.args))
    raise EvaluationError(f"cannot evaluate {type(expr).__name__}")


def _lookup_number(env: Mapping[str, Value], name: str) -> Number:
    try:
        value = env[name]
    except KeyError:
        raise EvaluationError(f"unbound name {name!r}") from None
    if callable(value):
        raise EvaluationError(f"{name!r} is a function, not a number")
    return value
