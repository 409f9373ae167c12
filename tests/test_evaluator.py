"""Tests for fused-mode folding and tree evaluation."""

from __future__ import annotations

import math

import pytest

from pratt.ast_nodes import AssignExpr, CallExpr, NameExpr, NumberExpr
from pratt.bantam import InvalidAssignmentTarget, parse_source
from pratt.evaluator import (
    EvaluationError,
    apply_binary,
    apply_postfix,
    apply_prefix,
    evaluate,
    fold,
)
from pratt.formatter import format_expr
from tests.helpers import fused


class TestOperators:
    def test_prefix(self):
        assert apply_prefix("+", 3) == 3
        assert apply_prefix("-", 3) == -3
        assert apply_prefix("~", 5) == -6
        assert apply_prefix("!", 0) == 1
        assert apply_prefix("!", 4) == 0

    def test_bitwise_not_needs_integer(self):
        assert apply_prefix("~", 2.0) == -3
        with pytest.raises(EvaluationError, match="integer"):
            apply_prefix("~", 1.5)

    def test_factorial(self):
        assert apply_postfix("!", 5) == 120
        assert apply_postfix("!", 0) == 1
        with pytest.raises(EvaluationError, match="negative"):
            apply_postfix("!", -1)

    def test_binary(self):
        assert apply_binary("+", 1, 2) == 3
        assert apply_binary("-", 1, 2) == -1
        assert apply_binary("*", 3, 4) == 12
        assert apply_binary("/", 1, 2) == 0.5
        assert apply_binary("^", 2, 10) == 1024
        assert apply_binary(";", 1, 2) == 2

    def test_division_by_zero(self):
        with pytest.raises(EvaluationError, match="division by zero"):
            apply_binary("/", 1, 0)

    def test_power_errors(self):
        with pytest.raises(EvaluationError):
            apply_binary("^", 0, -1)
        with pytest.raises(EvaluationError):
            apply_binary("^", 10.0, 400)

    def test_unknown_operator(self):
        with pytest.raises(EvaluationError):
            apply_binary("%", 1, 2)

    def test_negative_base_fractional_exponent(self):
        with pytest.raises(EvaluationError, match="not a real number"):
            apply_binary("^", -8, 0.5)

    def test_integer_power_size_limit(self):
        with pytest.raises(EvaluationError, match="too large"):
            apply_binary("^", 9, 387420489)
        assert apply_binary("^", 2, 1000) == 2 ** 1000
        assert apply_binary("^", 1, 10 ** 12) == 1
        assert apply_binary("^", -1, 10 ** 12) == 1

    def test_factorial_size_limit(self):
        with pytest.raises(EvaluationError, match="too large"):
            apply_postfix("!", 100000)
        assert apply_postfix("!", 1000) == math.factorial(1000)

    def test_integer_operators_reject_other_types(self):
        with pytest.raises(EvaluationError, match="integer"):
            apply_prefix("~", complex(1, 1))
        with pytest.raises(EvaluationError, match="integer"):
            apply_postfix("!", float("inf"))


class TestFusedMatchesPost:
    @pytest.mark.parametrize("source", [
        "1 + 2 * 3",
        "2 ^ 3 ^ 2",
        "- 3 !",
        "4 / 2",
        "! 0 + ! 5",
        "~ 5",
        "(1 + 2) * 3",
        "1 ? 2 : 3",
        "0 ? 2 : 3 + 4",
        "1 ; 2",
        "10 - 4 - 3",
    ])
    def test_fold_equals_evaluate(self, source):
        assert fused(source) == NumberExpr(evaluate(parse_source(source)))

    @pytest.mark.parametrize("source", ["1 ? a : b = 3", "0 ? b : a = 3"])
    def test_conditional_on_number_keeps_name_arm(self, source):
        with pytest.raises(InvalidAssignmentTarget):
            parse_source(source)
        with pytest.raises(InvalidAssignmentTarget):
            fused(source)

    def test_values(self):
        assert fused("1 + 2 * 3") == NumberExpr(7)
        assert fused("2 ^ 3 ^ 2") == NumberExpr(512)
        assert fused("10 - 4 - 3") == NumberExpr(3)


class TestFoldResiduals:
    def test_name_blocks_folding(self):
        assert format_expr(fused("a + 1 * 2")) == "(a+2)"

    def test_assignment_value_folded(self):
        assert fused("x = 1 + 2") == AssignExpr("x", NumberExpr(3))

    def test_call_arguments_folded(self):
        assert fused("f(1 + 1)") == CallExpr(NameExpr("f"), (NumberExpr(2),))

    def test_failing_operation_left_unfolded(self):
        assert format_expr(fused("1 / 0")) == "(1/0)"
        assert format_expr(fused("(0 - 3)!")) == "(-3!)"

    def test_conditional_on_name_kept(self):
        assert format_expr(fused("c ? 1 + 1 : 2")) == "(c?2:2)"

    def test_conditional_with_name_arm_kept(self):
        assert format_expr(fused("1 ? a : b")) == "(1?a:b)"
        assert fused("1 ? 2 : b") == NumberExpr(2)

    def test_complex_power_left_unfolded(self):
        assert format_expr(fused("~(-8 ^ 0.5)")) == "(~(-8^0.5))"
        with pytest.raises(EvaluationError):
            evaluate(parse_source("~(-8 ^ 0.5)"))

    def test_huge_power_left_unfolded(self):
        assert format_expr(fused("9 ^ 9 ^ 9")) == "(9^387420489)"
        with pytest.raises(EvaluationError, match="too large"):
            evaluate(parse_source("9 ^ 9 ^ 9"))

    def test_fold_is_one_node(self):
        leaf = NameExpr("a")
        assert fold(leaf) is leaf


class TestEvaluate:
    def test_unbound_name(self):
        with pytest.raises(EvaluationError, match="unbound name 'y'"):
            evaluate(parse_source("y + 1"))

    def test_env_lookup(self):
        assert evaluate(parse_source("x * 2"), {"x": 21}) == 42

    def test_assignment_writes_env(self):
        env = {}
        assert evaluate(parse_source("x = 2 ; x * 3"), env) == 6
        assert env == {"x": 2}

    def test_chained_assignment(self):
        env = {}
        evaluate(parse_source("a = b = 4"), env)
        assert env == {"a": 4, "b": 4}

    def test_only_chosen_arm_evaluated(self):
        assert evaluate(parse_source("1 ? 2 : y")) == 2
        assert evaluate(parse_source("0 ? y : 3")) == 3

    def test_call(self):
        env = {"max": max, "sqrt": math.sqrt}
        assert evaluate(parse_source("max(1, 5, 3)"), env) == 5
        assert evaluate(parse_source("sqrt(16) + 1"), env) == 5.0

    def test_call_non_function(self):
        with pytest.raises(EvaluationError, match="not a function"):
            evaluate(parse_source("x(1)"), {"x": 3})

    def test_function_used_as_number(self):
        with pytest.raises(EvaluationError, match="not a number"):
            evaluate(parse_source("f + 1"), {"f": abs})

    def test_call_result_cannot_be_called(self):
        with pytest.raises(EvaluationError, match="named functions"):
            evaluate(parse_source("f(1)(2)"), {"f": abs})

    def test_division_by_zero(self):
        with pytest.raises(EvaluationError) as exc_info:
            evaluate(parse_source("1 / 0"))
        assert exc_info.value.code == "P500"
