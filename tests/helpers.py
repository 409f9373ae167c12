"""Shared test helpers for the pratt test suite."""

from __future__ import annotations

from pratt.bantam import make_parser
from pratt.evaluator import fold
from pratt.formatter import format_expr
from pratt.lexer import tokenize
from pratt.tokens import Token


def toks(*types: str) -> list[Token]:
    """Tokens whose text equals their type, e.g. toks('a', '+', 'b')."""
    return [Token(t, t) for t in types]


def show(source: str) -> str:
    """Parse Bantam source and render it fully parenthesized."""
    return format_expr(make_parser().parse(tokenize(source), exhaust=True))


def fused(source: str):
    """Parse Bantam source with constant folding applied during the parse."""
    return make_parser(fold).interpret(tokenize(source), exhaust=True)
