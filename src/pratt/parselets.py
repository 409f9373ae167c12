"""Parselets: the rules that say how one token type takes part in an expression.

A prefix parselet runs when its token starts an expression. An xfix parselet
(infix, postfix, or anything else that continues an expression) runs when its
token follows an already parsed left operand, and carries the precedence the
driver compares against.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from pratt.errors import GrammarError
from pratt.tokens import Token

if TYPE_CHECKING:
    from pratt.parser import ExprParser

N = TypeVar("N")


class Position(Enum):
    PREFIX = "prefix"
    XFIX = "xfix"


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


def check_precedence(precedence: object) -> int:
    """Return `precedence` if it is a usable binding strength, else raise GrammarError."""
    if precedence is None:
        raise GrammarError("infix and postfix rules must specify a precedence")
    if isinstance(precedence, bool) or not isinstance(precedence, int):
        raise GrammarError(f"precedence must be an integer, got {precedence!r}")
    return precedence


class Parselet(ABC, Generic[N]):
    position: ClassVar[Position]


class PrefixParselet(Parselet[N]):
    position = Position.PREFIX

    @abstractmethod
    def parse(self, parser: ExprParser[N], token: Token) -> N: ...


class XfixParselet(Parselet[N]):
    position = Position.XFIX
    precedence: int

    @abstractmethod
    def parse(self, parser: ExprParser[N], token: Token, left: N) -> N: ...


# ── Prefix variants ──────────────────────────────────────────────


class NullaryParselet(PrefixParselet[N]):
    """A leaf: the token alone is the whole expression."""

    def __init__(self, build: Callable[[Token], N]) -> None:
        self.build = build

    def __repr__(self) -> str:
        return f"NullaryParselet({self.build!r})"

    def parse(self, parser: ExprParser[N], token: Token) -> N:
        return self.build(token)


class PrefixUnaryParselet(PrefixParselet[N]):
    """An operator before its operand, e.g. `-a`."""

    def __init__(self, build: Callable[[Token, N], N], precedence: int) -> None:
        self.build = build
        self.precedence = check_precedence(precedence)

    def __repr__(self) -> str:
        return f"PrefixUnaryParselet({self.build!r}, precedence={self.precedence})"

    def parse(self, parser: ExprParser[N], token: Token) -> N:
        right = parser.parse(self.precedence)
        return self.build(token, right)


class PrefixMixfixParselet(PrefixParselet[N]):
    """Arbitrary prefix-position rule, e.g. a parenthesized group."""

    def __init__(self, handler: Callable[[ExprParser[N], Token], N]) -> None:
        self.handler = handler

    def __repr__(self) -> str:
        return f"PrefixMixfixParselet({self.handler!r})"

    def parse(self, parser: ExprParser[N], token: Token) -> N:
        return self.handler(parser, token)


# ── Xfix variants ────────────────────────────────────────────────


class PostfixUnaryParselet(XfixParselet[N]):
    """An operator after its operand, e.g. `a!`. Consumes nothing past the operator."""

    def __init__(self, build: Callable[[Token, N], N], precedence: int) -> None:
        self.build = build
        self.precedence = check_precedence(precedence)

    def __repr__(self) -> str:
        return f"PostfixUnaryParselet({self.build!r}, precedence={self.precedence})"

    def parse(self, parser: ExprParser[N], token: Token, left: N) -> N:
        return self.build(token, left)


class BinaryParselet(XfixParselet[N]):
    """A binary infix operator.

    The right operand is parsed at the operator's own precedence for
    left-associative operators, so an equal-precedence operator that follows
    is left for the caller's loop; right-associative operators parse at one
    less, so it is absorbed into the right operand instead.
    """

    def __init__(
        self,
        build: Callable[[Token, N, N], N],
        precedence: int,
        associativity: Associativity = Associativity.LEFT,
    ) -> None:
        if not isinstance(associativity, Associativity):
            raise GrammarError(f"associativity must be an Associativity, got {associativity!r}")
        self.build = build
        self.precedence = check_precedence(precedence)
        self.associativity = associativity

    def __repr__(self) -> str:
        return (
            f"BinaryParselet({self.build!r}, precedence={self.precedence}, "
            f"associativity={self.associativity.name})"
        )

    @property
    def right_precedence(self) -> int:
        if self.associativity is Associativity.RIGHT:
            return self.precedence - 1
        return self.precedence

    def parse(self, parser: ExprParser[N], token: Token, left: N) -> N:
        right = parser.parse(self.right_precedence)
        return self.build(token, left, right)


class XfixMixfixParselet(XfixParselet[N]):
    """Arbitrary continuation rule, e.g. call arguments or a ternary."""

    def __init__(self, handler: Callable[[ExprParser[N], Token, N], N], precedence: int) -> None:
        self.handler = handler
        self.precedence = check_precedence(precedence)

    def __repr__(self) -> str:
        return f"XfixMixfixParselet({self.handler!r}, precedence={self.precedence})"

    def parse(self, parser: ExprParser[N], token: Token, left: N) -> N:
        return self.handler(parser, token, left)
