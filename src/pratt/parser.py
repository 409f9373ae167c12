"""Operator-precedence (Pratt) expression parser.

A `PrattParser` holds a registry of parselets keyed by token type. Each call
to `parse` or `interpret` wraps the tokens in a fresh `ExprParser`, which runs
the precedence-climbing loop against the registry and hands itself to the
parselets so they can peek, consume, and recurse.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from pratt.buffer import TokenBuffer
from pratt.errors import ExcessToken, GrammarError, NoPrefixRule, NoXfixRule
from pratt.parselets import (
    Associativity,
    BinaryParselet,
    NullaryParselet,
    Parselet,
    Position,
    PostfixUnaryParselet,
    PrefixMixfixParselet,
    PrefixParselet,
    PrefixUnaryParselet,
    XfixMixfixParselet,
    XfixParselet,
    check_precedence,
)
from pratt.tokens import Token, TokenType

logger = logging.getLogger(__name__)

N = TypeVar("N")

Interpreter = Callable[[N], N]


# ── Registry ─────────────────────────────────────────────────────


class Registry(Generic[N]):
    """Prefix and xfix parselet tables. Re-registering a token type replaces the old rule."""

    def __init__(self) -> None:
        self.prefix: dict[TokenType, PrefixParselet[N]] = {}
        self.xfix: dict[TokenType, tuple[XfixParselet[N], int]] = {}

    def __repr__(self) -> str:
        return f"Registry(prefix={sorted(map(str, self.prefix))}, xfix={sorted(map(str, self.xfix))})"

    def register_prefix(self, token_type: TokenType, parselet: PrefixParselet[N]) -> None:
        if _position_of(parselet) is not Position.PREFIX:
            raise GrammarError(f"{parselet!r} cannot be registered in prefix position")
        if token_type in self.prefix:
            logger.debug("replacing prefix rule for %r", token_type)
        self.prefix[token_type] = parselet

    def register_xfix(
        self,
        token_type: TokenType,
        parselet: XfixParselet[N],
        precedence: int | None = None,
    ) -> None:
        if _position_of(parselet) is not Position.XFIX:
            raise GrammarError(f"{parselet!r} cannot be registered in infix/postfix position")
        if precedence is None:
            precedence = getattr(parselet, "precedence", None)
        precedence = check_precedence(precedence)
        if precedence <= 0:
            # The driver never parses below 0, so such a rule could never fire.
            raise GrammarError(f"xfix precedence must be positive, got {precedence}")
        if token_type in self.xfix:
            logger.debug("replacing xfix rule for %r", token_type)
        self.xfix[token_type] = (parselet, precedence)

    def precedence_of(self, token: Token | None) -> int:
        """Binding strength of `token` as a continuation; 0 at end of input or for unknown types."""
        if token is None:
            return 0
        entry = self.xfix.get(token.type)
        if entry is None:
            return 0
        return entry[1]


def _position_of(parselet: object) -> Position:
    position = getattr(parselet, "position", None)
    if not isinstance(position, Position):
        raise GrammarError(f"cannot determine parselet position for {parselet!r}")
    return position


# ── Driver ───────────────────────────────────────────────────────


class ExprParser(Generic[N]):
    """One parse over one token stream. Parselets receive this object."""

    def __init__(
        self,
        registry: Registry[N],
        tokens: Iterable[Token],
        interpreter: Interpreter[N] | None = None,
    ) -> None:
        self._registry = registry
        self._buffer = TokenBuffer(tokens)
        self.interpreter = interpreter

    # ── Token access ─────────────────────────────────────────────

    def peek(self, distance: int = 0) -> Token | None:
        return self._buffer.peek(distance)

    def consume(self, expected: TokenType | None = None) -> Token:
        return self._buffer.consume(expected)

    def match(self, expected: TokenType) -> bool:
        return self._buffer.match(expected)

    def at_end(self) -> bool:
        return self._buffer.at_end()

    # ── Precedence climbing ──────────────────────────────────────

    def parse(self, precedence: int = 0) -> N:
        """Parse one expression whose operators all bind tighter than `precedence`."""
        token = self._buffer.consume()
        prefix = self._registry.prefix.get(token.type)
        if prefix is None:
            raise NoPrefixRule(token)

        interp = self.interpreter
        left = prefix.parse(self, token)
        if interp is not None:
            left = interp(left)

        while precedence < self._registry.precedence_of(self._buffer.peek(0)):
            token = self._buffer.consume()
            entry = self._registry.xfix.get(token.type)
            if entry is None:
                raise NoXfixRule(token)
            left = entry[0].parse(self, token, left)
            if interp is not None:
                left = interp(left)

        return left


# ── Setup and invocation ─────────────────────────────────────────


class PrattParser(Generic[N]):
    """Grammar setup and entry points.

    Register every rule before parsing. The registry is only read while a
    parse runs, so one configured parser may serve many parses at once.
    """

    def __init__(self, interpreter: Interpreter[N] | None = None) -> None:
        self.registry: Registry[N] = Registry()
        self.interpreter = interpreter

    def register(self, token_type: TokenType, parselet: Parselet[N]) -> None:
        """Register `parselet` in the table matching its position."""
        if _position_of(parselet) is Position.PREFIX:
            self.registry.register_prefix(token_type, parselet)  # type: ignore[arg-type]
        else:
            self.registry.register_xfix(token_type, parselet)  # type: ignore[arg-type]

    def register_prefix(self, token_type: TokenType, parselet: PrefixParselet[N]) -> None:
        self.registry.register_prefix(token_type, parselet)

    def register_xfix(
        self,
        token_type: TokenType,
        parselet: XfixParselet[N],
        precedence: int | None = None,
    ) -> None:
        self.registry.register_xfix(token_type, parselet, precedence)

    # ── Convenience builders ─────────────────────────────────────

    def nullary(self, token_type: TokenType, build: Callable[[Token], N]) -> None:
        self.register_prefix(token_type, NullaryParselet(build))

    def prefix_unary(
        self, token_type: TokenType, precedence: int, build: Callable[[Token, N], N],
    ) -> None:
        self.register_prefix(token_type, PrefixUnaryParselet(build, precedence))

    def postfix_unary(
        self, token_type: TokenType, precedence: int, build: Callable[[Token, N], N],
    ) -> None:
        self.register_xfix(token_type, PostfixUnaryParselet(build, precedence))

    def binary_infix(
        self,
        token_type: TokenType,
        precedence: int,
        associativity: Associativity,
        build: Callable[[Token, N, N], N],
    ) -> None:
        self.register_xfix(token_type, BinaryParselet(build, precedence, associativity))

    def prefix_rule(
        self, token_type: TokenType,
    ) -> Callable[[Callable[[ExprParser[N], Token], N]], Callable[[ExprParser[N], Token], N]]:
        """Decorator registering a custom prefix-position handler."""
        def decorate(handler: Callable[[ExprParser[N], Token], N]) -> Callable[[ExprParser[N], Token], N]:
            self.register_prefix(token_type, PrefixMixfixParselet(handler))
            return handler
        return decorate

    def xfix_rule(
        self, token_type: TokenType, precedence: int,
    ) -> Callable[[Callable[[ExprParser[N], Token, N], N]], Callable[[ExprParser[N], Token, N], N]]:
        """Decorator registering a custom continuation handler at `precedence`."""
        def decorate(handler: Callable[[ExprParser[N], Token, N], N]) -> Callable[[ExprParser[N], Token, N], N]:
            self.register_xfix(token_type, XfixMixfixParselet(handler, precedence))
            return handler
        return decorate

    def set_interpreter(self, interpreter: Interpreter[N] | None) -> None:
        self.interpreter = interpreter

    # ── Entry points ─────────────────────────────────────────────

    def parse(self, tokens: Iterable[Token], *, exhaust: bool = False) -> N:
        """Parse one expression, building nodes without folding."""
        return self._run(tokens, None, exhaust)

    def interpret(self, tokens: Iterable[Token], *, exhaust: bool = False) -> N:
        """Parse one expression, folding every node through the interpreter as it is built."""
        return self._run(tokens, self.interpreter, exhaust)

    def _run(self, tokens: Iterable[Token], interpreter: Interpreter[N] | None, exhaust: bool) -> N:
        logger.debug(
            "parsing with %d prefix and %d xfix rules (fused=%s)",
            len(self.registry.prefix), len(self.registry.xfix), interpreter is not None,
        )
        parser = ExprParser(self.registry, tokens, interpreter)
        result = parser.parse(0)
        if exhaust:
            excess = parser.peek(0)
            if excess is not None:
                raise ExcessToken(excess)
        return result
