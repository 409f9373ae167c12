"""Lookahead buffer over a lazily produced token stream."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from pratt.errors import UnexpectedEndOfInput, UnexpectedTokenType
from pratt.tokens import Token, TokenType


class TokenBuffer:
    """Pull-based view over a token iterable with unbounded peeking.

    Each position of the underlying iterator is read exactly once; tokens
    that have been peeked but not consumed wait in a queue. There is no
    rollback: once consumed, a token is gone.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._source: Iterator[Token] = iter(tokens)
        self._queue: deque[Token] = deque()
        self._exhausted = False

    def __repr__(self) -> str:
        return f"TokenBuffer(queued={list(self._queue)!r}, exhausted={self._exhausted})"

    def _pull(self) -> Token | None:
        if self._exhausted:
            return None
        try:
            return next(self._source)
        except StopIteration:
            self._exhausted = True
            return None

    def peek(self, distance: int = 0) -> Token | None:
        """Return the token `distance` places ahead, or None past the end of input."""
        if distance < 0:
            raise ValueError(f"peek distance must be non-negative, got {distance}")
        while distance >= len(self._queue):
            tok = self._pull()
            if tok is None:
                return None
            self._queue.append(tok)
        return self._queue[distance]

    def at_end(self) -> bool:
        return self.peek(0) is None

    def consume(self, expected: TokenType | None = None) -> Token:
        """Remove and return the next token, optionally checking its type."""
        tok = self._queue.popleft() if self._queue else self._pull()
        if tok is None:
            raise UnexpectedEndOfInput(expected)
        if expected is not None and tok.type != expected:
            raise UnexpectedTokenType(tok, expected)
        return tok

    def match(self, expected: TokenType) -> bool:
        """Consume the next token only if it has type `expected`."""
        tok = self.peek(0)
        if tok is None or tok.type != expected:
            return False
        self._queue.popleft()
        return True
