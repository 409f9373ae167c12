"""Lexer for the Bantam expression language.

Produces tokens lazily: names, numbers, and single-character punctuators.
Whitespace separates tokens and is otherwise ignored.
"""

from __future__ import annotations

from collections.abc import Iterator

from pratt.errors import LexError
from pratt.tokens import PUNCTUATORS, Token, TokenKind


class Lexer:
    """Tokenizes Bantam source text."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0

    def tokens(self) -> Iterator[Token]:
        """Yield tokens one at a time; a LexError surfaces when the bad character is reached."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch.isspace():
                self.pos += 1
            elif ch in PUNCTUATORS:
                self.pos += 1
                yield Token(PUNCTUATORS[ch], ch)
            elif _is_digit(ch):
                yield self._lex_number()
            elif ch.isalpha() or ch == '_':
                yield self._lex_name()
            else:
                raise LexError(f"unexpected character {ch!r}", self.pos)

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        return list(self.tokens())

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _lex_number(self) -> Token:
        start = self.pos
        while _is_digit(self._peek()):
            self.pos += 1
        if self._peek() == '.' and _is_digit(self._peek(1)):
            self.pos += 1
            while _is_digit(self._peek()):
                self.pos += 1
        return Token(TokenKind.NUMBER, self.source[start:self.pos])

    def _lex_name(self) -> Token:
        start = self.pos
        while self._peek().isalnum() or self._peek() == '_':
            self.pos += 1
        return Token(TokenKind.NAME, self.source[start:self.pos])


def _is_digit(ch: str) -> bool:
    # ASCII only; str.isdigit also accepts digits such as superscripts.
    return '0' <= ch <= '9'


def tokenize(source: str) -> Iterator[Token]:
    return Lexer(source).tokens()
