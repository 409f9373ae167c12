"""Token representation for the engine, and token kinds for the Bantam grammar."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum

# The engine only ever compares and hashes token types.
TokenType = Hashable


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str | None = None

    def __str__(self) -> str:
        name = type_name(self.type)
        if self.text is None or self.text == name:
            return name
        return f"{name} ({self.text!r})"


def type_name(token_type: TokenType) -> str:
    """Readable name for a token type: enum members by value, anything else by str()."""
    if isinstance(token_type, Enum):
        return str(token_type.value)
    return str(token_type)


class TokenKind(Enum):
    # Leaves
    NAME = "NAME"
    NUMBER = "NUMBER"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    TILDE = "~"
    BANG = "!"
    QUESTION = "?"

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    COLON = ":"
    SEMICOLON = ";"


PUNCTUATORS: dict[str, TokenKind] = {
    kind.value: kind
    for kind in TokenKind
    if kind not in (TokenKind.NAME, TokenKind.NUMBER)
}
