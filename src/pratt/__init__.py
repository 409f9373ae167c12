"""Operator-precedence (Pratt) expression parsing."""

from pratt.buffer import TokenBuffer
from pratt.errors import (
    ExcessToken,
    GrammarError,
    NoPrefixRule,
    NoXfixRule,
    ParseError,
    PrattError,
    UnexpectedEndOfInput,
    UnexpectedTokenType,
)
from pratt.parselets import (
    Associativity,
    BinaryParselet,
    NullaryParselet,
    PostfixUnaryParselet,
    PrefixMixfixParselet,
    PrefixParselet,
    PrefixUnaryParselet,
    XfixMixfixParselet,
    XfixParselet,
)
from pratt.parser import ExprParser, PrattParser, Registry
from pratt.tokens import Token

__version__ = "0.1.0"

__all__ = [
    "Associativity",
    "BinaryParselet",
    "ExcessToken",
    "ExprParser",
    "GrammarError",
    "NoPrefixRule",
    "NoXfixRule",
    "NullaryParselet",
    "ParseError",
    "PostfixUnaryParselet",
    "PrattError",
    "PrattParser",
    "PrefixMixfixParselet",
    "PrefixParselet",
    "PrefixUnaryParselet",
    "Registry",
    "Token",
    "TokenBuffer",
    "UnexpectedEndOfInput",
    "UnexpectedTokenType",
    "XfixMixfixParselet",
    "XfixParselet",
    "__version__",
]
