"""The Bantam grammar: a small expression language built on the Pratt engine.

Bantam has names and numbers, assignment, a ternary conditional, prefix
`+ - ~ !`, postfix `!`, the binary operators `+ - * / ^`, grouping with
parentheses, calls with comma-separated arguments, and `;` sequencing.
"""

from __future__ import annotations

from enum import IntEnum

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
from pratt.errors import ParseError
from pratt.lexer import tokenize
from pratt.parselets import Associativity
from pratt.parser import ExprParser, Interpreter, PrattParser
from pratt.tokens import Token, TokenKind, type_name


class Precedence(IntEnum):
    # Ordered in increasing precedence.
    STATEMENT = 1
    ASSIGNMENT = 2
    CONDITIONAL = 3
    SUM = 4
    PRODUCT = 5
    EXPONENT = 6
    PREFIX = 7
    POSTFIX = 8
    CALL = 9


class InvalidAssignmentTarget(ParseError):
    code = "P400"

    def __init__(self, token: Token) -> None:
        super().__init__("the left-hand side of an assignment must be a name", token)


def _op(token: Token) -> str:
    return token.text if token.text is not None else type_name(token.type)


def _number(text: str | None) -> int | float:
    if text is None:
        raise ValueError("number token has no text")
    return float(text) if '.' in text else int(text)


def _assign(token: Token, left: Expr, right: Expr) -> Expr:
    if not isinstance(left, NameExpr):
        raise InvalidAssignmentTarget(token)
    return AssignExpr(left.name, right)


def _prefix(token: Token, right: Expr) -> Expr:
    return PrefixExpr(_op(token), right)


def _postfix(token: Token, left: Expr) -> Expr:
    return PostfixExpr(_op(token), left)


def _binary(token: Token, left: Expr, right: Expr) -> Expr:
    return OperatorExpr(left, _op(token), right)


def make_parser(interpreter: Interpreter[Expr] | None = None) -> PrattParser[Expr]:
    """Build a parser with the full Bantam grammar registered."""
    parser: PrattParser[Expr] = PrattParser(interpreter)

    parser.nullary(TokenKind.NAME, lambda token: NameExpr(token.text or ""))
    parser.nullary(TokenKind.NUMBER, lambda token: NumberExpr(_number(token.text)))

    parser.binary_infix(TokenKind.ASSIGN, Precedence.ASSIGNMENT, Associativity.RIGHT, _assign)

    for kind in (TokenKind.PLUS, TokenKind.MINUS, TokenKind.TILDE, TokenKind.BANG):
        parser.prefix_unary(kind, Precedence.PREFIX, _prefix)

    parser.postfix_unary(TokenKind.BANG, Precedence.POSTFIX, _postfix)

    parser.binary_infix(TokenKind.PLUS, Precedence.SUM, Associativity.LEFT, _binary)
    parser.binary_infix(TokenKind.MINUS, Precedence.SUM, Associativity.LEFT, _binary)
    parser.binary_infix(TokenKind.STAR, Precedence.PRODUCT, Associativity.LEFT, _binary)
    parser.binary_infix(TokenKind.SLASH, Precedence.PRODUCT, Associativity.LEFT, _binary)
    parser.binary_infix(TokenKind.CARET, Precedence.EXPONENT, Associativity.RIGHT, _binary)
    parser.binary_infix(TokenKind.SEMICOLON, Precedence.STATEMENT, Associativity.RIGHT, _binary)

    @parser.prefix_rule(TokenKind.LPAREN)
    def group(p: ExprParser[Expr], token: Token) -> Expr:
        expr = p.parse(0)
        p.consume(TokenKind.RPAREN)
        return expr

    @parser.xfix_rule(TokenKind.LPAREN, Precedence.CALL)
    def call(p: ExprParser[Expr], token: Token, left: Expr) -> Expr:
        args: list[Expr] = []
        # There may be no arguments at all.
        if not p.match(TokenKind.RPAREN):
            args.append(p.parse(0))
            while p.match(TokenKind.COMMA):
                args.append(p.parse(0))
            p.consume(TokenKind.RPAREN)
        return CallExpr(left, tuple(args))

    @parser.xfix_rule(TokenKind.QUESTION, Precedence.CONDITIONAL)
    def conditional(p: ExprParser[Expr], token: Token, left: Expr) -> Expr:
        then_arm = p.parse(0)
        p.consume(TokenKind.COLON)
        else_arm = p.parse(Precedence.CONDITIONAL - 1)
        return ConditionalExpr(left, then_arm, else_arm)

    return parser


def parse_source(source: str, *, exhaust: bool = True) -> Expr:
    """Lex and parse one Bantam expression."""
    return make_parser().parse(tokenize(source), exhaust=exhaust)
