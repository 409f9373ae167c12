"""Tests for the token lookahead buffer."""

from __future__ import annotations

import pytest

from pratt.buffer import TokenBuffer
from pratt.errors import UnexpectedEndOfInput, UnexpectedTokenType
from pratt.tokens import Token
from tests.helpers import toks


class CountingSource:
    """Iterator over tokens that records how often it is pulled."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = list(tokens)
        self.pulls = 0
        self.exhausted_pulls = 0

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        self.pulls += 1
        if not self.tokens:
            self.exhausted_pulls += 1
            raise StopIteration
        return self.tokens.pop(0)


class TestPeek:
    def test_peek_first(self):
        buf = TokenBuffer(toks("a", "b"))
        assert buf.peek() == Token("a", "a")
        assert buf.peek(0) == Token("a", "a")

    def test_peek_ahead(self):
        buf = TokenBuffer(toks("a", "b", "c"))
        assert buf.peek(2) == Token("c", "c")
        assert buf.peek(1) == Token("b", "b")

    def test_peek_past_end_is_none(self):
        buf = TokenBuffer(toks("a"))
        assert buf.peek(1) is None
        assert buf.peek(5) is None
        assert buf.peek(0) == Token("a", "a")

    def test_peek_empty(self):
        buf = TokenBuffer([])
        assert buf.peek() is None
        assert buf.at_end()

    def test_peek_does_not_consume(self):
        buf = TokenBuffer(toks("a", "b"))
        buf.peek(1)
        assert buf.consume() == Token("a", "a")
        assert buf.consume() == Token("b", "b")

    def test_each_position_read_once(self):
        source = CountingSource(toks("a", "b", "c"))
        buf = TokenBuffer(source)
        buf.peek(2)
        buf.peek(0)
        buf.peek(1)
        assert source.pulls == 3
        buf.consume()
        buf.consume()
        buf.consume()
        assert source.pulls == 3

    def test_exhausted_source_not_pulled_again(self):
        source = CountingSource(toks("a"))
        buf = TokenBuffer(source)
        assert buf.peek(3) is None
        assert buf.peek(3) is None
        assert buf.peek(1) is None
        assert source.exhausted_pulls == 1

    def test_negative_distance(self):
        with pytest.raises(ValueError):
            TokenBuffer(toks("a")).peek(-1)


class TestConsume:
    def test_in_order(self):
        buf = TokenBuffer(toks("a", "b"))
        assert [buf.consume().type, buf.consume().type] == ["a", "b"]
        assert buf.at_end()

    def test_pulls_fresh_when_queue_empty(self):
        source = CountingSource(toks("a", "b"))
        buf = TokenBuffer(source)
        assert buf.consume() == Token("a", "a")
        assert source.pulls == 1

    def test_end_of_input(self):
        buf = TokenBuffer([])
        with pytest.raises(UnexpectedEndOfInput) as exc_info:
            buf.consume()
        assert exc_info.value.expected is None
        assert exc_info.value.token is None

    def test_end_of_input_with_expectation(self):
        buf = TokenBuffer([])
        with pytest.raises(UnexpectedEndOfInput) as exc_info:
            buf.consume(")")
        assert exc_info.value.expected == ")"
        assert "expected )" in str(exc_info.value)

    def test_expected_type_matches(self):
        buf = TokenBuffer(toks(")"))
        assert buf.consume(")") == Token(")", ")")

    def test_expected_type_mismatch(self):
        buf = TokenBuffer(toks("a"))
        with pytest.raises(UnexpectedTokenType) as exc_info:
            buf.consume(")")
        assert exc_info.value.token == Token("a", "a")
        assert exc_info.value.expected == ")"


class TestMatch:
    def test_match_consumes(self):
        buf = TokenBuffer(toks(",", "a"))
        assert buf.match(",")
        assert buf.peek() == Token("a", "a")

    def test_no_match_leaves_stream(self):
        buf = TokenBuffer(toks("a", ","))
        assert not buf.match(",")
        assert buf.consume() == Token("a", "a")
        assert buf.match(",")
        assert buf.at_end()

    def test_match_at_end(self):
        buf = TokenBuffer([])
        assert not buf.match(",")

    def test_match_after_peek_ahead(self):
        buf = TokenBuffer(toks(",", ",", "a"))
        buf.peek(2)
        assert buf.match(",")
        assert buf.match(",")
        assert not buf.match(",")
        assert buf.consume("a").text == "a"
