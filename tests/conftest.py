"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from strcalc.ast import Concat, Literal, Node, Repeat
from strcalc.eval import evaluate
from strcalc.lexer import tokenize
from strcalc.parser import parse
from strcalc.tokens import EndToken, OpToken, StringToken, Token


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EndToken for convenience
        return [t for t in tokens if not isinstance(t, EndToken)]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns the root node."""

    def _parse(source: str, filename: str = "test.sc") -> Node:
        return parse(source, filename)

    return _parse


@pytest.fixture
def calc():
    """Return a helper that parses and evaluates source to bytes."""

    def _calc(source: str) -> bytes:
        return bytes(evaluate(parse(source, "test.sc")))

    return _calc


def token_texts(tokens: list[Token]) -> list[str]:
    """Render tokens as their source text: digits for strings, the operator char."""
    texts = []
    for tok in tokens:
        if isinstance(tok, StringToken):
            texts.append(tok.value.decode())
        elif isinstance(tok, OpToken):
            texts.append(tok.op)
        else:
            texts.append("<end>")
    return texts


def shape(node: Node) -> str:
    """Fully parenthesized rendering of a tree, e.g. ``(1^(2^2))``."""
    if isinstance(node, Literal):
        return node.value.decode()
    op = "." if isinstance(node, Concat) else "^"
    assert isinstance(node, (Concat, Repeat)), f"unexpected node {type(node).__name__}"
    return f"({shape(node.left)}{op}{shape(node.right)})"
