"""Token types, source spans and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass

from strcalc.buffer import Buffer


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class StringToken:
    """A maximal run of ASCII digits."""

    value: Buffer
    span: Span


@dataclass(frozen=True, slots=True)
class OpToken:
    """One of the single-character operators ( ) . ^"""

    op: str
    span: Span


@dataclass(frozen=True, slots=True)
class EndToken:
    """End of input."""

    span: Span


Token = StringToken | OpToken | EndToken

OPERATORS = frozenset("().^")

# Space, tab, backspace, vertical tab, carriage return, newline
WHITESPACE = frozenset(" \t\b\v\r\n")

_DIGITS = frozenset("0123456789")


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in _DIGITS


def is_op(tok: Token, op: str) -> bool:
    """Return True if tok is the operator token *op*."""
    return isinstance(tok, OpToken) and tok.op == op


def describe(tok: Token) -> str:
    """Short human-readable description of a token for error messages."""
    if isinstance(tok, EndToken):
        return "end of input"
    if isinstance(tok, OpToken):
        return f"'{tok.op}'"
    return f"literal '{tok.value.decode()}'"
