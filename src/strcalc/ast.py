"""AST node types for parsed strcalc programs."""

from __future__ import annotations

from dataclasses import dataclass

from strcalc.buffer import Buffer
from strcalc.tokens import Span


@dataclass(frozen=True, slots=True)
class Literal:
    """A digit-string constant."""

    value: Buffer
    span: Span


@dataclass(frozen=True, slots=True)
class Concat:
    """left . right"""

    left: Node
    right: Node
    span: Span


@dataclass(frozen=True, slots=True)
class Repeat:
    """left ^ right, where right evaluates to the repetition count."""

    left: Node
    right: Node
    span: Span


Node = Literal | Concat | Repeat

BINARY_OPS: dict[str, type[Concat] | type[Repeat]] = {".": Concat, "^": Repeat}


def new_literal(buf: Buffer, span: Span) -> Literal:
    """Wrap a copy of *buf*; the token keeps its own buffer."""
    return Literal(buf.duplicate(), span)


def new_binary(op: str, left: Node, right: Node) -> Concat | Repeat:
    try:
        cls = BINARY_OPS[op]
    except KeyError:
        raise ValueError(f"unknown binary operator {op!r}") from None
    return cls(left, right, Span(left.span.start, right.span.end))
