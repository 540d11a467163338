"""AST evaluator that reduces a tree to a single Buffer."""

from __future__ import annotations

from dataclasses import dataclass

from strcalc.ast import Concat, Literal, Node, Repeat
from strcalc.buffer import Buffer
from strcalc.errors import EvalError
from strcalc.tokens import Position, Span

DEFAULT_MAX_RESULT_BYTES = 64 * 1024 * 1024

_NO_SPAN = Span(Position(1, 1, 0), Position(1, 1, 0))


@dataclass
class EvalContext:
    """Limits applied during evaluation."""

    max_result_bytes: int = DEFAULT_MAX_RESULT_BYTES


def evaluate(node: Node, max_result_bytes: int = DEFAULT_MAX_RESULT_BYTES) -> Buffer:
    """Evaluate *node* without modifying it and return the resulting string."""
    return _eval(node, EvalContext(max_result_bytes=max_result_bytes))


def _eval(node: Node, ctx: EvalContext) -> Buffer:
    if isinstance(node, Literal):
        return node.value.duplicate()

    if isinstance(node, Concat):
        # Walk the left spine iteratively, then fold left to right.
        rights: list[Concat] = []
        while isinstance(node, Concat):
            rights.append(node)
            node = node.left
        result = _eval(node, ctx)
        for concat in reversed(rights):
            right = _eval(concat.right, ctx)
            _check_size(len(result) + len(right), concat, ctx)
            result = result.concat(right)
        return result

    if isinstance(node, Repeat):
        left = _eval(node.left, ctx)
        count = _eval(node.right, ctx).as_unsigned()
        _check_size(len(left) * count, node, ctx)
        return left.repeat(count)

    span = getattr(node, "span", None)
    if not isinstance(span, Span):
        span = _NO_SPAN
    raise EvalError(f"cannot evaluate unknown node {type(node).__name__}", span)


def _check_size(size: int, node: Concat | Repeat, ctx: EvalContext) -> None:
    if size > ctx.max_result_bytes:
        raise EvalError(
            f"result of {size} bytes exceeds limit of {ctx.max_result_bytes} bytes",
            node.span,
        )
