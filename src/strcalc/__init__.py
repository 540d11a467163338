"""strcalc string-expression language."""

from __future__ import annotations

__version__ = "0.1.0"


def calculate(source: str, filename: str = "<string>") -> bytes:
    """Parse and evaluate a strcalc program, returning the result bytes."""
    from strcalc.eval import evaluate
    from strcalc.parser import parse

    return bytes(evaluate(parse(source, filename)))
