"""Indented AST tree dump."""

from __future__ import annotations

import io
import sys
from typing import TextIO

from strcalc.ast import Concat, Literal, Node, Repeat

# One marker per nesting level
_LEVEL = "|   "


def dump_ast(node: Node, *, file: TextIO = sys.stdout) -> None:
    """Print a human-readable AST tree to *file*, pre-order."""
    # Explicit stack: left-folded concat chains can be arbitrarily deep.
    stack: list[tuple[int, Node | str]] = [(0, node)]
    while stack:
        depth, item = stack.pop()
        if isinstance(item, str):
            file.write(f"{_LEVEL * depth}{item}\n")
        elif isinstance(item, Literal):
            file.write(f"{_LEVEL * depth}String literal:{item.value.decode()}\n")
        elif isinstance(item, (Concat, Repeat)):
            op = "." if isinstance(item, Concat) else "^"
            file.write(f"{_LEVEL * depth}Binop: {op}\n")
            stack.append((depth + 2, item.right))
            stack.append((depth + 1, "Right:"))
            stack.append((depth + 2, item.left))
            stack.append((depth + 1, "Left:"))
        else:
            file.write(f"{_LEVEL * depth}<Unknown node>\n")


def format_ast(node: Node) -> str:
    buf = io.StringIO()
    dump_ast(node, file=buf)
    return buf.getvalue()
