"""strcalc parser: recursive descent from a Lookahead cursor into an AST.

Precedence, tightest first: primary, repeat (``^``), concat (``.``).
Concatenation folds to the left. A ``^`` chain recurses to the right only
when the token two ahead of the ``^`` is another ``^``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TextIO

from strcalc.ast import Node, new_binary, new_literal
from strcalc.cursor import Lookahead
from strcalc.errors import LexWarning, ParseError
from strcalc.lexer import Lexer
from strcalc.tokens import EndToken, StringToken, Token, describe, is_op

DEFAULT_MAX_DEPTH = 200

# Each level of nesting costs up to three interpreter frames
MAX_DEPTH_LIMIT = 250


class Parser:
    """Recursive descent parser over a two-token lookahead window."""

    def __init__(self, cursor: Lookahead, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._cursor = cursor
        self._max_depth = max_depth
        self._depth = 0

    def parse(self) -> Node:
        """Parse one complete program; trailing tokens are an error."""
        try:
            node = self.parse_concat()
        except RecursionError:
            raise self._error("expression nested too deeply", self._cursor.peek()) from None
        tok = self._cursor.peek()
        if not isinstance(tok, EndToken):
            raise self._error(f"unexpected trailing input: {describe(tok)}", tok)
        return node

    def parse_concat(self) -> Node:
        left = self.parse_repeat()
        while is_op(self._cursor.peek(), "."):
            self._cursor.advance()
            right = self.parse_repeat()
            left = new_binary(".", left, right)
        return left

    def parse_repeat(self) -> Node:
        left = self.parse_primary()
        tok = self._cursor.peek()
        if not is_op(tok, "^"):
            return left

        self._cursor.advance()
        # Looks past the first token of the right operand, not past the
        # whole operand: "1^(2)^3" takes the single-primary branch.
        if is_op(self._cursor.peek_next(), "^"):
            self._enter(tok)
            try:
                right = self.parse_repeat()
            finally:
                self._depth -= 1
        else:
            right = self.parse_primary()
        return new_binary("^", left, right)

    def parse_primary(self) -> Node:
        tok = self._cursor.peek()

        if isinstance(tok, StringToken):
            self._cursor.advance()
            return new_literal(tok.value, tok.span)

        if is_op(tok, "("):
            self._cursor.advance()
            self._enter(tok)
            try:
                node = self.parse_concat()
            finally:
                self._depth -= 1
            close = self._cursor.peek()
            if not is_op(close, ")"):
                raise self._error(f"expected ')' to close '(', found {describe(close)}", close)
            self._cursor.advance()
            return node

        raise self._error(f"expected a string literal or '(', found {describe(tok)}", tok)

    def _enter(self, tok: Token) -> None:
        if self._depth >= self._max_depth:
            raise self._error(f"expression nested too deeply (limit {self._max_depth})", tok)
        self._depth += 1

    def _error(self, message: str, tok: Token) -> ParseError:
        return ParseError(message, tok.span, self._cursor.lexer.text)


def parse(
    source: str | TextIO,
    filename: str = "<stdin>",
    on_warning: Callable[[LexWarning], None] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Node:
    """Convenience function: parse source text or a stream into an AST."""
    cursor = Lookahead(Lexer(source, filename, on_warning))
    return Parser(cursor, max_depth).parse()
