"""Two-token lookahead window over a Lexer."""

from __future__ import annotations

from strcalc.lexer import Lexer
from strcalc.tokens import Token


class Lookahead:
    """Expose the current token and the one after it.

    Both tokens are lexed eagerly; reading failures surface here as
    SourceReadError.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self._current = lexer.next_token()
        self._next = lexer.next_token()

    def peek(self) -> Token:
        return self._current

    def peek_next(self) -> Token:
        return self._next

    def advance(self) -> Token:
        """Consume the current token and return it."""
        tok = self._current
        self._current = self._next
        self._next = self.lexer.next_token()
        return tok
