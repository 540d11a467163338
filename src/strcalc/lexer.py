"""strcalc lexer: reads a character stream and produces tokens on demand."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import TextIO

from strcalc.buffer import Buffer
from strcalc.errors import LexWarning, SourceReadError
from strcalc.tokens import (
    OPERATORS,
    WHITESPACE,
    EndToken,
    OpToken,
    Position,
    Span,
    StringToken,
    Token,
    is_digit,
)


class _Reader:
    """Character source with one character of pushback and position tracking."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pushback: list[str] = []
        self._line = 1
        self._col = 1
        self._offset = 0
        self._prev = (1, 1, 0)
        self._seen: list[str] = []
        self._eof = False

    @property
    def text(self) -> str:
        """All characters read from the stream so far."""
        return "".join(self._seen)

    def position(self) -> Position:
        return Position(self._line, self._col, self._offset)

    def read(self) -> str:
        """Return the next character, or "" at end of input."""
        if self._pushback:
            ch = self._pushback.pop()
        elif self._eof:
            return ""
        else:
            try:
                ch = self._stream.read(1)
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceReadError(
                    f"failed to read input: {exc}",
                    Span(self.position(), self.position()),
                    self.text,
                ) from exc
            if ch:
                self._seen.append(ch)
            else:
                self._eof = True
        if ch:
            self._prev = (self._line, self._col, self._offset)
            self._offset += 1
            if ch == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
        return ch

    def unread(self, ch: str) -> None:
        """Push back the character returned by the immediately preceding read()."""
        self._pushback.append(ch)
        self._line, self._col, self._offset = self._prev


class Lexer:
    """Tokenize strcalc source one token at a time."""

    def __init__(
        self,
        source: str | TextIO,
        filename: str = "<stdin>",
        on_warning: Callable[[LexWarning], None] | None = None,
    ) -> None:
        if isinstance(source, str):
            source = io.StringIO(source)
        self._reader = _Reader(source)
        self.filename = filename
        self.warnings: list[LexWarning] = []
        self._on_warning = on_warning

    @property
    def text(self) -> str:
        return self._reader.text

    def next_token(self) -> Token:
        """Lex and return the next token, skipping whitespace and unknown characters."""
        while True:
            start = self._reader.position()
            ch = self._reader.read()

            if ch == "":
                return EndToken(Span(start, start))

            if ch in OPERATORS:
                return OpToken(ch, Span(start, self._reader.position()))

            if is_digit(ch):
                return self._lex_string(ch, start)

            if ch in WHITESPACE:
                continue

            self._warn(f"ignoring unrecognized character {ch!r}", start)

    def _lex_string(self, first: str, start: Position) -> StringToken:
        digits = bytearray(first.encode("ascii"))
        while True:
            ch = self._reader.read()
            if not is_digit(ch):
                # The terminating character belongs to the next token
                if ch:
                    self._reader.unread(ch)
                break
            digits.append(ord(ch))
        return StringToken(Buffer(digits), Span(start, self._reader.position()))

    def _warn(self, message: str, pos: Position) -> None:
        warning = LexWarning(message, pos)
        self.warnings.append(warning)
        if self._on_warning is not None:
            self._on_warning(warning)


def tokenize(source: str | TextIO, filename: str = "<stdin>") -> list[Token]:
    """Convenience function: tokenize the whole source, ending with EndToken."""
    lexer = Lexer(source, filename)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if isinstance(tok, EndToken):
            return tokens
