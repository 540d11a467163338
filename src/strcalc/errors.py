"""Error and warning types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass

from strcalc.tokens import Position, Span


class StrcalcError(Exception):
    """Base for fatal errors. Carries a span and the source text read so far."""

    def __init__(self, message: str, span: Span, source: str = "") -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(message)

    def summary(self, filename: str = "<stdin>") -> str:
        """One-line form: ``error: message (file:line:col)``."""
        start = self.span.start
        return f"error: {self.message} ({filename}:{start.line}:{start.column})"

    def format(self, filename: str = "<stdin>") -> str:
        """Multi-line form with the offending source line underlined."""
        lines = [text.rstrip("\r") for text in self.source.split("\n")]
        line = self.span.start.line
        col = self.span.start.column

        # An empty span is end of input; when it sits on a blank line, point
        # one past the last character of the last non-blank line instead.
        if self.span.start == self.span.end and line > 1:
            if line > len(lines) or not lines[line - 1].strip():
                while line > 1 and (line > len(lines) or not lines[line - 1].strip()):
                    line -= 1
                col = len(lines[line - 1].rstrip()) + 1

        text = lines[line - 1] if line <= len(lines) else ""
        # Undecodable input is held as lone surrogates; show one '?' for each
        text = text.encode("utf-8", "replace").decode("utf-8")

        if self.span.end.line != self.span.start.line:
            width = max(1, len(text) - col + 1)
        else:
            width = max(1, self.span.end.column - self.span.start.column)

        gutter = " " * (len(str(line)) + 1)
        return "\n".join(
            [
                f"error: {self.message}",
                f"{gutter}--> {filename}:{line}:{col}",
                f"{gutter}|",
                f"{line:>{len(gutter) - 1}} | {text}",
                f"{gutter}| {' ' * (col - 1)}{'^' * width}",
            ]
        )


class SourceReadError(StrcalcError):
    """Raised when the input stream cannot be read or decoded."""


class ParseError(StrcalcError):
    """Raised on the first grammar violation."""


class EvalError(StrcalcError):
    """Raised when a tree cannot be reduced to a value."""


@dataclass(frozen=True, slots=True)
class LexWarning:
    """Non-fatal lexer diagnostic, e.g. a skipped character."""

    message: str
    position: Position

    def format(self, filename: str = "<stdin>") -> str:
        pos = self.position
        return f"warning: {self.message} ({filename}:{pos.line}:{pos.column})"
