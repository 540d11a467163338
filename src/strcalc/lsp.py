"""Minimal LSP server for strcalc, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from strcalc import __version__
from strcalc.errors import EvalError, LexWarning, ParseError, StrcalcError
from strcalc.eval import evaluate
from strcalc.parser import parse

server = LanguageServer(
    "strcalc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _span_range(exc: StrcalcError) -> Range:
    start = exc.span.start
    end = exc.span.end
    end_col = end.column - 1
    if end.line == start.line and end.column <= start.column:
        # End-of-input errors have an empty span; mark one character
        end_col = start.column
    return Range(
        start=Position(line=start.line - 1, character=start.column - 1),
        end=Position(line=end.line - 1, character=end_col),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the strcalc pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    warnings: list[LexWarning] = []
    diagnostics: list[Diagnostic] = []

    try:
        tree = parse(source, filename, warnings.append)
    except ParseError as exc:
        diagnostics.append(
            Diagnostic(
                range=_span_range(exc),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="strcalc",
            )
        )
    else:
        try:
            evaluate(tree)
        except EvalError as exc:
            diagnostics.append(
                Diagnostic(
                    range=_span_range(exc),
                    message=exc.message,
                    severity=DiagnosticSeverity.Warning,
                    source="strcalc",
                )
            )

    for warning in warnings:
        line = warning.position.line - 1
        col = warning.position.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=warning.message,
                severity=DiagnosticSeverity.Warning,
                source="strcalc",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
