"""Minimal LSP server for Almond, publishing lexical diagnostics only."""

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

from almond import __version__
from almond.lexer import scan

server = LanguageServer("almond-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish its lexical diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    result = scan(doc.source)
    diagnostics: list[Diagnostic] = []

    for diag in result.diagnostics:
        if diag.span is None:
            start = end = Position(line=diag.line - 1, character=0)
        else:
            start = Position(
                line=diag.span.start.line - 1, character=diag.span.start.column - 1
            )
            end = Position(line=diag.span.end.line - 1, character=diag.span.end.column - 1)
        diagnostics.append(
            Diagnostic(
                range=Range(start=start, end=end),
                message=diag.message,
                severity=DiagnosticSeverity.Error,
                source="almond",
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
