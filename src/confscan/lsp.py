"""Minimal LSP server for config files: diagnostics only."""

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

from confscan import tokens
from confscan.scanner import Scanner
from confscan.tokens import TokenKind

server = LanguageServer("confscan-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _lsp_position(pos: tokens.Position) -> Position:
    # LSP positions are 0-based
    return Position(line=pos.line - 1, character=pos.column - 1)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish one diagnostic per invalid token."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for token in Scanner(doc.source):
        if token.kind is not TokenKind.INVALID or token.error is None:
            continue
        diagnostics.append(
            Diagnostic(
                range=Range(start=_lsp_position(token.start), end=_lsp_position(token.end)),
                message=token.error.message,
                severity=DiagnosticSeverity.Error,
                source="confscan",
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
