"""Minimal LSP server for ASL sources: lexical diagnostics only."""

from __future__ import annotations

import logging

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

from asllex import __version__
from asllex.errors import LexError
from asllex.scanner import scan_all

log = logging.getLogger(__name__)

server = LanguageServer("asllex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_diagnostic(exc: LexError) -> Diagnostic:
    line = exc.position.line - 1
    col = exc.position.column - 1
    # Offending text may run onto later lines (unterminated literals); keep the range on one line
    width = len(exc.text.split("\n", 1)[0]) or 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + width),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="asllex",
        code=exc.kind,
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish one diagnostic per lexical error."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    _, errors = scan_all(doc.source, filename)
    log.debug("%s: %d lexical error(s)", filename, len(errors))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=[_to_diagnostic(e) for e in errors])
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
