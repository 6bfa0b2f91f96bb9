"""Minimal LSP server for equation files — one diagnostic per offending line."""

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

from polyeq import __version__
from polyeq.analysis import VariableCount
from polyeq.driver import check_line
from polyeq.errors import LexError, RejectedEquation
from polyeq.tokens import Span

server = LanguageServer("polyeq-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _range(line: int, span: Span) -> Range:
    # Each line is analyzed on its own, so spans are always on line 1 of it
    return Range(
        start=Position(line=line, character=span.start.column - 1),
        end=Position(line=line, character=max(span.end.column, span.start.column + 1) - 1),
    )


def _diagnose_line(line: int, source: str) -> Diagnostic | None:
    try:
        report = check_line(source)
    except RejectedEquation as exc:
        return Diagnostic(
            range=_range(line, exc.span),
            message=exc.message,
            severity=DiagnosticSeverity.Error,
            source="polyeq",
        )
    except LexError as exc:
        col = exc.position.column - 1
        return Diagnostic(
            range=Range(
                start=Position(line=line, character=col),
                end=Position(line=line, character=col + 1),
            ),
            message=exc.message,
            severity=DiagnosticSeverity.Error,
            source="polyeq",
        )

    if report.variables is VariableCount.MANY:
        return Diagnostic(
            range=Range(
                start=Position(line=line, character=0),
                end=Position(line=line, character=len(source)),
            ),
            message="equation is not in 1 variable",
            severity=DiagnosticSeverity.Information,
            source="polyeq",
        )
    return None


def _validate(ls: LanguageServer, uri: str) -> None:
    """Classify every non-blank line of the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for line, source in enumerate(doc.source.splitlines()):
        if not source.strip():
            continue
        diagnostic = _diagnose_line(line, source)
        if diagnostic is not None:
            diagnostics.append(diagnostic)

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
