"""Diagnostic computation for CMM documents.

Runs the compiler pipeline (lexer -> parser -> analyzer) on source text
and converts errors and warnings into LSP Diagnostic objects.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse, unquote

from lsprotocol import types as lsp

from cmmc.compiler.analyzer import Analyzer, AnalyzedProgram
from cmmc.compiler.ast_nodes import Program
from cmmc.compiler.errors import CompileError
from cmmc.compiler.lexer import Lexer
from cmmc.compiler.parser import Parser
from cmmc.compiler.tokens import Token

# Analyzer warnings are strings of the form "message at line:col"
_WARNING_RE = re.compile(r"^(.+) at (\d+):(\d+)$")


@dataclass
class AnalysisResult:
    """Cached result of analyzing a document."""

    uri: str
    source: str
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)
    tokens: Optional[list[Token]] = None
    ast: Optional[Program] = None
    analyzed: Optional[AnalyzedProgram] = None


def uri_to_path(uri: str) -> str:
    """Convert file:// URI to filesystem path."""
    parsed = urlparse(uri)
    return unquote(parsed.path)


def _make_diagnostic(
    line: int,
    col: int,
    message: str,
    severity: lsp.DiagnosticSeverity = lsp.DiagnosticSeverity.Error,
    source: str = "cmmc",
) -> lsp.Diagnostic:
    """Create an LSP Diagnostic.

    The compiler uses 1-based line/col; LSP uses 0-based.
    """
    line_0 = max(0, line - 1)
    col_0 = max(0, col - 1)
    return lsp.Diagnostic(
        range=lsp.Range(
            start=lsp.Position(line=line_0, character=col_0),
            end=lsp.Position(line=line_0, character=col_0 + 1),
        ),
        message=message,
        severity=severity,
        source=source,
    )


def _error_diagnostic(err: CompileError) -> lsp.Diagnostic:
    return _make_diagnostic(err.line, err.col, err.message,
                            source=f"cmmc ({type(err).__name__})")


def compute_diagnostics(uri: str, source: str) -> AnalysisResult:
    """Run the compiler pipeline and return diagnostics."""
    result = AnalysisResult(uri=uri, source=source)
    filename = os.path.basename(uri_to_path(uri))

    # Lexing: every lexical error becomes a diagnostic
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize(recover=True)
    result.tokens = tokens
    if lexer.errors:
        result.diagnostics.extend(_error_diagnostic(e) for e in lexer.errors)
        return result

    # Parsing
    try:
        result.ast = Parser(tokens).parse()
    except CompileError as e:
        result.diagnostics.append(_error_diagnostic(e))
        return result

    # Semantic analysis
    try:
        result.analyzed = Analyzer().analyze(result.ast)
    except CompileError as e:
        result.diagnostics.append(_error_diagnostic(e))
        return result

    for warning in result.analyzed.warnings:
        m = _WARNING_RE.match(warning)
        if m:
            msg, line_s, col_s = m.group(1), m.group(2), m.group(3)
            result.diagnostics.append(_make_diagnostic(
                int(line_s), int(col_s), msg, lsp.DiagnosticSeverity.Warning))
        else:
            result.diagnostics.append(_make_diagnostic(
                1, 1, warning, lsp.DiagnosticSeverity.Warning))

    return result
