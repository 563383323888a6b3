"""Tests for LSP diagnostics and document symbols."""

from lsprotocol import types as lsp

from cmmc.devex.lsp.diagnostics import compute_diagnostics, uri_to_path
from cmmc.devex.lsp.symbols import get_document_symbols

URI = "file:///tmp/prog.c"


class TestDiagnostics:
    def test_clean_program(self):
        result = compute_diagnostics(URI, "int main() { return 0; }")
        assert result.diagnostics == []
        assert result.analyzed is not None

    def test_positions_are_zero_based(self):
        result = compute_diagnostics(URI, "int main() {\n    break;\n}")
        (diag,) = result.diagnostics
        assert diag.range.start == lsp.Position(line=1, character=4)
        assert diag.severity == lsp.DiagnosticSeverity.Error
        assert diag.message == "'break' statement outside of loop or switch"
        assert diag.source == "cmmc (ControlFlowError)"

    def test_every_lexical_error_reported(self):
        result = compute_diagnostics(URI, "int main() { return 1 @ 2 # 3; }")
        assert [d.range.start.character for d in result.diagnostics] == [22, 26]
        assert result.ast is None

    def test_parse_error_keeps_tokens(self):
        result = compute_diagnostics(URI, "int main() { return 1 }")
        assert len(result.diagnostics) == 1
        assert result.tokens is not None
        assert result.ast is None

    def test_semantic_error_keeps_ast(self):
        result = compute_diagnostics(URI, "int main() { return x; }")
        assert "undeclared identifier 'x'" in result.diagnostics[0].message
        assert result.ast is not None
        assert result.analyzed is None

    def test_warning_severity(self):
        result = compute_diagnostics(URI, "int f(int x) {\n  if (x) return 1;\n}")
        (diag,) = result.diagnostics
        assert diag.severity == lsp.DiagnosticSeverity.Warning
        assert diag.range.start.line == 0

    def test_uri_to_path(self):
        assert uri_to_path("file:///home/me/my%20prog.c") == "/home/me/my prog.c"


class TestDocumentSymbols:
    SOURCE = (
        "int limit = 10;\n"
        "int soma(int x, int y) {\n"
        "    int total = x + y;\n"
        "    for (int i = 0; i < limit; i = i + 1) { total = total + i; }\n"
        "    return total;\n"
        "}\n"
        "int helper(void);\n"
    )

    def symbols(self):
        return get_document_symbols(compute_diagnostics(URI, self.SOURCE))

    def test_top_level_symbols(self):
        syms = self.symbols()
        assert [(s.name, s.kind) for s in syms] == [
            ("limit", lsp.SymbolKind.Variable),
            ("soma", lsp.SymbolKind.Function),
            ("helper", lsp.SymbolKind.Function),
        ]

    def test_function_detail_and_children(self):
        soma = self.symbols()[1]
        assert soma.detail == "int soma(int x, int y)"
        assert [c.name for c in soma.children] == ["x", "y", "total", "i"]

    def test_function_range_spans_body(self):
        soma = self.symbols()[1]
        assert soma.range.start.line == 1
        assert soma.range.end.line == 5

    def test_selection_range_covers_name(self):
        lines = self.SOURCE.split("\n")

        def selected(sym):
            rng = sym.selection_range
            assert rng.start.line == rng.end.line
            return lines[rng.start.line][rng.start.character:rng.end.character]

        limit, soma, helper = self.symbols()
        assert selected(limit) == "limit"
        assert selected(soma) == "soma"
        assert selected(helper) == "helper"
        assert [selected(c) for c in soma.children] == ["x", "y", "total", "i"]

    def test_prototype_detail(self):
        helper = self.symbols()[2]
        assert helper.detail == "int helper(void)"
        assert helper.children == []

    def test_no_symbols_without_ast(self):
        result = compute_diagnostics(URI, "int main( {")
        assert get_document_symbols(result) == []
