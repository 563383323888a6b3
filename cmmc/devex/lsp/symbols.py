"""Document symbol provider for CMM.

Walks the AST to produce a DocumentSymbol hierarchy for the Outline view:
functions (with their parameters and locals as children) and globals.
"""

from __future__ import annotations

from typing import Optional

from lsprotocol import types as lsp

from cmmc.compiler.ast_nodes import (
    Block, For, FunctionDecl, If, Switch, VarDecl, While,
)
from cmmc.devex.lsp.diagnostics import AnalysisResult


def _pos(line: int, col: int) -> lsp.Position:
    """Convert 1-based compiler position to 0-based LSP position."""
    return lsp.Position(line=max(0, line - 1), character=max(0, col - 1))


def find_closing_brace_line(source_lines: list[str], start_line: int) -> Optional[int]:
    """Find the line of the closing brace matching the first opening brace."""
    depth = 0
    found_open = False
    for i in range(start_line, len(source_lines)):
        for ch in source_lines[i]:
            if ch == "{":
                depth += 1
                found_open = True
            elif ch == "}":
                depth -= 1
                if found_open and depth == 0:
                    return i
    return None


def _range_from_node(node, source_lines: list[str]) -> lsp.Range:
    start = _pos(node.line, node.col)

    if isinstance(node, FunctionDecl) and node.body is not None:
        end_line = find_closing_brace_line(source_lines, node.line - 1)
        if end_line is not None:
            end_col = len(source_lines[end_line])
            return lsp.Range(
                start=start, end=lsp.Position(line=end_line, character=end_col)
            )

    line_idx = max(0, node.line - 1)
    end_col = len(source_lines[line_idx]) if line_idx < len(source_lines) else 0
    return lsp.Range(start=start, end=lsp.Position(line=line_idx, character=end_col))


def _selection_range(node) -> lsp.Range:
    """Selection range covering just the declared name."""
    start = _pos(node.name_line, node.name_col)
    end = lsp.Position(line=start.line, character=start.character + len(node.name))
    return lsp.Range(start=start, end=end)


def _function_detail(func: FunctionDecl) -> str:
    """Build a detail string like 'int add(int a, int b)'."""
    params = ", ".join(f"{p.type} {p.name}" for p in func.params) or "void"
    return f"{func.return_type} {func.name}({params})"


def _local_decls(stmt) -> list[VarDecl]:
    """Every local declaration nested anywhere in a statement, in source order."""
    if isinstance(stmt, VarDecl):
        return [stmt]
    if isinstance(stmt, Block):
        return [d for s in stmt.statements for d in _local_decls(s)]
    if isinstance(stmt, If):
        found = _local_decls(stmt.then_branch)
        if stmt.else_branch is not None:
            found += _local_decls(stmt.else_branch)
        return found
    if isinstance(stmt, While):
        return _local_decls(stmt.body)
    if isinstance(stmt, For):
        found = _local_decls(stmt.init) if stmt.init is not None else []
        return found + _local_decls(stmt.body)
    if isinstance(stmt, Switch):
        return [d for case in stmt.cases for s in case.body for d in _local_decls(s)]
    return []


def _variable_symbol(node, kind: lsp.SymbolKind, source_lines: list[str]) -> lsp.DocumentSymbol:
    return lsp.DocumentSymbol(
        name=node.name,
        kind=kind,
        range=_range_from_node(node, source_lines),
        selection_range=_selection_range(node),
        detail=node.type,
    )


def get_document_symbols(result: AnalysisResult) -> list[lsp.DocumentSymbol]:
    """Extract document symbols from the parsed AST."""
    if not result.ast:
        return []

    source_lines = result.source.split("\n")
    symbols: list[lsp.DocumentSymbol] = []

    for decl in result.ast.declarations:
        if isinstance(decl, FunctionDecl):
            children = [_variable_symbol(p, lsp.SymbolKind.Variable, source_lines)
                        for p in decl.params]
            if decl.body is not None:
                children += [_variable_symbol(d, lsp.SymbolKind.Variable, source_lines)
                             for d in _local_decls(decl.body)]
            symbols.append(
                lsp.DocumentSymbol(
                    name=decl.name,
                    kind=lsp.SymbolKind.Function,
                    range=_range_from_node(decl, source_lines),
                    selection_range=_selection_range(decl),
                    detail=_function_detail(decl),
                    children=children,
                )
            )
        elif isinstance(decl, VarDecl):
            symbols.append(_variable_symbol(decl, lsp.SymbolKind.Variable, source_lines))

    return symbols
