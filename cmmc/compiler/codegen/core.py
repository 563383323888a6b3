"""Code generator core: output buffer, labels, stack depth, and symbol access."""

from __future__ import annotations

from ..analyzer.core import AnalyzedProgram, Symbol
from ..errors import InternalCompilerError

INDENT = "    "

# System V integer argument registers, 32-bit views
ARG_REGISTERS = ("edi", "esi", "edx", "ecx", "r8d", "r9d")


class CodeGenBase:
    def __init__(self, analyzed: AnalyzedProgram, *,
                 debug: bool = False, source_file: str = ""):
        self.analyzed = analyzed
        self.debug = debug
        self.source_file = source_file
        self.output: list[str] = []
        self._label_counter = 0
        # 8-byte pushes outstanding since the current frame was set up
        self._depth = 0
        self._break_labels: list[str] = []
        self._continue_labels: list[str] = []
        self._return_label = ""

    # ---- Output ----

    def _emit(self, instr: str):
        self.output.append(f"{INDENT}{instr}")

    def _emit_label(self, label: str):
        self.output.append(f"{label}:")

    def _emit_raw(self, line: str = ""):
        self.output.append(line)

    def _fresh_label(self, kind: str) -> str:
        self._label_counter += 1
        return f".L{kind}_{self._label_counter}"

    # ---- Stack ----

    def _push(self, reg: str = "rax"):
        self._emit(f"push {reg}")
        self._depth += 1

    def _pop(self, reg: str):
        self._emit(f"pop {reg}")
        self._depth -= 1

    # ---- Symbols ----

    def _symbol(self, node) -> Symbol:
        if node.symbol is None:
            raise InternalCompilerError(
                f"{type(node).__name__} at {node.line}:{node.col} has no symbol")
        return self.analyzed.symbol(node.symbol)

    def _operand(self, symbol: Symbol) -> str:
        """Memory operand holding a variable's 32-bit value."""
        if isinstance(symbol.slot, int):
            return f"dword [rbp{symbol.slot:+d}]"
        if symbol.kind == "global":
            return f"dword [rel {symbol.slot}]"
        raise InternalCompilerError(
            f"symbol '{symbol.name}' ({symbol.kind}) has no storage")

    def _require_type(self, expr):
        if expr.resolved_type is None:
            raise InternalCompilerError(
                f"{type(expr).__name__} at {expr.line}:{expr.col} was not type-checked")
