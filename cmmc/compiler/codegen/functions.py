"""Function lowering: frame setup, parameter spills, and the shared epilogue."""

from ..ast_nodes import FunctionDecl
from ..analyzer.core import SLOT_SIZE
from ..errors import InternalCompilerError
from .core import ARG_REGISTERS


def frame_size(slots: int) -> int:
    """Bytes reserved below rbp for `slots` locals, kept 16-byte aligned."""
    size = slots * SLOT_SIZE
    return (size + 15) // 16 * 16


class FunctionsMixin:

    def _gen_function(self, decl: FunctionDecl):
        self._depth = 0
        self._break_labels = []
        self._continue_labels = []
        self._return_label = self._fresh_label("ret")

        self._emit_raw()
        self._emit_label(decl.name)
        self._emit("push rbp")
        self._emit("mov rbp, rsp")
        size = frame_size(decl.frame_slots)
        if size:
            self._emit(f"sub rsp, {size}")
        self._spill_params(decl)

        for stmt in decl.body.statements:
            self._gen_stmt(stmt)

        if decl.name == "main":
            self._emit("mov eax, 0")
        self._emit_label(self._return_label)
        self._emit("mov rsp, rbp")
        self._emit("pop rbp")
        self._emit("ret")

        if self._depth != 0:
            raise InternalCompilerError(
                f"unbalanced stack in '{decl.name}' ({self._depth} pushes left)")

    def _spill_params(self, decl: FunctionDecl):
        for i, param in enumerate(decl.params):
            dest = self._operand(self._symbol(param))
            if i < len(ARG_REGISTERS):
                self._emit(f"mov {dest}, {ARG_REGISTERS[i]}")
            else:
                # Caller-pushed arguments sit above the return address
                offset = 16 + SLOT_SIZE * (i - len(ARG_REGISTERS))
                self._emit(f"mov eax, dword [rbp+{offset}]")
                self._emit(f"mov {dest}, eax")
