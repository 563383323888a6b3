"""Code generator: main class and module-level layout of the assembly file.

Walks an AnalyzedProgram and produces NASM x86-64 source text for the
System V ABI. All instruction selection happens in the mixins.
"""

from __future__ import annotations

import logging

from ..ast_nodes import FunctionDecl, VarDecl
from ..analyzer.core import AnalyzedProgram
from ..analyzer.functions import constant_value
from ..errors import InternalCompilerError
from .core import CodeGenBase, INDENT
from .expressions import ExpressionsMixin
from .functions import FunctionsMixin
from .statements import StatementsMixin

logger = logging.getLogger(__name__)


class CodeGen(ExpressionsMixin, StatementsMixin, FunctionsMixin, CodeGenBase):
    """Walks an analyzed AST and produces assembly text."""

    def __init__(self, analyzed: AnalyzedProgram, *,
                 debug: bool = False, source_file: str = ""):
        super().__init__(analyzed, debug=debug, source_file=source_file)
        decls = analyzed.program.declarations
        self.functions = [d for d in decls
                          if isinstance(d, FunctionDecl) and d.body is not None]
        self.defined_functions = {f.name for f in self.functions}
        self.globals = [d for d in decls if isinstance(d, VarDecl)]

    def generate(self) -> str:
        """Generate the complete assembly file for the analyzed program."""
        self.output = []
        self._label_counter = 0
        self._emit_header()
        self._emit_data()
        self._emit_raw()
        self._emit_raw("section .text")
        for func in self.functions:
            self._gen_function(func)
        self._emit_raw()
        self._emit_raw("section .note.GNU-stack noalloc noexec nowrite progbits")
        text = "\n".join(self.output) + "\n"
        logger.debug("generated %d functions, %d lines of assembly",
                     len(self.functions), len(self.output))
        return text

    def _emit_header(self):
        source = self.source_file or "<stdin>"
        self._emit_raw(f"; generated by cmmc from {source}")
        self._emit_raw("default rel")
        self._emit_raw()
        for func in self.functions:
            self._emit_raw(f"global {func.name}")
        for name in self._extern_functions():
            self._emit_raw(f"extern {name}")

    def _extern_functions(self) -> list[str]:
        """Prototyped functions with no body, in declaration order."""
        names: list[str] = []
        for decl in self.analyzed.program.declarations:
            if (isinstance(decl, FunctionDecl) and decl.body is None
                    and decl.name not in self.defined_functions
                    and decl.name not in names):
                names.append(decl.name)
        return names

    def _emit_data(self):
        if not self.globals:
            return
        self._emit_raw()
        self._emit_raw("section .data")
        for decl in self.globals:
            symbol = self._symbol(decl)
            value = 0
            if decl.initializer is not None:
                value = constant_value(decl.initializer)
                if value is None:
                    raise InternalCompilerError(
                        f"global '{decl.name}' has a non-constant initializer")
            self._emit_raw(f"{symbol.slot}:")
            self._emit_raw(f"{INDENT}dd {value}")
