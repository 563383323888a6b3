"""Analyzer core: error types, symbol arena, scope stack, and orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from ..ast_nodes import FunctionDecl, Program
from ..errors import CompileError

logger = logging.getLogger(__name__)

SLOT_SIZE = 8


class SemanticError(CompileError):
    pass


class DuplicateDeclarationError(SemanticError):
    pass


class UndeclaredError(SemanticError):
    pass


class TypeCheckError(SemanticError):
    pass


class ControlFlowError(SemanticError):
    pass


@dataclass
class Symbol:
    name: str
    type: str
    kind: str = "variable"  # "variable" | "param" | "global" | "function"
    depth: int = 0
    # Negative rbp offset for locals and params, assembly label otherwise
    slot: Union[int, str, None] = None
    line: int = 0
    col: int = 0


@dataclass(frozen=True)
class FunctionSignature:
    name: str
    param_types: tuple[str, ...]
    return_type: str

    def __str__(self):
        params = ", ".join(self.param_types) or "void"
        return f"{self.return_type} {self.name}({params})"


class ScopeStack:
    """Nested lexical scopes mapping names to indices in the symbol arena."""

    def __init__(self):
        self._scopes: list[dict[str, int]] = []

    def push(self):
        self._scopes.append({})

    def pop(self):
        self._scopes.pop()

    @property
    def depth(self) -> int:
        return len(self._scopes) - 1

    def lookup(self, name: str) -> Optional[int]:
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        return None

    def lookup_current(self, name: str) -> Optional[int]:
        return self._scopes[-1].get(name)

    def define(self, name: str, index: int):
        self._scopes[-1][name] = index


@dataclass
class AnalyzedProgram:
    program: Program
    symbols: list[Symbol] = field(default_factory=list)
    signatures: dict[str, FunctionSignature] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def symbol(self, index: int) -> Symbol:
        return self.symbols[index]


class AnalyzerBase:
    def __init__(self):
        self.symbols: list[Symbol] = []
        self.signatures: dict[str, FunctionSignature] = {}
        self.defined_functions: set[str] = set()
        self.warnings: list[str] = []
        self.scopes = ScopeStack()
        self.current_function: FunctionDecl | None = None
        self.loop_depth: int = 0
        self.break_depth: int = 0
        self._slot_count: int = 0

    def analyze(self, program: Program) -> AnalyzedProgram:
        self.scopes.push()
        self._register_declarations(program)
        for decl in program.declarations:
            self._analyze_decl(decl)
        self.scopes.pop()
        logger.debug("analyzed %d declarations, %d symbols, %d warnings",
                     len(program.declarations), len(self.symbols), len(self.warnings))
        return AnalyzedProgram(
            program=program,
            symbols=self.symbols,
            signatures=self.signatures,
            warnings=self.warnings,
        )

    def _warning(self, msg: str, line: int = 0, col: int = 0):
        self.warnings.append(f"{msg} at {line}:{col}")

    # ---- Scopes and symbols ----

    def _push_scope(self):
        self.scopes.push()

    def _pop_scope(self):
        self.scopes.pop()

    def _declare(self, name: str, type_name: str, kind: str, node,
                 slot: Union[int, str, None] = None) -> int:
        existing = self.scopes.lookup_current(name)
        if existing is not None:
            prev = self.symbols[existing]
            raise DuplicateDeclarationError(
                f"Redeclaration of '{name}' (previously declared at "
                f"{prev.line}:{prev.col})", node.line, node.col)
        index = len(self.symbols)
        self.symbols.append(Symbol(name=name, type=type_name, kind=kind,
                                   depth=self.scopes.depth, slot=slot,
                                   line=node.line, col=node.col))
        self.scopes.define(name, index)
        return index

    def _allocate_slot(self) -> int:
        """Reserve the next stack slot in the current frame; returns its rbp offset."""
        self._slot_count += 1
        return -SLOT_SIZE * self._slot_count
