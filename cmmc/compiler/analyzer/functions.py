"""Declaration analysis: function bodies, parameters, and global variables."""

from ..ast_nodes import (
    Block, FunctionDecl, If, IntLiteral, Return, UnaryExpr, VarDecl, INT, VOID,
)
from ..errors import InternalCompilerError
from .core import TypeCheckError


class FunctionsMixin:

    def _analyze_decl(self, decl):
        if isinstance(decl, FunctionDecl):
            self._analyze_function(decl)
        elif isinstance(decl, VarDecl):
            self._analyze_global(decl)
        else:
            raise InternalCompilerError(
                f"unhandled declaration {type(decl).__name__}")

    def _analyze_function(self, decl: FunctionDecl):
        if decl.body is None:
            return
        self.current_function = decl
        self._slot_count = 0
        self.loop_depth = 0
        self.break_depth = 0

        # Parameters and the outermost block share one scope, so a local
        # cannot redeclare a parameter.
        self._push_scope()
        for param in decl.params:
            param.symbol = self._declare(param.name, param.type, "param",
                                         param, slot=self._allocate_slot())
        for stmt in decl.body.statements:
            self._analyze_stmt(stmt)
        self._pop_scope()

        decl.frame_slots = self._slot_count
        if (decl.return_type != VOID and decl.name != "main"
                and not _always_returns(decl.body)):
            self._warning(
                f"Control may reach the end of non-void function '{decl.name}'",
                decl.line, decl.col)
        self.current_function = None

    def _analyze_global(self, decl: VarDecl):
        if decl.type == VOID:
            raise TypeCheckError(f"Variable '{decl.name}' declared void",
                                 decl.line, decl.col)
        if decl.initializer is not None:
            self._require_int(decl.initializer, f"Initializer of '{decl.name}'")
            if constant_value(decl.initializer) is None:
                raise TypeCheckError(
                    f"Initializer of global '{decl.name}' must be an integer constant",
                    decl.initializer.line, decl.initializer.col)
        decl.symbol = self._declare(decl.name, INT, "global", decl, slot=decl.name)


def _always_returns(stmt) -> bool:
    if isinstance(stmt, Return):
        return True
    if isinstance(stmt, Block):
        return any(_always_returns(s) for s in stmt.statements)
    if isinstance(stmt, If):
        return (stmt.else_branch is not None
                and _always_returns(stmt.then_branch)
                and _always_returns(stmt.else_branch))
    return False


def constant_value(expr):
    """Value of an integer constant initializer, or None if not constant."""
    if isinstance(expr, IntLiteral):
        return expr.value
    if isinstance(expr, UnaryExpr) and expr.op in ("-", "+"):
        inner = constant_value(expr.operand)
        if inner is None:
            return None
        return -inner if expr.op == "-" else inner
    return None
