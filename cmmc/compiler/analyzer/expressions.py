"""Expression analysis: name resolution and type tagging of every node."""

from ..ast_nodes import (
    Assign, BinaryExpr, Call, Identifier, IntLiteral, UnaryExpr, INT,
)
from ..errors import InternalCompilerError
from .core import TypeCheckError, UndeclaredError


class ExpressionsMixin:

    def _analyze_expr(self, expr) -> str:
        """Resolve and type an expression tree; returns (and records) its type."""
        if isinstance(expr, IntLiteral):
            expr.resolved_type = INT
        elif isinstance(expr, Identifier):
            self._resolve_variable(expr)
        elif isinstance(expr, Assign):
            self._resolve_variable(expr.target)
            self._require_int(expr.value, f"Value assigned to '{expr.target.name}'")
            expr.resolved_type = INT
        elif isinstance(expr, BinaryExpr):
            self._require_int(expr.left, f"Left operand of '{expr.op}'")
            self._require_int(expr.right, f"Right operand of '{expr.op}'")
            expr.resolved_type = INT
        elif isinstance(expr, UnaryExpr):
            self._require_int(expr.operand, f"Operand of '{expr.op}'")
            expr.resolved_type = INT
        elif isinstance(expr, Call):
            self._analyze_call(expr)
        else:
            raise InternalCompilerError(f"unhandled expression {type(expr).__name__}")
        return expr.resolved_type

    def _require_int(self, expr, what: str):
        found = self._analyze_expr(expr)
        if found != INT:
            raise TypeCheckError(f"{what} must be 'int', got '{found}'",
                                 expr.line, expr.col)

    def _resolve_variable(self, ident: Identifier):
        index = self.scopes.lookup(ident.name)
        if index is None:
            raise UndeclaredError(f"Use of undeclared identifier '{ident.name}'",
                                  ident.line, ident.col)
        symbol = self.symbols[index]
        if symbol.kind == "function":
            raise TypeCheckError(f"Function '{ident.name}' used as a value",
                                 ident.line, ident.col)
        ident.symbol = index
        ident.resolved_type = symbol.type

    def _analyze_call(self, call: Call):
        index = self.scopes.lookup(call.name)
        if index is None:
            raise UndeclaredError(f"Call to undeclared function '{call.name}'",
                                  call.line, call.col)
        symbol = self.symbols[index]
        if symbol.kind != "function":
            raise TypeCheckError(f"Called object '{call.name}' is not a function",
                                 call.line, call.col)
        signature = self.signatures[call.name]
        if len(call.args) != len(signature.param_types):
            raise TypeCheckError(
                f"Function '{call.name}' expects {len(signature.param_types)} "
                f"argument(s), got {len(call.args)}", call.line, call.col)
        for i, (arg, param_type) in enumerate(zip(call.args, signature.param_types), 1):
            found = self._analyze_expr(arg)
            if found != param_type:
                raise TypeCheckError(
                    f"Argument {i} of '{call.name}' must be '{param_type}', "
                    f"got '{found}'", arg.line, arg.col)
        call.symbol = index
        call.resolved_type = signature.return_type
