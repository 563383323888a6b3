"""Statement analysis: blocks, declarations, loops, switch, and jumps."""

from ..ast_nodes import (
    Block, Break, Continue, ExprStmt, For, If, Return, Switch, VarDecl, While,
    INT, VOID,
)
from ..errors import InternalCompilerError
from .core import (
    ControlFlowError, DuplicateDeclarationError, TypeCheckError,
)


class StatementsMixin:

    def _analyze_block(self, block: Block):
        self._push_scope()
        for stmt in block.statements:
            self._analyze_stmt(stmt)
        self._pop_scope()

    def _analyze_body(self, stmt):
        """Analyze a loop or branch body in a scope of its own."""
        self._push_scope()
        self._analyze_stmt(stmt)
        self._pop_scope()

    def _analyze_stmt(self, stmt):
        if isinstance(stmt, VarDecl):
            self._analyze_var_decl(stmt)
        elif isinstance(stmt, Block):
            self._analyze_block(stmt)
        elif isinstance(stmt, If):
            self._require_int(stmt.condition, "'if' condition")
            self._analyze_body(stmt.then_branch)
            if stmt.else_branch is not None:
                self._analyze_body(stmt.else_branch)
        elif isinstance(stmt, While):
            self._require_int(stmt.condition, "'while' condition")
            self.loop_depth += 1
            self.break_depth += 1
            self._analyze_body(stmt.body)
            self.loop_depth -= 1
            self.break_depth -= 1
        elif isinstance(stmt, For):
            self._analyze_for(stmt)
        elif isinstance(stmt, Switch):
            self._analyze_switch(stmt)
        elif isinstance(stmt, Break):
            if self.break_depth == 0:
                raise ControlFlowError("'break' statement outside of loop or switch",
                                       stmt.line, stmt.col)
        elif isinstance(stmt, Continue):
            if self.loop_depth == 0:
                raise ControlFlowError("'continue' statement outside of loop",
                                       stmt.line, stmt.col)
        elif isinstance(stmt, Return):
            self._analyze_return(stmt)
        elif isinstance(stmt, ExprStmt):
            self._analyze_expr(stmt.expr)
        else:
            raise InternalCompilerError(f"unhandled statement {type(stmt).__name__}")

    def _analyze_var_decl(self, stmt: VarDecl):
        if stmt.type == VOID:
            raise TypeCheckError(f"Variable '{stmt.name}' declared void",
                                 stmt.line, stmt.col)
        # The initializer is resolved before the name comes into scope
        if stmt.initializer is not None:
            self._require_int(stmt.initializer, f"Initializer of '{stmt.name}'")
        stmt.symbol = self._declare(stmt.name, INT, "variable", stmt,
                                    slot=self._allocate_slot())

    def _analyze_for(self, stmt: For):
        self._push_scope()
        if isinstance(stmt.init, VarDecl):
            self._analyze_var_decl(stmt.init)
        elif isinstance(stmt.init, ExprStmt):
            self._analyze_expr(stmt.init.expr)
        if stmt.condition is not None:
            self._require_int(stmt.condition, "'for' condition")
        if stmt.step is not None:
            self._analyze_expr(stmt.step)
        self.loop_depth += 1
        self.break_depth += 1
        self._analyze_body(stmt.body)
        self.loop_depth -= 1
        self.break_depth -= 1
        self._pop_scope()

    def _analyze_switch(self, stmt: Switch):
        self._require_int(stmt.value, "'switch' value")
        stmt.temp_slot = self._allocate_slot()
        seen: dict[int, object] = {}
        for case in stmt.cases:
            if case.is_default:
                continue
            case.value.resolved_type = INT
            if case.value.value in seen:
                raise DuplicateDeclarationError(
                    f"Duplicate case value {case.value.value} in switch",
                    case.line, case.col)
            seen[case.value.value] = case

        # All case bodies share the switch's single block scope
        self.break_depth += 1
        self._push_scope()
        for case in stmt.cases:
            for s in case.body:
                self._analyze_stmt(s)
        self._pop_scope()
        self.break_depth -= 1

    def _analyze_return(self, stmt: Return):
        func = self.current_function
        if stmt.value is None:
            if func.return_type != VOID:
                raise TypeCheckError(
                    f"Non-void function '{func.name}' must return a value",
                    stmt.line, stmt.col)
            return
        value_type = self._analyze_expr(stmt.value)
        if func.return_type == VOID:
            raise TypeCheckError(
                f"Void function '{func.name}' cannot return a value",
                stmt.line, stmt.col)
        if value_type != func.return_type:
            raise TypeCheckError(
                f"Return type mismatch in '{func.name}': expected "
                f"'{func.return_type}' but got '{value_type}'",
                stmt.line, stmt.col)
