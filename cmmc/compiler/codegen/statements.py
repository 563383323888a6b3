"""Statement lowering: blocks, branches, loops, switch, and jumps."""

from ..ast_nodes import (
    Block, Break, Continue, ExprStmt, For, If, Return, Switch, VarDecl, While,
)
from ..errors import InternalCompilerError


class StatementsMixin:

    def _gen_stmt(self, stmt):
        if self.debug and not isinstance(stmt, Block):
            self._emit(f"; line {stmt.line}")

        if isinstance(stmt, VarDecl):
            dest = self._operand(self._symbol(stmt))
            if stmt.initializer is not None:
                self._gen_expr(stmt.initializer)
                self._emit(f"mov {dest}, eax")
            else:
                self._emit(f"mov {dest}, 0")
        elif isinstance(stmt, Block):
            for s in stmt.statements:
                self._gen_stmt(s)
        elif isinstance(stmt, ExprStmt):
            self._gen_expr(stmt.expr)
        elif isinstance(stmt, If):
            self._gen_if(stmt)
        elif isinstance(stmt, While):
            self._gen_while(stmt)
        elif isinstance(stmt, For):
            self._gen_for(stmt)
        elif isinstance(stmt, Switch):
            self._gen_switch(stmt)
        elif isinstance(stmt, Break):
            if not self._break_labels:
                raise InternalCompilerError(f"'break' with no target at {stmt.line}:{stmt.col}")
            self._emit(f"jmp {self._break_labels[-1]}")
        elif isinstance(stmt, Continue):
            if not self._continue_labels:
                raise InternalCompilerError(f"'continue' with no target at {stmt.line}:{stmt.col}")
            self._emit(f"jmp {self._continue_labels[-1]}")
        elif isinstance(stmt, Return):
            if stmt.value is not None:
                self._gen_expr(stmt.value)
            self._emit(f"jmp {self._return_label}")
        else:
            raise InternalCompilerError(f"unhandled statement {type(stmt).__name__}")

    def _gen_branch_on_zero(self, condition, target: str):
        self._gen_expr(condition)
        self._emit("cmp eax, 0")
        self._emit(f"je {target}")

    def _gen_if(self, stmt: If):
        end = self._fresh_label("endif")
        if stmt.else_branch is None:
            self._gen_branch_on_zero(stmt.condition, end)
            self._gen_stmt(stmt.then_branch)
        else:
            else_label = self._fresh_label("else")
            self._gen_branch_on_zero(stmt.condition, else_label)
            self._gen_stmt(stmt.then_branch)
            self._emit(f"jmp {end}")
            self._emit_label(else_label)
            self._gen_stmt(stmt.else_branch)
        self._emit_label(end)

    def _gen_while(self, stmt: While):
        top = self._fresh_label("while")
        end = self._fresh_label("endwhile")
        self._emit_label(top)
        self._gen_branch_on_zero(stmt.condition, end)
        self._gen_loop_body(stmt.body, top, end)
        self._emit(f"jmp {top}")
        self._emit_label(end)

    def _gen_for(self, stmt: For):
        top = self._fresh_label("for")
        step = self._fresh_label("forstep")
        end = self._fresh_label("endfor")
        if stmt.init is not None:
            self._gen_stmt(stmt.init)
        self._emit_label(top)
        if stmt.condition is not None:
            self._gen_branch_on_zero(stmt.condition, end)
        self._gen_loop_body(stmt.body, step, end)
        self._emit_label(step)
        if stmt.step is not None:
            self._gen_expr(stmt.step)
        self._emit(f"jmp {top}")
        self._emit_label(end)

    def _gen_loop_body(self, body, continue_label: str, break_label: str):
        self._continue_labels.append(continue_label)
        self._break_labels.append(break_label)
        self._gen_stmt(body)
        self._break_labels.pop()
        self._continue_labels.pop()

    def _gen_switch(self, stmt: Switch):
        if stmt.temp_slot is None:
            raise InternalCompilerError(
                f"switch at {stmt.line}:{stmt.col} has no temporary slot")
        temp = f"dword [rbp{stmt.temp_slot:+d}]"
        end = self._fresh_label("endswitch")

        self._gen_expr(stmt.value)
        self._emit(f"mov {temp}, eax")

        labels = []
        default_label = None
        for case in stmt.cases:
            if case.is_default:
                label = self._fresh_label("default")
                default_label = label
            else:
                label = self._fresh_label("case")
                self._emit(f"cmp {temp}, {case.value.value}")
                self._emit(f"je {label}")
            labels.append(label)
        self._emit(f"jmp {default_label or end}")

        # Bodies in source order; no jump between them, so cases fall through
        self._break_labels.append(end)
        for case, label in zip(stmt.cases, labels):
            self._emit_label(label)
            for s in case.body:
                self._gen_stmt(s)
        self._break_labels.pop()
        self._emit_label(end)
