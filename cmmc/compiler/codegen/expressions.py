"""Expression lowering with an eax accumulator and push/pop temporaries."""

from ..ast_nodes import (
    Assign, BinaryExpr, Call, Identifier, IntLiteral, UnaryExpr,
)
from ..errors import InternalCompilerError
from .core import ARG_REGISTERS

_ARITHMETIC = {
    "+": "add eax, ecx",
    "-": "sub eax, ecx",
    "*": "imul eax, ecx",
}

_SET_CC = {
    "==": "sete",
    "!=": "setne",
    "<": "setl",
    ">": "setg",
    "<=": "setle",
    ">=": "setge",
}


class ExpressionsMixin:

    def _gen_expr(self, expr):
        """Evaluate expr into eax."""
        self._require_type(expr)
        if isinstance(expr, IntLiteral):
            self._emit(f"mov eax, {expr.value}")
        elif isinstance(expr, Identifier):
            self._emit(f"mov eax, {self._operand(self._symbol(expr))}")
        elif isinstance(expr, Assign):
            self._gen_expr(expr.value)
            self._emit(f"mov {self._operand(self._symbol(expr.target))}, eax")
        elif isinstance(expr, UnaryExpr):
            self._gen_unary(expr)
        elif isinstance(expr, BinaryExpr):
            if expr.op in ("&&", "||"):
                self._gen_logical(expr)
            else:
                self._gen_binary(expr)
        elif isinstance(expr, Call):
            self._gen_call(expr)
        else:
            raise InternalCompilerError(f"unhandled expression {type(expr).__name__}")

    def _gen_unary(self, expr: UnaryExpr):
        self._gen_expr(expr.operand)
        if expr.op == "-":
            self._emit("neg eax")
        elif expr.op == "+":
            pass
        elif expr.op == "!":
            self._emit("cmp eax, 0")
            self._emit("sete al")
            self._emit("movzx eax, al")
        else:
            raise InternalCompilerError(f"unknown unary operator '{expr.op}'")

    def _gen_binary(self, expr: BinaryExpr):
        self._gen_expr(expr.left)
        self._push("rax")
        self._gen_expr(expr.right)
        self._emit("mov ecx, eax")
        self._pop("rax")

        op = expr.op
        if op in _ARITHMETIC:
            self._emit(_ARITHMETIC[op])
        elif op in ("/", "%"):
            self._emit("cdq")
            self._emit("idiv ecx")
            if op == "%":
                self._emit("mov eax, edx")
        elif op in _SET_CC:
            self._emit("cmp eax, ecx")
            self._emit(f"{_SET_CC[op]} al")
            self._emit("movzx eax, al")
        else:
            raise InternalCompilerError(f"unknown binary operator '{op}'")

    def _gen_logical(self, expr: BinaryExpr):
        """Short-circuit && and ||, producing 0 or 1."""
        short = self._fresh_label("false" if expr.op == "&&" else "true")
        end = self._fresh_label("endlogic")
        jump = "je" if expr.op == "&&" else "jne"
        for side in (expr.left, expr.right):
            self._gen_expr(side)
            self._emit("cmp eax, 0")
            self._emit(f"{jump} {short}")
        self._emit(f"mov eax, {0 if expr.op == '||' else 1}")
        self._emit(f"jmp {end}")
        self._emit_label(short)
        self._emit(f"mov eax, {1 if expr.op == '||' else 0}")
        self._emit_label(end)

    def _gen_call(self, call: Call):
        symbol = self._symbol(call)
        if symbol.kind != "function":
            raise InternalCompilerError(f"call target '{call.name}' is not a function")
        n = len(call.args)
        stack_args = max(0, n - len(ARG_REGISTERS))

        for arg in call.args:
            self._gen_expr(arg)
            self._push("rax")

        # rsp must be 16-byte aligned once the stack arguments are in place
        pad = 8 if (self._depth + stack_args) % 2 else 0
        if pad:
            self._emit("sub rsp, 8")
        # Re-push arguments 7.. so the seventh ends up at [rsp]
        for j in range(stack_args):
            self._emit(f"push qword [rsp+{pad + 16 * j}]")
        for i in range(min(n, len(ARG_REGISTERS))):
            offset = pad + 8 * stack_args + 8 * (n - 1 - i)
            self._emit(f"mov {ARG_REGISTERS[i]}, dword [rsp+{offset}]")

        target = call.name
        if call.name not in self.defined_functions:
            target = f"{call.name} wrt ..plt"
        self._emit(f"call {target}")

        cleanup = 8 * (stack_args + n) + pad
        if cleanup:
            self._emit(f"add rsp, {cleanup}")
        self._depth -= n
