"""Expression parsing: precedence climbing from assignment to unary."""

from ..ast_nodes import Assign, BinaryExpr, Identifier, IntLiteral, UnaryExpr
from ..tokens import TokenType
from .core import ParseError


class ExpressionsMixin:

    def _parse_expr(self):
        return self._parse_assignment()

    def _parse_assignment(self):
        left = self._parse_logical_or()
        if self._check(TokenType.EQ):
            op_tok = self._advance()
            if not isinstance(left, Identifier):
                raise ParseError("Invalid assignment target",
                                 op_tok.line, op_tok.col, found=op_tok)
            value = self._parse_assignment()
            return Assign(target=left, value=value, line=left.line, col=left.col)
        return left

    def _parse_logical_or(self):
        left = self._parse_logical_and()
        while self._match(TokenType.PIPE_PIPE):
            right = self._parse_logical_and()
            left = BinaryExpr(op="||", left=left, right=right,
                              line=left.line, col=left.col)
        return left

    def _parse_logical_and(self):
        left = self._parse_equality()
        while self._match(TokenType.AMP_AMP):
            right = self._parse_equality()
            left = BinaryExpr(op="&&", left=left, right=right,
                              line=left.line, col=left.col)
        return left

    def _parse_equality(self):
        left = self._parse_relational()
        while self._check(TokenType.EQ_EQ, TokenType.BANG_EQ):
            op = self._advance().value
            right = self._parse_relational()
            left = BinaryExpr(op=op, left=left, right=right,
                              line=left.line, col=left.col)
        return left

    def _parse_relational(self):
        left = self._parse_additive()
        while self._check(TokenType.LT, TokenType.GT, TokenType.LT_EQ, TokenType.GT_EQ):
            op = self._advance().value
            right = self._parse_additive()
            left = BinaryExpr(op=op, left=left, right=right,
                              line=left.line, col=left.col)
        return left

    def _parse_additive(self):
        left = self._parse_multiplicative()
        while self._check(TokenType.PLUS, TokenType.MINUS):
            op = self._advance().value
            right = self._parse_multiplicative()
            left = BinaryExpr(op=op, left=left, right=right,
                              line=left.line, col=left.col)
        return left

    def _parse_multiplicative(self):
        left = self._parse_unary()
        while self._check(TokenType.STAR, TokenType.SLASH, TokenType.PERCENT):
            op = self._advance().value
            right = self._parse_unary()
            left = BinaryExpr(op=op, left=left, right=right,
                              line=left.line, col=left.col)
        return left

    def _parse_unary(self):
        tok = self._peek()
        if tok.type in (TokenType.BANG, TokenType.MINUS, TokenType.PLUS):
            self._advance()
            if tok.type == TokenType.MINUS and self._check(TokenType.INT_LIT):
                lit = self._advance()
                operand = IntLiteral(value=self._int_value(lit, negated=True),
                                     line=lit.line, col=lit.col)
            else:
                operand = self._parse_unary()
            return UnaryExpr(op=tok.value, operand=operand,
                             line=tok.line, col=tok.col)
        return self._parse_primary()
