"""Control flow statement parsing: if, while, for, switch, return."""

from ..ast_nodes import (
    Case,
    ExprStmt,
    For,
    If,
    IntLiteral,
    Return,
    Switch,
    While,
)
from ..tokens import TokenType, TYPE_KEYWORDS
from .core import ParseError


class ControlFlowMixin:

    def _parse_return_stmt(self) -> Return:
        tok = self._expect(TokenType.RETURN)
        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self._parse_expr()
        self._expect(TokenType.SEMICOLON, "';'")
        return Return(value=value, line=tok.line, col=tok.col)

    def _parse_paren_expr(self):
        self._expect(TokenType.LPAREN, "'('")
        expr = self._parse_expr()
        self._expect(TokenType.RPAREN, "')'")
        return expr

    def _parse_if_stmt(self) -> If:
        tok = self._expect(TokenType.IF)
        condition = self._parse_paren_expr()
        then_branch = self._parse_statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._parse_statement()
        return If(condition=condition, then_branch=then_branch,
                  else_branch=else_branch, line=tok.line, col=tok.col)

    def _parse_while_stmt(self) -> While:
        tok = self._expect(TokenType.WHILE)
        condition = self._parse_paren_expr()
        body = self._parse_statement()
        return While(condition=condition, body=body, line=tok.line, col=tok.col)

    def _parse_for_stmt(self) -> For:
        tok = self._expect(TokenType.FOR)
        self._expect(TokenType.LPAREN, "'('")

        # The declaration form consumes its own ';'
        init = None
        if self._check(*TYPE_KEYWORDS):
            init = self._parse_var_decl()
        elif not self._match(TokenType.SEMICOLON):
            start = self._peek()
            init = ExprStmt(expr=self._parse_expr(), line=start.line, col=start.col)
            self._expect(TokenType.SEMICOLON, "';'")

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._parse_expr()
        self._expect(TokenType.SEMICOLON, "';'")

        step = None
        if not self._check(TokenType.RPAREN):
            step = self._parse_expr()
        self._expect(TokenType.RPAREN, "')'")

        body = self._parse_statement()
        return For(init=init, condition=condition, step=step,
                   body=body, line=tok.line, col=tok.col)

    def _parse_switch_stmt(self) -> Switch:
        tok = self._expect(TokenType.SWITCH)
        value = self._parse_paren_expr()
        self._expect(TokenType.LBRACE, "'{'")
        cases = []
        seen_default = False
        while not self._check(TokenType.RBRACE) and not self._at_end():
            case = self._parse_case_clause()
            if case.is_default:
                if seen_default:
                    raise self._error_at(case, "Multiple 'default' labels in one switch")
                seen_default = True
            cases.append(case)
        self._expect(TokenType.RBRACE, "'}'")
        return Switch(value=value, cases=cases, line=tok.line, col=tok.col)

    def _parse_case_clause(self) -> Case:
        tok = self._peek()
        value = None
        if self._match(TokenType.CASE):
            value = self._parse_case_label()
        elif not self._match(TokenType.DEFAULT):
            raise self._error(f"Expected 'case' or 'default', got '{tok.value}'")
        self._expect(TokenType.COLON, "':'")
        body = []
        while not self._check(TokenType.CASE, TokenType.DEFAULT,
                              TokenType.RBRACE) and not self._at_end():
            body.append(self._parse_statement())
        return Case(value=value, body=body, line=tok.line, col=tok.col)

    def _parse_case_label(self) -> IntLiteral:
        start = self._peek()
        negative = self._match(TokenType.MINUS) is not None
        lit = self._expect(TokenType.INT_LIT, "integer constant")
        value = self._int_value(lit, negated=negative)
        if negative:
            value = -value
        return IntLiteral(value=value, line=start.line, col=start.col)

    def _error_at(self, node, msg: str) -> ParseError:
        return ParseError(msg, node.line, node.col)

    def _parse_expr_stmt(self) -> ExprStmt:
        tok = self._peek()
        expr = self._parse_expr()
        self._expect(TokenType.SEMICOLON, "';'")
        return ExprStmt(expr=expr, line=tok.line, col=tok.col)
