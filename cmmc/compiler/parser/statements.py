"""Statement dispatch, blocks, and local variable declarations."""

from ..tokens import TokenType, TYPE_KEYWORDS
from ..ast_nodes import Block, Break, Continue, VarDecl


class StatementsMixin:

    def _parse_block(self) -> Block:
        tok = self._expect(TokenType.LBRACE, "'{'")
        stmts = []
        while not self._check(TokenType.RBRACE) and not self._at_end():
            stmts.append(self._parse_statement())
        self._expect(TokenType.RBRACE, "'}'")
        return Block(statements=stmts, line=tok.line, col=tok.col)

    def _parse_statement(self):
        tok = self._peek()

        if tok.type == TokenType.LBRACE:
            return self._parse_block()
        if tok.type == TokenType.RETURN:
            return self._parse_return_stmt()
        if tok.type == TokenType.IF:
            return self._parse_if_stmt()
        if tok.type == TokenType.WHILE:
            return self._parse_while_stmt()
        if tok.type == TokenType.FOR:
            return self._parse_for_stmt()
        if tok.type == TokenType.SWITCH:
            return self._parse_switch_stmt()
        if tok.type == TokenType.BREAK:
            self._advance()
            self._expect(TokenType.SEMICOLON, "';'")
            return Break(line=tok.line, col=tok.col)
        if tok.type == TokenType.CONTINUE:
            self._advance()
            self._expect(TokenType.SEMICOLON, "';'")
            return Continue(line=tok.line, col=tok.col)
        if tok.type == TokenType.SEMICOLON:
            # Empty statement
            self._advance()
            return Block(statements=[], line=tok.line, col=tok.col)
        if tok.type in (TokenType.CASE, TokenType.DEFAULT):
            raise self._error(f"'{tok.value}' label outside of switch")
        if tok.type in TYPE_KEYWORDS:
            return self._parse_var_decl()

        return self._parse_expr_stmt()

    def _parse_var_decl(self) -> VarDecl:
        start = self._peek()
        type_name = self._parse_type()
        name = self._expect(TokenType.IDENT, "variable name")
        if self._check(TokenType.LPAREN):
            raise self._error(f"Function '{name.value}' cannot be defined inside another function")
        return self._parse_var_decl_rest(type_name, name, start)
