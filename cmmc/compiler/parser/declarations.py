"""Top-level declaration parsing: functions, prototypes, and global variables."""

from ..ast_nodes import FunctionDecl, Param, VarDecl
from ..tokens import TokenType, TYPE_KEYWORDS


class DeclarationsMixin:

    def _parse_top_level_item(self):
        tok = self._peek()
        if not self._check(*TYPE_KEYWORDS):
            raise self._error(
                f"Expected a function or variable declaration, got '{tok.value}'")
        type_name = self._parse_type()
        name = self._expect(TokenType.IDENT, "declaration name")
        if self._check(TokenType.LPAREN):
            return self._parse_function_rest(type_name, name, tok)
        return self._parse_var_decl_rest(type_name, name, tok)

    def _parse_type(self) -> str:
        tok = self._peek()
        if self._match(*TYPE_KEYWORDS):
            return tok.value
        raise self._error(f"Expected type, got '{tok.value}'")

    def _parse_function_rest(self, return_type: str, name, start) -> FunctionDecl:
        self._expect(TokenType.LPAREN)
        params = self._parse_params()
        self._expect(TokenType.RPAREN)
        body = None
        if not self._match(TokenType.SEMICOLON):
            body = self._parse_block()
        return FunctionDecl(return_type=return_type, name=name.value, params=params,
                            body=body, line=start.line, col=start.col,
                            name_line=name.line, name_col=name.col)

    def _parse_params(self) -> list[Param]:
        if self._check(TokenType.RPAREN):
            return []
        # 'f(void)' is an explicitly empty parameter list
        if self._check(TokenType.VOID):
            void_tok = self._advance()
            if self._check(TokenType.RPAREN):
                return []
            params = [self._parse_param_rest("void", void_tok)]
        else:
            params = [self._parse_param()]
        while self._match(TokenType.COMMA):
            params.append(self._parse_param())
        return params

    def _parse_param(self) -> Param:
        tok = self._peek()
        return self._parse_param_rest(self._parse_type(), tok)

    def _parse_param_rest(self, type_name: str, start) -> Param:
        name = self._expect(TokenType.IDENT, "parameter name")
        return Param(type=type_name, name=name.value, line=start.line, col=start.col,
                     name_line=name.line, name_col=name.col)

    def _parse_var_decl_rest(self, type_name: str, name, start) -> VarDecl:
        initializer = None
        if self._match(TokenType.EQ):
            initializer = self._parse_expr()
        self._expect(TokenType.SEMICOLON, "';'")
        return VarDecl(type=type_name, name=name.value, initializer=initializer,
                       line=start.line, col=start.col,
                       name_line=name.line, name_col=name.col)
