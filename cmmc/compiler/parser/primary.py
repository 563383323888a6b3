"""Primary expression parsing: literals, identifiers, calls, parentheses."""

from ..tokens import TokenType
from ..ast_nodes import Call, Identifier, IntLiteral


class PrimaryMixin:

    def _parse_primary(self):
        tok = self._peek()

        if tok.type == TokenType.INT_LIT:
            self._advance()
            return IntLiteral(value=self._int_value(tok), line=tok.line, col=tok.col)

        if tok.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expr()
            self._expect(TokenType.RPAREN, "')'")
            return expr

        if tok.type == TokenType.IDENT:
            self._advance()
            if self._check(TokenType.LPAREN):
                return self._parse_call_args(tok)
            return Identifier(name=tok.value, line=tok.line, col=tok.col)

        if tok.type == TokenType.EOF:
            raise self._error("Unexpected end of input in expression")
        raise self._error(f"Unexpected token '{tok.value}' in expression")

    def _parse_call_args(self, name_tok) -> Call:
        self._expect(TokenType.LPAREN)
        args = []
        if not self._check(TokenType.RPAREN):
            args.append(self._parse_expr())
            while self._match(TokenType.COMMA):
                args.append(self._parse_expr())
        self._expect(TokenType.RPAREN, "')'")
        return Call(name=name_tok.value, args=args,
                    line=name_tok.line, col=name_tok.col)
