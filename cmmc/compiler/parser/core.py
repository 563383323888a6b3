"""Parser core: token stream handling, error reporting, and parse() entry point."""

from __future__ import annotations

from typing import Iterable

from ..errors import CompileError
from ..tokens import Token, TokenType

# Largest literal an int can hold; one more is allowed directly after unary minus
INT_MAX = 2**31 - 1


class ParseError(CompileError):
    def __init__(self, message: str, line: int, col: int,
                 expected: str = "", found: Token | None = None):
        self.expected = expected
        self.found = found
        super().__init__(message, line, col)


class ParserBase:
    """Pulls tokens lazily from any iterable; one token of lookahead."""

    def __init__(self, tokens: Iterable[Token]):
        self._stream = iter(tokens)
        self._previous: Token | None = None
        self._current: Token = self._pull()

    def parse(self):
        from ..ast_nodes import Program
        decls = []
        while not self._at_end():
            decls.append(self._parse_top_level_item())
        return Program(declarations=decls)

    # ---- Token helpers ----

    def _pull(self) -> Token:
        try:
            return next(self._stream)
        except StopIteration:
            last = self._previous
            line = last.line if last else 1
            col = last.col if last else 1
            return Token(TokenType.EOF, "", line, col)

    def _peek(self) -> Token:
        return self._current

    def _advance(self) -> Token:
        tok = self._current
        if tok.type != TokenType.EOF:
            self._previous = tok
            self._current = self._pull()
        return tok

    def _at_end(self) -> bool:
        return self._current.type == TokenType.EOF

    def _check(self, *types: TokenType) -> bool:
        return self._current.type in types

    def _match(self, *types: TokenType) -> Token | None:
        if self._current.type in types:
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, msg: str = "") -> Token:
        tok = self._current
        if tok.type == token_type:
            return self._advance()
        expected = msg or token_type.name
        raise ParseError(
            f"Expected {expected}, got {_describe(tok)}",
            tok.line, tok.col, expected=expected, found=tok,
        )

    def _error(self, msg: str) -> ParseError:
        tok = self._current
        return ParseError(msg, tok.line, tok.col, found=tok)

    def _int_value(self, tok: Token, negated: bool = False) -> int:
        value = int(tok.value)
        if value > INT_MAX + (1 if negated else 0):
            raise ParseError(f"Integer literal {tok.value} is out of range for 'int'",
                             tok.line, tok.col, found=tok)
        return value


def _describe(tok: Token) -> str:
    if tok.type == TokenType.EOF:
        return "end of input"
    return f"{tok.type.name} '{tok.value}'"
