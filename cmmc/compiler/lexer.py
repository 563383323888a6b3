"""Lexer for the CMM language.

The lexer is an iterator: tokens are produced on demand, so the parser can
pull them one at a time. A fresh Lexer restarts from the beginning of the
source; an existing one cannot be rewound.
"""

from __future__ import annotations

import logging
from typing import Iterator

from .errors import CompileError
from .tokens import KEYWORDS, OPERATORS, PUNCTUATION, Token, TokenType

logger = logging.getLogger(__name__)


class LexError(CompileError):
    def __init__(self, message: str, line: int, col: int, char: str = ""):
        self.char = char
        super().__init__(message, line, col)


class Lexer:
    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self.errors: list[LexError] = []
        self._done = False

        # Operators and punctuation share one trie for longest-match lookup
        self._op_trie = _build_trie({**OPERATORS, **PUNCTUATION})

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if self._done:
            raise StopIteration
        self._skip_whitespace_and_comments()
        if self.pos >= len(self.source):
            self._done = True
            return Token(TokenType.EOF, "", self.line, self.col)

        ch = self.source[self.pos]
        if _is_digit(ch):
            return self._read_number()
        if _is_ident_start(ch):
            return self._read_identifier()
        return self._read_operator()

    def tokenize(self, recover: bool = False) -> list[Token]:
        """Drain the lexer into a list ending with EOF.

        With recover=True an unrecognized character is recorded in
        self.errors and skipped instead of aborting.
        """
        tokens: list[Token] = []
        while True:
            try:
                tok = next(self)
            except StopIteration:
                break
            except LexError as e:
                if not recover:
                    raise
                self.errors.append(e)
                self.skip()
                continue
            tokens.append(tok)
        logger.debug("%s: %d tokens, %d lexical errors",
                     self.filename, len(tokens), len(self.errors))
        return tokens

    def skip(self):
        """Drop one character of input; used to resume after a LexError."""
        if self.pos < len(self.source):
            self._advance()

    # --- Character helpers ---

    def _peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    # --- Whitespace and comments ---

    def _skip_whitespace_and_comments(self):
        while self.pos < len(self.source):
            ch = self._peek()
            if ch in (' ', '\t', '\n', '\r', '\f', '\v'):
                self._advance()
            elif ch == '/' and self._peek(1) == '/':
                self._skip_line_comment()
            elif ch == '/' and self._peek(1) == '*':
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self):
        self._advance()  # /
        self._advance()  # /
        while self.pos < len(self.source) and self._peek() != '\n':
            self._advance()

    def _skip_block_comment(self):
        start_line = self.line
        start_col = self.col
        self._advance()  # /
        self._advance()  # *
        while self.pos < len(self.source):
            if self._peek() == '*' and self._peek(1) == '/':
                self._advance()
                self._advance()
                return
            self._advance()
        raise LexError("Unterminated block comment", start_line, start_col, "/")

    # --- Literals, identifiers, keywords ---

    def _read_number(self) -> Token:
        line, col = self.line, self.col
        start = self.pos
        while self.pos < len(self.source) and _is_digit(self._peek()):
            self._advance()
        return Token(TokenType.INT_LIT, self.source[start:self.pos], line, col)

    def _read_identifier(self) -> Token:
        line, col = self.line, self.col
        start = self.pos
        while self.pos < len(self.source) and _is_ident_char(self._peek()):
            self._advance()
        value = self.source[start:self.pos]
        token_type = KEYWORDS.get(value, TokenType.IDENT)
        return Token(token_type, value, line, col)

    # --- Operators and punctuation (trie-based longest match) ---

    def _read_operator(self) -> Token:
        line, col = self.line, self.col

        node = self._op_trie
        best_match = None
        best_len = 0
        i = 0
        while self.pos + i < len(self.source):
            ch = self.source[self.pos + i]
            if ch not in node:
                break
            node = node[ch]
            i += 1
            if '' in node:  # terminal marker
                best_match = node['']
                best_len = i

        if best_match is not None:
            value = self.source[self.pos:self.pos + best_len]
            for _ in range(best_len):
                self._advance()
            return Token(best_match, value, line, col)

        ch = self._peek()
        raise LexError(f"Unexpected character '{ch}'", line, col, ch)


def _build_trie(table: dict[str, TokenType]) -> dict:
    """Build a trie from operator strings for longest-match tokenization.

    Each node is a dict mapping character -> child node.
    Terminal nodes have '' -> TokenType entry.
    """
    root: dict = {}
    for op, token_type in table.items():
        node = root
        for ch in op:
            node = node.setdefault(ch, {})
        node[''] = token_type
    return root


# ASCII only: str.isdigit/isalpha also accept characters like '²' or 'é'
def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_ident_start(ch: str) -> bool:
    return 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or ch == '_'


def _is_ident_char(ch: str) -> bool:
    return _is_ident_start(ch) or _is_digit(ch)
