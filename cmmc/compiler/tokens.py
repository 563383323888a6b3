"""Token type definitions for the CMM language."""

from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    # Literals
    INT_LIT = auto()
    IDENT = auto()

    # Keywords
    BREAK = auto()
    CASE = auto()
    CONTINUE = auto()
    DEFAULT = auto()
    ELSE = auto()
    FOR = auto()
    IF = auto()
    INT = auto()
    RETURN = auto()
    SWITCH = auto()
    VOID = auto()
    WHILE = auto()

    # Operators
    PLUS = auto()          # +
    MINUS = auto()         # -
    STAR = auto()          # *
    SLASH = auto()         # /
    PERCENT = auto()       # %
    EQ = auto()            # =
    EQ_EQ = auto()         # ==
    BANG_EQ = auto()       # !=
    LT = auto()            # <
    GT = auto()            # >
    LT_EQ = auto()         # <=
    GT_EQ = auto()         # >=
    AMP_AMP = auto()       # &&
    PIPE_PIPE = auto()     # ||
    BANG = auto()          # !

    # Punctuation
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]
    SEMICOLON = auto()     # ;
    COMMA = auto()         # ,
    COLON = auto()         # :

    EOF = auto()


class TokenKind(Enum):
    """Coarse token category."""
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    INT_LITERAL = "integer literal"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    line: int
    col: int

    @property
    def kind(self) -> TokenKind:
        return TOKEN_KINDS[self.type]

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"


KEYWORDS: dict[str, TokenType] = {
    "break": TokenType.BREAK,
    "case": TokenType.CASE,
    "continue": TokenType.CONTINUE,
    "default": TokenType.DEFAULT,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "if": TokenType.IF,
    "int": TokenType.INT,
    "return": TokenType.RETURN,
    "switch": TokenType.SWITCH,
    "void": TokenType.VOID,
    "while": TokenType.WHILE,
}

OPERATORS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "=": TokenType.EQ,
    "==": TokenType.EQ_EQ,
    "!=": TokenType.BANG_EQ,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "<=": TokenType.LT_EQ,
    ">=": TokenType.GT_EQ,
    "&&": TokenType.AMP_AMP,
    "||": TokenType.PIPE_PIPE,
    "!": TokenType.BANG,
}

PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}

TOKEN_KINDS: dict[TokenType, TokenKind] = {
    TokenType.INT_LIT: TokenKind.INT_LITERAL,
    TokenType.IDENT: TokenKind.IDENTIFIER,
    TokenType.EOF: TokenKind.EOF,
    **{t: TokenKind.KEYWORD for t in KEYWORDS.values()},
    **{t: TokenKind.OPERATOR for t in OPERATORS.values()},
    **{t: TokenKind.PUNCTUATION for t in PUNCTUATION.values()},
}

# Token types that can start a type specifier
TYPE_KEYWORDS: set[TokenType] = {TokenType.INT, TokenType.VOID}
