"""AST node definitions for the CMM language.

The node set is closed: every stage handles exactly these classes, grouped
by the union aliases at the bottom of the file. Declarations also record
where their name appears. Fields after the source position are filled in by
the semantic analyzer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union


INT = "int"
VOID = "void"


@dataclass
class Program:
    declarations: list[decl] = field(default_factory=list)

@dataclass
class Param:
    type: str = INT
    name: str = ""
    line: int = 0
    col: int = 0
    name_line: int = 0
    name_col: int = 0
    symbol: Optional[int] = None

@dataclass
class FunctionDecl:
    return_type: str = INT
    name: str = ""
    params: list[Param] = field(default_factory=list)
    body: Optional[Block] = None
    line: int = 0
    col: int = 0
    name_line: int = 0
    name_col: int = 0
    symbol: Optional[int] = None
    frame_slots: int = 0

@dataclass
class VarDecl:
    type: str = INT
    name: str = ""
    initializer: Optional[expr] = None
    line: int = 0
    col: int = 0
    name_line: int = 0
    name_col: int = 0
    symbol: Optional[int] = None

@dataclass
class Block:
    statements: list[stmt] = field(default_factory=list)
    line: int = 0
    col: int = 0

@dataclass
class If:
    condition: expr = None
    then_branch: stmt = None
    else_branch: Optional[stmt] = None
    line: int = 0
    col: int = 0

@dataclass
class While:
    condition: expr = None
    body: stmt = None
    line: int = 0
    col: int = 0

@dataclass
class For:
    init: Optional[for_init] = None
    condition: Optional[expr] = None
    step: Optional[expr] = None
    body: stmt = None
    line: int = 0
    col: int = 0

@dataclass
class Case:
    value: Optional[IntLiteral] = None  # None for 'default:'
    body: list[stmt] = field(default_factory=list)
    line: int = 0
    col: int = 0

    @property
    def is_default(self) -> bool:
        return self.value is None

@dataclass
class Switch:
    value: expr = None
    cases: list[Case] = field(default_factory=list)
    line: int = 0
    col: int = 0
    temp_slot: Optional[int] = None

@dataclass
class Break:
    line: int = 0
    col: int = 0

@dataclass
class Continue:
    line: int = 0
    col: int = 0

@dataclass
class Return:
    value: Optional[expr] = None
    line: int = 0
    col: int = 0

@dataclass
class ExprStmt:
    expr: expr = None
    line: int = 0
    col: int = 0

@dataclass
class BinaryExpr:
    op: str = ""
    left: expr = None
    right: expr = None
    line: int = 0
    col: int = 0
    resolved_type: Optional[str] = None

@dataclass
class UnaryExpr:
    op: str = ""
    operand: expr = None
    line: int = 0
    col: int = 0
    resolved_type: Optional[str] = None

@dataclass
class Assign:
    target: Identifier = None
    value: expr = None
    line: int = 0
    col: int = 0
    resolved_type: Optional[str] = None

@dataclass
class Call:
    name: str = ""
    args: list[expr] = field(default_factory=list)
    line: int = 0
    col: int = 0
    resolved_type: Optional[str] = None
    symbol: Optional[int] = None

@dataclass
class Identifier:
    name: str = ""
    line: int = 0
    col: int = 0
    resolved_type: Optional[str] = None
    symbol: Optional[int] = None

@dataclass
class IntLiteral:
    value: int = 0
    line: int = 0
    col: int = 0
    resolved_type: Optional[str] = None


# --- Union type aliases for sum types ---

decl = Union[FunctionDecl, VarDecl]
stmt = Union[VarDecl, Block, If, While, For, Switch, Break, Continue, Return, ExprStmt]
expr = Union[BinaryExpr, UnaryExpr, Assign, Call, Identifier, IntLiteral]
for_init = Union[VarDecl, ExprStmt]

STMT_TYPES = (VarDecl, Block, If, While, For, Switch, Break, Continue, Return, ExprStmt)
EXPR_TYPES = (BinaryExpr, UnaryExpr, Assign, Call, Identifier, IntLiteral)
