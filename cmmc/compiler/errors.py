"""Error base classes shared by every compiler stage.

Stage-specific errors live next to the stage that raises them
(LexError in lexer.py, ParseError in parser/core.py, the semantic errors
in analyzer/core.py); all of them derive from CompileError.
"""


class CompileError(Exception):
    """A defect in the input program, reported with its source position."""

    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.message = message
        self.line = line
        self.col = col
        super().__init__(f"{message} at {line}:{col}")


class InternalCompilerError(RuntimeError):
    """A broken invariant inside the compiler itself (never the user's fault)."""
