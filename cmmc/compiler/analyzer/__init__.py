from .analyzer import (
    Analyzer as Analyzer,
    AnalyzedProgram as AnalyzedProgram,
    ControlFlowError as ControlFlowError,
    DuplicateDeclarationError as DuplicateDeclarationError,
    FunctionSignature as FunctionSignature,
    ScopeStack as ScopeStack,
    SemanticError as SemanticError,
    Symbol as Symbol,
    TypeCheckError as TypeCheckError,
    UndeclaredError as UndeclaredError,
)
