"""Analyzer assembly: combines all analysis mixins into the final Analyzer class."""

from .core import (
    AnalyzerBase, AnalyzedProgram, ControlFlowError, DuplicateDeclarationError,
    FunctionSignature, ScopeStack, SemanticError, Symbol, TypeCheckError,
    UndeclaredError,
)
from .registration import RegistrationMixin
from .functions import FunctionsMixin
from .statements import StatementsMixin
from .expressions import ExpressionsMixin


class Analyzer(
    ExpressionsMixin,
    StatementsMixin,
    FunctionsMixin,
    RegistrationMixin,
    AnalyzerBase,
):
    """Semantic analyzer for the CMM language."""
    pass


__all__ = [
    "Analyzer", "AnalyzedProgram", "ControlFlowError",
    "DuplicateDeclarationError", "FunctionSignature", "ScopeStack",
    "SemanticError", "Symbol", "TypeCheckError", "UndeclaredError",
]
