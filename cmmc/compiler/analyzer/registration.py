"""Pass 1: register every function signature before any body is checked."""

from ..ast_nodes import FunctionDecl, VOID
from .core import DuplicateDeclarationError, FunctionSignature, TypeCheckError


class RegistrationMixin:

    def _register_declarations(self, program):
        for decl in program.declarations:
            if isinstance(decl, FunctionDecl):
                self._register_function(decl)

    def _register_function(self, decl: FunctionDecl):
        for param in decl.params:
            if param.type == VOID:
                raise TypeCheckError(
                    f"Parameter '{param.name}' of '{decl.name}' declared void",
                    param.line, param.col)
        seen: set[str] = set()
        for param in decl.params:
            if param.name in seen:
                raise DuplicateDeclarationError(
                    f"Duplicate parameter '{param.name}' in '{decl.name}'",
                    param.line, param.col)
            seen.add(param.name)

        signature = FunctionSignature(
            name=decl.name,
            param_types=tuple(p.type for p in decl.params),
            return_type=decl.return_type,
        )
        existing = self.signatures.get(decl.name)
        if existing is None:
            self.signatures[decl.name] = signature
            decl.symbol = self._declare(decl.name, decl.return_type, "function",
                                        decl, slot=decl.name)
        else:
            if existing != signature:
                raise TypeCheckError(
                    f"Conflicting declaration '{signature}', previously "
                    f"declared as '{existing}'", decl.line, decl.col)
            decl.symbol = self.scopes.lookup_current(decl.name)

        if decl.body is not None:
            if decl.name in self.defined_functions:
                raise DuplicateDeclarationError(
                    f"Redefinition of function '{decl.name}'", decl.line, decl.col)
            self.defined_functions.add(decl.name)
