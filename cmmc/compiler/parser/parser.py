"""Parser assembly: combines all parsing mixins into the final Parser class."""

from .core import ParserBase, ParseError
from .declarations import DeclarationsMixin
from .statements import StatementsMixin
from .control_flow import ControlFlowMixin
from .expressions import ExpressionsMixin
from .primary import PrimaryMixin


class Parser(
    PrimaryMixin,
    ExpressionsMixin,
    ControlFlowMixin,
    StatementsMixin,
    DeclarationsMixin,
    ParserBase,
):
    """Recursive descent parser for the CMM language."""
    pass


__all__ = ["Parser", "ParseError"]
