"""cmmc compiler package."""

from .errors import CompileError as CompileError, InternalCompilerError as InternalCompilerError
from .lexer import Lexer as Lexer, LexError as LexError
from .parser import Parser as Parser, ParseError as ParseError
from .analyzer import Analyzer as Analyzer
from .codegen import CodeGen as CodeGen
from .main import compile_source as compile_source
