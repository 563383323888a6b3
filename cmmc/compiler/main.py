#!/usr/bin/env python3
"""cmmc: a compiler from CMM, a small C subset, to x86-64 NASM assembly.

Usage: python cmm.py <input.c> [-o output.asm] [--emit-tokens] [--emit-ast] [--debug] [-v]
"""

import argparse
import logging
import os
import pprint
import sys

from .errors import CompileError
from .lexer import Lexer
from .parser import Parser
from .analyzer import Analyzer, AnalyzedProgram
from .codegen import CodeGen

logger = logging.getLogger(__name__)


def analyze_source(source: str, filename: str = "<stdin>") -> AnalyzedProgram:
    """Lex, parse and analyze; raises the first CompileError."""
    program = Parser(Lexer(source, filename)).parse()
    return Analyzer().analyze(program)


def compile_source(source: str, filename: str = "<stdin>", *,
                   debug: bool = False) -> str:
    """Compile CMM source text to assembly text.

    Raises the first CompileError found; nothing is produced for an
    invalid program.
    """
    analyzed = analyze_source(source, filename)
    asm = CodeGen(analyzed, debug=debug, source_file=filename).generate()
    logger.debug("%s: %d bytes of assembly", filename, len(asm))
    return asm


def format_error(source: str, filename: str, message: str,
                 line: int, col: int, severity: str = "error") -> str:
    """Format a diagnostic with source context and caret."""
    lines = source.split('\n')
    if line < 1 or line > len(lines):
        return f"{severity}: {message}\n --> {filename}:{line}:{col}"
    source_line = lines[line - 1]
    width = len(str(line))
    pad = " " * width
    caret = " " * max(col - 1, 0) + "^"
    return (
        f"{severity}: {message}\n"
        f" {pad}--> {filename}:{line}:{col}\n"
        f" {pad} |\n"
        f" {line} | {source_line}\n"
        f" {pad} | {caret}"
    )


def _report(source: str, filename: str, err: CompileError):
    print(format_error(source, filename, err.message, err.line, err.col),
          file=sys.stderr)


def _report_warning(source: str, filename: str, warning: str):
    # Analyzer warnings are formatted as "message at line:col"
    parts = warning.rsplit(" at ", 1)
    if len(parts) == 2:
        loc = parts[1].split(":")
        if len(loc) == 2 and loc[0].isdigit() and loc[1].isdigit():
            print(format_error(source, filename, parts[0], int(loc[0]),
                               int(loc[1]), severity="warning"), file=sys.stderr)
            return
    print(f"warning: {warning}", file=sys.stderr)


def main(argv=None):
    argparser = argparse.ArgumentParser(description="CMM to x86-64 assembly compiler")
    argparser.add_argument("input", help="Input .c file")
    argparser.add_argument("-o", "--output", help="Output .asm file (default: <input>.asm)")
    argparser.add_argument("--emit-tokens", action="store_true", help="Print token stream")
    argparser.add_argument("--emit-ast", action="store_true", help="Print AST")
    argparser.add_argument("--debug", action="store_true",
                           help="Annotate the assembly with source line comments")
    argparser.add_argument("-v", "--verbose", action="store_true",
                           help="Log pipeline progress to stderr")

    args = argparser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Read input
    try:
        with open(args.input, "r", encoding="utf-8") as f:
            source = f.read()
    except FileNotFoundError:
        print(f"Error: File '{args.input}' not found", file=sys.stderr)
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"Error: File '{args.input}' is not valid UTF-8 (byte {e.start})", file=sys.stderr)
        sys.exit(1)

    filename = os.path.basename(args.input)

    # Lexing: report every lexical error, not just the first
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize(recover=True)
    if lexer.errors:
        for err in lexer.errors:
            _report(source, filename, err)
        sys.exit(1)

    if args.emit_tokens:
        for tok in tokens:
            print(tok)
        return

    try:
        program = Parser(tokens).parse()
        if args.emit_ast:
            pprint.pprint(program)
            return
        analyzed = Analyzer().analyze(program)
    except CompileError as e:
        _report(source, filename, e)
        sys.exit(1)

    # Display warnings (non-fatal)
    for warn in analyzed.warnings:
        _report_warning(source, filename, warn)

    asm = CodeGen(analyzed, debug=args.debug, source_file=filename).generate()

    # Output
    if args.output:
        out_path = args.output
    else:
        base = os.path.splitext(args.input)[0]
        out_path = base + ".asm"

    with open(out_path, "w", encoding="utf-8") as f:
        f.write(asm)

    print(f"Compiled {args.input} → {out_path}")


if __name__ == "__main__":
    main()
