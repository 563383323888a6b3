"""Tests for the compiler driver: compile_source, diagnostics, and the CLI."""

import logging

import pytest

from cmmc.compiler.main import compile_source, format_error, main
from cmmc.compiler.lexer import LexError
from cmmc.compiler.parser import ParseError
from cmmc.compiler.analyzer import ControlFlowError


VALID = "int main() {\n    int a = 2;\n    return a * 21;\n}\n"


class TestCompileSource:
    def test_returns_assembly(self):
        asm = compile_source(VALID, "prog.c")
        assert "global main" in asm
        assert "; generated by cmmc from prog.c" in asm

    def test_debug_option(self):
        assert "; line 2" in compile_source(VALID, debug=True)

    @pytest.mark.parametrize("source,error", [
        ("int main() { return 1 @ 2; }", LexError),
        ("int main() { return 1 }", ParseError),
        ("int main() { break; }", ControlFlowError),
        ("int main() { return ²; }", LexError),
        ("int main() { return 99999999999; }", ParseError),
    ])
    def test_first_error_is_raised(self, source, error):
        with pytest.raises(error):
            compile_source(source)


class TestFormatError:
    def test_caret_under_column(self):
        text = format_error("int main() { break; }", "prog.c",
                            "'break' statement outside of loop or switch", 1, 14)
        assert text.splitlines() == [
            "error: 'break' statement outside of loop or switch",
            "  --> prog.c:1:14",
            "   |",
            " 1 | int main() { break; }",
            "   | " + " " * 13 + "^",
        ]

    def test_position_outside_source(self):
        text = format_error("x", "prog.c", "oops", 9, 1)
        assert text == "error: oops\n --> prog.c:9:1"

    def test_warning_severity(self):
        assert format_error("x", "f.c", "careful", 1, 1, severity="warning").startswith(
            "warning: careful")


class TestCli:
    def test_writes_asm_next_to_input(self, tmp_path, capsys):
        src = tmp_path / "prog.c"
        src.write_text(VALID)
        main([str(src)])
        out = tmp_path / "prog.asm"
        assert out.exists()
        assert "global main" in out.read_text()
        assert "prog.asm" in capsys.readouterr().out

    def test_output_option(self, tmp_path):
        src = tmp_path / "prog.c"
        src.write_text(VALID)
        dest = tmp_path / "out" / "custom.s"
        dest.parent.mkdir()
        main([str(src), "-o", str(dest)])
        assert dest.read_text().startswith("; generated by cmmc from prog.c")

    def test_emit_tokens(self, tmp_path, capsys):
        src = tmp_path / "prog.c"
        src.write_text("int x;")
        main([str(src), "--emit-tokens"])
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Token(INT, 'int', 1:1)"
        assert out[-1].startswith("Token(EOF")
        assert not (tmp_path / "prog.asm").exists()

    def test_emit_ast(self, tmp_path, capsys):
        src = tmp_path / "prog.c"
        src.write_text(VALID)
        main([str(src), "--emit-ast"])
        assert "FunctionDecl" in capsys.readouterr().out

    def test_semantic_error_exits_1(self, tmp_path, capsys):
        src = tmp_path / "bad.c"
        src.write_text("int main() {\n    int a;\n    int a;\n}\n")
        with pytest.raises(SystemExit) as exc:
            main([str(src)])
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "error: Redeclaration of 'a'" in err
        assert "bad.c:3:5" in err
        assert not (tmp_path / "bad.asm").exists()

    def test_all_lexical_errors_reported(self, tmp_path, capsys):
        src = tmp_path / "bad.c"
        src.write_text("int main() { return 1 @ 2 $ 3; }")
        with pytest.raises(SystemExit):
            main([str(src)])
        err = capsys.readouterr().err
        assert "Unexpected character '@'" in err
        assert "Unexpected character '$'" in err

    def test_warnings_do_not_stop_compilation(self, tmp_path, capsys):
        src = tmp_path / "warn.c"
        src.write_text("int f(int x) {\n    if (x) return 1;\n}\nint main() { return f(1); }\n")
        main([str(src)])
        err = capsys.readouterr().err
        assert "warning: Control may reach the end of non-void function 'f'" in err
        assert (tmp_path / "warn.asm").exists()

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "nope.c")])
        assert exc.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_non_utf8_file(self, tmp_path, capsys):
        src = tmp_path / "latin1.c"
        src.write_bytes("// caf\xe9\nint main() { return 0; }\n".encode("latin-1"))
        with pytest.raises(SystemExit) as exc:
            main([str(src)])
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "is not valid UTF-8 (byte 6)" in err
        assert "Traceback" not in err

    def test_non_ascii_digit_reported(self, tmp_path, capsys):
        src = tmp_path / "sup.c"
        src.write_text("int main() { return ²; }", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(src)])
        assert exc.value.code == 1
        assert "Unexpected character '²'" in capsys.readouterr().err

    def test_verbose_enables_debug_logging(self, tmp_path, caplog):
        src = tmp_path / "prog.c"
        src.write_text(VALID)
        with caplog.at_level(logging.DEBUG, logger="cmmc"):
            main([str(src), "-v"])
        assert any("tokens" in r.getMessage() for r in caplog.records)
