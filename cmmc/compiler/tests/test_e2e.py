"""End-to-end tests for the CMM compiler.

Each test: CMM source → lexer → parser → analyzer → codegen → nasm → gcc → run → check exit status.
"""

import os
import platform
import shutil
import subprocess
import tempfile

import pytest

from cmmc.compiler.main import compile_source

pytestmark = pytest.mark.skipif(
    not (shutil.which("nasm") and shutil.which("gcc")
         and platform.system() == "Linux" and platform.machine() in ("x86_64", "AMD64")),
    reason="needs nasm and gcc on x86-64 Linux",
)


def compile_and_run(source: str) -> subprocess.CompletedProcess:
    """Compile CMM source to a native binary, run it, return the completed process."""
    asm = compile_source(source, "test.c")

    with tempfile.TemporaryDirectory() as tmp:
        asm_path = os.path.join(tmp, "prog.asm")
        obj_path = os.path.join(tmp, "prog.o")
        bin_path = os.path.join(tmp, "prog")
        with open(asm_path, "w") as f:
            f.write(asm)

        result = subprocess.run(["nasm", "-f", "elf64", asm_path, "-o", obj_path],
                                capture_output=True, text=True, timeout=30)
        if result.returncode != 0:
            pytest.fail(f"Assembly failed:\n{result.stderr}\n\nGenerated assembly:\n{asm}")

        result = subprocess.run(["gcc", obj_path, "-o", bin_path],
                                capture_output=True, text=True, timeout=30)
        if result.returncode != 0:
            pytest.fail(f"Linking failed:\n{result.stderr}\n\nGenerated assembly:\n{asm}")

        return subprocess.run([bin_path], capture_output=True, text=True, timeout=10)


def exit_status(source: str) -> int:
    return compile_and_run(source).returncode


def run_main(body: str) -> int:
    return exit_status(f"int main() {{ {body} }}")


FIXTURE_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "..",
                            "tests", "programs", "valid", "basic_example.c")


class TestFixture:
    def test_basic_example(self):
        with open(FIXTURE_PATH) as f:
            source = f.read()
        # a = 1+3+5 = 9, while raises it to 30, c = soma(30, 5) = 35 -> default
        assert exit_status(source) == 0

    def test_basic_example_without_switch_reset(self):
        with open(FIXTURE_PATH) as f:
            source = f.read()
        source = source.replace("c = 0;", "c = c + 1;")
        assert exit_status(source) == 36


class TestArithmetic:
    def test_return_literal(self):
        assert run_main("return 42;") == 42

    def test_precedence(self):
        assert run_main("return 2 + 3 * 4;") == 14

    def test_division_and_modulo(self):
        assert run_main("int a = 47; return a / 5 * 10 + a % 5;") == 92

    def test_negative_division_truncates(self):
        assert run_main("int a = -7; return -(a / 2) * 10 + -(a % 2);") == 31

    def test_negative_result_wraps_in_exit_status(self):
        assert run_main("return 7 - 10;") == 253

    def test_comparisons_and_logic(self):
        assert run_main("""
            int r = 0;
            if (3 < 5) r = r + 1;
            if (5 <= 5) r = r + 2;
            if (!(5 > 5)) r = r + 4;
            if (4 >= 5 || 1 == 1) r = r + 8;
            if (1 != 1 && 1) r = r + 16;
            return r;
        """) == 15

    def test_short_circuit_skips_call(self):
        assert exit_status("""
            int g = 0;
            int touch() { g = g + 1; return 1; }
            int main() {
                if (0 && touch()) { }
                if (1 || touch()) { }
                if (1 && touch()) { }
                return g;
            }
        """) == 1


class TestControlFlow:
    def test_for_iterates_ten_times(self):
        assert run_main("""
            int n = 0;
            for (int i = 0; i < 10; i = i + 1) { n = n + 1; }
            return n;
        """) == 10

    def test_continue_runs_step(self):
        assert run_main("""
            int n = 0;
            for (int i = 0; i < 10; i = i + 1) {
                if (i % 2 == 0) continue;
                n = n + i;
            }
            return n;
        """) == 25

    def test_while_with_break(self):
        assert run_main("""
            int i = 0;
            while (1) { i = i + 3; if (i > 20) break; }
            return i;
        """) == 21

    def test_switch_fall_through(self):
        assert run_main("""
            int c = 1;
            int r = 0;
            switch (c) {
                case 1: r = r + 1;
                case 2: r = r + 10; break;
                case 3: r = r + 100;
            }
            return r;
        """) == 11

    def test_switch_default_in_middle(self):
        assert run_main("""
            int r = 0;
            switch (9) {
                case 1: r = 1; break;
                default: r = 2;
                case 3: r = r + 3;
            }
            return r;
        """) == 5

    def test_continue_inside_switch_inside_loop(self):
        assert run_main("""
            int i = 0;
            int n = 0;
            while (i < 5) {
                i = i + 1;
                switch (i) { case 2: continue; case 4: continue; }
                n = n + i;
            }
            return n;
        """) == 9


class TestFunctions:
    def test_recursion(self):
        assert exit_status("""
            int fib(int n) {
                if (n < 2) return n;
                return fib(n - 1) + fib(n - 2);
            }
            int main() { return fib(10); }
        """) == 55

    def test_eight_arguments(self):
        assert exit_status("""
            int weigh(int a, int b, int c, int d, int e, int f, int g, int h) {
                return a + b * 2 + c * 3 + d * 4 + e * 5 + f * 6 + g * 7 + h * 8;
            }
            int main() { return weigh(1, 2, 3, 4, 5, 6, 7, 8); }
        """) == 204

    def test_nested_calls_in_arguments(self):
        assert exit_status("""
            int add(int a, int b) { return a + b; }
            int main() { return add(add(1, 2), add(3, add(4, 5))); }
        """) == 15

    def test_globals(self):
        assert exit_status("""
            int counter = 40;
            void bump() { counter = counter + 1; return; }
            int main() { bump(); bump(); return counter; }
        """) == 42

    def test_call_into_libc(self):
        result = compile_and_run("""
            int putchar(int c);
            int main() { putchar(72); putchar(105); putchar(10); return 0; }
        """)
        assert result.returncode == 0
        assert result.stdout == "Hi\n"
