"""Pytest runner for CMM program files.

For each .c file under programs/valid:
1. Compile to assembly through the full pipeline
2. When nasm and gcc are available, assemble, link and run it
3. Assert the exit status matches the file's "// exit: N" header (default 0)

For each .c file under programs/invalid, assert compilation fails with the
error class named in its "// expect: ErrorName" header.
"""

import os
import platform
import re
import shutil
import subprocess
import tempfile

import pytest

from cmmc.compiler.errors import CompileError
from cmmc.compiler.main import compile_source

PROGRAMS_DIR = os.path.join(os.path.dirname(__file__), "programs")

_HEADER_RE = re.compile(r"^//\s*(expect|exit):\s*(\S+)", re.MULTILINE)

HAS_TOOLCHAIN = bool(
    shutil.which("nasm") and shutil.which("gcc")
    and platform.system() == "Linux" and platform.machine() in ("x86_64", "AMD64")
)


def get_program_files(kind: str) -> list[str]:
    directory = os.path.join(PROGRAMS_DIR, kind)
    return sorted(f for f in os.listdir(directory) if f.endswith(".c"))


def read_program(kind: str, name: str) -> tuple[str, dict[str, str]]:
    with open(os.path.join(PROGRAMS_DIR, kind, name), encoding="utf-8") as f:
        source = f.read()
    return source, dict(_HEADER_RE.findall(source))


def run_native(asm: str) -> int:
    with tempfile.TemporaryDirectory() as tmp:
        asm_path = os.path.join(tmp, "prog.asm")
        obj_path = os.path.join(tmp, "prog.o")
        bin_path = os.path.join(tmp, "prog")
        with open(asm_path, "w") as f:
            f.write(asm)
        for cmd in (["nasm", "-f", "elf64", asm_path, "-o", obj_path],
                    ["gcc", obj_path, "-o", bin_path]):
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
            if result.returncode != 0:
                pytest.fail(f"{cmd[0]} failed:\n{result.stderr}\n\nGenerated assembly:\n{asm}")
        return subprocess.run([bin_path], timeout=10).returncode


@pytest.mark.parametrize("name", get_program_files("valid"))
def test_valid_program_compiles(name):
    source, _ = read_program("valid", name)
    asm = compile_source(source, name)
    assert "section .text" in asm
    # Deterministic output
    assert compile_source(source, name) == asm


@pytest.mark.skipif(not HAS_TOOLCHAIN, reason="needs nasm and gcc on x86-64 Linux")
@pytest.mark.parametrize("name", get_program_files("valid"))
def test_valid_program_runs(name):
    source, headers = read_program("valid", name)
    expected = int(headers.get("exit", "0"))
    assert run_native(compile_source(source, name)) == expected


@pytest.mark.parametrize("name", get_program_files("invalid"))
def test_invalid_program_rejected(name):
    source, headers = read_program("invalid", name)
    assert "expect" in headers, f"{name} is missing an '// expect:' header"
    with pytest.raises(CompileError) as exc:
        compile_source(source, name)
    assert type(exc.value).__name__ == headers["expect"], str(exc.value)
