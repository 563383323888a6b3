#!/usr/bin/env python3
"""cmmc: compiles CMM, a small C subset, to x86-64 assembly.

Thin entry point that delegates to cmmc.compiler.main.
"""

from cmmc.compiler.main import main

if __name__ == "__main__":
    main()
