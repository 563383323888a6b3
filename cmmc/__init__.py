"""cmmc: a compiler for CMM, a small C subset, targeting x86-64 assembly."""

__version__ = "0.1.0"
