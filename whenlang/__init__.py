"""Token codes, symbol table, syntax tree, decompiler, semantic checks and three-address code for a small typed language."""

__version__ = "0.1.0"
__all__ = ["tokens", "symbols", "astree", "decompiler", "declarations", "semantic", "tac"]