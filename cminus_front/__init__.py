"""Syntax tree, symbol table, semantic checks and three-address code for C-minus."""

__version__ = "0.1.0"
__all__ = ["ast", "symbols", "semantic", "tac", "codegen"]