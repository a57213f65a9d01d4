"""Syntax trees, symbol tables and three-address intermediate code for a small C-like language."""

__version__ = "0.1.0"
__all__ = ["gramtree", "intermediate_code", "semanteme"]