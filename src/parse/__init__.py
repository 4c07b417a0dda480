"""Parsing utilities for boundarymap."""

from parse.treesitter_imports import (
    extract_file_imports,
    extract_imports,
    select_dialect,
)

__all__ = [
    "extract_file_imports",
    "extract_imports",
    "select_dialect",
]
