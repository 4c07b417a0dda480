"""Scanning utilities for boundarymap."""

from scan.files import SOURCE_EXTENSIONS, find_source_files
from scan.siblings import ModuleSet, build_module_set

__all__ = [
    "SOURCE_EXTENSIONS",
    "ModuleSet",
    "build_module_set",
    "find_source_files",
]
