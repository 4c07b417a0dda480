"""Component structure checks for boundarymap."""

from structure.analyzer import (
    DEFAULT_SKIP_DIRECTORIES,
    analyze_structure,
    is_component_file,
)

__all__ = ["DEFAULT_SKIP_DIRECTORIES", "analyze_structure", "is_component_file"]
