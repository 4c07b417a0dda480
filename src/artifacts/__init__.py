"""Report artifact writers."""

from artifacts.write import (
    write_analysis,
    write_import_report,
    write_sibling_reports,
    write_siblings_index,
    write_structure_report,
)

__all__ = [
    "write_analysis",
    "write_import_report",
    "write_sibling_reports",
    "write_siblings_index",
    "write_structure_report",
]
