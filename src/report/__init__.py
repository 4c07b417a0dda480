"""Report model builders for boundarymap."""

from report.document import build_import_report, describe_finding, report_findings
from report.tree import build_report_tree, count_imports, iter_file_nodes

__all__ = [
    "build_import_report",
    "build_report_tree",
    "describe_finding",
    "count_imports",
    "iter_file_nodes",
    "report_findings",
]
