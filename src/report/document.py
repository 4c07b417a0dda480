"""Persisted import report documents."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from models.imports import Finding
from models.report import ImportReport
from report.tree import build_report_tree, iter_file_nodes
from utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def build_import_report(
    target_dir: Path,
    findings: Sequence[Finding],
    *,
    analyzed_at: datetime | None = None,
) -> ImportReport:
    """Build the document external tooling reads back after a run."""
    return ImportReport(
        target_directory=str(normalize_path(target_dir)),
        analyzed_at=analyzed_at or datetime.now(UTC),
        total_imports=len(findings),
        structure=build_report_tree(findings),
    )


def describe_finding(finding: Finding) -> str:
    """One-line human readable description of a finding.

    Examples:
        >>> describe_finding(
        ...     Finding(
        ...         source_file="a/x.ts",
        ...         specifier="../b/y",
        ...         sibling_module="b",
        ...         bindings=("y",),
        ...         absolute_path="/src/a/x.ts",
        ...     )
        ... )
        "a/x.ts imports from sibling directory 'b': ../b/y (importing: y)"
    """
    text = (
        f"{finding.source_file} imports from sibling directory "
        f"'{finding.sibling_module}': {finding.specifier}"
    )
    if finding.bindings:
        text += f" (importing: {', '.join(finding.bindings)})"
    return text


def report_findings(report: ImportReport) -> list[Finding]:
    """Rebuild the flat finding list from a report's tree."""
    findings: list[Finding] = []
    for source_file, file_node in iter_file_nodes(report.structure):
        findings.extend(
            Finding(
                source_file=source_file,
                specifier=item.import_path,
                sibling_module=item.sibling_directory,
                bindings=tuple(item.imported_items),
                absolute_path=item.absolute_path,
            )
            for item in file_node.imports
        )
    return findings


__all__ = ["build_import_report", "describe_finding", "report_findings"]
