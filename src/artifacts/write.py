from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from artifacts.utils import _write_json
from contract.artifacts import REPORT_ARTIFACT_SPECS
from models.report import SiblingReportEntry, SiblingsIndex
from utils import normalize_path

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import BaseModel

    from analysis.imports import ImportAnalysis
    from analysis.siblings import SiblingRun
    from models.report import ImportReport
    from models.structure import StructureReport

logger = logging.getLogger(__name__)


def _write_artifact(artifact_name: str, document: BaseModel, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / REPORT_ARTIFACT_SPECS[artifact_name].filename
    _write_json(path, document)
    logger.debug("Wrote %s", path)
    return path


def write_import_report(report: ImportReport, out_dir: Path) -> Path:
    """Write ``import-analysis.json`` into ``out_dir`` and return its path."""
    return _write_artifact("imports", report, out_dir)


def write_structure_report(report: StructureReport, out_dir: Path) -> Path:
    """Write ``structure-analysis.json`` into ``out_dir`` and return its path."""
    return _write_artifact("structure", report, out_dir)


def write_siblings_index(index: SiblingsIndex, out_dir: Path) -> Path:
    """Write the batch ``index.json`` into ``out_dir`` and return its path."""
    return _write_artifact("siblings_index", index, out_dir)


def write_analysis(
    analysis: ImportAnalysis,
    out_dir: Path,
    *,
    analyzed_at: datetime | None = None,
) -> Path:
    return write_import_report(analysis.to_report(analyzed_at=analyzed_at), out_dir)


def write_sibling_reports(
    runs: list[SiblingRun],
    *,
    parent_dir: Path,
    reports_dir: Path,
    analyzed_at: datetime | None = None,
) -> SiblingsIndex:
    """Write one report per successful run plus the batch ``index.json``.

    Args:
        runs: Results of ``analyze_sibling_directories``
        parent_dir: Directory whose children were analyzed
        reports_dir: Directory receiving ``<child>/import-analysis.json``
            files and the index
        analyzed_at: Timestamp shared by every report of the batch

    Returns:
        The SiblingsIndex that was written. Report paths in it are relative
        to ``reports_dir``.
    """
    timestamp = analyzed_at or datetime.now(UTC)
    reports_dir.mkdir(parents=True, exist_ok=True)

    entries: list[SiblingReportEntry] = []
    for run in runs:
        if run.analysis is None:
            entries.append(SiblingReportEntry(directory=run.directory, error=run.error))
            continue

        report_path = write_analysis(
            run.analysis, reports_dir / run.directory, analyzed_at=timestamp
        )
        entries.append(
            SiblingReportEntry(
                directory=run.directory,
                report_path=report_path.relative_to(reports_dir).as_posix(),
                import_count=run.analysis.total,
            )
        )

    index = SiblingsIndex(
        parent_directory=str(normalize_path(parent_dir)),
        analyzed_at=timestamp,
        reports=entries,
    )
    write_siblings_index(index, reports_dir)
    return index


__all__ = [
    "write_analysis",
    "write_import_report",
    "write_sibling_reports",
    "write_siblings_index",
    "write_structure_report",
]
