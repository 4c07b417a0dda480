"""Report artifact contract definitions.

Filenames and formats here are what external tooling (dashboards that
aggregate several runs) expects to find on disk.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from models.report import ImportReport, SiblingsIndex
from models.structure import StructureReport

# Report filename constants (stable contract identifiers).
IMPORT_REPORT_JSON = "import-analysis.json"
STRUCTURE_REPORT_JSON = "structure-analysis.json"
SIBLINGS_INDEX_JSON = "index.json"

# Directory name prefixes for batch and structure runs.
SIBLINGS_REPORTS_PREFIX = "import-analysis-"
STRUCTURE_REPORTS_PREFIX = "structure-analysis-"

# Top-level keys every persisted import report must carry.
IMPORT_REPORT_FIELDS = ("targetDirectory", "analyzedAt", "totalImports", "structure")


@dataclass(frozen=True)
class ReportArtifactSpec:
    """Specification for a persisted report artifact."""

    filename: str
    model: type[BaseModel]


REPORT_ARTIFACT_SPECS: dict[str, ReportArtifactSpec] = {
    "imports": ReportArtifactSpec(
        filename=IMPORT_REPORT_JSON,
        model=ImportReport,
    ),
    "structure": ReportArtifactSpec(
        filename=STRUCTURE_REPORT_JSON,
        model=StructureReport,
    ),
    "siblings_index": ReportArtifactSpec(
        filename=SIBLINGS_INDEX_JSON,
        model=SiblingsIndex,
    ),
}


def artifact_for_filename(filename: str) -> str | None:
    """Return the REPORT_ARTIFACT_SPECS key whose filename matches, if any."""
    for name, artifact in REPORT_ARTIFACT_SPECS.items():
        if artifact.filename == filename:
            return name
    return None


def siblings_reports_dirname(parent_name: str) -> str:
    """Directory holding one batch run's reports, e.g. ``import-analysis-src``."""
    return f"{SIBLINGS_REPORTS_PREFIX}{parent_name}"


def structure_reports_dirname(target_name: str) -> str:
    return f"{STRUCTURE_REPORTS_PREFIX}{target_name}"
