"""Report document models for persisted import analysis results.

The persisted import report is read back by external tooling that walks
``structure`` looking for ``type == "file"`` nodes and reads each import's
``siblingDirectory`` and ``importedItems``. Field aliases here are part of
that contract.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReportImport(BaseModel):
    """One sibling import attached to a file node."""

    model_config = _CAMEL_CONFIG

    import_path: str
    sibling_directory: str
    imported_items: list[str] = Field(default_factory=list)
    absolute_path: str


class FileNode(BaseModel):
    model_config = _CAMEL_CONFIG

    type: Literal["file"] = "file"
    imports: list[ReportImport] = Field(default_factory=list)


class DirectoryNode(BaseModel):
    model_config = _CAMEL_CONFIG

    type: Literal["directory"] = "directory"
    children: dict[str, ReportNode] = Field(default_factory=dict)


ReportNode = Annotated[FileNode | DirectoryNode, Field(discriminator="type")]
ReportTree = dict[str, ReportNode]

DirectoryNode.model_rebuild()


class ImportReport(BaseModel):
    """Persisted result of one import analysis run."""

    model_config = _CAMEL_CONFIG

    target_directory: str
    analyzed_at: datetime
    total_imports: int = Field(ge=0)
    structure: ReportTree = Field(default_factory=dict)


class SiblingReportEntry(BaseModel):
    """One directory's outcome in a sibling batch run."""

    model_config = _CAMEL_CONFIG

    directory: str
    report_path: str | None = None
    import_count: int = 0
    error: str | None = None


class SiblingsIndex(BaseModel):
    """Index of every per-directory report produced by a sibling batch run."""

    model_config = _CAMEL_CONFIG

    parent_directory: str
    analyzed_at: datetime
    reports: list[SiblingReportEntry] = Field(default_factory=list)

    @property
    def total_imports(self) -> int:
        return sum(entry.import_count for entry in self.reports)


__all__ = [
    "DirectoryNode",
    "FileNode",
    "ImportReport",
    "ReportImport",
    "ReportNode",
    "ReportTree",
    "SiblingReportEntry",
    "SiblingsIndex",
]
