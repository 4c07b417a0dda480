"""Model namespace for boundarymap records and report documents."""

from models.imports import (
    BindingKind,
    Finding,
    ImportBinding,
    ImportDeclaration,
    ImportRecord,
    ParseDiagnostic,
)
from models.report import (
    DirectoryNode,
    FileNode,
    ImportReport,
    ReportImport,
    ReportNode,
    ReportTree,
    SiblingReportEntry,
    SiblingsIndex,
)
from models.structure import DirectoryStats, StructureReport, StructureViolation

__all__ = [
    "BindingKind",
    "DirectoryNode",
    "DirectoryStats",
    "FileNode",
    "Finding",
    "ImportBinding",
    "ImportDeclaration",
    "ImportRecord",
    "ImportReport",
    "ParseDiagnostic",
    "ReportImport",
    "ReportNode",
    "ReportTree",
    "SiblingReportEntry",
    "SiblingsIndex",
    "StructureReport",
    "StructureViolation",
]
