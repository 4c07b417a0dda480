"""Stable report contract surface for boundarymap.

Filenames and document shapes exported here are what external tooling
reads back; treat them as the authoritative boundary.
"""

from contract.artifacts import (
    IMPORT_REPORT_FIELDS,
    IMPORT_REPORT_JSON,
    REPORT_ARTIFACT_SPECS,
    SIBLINGS_INDEX_JSON,
    STRUCTURE_REPORT_JSON,
    ReportArtifactSpec,
    artifact_for_filename,
)


def __getattr__(name: str) -> object:
    if name in {
        "ValidationMessage",
        "ValidationResult",
        "validate_import_report",
        "validate_report",
        "validate_siblings_index",
        "validate_structure_report",
    }:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_import_report,
            validate_report,
            validate_siblings_index,
            validate_structure_report,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_import_report": validate_import_report,
            "validate_report": validate_report,
            "validate_siblings_index": validate_siblings_index,
            "validate_structure_report": validate_structure_report,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "IMPORT_REPORT_FIELDS",
    "IMPORT_REPORT_JSON",
    "REPORT_ARTIFACT_SPECS",
    "SIBLINGS_INDEX_JSON",
    "STRUCTURE_REPORT_JSON",
    "ReportArtifactSpec",
    "ValidationMessage",
    "ValidationResult",
    "artifact_for_filename",
    "validate_import_report",
    "validate_report",
    "validate_siblings_index",
    "validate_structure_report",
]
