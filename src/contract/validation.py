"""Validation helpers for persisted report artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import BaseModel, ValidationError

from contract.artifacts import (
    IMPORT_REPORT_FIELDS,
    REPORT_ARTIFACT_SPECS,
    artifact_for_filename,
)
from report.tree import count_imports, iter_file_nodes

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from models.structure import DirectoryStats


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    location_hint: str | None = None

    def location(self) -> str:
        if self.location_hint is None:
            return str(self.path)
        return f"{self.path}:{self.location_hint}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "location": self.location_hint,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _load_document(
    artifact_name: str,
    path: Path,
    result: ValidationResult,
) -> dict[str, Any] | None:
    if not path.exists():
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message="Report file does not exist.",
            )
        )
        return None

    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return None

    if not isinstance(raw, dict):
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message="Expected JSON object at top level.",
            )
        )
        return None

    return raw


def _validate_model(
    artifact_name: str,
    path: Path,
    model: type[BaseModel],
    data: dict[str, Any],
    result: ValidationResult,
) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return None


def validate_import_report(path: Path) -> ValidationResult:
    """Validate a persisted ``import-analysis.json`` document.

    Checks the four contract fields are present under their camelCase names,
    the ReportTree has the expected node shape, and ``totalImports`` equals
    the number of imports held by ``structure``.
    """
    result = ValidationResult()
    artifact_name = "imports"

    data = _load_document(artifact_name, path, result)
    if data is None:
        return result

    missing = [name for name in IMPORT_REPORT_FIELDS if name not in data]
    for name in missing:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                location_hint=name,
                message=f"Missing required field '{name}'.",
            )
        )
    if missing:
        return result

    model = REPORT_ARTIFACT_SPECS[artifact_name].model
    report = _validate_model(artifact_name, path, model, data, result)
    if report is None:
        return result

    counted = count_imports(report.structure)
    if counted != report.total_imports:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                location_hint="totalImports",
                message=(
                    f"totalImports is {report.total_imports} but structure "
                    f"holds {counted} import(s)."
                ),
            )
        )

    for relative_path, file_node in iter_file_nodes(report.structure):
        if not file_node.imports:
            result.warnings.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    location_hint=relative_path,
                    message="File node has no imports.",
                )
            )

    return result


def validate_structure_report(path: Path) -> ValidationResult:
    """Validate a persisted ``structure-analysis.json`` document."""
    result = ValidationResult()
    artifact_name = "structure"

    data = _load_document(artifact_name, path, result)
    if data is None:
        return result

    model = REPORT_ARTIFACT_SPECS[artifact_name].model
    report = _validate_model(artifact_name, path, model, data, result)
    if report is None:
        return result

    flagged = _count_flagged(report.structure)
    if flagged != len(report.violations):
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                location_hint="violations",
                message=(
                    f"{len(report.violations)} violation(s) listed but "
                    f"{flagged} directory node(s) flagged."
                ),
            )
        )

    return result


def _count_flagged(stats: DirectoryStats) -> int:
    return int(stats.has_violation) + sum(
        _count_flagged(child) for child in stats.sub_directories
    )


def validate_siblings_index(path: Path) -> ValidationResult:
    """Validate a batch ``index.json`` and the reports it points to."""
    result = ValidationResult()
    artifact_name = "siblings_index"

    data = _load_document(artifact_name, path, result)
    if data is None:
        return result

    model = REPORT_ARTIFACT_SPECS[artifact_name].model
    index = _validate_model(artifact_name, path, model, data, result)
    if index is None:
        return result

    for entry in index.reports:
        if (entry.report_path is None) == (entry.error is None):
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    location_hint=entry.directory,
                    message="Entry must have exactly one of reportPath or error.",
                )
            )
        elif not (path.parent / entry.report_path).is_file():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    location_hint=entry.directory,
                    message=f"Report file does not exist: {entry.report_path}.",
                )
            )

    return result


def validate_report(path: Path) -> ValidationResult:
    """Validate a persisted report, choosing the check from its filename.

    Files with an unrecognized name are validated as import reports.
    """
    artifact_name = artifact_for_filename(path.name) or "imports"
    return _VALIDATORS[artifact_name](path)


_VALIDATORS: dict[str, Callable[[Path], ValidationResult]] = {
    "imports": validate_import_report,
    "structure": validate_structure_report,
    "siblings_index": validate_siblings_index,
}


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_import_report",
    "validate_report",
    "validate_siblings_index",
    "validate_structure_report",
]
