"""Drift verification for persisted import reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from analysis.imports import analyze_imports
from models.report import ImportReport
from report.document import describe_finding, report_findings

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from findings.aggregate import FindingKey
    from models.imports import Finding


@dataclass(frozen=True)
class DriftResult:
    ok: bool
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _keyed(findings: Iterable[Finding]) -> dict[FindingKey, str]:
    return {finding.identity_key: describe_finding(finding) for finding in findings}


def load_import_report(report_path: Path) -> ImportReport:
    """Load and validate a persisted import report.

    Raises:
        FileNotFoundError: If the report does not exist.
        ValueError: If the report is not valid JSON or fails validation.
    """
    if not report_path.is_file():
        msg = f"Report file does not exist: {report_path}"
        raise FileNotFoundError(msg)
    try:
        data: Any = orjson.loads(report_path.read_bytes())
        return ImportReport.model_validate(data)
    except (orjson.JSONDecodeError, ValidationError) as exc:
        msg = f"Invalid import report {report_path}: {exc}"
        raise ValueError(msg) from exc


def verify_report(
    *,
    target_dir: Path,
    report_path: Path,
    scope_dir: Path | None = None,
    **scan_options: Any,
) -> DriftResult:
    """Verify that a persisted import report still matches the sources.

    Re-runs the analysis and compares findings by source file, sibling,
    specifier and bindings. ``analyzedAt`` and absolute paths are ignored so
    that reports stay comparable across runs and checkouts.

    Args:
        target_dir: Directory the report was generated for.
        report_path: Existing ``import-analysis.json`` to verify.
        scope_dir: Sibling scope the report was produced with, if not the parent.
        **scan_options: Scanner options forwarded to ``analyze_imports``.

    Returns:
        DriftResult listing findings missing from the current sources and
        findings not present in the report, both sorted.

    Raises:
        FileNotFoundError: If report_path does not exist.
        ValueError: If report_path is not a valid import report.
    """
    report = load_import_report(report_path)
    recorded = _keyed(report_findings(report))

    analysis = analyze_imports(target_dir, scope_dir=scope_dir, **scan_options)
    current = _keyed(analysis.findings)

    missing = sorted(recorded[key] for key in recorded.keys() - current.keys())
    extra = sorted(current[key] for key in current.keys() - recorded.keys())

    return DriftResult(
        ok=not missing and not extra,
        missing=tuple(missing),
        extra=tuple(extra),
    )


__all__ = ["DriftResult", "load_import_report", "verify_report"]
