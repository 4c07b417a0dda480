"""Drift verification for persisted reports."""

from verify.verify import DriftResult, load_import_report, verify_report

__all__ = ["DriftResult", "load_import_report", "verify_report"]
