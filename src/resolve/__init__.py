"""Sibling import classification."""

from resolve.siblings import (
    AnalysisContext,
    classify_record,
    classify_specifier,
    finding_from_record,
    resolve_import,
)

__all__ = [
    "AnalysisContext",
    "classify_record",
    "classify_specifier",
    "finding_from_record",
    "resolve_import",
]
