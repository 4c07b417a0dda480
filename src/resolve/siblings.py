"""Classify import specifiers as sibling, internal or external imports."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from models.imports import Finding, ImportRecord
from utils import relative_to_scope, split_segments

if TYPE_CHECKING:
    from pathlib import Path

    from scan.siblings import ModuleSet


@dataclass(frozen=True)
class AnalysisContext:
    """Paths and sibling oracle shared by every file of one analysis run."""

    target_dir: Path
    scope_dir: Path
    module_set: ModuleSet


def _classify_relative(
    specifier: str,
    importing_dir: str | Path,
    scope_dir: str | Path,
    module_set: ModuleSet,
) -> str | None:
    resolved = os.path.normpath(os.path.join(importing_dir, specifier))
    segments = split_segments(relative_to_scope(resolved, scope_dir))
    if not segments:
        return None
    candidate = segments[0]
    return candidate if candidate in module_set else None


def _classify_bare(specifier: str, module_set: ModuleSet) -> str | None:
    # First member in enumeration order wins when several would match.
    for member in module_set:
        if f"/{member}/" in specifier or specifier == member:
            return member
    return None


def classify_specifier(
    specifier: str,
    importing_dir: str | Path,
    scope_dir: str | Path,
    module_set: ModuleSet,
) -> str | None:
    """Return the sibling module an import specifier points into, if any.

    Relative specifiers are resolved lexically against the importing file's
    directory; the first segment of the result relative to ``scope_dir``
    must be a sibling. Non-relative specifiers match a sibling when they
    contain ``/<sibling>/`` or equal the sibling name.

    Examples:
        >>> from scan.siblings import ModuleSet
        >>> siblings = ModuleSet(
        ...     members=("feature-b", "feature-c"), target="feature-a"
        ... )
        >>> classify_specifier(
        ...     "../feature-b/helper", "/src/feature-a", "/src", siblings
        ... )
        'feature-b'
        >>> classify_specifier("./utils", "/src/feature-a", "/src", siblings) is None
        True
        >>> classify_specifier("@app/feature-c/api", "/src/feature-a", "/src", siblings)
        'feature-c'
    """
    if specifier.startswith("."):
        return _classify_relative(specifier, importing_dir, scope_dir, module_set)
    return _classify_bare(specifier, module_set)


def classify_record(record: ImportRecord, context: AnalysisContext) -> ImportRecord:
    """Return a copy of ``record`` with its sibling classification filled in."""
    sibling = classify_specifier(
        record.specifier,
        record.directory,
        context.scope_dir,
        context.module_set,
    )
    return record.model_copy(
        update={"is_sibling": sibling is not None, "sibling_module": sibling}
    )


def finding_from_record(record: ImportRecord) -> Finding | None:
    """Build the Finding for a classified record that crosses into a sibling."""
    if not record.is_sibling or record.sibling_module is None:
        return None
    return Finding(
        source_file=record.source_file,
        specifier=record.specifier,
        sibling_module=record.sibling_module,
        bindings=tuple(binding.render() for binding in record.bindings),
        absolute_path=record.absolute_path,
    )


def resolve_import(record: ImportRecord, context: AnalysisContext) -> Finding | None:
    """Classify an import record and build its Finding when it crosses siblings."""
    return finding_from_record(classify_record(record, context))


__all__ = [
    "AnalysisContext",
    "classify_record",
    "classify_specifier",
    "finding_from_record",
    "resolve_import",
]
