"""Analyze every immediate subdirectory of a parent directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from analysis.imports import ImportAnalysis, analyze_imports
from errors import BoundaryMapError, require_directory
from utils import normalize_path

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiblingRun:
    """Result of analyzing one subdirectory; exactly one of the fields is set."""

    directory: str
    analysis: ImportAnalysis | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def list_feature_directories(parent_dir: Path) -> list[Path]:
    """Return the immediate subdirectories of ``parent_dir`` sorted by name."""
    require_directory(parent_dir)
    return sorted(
        (entry for entry in normalize_path(parent_dir).iterdir() if entry.is_dir()),
        key=lambda entry: entry.name,
    )


def analyze_sibling_directories(
    parent_dir: Path,
    **scan_options: Any,
) -> list[SiblingRun]:
    """Run an independent import analysis for every subdirectory of ``parent_dir``.

    Each run uses the other subdirectories as its sibling set. A failing run
    is recorded with its error and does not stop the batch.

    Args:
        parent_dir: Directory whose children are the feature modules
        **scan_options: Keyword arguments forwarded to ``analyze_imports``

    Raises:
        DirectoryNotFoundError: If ``parent_dir`` does not exist.
    """
    directories = list_feature_directories(parent_dir)
    logger.info("Found %d directories in %s", len(directories), parent_dir)

    runs: list[SiblingRun] = []
    for directory in directories:
        logger.info("Analyzing directory: %s", directory.name)
        try:
            analysis = analyze_imports(directory, **scan_options)
        except (BoundaryMapError, OSError) as exc:
            logger.error("Error analyzing %s: %s", directory.name, exc)
            runs.append(SiblingRun(directory=directory.name, error=str(exc)))
            continue
        runs.append(SiblingRun(directory=directory.name, analysis=analysis))

    return runs


__all__ = ["SiblingRun", "analyze_sibling_directories", "list_feature_directories"]
