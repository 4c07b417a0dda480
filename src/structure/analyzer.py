"""Flag directories that hold more than one component file."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from errors import StructureListingError, require_directory
from models.structure import DirectoryStats, StructureReport, StructureViolation
from utils import normalize_path, relative_to_scope

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

COMPONENT_EXTENSIONS = (".tsx", ".jsx")
DEFAULT_SKIP_DIRECTORIES: tuple[str, ...] = ("components",)


def is_component_file(name: str) -> bool:
    """Return True for ``.tsx``/``.jsx`` file names other than ``index.*``."""
    return name.endswith(COMPONENT_EXTENSIONS) and not name.startswith("index.")


def _list_entries(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise StructureListingError(directory, str(exc)) from exc


class _StructureWalker:
    """Depth-first walk collecting violations in visit order."""

    def __init__(self, base_dir: Path, skip_directories: frozenset[str]) -> None:
        self.base_dir = base_dir
        self.skip_directories = skip_directories
        self.violations: list[StructureViolation] = []
        self._visited: set[Path] = set()

    def visit(self, directory: Path) -> DirectoryStats:
        self._visited.add(directory.resolve())
        entries = _list_entries(directory)
        display_path = relative_to_scope(directory, self.base_dir)

        component_files = [
            entry.name
            for entry in entries
            if is_component_file(entry.name) and entry.is_file()
        ]
        stats = DirectoryStats(
            directory=display_path,
            component_files=component_files,
            component_count=len(component_files),
        )

        # Exemption applies to this directory only; children are still checked.
        if len(component_files) > 1 and directory.name not in self.skip_directories:
            stats.has_violation = True
            stats.violation_type = "multiple-components"
            self.violations.append(
                StructureViolation(
                    directory=display_path,
                    files=tuple(component_files),
                    message=(
                        "Directory contains multiple component files: "
                        f"{', '.join(component_files)}"
                    ),
                )
            )
            logger.debug("Structure violation in %s", display_path)

        for entry in entries:
            if entry.is_symlink() or not entry.is_dir():
                continue
            if entry.resolve() in self._visited:
                continue
            stats.sub_directories.append(self.visit(entry))

        return stats


def analyze_structure(
    root: Path,
    *,
    skip_directories: Iterable[str] = DEFAULT_SKIP_DIRECTORIES,
    base_dir: Path | None = None,
    analyzed_at: datetime | None = None,
) -> StructureReport:
    """Walk ``root`` and report directories holding several component files.

    Args:
        root: Directory to analyze recursively
        skip_directories: Directory basenames exempt from the check; the
            exemption is not inherited by subdirectories
        base_dir: Directory that reported paths are relative to; defaults to
            the parent of ``root``
        analyzed_at: Timestamp for the report (default: now, UTC)

    Returns:
        StructureReport with violations in visit order and a DirectoryStats
        tree mirroring the walked directories.

    Raises:
        DirectoryNotFoundError: If ``root`` does not exist.
        StructureListingError: If any directory cannot be listed.
    """
    require_directory(root)
    root = normalize_path(root)
    base = normalize_path(base_dir) if base_dir is not None else root.parent
    skip = list(dict.fromkeys(skip_directories))

    walker = _StructureWalker(base, frozenset(skip))
    structure = walker.visit(root)

    logger.info(
        "Structure analysis of %s found %d violation(s)",
        root,
        len(walker.violations),
    )

    return StructureReport(
        target_directory=str(root),
        analyzed_at=analyzed_at or datetime.now(UTC),
        skip_directories=skip,
        violations=walker.violations,
        structure=structure,
    )


__all__ = [
    "COMPONENT_EXTENSIONS",
    "DEFAULT_SKIP_DIRECTORIES",
    "analyze_structure",
    "is_component_file",
]
