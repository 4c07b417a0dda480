"""Source file discovery for JavaScript and TypeScript trees."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from errors import require_directory
from utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

SOURCE_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx"})


def _should_include_file(
    path: Path,
    directory: Path,
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if path.suffix not in SOURCE_EXTENSIONS:
        return False

    # Symlinked files are kept; the analyzer deduplicates them by resolved path.
    if not path.is_file():
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    rel_path_str = rel_path.as_posix()

    if gitignore_matches is not None and _is_ignored(gitignore_matches, path):
        return False

    if include_patterns and not any(
        fnmatch(rel_path_str, pat) for pat in include_patterns
    ):
        return False

    has_excluded_match = exclude_patterns and any(
        fnmatch(rel_path_str, pat) for pat in exclude_patterns
    )
    return not has_excluded_match


def _is_ignored(gitignore_matches: Callable[[str], bool], path: Path) -> bool:
    try:
        return gitignore_matches(str(path))
    except ValueError:
        # Matchers reject paths that resolve outside their base directory.
        return False


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def _walk_files(directory: Path) -> Iterator[Path]:
    # Symlinked directories are listed in dirnames but never descended.
    for current, dirnames, filenames in os.walk(directory, followlinks=False):
        dirnames.sort()
        current_path = Path(current)
        for filename in filenames:
            yield current_path / filename


def find_source_files(
    directory: Path,
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    respect_gitignore: bool = False,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all JavaScript/TypeScript source files beneath a directory.

    Args:
        directory: Directory to search recursively
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded
        respect_gitignore: Skip files matched by ``directory/.gitignore``
        nested_gitignore: Also compose every nested ``.gitignore``

    Returns:
        Absolute paths of ``.js``, ``.jsx``, ``.ts`` and ``.tsx`` files,
        sorted lexicographically by relative path for deterministic ordering.

    Raises:
        DirectoryNotFoundError: If ``directory`` does not exist or is not a
            directory.
    """
    require_directory(directory)
    directory = normalize_path(directory)

    gitignore_matches = None
    if respect_gitignore or nested_gitignore:
        gitignore_matches = _build_gitignore_matcher(
            directory,
            nested_gitignore=nested_gitignore,
        )

    matched_files = [
        path
        for path in _walk_files(directory)
        if _should_include_file(
            path,
            directory,
            gitignore_matches,
            include_patterns,
            exclude_patterns,
        )
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    return iter(matched_files)


__all__ = ["SOURCE_EXTENSIONS", "_should_include_file", "find_source_files"]
