"""Shared path utilities for boundarymap."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_path(path: str | Path) -> Path:
    """Return an absolute, lexically normalized path.

    Symlinks are not resolved, so the result keeps the directory names the
    caller used. ``..`` segments are collapsed the same way import
    specifiers are resolved.

    Examples:
        >>> normalize_path("/repo/src/feature-a/../feature-b").as_posix()
        '/repo/src/feature-b'
    """
    return Path(os.path.abspath(path))


def relative_to_scope(path: str | Path, scope_dir: str | Path) -> str:
    """Return ``path`` relative to ``scope_dir`` using the platform separator.

    Unlike ``Path.relative_to`` this never raises: paths outside the scope
    come back with leading ``..`` segments.

    Examples:
        >>> relative_to_scope("/repo/src/feature-a/x.ts", "/repo/src")
        'feature-a/x.ts'
        >>> relative_to_scope("/repo/lib/y.ts", "/repo/src")
        '../lib/y.ts'
    """
    return os.path.relpath(os.path.abspath(path), os.path.abspath(scope_dir))


def split_segments(relative_path: str) -> list[str]:
    """Split a platform relative path into its non-empty segments.

    Examples:
        >>> split_segments("feature-a/nested/x.ts")
        ['feature-a', 'nested', 'x.ts']
    """
    return [segment for segment in relative_path.split(os.sep) if segment]
