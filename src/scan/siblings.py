"""Sibling module enumeration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from errors import require_directory
from utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@dataclass(frozen=True)
class ModuleSet:
    """Sibling directory names of one analysis target, in enumeration order.

    Members are the immediate child directories of the scope directory,
    excluding the target itself. The first matching member wins whenever a
    specifier could name more than one sibling.
    """

    members: tuple[str, ...]
    target: str

    def __post_init__(self) -> None:
        if self.target in self.members:
            msg = f"ModuleSet must not contain the target directory {self.target!r}"
            raise ValueError(msg)

    def __contains__(self, name: object) -> bool:
        return name in self.members

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)


def build_module_set(target_dir: Path, scope_dir: Path | None = None) -> ModuleSet:
    """Compute the sibling module set for ``target_dir``.

    Args:
        target_dir: Directory whose imports are being analyzed
        scope_dir: Directory whose immediate children are the candidate
            modules; defaults to the parent of ``target_dir``

    Returns:
        ModuleSet sorted by directory name.

    Raises:
        DirectoryNotFoundError: If the target or the scope directory is missing.
    """
    require_directory(target_dir)
    if scope_dir is None:
        scope_dir = normalize_path(target_dir).parent
    require_directory(scope_dir)

    target_name = normalize_path(target_dir).name
    members = sorted(
        entry.name
        for entry in scope_dir.iterdir()
        if entry.is_dir() and entry.name != target_name
    )
    return ModuleSet(members=tuple(members), target=target_name)


__all__ = ["ModuleSet", "build_module_set"]
