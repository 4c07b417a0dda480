from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from errors import DirectoryNotFoundError
from scan.siblings import ModuleSet, build_module_set

if TYPE_CHECKING:
    from pathlib import Path


def _make_dirs(root: Path, *names: str) -> None:
    for name in names:
        (root / name).mkdir(parents=True)


def test_module_set_excludes_target_and_sorts(tmp_path: Path) -> None:
    src = tmp_path / "src"
    _make_dirs(src, "feature-c", "feature-a", "feature-b")
    (src / "index.ts").write_text("export {};\n", encoding="utf-8")

    module_set = build_module_set(src / "feature-a")

    assert module_set.members == ("feature-b", "feature-c")
    assert module_set.target == "feature-a"
    assert "feature-a" not in module_set
    assert "index.ts" not in module_set


def test_module_set_with_explicit_scope(tmp_path: Path) -> None:
    _make_dirs(tmp_path, "app/features/auth", "app/features/cart", "app/shared")

    module_set = build_module_set(
        tmp_path / "app" / "features" / "auth",
        tmp_path / "app" / "features",
    )

    assert list(module_set) == ["cart"]
    assert len(module_set) == 1


def test_module_set_empty_when_target_has_no_siblings(tmp_path: Path) -> None:
    _make_dirs(tmp_path, "src/only")

    assert len(build_module_set(tmp_path / "src" / "only")) == 0


def test_module_set_missing_target_raises(tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFoundError):
        build_module_set(tmp_path / "missing")


def test_module_set_rejects_target_as_member() -> None:
    with pytest.raises(ValueError, match="target directory"):
        ModuleSet(members=("feature-a", "feature-b"), target="feature-a")
