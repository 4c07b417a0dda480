from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import CONFIG_FILENAME, ConfigError, load_config, resolve_output_dir


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / CONFIG_FILENAME).write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output_dir == ".boundarymap"
    assert config.structure.skip_directories == ["components"]
    assert config.respect_gitignore is False


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.output_dir == ".boundarymap"
    assert config.include == []
    assert config.exclude == []


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_structure_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[structure]
skip_directories = ["components"]
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_path_like_skip_directory_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[structure]
skip_directories = ["src/components"]
""".strip(),
    )

    with pytest.raises(ConfigError, match="plain directory names"):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "output_dir = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
output_dir = "reports"
exclude = ["**/*.test.ts"]
respect_gitignore = true

[structure]
skip_directories = ["components", "icons"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.output_dir == "reports"
    assert config.structure.skip_directories == ["components", "icons"]
    assert config.scan_options() == {
        "include_patterns": None,
        "exclude_patterns": ["**/*.test.ts"],
        "respect_gitignore": True,
        "nested_gitignore": False,
    }


def test_resolve_output_dir_within_root(tmp_path: Path) -> None:
    assert resolve_output_dir(tmp_path, "out/reports") == (
        tmp_path.resolve() / "out" / "reports"
    )


@pytest.mark.parametrize("output_dir", ["", "~/reports", "/abs/reports"])
def test_resolve_output_dir_rejects_non_relative(
    tmp_path: Path, output_dir: str
) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, output_dir)


def test_resolve_output_dir_rejects_escape(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    with pytest.raises(ConfigError, match="escapes the project root"):
        resolve_output_dir(repo_root, "../outside")
