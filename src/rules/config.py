from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "boundarymap.toml"


class StructureConfig(BaseModel):
    """Configuration for the component structure check."""

    model_config = ConfigDict(extra="forbid")

    skip_directories: list[str] = Field(
        default_factory=lambda: ["components"],
        description="Directory basenames exempt from the multiple-components check",
    )

    @field_validator("skip_directories")
    @classmethod
    def validate_skip_directories(cls, v: list[str]) -> list[str]:
        """Reject path-like entries; exemptions match basenames only."""
        for name in v:
            if not name or "/" in name or "\\" in name:
                msg = (
                    "skip_directories entries must be plain directory names: "
                    f"{name!r}"
                )
                raise ValueError(msg)
        return v


class BoundaryMapConfig(BaseModel):
    """Configuration for boundarymap analysis runs."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".boundarymap",
        description="Output directory for generated reports",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all source files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    respect_gitignore: bool = Field(
        default=False,
        description="Skip files matched by the analyzed directory's .gitignore",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    structure: StructureConfig = Field(
        default_factory=StructureConfig,
        description="Component structure check settings",
    )

    def scan_options(self) -> dict[str, object]:
        """Keyword arguments for ``analyze_imports`` derived from this config."""
        return {
            "include_patterns": self.include or None,
            "exclude_patterns": self.exclude or None,
            "respect_gitignore": self.respect_gitignore,
            "nested_gitignore": self.nested_gitignore,
        }


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> BoundaryMapConfig:
    """Load configuration from boundarymap.toml if it exists."""
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        return BoundaryMapConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return BoundaryMapConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
