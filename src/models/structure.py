"""Structure analysis models.

A component file is a ``.tsx`` or ``.jsx`` file whose name does not start
with ``index.``; a directory holding more than one of them is flagged unless
its basename is exempt.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)

ViolationType = Literal["multiple-components"]


class StructureViolation(BaseModel):
    """A directory holding more than one component file."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    type: ViolationType = "multiple-components"
    directory: str
    files: tuple[str, ...]
    message: str


class DirectoryStats(BaseModel):
    """Presentation node mirroring one visited directory."""

    model_config = _CAMEL_CONFIG

    directory: str
    component_files: list[str] = Field(default_factory=list)
    component_count: int = 0
    sub_directories: list[DirectoryStats] = Field(default_factory=list)
    has_violation: bool = False
    violation_type: ViolationType | None = None


DirectoryStats.model_rebuild()


class StructureReport(BaseModel):
    """Persisted result of one structure analysis run."""

    model_config = _CAMEL_CONFIG

    target_directory: str
    analyzed_at: datetime
    skip_directories: list[str] = Field(default_factory=list)
    violations: list[StructureViolation] = Field(default_factory=list)
    structure: DirectoryStats


__all__ = [
    "DirectoryStats",
    "StructureReport",
    "StructureViolation",
    "ViolationType",
]
