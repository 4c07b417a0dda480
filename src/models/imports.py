"""Import records extracted from JavaScript and TypeScript sources.

This module contains the models that flow from the extractor through the
sibling resolver into the finding aggregator.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BindingKind = Literal["default", "named", "named-renamed", "namespace"]


class ImportBinding(BaseModel):
    """One name introduced into scope by an import declaration."""

    model_config = ConfigDict(frozen=True)

    kind: BindingKind
    imported: str | None = Field(
        default=None,
        description="Exported name; 'default' for default imports, None for namespaces",
    )
    local: str

    def render(self) -> str:
        if self.kind == "default":
            return f"default as {self.local}"
        if self.kind == "namespace":
            return f"* as {self.local}"
        if self.kind == "named-renamed":
            return f"{self.imported} as {self.local}"
        return self.local


class ImportDeclaration(BaseModel):
    """A static import statement as it appears in one source file."""

    specifier: str
    bindings: list[ImportBinding] = Field(default_factory=list)
    line: int

    def rendered_bindings(self) -> list[str]:
        return [binding.render() for binding in self.bindings]


class ImportRecord(BaseModel):
    """An import declaration placed in its file and classified against siblings."""

    source_file: str = Field(description="Path relative to the analysis scope")
    directory: str = Field(description="Absolute directory of the importing file")
    specifier: str
    bindings: list[ImportBinding] = Field(default_factory=list)
    is_sibling: bool = False
    sibling_module: str | None = None
    absolute_path: str


class Finding(BaseModel):
    """One recorded sibling-crossing import."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    source_file: str
    specifier: str
    sibling_module: str
    bindings: tuple[str, ...] = ()
    absolute_path: str

    @property
    def identity_key(self) -> tuple[str, str, str, tuple[str, ...]]:
        """Key under which repeated identical imports of one file collapse."""
        return (
            self.source_file,
            self.sibling_module,
            self.specifier,
            tuple(sorted(self.bindings)),
        )


class ParseDiagnostic(BaseModel):
    """A file skipped because it could not be read or parsed."""

    path: str
    message: str


__all__ = [
    "BindingKind",
    "Finding",
    "ImportBinding",
    "ImportDeclaration",
    "ImportRecord",
    "ParseDiagnostic",
]
