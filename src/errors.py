"""Exception hierarchy for boundarymap."""

from __future__ import annotations

from pathlib import Path


class BoundaryMapError(Exception):
    """Base class for analyzer errors."""


class DirectoryNotFoundError(BoundaryMapError, FileNotFoundError):
    """Raised when a target or scope directory is missing or not a directory."""

    def __init__(self, path: Path | str) -> None:
        self.path = path
        super().__init__(f"Directory not found: {path}")


class ParseError(BoundaryMapError):
    """Raised when one source file cannot be parsed under its dialect."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class StructureListingError(BoundaryMapError):
    """Raised when a directory cannot be listed during structure analysis."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to list directory {path}: {reason}")


def require_directory(path: Path) -> None:
    """Raise DirectoryNotFoundError unless ``path`` is an existing directory."""
    if not path.is_dir():
        raise DirectoryNotFoundError(path)


__all__ = [
    "BoundaryMapError",
    "DirectoryNotFoundError",
    "ParseError",
    "StructureListingError",
    "require_directory",
]
