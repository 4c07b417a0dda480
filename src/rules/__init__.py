"""Configuration rules for boundarymap."""

from rules.config import (
    CONFIG_FILENAME,
    BoundaryMapConfig,
    ConfigError,
    StructureConfig,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "BoundaryMapConfig",
    "ConfigError",
    "StructureConfig",
    "load_config",
    "resolve_output_dir",
]
