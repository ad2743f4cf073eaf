"""Configuration loading and validation."""

from mapconst.rules.config import (
    CONFIG_FILENAME,
    BuildConfig,
    ConfigError,
    MapConstConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "BuildConfig",
    "ConfigError",
    "MapConstConfig",
    "load_config",
]
