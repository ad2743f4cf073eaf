from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mapconst.contract.errors import MapConstError
from mapconst.contract.output import DEFAULT_MAP_SUFFIX, DEFAULT_OUTPUT_SUFFIX
from mapconst.scan.constraints import DEFAULT_RELEASE

CONFIG_FILENAME = "mapconst.toml"

_IDENTIFIER_FRAGMENT = re.compile(r"^\w+$")


class BuildConfig(BaseModel):
    """Target platform and tags used to select package files."""

    model_config = ConfigDict(extra="forbid")

    goos: str | None = Field(
        default=None,
        description="Target OS (default: $GOOS, then the host OS)",
    )
    goarch: str | None = Field(
        default=None,
        description="Target architecture (default: $GOARCH, then the host machine)",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Extra build tags that count as satisfied",
    )
    cgo: bool = Field(default=True, description="Whether the cgo tag is satisfied")
    release: int = Field(
        default=DEFAULT_RELEASE,
        ge=1,
        description="Highest go1.N release tag that is satisfied",
    )


class MapConstConfig(BaseModel):
    """Configuration for mapconst generation."""

    model_config = ConfigDict(extra="forbid")

    output_suffix: str = Field(
        default=DEFAULT_OUTPUT_SUFFIX,
        description="Suffix of the default output file name",
    )
    map_suffix: str = Field(
        default=DEFAULT_MAP_SUFFIX,
        description="Suffix appended to the type name for the mapping variable",
    )
    formatter: list[str] = Field(
        default_factory=lambda: ["gofmt"],
        description="Formatter command reading stdin (empty = no formatting)",
    )
    formatter_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Formatter timeout in seconds",
    )
    build: BuildConfig = Field(
        default_factory=BuildConfig,
        description="Build configuration for directory scans",
    )

    @field_validator("output_suffix")
    @classmethod
    def validate_output_suffix(cls, v: str) -> str:
        if not v.endswith(".go") or "/" in v or "\\" in v:
            msg = f"output_suffix must be a file name suffix ending in .go, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("map_suffix")
    @classmethod
    def validate_map_suffix(cls, v: str) -> str:
        if not _IDENTIFIER_FRAGMENT.match(v):
            msg = f"map_suffix must be an identifier fragment, got {v!r}"
            raise ValueError(msg)
        return v


class ConfigError(MapConstError):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> MapConstConfig:
    """Load configuration from mapconst.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return MapConstConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return MapConstConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "BuildConfig",
    "ConfigError",
    "MapConstConfig",
    "load_config",
]
