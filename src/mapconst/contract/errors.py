"""Fatal error taxonomy.

Every failure that must abort a generation run derives from MapConstError.
Library code raises these; only the CLI turns them into exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class MapConstError(Exception):
    """Base class for errors that abort a generation run."""


class LoadError(MapConstError):
    """Raised when the input cannot be resolved to a single Go package."""


class SourceParseError(LoadError):
    """Raised when a Go source file does not parse."""

    def __init__(self, path: str | Path, message: str, line: int = 0, column: int = 0):
        self.path = str(path)
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    def location(self) -> str:
        if self.line <= 0:
            return self.path
        return f"{self.path}:{self.line}:{self.column}"

    def __str__(self) -> str:
        return f"parsing package: {self.location()}: {self.message}"


class NoBuildableFilesError(LoadError):
    """Raised when no Go file is left after filtering the input."""

    def __init__(self, directory: str | Path):
        self.directory = str(directory)
        super().__init__(f"{self.directory}: no buildable Go files")


class NoConstantsError(MapConstError):
    """Raised when a requested type matches no constant in the package."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"no const defined for type {type_name}")


class OutputWriteError(MapConstError):
    """Raised when the generated file cannot be written."""

    def __init__(self, path: str | Path, cause: OSError):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"writing output: {cause}")


__all__ = [
    "LoadError",
    "MapConstError",
    "NoBuildableFilesError",
    "NoConstantsError",
    "OutputWriteError",
    "SourceParseError",
]
