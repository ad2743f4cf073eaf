"""Canonicalize generated Go source.

Syntax is checked with tree-sitter, then the source is piped through the
configured formatter (gofmt by default). Failing either step is not fatal:
the buffer is returned as generated, with a warning, so the package can be
compiled to find the problem.
"""

from __future__ import annotations

import logging
import re
import subprocess
from typing import TYPE_CHECKING

from mapconst.contract.errors import SourceParseError
from mapconst.parse.treesitter_go import parse_go_source

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_FORMATTER = ("gofmt",)

_GENERATED_NAME = "<generated>"
_BLANK_RUN = re.compile(rb"\n{3,}")


class FormatError(Exception):
    """Raised when generated source cannot be formatted."""


class FormatterUnavailable(FormatError):
    """Raised when the formatter executable cannot be started."""


def check_syntax(source: bytes) -> None:
    """Raise FormatError if source is not a syntactically valid Go file."""
    try:
        parse_go_source(source, _GENERATED_NAME)
    except SourceParseError as exc:
        msg = f"{exc.location()}: {exc.message}"
        raise FormatError(msg) from exc


def run_formatter(
    source: bytes,
    command: Sequence[str] = DEFAULT_FORMATTER,
    *,
    timeout: float = 30.0,
) -> bytes:
    """Pipe source through a formatter command and return its output."""
    try:
        result = subprocess.run(
            list(command),
            input=source,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        msg = f"formatter not found: {command[0]}"
        raise FormatterUnavailable(msg) from exc
    except subprocess.TimeoutExpired as exc:
        msg = f"formatter timed out after {timeout}s"
        raise FormatError(msg) from exc

    if result.returncode != 0:
        detail = result.stderr.decode("utf8", errors="replace").strip()
        msg = detail or f"{command[0]} exited with status {result.returncode}"
        raise FormatError(msg)
    if not result.stdout:
        msg = f"{command[0]} produced no output"
        raise FormatError(msg)
    return result.stdout


def normalize_whitespace(source: bytes) -> bytes:
    """Strip trailing spaces, collapse blank runs, end with one newline."""
    lines = [line.rstrip() for line in source.split(b"\n")]
    text = b"\n".join(lines).strip(b"\n")
    return _BLANK_RUN.sub(b"\n\n", text) + b"\n"


def canonicalize(
    source: bytes,
    formatter: Sequence[str] = DEFAULT_FORMATTER,
    *,
    timeout: float = 30.0,
) -> bytes:
    """Return the canonical form of generated source.

    Invalid source is returned unmodified after two warnings. With no
    formatter configured, or none installed, valid source only gets
    whitespace normalization.
    """
    try:
        check_syntax(source)
    except FormatError as exc:
        _warn_invalid(exc)
        return source

    if not formatter:
        return normalize_whitespace(source)

    try:
        return run_formatter(source, formatter, timeout=timeout)
    except FormatterUnavailable as exc:
        logger.warning("warning: %s; output is not formatted", exc)
        return normalize_whitespace(source)
    except FormatError as exc:
        _warn_invalid(exc)
        return source


def _warn_invalid(exc: FormatError) -> None:
    logger.warning("warning: internal error: invalid Go generated: %s", exc)
    logger.warning("warning: compile the package to analyze the error")


__all__ = [
    "DEFAULT_FORMATTER",
    "FormatError",
    "FormatterUnavailable",
    "canonicalize",
    "check_syntax",
    "normalize_whitespace",
    "run_formatter",
]
