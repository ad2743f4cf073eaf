"""Go package file discovery."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mapconst.scan.constraints import BuildContext, ConstraintError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)

GO_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"


def _skip_reason(path: Path, build: BuildContext) -> str | None:
    """Return why a directory entry is not a buildable package file."""
    name = path.name
    if not path.is_file():
        return "not a regular file"

    if not name.endswith(GO_SUFFIX):
        return "not a Go file"

    if name.startswith(("_", ".")):
        return "ignored name prefix"

    if name.endswith(TEST_SUFFIX):
        return "test file"

    if not build.match_file_name(name):
        return f"file name excludes {build.goos}/{build.goarch}"

    try:
        source = path.read_bytes()
    except OSError as exc:
        return f"unreadable: {exc.strerror}"

    try:
        if not build.match_header(source):
            return "build constraints exclude file"
    except ConstraintError as exc:
        msg = f"{path}: {exc}"
        raise ConstraintError(msg) from exc

    return None


def find_go_files(
    directory: Path,
    build: BuildContext | None = None,
) -> Iterator[Path]:
    """Find the buildable Go files of the package in a directory.

    Args:
        directory: Package directory; not searched recursively
        build: Target platform and tags (default: host platform, no tags)

    Yields:
        Path objects for each selected file, sorted by file name for
        deterministic ordering.
    """
    if build is None:
        build = BuildContext.from_config()

    selected: list[Path] = []
    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        reason = _skip_reason(path, build)
        if reason is not None:
            logger.debug("skip %s: %s", path.name, reason)
            continue
        selected.append(path)

    yield from selected


__all__ = ["GO_SUFFIX", "TEST_SUFFIX", "find_go_files"]
