"""Resolve the input (one directory or a list of files) to a parsed Package."""

from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from mapconst.contract.errors import LoadError, NoBuildableFilesError
from mapconst.contract.models import Package, SourceUnit
from mapconst.parse.treesitter_go import extract_const_groups, parse_go_source
from mapconst.scan.files import GO_SUFFIX, find_go_files

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mapconst.scan.constraints import BuildContext

logger = logging.getLogger(__name__)


def is_directory(name: str | Path) -> bool:
    """Report whether the named path is a directory.

    Raises:
        LoadError: If the path does not exist or cannot be inspected.
    """
    try:
        mode = Path(name).stat().st_mode
    except OSError as exc:
        msg = f"stat {name}: {exc.strerror or exc}"
        raise LoadError(msg) from exc
    return stat.S_ISDIR(mode)


def input_directory(paths: Sequence[str | Path]) -> Path:
    """Return the directory that owns the input (the default output location)."""
    if not paths:
        return Path()
    first = Path(paths[0])
    if len(paths) == 1 and is_directory(first):
        return first
    return first.parent


def _display_path(path: Path, directory: Path) -> str:
    try:
        return path.relative_to(directory).as_posix()
    except ValueError:
        return path.as_posix()


def _parse_unit(path: Path, directory: Path) -> SourceUnit:
    relative_path = _display_path(path, directory)
    try:
        source = path.read_bytes()
    except OSError as exc:
        msg = f"parsing package: {path}: {exc.strerror or exc}"
        raise LoadError(msg) from exc

    tree, package_name = parse_go_source(source, path)
    return SourceUnit(
        path=path,
        package_name=package_name,
        source=source,
        tree=tree,
        groups=extract_const_groups(tree, relative_path),
    )


def _parse_package(directory: Path, paths: Sequence[Path]) -> Package:
    """Parse every Go file and group them into one Package.

    Any parse failure aborts the whole load.
    """
    units: list[SourceUnit] = []
    for path in paths:
        if not path.name.endswith(GO_SUFFIX):
            logger.debug("skip %s: not a Go file", path)
            continue
        units.append(_parse_unit(path, directory))

    if not units:
        raise NoBuildableFilesError(directory)

    first = units[0]
    for unit in units[1:]:
        if unit.package_name != first.package_name:
            msg = (
                f"found packages {first.package_name} ({first.path.name}) and "
                f"{unit.package_name} ({unit.path.name}) in {directory}"
            )
            raise LoadError(msg)

    logger.debug(
        "parsed %d file(s) of package %s in %s",
        len(units),
        first.package_name,
        directory,
    )
    return Package(name=first.package_name, directory=directory, units=tuple(units))


def load_package_dir(directory: str | Path, build: BuildContext | None = None) -> Package:
    """Parse the package residing in a directory."""
    directory = Path(directory)
    try:
        files = list(find_go_files(directory, build))
    except OSError as exc:
        msg = f"cannot process directory {directory}: {exc.strerror or exc}"
        raise LoadError(msg) from exc
    return _parse_package(directory, files)


def load_package_files(names: Sequence[str | Path]) -> Package:
    """Parse the package made of the named files, in the given order.

    Entries that are not Go files (assembly stubs, for example) are skipped.
    """
    paths = [Path(name) for name in names]
    directory = paths[0].parent if paths else Path()
    return _parse_package(directory, paths)


def load_package(
    names: Sequence[str | Path], build: BuildContext | None = None
) -> Package:
    """Load one directory, or an explicit list of files, as a Package."""
    if not names:
        names = ["."]
    if len(names) == 1 and is_directory(names[0]):
        return load_package_dir(names[0], build)
    return load_package_files(names)


__all__ = [
    "input_directory",
    "is_directory",
    "load_package",
    "load_package_dir",
    "load_package_files",
]
