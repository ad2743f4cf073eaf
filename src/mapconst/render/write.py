from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from mapconst.classify.consts import classify
from mapconst.contract.errors import OutputWriteError
from mapconst.contract.models import GenerationRequest
from mapconst.contract.output import STDOUT_DESTINATION
from mapconst.parse.loader import input_directory, load_package
from mapconst.render.canonical import canonicalize
from mapconst.render.mapping import render_header, render_mapping
from mapconst.rules.config import MapConstConfig, load_config
from mapconst.scan.constraints import BuildContext
from mapconst.utils import default_output_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateOptions:
    """One generation run: what to map, where to read, where to write."""

    type_names: tuple[str, ...]
    paths: tuple[str, ...] = (".",)
    output: str = ""
    invocation: str = ""
    extra_tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GeneratedFile:
    source: bytes
    destination: Path | None
    package_name: str
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def to_stdout(self) -> bool:
        return self.destination is None


def resolve_destination(
    output: str, directory: Path, first_type: str, suffix: str
) -> Path | None:
    """Map the output argument to a path; None means standard output."""
    if output == STDOUT_DESTINATION:
        return None
    if not output:
        return directory / default_output_name(first_type, suffix)
    return Path(output)


def build_output(
    options: GenerateOptions,
    config: MapConstConfig | None = None,
) -> GeneratedFile:
    """Generate the mapping file in memory.

    Args:
        options: Requested types, inputs and destination
        config: Optional configuration; loaded from the input directory
            when omitted

    Returns:
        GeneratedFile with the canonical source and its resolved destination.

    Raises:
        MapConstError: On any fatal load, classification or config error.
    """
    if not options.type_names:
        msg = "at least one type name is required"
        raise ValueError(msg)

    paths = options.paths or (".",)
    directory = input_directory(paths)
    if config is None:
        config = load_config(directory)

    build = BuildContext.from_config(config.build, options.extra_tags)
    package = load_package(paths, build)

    chunks = [render_header(options.invocation, package.name)]
    counts: dict[str, int] = {}
    for type_name in options.type_names:
        result = classify(GenerationRequest(type_name=type_name, package=package))
        counts[type_name] = len(result.matches)
        chunks.append(
            render_mapping(type_name, result.names, map_suffix=config.map_suffix)
        )

    source = canonicalize(
        "".join(chunks).encode("utf8"),
        config.formatter,
        timeout=config.formatter_timeout,
    )

    return GeneratedFile(
        source=source,
        destination=resolve_destination(
            options.output, directory, options.type_names[0], config.output_suffix
        ),
        package_name=package.name,
        counts=counts,
    )


def write_output(generated: GeneratedFile, stream: IO[str] | None = None) -> None:
    """Print to stdout or write the destination file.

    Raises:
        OutputWriteError: If the destination cannot be written.
    """
    if generated.destination is None:
        out = stream if stream is not None else sys.stdout
        out.write(generated.source.decode("utf8"))
        out.write("\n")
        return

    try:
        generated.destination.write_bytes(generated.source)
    except OSError as exc:
        raise OutputWriteError(generated.destination, exc) from exc
    logger.debug("wrote %s", generated.destination)


def generate_mapconst(
    options: GenerateOptions,
    config: MapConstConfig | None = None,
) -> GeneratedFile:
    """Generate the mapping file and write it to its destination."""
    generated = build_output(options, config)
    write_output(generated)
    return generated


__all__ = [
    "GenerateOptions",
    "GeneratedFile",
    "build_output",
    "generate_mapconst",
    "resolve_destination",
    "write_output",
]
