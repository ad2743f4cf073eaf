"""Mapping rendering, canonicalization and output writing."""

from mapconst.render.canonical import FormatError, canonicalize
from mapconst.render.mapping import render_header, render_mapping
from mapconst.render.write import (
    GeneratedFile,
    GenerateOptions,
    build_output,
    generate_mapconst,
    write_output,
)

__all__ = [
    "FormatError",
    "GenerateOptions",
    "GeneratedFile",
    "build_output",
    "canonicalize",
    "generate_mapconst",
    "render_header",
    "render_mapping",
    "write_output",
]
