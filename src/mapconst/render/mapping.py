"""Render the Go source of a name-to-value mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mapconst.contract.output import DEFAULT_MAP_SUFFIX, HEADER_TEMPLATE
from mapconst.utils import go_string_literal

if TYPE_CHECKING:
    from collections.abc import Sequence

MAPPING_TEMPLATE = """
var {variable} = map[string]{type_name}{{
{entries}}}
"""

ENTRY_TEMPLATE = "\t{key}: {name},\n"


def render_header(invocation: str, package_name: str) -> str:
    """Render the generated-file header and package clause."""
    return HEADER_TEMPLATE.format(invocation=invocation, package=package_name)


def render_mapping(
    type_name: str,
    names: Sequence[str],
    *,
    map_suffix: str = DEFAULT_MAP_SUFFIX,
) -> str:
    """Render `var <T><suffix> = map[string]<T>{"Name": Name, ...}`.

    Entries follow names in order, duplicates included. Nothing is parsed or
    validated here: a malformed type name produces malformed Go, which the
    canonicalizer reports.
    """
    if not type_name:
        msg = "type name must be non-empty"
        raise ValueError(msg)

    entries = "".join(
        ENTRY_TEMPLATE.format(key=go_string_literal(name), name=name)
        for name in names
    )
    return MAPPING_TEMPLATE.format(
        variable=f"{type_name}{map_suffix}",
        type_name=type_name,
        entries=entries,
    )


__all__ = ["render_header", "render_mapping"]
