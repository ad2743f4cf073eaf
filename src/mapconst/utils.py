"""Shared utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

from mapconst.contract.output import DEFAULT_OUTPUT_SUFFIX

if TYPE_CHECKING:
    from collections.abc import Iterable


def go_string_literal(text: str) -> str:
    """Quote text as a Go interpreted string literal.

    JSON string escapes are a subset of Go's, so a JSON encoding of the text
    is a valid Go literal.

    Examples:
        >>> go_string_literal("Red")
        '"Red"'
    """
    return orjson.dumps(text).decode("utf8")


def split_comma_list(values: Iterable[str]) -> tuple[str, ...]:
    """Split repeated, comma-separated arguments into a list of names.

    Empty fragments are dropped and the order of first appearance is kept.

    Examples:
        >>> split_comma_list(["Color,Shade", "Color"])
        ('Color', 'Shade')
    """
    names: list[str] = []
    for value in values:
        for part in value.split(","):
            name = part.strip()
            if name and name not in names:
                names.append(name)
    return tuple(names)


def default_output_name(type_name: str, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> str:
    """File name used when no destination is given.

    Examples:
        >>> default_output_name("HTTPStatus")
        'httpstatus_mapconst.go'
    """
    return type_name.lower() + suffix
