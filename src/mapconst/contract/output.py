"""Output file contract.

Stable names for the generated file: header line, default file suffix, and
the mapping variable naming rule.
"""

from __future__ import annotations

# Destination marker that prints instead of writing a file.
STDOUT_DESTINATION = "stdout"

DEFAULT_OUTPUT_SUFFIX = "_mapconst.go"

# Mapping variable is named <Type><suffix>.
DEFAULT_MAP_SUFFIX = "NameToValue"

# Matches the Go convention `^// Code generated .* DO NOT EDIT\.$`.
HEADER_TEMPLATE = '// Code generated by "mapconst {invocation}"; DO NOT EDIT.\n\npackage {package}\n'

__all__ = [
    "DEFAULT_MAP_SUFFIX",
    "DEFAULT_OUTPUT_SUFFIX",
    "HEADER_TEMPLATE",
    "STDOUT_DESTINATION",
]
