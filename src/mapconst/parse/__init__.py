"""Go source parsing and package loading."""

from mapconst.parse.loader import (
    input_directory,
    is_directory,
    load_package,
    load_package_dir,
    load_package_files,
)
from mapconst.parse.treesitter_go import extract_const_groups, parse_go_source

__all__ = [
    "extract_const_groups",
    "input_directory",
    "is_directory",
    "load_package",
    "load_package_dir",
    "load_package_files",
    "parse_go_source",
]
