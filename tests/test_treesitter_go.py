from __future__ import annotations

import pytest

from mapconst.contract.errors import SourceParseError
from mapconst.parse.treesitter_go import extract_const_groups, parse_go_source

_SOURCE = b"""// Package demo.
package demo

import "time"

type Level int

const (
	Low Level = iota // first
	Mid
	High

	Timeout time.Duration = 5
	Untyped = 3
	A, B Level = 1, 2
)

const Single Level = 9

var notAConst Level = 4
"""


def test_parse_go_source_returns_package_name() -> None:
    _, package_name = parse_go_source(_SOURCE, "demo.go")

    assert package_name == "demo"


def test_extract_const_groups_preserves_spec_order() -> None:
    tree, _ = parse_go_source(_SOURCE, "demo.go")

    groups = extract_const_groups(tree, "demo.go")

    assert len(groups) == 2
    assert [spec.names for spec in groups[0].specs] == [
        ("Low",),
        ("Mid",),
        ("High",),
        ("Timeout",),
        ("Untyped",),
        ("A", "B"),
    ]
    assert [spec.names for spec in groups[1].specs] == [("Single",)]


def test_extract_const_spec_type_and_value_flags() -> None:
    tree, _ = parse_go_source(_SOURCE, "demo.go")

    low, mid, _, timeout, untyped, _ = extract_const_groups(tree, "demo.go")[0].specs

    assert (low.type_name, low.has_value) == ("Level", True)
    assert (mid.type_expr, mid.has_value) == (None, False)
    assert timeout.type_expr == "time.Duration"
    assert timeout.type_name is None
    assert (untyped.type_expr, untyped.has_value) == (None, True)


def test_extract_const_groups_records_lines() -> None:
    tree, _ = parse_go_source(_SOURCE, "demo.go")

    groups = extract_const_groups(tree, "demo.go")

    assert groups[0].line == 8
    assert groups[0].specs[0].line == 9
    assert groups[1].path == "demo.go"


def test_parse_error_reports_location() -> None:
    source = b"package demo\n\nconst (\n\tA T = \n)\n"

    with pytest.raises(SourceParseError) as exc_info:
        parse_go_source(source, "broken.go")

    error = exc_info.value
    assert error.path == "broken.go"
    assert error.line >= 3
    assert str(error).startswith("parsing package: broken.go:")


def test_missing_package_clause_is_a_parse_error() -> None:
    with pytest.raises(SourceParseError, match="expected 'package'"):
        parse_go_source(b"const A = 1\n", "nopkg.go")
