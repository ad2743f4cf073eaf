from __future__ import annotations

import pytest

from mapconst.render.mapping import render_header, render_mapping


def test_render_mapping_entries_follow_name_order() -> None:
    text = render_mapping("Color", ["Red", "Green", "Blue"])

    assert text == (
        "\n"
        "var ColorNameToValue = map[string]Color{\n"
        '\t"Red": Red,\n'
        '\t"Green": Green,\n'
        '\t"Blue": Blue,\n'
        "}\n"
    )


def test_render_mapping_keeps_duplicates() -> None:
    text = render_mapping("T", ["Dup", "Dup"])

    assert text.count('"Dup": Dup,') == 2


def test_render_mapping_custom_suffix() -> None:
    text = render_mapping("Level", ["Low"], map_suffix="ByName")

    assert "var LevelByName = map[string]Level{" in text


def test_render_mapping_quotes_unicode_names() -> None:
    text = render_mapping("T", ["Größe"])

    assert '\t"Größe": Größe,\n' in text


def test_render_mapping_rejects_empty_type() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        render_mapping("", ["A"])


def test_render_mapping_does_not_validate_type_syntax() -> None:
    text = render_mapping("not a type", ["A"])

    assert "map[string]not a type{" in text


def test_render_header_records_invocation() -> None:
    header = render_header("--type Color,Shade ./colors", "colors")

    assert header == (
        '// Code generated by "mapconst --type Color,Shade ./colors"; DO NOT EDIT.\n'
        "\n"
        "package colors\n"
    )
