from __future__ import annotations

from pathlib import Path

import pytest

from mapconst.classify.consts import classify, classify_group, collect_constants
from mapconst.contract.errors import NoConstantsError
from mapconst.contract.models import (
    ConstSpec,
    DeclarationGroup,
    GenerationRequest,
    Package,
)
from mapconst.parse.loader import load_package_files


def _spec(name: str, type_name: str | None = None, *, value: bool = False) -> ConstSpec:
    return ConstSpec(
        names=(name,),
        type_expr=type_name,
        type_name=type_name,
        has_value=value,
    )


def _group(*specs: ConstSpec, path: str = "a.go") -> DeclarationGroup:
    return DeclarationGroup(path=path, specs=specs)


def _names(group: DeclarationGroup, type_name: str) -> list[str]:
    return [match.name for match in classify_group(group, type_name)]


def _write_go(root: Path, name: str, body: str) -> Path:
    path = root / name
    path.write_text(f"package demo\n\n{body}", encoding="utf-8")
    return path


def test_name_only_specs_carry_type_forward() -> None:
    group = _group(_spec("A", "T", value=True), _spec("B"), _spec("C"))

    assert _names(group, "T") == ["A", "B", "C"]


def test_untyped_value_resets_carried_type() -> None:
    group = _group(_spec("A", "T", value=True), _spec("B", value=True), _spec("C"))

    assert _names(group, "T") == ["A"]


def test_fresh_explicit_type_switches_carried_type() -> None:
    group = _group(
        _spec("A", "T", value=True),
        _spec("B"),
        _spec("X", "U", value=True),
        _spec("Y"),
    )

    assert _names(group, "T") == ["A", "B"]
    assert _names(group, "U") == ["X", "Y"]


def test_explicit_type_after_untyped_restarts_chain() -> None:
    group = _group(
        _spec("A", value=True),
        _spec("B"),
        _spec("C", "T", value=True),
        _spec("D"),
    )

    assert _names(group, "T") == ["C", "D"]


def test_name_only_spec_at_group_start_is_untyped() -> None:
    group = _group(_spec("A"), _spec("B", "T", value=True))

    assert _names(group, "T") == ["B"]


def test_inference_does_not_cross_group_boundaries() -> None:
    first = _group(_spec("A", "T", value=True))
    second = _group(_spec("B"), _spec("C"))

    assert [m.name for m in collect_constants([first, second], "T")] == ["A"]


def test_qualified_type_is_skipped_without_touching_carried_type() -> None:
    group = _group(
        _spec("A", "T", value=True),
        ConstSpec(names=("Q",), type_expr="time.Duration", has_value=True),
        _spec("B"),
    )

    assert _names(group, "T") == ["A", "B"]
    assert _names(group, "time.Duration") == []


def test_multi_name_spec_records_first_name_only() -> None:
    group = _group(
        ConstSpec(names=("A", "B"), type_expr="T", type_name="T", has_value=True)
    )

    assert _names(group, "T") == ["A"]


def test_unexported_names_are_included() -> None:
    group = _group(_spec("red", "color", value=True), _spec("green"))

    assert _names(group, "color") == ["red", "green"]


def test_match_records_location() -> None:
    group = DeclarationGroup(
        path="pkg/colors.go",
        specs=(
            ConstSpec(names=("A",), type_expr="T", type_name="T", has_value=True, line=4),
        ),
    )

    (match,) = classify_group(group, "T")

    assert match.path == "pkg/colors.go"
    assert match.line == 4
    assert match.type_name == "T"


def test_classify_from_source_follows_file_then_declaration_order(
    tmp_path: Path,
) -> None:
    first = _write_go(
        tmp_path,
        "b.go",
        "type T int\n\nconst (\n\tA T = iota\n\tB\n)\n\nconst C T = 9\n",
    )
    second = _write_go(tmp_path, "a.go", "const (\n\tD T = 1\n\tE\n)\n")

    package = load_package_files([first, second])
    result = classify(GenerationRequest(type_name="T", package=package))

    assert result.names == ["A", "B", "C", "D", "E"]


def test_classify_keeps_duplicates_across_files(tmp_path: Path) -> None:
    first = _write_go(tmp_path, "a.go", "const Dup T = 1\n")
    second = _write_go(tmp_path, "b.go", "const Dup T = 2\n")

    package = load_package_files([first, second])
    result = classify(GenerationRequest(type_name="T", package=package))

    assert result.names == ["Dup", "Dup"]


def test_classify_untyped_value_stops_chain_in_source(tmp_path: Path) -> None:
    path = _write_go(tmp_path, "a.go", "const (\n\tA T = 1\n\tB = 2\n\tC\n)\n")

    package = load_package_files([path])
    result = classify(GenerationRequest(type_name="T", package=package))

    assert result.names == ["A"]


def test_function_local_constants_are_ignored(tmp_path: Path) -> None:
    path = _write_go(
        tmp_path,
        "a.go",
        "const A T = 1\n\nfunc f() {\n\tconst Local T = 2\n\t_ = Local\n}\n",
    )

    package = load_package_files([path])
    result = classify(GenerationRequest(type_name="T", package=package))

    assert result.names == ["A"]


def test_classify_raises_when_nothing_matches(tmp_path: Path) -> None:
    path = _write_go(tmp_path, "a.go", "const A = 1\n")
    package = load_package_files([path])

    with pytest.raises(NoConstantsError, match="no const defined for type Missing"):
        classify(GenerationRequest(type_name="Missing", package=package))


def test_classify_is_pure_across_requests(tmp_path: Path) -> None:
    path = _write_go(
        tmp_path,
        "a.go",
        "const (\n\tA T = 1\n\tB\n)\n\nconst (\n\tX U = 1\n\tY\n)\n",
    )
    package = load_package_files([path])

    first_t = classify(GenerationRequest(type_name="T", package=package))
    first_u = classify(GenerationRequest(type_name="U", package=package))
    second_t = classify(GenerationRequest(type_name="T", package=package))

    assert first_t == second_t
    assert first_t.names == ["A", "B"]
    assert first_u.names == ["X", "Y"]


def test_empty_package_groups_match_nothing() -> None:
    package = Package(name="demo", directory=Path(), units=())

    with pytest.raises(NoConstantsError):
        classify(GenerationRequest(type_name="T", package=package))
