from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from mapconst.render.write import GenerateOptions, generate_mapconst
from mapconst.rules.config import BuildConfig, MapConstConfig
from mapconst.verify.verify import VerifyResult, verify_output

_CONFIG = MapConstConfig(formatter=[], build=BuildConfig(goos="linux", goarch="amd64"))


def _options(package_dir: Path, output: str = "") -> GenerateOptions:
    return GenerateOptions(
        type_names=("Color",),
        paths=(str(package_dir),),
        output=output,
        invocation="--type Color",
    )


def _copy_colors_fixture(root: Path) -> Path:
    target = root / "colors"
    shutil.copytree(Path(__file__).parent / "fixtures" / "colors", target)
    return target


def test_verify_output_missing(tmp_path: Path) -> None:
    package_dir = _copy_colors_fixture(tmp_path)

    result = verify_output(_options(package_dir), _CONFIG)

    assert result == VerifyResult(
        ok=False, path=package_dir / "color_mapconst.go", status="missing"
    )


def test_verify_output_up_to_date_after_generation(tmp_path: Path) -> None:
    package_dir = _copy_colors_fixture(tmp_path)
    generate_mapconst(_options(package_dir), _CONFIG)

    result = verify_output(_options(package_dir), _CONFIG)

    assert result.ok
    assert result.status == "ok"


def test_verify_output_stale_after_source_change(tmp_path: Path) -> None:
    package_dir = _copy_colors_fixture(tmp_path)
    generate_mapconst(_options(package_dir), _CONFIG)
    with (package_dir / "more.go").open("a", encoding="utf-8") as handle:
        handle.write("\nconst Indigo Color = 8\n")

    result = verify_output(_options(package_dir), _CONFIG)

    assert result.status == "stale"
    assert not result.ok


def test_verify_output_rejects_stdout(tmp_path: Path) -> None:
    package_dir = _copy_colors_fixture(tmp_path)

    with pytest.raises(ValueError, match="stdout"):
        verify_output(_options(package_dir, output="stdout"), _CONFIG)
