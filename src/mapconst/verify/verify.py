"""Up-to-date verification for generated mapping files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from mapconst.render.write import build_output

if TYPE_CHECKING:
    from mapconst.render.write import GenerateOptions
    from mapconst.rules.config import MapConstConfig

VerifyStatus = Literal["ok", "missing", "stale"]


@dataclass(frozen=True)
class VerifyResult:
    ok: bool
    path: Path
    status: VerifyStatus


def verify_output(
    options: GenerateOptions,
    config: MapConstConfig | None = None,
) -> VerifyResult:
    """Verify that a generated file matches what generation would produce.

    Regenerates the file in memory and compares it byte-for-byte against the
    destination on disk. Nothing is written.

    Raises:
        ValueError: If the destination is standard output.
        MapConstError: On any fatal generation error.
    """
    generated = build_output(options, config)
    if generated.destination is None:
        msg = "cannot verify output written to stdout"
        raise ValueError(msg)

    path = generated.destination
    if not path.is_file():
        return VerifyResult(ok=False, path=path, status="missing")

    if path.read_bytes() != generated.source:
        return VerifyResult(ok=False, path=path, status="stale")

    return VerifyResult(ok=True, path=path, status="ok")
