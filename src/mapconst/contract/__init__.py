"""Data model, error taxonomy and output contract."""

from mapconst.contract.errors import (
    LoadError,
    MapConstError,
    NoBuildableFilesError,
    NoConstantsError,
    OutputWriteError,
    SourceParseError,
)
from mapconst.contract.models import (
    ClassificationResult,
    ConstSpec,
    DeclarationGroup,
    GenerationRequest,
    MatchedConstant,
    Package,
    SourceUnit,
)

__all__ = [
    "ClassificationResult",
    "ConstSpec",
    "DeclarationGroup",
    "GenerationRequest",
    "LoadError",
    "MapConstError",
    "MatchedConstant",
    "NoBuildableFilesError",
    "NoConstantsError",
    "OutputWriteError",
    "Package",
    "SourceParseError",
    "SourceUnit",
]
