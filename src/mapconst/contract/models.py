"""Models for parsed Go packages and constant classification.

Record types (specs, groups, matches) are frozen pydantic models. Types that
own a tree-sitter syntax tree are frozen dataclasses, since the tree is not
a value pydantic can validate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from pathlib import Path

    from tree_sitter import Tree


class ConstSpec(BaseModel):
    """One `names [type] [= values]` entry of a const declaration."""

    model_config = ConfigDict(frozen=True)

    names: tuple[str, ...] = Field(min_length=1)
    type_expr: str | None = Field(
        default=None, description="Explicit type as written, if any"
    )
    type_name: str | None = Field(
        default=None,
        description="Explicit type when it is a plain identifier (not pkg.T, *T, ...)",
    )
    has_value: bool = False
    line: int = Field(default=1, ge=1)

    @property
    def name(self) -> str:
        """First declared name; the only one a mapping records."""
        return self.names[0]

    @property
    def has_type(self) -> bool:
        return self.type_expr is not None


class DeclarationGroup(BaseModel):
    """A top-level `const` declaration, parenthesized or not."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int = Field(default=1, ge=1)
    specs: tuple[ConstSpec, ...] = ()


class MatchedConstant(BaseModel):
    """A constant name attributed to a requested type."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_name: str
    path: str
    line: int


class ClassificationResult(BaseModel):
    """Ordered matches for one requested type across a package."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    matches: tuple[MatchedConstant, ...] = ()

    @property
    def names(self) -> list[str]:
        return [match.name for match in self.matches]


@dataclass(frozen=True)
class SourceUnit:
    """One parsed Go file."""

    path: Path
    package_name: str
    source: bytes
    tree: Tree
    groups: tuple[DeclarationGroup, ...]


@dataclass(frozen=True)
class Package:
    """Parsed Go files sharing one package clause, in load order."""

    name: str
    directory: Path
    units: tuple[SourceUnit, ...]

    @property
    def groups(self) -> list[DeclarationGroup]:
        """Declaration groups in file order, then source order."""
        return [group for unit in self.units for group in unit.groups]


@dataclass(frozen=True)
class GenerationRequest:
    type_name: str
    package: Package


__all__ = [
    "ClassificationResult",
    "ConstSpec",
    "DeclarationGroup",
    "GenerationRequest",
    "MatchedConstant",
    "Package",
    "SourceUnit",
]
