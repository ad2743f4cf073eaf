"""Attribute declared constants to their type.

Go lets the specs of a parenthesized const declaration elide their type and
value, in which case both carry down from the previous spec:

    const (
        Red Color = iota
        Green
        Blue
    )

Only the type is tracked here; values are never evaluated. A spec with a
value but no type starts an untyped chain, so later name-only specs do not
belong to any named type until an explicit type appears again.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mapconst.contract.errors import NoConstantsError
from mapconst.contract.models import ClassificationResult, MatchedConstant

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mapconst.contract.models import DeclarationGroup, GenerationRequest

logger = logging.getLogger(__name__)


def classify_group(group: DeclarationGroup, type_name: str) -> list[MatchedConstant]:
    """Return the specs of one declaration group whose type is type_name.

    The carried type starts empty for every group, so inference never
    crosses group boundaries.
    """
    current = ""
    matches: list[MatchedConstant] = []

    for spec in group.specs:
        if not spec.has_type and spec.has_value:
            # "X = 1": untyped constant; the carried type is dropped.
            current = ""
            continue

        if spec.has_type:
            if spec.type_name is None:
                # Qualified or composite type (pkg.T, *T): not classified,
                # and the carried type is left as it was.
                continue
            current = spec.type_name

        if current and current == type_name:
            matches.append(
                MatchedConstant(
                    name=spec.name,
                    type_name=type_name,
                    path=group.path,
                    line=spec.line,
                )
            )

    return matches


def collect_constants(
    groups: Iterable[DeclarationGroup], type_name: str
) -> list[MatchedConstant]:
    """Classify groups in order and concatenate their matches.

    Duplicate names are kept; the caller sees exactly what was declared.
    """
    matches: list[MatchedConstant] = []
    for group in groups:
        matches.extend(classify_group(group, type_name))
    return matches


def classify(request: GenerationRequest) -> ClassificationResult:
    """Collect the constants of request.type_name across the package.

    Raises:
        NoConstantsError: If no constant of the type is declared.
    """
    matches = collect_constants(request.package.groups, request.type_name)
    if not matches:
        raise NoConstantsError(request.type_name)

    logger.debug("type %s: %d constant(s)", request.type_name, len(matches))
    return ClassificationResult(type_name=request.type_name, matches=tuple(matches))


__all__ = ["classify", "classify_group", "collect_constants"]
