"""Structural XML diff for ontodiff."""

from ontodiff.diff.engine import (
    ComparisonType,
    DiffContext,
    Difference,
    DiffResult,
    DiffStatus,
    StructuralDiffer,
    diff_documents,
)
from ontodiff.diff.selectors import (
    ByEqualSubtree,
    ByName,
    ByNameAndAllAttributes,
    ByNameAndText,
    ElementSelector,
    NodeMatcher,
)

__all__ = [
    "ByEqualSubtree",
    "ByName",
    "ByNameAndAllAttributes",
    "ByNameAndText",
    "ComparisonType",
    "DiffContext",
    "DiffResult",
    "DiffStatus",
    "Difference",
    "ElementSelector",
    "NodeMatcher",
    "StructuralDiffer",
    "diff_documents",
]
