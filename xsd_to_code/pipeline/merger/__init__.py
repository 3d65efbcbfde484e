"""
Merge engine for structural types sharing a name.
"""

from __future__ import annotations

from .type_merger import StructuralTypeMerger, fold_definitions, merge_pair

__all__ = [
    "StructuralTypeMerger",
    "fold_definitions",
    "merge_pair",
]
