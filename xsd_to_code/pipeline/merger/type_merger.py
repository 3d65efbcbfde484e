"""
Structural type merge engine.

Schema sets sometimes split one conceptual type across several files,
each declaring a complexType with the same name. The merge engine folds
all the definitions of a name, in registration order, into a single
authoritative definition.

The pairwise merge is not associative, so the fold order matters:

* the operand with strictly more element particles becomes the base; on
  a tie the left operand (the running result) stays the base;
* the base's particles are kept in order, then each particle of the other
  operand is appended if no particle with the same name is present yet.
  A later particle with the same name but another type is dropped;
* attributes are merged with the same rule, independently of elements.
"""

from __future__ import annotations

from functools import reduce

from ...logger import logger
from ..analyzer.registry import GenerationContext
from ..schema_ast.nodes import (
    AttributeParticle,
    ElementParticle,
    MergedStructuralType,
    StructuralTypeDef,
)


def _merge_by_name(base: list, other: list) -> list:
    """Keep base particles, append the other's particles with unseen names."""
    merged = list(base)
    seen = {particle.name for particle in base}
    for particle in other:
        if particle.name not in seen:
            merged.append(particle)
            seen.add(particle.name)
    return merged


def merge_pair(left: MergedStructuralType, right: StructuralTypeDef) -> MergedStructuralType:
    """
    Merge the running fold result with the next definition.

    Args:
        left: The running result
        right: The next definition in registration order

    Returns:
        A new MergedStructuralType; neither operand is modified
    """
    right_merged = MergedStructuralType.from_definition(right)
    if len(right_merged.elements) > len(left.elements):
        base, other = right_merged, left
    else:
        base, other = left, right_merged

    elements: list[ElementParticle] = _merge_by_name(base.elements, other.elements)
    attributes: list[AttributeParticle] = _merge_by_name(base.attributes, other.attributes)

    return MergedStructuralType(
        name=left.name,
        elements=elements,
        attributes=attributes,
        base_type=base.base_type or other.base_type,
        text_type=base.text_type or other.text_type,
        target_namespace=base.target_namespace,
        sources=[*left.sources, *right_merged.sources],
    )


def fold_definitions(definitions: list[StructuralTypeDef]) -> MergedStructuralType:
    """Left fold of merge_pair over a non-empty definition list."""
    if not definitions:
        raise ValueError("cannot merge an empty definition list")
    first = MergedStructuralType.from_definition(definitions[0])
    return reduce(merge_pair, definitions[1:], first)


class StructuralTypeMerger:
    """Merges structural type definitions, caching one result per name."""

    def __init__(self, context: GenerationContext):
        self.context = context

    def merge(self, name: str) -> MergedStructuralType:
        """
        Return the merged definition of a structural type.

        The result is computed once per name and cached in the context;
        later calls return the cached object.

        Raises:
            KeyError: If no structural type with this name was registered
        """
        cached = self.context.merged_types.get(name)
        if cached is not None:
            return cached

        definitions = self.context.registry.structural_types[name]
        merged = fold_definitions(definitions)
        if len(definitions) > 1:
            logger.info(
                "Merged %d definitions of %s: %d element(s), %d attribute(s)",
                len(definitions),
                name,
                len(merged.elements),
                len(merged.attributes),
            )
        self.context.merged_types[name] = merged
        return merged

    def merge_all(self) -> list[MergedStructuralType]:
        """Merge every registered structural type, in registration order."""
        return [self.merge(name) for name in self.context.registry.structural_types]
