"""
Type registries and the generation context.

The registries keep every declaration seen while loading, keyed by local
name, in discovery order. Nothing is deduplicated here: the merge engine
and the simple type resolver decide what to do with multiple definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ..schema_ast.nodes import (
    GlobalElementDef,
    MergedStructuralType,
    ScalarTypeDef,
    Schema,
    StructuralTypeDef,
)
from .ir_nodes import ResolvedScalarType

T = TypeVar("T")


class DefinitionRegistry(Generic[T]):
    """Append-only map from local name to the ordered list of its definitions."""

    def __init__(self) -> None:
        self._definitions: dict[str, list[T]] = {}

    def append(self, name: str, definition: T) -> None:
        self._definitions.setdefault(name, []).append(definition)

    def get(self, name: str) -> list[T]:
        return list(self._definitions.get(name, []))

    def first(self, name: str) -> T | None:
        definitions = self._definitions.get(name)
        return definitions[0] if definitions else None

    def __getitem__(self, name: str) -> list[T]:
        return list(self._definitions[name])

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self):
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def items(self):
        return self._definitions.items()

    def names(self) -> list[str]:
        return list(self._definitions)


class NamespaceTable:
    """Bidirectional prefix <-> URI map where the first registration wins.

    Both directions are first-wins independently: re-binding a known prefix
    to another URI, or a known URI to another prefix, is ignored.
    """

    def __init__(self) -> None:
        self._uris: dict[str, str] = {}
        self._prefixes: dict[str, str] = {}

    def register(self, prefix: str, uri: str) -> None:
        self._uris.setdefault(prefix, uri)
        self._prefixes.setdefault(uri, prefix)

    def get_uri(self, prefix: str) -> str | None:
        return self._uris.get(prefix)

    def get_prefix(self, uri: str) -> str | None:
        return self._prefixes.get(uri)

    def as_dict(self) -> dict[str, str]:
        """Return the prefix -> URI bindings."""
        return dict(self._uris)

    def __len__(self) -> int:
        return len(self._uris)


class TypeRegistry:
    """The three declaration registries."""

    def __init__(self) -> None:
        self.structural_types: DefinitionRegistry[StructuralTypeDef] = DefinitionRegistry()
        self.scalar_types: DefinitionRegistry[ScalarTypeDef] = DefinitionRegistry()
        self.global_elements: DefinitionRegistry[GlobalElementDef] = DefinitionRegistry()

    def register_schema(self, schema: Schema) -> None:
        """Append all declarations of a schema, in document order."""
        for structural in schema.structural_types:
            self.structural_types.append(structural.name, structural)
        for scalar in schema.scalar_types:
            self.scalar_types.append(scalar.name, scalar)
        for element in schema.global_elements:
            self.global_elements.append(element.name, element)


@dataclass
class GenerationContext:
    """State of one generation run, threaded through every phase."""

    registry: TypeRegistry = field(default_factory=TypeRegistry)
    namespaces: NamespaceTable = field(default_factory=NamespaceTable)

    # Loaded schemas, in load order
    schemas: list[Schema] = field(default_factory=list)

    # Caches filled by the merge engine and the simple type resolver
    merged_types: dict[str, MergedStructuralType] = field(default_factory=dict)
    resolved_scalars: dict[str, ResolvedScalarType] = field(default_factory=dict)

    def register_schema(self, schema: Schema) -> None:
        """Record a loaded schema: its namespace bindings, then its declarations."""
        self.schemas.append(schema)
        for prefix, uri in schema.namespaces.items():
            self.namespaces.register(prefix, uri)
        self.registry.register_schema(schema)
