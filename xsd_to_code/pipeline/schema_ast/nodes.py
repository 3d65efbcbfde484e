"""
Value records for parsed XML Schema documents.

These records represent the declarations found in schema documents
before any merging, type resolution or language-specific processing.
They are plain values: the merge engine builds new records instead of
mutating the parsed ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"

UNBOUNDED = "unbounded"


@dataclass(frozen=True)
class QName:
    """A type or element reference, with its prefix already resolved."""

    namespace: str | None = None
    local_name: str = ""
    # A prefix was written but the document never declared it
    unbound_prefix: bool = False

    def __str__(self) -> str:
        if self.namespace:
            return f"{{{self.namespace}}}{self.local_name}"
        return self.local_name

    @property
    def is_xsd(self) -> bool:
        return self.namespace == XSD_NAMESPACE


class ScalarVariety(str, Enum):
    """How a simple type is derived."""

    RESTRICTION = "restriction"
    LIST = "list"
    UNION = "union"


class DirectiveKind(str, Enum):
    """Kind of a reference to another schema document."""

    IMPORT = "import"
    INCLUDE = "include"
    REDEFINE = "redefine"


@dataclass
class ScalarTypeDef:
    """A simpleType declaration."""

    name: str = ""
    variety: ScalarVariety = ScalarVariety.RESTRICTION

    # Restriction base, None for list/union or an anonymous base
    base: QName | None = None

    # Enumeration literals, in declaration order
    enumerations: list[str] = field(default_factory=list)

    target_namespace: str | None = None
    source: Path | None = None


@dataclass
class ElementParticle:
    """An element declared inside a structural type."""

    name: str = ""

    # Exactly one of these describes the type (all None means xs:anyType)
    type_ref: QName | None = None
    inline_scalar: ScalarTypeDef | None = None
    inline_structural: StructuralTypeDef | None = None

    # Set when the particle refers to a global element
    ref: QName | None = None

    min_occurs: int = 1
    # Kept as the literal attribute text so that "unbounded" stays distinguishable
    max_occurs: str = "1"
    # Target namespace of the schema that declared the particle
    target_namespace: str | None = None

    @property
    def is_optional(self) -> bool:
        return self.min_occurs == 0


@dataclass
class AttributeParticle:
    """An attribute declared inside a structural type."""

    name: str = ""
    type_ref: QName | None = None
    inline_scalar: ScalarTypeDef | None = None
    ref: QName | None = None
    required: bool = False

    @property
    def is_optional(self) -> bool:
        return not self.required


@dataclass
class StructuralTypeDef:
    """A complexType declaration (named, or anonymous when name is empty)."""

    name: str = ""
    elements: list[ElementParticle] = field(default_factory=list)
    attributes: list[AttributeParticle] = field(default_factory=list)

    # complexContent/extension base
    base_type: QName | None = None

    # simpleContent base: the type of the element text
    text_type: QName | None = None

    target_namespace: str | None = None
    source: Path | None = None


@dataclass
class GlobalElementDef:
    """A top-level element declaration."""

    name: str = ""
    type_ref: QName | None = None
    inline_structural: StructuralTypeDef | None = None
    target_namespace: str | None = None
    source: Path | None = None


@dataclass
class ReferenceDirective:
    """An import/include/redefine directive."""

    kind: DirectiveKind = DirectiveKind.INCLUDE
    location: str | None = None  # schemaLocation, relative to the referencing file
    namespace: str | None = None  # only meaningful for imports


@dataclass
class Schema:
    """One parsed schema document."""

    source: Path = field(default_factory=Path)
    target_namespace: str | None = None

    # prefix -> URI, as declared by the document ("" is the default namespace)
    namespaces: dict[str, str] = field(default_factory=dict)

    structural_types: list[StructuralTypeDef] = field(default_factory=list)
    scalar_types: list[ScalarTypeDef] = field(default_factory=list)
    global_elements: list[GlobalElementDef] = field(default_factory=list)
    directives: list[ReferenceDirective] = field(default_factory=list)


@dataclass
class MergedStructuralType:
    """The single authoritative definition of a structural type name."""

    name: str = ""
    elements: list[ElementParticle] = field(default_factory=list)
    attributes: list[AttributeParticle] = field(default_factory=list)
    base_type: QName | None = None
    text_type: QName | None = None
    target_namespace: str | None = None

    # Source documents of every folded definition, in fold order
    sources: list[Path] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: StructuralTypeDef) -> MergedStructuralType:
        return cls(
            name=definition.name,
            elements=list(definition.elements),
            attributes=list(definition.attributes),
            base_type=definition.base_type,
            text_type=definition.text_type,
            target_namespace=definition.target_namespace,
            sources=[definition.source] if definition.source else [],
        )

    @property
    def is_empty(self) -> bool:
        return not self.elements and not self.attributes and self.text_type is None
