"""
IR (Intermediate Representation) node definitions.

These nodes represent the resolved schema, ready for code generation:
every scalar type is classified, every structural type is merged, and
every field carries the binding metadata needed to reproduce the
original XML names and namespaces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TypeKind(Enum):
    """Kind of type in the IR."""

    ENUM = "enum"  # Reference to a generated enum
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    TEXT = "text"
    CLASS = "class"  # Reference to a generated class


# Kinds that hold a value type in the target language
VALUE_KINDS = frozenset((TypeKind.INTEGER, TypeKind.DECIMAL, TypeKind.BOOLEAN, TypeKind.TIMESTAMP))


@dataclass(frozen=True)
class ResolvedScalarType:
    """Classification of a scalar type: one of six closed variants."""

    kind: TypeKind = TypeKind.TEXT
    enum_name: str | None = None  # Only for TypeKind.ENUM

    def __post_init__(self) -> None:
        if self.kind == TypeKind.CLASS:
            raise ValueError("a scalar type cannot resolve to a class")
        if (self.kind == TypeKind.ENUM) != (self.enum_name is not None):
            raise ValueError("enum_name is required for, and only for, enum scalar types")

    @classmethod
    def enum(cls, name: str) -> ResolvedScalarType:
        return cls(TypeKind.ENUM, name)

    @property
    def is_value_kind(self) -> bool:
        return self.kind in VALUE_KINDS


INTEGER = ResolvedScalarType(TypeKind.INTEGER)
DECIMAL = ResolvedScalarType(TypeKind.DECIMAL)
BOOLEAN = ResolvedScalarType(TypeKind.BOOLEAN)
TIMESTAMP = ResolvedScalarType(TypeKind.TIMESTAMP)
TEXT = ResolvedScalarType(TypeKind.TEXT)


@dataclass
class TypeRef:
    """The resolved type of a field."""

    kind: TypeKind = TypeKind.TEXT
    name: str = ""  # Schema name of the enum or class (empty for builtin scalars)

    # Sequence-of wrapper (the particle is repeatable)
    is_sequence: bool = False

    @classmethod
    def from_scalar(cls, scalar: ResolvedScalarType, is_sequence: bool = False) -> TypeRef:
        return cls(kind=scalar.kind, name=scalar.enum_name or "", is_sequence=is_sequence)

    @classmethod
    def structural(cls, name: str, is_sequence: bool = False) -> TypeRef:
        return cls(kind=TypeKind.CLASS, name=name, is_sequence=is_sequence)

    @property
    def is_value_kind(self) -> bool:
        """Whether this is a bare value-kind scalar (never true for sequences)."""
        return not self.is_sequence and self.kind in VALUE_KINDS


class BindingKind(str, Enum):
    """How a field is bound to the XML document."""

    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    TEXT = "text"
    IGNORE = "ignore"  # Not serialized (explicit-set companions)


@dataclass
class FieldBinding:
    """Binding metadata of a field."""

    kind: BindingKind = BindingKind.ELEMENT
    xml_name: str = ""
    namespace: str | None = None


@dataclass
class FieldDef:
    """A field definition in a class."""

    name: str = ""
    original_name: str = ""  # Particle name in the schema
    type_ref: TypeRef | None = None
    binding: FieldBinding = field(default_factory=FieldBinding)
    is_required: bool = False

    # Explicit-set companion of an optional value-kind field
    is_specified_flag: bool = False
    specified_for: str | None = None  # Name of the field this flag belongs to
    default_value: bool | None = None

    # Name of the companion flag, when this field has one
    specified_field: str | None = None


@dataclass
class EnumMember:
    """An enum member and the literal it stands for."""

    name: str = ""
    literal: str = ""


@dataclass
class EnumDef:
    """An enum artifact."""

    name: str = ""
    original_name: str = ""
    namespace: str | None = None
    members: list[EnumMember] = field(default_factory=list)


@dataclass
class RootBinding:
    """Global element that serializes a class as a document root."""

    element_name: str = ""
    namespace: str | None = None


@dataclass
class ClassDef:
    """A class artifact."""

    name: str = ""
    original_name: str = ""
    namespace: str | None = None

    base_class: str | None = None
    fields: list[FieldDef] = field(default_factory=list)
    root: RootBinding | None = None

    # True for types synthesized from anonymous complex types
    is_synthesized: bool = False

    # Explicit "no content" marker for types without particles
    is_empty: bool = False


@dataclass
class IR:
    """The complete Intermediate Representation."""

    enums: list[EnumDef] = field(default_factory=list)
    classes: list[ClassDef] = field(default_factory=list)

    # Mapping from schema type name to artifact name
    name_mapping: dict[str, str] = field(default_factory=dict)

    @property
    def artifacts(self) -> list[EnumDef | ClassDef]:
        return [*self.enums, *self.classes]
