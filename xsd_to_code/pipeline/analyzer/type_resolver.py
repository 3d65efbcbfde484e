"""
Simple type resolver.

Classifies every declared simple type into one of six representations
(enum, integer, decimal, boolean, timestamp, text), and resolves the
type references found on particles.
"""

from __future__ import annotations

from ...logger import logger
from ..schema_ast.nodes import (
    UNBOUNDED,
    AttributeParticle,
    ElementParticle,
    QName,
    ScalarTypeDef,
    ScalarVariety,
)
from .ir_nodes import (
    BOOLEAN,
    DECIMAL,
    INTEGER,
    TEXT,
    TIMESTAMP,
    ResolvedScalarType,
    TypeKind,
    TypeRef,
)
from .registry import GenerationContext

INTEGER_TYPES = frozenset(
    (
        "integer",
        "int",
        "long",
        "short",
        "byte",
        "nonNegativeInteger",
        "nonPositiveInteger",
        "positiveInteger",
        "negativeInteger",
        "unsignedLong",
        "unsignedInt",
        "unsignedShort",
        "unsignedByte",
    )
)
DECIMAL_TYPES = frozenset(("decimal", "float", "double"))
BOOLEAN_TYPES = frozenset(("boolean",))
TIMESTAMP_TYPES = frozenset(("dateTime", "date", "time"))
TEXT_TYPES = frozenset(
    (
        "anyType",
        "anySimpleType",
        "string",
        "normalizedString",
        "token",
        "language",
        "Name",
        "NCName",
        "NMTOKEN",
        "NMTOKENS",
        "ID",
        "IDREF",
        "IDREFS",
        "ENTITY",
        "ENTITIES",
        "QName",
        "NOTATION",
        "anyURI",
        "base64Binary",
        "hexBinary",
        "duration",
        "gYear",
        "gYearMonth",
        "gMonth",
        "gMonthDay",
        "gDay",
    )
)
BUILTIN_TYPES = INTEGER_TYPES | DECIMAL_TYPES | BOOLEAN_TYPES | TIMESTAMP_TYPES | TEXT_TYPES


class SimpleTypeResolver:
    """Resolves simple types and particle type references."""

    def __init__(self, context: GenerationContext):
        self.context = context

    def build_table(self) -> dict[str, ResolvedScalarType]:
        """
        Classify every registered simple type.

        Only the first registered definition of a name is considered; later
        definitions with the same name are ignored.

        Returns:
            The resolved table (also stored in the context), in registration order
        """
        table = self.context.resolved_scalars
        for name, definitions in self.context.registry.scalar_types.items():
            if name in table:
                continue
            if len(definitions) > 1:
                logger.debug("Ignoring %d later definition(s) of simple type %s", len(definitions) - 1, name)
            table[name] = self.classify(definitions[0])
        return table

    def classify(self, scalar: ScalarTypeDef) -> ResolvedScalarType:
        """Classify one simple type declaration."""
        if scalar.variety == ScalarVariety.RESTRICTION and scalar.enumerations:
            return ResolvedScalarType.enum(scalar.name)
        if scalar.variety != ScalarVariety.RESTRICTION:
            # Lists and unions are collapsed to text
            return TEXT
        return self.classify_base(scalar.base)

    def classify_base(self, base: QName | None) -> ResolvedScalarType:
        """Classify a restriction base; only builtin primitives are recognized."""
        if base is None or not self.is_builtin(base):
            return TEXT
        return self.builtin_type(base.local_name)

    def is_builtin(self, qname: QName) -> bool:
        """Whether a reference names an XSD builtin type.

        A name written with an undeclared prefix is matched on its local name
        alone. A no-namespace name only falls back to the builtins when no
        schema declares a type with that name.
        """
        if qname.is_xsd:
            return True
        if qname.namespace is not None or qname.local_name not in BUILTIN_TYPES:
            return False
        if qname.unbound_prefix:
            return True
        registry = self.context.registry
        return qname.local_name not in registry.scalar_types and qname.local_name not in registry.structural_types

    @staticmethod
    def builtin_type(local_name: str) -> ResolvedScalarType:
        """Fixed representation of a builtin type; unknown builtins are text."""
        if local_name in INTEGER_TYPES:
            return INTEGER
        if local_name in DECIMAL_TYPES:
            return DECIMAL
        if local_name in BOOLEAN_TYPES:
            return BOOLEAN
        if local_name in TIMESTAMP_TYPES:
            return TIMESTAMP
        return TEXT

    def resolve_reference(self, qname: QName) -> TypeRef:
        """
        Resolve a type reference found on a particle.

        Builtins map to their fixed representation, resolved simple types to
        their table entry, registered but unresolved simple types to text.
        Any other name is assumed to be a structural type.
        """
        if self.is_builtin(qname):
            return TypeRef.from_scalar(self.builtin_type(qname.local_name))

        name = qname.local_name
        resolved = self.context.resolved_scalars.get(name)
        if resolved is not None:
            return TypeRef.from_scalar(resolved)
        if name in self.context.registry.scalar_types:
            return TypeRef.from_scalar(TEXT)
        return TypeRef.structural(name)

    def classify_inline(self, scalar: ScalarTypeDef) -> ResolvedScalarType:
        """Classify an anonymous simple type by its base (it has no enum artifact)."""
        if scalar.variety != ScalarVariety.RESTRICTION:
            return TEXT
        return self.classify_base(scalar.base)

    @staticmethod
    def is_repeatable(particle: ElementParticle) -> bool:
        """Only the literal "unbounded" makes a particle repeatable, maxOccurs="5" does not."""
        return particle.max_occurs == UNBOUNDED

    def resolve_element(self, particle: ElementParticle) -> TypeRef:
        """
        Resolve the type of an element particle without an inline complex type.

        Returns:
            The resolved type, wrapped in a sequence when the particle is repeatable
        """
        type_ref = self._resolve_element_type(particle)
        type_ref.is_sequence = self.is_repeatable(particle)
        return type_ref

    def _resolve_element_type(self, particle: ElementParticle) -> TypeRef:
        if particle.inline_scalar is not None:
            return TypeRef.from_scalar(self.classify_inline(particle.inline_scalar))
        if particle.type_ref is not None:
            return self.resolve_reference(particle.type_ref)
        if particle.ref is not None:
            return self._resolve_element_ref(particle.ref)
        # No type at all: xs:anyType
        return TypeRef.from_scalar(TEXT)

    def _resolve_element_ref(self, ref: QName) -> TypeRef:
        """Resolve a particle referring to a global element."""
        element = self.context.registry.global_elements.first(ref.local_name)
        if element is None:
            logger.debug("Element reference %s does not match any global element", ref)
            return TypeRef.structural(ref.local_name)
        if element.type_ref is not None:
            return self.resolve_reference(element.type_ref)
        if element.inline_structural is not None:
            return TypeRef.structural(element.name)
        return TypeRef.from_scalar(TEXT)

    def resolve_attribute(self, attribute: AttributeParticle) -> TypeRef:
        """Resolve the type of an attribute; attributes are never repeatable."""
        if attribute.inline_scalar is not None:
            return TypeRef.from_scalar(self.classify_inline(attribute.inline_scalar))
        if attribute.type_ref is not None:
            type_ref = self.resolve_reference(attribute.type_ref)
            if type_ref.kind != TypeKind.CLASS:
                return type_ref
            logger.debug("Attribute %s refers to non-simple type %s", attribute.name, attribute.type_ref)
        return TypeRef.from_scalar(TEXT)

    def element_namespace(self, particle: ElementParticle, owner_namespace: str | None) -> str | None:
        """Namespace an element particle is bound to."""
        if particle.ref is not None:
            element = self.context.registry.global_elements.first(particle.ref.local_name)
            if element is not None:
                return element.target_namespace
            return particle.ref.namespace
        return particle.target_namespace or owner_namespace
