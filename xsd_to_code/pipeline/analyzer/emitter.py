"""
Model emitter that turns resolved types into IR artifacts.

Consumes the merged structural types and the resolved simple type table,
and produces one EnumDef per enumeration and one ClassDef per structural
type, including the types synthesized for anonymous complex types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...logger import logger
from ..schema_ast.nodes import (
    ElementParticle,
    MergedStructuralType,
    StructuralTypeDef,
)
from .ir_nodes import (
    IR,
    BindingKind,
    ClassDef,
    EnumDef,
    EnumMember,
    FieldBinding,
    FieldDef,
    RootBinding,
    TypeKind,
    TypeRef,
)
from .name_resolver import NameResolver
from .registry import GenerationContext
from .type_resolver import SimpleTypeResolver

if TYPE_CHECKING:
    from ..merger.type_merger import StructuralTypeMerger


class ModelEmitter:
    """Builds the IR from a loaded and resolved GenerationContext."""

    def __init__(
        self,
        context: GenerationContext,
        resolver: SimpleTypeResolver,
        merger: StructuralTypeMerger,
        name_resolver: NameResolver | None = None,
    ):
        """
        Initialize the emitter.

        Args:
            context: The loaded generation context
            resolver: Resolver whose table has been built
            merger: Merge engine for structural types
            name_resolver: Naming rules for artifacts and fields
        """
        self.context = context
        self.resolver = resolver
        self.merger = merger
        self.names = name_resolver or NameResolver()

        self.ir = IR()

        # Schema names of structural types already emitted (or being emitted)
        self._emitted: set[str] = set()

        # Schema names of the anonymous types of global elements
        self._root_types: dict[str, StructuralTypeDef] = {}

        # Structural type name -> first global element using it
        self._roots: dict[str, RootBinding] = {}

    def emit(self) -> IR:
        """
        Emit every enum and structural type.

        Enums come first, in simple type registration order, then classes in
        structural type registration order, then the anonymous types of
        global elements. Synthesized nested types precede their owner.

        Returns:
            The IR
        """
        self._collect_roots()

        for name, resolved in self.context.resolved_scalars.items():
            if resolved.kind == TypeKind.ENUM:
                self.ir.enums.append(self.emit_enum(name))

        for merged in self.merger.merge_all():
            self.emit_structural(merged)

        for type_def in self._root_types.values():
            self.emit_structural(MergedStructuralType.from_definition(type_def))

        logger.info("Emitted %d enum(s) and %d class(es)", len(self.ir.enums), len(self.ir.classes))
        return self.ir

    def _collect_roots(self) -> None:
        """Find the global elements that can serialize a structural type as a document root."""
        for name, elements in self.context.registry.global_elements.items():
            element = elements[0]
            if element.inline_structural is not None:
                if name not in self.context.registry.structural_types:
                    self._root_types[name] = element.inline_structural
                    self._roots.setdefault(name, RootBinding(element.name, element.target_namespace))
                else:
                    logger.debug("Anonymous type of element %s collides with complexType %s", name, name)
            elif element.type_ref is not None:
                type_ref = self.resolver.resolve_reference(element.type_ref)
                if type_ref.kind == TypeKind.CLASS:
                    self._roots.setdefault(type_ref.name, RootBinding(element.name, element.target_namespace))

    def emit_enum(self, name: str) -> EnumDef:
        """Build the enum artifact of a resolved enumeration."""
        scalar = self.context.registry.scalar_types.first(name)
        enum_name = self.names.type_name(name)
        enum_def = EnumDef(
            name=enum_name,
            original_name=name,
            namespace=scalar.target_namespace if scalar else None,
        )
        used: set[str] = set()
        for literal in scalar.enumerations if scalar else []:
            member_name = self.names.enum_member_name(enum_name, literal, used)
            enum_def.members.append(EnumMember(name=member_name, literal=literal))

        self.ir.name_mapping[name] = enum_name
        return enum_def

    def emit_structural(self, merged: MergedStructuralType, synthesized: bool = False) -> ClassDef | None:
        """
        Build the class artifact of a structural type.

        Each name is emitted at most once; a request for a name that was
        already emitted is a no-op and returns None.
        """
        if merged.name in self._emitted:
            logger.debug("Structural type %s already emitted", merged.name)
            return None
        self._emitted.add(merged.name)

        class_name = self.names.type_name(merged.name)
        class_def = ClassDef(
            name=class_name,
            original_name=merged.name,
            namespace=merged.target_namespace,
            root=self._roots.get(merged.name),
            is_synthesized=synthesized,
            is_empty=merged.is_empty,
        )

        if merged.base_type is not None:
            base_ref = self.resolver.resolve_reference(merged.base_type)
            if base_ref.kind == TypeKind.CLASS:
                class_def.base_class = self.names.type_name(base_ref.name)
                self._check_reference(base_ref)

        used: set[str] = set()
        for particle in merged.elements:
            type_ref = self._element_type(merged, particle)
            self._add_field(
                class_def,
                particle.name,
                type_ref,
                FieldBinding(
                    kind=BindingKind.ELEMENT,
                    xml_name=particle.name,
                    namespace=self.resolver.element_namespace(particle, merged.target_namespace),
                ),
                is_optional=particle.is_optional,
                used=used,
            )

        for attribute in merged.attributes:
            self._add_field(
                class_def,
                attribute.name,
                self._named(self.resolver.resolve_attribute(attribute)),
                FieldBinding(kind=BindingKind.ATTRIBUTE, xml_name=attribute.name),
                is_optional=attribute.is_optional,
                used=used,
            )

        if merged.text_type is not None:
            text_ref = self.resolver.resolve_reference(merged.text_type)
            if text_ref.kind == TypeKind.CLASS:
                # simpleContent derived from a complex type: its text is still text
                text_ref = TypeRef()
            class_def.fields.append(
                FieldDef(
                    name=self.names.field_name(self.names.TEXT_FIELD_NAME, used),
                    original_name="",
                    type_ref=self._named(text_ref),
                    binding=FieldBinding(kind=BindingKind.TEXT),
                )
            )

        self.ir.name_mapping[merged.name] = class_name
        self.ir.classes.append(class_def)
        return class_def

    def _element_type(self, owner: MergedStructuralType, particle: ElementParticle) -> TypeRef:
        """Resolve a particle type, emitting its anonymous complex type first if it has one."""
        if particle.inline_structural is None:
            type_ref = self.resolver.resolve_element(particle)
            self._check_reference(type_ref)
            return self._named(type_ref)

        synthesized_name = self.names.synthesized_type_name(owner.name, particle.name)
        inline = particle.inline_structural
        nested = MergedStructuralType.from_definition(inline)
        nested.name = synthesized_name
        if nested.target_namespace is None:
            nested.target_namespace = owner.target_namespace
        self.emit_structural(nested, synthesized=True)

        return TypeRef(
            kind=TypeKind.CLASS,
            name=self.names.type_name(synthesized_name),
            is_sequence=self.resolver.is_repeatable(particle),
        )

    def _named(self, type_ref: TypeRef) -> TypeRef:
        """Replace a schema type name with its artifact name."""
        if type_ref.kind in (TypeKind.ENUM, TypeKind.CLASS):
            type_ref.name = self.names.type_name(type_ref.name)
        return type_ref

    def _check_reference(self, type_ref: TypeRef) -> None:
        """Log references to structural types that nothing declares."""
        if type_ref.kind != TypeKind.CLASS:
            return
        registry = self.context.registry
        if type_ref.name not in registry.structural_types and type_ref.name not in self._root_types:
            logger.debug("Type %s is not declared by any loaded schema", type_ref.name)

    def _add_field(
        self,
        class_def: ClassDef,
        particle_name: str,
        type_ref: TypeRef,
        binding: FieldBinding,
        is_optional: bool,
        used: set[str],
    ) -> None:
        """Add a particle field, and its explicit-set companion when it needs one."""
        field_def = FieldDef(
            name=self.names.field_name(particle_name, used),
            original_name=particle_name,
            type_ref=type_ref,
            binding=binding,
            is_required=not is_optional,
        )
        class_def.fields.append(field_def)

        if is_optional and type_ref.is_value_kind:
            companion_name = self.names.specified_field_name(field_def.name, used)
            field_def.specified_field = companion_name
            class_def.fields.append(
                FieldDef(
                    name=companion_name,
                    type_ref=TypeRef(kind=TypeKind.BOOLEAN),
                    binding=FieldBinding(kind=BindingKind.IGNORE),
                    is_specified_flag=True,
                    specified_for=field_def.name,
                    default_value=False,
                )
            )

