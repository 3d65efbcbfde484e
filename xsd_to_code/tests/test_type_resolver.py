"""
Tests for simple type classification and particle type resolution.
"""

from pathlib import Path

import pytest

from xsd_to_code.pipeline.analyzer import GenerationContext, SchemaGraphLoader, SimpleTypeResolver, TypeKind, TypeRef
from xsd_to_code.pipeline.analyzer.ir_nodes import BOOLEAN, DECIMAL, INTEGER, TEXT, TIMESTAMP, ResolvedScalarType
from xsd_to_code.pipeline.schema_ast import (
    XSD_NAMESPACE,
    AttributeParticle,
    ElementParticle,
    GlobalElementDef,
    QName,
    ScalarTypeDef,
    ScalarVariety,
    StructuralTypeDef,
    XsdParser,
)

TEST_DATA = Path(__file__).parent / "test_data"


def xsd(name):
    return QName(XSD_NAMESPACE, name)


def restriction(name, base, *enumerations):
    return ScalarTypeDef(name=name, base=xsd(base), enumerations=list(enumerations))


def make_resolver(*scalars):
    context = GenerationContext()
    for scalar in scalars:
        context.registry.scalar_types.append(scalar.name, scalar)
    return SimpleTypeResolver(context)


class TestClassification:
    """The six representations of a simple type."""

    @pytest.mark.parametrize(
        "base, expected",
        [
            ("int", INTEGER),
            ("unsignedShort", INTEGER),
            ("positiveInteger", INTEGER),
            ("decimal", DECIMAL),
            ("double", DECIMAL),
            ("boolean", BOOLEAN),
            ("dateTime", TIMESTAMP),
            ("date", TIMESTAMP),
            ("string", TEXT),
            ("anyURI", TEXT),
            ("duration", TEXT),
        ],
    )
    def test_restriction_base(self, base, expected):
        resolver = make_resolver()
        assert resolver.classify(restriction("T", base)) == expected

    def test_enumeration_wins_over_base(self):
        resolver = make_resolver()
        assert resolver.classify(restriction("Level", "int", "1", "2")) == ResolvedScalarType.enum("Level")

    def test_list_and_union_are_text(self):
        resolver = make_resolver()
        assert resolver.classify(ScalarTypeDef(name="L", variety=ScalarVariety.LIST)) == TEXT
        assert resolver.classify(ScalarTypeDef(name="U", variety=ScalarVariety.UNION)) == TEXT

    def test_user_defined_or_missing_base_is_text(self):
        resolver = make_resolver()
        assert resolver.classify(ScalarTypeDef(name="T", base=QName("urn:x", "Quantity"))) == TEXT
        assert resolver.classify(ScalarTypeDef(name="T")) == TEXT

    def test_unbound_prefix_matches_builtin_local_name(self):
        resolver = make_resolver()
        base = QName(local_name="boolean", unbound_prefix=True)
        assert resolver.classify(ScalarTypeDef(name="T", base=base)) == BOOLEAN

    def test_unbound_prefix_wins_over_declared_type(self):
        resolver = make_resolver(restriction("boolean", "string", "yes", "no"))
        base = QName(local_name="boolean", unbound_prefix=True)
        assert resolver.classify(ScalarTypeDef(name="T", base=base)) == BOOLEAN

    def test_no_namespace_builtin_name_without_declaration(self):
        resolver = make_resolver()
        assert resolver.classify(ScalarTypeDef(name="T", base=QName(None, "int"))) == INTEGER

    def test_build_table_in_registration_order(self):
        resolver = make_resolver(restriction("B", "int"), restriction("A", "string", "x"))
        table = resolver.build_table()
        assert list(table) == ["B", "A"]
        assert table["A"] == ResolvedScalarType.enum("A")
        assert resolver.context.resolved_scalars is table

    def test_first_definition_wins(self):
        context = GenerationContext()
        SchemaGraphLoader(context).load(TEST_DATA / "merge")
        table = SimpleTypeResolver(context).build_table()
        # person_a.xsd declares Code as an enumeration, person_b.xsd as an int
        assert table["Code"] == ResolvedScalarType.enum("Code")

    def test_resolved_scalar_variants(self):
        with pytest.raises(ValueError):
            ResolvedScalarType(TypeKind.CLASS)
        with pytest.raises(ValueError):
            ResolvedScalarType(TypeKind.ENUM)
        with pytest.raises(ValueError):
            ResolvedScalarType(TypeKind.TEXT, "Name")
        assert INTEGER.is_value_kind and not TEXT.is_value_kind


class TestReferences:
    """Direct resolution of the type references found on particles."""

    def test_builtin(self):
        resolver = make_resolver()
        assert resolver.resolve_reference(xsd("long")) == TypeRef(kind=TypeKind.INTEGER)

    def test_resolved_scalar(self):
        resolver = make_resolver(restriction("Color", "string", "RED"))
        resolver.build_table()
        assert resolver.resolve_reference(QName("urn:x", "Color")) == TypeRef(kind=TypeKind.ENUM, name="Color")

    def test_registered_but_unresolved_scalar_is_text(self):
        resolver = make_resolver(restriction("Quantity", "int"))
        # Table not built yet
        assert resolver.resolve_reference(QName("urn:x", "Quantity")) == TypeRef(kind=TypeKind.TEXT)

    def test_anything_else_is_structural(self):
        resolver = make_resolver()
        assert resolver.resolve_reference(QName("urn:x", "Nowhere")) == TypeRef.structural("Nowhere")

    def test_declared_no_namespace_types_shadow_builtin_names(self):
        resolver = make_resolver(restriction("language", "string", "EN", "FR"))
        resolver.context.registry.structural_types.append("Name", StructuralTypeDef(name="Name"))
        resolver.build_table()

        assert resolver.resolve_reference(QName(None, "Name")) == TypeRef.structural("Name")
        assert resolver.resolve_reference(QName(None, "language")) == TypeRef(kind=TypeKind.ENUM, name="language")
        # Names nobody declares are still the builtins
        assert resolver.resolve_reference(QName(None, "token")) == TypeRef(kind=TypeKind.TEXT)
        assert resolver.resolve_reference(QName(None, "date")) == TypeRef(kind=TypeKind.TIMESTAMP)


class TestParticles:
    """Element and attribute resolution."""

    def test_only_unbounded_is_repeatable(self):
        resolver = make_resolver()
        unbounded = ElementParticle(name="a", type_ref=xsd("int"), max_occurs="unbounded")
        five = ElementParticle(name="b", type_ref=xsd("int"), max_occurs="5")

        assert resolver.resolve_element(unbounded) == TypeRef(kind=TypeKind.INTEGER, is_sequence=True)
        assert resolver.resolve_element(five) == TypeRef(kind=TypeKind.INTEGER)

    @pytest.mark.parametrize(
        "type_ref, expected_kind",
        [
            (xsd("string"), TypeKind.TEXT),
            (QName("urn:x", "Color"), TypeKind.ENUM),
            (QName("urn:x", "Order"), TypeKind.CLASS),
        ],
    )
    def test_unbounded_wraps_every_kind(self, type_ref, expected_kind):
        resolver = make_resolver(restriction("Color", "string", "RED"))
        resolver.build_table()
        particle = ElementParticle(name="a", type_ref=type_ref, max_occurs="unbounded")
        resolved = resolver.resolve_element(particle)
        assert resolved.kind == expected_kind
        assert resolved.is_sequence
        assert not resolved.is_value_kind

    def test_inline_scalar_uses_its_base(self):
        resolver = make_resolver()
        particle = ElementParticle(name="a", inline_scalar=restriction("", "decimal", "1.5", "2.5"))
        assert resolver.resolve_element(particle) == TypeRef(kind=TypeKind.DECIMAL)

    def test_untyped_element_is_text(self):
        resolver = make_resolver()
        assert resolver.resolve_element(ElementParticle(name="a")) == TypeRef(kind=TypeKind.TEXT)

    def test_element_ref(self):
        resolver = make_resolver()
        resolver.context.registry.global_elements.append(
            "order", GlobalElementDef(name="order", type_ref=QName("urn:o", "Order"), target_namespace="urn:o")
        )
        particle = ElementParticle(name="order", ref=QName("urn:o", "order"))

        assert resolver.resolve_element(particle) == TypeRef.structural("Order")
        assert resolver.element_namespace(particle, "urn:owner") == "urn:o"
        assert resolver.element_namespace(ElementParticle(name="x"), "urn:owner") == "urn:owner"
        declared = ElementParticle(name="y", target_namespace="urn:declared")
        assert resolver.element_namespace(declared, "urn:owner") == "urn:declared"

    def test_attribute_never_repeats_nor_refers_to_a_class(self):
        resolver = make_resolver()
        assert resolver.resolve_attribute(AttributeParticle(name="a", type_ref=xsd("boolean"))) == TypeRef(
            kind=TypeKind.BOOLEAN
        )
        assert resolver.resolve_attribute(AttributeParticle(name="a", type_ref=QName("urn:x", "Order"))) == TypeRef()
        assert resolver.resolve_attribute(AttributeParticle(name="a")) == TypeRef()

    def test_orders_document(self):
        context = GenerationContext()
        context.register_schema(XsdParser().parse(TEST_DATA / "orders" / "orders.xsd"))
        resolver = SimpleTypeResolver(context)
        table = resolver.build_table()

        assert table == {"Color": ResolvedScalarType.enum("Color"), "Quantity": INTEGER, "SkuList": TEXT}


if __name__ == "__main__":
    pytest.main([__file__])
