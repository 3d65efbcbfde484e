"""
Tests for the structural type merge engine.
"""

from pathlib import Path

import pytest

from xsd_to_code.pipeline.analyzer import GenerationContext, SchemaGraphLoader
from xsd_to_code.pipeline.merger import StructuralTypeMerger, fold_definitions, merge_pair
from xsd_to_code.pipeline.schema_ast import (
    XSD_NAMESPACE,
    AttributeParticle,
    ElementParticle,
    MergedStructuralType,
    QName,
    StructuralTypeDef,
)

TEST_DATA = Path(__file__).parent / "test_data"

STRING = QName(XSD_NAMESPACE, "string")
INT = QName(XSD_NAMESPACE, "int")


def element(name, type_ref=STRING):
    return ElementParticle(name=name, type_ref=type_ref)


def definition(name, *elements, attributes=(), namespace=None):
    return StructuralTypeDef(
        name=name,
        elements=[e if isinstance(e, ElementParticle) else element(e) for e in elements],
        attributes=[a if isinstance(a, AttributeParticle) else AttributeParticle(name=a) for a in attributes],
        target_namespace=namespace,
        source=Path(f"{namespace or 'none'}.xsd"),
    )


def element_names(merged):
    return [e.name for e in merged.elements]


class TestFold:
    """Pairwise merge and left fold."""

    def test_denser_definition_becomes_base(self):
        merged = fold_definitions([definition("Person", "Name"), definition("Person", "Name", "Age")])
        assert element_names(merged) == ["Name", "Age"]

    def test_three_way_fold_appends_from_tied_operand(self):
        merged = fold_definitions(
            [
                definition("T", "X"),
                definition("T", "X", "Y"),
                definition("T", "X", "Z"),
            ]
        )
        # This three-definition case is often quoted as folding to [X, Y], which
        # treats C as a single particle. C has two particles, so fold(A, B) -> [X, Y]
        # ties with C: [X, Y] stays base and the unmatched Z is appended.
        assert element_names(merged) == ["X", "Y", "Z"]

    def test_fold_order_matters(self):
        first, second = definition("T", "A", "B"), definition("T", "C", "D")
        assert element_names(fold_definitions([first, second])) == ["A", "B", "C", "D"]
        assert element_names(fold_definitions([second, first])) == ["C", "D", "A", "B"]

    def test_tie_keeps_left_operand_as_base(self):
        merged = fold_definitions([definition("T", "A", "B"), definition("T", "C", "D")])
        assert element_names(merged) == ["A", "B", "C", "D"]

    def test_base_order_comes_first(self):
        merged = fold_definitions([definition("T", "B"), definition("T", "A", "B", "C")])
        assert element_names(merged) == ["A", "B", "C"]

    def test_conflicting_particle_from_other_operand_is_dropped(self):
        merged = fold_definitions([definition("T", element("X", STRING)), definition("T", element("X", INT))])
        assert len(merged.elements) == 1
        assert merged.elements[0].type_ref == STRING

    def test_conflicting_particle_of_denser_definition_wins(self):
        merged = fold_definitions(
            [definition("T", element("X", STRING)), definition("T", element("X", INT), element("Y"))]
        )
        assert element_names(merged) == ["X", "Y"]
        assert merged.elements[0].type_ref == INT

    def test_names_are_case_sensitive(self):
        merged = fold_definitions([definition("T", "name"), definition("T", "Name")])
        assert element_names(merged) == ["name", "Name"]

    def test_attributes_merge_independently(self):
        merged = fold_definitions(
            [
                definition("T", "X", attributes=["a", "b"]),
                definition("T", "X", "Y", attributes=[AttributeParticle(name="a", required=True), "c"]),
            ]
        )
        assert [a.name for a in merged.attributes] == ["a", "c", "b"]
        assert merged.attributes[0].required

    def test_namespace_and_sources(self):
        merged = fold_definitions([definition("T", "X", namespace="urn:a"), definition("T", "X", "Y", namespace="urn:b")])
        assert merged.target_namespace == "urn:b"
        assert merged.sources == [Path("urn:a.xsd"), Path("urn:b.xsd")]

    def test_derivation_falls_back_to_other_operand(self):
        left = definition("T", "X")
        left.base_type = QName("urn:a", "Base")
        merged = fold_definitions([left, definition("T", "X", "Y")])
        assert merged.base_type == QName("urn:a", "Base")

    def test_operands_are_not_modified(self):
        left = MergedStructuralType.from_definition(definition("T", "X"))
        right = definition("T", "X", "Y", attributes=["a"])
        merge_pair(left, right)
        assert element_names(left) == ["X"]
        assert [e.name for e in right.elements] == ["X", "Y"]
        assert left.attributes == []

    def test_single_definition(self):
        merged = fold_definitions([definition("T", "X", attributes=["a"])])
        assert element_names(merged) == ["X"]
        assert [a.name for a in merged.attributes] == ["a"]

    def test_empty_definition_list(self):
        with pytest.raises(ValueError):
            fold_definitions([])

    def test_deterministic(self):
        definitions = [definition("T", "X"), definition("T", "X", "Y"), definition("T", "Z", attributes=["a"])]
        assert fold_definitions(definitions) == fold_definitions(definitions)


class TestStructuralTypeMerger:
    """Merging registered types through the generation context."""

    def make_context(self, *definitions):
        context = GenerationContext()
        for d in definitions:
            context.registry.structural_types.append(d.name, d)
        return context

    def test_merge_is_cached(self):
        context = self.make_context(definition("T", "X"), definition("T", "X", "Y"))
        merger = StructuralTypeMerger(context)

        merged = merger.merge("T")
        assert context.merged_types["T"] is merged
        assert merger.merge("T") is merged
        assert StructuralTypeMerger(context).merge("T") is merged

    def test_unknown_name(self):
        merger = StructuralTypeMerger(GenerationContext())
        with pytest.raises(KeyError):
            merger.merge("Nope")

    def test_merge_all_in_registration_order(self):
        context = self.make_context(definition("B", "X"), definition("A", "X"), definition("B", "X", "Y"))
        merged = StructuralTypeMerger(context).merge_all()
        assert [m.name for m in merged] == ["B", "A"]
        assert element_names(merged[0]) == ["X", "Y"]

    def test_definitions_split_across_files(self):
        context = GenerationContext()
        SchemaGraphLoader(context).load(TEST_DATA / "merge")
        merged = StructuralTypeMerger(context).merge("Person")

        assert element_names(merged) == ["Name", "Age"]
        assert [a.name for a in merged.attributes] == ["version", "id"]
        assert merged.target_namespace == "urn:people-ext"
        assert [p.name for p in merged.sources] == ["person_a.xsd", "person_b.xsd"]


if __name__ == "__main__":
    pytest.main([__file__])
