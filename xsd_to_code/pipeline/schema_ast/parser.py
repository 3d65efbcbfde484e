"""
XML Schema parser that builds value records.

Phase 1 of the pipeline: parse one XSD document into a Schema record
without following import/include directives or resolving type names.
"""

from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree

from ...logger import logger
from ..exceptions import SchemaParseError
from .nodes import (
    XSD_NAMESPACE,
    AttributeParticle,
    DirectiveKind,
    ElementParticle,
    GlobalElementDef,
    QName,
    ReferenceDirective,
    ScalarTypeDef,
    ScalarVariety,
    Schema,
    StructuralTypeDef,
)


def xsd_tag(name: str) -> str:
    """Return the Clark notation tag of an XSD element."""
    return f"{{{XSD_NAMESPACE}}}{name}"


XSD_SCHEMA = xsd_tag("schema")
XSD_IMPORT = xsd_tag("import")
XSD_INCLUDE = xsd_tag("include")
XSD_REDEFINE = xsd_tag("redefine")
XSD_COMPLEX_TYPE = xsd_tag("complexType")
XSD_SIMPLE_TYPE = xsd_tag("simpleType")
XSD_ELEMENT = xsd_tag("element")
XSD_ATTRIBUTE = xsd_tag("attribute")
XSD_SEQUENCE = xsd_tag("sequence")
XSD_CHOICE = xsd_tag("choice")
XSD_ALL = xsd_tag("all")
XSD_COMPLEX_CONTENT = xsd_tag("complexContent")
XSD_SIMPLE_CONTENT = xsd_tag("simpleContent")
XSD_EXTENSION = xsd_tag("extension")
XSD_RESTRICTION = xsd_tag("restriction")
XSD_ENUMERATION = xsd_tag("enumeration")
XSD_LIST = xsd_tag("list")
XSD_UNION = xsd_tag("union")

MODEL_GROUP_TAGS = frozenset((XSD_SEQUENCE, XSD_CHOICE, XSD_ALL))

DIRECTIVE_KINDS = {
    XSD_IMPORT: DirectiveKind.IMPORT,
    XSD_INCLUDE: DirectiveKind.INCLUDE,
    XSD_REDEFINE: DirectiveKind.REDEFINE,
}


class XsdParser:
    """Parses XSD documents into Schema records."""

    def parse(self, path: Path | str) -> Schema:
        """
        Parse a schema document.

        Args:
            path: Location of the XSD file

        Returns:
            Schema record with the document's declarations in document order

        Raises:
            SchemaParseError: If the document is not well-formed XML or its
                root element is not xs:schema
        """
        path = Path(path)
        try:
            namespaces = self._read_namespaces(path)
            root = ElementTree.parse(path).getroot()
        except ElementTree.ParseError as err:
            raise SchemaParseError(path, str(err)) from err

        if root.tag != XSD_SCHEMA:
            raise SchemaParseError(path, f"root element is {root.tag!r}, not an XSD schema")

        return self.parse_element(root, path, namespaces)

    def parse_string(self, text: str, path: Path | str = "<string>") -> Schema:
        """Parse a schema document given as text (used mostly by tests)."""
        path = Path(path)
        try:
            namespaces = self._read_namespaces_from_text(text)
            root = ElementTree.fromstring(text)
        except ElementTree.ParseError as err:
            raise SchemaParseError(path, str(err)) from err

        if root.tag != XSD_SCHEMA:
            raise SchemaParseError(path, f"root element is {root.tag!r}, not an XSD schema")

        return self.parse_element(root, path, namespaces)

    def parse_element(self, root: ElementTree.Element, path: Path, namespaces: dict[str, str]) -> Schema:
        """Build a Schema record from an already parsed xs:schema element."""
        schema = Schema(
            source=path,
            target_namespace=root.get("targetNamespace") or None,
            namespaces=namespaces,
        )

        for child in root:
            if child.tag in DIRECTIVE_KINDS:
                schema.directives.append(
                    ReferenceDirective(
                        kind=DIRECTIVE_KINDS[child.tag],
                        location=child.get("schemaLocation") or None,
                        namespace=child.get("namespace") or None,
                    )
                )
                if child.tag == XSD_REDEFINE:
                    # Redefinitions are registered as ordinary declarations
                    self._parse_declarations(child, schema)
            else:
                self._parse_declaration(child, schema)

        return schema

    def _read_namespaces(self, path: Path) -> dict[str, str]:
        """Collect the prefix bindings declared in a document, first declaration wins."""
        namespaces: dict[str, str] = {}
        for _event, (prefix, uri) in ElementTree.iterparse(path, events=("start-ns",)):
            namespaces.setdefault(prefix, uri)
        return namespaces

    def _read_namespaces_from_text(self, text: str) -> dict[str, str]:
        parser = ElementTree.XMLPullParser(events=("start-ns",))
        namespaces: dict[str, str] = {}
        parser.feed(text)
        parser.close()
        for _event, (prefix, uri) in parser.read_events():
            namespaces.setdefault(prefix, uri)
        return namespaces

    def _parse_declarations(self, parent: ElementTree.Element, schema: Schema) -> None:
        for child in parent:
            self._parse_declaration(child, schema)

    def _parse_declaration(self, child: ElementTree.Element, schema: Schema) -> None:
        """Parse one top-level declaration into the schema record."""
        if child.tag == XSD_COMPLEX_TYPE:
            name = child.get("name")
            if not name:
                logger.debug("%s: skipping top-level complexType without a name", schema.source)
                return
            schema.structural_types.append(self._parse_complex_type(child, name, schema))
        elif child.tag == XSD_SIMPLE_TYPE:
            name = child.get("name")
            if not name:
                logger.debug("%s: skipping top-level simpleType without a name", schema.source)
                return
            schema.scalar_types.append(self._parse_simple_type(child, name, schema))
        elif child.tag == XSD_ELEMENT:
            schema.global_elements.append(self._parse_global_element(child, schema))

    def _parse_qname(self, value: str | None, schema: Schema) -> QName | None:
        """Resolve a prefixed name against the document's namespace bindings."""
        if not value:
            return None
        value = value.strip()
        if ":" in value:
            prefix, local_name = value.split(":", 1)
            if prefix not in schema.namespaces:
                return QName(local_name=local_name, unbound_prefix=True)
            return QName(namespace=schema.namespaces[prefix], local_name=local_name)
        return QName(namespace=schema.namespaces.get(""), local_name=value)

    def _parse_complex_type(self, node: ElementTree.Element, name: str, schema: Schema) -> StructuralTypeDef:
        """Parse a complexType, named or anonymous."""
        type_def = StructuralTypeDef(
            name=name,
            target_namespace=schema.target_namespace,
            source=schema.source,
        )
        self._parse_content(node, type_def, schema)
        return type_def

    def _parse_content(self, node: ElementTree.Element, type_def: StructuralTypeDef, schema: Schema) -> None:
        """Collect the particles of a complexType (or of one of its derivations)."""
        for child in node:
            if child.tag in MODEL_GROUP_TAGS:
                self._collect_elements(child, type_def, schema)
            elif child.tag == XSD_ATTRIBUTE:
                if child.get("use") == "prohibited":
                    logger.debug(
                        "%s: skipping prohibited attribute %s", schema.source, child.get("name") or child.get("ref")
                    )
                    continue
                type_def.attributes.append(self._parse_attribute(child, schema))
            elif child.tag == XSD_COMPLEX_CONTENT:
                for derivation in child:
                    if derivation.tag == XSD_EXTENSION:
                        type_def.base_type = self._parse_qname(derivation.get("base"), schema)
                        self._parse_content(derivation, type_def, schema)
                    elif derivation.tag == XSD_RESTRICTION:
                        self._parse_content(derivation, type_def, schema)
            elif child.tag == XSD_SIMPLE_CONTENT:
                for derivation in child:
                    if derivation.tag in (XSD_EXTENSION, XSD_RESTRICTION):
                        type_def.text_type = self._parse_qname(derivation.get("base"), schema)
                        self._parse_content(derivation, type_def, schema)

    def _collect_elements(self, group: ElementTree.Element, type_def: StructuralTypeDef, schema: Schema) -> None:
        """Flatten a model group (and its nested groups) into element particles."""
        for child in group:
            if child.tag == XSD_ELEMENT:
                type_def.elements.append(self._parse_element_particle(child, schema))
            elif child.tag in MODEL_GROUP_TAGS:
                self._collect_elements(child, type_def, schema)

    def _parse_occurs(self, node: ElementTree.Element, schema: Schema) -> tuple[int, str]:
        min_occurs = node.get("minOccurs", "1").strip()
        max_occurs = node.get("maxOccurs", "1").strip()
        try:
            return int(min_occurs), max_occurs
        except ValueError:
            raise SchemaParseError(schema.source, f"invalid minOccurs value {min_occurs!r}") from None

    def _parse_element_particle(self, node: ElementTree.Element, schema: Schema) -> ElementParticle:
        min_occurs, max_occurs = self._parse_occurs(node, schema)
        ref = self._parse_qname(node.get("ref"), schema)
        particle = ElementParticle(
            name=node.get("name") or (ref.local_name if ref else ""),
            type_ref=self._parse_qname(node.get("type"), schema),
            ref=ref,
            min_occurs=min_occurs,
            max_occurs=max_occurs,
            target_namespace=schema.target_namespace,
        )
        for child in node:
            if child.tag == XSD_COMPLEX_TYPE:
                particle.inline_structural = self._parse_complex_type(child, "", schema)
            elif child.tag == XSD_SIMPLE_TYPE:
                particle.inline_scalar = self._parse_simple_type(child, "", schema)
        return particle

    def _parse_attribute(self, node: ElementTree.Element, schema: Schema) -> AttributeParticle:
        ref = self._parse_qname(node.get("ref"), schema)
        attribute = AttributeParticle(
            name=node.get("name") or (ref.local_name if ref else ""),
            type_ref=self._parse_qname(node.get("type"), schema),
            ref=ref,
            required=node.get("use") == "required",
        )
        for child in node:
            if child.tag == XSD_SIMPLE_TYPE:
                attribute.inline_scalar = self._parse_simple_type(child, "", schema)
        return attribute

    def _parse_simple_type(self, node: ElementTree.Element, name: str, schema: Schema) -> ScalarTypeDef:
        scalar = ScalarTypeDef(
            name=name,
            target_namespace=schema.target_namespace,
            source=schema.source,
        )
        for child in node:
            if child.tag == XSD_RESTRICTION:
                scalar.variety = ScalarVariety.RESTRICTION
                scalar.base = self._parse_qname(child.get("base"), schema)
                scalar.enumerations = [
                    facet.get("value", "") for facet in child if facet.tag == XSD_ENUMERATION
                ]
            elif child.tag == XSD_LIST:
                scalar.variety = ScalarVariety.LIST
            elif child.tag == XSD_UNION:
                scalar.variety = ScalarVariety.UNION
        return scalar

    def _parse_global_element(self, node: ElementTree.Element, schema: Schema) -> GlobalElementDef:
        element = GlobalElementDef(
            name=node.get("name", ""),
            type_ref=self._parse_qname(node.get("type"), schema),
            target_namespace=schema.target_namespace,
            source=schema.source,
        )
        for child in node:
            if child.tag == XSD_COMPLEX_TYPE:
                element.inline_structural = self._parse_complex_type(child, element.name, schema)
        return element
