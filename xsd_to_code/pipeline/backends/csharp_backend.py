"""
C# code generation backend.

Generates one C# file per artifact, bound to the original XML names and
namespaces with System.Xml.Serialization attributes.
"""

from __future__ import annotations

from typing import Any

import jinja2

from ..analyzer.ir_nodes import BindingKind, ClassDef, EnumDef, FieldDef, TypeKind, TypeRef
from ..analyzer.name_resolver import NameResolver
from ..config import CodeGeneratorConfig
from .base import CodeBackend


def cs_string(value: str | None) -> str:
    """Format a value as a C# string literal."""
    if value is None:
        return "null"
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class CSharpBackend(CodeBackend):
    """C# code generation backend."""

    TEMPLATE_LANG = "cs"
    FILE_EXTENSION = "cs"

    TYPE_MAP = {
        TypeKind.INTEGER: "int",
        TypeKind.DECIMAL: "decimal",
        TypeKind.BOOLEAN: "bool",
        TypeKind.TIMESTAMP: "DateTime",
        TypeKind.TEXT: "string",
    }

    BASE_IMPORTS = frozenset(("System", "System.Xml.Serialization"))

    def __init__(
        self,
        config: CodeGeneratorConfig,
        name_resolver: NameResolver | None = None,
        command_line: str = "xsd_to_code",
    ):
        super().__init__(config, command_line)
        self.names = name_resolver or NameResolver()

    def _register_filters(self, env: jinja2.Environment) -> None:
        env.filters["cs_string"] = cs_string

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to C# type string."""
        if type_ref.kind in (TypeKind.ENUM, TypeKind.CLASS):
            result = type_ref.name
        else:
            result = self.TYPE_MAP[type_ref.kind]

        if type_ref.is_sequence:
            return f"List<{result}>"
        return result

    def _imports_for_enum(self, enum_def: EnumDef) -> set[str]:
        return set(self.BASE_IMPORTS) | set(self.config.csharp_additional_usings)

    def _imports_for_class(self, class_def: ClassDef) -> set[str]:
        imports = set(self.BASE_IMPORTS) | set(self.config.csharp_additional_usings)
        if any(f.type_ref and f.type_ref.is_sequence for f in class_def.fields):
            imports.add("System.Collections.Generic")
        return imports

    def _xml_attribute(self, name: str, xml_name: str, namespace: str | None) -> str:
        """Format a type-level serialization attribute."""
        args = [cs_string(xml_name)]
        if namespace:
            args.append(f"Namespace = {cs_string(namespace)}")
        return f"{name}({', '.join(args)})"

    def _prepare_enum_context(self, enum_def: EnumDef) -> dict[str, Any]:
        return {
            "ENUM_NAME": enum_def.name,
            "type_attributes": [self._xml_attribute("XmlType", enum_def.original_name, enum_def.namespace)],
            "members": [{"NAME": m.name, "LITERAL": m.literal} for m in enum_def.members],
        }

    def _prepare_class_context(self, class_def: ClassDef) -> dict[str, Any]:
        type_attributes = []
        if class_def.root is not None:
            type_attributes.append(self._xml_attribute("XmlRoot", class_def.root.element_name, class_def.root.namespace))
        type_attributes.append(self._xml_attribute("XmlType", class_def.original_name, class_def.namespace))

        return {
            "CLASS_NAME": class_def.name,
            "EXTENDS": class_def.base_class,
            "type_attributes": type_attributes,
            "IS_EMPTY": class_def.is_empty,
            "properties": [self._prepare_field_context(f) for f in class_def.fields],
        }

    def _prepare_field_context(self, field: FieldDef) -> dict[str, Any]:
        """
        Prepare the template context for a field.

        Args:
            field: The field definition

        Returns:
            Dictionary of template variables
        """
        type_ref = field.type_ref or TypeRef()
        type_str = self.translate_type(type_ref)
        binding = field.binding

        if binding.kind == BindingKind.ELEMENT:
            attribute = self._xml_attribute("XmlElement", binding.xml_name, binding.namespace)
        elif binding.kind == BindingKind.ATTRIBUTE:
            attribute = f"XmlAttribute({cs_string(binding.xml_name)})"
        elif binding.kind == BindingKind.TEXT:
            attribute = "XmlText"
        else:
            attribute = "XmlIgnore"

        init = None
        if type_ref.is_sequence:
            init = f"new {type_str}()"
        elif field.is_specified_flag:
            init = "true" if field.default_value else "false"

        return {
            "NAME": self.names.escape_keyword(field.name),
            "TYPE": type_str,
            "ATTRIBUTE": attribute,
            "INIT": init,
        }
