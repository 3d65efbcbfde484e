"""
Name resolver for artifacts, fields and enum members.

Turns schema names into identifiers and synthesizes deterministic names
for anonymous complex types.
"""

from __future__ import annotations

from ...utils import sanitize_identifier, unique_name

# C# reserved keywords that need escaping
CS_RESERVED_KEYWORDS = {
    "abstract",
    "as",
    "base",
    "bool",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "checked",
    "class",
    "const",
    "continue",
    "decimal",
    "default",
    "delegate",
    "do",
    "double",
    "else",
    "enum",
    "event",
    "explicit",
    "extern",
    "false",
    "finally",
    "fixed",
    "float",
    "for",
    "foreach",
    "goto",
    "if",
    "implicit",
    "in",
    "int",
    "interface",
    "internal",
    "is",
    "lock",
    "long",
    "namespace",
    "new",
    "null",
    "object",
    "operator",
    "out",
    "override",
    "params",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "return",
    "sbyte",
    "sealed",
    "short",
    "sizeof",
    "stackalloc",
    "static",
    "string",
    "struct",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "uint",
    "ulong",
    "unchecked",
    "unsafe",
    "ushort",
    "using",
    "virtual",
    "void",
    "volatile",
    "while",
}


class NameResolver:
    """Resolves artifact, field and enum member names."""

    SPECIFIED_SUFFIX = "Specified"
    TEXT_FIELD_NAME = "Value"

    def type_name(self, name: str) -> str:
        """Artifact name of a schema type."""
        return sanitize_identifier(name)

    def synthesized_type_name(self, owner_name: str, particle_name: str) -> str:
        """Schema name given to the anonymous complex type of a particle."""
        return f"{owner_name}_{particle_name}Type"

    def field_name(self, particle_name: str, used: set[str]) -> str:
        """Field name of a particle, unique within its class."""
        return unique_name(sanitize_identifier(particle_name), used)

    def specified_field_name(self, field_name: str, used: set[str]) -> str:
        """Name of the explicit-set companion of a field."""
        return unique_name(f"{field_name}{self.SPECIFIED_SUFFIX}", used)

    def enum_member_name(self, enum_name: str, literal: str, used: set[str]) -> str:
        """Enum member identifier, prefixed with the enum name to avoid collisions across enums."""
        return unique_name(f"{enum_name}_{sanitize_identifier(literal)}", used)

    def escape_keyword(self, name: str) -> str:
        """Escape a C# reserved keyword with @ prefix."""
        if name in CS_RESERVED_KEYWORDS:
            return f"@{name}"
        return name
