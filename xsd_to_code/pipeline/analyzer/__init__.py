"""
Analyzer module.

Contains the schema graph loader, the type registries, simple type
resolution, naming, and IR building.
"""

from __future__ import annotations

from .emitter import ModelEmitter
from .ir_nodes import (
    IR,
    BindingKind,
    ClassDef,
    EnumDef,
    EnumMember,
    FieldBinding,
    FieldDef,
    ResolvedScalarType,
    RootBinding,
    TypeKind,
    TypeRef,
)
from .loader import SchemaGraphLoader
from .name_resolver import NameResolver
from .registry import GenerationContext, NamespaceTable, TypeRegistry
from .type_resolver import SimpleTypeResolver

__all__ = [
    "IR",
    "BindingKind",
    "ClassDef",
    "EnumDef",
    "EnumMember",
    "FieldBinding",
    "FieldDef",
    "ResolvedScalarType",
    "RootBinding",
    "TypeKind",
    "TypeRef",
    "GenerationContext",
    "NamespaceTable",
    "TypeRegistry",
    "SchemaGraphLoader",
    "SimpleTypeResolver",
    "NameResolver",
    "ModelEmitter",
]
