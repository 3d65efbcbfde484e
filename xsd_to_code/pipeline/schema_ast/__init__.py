"""
Schema AST module.

Contains the value records and the parser for XML Schema documents.
"""

from __future__ import annotations

from .nodes import (
    UNBOUNDED,
    XSD_NAMESPACE,
    AttributeParticle,
    DirectiveKind,
    ElementParticle,
    GlobalElementDef,
    MergedStructuralType,
    QName,
    ReferenceDirective,
    ScalarTypeDef,
    ScalarVariety,
    Schema,
    StructuralTypeDef,
)
from .parser import XsdParser

__all__ = [
    "UNBOUNDED",
    "XSD_NAMESPACE",
    "QName",
    "Schema",
    "StructuralTypeDef",
    "MergedStructuralType",
    "ElementParticle",
    "AttributeParticle",
    "ScalarTypeDef",
    "ScalarVariety",
    "GlobalElementDef",
    "ReferenceDirective",
    "DirectiveKind",
    "XsdParser",
]
