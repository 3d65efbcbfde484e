"""
Pipeline - XML Schema to Code generator.

This module provides a multi-phase architecture for generating code
from a graph of XML Schema documents:

1. Phase 1 (Loader): Parse schema documents and follow import/include
2. Phase 2 (Resolver): Classify simple types
3. Phase 3 (Merger): Fold same-named complex types into one definition
4. Phase 4 (Emitter): Build the IR artifacts with binding metadata
5. Phase 5 (Backend): Render each artifact to source code
6. Phase 6 (Writer): Write one file per artifact
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig
from .exceptions import MissingReferenceError, SchemaParseError, XsdToCodeError
from .generator import PipelineGenerator
from .output import AtomicWriter, OutputWriter

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "XsdToCodeError",
    "SchemaParseError",
    "MissingReferenceError",
    "AtomicWriter",
    "OutputWriter",
]
