"""XML Schema to Code Generator

A Python package for generating C# classes and enums from XML Schema
documents, with the serialization metadata needed to read and write
the original XML.
"""

__version__ = "1.0.0"
__author__ = "François Lagunas"

from .pipeline import (  # noqa: E402
    AtomicWriter,
    CodeGeneratorConfig,
    MissingReferenceError,
    OutputConfig,
    OutputWriter,
    PipelineGenerator,
    SchemaParseError,
    XsdToCodeError,
)

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
