"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ... import __version__
from ..analyzer.ir_nodes import ClassDef, EnumDef, TypeRef
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Line comment marker
    COMMENT_PREFIX: str = "//"

    def __init__(self, config: CodeGeneratorConfig, command_line: str = "xsd_to_code"):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
            command_line: Command line recorded in the generation comment
        """
        self.config = config
        self.command_line = command_line
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self._register_filters(self.jinja_env)

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.enum_template = self.jinja_env.get_template(f"enum.{self.FILE_EXTENSION}.jinja2")
        self.class_template = self.jinja_env.get_template(f"class.{self.FILE_EXTENSION}.jinja2")
        self.suffix_template = self.jinja_env.get_template(f"suffix.{self.FILE_EXTENSION}.jinja2")

    def _register_filters(self, env: jinja2.Environment) -> None:
        """Hook for language-specific template filters."""

    def render(self, artifact: EnumDef | ClassDef) -> str:
        """
        Render one artifact as a complete source file.

        Args:
            artifact: An enum or class artifact

        Returns:
            Source code of the artifact file
        """
        if isinstance(artifact, EnumDef):
            body = self.enum_template.render(self._prepare_enum_context(artifact))
            imports = self._imports_for_enum(artifact)
        else:
            body = self.class_template.render(self._prepare_class_context(artifact))
            imports = self._imports_for_class(artifact)

        prefix = self.prefix_template.render(
            generation_comment=self._generation_comment(),
            required_imports=sorted(imports),
            namespace=self.config.target_namespace,
        )
        suffix = self.suffix_template.render(namespace=self.config.target_namespace)
        return prefix + body + suffix

    def file_name(self, artifact: EnumDef | ClassDef) -> str:
        """Name of the file an artifact is written to."""
        return f"{artifact.name}.{self.config.output.file_extension or self.FILE_EXTENSION}"

    def _generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        return f"{self.COMMENT_PREFIX} Generated by xsd_to_code v{__version__} : {self.command_line}"

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def _prepare_enum_context(self, enum_def: EnumDef) -> dict[str, Any]:
        """Template variables of an enum."""

    @abstractmethod
    def _prepare_class_context(self, class_def: ClassDef) -> dict[str, Any]:
        """Template variables of a class."""

    @abstractmethod
    def _imports_for_enum(self, enum_def: EnumDef) -> set[str]:
        """Imports needed by an enum file."""

    @abstractmethod
    def _imports_for_class(self, class_def: ClassDef) -> set[str]:
        """Imports needed by a class file."""
