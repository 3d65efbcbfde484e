"""
Pipeline generator orchestrating all phases.

1. Load: parse the schema graph into the registries
2. Resolve: classify every simple type
3. Merge + emit: fold same-named complex types and build the IR
4. Render: turn each artifact into C# source
5. Write: one file per artifact in the output directory
"""

from __future__ import annotations

from pathlib import Path

from ..logger import logger
from .analyzer.emitter import ModelEmitter
from .analyzer.ir_nodes import IR
from .analyzer.loader import SchemaGraphLoader
from .analyzer.name_resolver import NameResolver
from .analyzer.registry import GenerationContext
from .analyzer.type_resolver import SimpleTypeResolver
from .backends.csharp_backend import CSharpBackend
from .config import CodeGeneratorConfig
from .merger.type_merger import StructuralTypeMerger
from .output.writer import OutputWriter


class PipelineGenerator:
    """Generates code from a set of XML schema documents."""

    def __init__(
        self,
        path: Path | str,
        config: CodeGeneratorConfig | None = None,
        command_line: str = "xsd_to_code",
    ):
        """
        Initialize the generator.

        Args:
            path: A schema file or a directory of schema files
            config: Code generation configuration
            command_line: Command line recorded in the generation comment
        """
        self.path = Path(path)
        self.config = config or CodeGeneratorConfig()
        self.names = NameResolver()
        self.backend = CSharpBackend(self.config, self.names, command_line)

        self.context: GenerationContext | None = None
        self.ir: IR | None = None

    def load(self) -> GenerationContext:
        """Load the schema graph into a new generation context."""
        context = GenerationContext()
        SchemaGraphLoader(context).load(self.path, recurse=self.config.recurse)
        logger.info(
            "Loaded %d schema(s): %d complex type name(s), %d simple type name(s), %d global element(s)",
            len(context.schemas),
            len(context.registry.structural_types),
            len(context.registry.scalar_types),
            len(context.registry.global_elements),
        )
        self.context = context
        return context

    def build_ir(self) -> IR:
        """Resolve, merge and emit the loaded schemas (loading them first if needed)."""
        context = self.context or self.load()
        resolver = SimpleTypeResolver(context)
        resolver.build_table()
        merger = StructuralTypeMerger(context)
        self.ir = ModelEmitter(context, resolver, merger, self.names).emit()
        return self.ir

    def render(self) -> dict[str, str]:
        """
        Render every artifact.

        Returns:
            File name -> source code, enums first then classes
        """
        ir = self.ir or self.build_ir()
        files: dict[str, str] = {}
        for artifact in ir.artifacts:
            file_name = self.backend.file_name(artifact)
            if file_name in files:
                logger.warning("Artifact %s overwrites an artifact with the same file name", file_name)
            files[file_name] = self.backend.render(artifact)
        return files

    def generate(self, output_dir: Path | str) -> list[Path]:
        """
        Run the whole pipeline and write the artifacts.

        Args:
            output_dir: Directory receiving the generated files

        Returns:
            Paths of the written files
        """
        files = self.render()
        writer = OutputWriter(output_dir, clean=self.config.clean_output, atomic=self.config.output.atomic_write)
        written = writer.write_all(files)
        logger.info("Generated %d file(s) in %s", len(written), output_dir)
        return written
