"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        atomic_write: Whether to use atomic file writes
        file_extension: Extension of the generated artifact files
    """

    atomic_write: bool = True
    file_extension: str = "cs"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Namespace wrapping every emitted artifact
    target_namespace: str = "Generated"

    # Whether to recurse into sub-directories when the input is a directory
    recurse: bool = False

    # Delete the files directly inside the output directory before writing
    clean_output: bool = False

    # Accepted for command-line compatibility, no effect on emission
    pascal_case: bool = False
    nullable: bool = False

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    # Extra using statements added to every C# file
    csharp_additional_usings: list[str] = field(default_factory=list)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                config.output = OutputConfig(
                    atomic_write=v.get("atomic_write", True),
                    file_extension=v.get("file_extension", "cs"),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "target_namespace": self.target_namespace,
            "recurse": self.recurse,
            "clean_output": self.clean_output,
            "pascal_case": self.pascal_case,
            "nullable": self.nullable,
            "add_generation_comment": self.add_generation_comment,
            "csharp_additional_usings": self.csharp_additional_usings,
            "output": {
                "atomic_write": self.output.atomic_write,
                "file_extension": self.output.file_extension,
            },
        }
