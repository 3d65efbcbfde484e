"""
Output writer for generated artifacts.
"""

from __future__ import annotations

from pathlib import Path

from ...logger import logger
from .atomic_writer import AtomicWriter


class OutputWriter:
    """Writes artifact files into an output directory."""

    def __init__(self, output_dir: Path | str, clean: bool = False, atomic: bool = True):
        """
        Initialize the writer.

        Args:
            output_dir: Directory receiving one file per artifact
            clean: Delete the files directly inside output_dir before writing
            atomic: Whether to write each file atomically
        """
        self.output_dir = Path(output_dir)
        self.clean = clean
        self.atomic_writer = AtomicWriter() if atomic else None

    def prepare(self) -> list[Path]:
        """
        Create the output directory and, if requested, clean it.

        Cleaning is not recursive: sub-directories and their content are kept.

        Returns:
            The deleted files
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        if not self.clean:
            return []

        deleted = []
        for entry in sorted(self.output_dir.iterdir()):
            if entry.is_dir():
                continue
            entry.unlink()
            deleted.append(entry)
        logger.info("Cleaned %d file(s) from %s", len(deleted), self.output_dir)
        return deleted

    def write(self, file_name: str, content: str) -> Path:
        """Write one artifact file, overwriting any existing file with the same name."""
        path = self.output_dir / file_name
        if self.atomic_writer is not None:
            self.atomic_writer.write(path, content)
        else:
            path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s", path)
        return path

    def write_all(self, files: dict[str, str]) -> list[Path]:
        """Prepare the directory then write every file, in order."""
        self.prepare()
        return [self.write(file_name, content) for file_name, content in files.items()]
