"""
Schema graph loader.

Discovers schema documents, follows import/include/redefine directives
and registers every loaded document into the generation context.

Loading order is part of the output contract: files of a directory are
visited in lexicographic path order and directives are followed
depth-first, before the next sibling directive.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from ...logger import logger
from ..exceptions import MissingReferenceError
from ..schema_ast.nodes import ReferenceDirective, Schema
from ..schema_ast.parser import XsdParser
from .registry import GenerationContext


class SchemaGraphLoader:
    """Loads a graph of schema documents into a GenerationContext."""

    SCHEMA_SUFFIX = ".xsd"

    def __init__(self, context: GenerationContext, parser: XsdParser | None = None):
        """
        Initialize the loader.

        Args:
            context: Context receiving the loaded schemas and declarations
            parser: Parser used for every document
        """
        self.context = context
        self.parser = parser or XsdParser()

        # Resolved absolute paths of every document already loaded
        self.visited: set[Path] = set()

    def discover(self, root: Path | str, recurse: bool = False) -> list[Path]:
        """
        List the schema files under a location.

        Args:
            root: A schema file or a directory
            recurse: Whether to descend into sub-directories

        Returns:
            Schema file paths in lexicographic order
        """
        root = Path(root)
        if root.is_file():
            return [root]

        candidates = root.rglob("*") if recurse else root.glob("*")
        return sorted(
            path for path in candidates if path.is_file() and path.suffix.lower() == self.SCHEMA_SUFFIX
        )

    def load(self, root: Path | str, recurse: bool = False) -> list[Schema]:
        """
        Load every schema under a location, with the documents they reference.

        Args:
            root: A schema file or a directory
            recurse: Whether to descend into sub-directories

        Returns:
            All loaded schemas, in load order

        Raises:
            SchemaParseError: If any loaded document is malformed
        """
        paths = self.discover(root, recurse)
        logger.info("Found %d schema file(s) in %s", len(paths), root)
        for path in paths:
            self.load_file(path)
        return list(self.context.schemas)

    def load_file(self, path: Path | str) -> Schema | None:
        """
        Load one document, then the documents it references, depth-first.

        Returns:
            The loaded schema, or None if the document was already loaded
        """
        path = Path(path).resolve()
        if path in self.visited:
            logger.debug("Schema %s already loaded", path)
            return None
        self.visited.add(path)

        logger.info("Loading schema %s", path)
        schema = self.parser.parse(path)
        self.context.register_schema(schema)

        for directive in schema.directives:
            self._load_directive(schema, directive)

        return schema

    def _load_directive(self, schema: Schema, directive: ReferenceDirective) -> None:
        if not directive.location:
            logger.debug("%s: %s of %s has no schemaLocation", schema.source, directive.kind.value, directive.namespace)
            return

        try:
            target = self.resolve_location(directive.location, schema.source)
        except MissingReferenceError as err:
            logger.warning("%s, skipped", err)
            return

        self.load_file(target)

    def resolve_location(self, location: str, referrer: Path) -> Path:
        """
        Resolve a schemaLocation relative to the referencing document.

        Raises:
            MissingReferenceError: If the location is remote or no such file exists
        """
        if urlsplit(location).scheme not in ("", "file"):
            raise MissingReferenceError(location, referrer)

        target = Path(urlsplit(location).path) if location.startswith("file:") else Path(location)
        if not target.is_absolute():
            target = referrer.parent / target
        if not target.is_file():
            raise MissingReferenceError(location, referrer)
        return target.resolve()
