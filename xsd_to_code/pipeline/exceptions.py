"""
Exceptions raised by the XSD to code pipeline.
"""

from __future__ import annotations

from pathlib import Path


class XsdToCodeError(Exception):
    """Base class for all pipeline errors."""

    pass


class SchemaParseError(XsdToCodeError):
    """Raised when a schema document cannot be parsed.

    This is fatal: a malformed top-level or referenced document aborts
    the whole run.
    """

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class MissingReferenceError(XsdToCodeError):
    """Raised when an import/include target does not exist.

    The loader recovers from this error: the schema graph proceeds
    without the missing document.
    """

    def __init__(self, location: str, referrer: Path):
        self.location = location
        self.referrer = referrer
        super().__init__(f"{referrer}: referenced schema {location!r} not found")
