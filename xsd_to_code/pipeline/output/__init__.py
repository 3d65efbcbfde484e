"""
Output module: writes rendered artifacts to disk.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .writer import OutputWriter

__all__ = [
    "AtomicWriter",
    "OutputWriter",
]
