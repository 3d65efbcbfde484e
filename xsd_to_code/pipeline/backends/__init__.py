"""
Code generation backends.

Contains language-specific renderers for IR artifacts.
"""

from __future__ import annotations

from .base import CodeBackend
from .csharp_backend import CSharpBackend

__all__ = [
    "CodeBackend",
    "CSharpBackend",
]
