"""Domain port definitions for adapters."""

from __future__ import annotations

from .metadata import MetadataExtractor
from .repository import RepositoryHandle, RepositoryOpener, Writer

__all__ = [
    "MetadataExtractor",
    "RepositoryHandle",
    "RepositoryOpener",
    "Writer",
]
