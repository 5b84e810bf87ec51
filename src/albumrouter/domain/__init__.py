"""Routing and batched-import engine."""

from __future__ import annotations

from .errors import (
    AlbumRouterError,
    MetadataExtractionError,
    RepositoryDiscoveryError,
    RepositoryOpenError,
    RepositoryWriteError,
)
from .library import AlbumLibrary
from .naming import target_filename
from .registry import DEFAULT_MARKER_SUFFIX, RepositoryRegistry, discover_repositories
from .routing import RoutingIndex
from .session import ImportSession
from .types import BoundaryEntry, MediaMetadata

__all__ = [
    "DEFAULT_MARKER_SUFFIX",
    "AlbumLibrary",
    "AlbumRouterError",
    "BoundaryEntry",
    "ImportSession",
    "MediaMetadata",
    "MetadataExtractionError",
    "RepositoryDiscoveryError",
    "RepositoryOpenError",
    "RepositoryRegistry",
    "RepositoryWriteError",
    "RoutingIndex",
    "discover_repositories",
    "target_filename",
]
