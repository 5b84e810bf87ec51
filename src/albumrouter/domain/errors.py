"""Exception hierarchy shared by the routing core and its adapters."""

from __future__ import annotations

from pathlib import Path


class AlbumRouterError(RuntimeError):
    """Base class for album routing failures."""


class MetadataExtractionError(AlbumRouterError):
    """Raised when a file cannot be read or classified."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class RepositoryOpenError(AlbumRouterError):
    """Raised when a repository-marker directory is not a usable repository."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class RepositoryDiscoveryError(AlbumRouterError):
    """Raised when repository discovery has to be aborted."""


class RepositoryWriteError(AlbumRouterError):
    """Raised by backends when staging or committing into a repository fails."""


__all__ = [
    "AlbumRouterError",
    "MetadataExtractionError",
    "RepositoryDiscoveryError",
    "RepositoryOpenError",
    "RepositoryWriteError",
]
