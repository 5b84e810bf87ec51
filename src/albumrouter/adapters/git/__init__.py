"""Bare git repositories as album storage."""

from __future__ import annotations

from .client import GitClient, GitCommandError
from .repository import BareGitRepository, GitWriter, bare_git_opener
from .schema import ALBUM_METADATA_FILENAME, AlbumMetadata

__all__ = [
    "ALBUM_METADATA_FILENAME",
    "AlbumMetadata",
    "BareGitRepository",
    "GitClient",
    "GitCommandError",
    "GitWriter",
    "bare_git_opener",
]
