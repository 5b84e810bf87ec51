"""Ports for the versioned album storage backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from pathlib import Path


@runtime_checkable
class Writer(Protocol):
    """Session-scoped batch of files destined for one repository."""

    def stage(self, source_path: Path, target_name: str) -> bool:
        """Queue ``source_path`` to be stored as ``target_name``; False on failure."""
        ...

    def commit(self) -> bool:
        """Persist every staged file; False on failure."""
        ...


@runtime_checkable
class RepositoryHandle(Protocol):
    """One opened album repository."""

    @property
    def path(self) -> Path: ...

    def list_boundary_timestamps(self) -> Sequence[datetime]: ...

    def create_writer(self) -> Writer: ...


class RepositoryOpener(Protocol):
    """Open the repository rooted at ``path`` or raise ``RepositoryOpenError``."""

    def __call__(self, path: Path) -> RepositoryHandle: ...


__all__ = ["RepositoryHandle", "RepositoryOpener", "Writer"]
