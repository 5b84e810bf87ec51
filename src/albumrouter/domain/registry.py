"""Discovery of album repositories below a root directory."""

from __future__ import annotations

import os
from collections.abc import Mapping
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from albumrouter.domain.errors import RepositoryDiscoveryError, RepositoryOpenError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from albumrouter.domain.ports.repository import RepositoryHandle, RepositoryOpener

log = getLogger(__name__)

DEFAULT_MARKER_SUFFIX = ".git"


class RepositoryRegistry(Mapping[Path, "RepositoryHandle"]):
    """Read-only mapping of repository path to handle, in discovery order."""

    def __init__(self, handles: Mapping[Path, RepositoryHandle] | None = None) -> None:
        self._handles: dict[Path, RepositoryHandle] = dict(handles or {})

    def __getitem__(self, key: Path) -> RepositoryHandle:
        return self._handles[key]

    def __iter__(self) -> Iterator[Path]:
        return iter(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def __repr__(self) -> str:
        return f"RepositoryRegistry({list(self._handles)!r})"


def _list_subdirectories(directory: Path) -> list[Path] | None:
    try:
        with os.scandir(directory) as entries:
            return sorted(Path(entry.path) for entry in entries if entry.is_dir())
    except OSError as exc:
        log.warning("Cannot access directory %s: %s", directory, exc)
        return None


def discover_repositories(
    root: Path,
    *,
    opener: RepositoryOpener,
    marker_suffix: str = DEFAULT_MARKER_SUFFIX,
) -> RepositoryRegistry:
    """Open every repository found below ``root``.

    Directories whose name ends with ``marker_suffix`` are repository roots and
    are not descended into. Unlistable directories are skipped; a repository
    root that fails to open aborts the whole discovery.
    """

    handles: dict[Path, RepositoryHandle] = {}
    visited: set[Path] = set()
    # stack of directories still to list; children are pushed in reverse so
    # that they pop in sorted order
    pending: list[Path] = [root]

    while pending:
        directory = pending.pop()
        resolved = directory.resolve()
        if resolved in visited:
            continue
        visited.add(resolved)

        children = _list_subdirectories(directory)
        if children is None:
            continue

        descend: list[Path] = []
        for child in children:
            if not child.name.endswith(marker_suffix):
                descend.append(child)
                continue
            try:
                handles[child] = opener(child)
            except RepositoryOpenError as exc:
                raise RepositoryDiscoveryError(f"Cannot open repository of {child}") from exc
            log.debug("Discovered repository %s", child)

        pending.extend(reversed(descend))

    log.info("Discovered %s repositories below %s", len(handles), root)
    return RepositoryRegistry(handles)


__all__ = ["DEFAULT_MARKER_SUFFIX", "RepositoryRegistry", "discover_repositories"]
