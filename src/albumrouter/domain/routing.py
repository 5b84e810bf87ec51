"""Time-ordered index routing timestamps to repositories."""

from __future__ import annotations

from bisect import bisect_right
from logging import getLogger
from typing import TYPE_CHECKING

from albumrouter.domain.types import BoundaryEntry, ensure_aware

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime
    from pathlib import Path

    from albumrouter.domain.ports.repository import RepositoryHandle

log = getLogger(__name__)


class RoutingIndex:
    """Ordered mapping of boundary timestamp to owning repository.

    A timestamp belongs to the repository with the greatest boundary that is
    not later than the timestamp. When two repositories declare the exact same
    boundary the entry inserted last wins.
    """

    __slots__ = ("_keys", "_owners")

    def __init__(self, entries: Iterable[BoundaryEntry] = ()) -> None:
        self._owners: dict[datetime, Path] = {}
        for entry in entries:
            self._owners[ensure_aware(entry.timestamp)] = entry.repository
        self._keys: list[datetime] = sorted(self._owners)

    @classmethod
    def build(cls, repositories: Mapping[Path, RepositoryHandle]) -> RoutingIndex:
        """Collect the boundaries of every repository, in iteration order."""

        entries: list[BoundaryEntry] = []
        for path, handle in repositories.items():
            try:
                timestamps = list(handle.list_boundary_timestamps())
            except Exception:  # noqa: BLE001
                log.warning("Cannot read autoadd boundaries of %s", path, exc_info=True)
                continue
            if not timestamps:
                log.info("Repository %s declares no autoadd boundaries", path)
                continue
            entries.extend(BoundaryEntry(timestamp=ts, repository=path) for ts in timestamps)
        return cls(entries)

    def boundary_for(self, timestamp: datetime) -> Path | None:
        """Return the repository owning ``timestamp`` or ``None`` if unrouted."""

        position = bisect_right(self._keys, ensure_aware(timestamp))
        if position == 0:
            return None
        return self._owners[self._keys[position - 1]]

    def entries(self) -> list[BoundaryEntry]:
        return [BoundaryEntry(timestamp=key, repository=self._owners[key]) for key in self._keys]

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"RoutingIndex(boundaries={len(self._keys)})"


__all__ = ["RoutingIndex"]
