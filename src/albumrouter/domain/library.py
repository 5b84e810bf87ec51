"""Album library: discovered repositories plus their routing index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from albumrouter.domain.registry import (
    DEFAULT_MARKER_SUFFIX,
    RepositoryRegistry,
    discover_repositories,
)
from albumrouter.domain.routing import RoutingIndex
from albumrouter.domain.session import ImportSession

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime, tzinfo
    from pathlib import Path

    from albumrouter.domain.ports.metadata import MetadataExtractor
    from albumrouter.domain.ports.repository import RepositoryOpener


@dataclass(frozen=True, slots=True)
class AlbumLibrary:
    """Read-only view of every album below a root, shared by import sessions."""

    repositories: RepositoryRegistry
    index: RoutingIndex

    @classmethod
    def discover(
        cls,
        root: Path,
        *,
        opener: RepositoryOpener,
        marker_suffix: str = DEFAULT_MARKER_SUFFIX,
    ) -> AlbumLibrary:
        registry = discover_repositories(root, opener=opener, marker_suffix=marker_suffix)
        return cls(repositories=registry, index=RoutingIndex.build(registry))

    def album_of(self, timestamp: datetime) -> Path | None:
        return self.index.boundary_for(timestamp)

    def create_session(
        self,
        *,
        extractor: MetadataExtractor,
        content_types: Collection[str],
        timezone: tzinfo,
    ) -> ImportSession:
        return ImportSession(
            repositories=self.repositories,
            index=self.index,
            extractor=extractor,
            content_types=content_types,
            timezone=timezone,
        )


__all__ = ["AlbumLibrary"]
