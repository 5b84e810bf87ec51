"""Per-run import session: classify, route and batch incoming files."""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING

from albumrouter.domain.errors import MetadataExtractionError
from albumrouter.domain.naming import target_filename
from albumrouter.domain.types import ensure_aware

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping
    from datetime import tzinfo
    from pathlib import Path

    from albumrouter.domain.ports.metadata import MetadataExtractor
    from albumrouter.domain.ports.repository import RepositoryHandle, Writer
    from albumrouter.domain.routing import RoutingIndex

log = getLogger(__name__)


class ImportSession:
    """Unit of work spanning ``import_file`` calls and one ``commit_all``.

    Writers are created lazily, one per repository, and reused for every file
    routed to that repository. ``import_file`` and ``commit_all`` share one lock
    so a commit never overlaps an in-flight import.
    """

    def __init__(
        self,
        *,
        repositories: Mapping[Path, RepositoryHandle],
        index: RoutingIndex,
        extractor: MetadataExtractor,
        content_types: Collection[str],
        timezone: tzinfo,
    ) -> None:
        self._repositories = repositories
        self._index = index
        self._extractor = extractor
        self._content_types = frozenset(content_types)
        self._timezone = timezone
        self._writers: dict[Path, Writer] = {}
        self._lock = threading.Lock()

    @property
    def pending_repositories(self) -> tuple[Path, ...]:
        """Repositories that received at least one file since the last commit."""

        with self._lock:
            return tuple(self._writers)

    def import_file(self, path: Path) -> bool:
        """Stage ``path`` into its repository; False when the file was not imported."""

        with self._lock:
            try:
                metadata = self._extractor.extract(path)
            except MetadataExtractionError as exc:
                log.warning("Cannot access file %s: %s", path, exc)
                return False
            except Exception:  # noqa: BLE001
                log.warning("Cannot read metadata of %s", path, exc_info=True)
                return False

            if metadata.content_type not in self._content_types:
                log.info("Unsupported content type %s: %s", metadata.content_type, path)
                return False
            if metadata.created_at is None:
                log.info("No creation timestamp: %s", path)
                return False

            # naive camera times are wall-clock times in the configured zone
            created_at = ensure_aware(metadata.created_at, assume=self._timezone)
            target_name = target_filename(created_at, path, timezone=self._timezone)
            repository = self._index.boundary_for(created_at)
            if repository is None:
                log.info("No album for %s created at %s", path, created_at.isoformat())
                return False

            log.info("Import %s to %s as %s", path, repository, target_name)
            try:
                return self._writer_for(repository).stage(path, target_name)
            except Exception:  # noqa: BLE001
                log.warning("Cannot import file %s", path, exc_info=True)
                return False

    def commit_all(self) -> bool:
        """Commit every pending writer and report whether all of them succeeded."""

        with self._lock:
            try:
                results: list[bool] = []
                for repository, writer in self._writers.items():
                    results.append(self._commit_one(repository, writer))
                return all(results)
            finally:
                self._writers.clear()

    def _writer_for(self, repository: Path) -> Writer:
        writer = self._writers.get(repository)
        if writer is None:
            writer = self._repositories[repository].create_writer()
            self._writers[repository] = writer
        return writer

    @staticmethod
    def _commit_one(repository: Path, writer: Writer) -> bool:
        try:
            committed = writer.commit()
        except Exception:  # noqa: BLE001
            log.exception("Commit to %s failed", repository)
            return False
        if not committed:
            log.error("Commit to %s reported failure", repository)
        return committed


__all__ = ["ImportSession"]
