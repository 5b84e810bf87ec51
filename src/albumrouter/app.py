"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from albumrouter.adapters.git import bare_git_opener
from albumrouter.adapters.media import MediaMetadataExtractor
from albumrouter.config import get_git_config, get_importer_config
from albumrouter.domain.library import AlbumLibrary

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from albumrouter.config import ImporterConfig
    from albumrouter.domain.ports.metadata import MetadataExtractor
    from albumrouter.domain.types import BoundaryEntry


log = getLogger(__name__)


@dataclass(slots=True)
class ImportDirectoryResult:
    """Outcome of importing one incoming directory."""

    seen: int = 0
    imported: int = 0
    skipped: int = 0
    committed: bool = True
    deleted: int = 0
    imported_files: list[Path] = field(default_factory=list)


def open_library(config: ImporterConfig) -> AlbumLibrary:
    """Discover the albums configured by ``config`` using the bare git backend."""

    return AlbumLibrary.discover(
        config.repository_root,
        opener=bare_git_opener(get_git_config()),
        marker_suffix=config.marker_suffix,
    )


def iter_incoming_files(source: Path) -> Iterator[Path]:
    """Yield regular, non-hidden files below ``source`` in a stable order."""

    for path in sorted(source.rglob("*")):
        relative = path.relative_to(source)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file():
            yield path


def import_directory(
    source: Path,
    *,
    config: ImporterConfig | None = None,
    library: AlbumLibrary | None = None,
    extractor: MetadataExtractor | None = None,
    delete_imported: bool = False,
) -> ImportDirectoryResult:
    """Import every file below ``source`` and commit all albums once."""

    effective_config = config or get_importer_config()
    effective_library = library or open_library(effective_config)
    effective_extractor = extractor or MediaMetadataExtractor(timezone=effective_config.timezone)
    log.info(
        "Starting import: source=%s, albums=%s, boundaries=%s",
        source,
        len(effective_library.repositories),
        len(effective_library.index),
    )

    session = effective_library.create_session(
        extractor=effective_extractor,
        content_types=effective_config.content_types,
        timezone=effective_config.timezone,
    )
    result = ImportDirectoryResult()
    for path in iter_incoming_files(source):
        result.seen += 1
        if session.import_file(path):
            result.imported += 1
            result.imported_files.append(path)
        else:
            result.skipped += 1

    result.committed = session.commit_all()

    if delete_imported and result.committed:
        for path in result.imported_files:
            try:
                path.unlink()
            except OSError as exc:
                log.warning("Cannot delete imported file %s: %s", path, exc)
                continue
            result.deleted += 1

    log.info(
        "Finished import: seen=%s, imported=%s, skipped=%s, committed=%s, deleted=%s",
        result.seen,
        result.imported,
        result.skipped,
        result.committed,
        result.deleted,
    )
    return result


def list_albums(library: AlbumLibrary) -> list[BoundaryEntry]:
    """Return every autoadd boundary in routing order."""

    return library.index.entries()


__all__ = [
    "ImportDirectoryResult",
    "import_directory",
    "iter_incoming_files",
    "list_albums",
    "open_library",
]
