"""Reusable fakes for album routing tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from albumrouter.domain.errors import MetadataExtractionError, RepositoryOpenError
from albumrouter.domain.types import MediaMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from pathlib import Path


def utc(
    year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0
) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=UTC)


@dataclass(slots=True)
class FakeWriter:
    stage_result: bool = True
    commit_result: bool = True
    stage_error: Exception | None = None
    commit_error: Exception | None = None
    staged: list[tuple[Path, str]] = field(default_factory=list)
    commit_calls: int = 0

    def stage(self, source_path: Path, target_name: str) -> bool:
        if self.stage_error is not None:
            raise self.stage_error
        self.staged.append((source_path, target_name))
        return self.stage_result

    def commit(self) -> bool:
        self.commit_calls += 1
        if self.commit_error is not None:
            raise self.commit_error
        return self.commit_result


@dataclass(slots=True)
class FakeRepository:
    path: Path
    boundaries: Sequence[datetime] = ()
    boundary_error: Exception | None = None
    writer_factory: type[FakeWriter] = FakeWriter
    writers: list[FakeWriter] = field(default_factory=list)

    def list_boundary_timestamps(self) -> Sequence[datetime]:
        if self.boundary_error is not None:
            raise self.boundary_error
        return self.boundaries

    def create_writer(self) -> FakeWriter:
        writer = self.writer_factory()
        self.writers.append(writer)
        return writer


@dataclass(slots=True)
class FakeExtractor:
    """Return canned metadata per file name; unknown names raise an extraction error."""

    results: Mapping[str, MediaMetadata] = field(default_factory=dict)
    calls: list[Path] = field(default_factory=list)

    def extract(self, path: Path) -> MediaMetadata:
        self.calls.append(path)
        try:
            return self.results[path.name]
        except KeyError:
            raise MetadataExtractionError(f"Cannot parse {path}", path=path) from None


@dataclass(slots=True)
class RecordingOpener:
    """Opener returning ``FakeRepository`` handles, optionally failing for some names."""

    boundaries: Mapping[str, Sequence[datetime]] = field(default_factory=dict)
    broken: Iterable[str] = ()
    opened: list[Path] = field(default_factory=list)

    def __call__(self, path: Path) -> FakeRepository:
        if path.name in set(self.broken):
            raise RepositoryOpenError(f"{path} is malformed", path=path)
        self.opened.append(path)
        return FakeRepository(path=path, boundaries=tuple(self.boundaries.get(path.name, ())))


def jpeg(created_at: datetime | None) -> MediaMetadata:
    return MediaMetadata(content_type="image/jpeg", created_at=created_at)
