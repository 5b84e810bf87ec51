"""Value types used by the routing core."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import tzinfo
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class BoundaryEntry:
    """An autoadd boundary declared by one repository."""

    timestamp: datetime
    repository: Path


@dataclass(frozen=True, slots=True)
class MediaMetadata:
    """Classification of a candidate file."""

    content_type: str | None
    created_at: datetime | None = None


def ensure_aware(value: datetime, *, assume: tzinfo = UTC) -> datetime:
    """Attach ``assume`` to naive datetimes, leave aware ones untouched."""

    if value.tzinfo is None:
        return value.replace(tzinfo=assume)
    return value


__all__ = ["BoundaryEntry", "MediaMetadata", "ensure_aware"]
