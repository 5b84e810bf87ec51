"""Port for classifying incoming media files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from albumrouter.domain.types import MediaMetadata


@runtime_checkable
class MetadataExtractor(Protocol):
    """Detect content type and creation time of a file.

    Implementations raise ``MetadataExtractionError`` for unreadable or
    malformed input.
    """

    def extract(self, path: Path) -> MediaMetadata: ...


__all__ = ["MetadataExtractor"]
