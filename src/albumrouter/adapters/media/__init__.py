"""Media file classification."""

from __future__ import annotations

from .extractor import (
    EXIF_DATE_TAGS,
    MediaMetadataExtractor,
    parse_exif_datetime,
    parse_mediainfo_datetime,
)

__all__ = [
    "EXIF_DATE_TAGS",
    "MediaMetadataExtractor",
    "parse_exif_datetime",
    "parse_mediainfo_datetime",
]
