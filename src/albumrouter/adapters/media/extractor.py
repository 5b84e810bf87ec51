"""Content type and creation time extraction for photos and videos."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

import exifread
from PIL import Image, UnidentifiedImageError
from pymediainfo import MediaInfo

from albumrouter.config.importer import system_timezone
from albumrouter.domain.errors import MetadataExtractionError
from albumrouter.domain.types import MediaMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import tzinfo
    from pathlib import Path

log = getLogger(__name__)

EXIF_DATE_TAGS: Final[tuple[str, ...]] = (
    "EXIF DateTimeOriginal",
    "EXIF DateTimeDigitized",
    "Image DateTime",
)
MEDIAINFO_DATE_FIELDS: Final[tuple[str, ...]] = (
    "encoded_date",
    "tagged_date",
    "recorded_date",
)
_EXIF_FORMAT: Final[str] = "%Y:%m:%d %H:%M:%S"
_ZERO_EXIF_DATE: Final[str] = "0000:00:00 00:00:00"


def parse_exif_datetime(value: object, *, timezone: tzinfo) -> datetime | None:
    """Parse ``YYYY:MM:DD HH:MM:SS`` EXIF values, which are naive local times."""

    text = str(value).strip().rstrip("\x00")
    if not text or text == _ZERO_EXIF_DATE:
        return None
    try:
        parsed = datetime.strptime(text[:19], _EXIF_FORMAT)  # noqa: DTZ007
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone)


def parse_mediainfo_datetime(value: str | None) -> datetime | None:
    """Parse MediaInfo dates such as ``UTC 2023-05-01 08:20:30`` or ``2023-05-01 08:20:30 UTC``."""

    if not value:
        return None
    text = value.strip()
    if text.startswith("UTC "):
        text = text[4:]
    if text.endswith(" UTC"):
        text = text[:-4]
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def _first_exif_date(tags: dict[str, object], *, timezone: tzinfo) -> datetime | None:
    for tag in EXIF_DATE_TAGS:
        if tag not in tags:
            continue
        parsed = parse_exif_datetime(tags[tag], timezone=timezone)
        if parsed is not None:
            return parsed
    return None


def _first_mediainfo_date(track: object, fields: Iterable[str]) -> datetime | None:
    for name in fields:
        parsed = parse_mediainfo_datetime(getattr(track, name, None))
        if parsed is not None:
            return parsed
    return None


@dataclass(slots=True)
class MediaMetadataExtractor:
    """``MetadataExtractor`` reading EXIF from images and container tags from videos."""

    timezone: tzinfo = field(default_factory=system_timezone)

    def extract(self, path: Path) -> MediaMetadata:
        if not path.is_file():
            raise MetadataExtractionError(f"Not a regular file: {path}", path=path)
        image_type = self._image_content_type(path)
        if image_type is not None:
            return MediaMetadata(content_type=image_type, created_at=self._image_created_at(path))
        return self._extract_media(path)

    @staticmethod
    def _image_content_type(path: Path) -> str | None:
        try:
            with Image.open(path) as image:
                image_format = image.format
        except UnidentifiedImageError:
            return None
        except (OSError, Image.DecompressionBombError) as exc:
            raise MetadataExtractionError(f"Cannot read {path}: {exc}", path=path) from exc
        if image_format is None:
            return None
        return Image.MIME.get(image_format.upper(), f"image/{image_format.lower()}")

    def _image_created_at(self, path: Path) -> datetime | None:
        # exifread raises assorted parser errors on corrupt EXIF blocks
        try:
            with path.open("rb") as handle:
                tags = exifread.process_file(handle, details=False)
        except Exception as exc:  # noqa: BLE001
            raise MetadataExtractionError(f"Cannot read EXIF of {path}: {exc}", path=path) from exc
        if not tags:
            log.debug("No EXIF tags found for %s", path)
            return None
        return _first_exif_date(tags, timezone=self.timezone)

    @staticmethod
    def _extract_media(path: Path) -> MediaMetadata:
        try:
            media_info = MediaInfo.parse(path)
        except (OSError, RuntimeError) as exc:
            raise MetadataExtractionError(f"Cannot parse {path}: {exc}", path=path) from exc

        general = next(
            (track for track in media_info.tracks if track.track_type == "General"), None
        )
        if general is None:
            return MediaMetadata(content_type=None)
        return MediaMetadata(
            content_type=getattr(general, "internet_media_type", None),
            created_at=_first_mediainfo_date(general, MEDIAINFO_DATE_FIELDS),
        )


__all__ = [
    "EXIF_DATE_TAGS",
    "MediaMetadataExtractor",
    "parse_exif_datetime",
    "parse_mediainfo_datetime",
]
