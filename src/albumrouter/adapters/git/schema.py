"""Pydantic model of the album metadata document stored in each repository."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALBUM_METADATA_FILENAME: Final[str] = ".raoa.json"


class AlbumMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    autoadd: list[datetime] = Field(default_factory=list)

    @field_validator("autoadd", mode="after")
    @classmethod
    def _assume_utc(cls, value: list[datetime]) -> list[datetime]:
        return [ts if ts.tzinfo is not None else ts.replace(tzinfo=UTC) for ts in value]


__all__ = ["ALBUM_METADATA_FILENAME", "AlbumMetadata"]
