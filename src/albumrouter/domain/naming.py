"""Target filename generation for imported files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from albumrouter.domain.types import ensure_aware

if TYPE_CHECKING:
    from datetime import datetime, tzinfo

TIMESTAMP_PREFIX_FORMAT: Final[str] = "%Y-%m-%d-%H-%M-%S"


def target_filename(created_at: datetime, source: Path | str, *, timezone: tzinfo) -> str:
    """Prefix the base name of ``source`` with a sortable local timestamp.

    Naive ``created_at`` values are taken to be in ``timezone`` already.
    """

    local = ensure_aware(created_at, assume=timezone).astimezone(timezone)
    return f"{local.strftime(TIMESTAMP_PREFIX_FORMAT)}-{Path(source).name}"


__all__ = ["TIMESTAMP_PREFIX_FORMAT", "target_filename"]
