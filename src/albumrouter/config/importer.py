"""Configuration of the import engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import tzinfo

REPOSITORY_ROOT_VAR: Final[str] = "ALBUMROUTER_REPOSITORY_ROOT"
MARKER_SUFFIX_VAR: Final[str] = "ALBUMROUTER_MARKER_SUFFIX"
CONTENT_TYPES_VAR: Final[str] = "ALBUMROUTER_CONTENT_TYPES"
TIMEZONE_VAR: Final[str] = "ALBUMROUTER_TIMEZONE"

DEFAULT_MARKER_SUFFIX: Final[str] = ".git"
DEFAULT_CONTENT_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/tiff", "application/mp4", "video/mp4"}
)


def system_timezone() -> tzinfo:
    """Return the zone of the running system."""

    zone = datetime.now().astimezone().tzinfo
    if zone is None:  # pragma: no cover - astimezone always attaches a zone
        raise ConfigurationError("Cannot determine the system time zone")
    return zone


def parse_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown time zone: {name}") from exc


def parse_content_types(value: str | Iterable[str]) -> frozenset[str]:
    items = value.split(",") if isinstance(value, str) else value
    types = frozenset(item.strip().lower() for item in items if item.strip())
    if not types:
        raise ConfigurationError("At least one importable content type is required")
    return types


@dataclass(frozen=True, slots=True)
class ImporterConfig:
    """Everything the routing engine needs to know about its environment."""

    repository_root: Path
    marker_suffix: str = DEFAULT_MARKER_SUFFIX
    content_types: frozenset[str] = DEFAULT_CONTENT_TYPES
    timezone: tzinfo = field(default_factory=system_timezone)

    def __post_init__(self) -> None:
        if not self.marker_suffix.strip():
            raise ConfigurationError("Repository marker suffix must not be blank")

    def with_overrides(
        self,
        *,
        repository_root: Path | None = None,
        timezone: tzinfo | None = None,
    ) -> ImporterConfig:
        """Return a copy replacing only the values that were given."""

        return replace(
            self,
            repository_root=repository_root or self.repository_root,
            timezone=timezone or self.timezone,
        )


def get_importer_config(*, repository_root: Path | None = None) -> ImporterConfig:
    """Build the importer configuration from ``ALBUMROUTER_*`` variables.

    ``repository_root`` takes precedence over the environment, which makes the
    root variable optional when the caller already knows it.
    """

    if repository_root is None:
        values = require_env_vars((REPOSITORY_ROOT_VAR,))
        repository_root = Path(values[REPOSITORY_ROOT_VAR]).expanduser()

    suffix = optional_env_var(MARKER_SUFFIX_VAR) or DEFAULT_MARKER_SUFFIX
    content_types = optional_env_var(CONTENT_TYPES_VAR)
    zone_name = optional_env_var(TIMEZONE_VAR)

    return ImporterConfig(
        repository_root=repository_root,
        marker_suffix=suffix,
        content_types=(
            parse_content_types(content_types) if content_types else DEFAULT_CONTENT_TYPES
        ),
        timezone=parse_timezone(zone_name) if zone_name else system_timezone(),
    )
