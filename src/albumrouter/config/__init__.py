"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .git import GitConfig, get_git_config
from .importer import (
    DEFAULT_CONTENT_TYPES,
    DEFAULT_MARKER_SUFFIX,
    ImporterConfig,
    get_importer_config,
    parse_content_types,
    parse_timezone,
    system_timezone,
)
from .logging import configure_logging

__all__ = [
    "DEFAULT_CONTENT_TYPES",
    "DEFAULT_MARKER_SUFFIX",
    "ConfigurationError",
    "GitConfig",
    "ImporterConfig",
    "MissingConfigurationError",
    "configure_logging",
    "get_git_config",
    "get_importer_config",
    "optional_env_var",
    "parse_content_types",
    "parse_timezone",
    "system_timezone",
    "require_env_vars",
]
