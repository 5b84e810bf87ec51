"""Errors raised while reading ``ALBUMROUTER_*`` settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, e.g. an unknown time zone."""


class MissingConfigurationError(ConfigurationError):
    """A required setting such as the repository root is unset or blank."""
