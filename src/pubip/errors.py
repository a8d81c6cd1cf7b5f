"""Custom exceptions for public IP lookups."""


class PubipError(Exception):
    """Base exception for this project."""


class ConfigError(PubipError):
    """Raised when runtime configuration or a catalog entry is invalid."""
