"""Exceptions raised by force_update."""


class ForceUpdateError(Exception):
    """Base exception for all force_update errors."""


class VersionParseError(ForceUpdateError, ValueError):
    """Raised when a string is not a valid semantic version.

    The version gate absorbs this error and falls back to "no update needed".
    """


class FetchError(ForceUpdateError):
    """Raised when the required version or package metadata cannot be read."""


class PromptError(ForceUpdateError):
    """Raised when showing the update prompt fails."""


class StoreOpenError(ForceUpdateError):
    """Raised when opening the store listing fails."""


class ConfigError(ForceUpdateError):
    """Raised when the configuration file is invalid."""
