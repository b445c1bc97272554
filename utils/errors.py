"""
Custom exception classes for the service-binding configuration loader.

These provide a hierarchy of typed exceptions for better error handling.
"""


class ConfigError(Exception):
    """Base exception for configuration-related errors."""

    pass


class InitializationError(ConfigError):
    """Raised while extracting settings from the service-binding document.

    ``path`` names the location in the document (or the environment
    variable) that could not be read, e.g. ``predix-asset[0].credentials``.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
