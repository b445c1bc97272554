"""
Utilities Package

Shared error types and logging helpers for the configuration loader.
"""

from .errors import ConfigError, InitializationError
from .logging import get_logger, setup_logging

__all__ = [
    "ConfigError",
    "InitializationError",
    "get_logger",
    "setup_logging",
]
