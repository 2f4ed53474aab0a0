"""Configuration for case7: settings and logging setup."""

from .logging import JSONExceptionFormatter, get_logger, setup_logging
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
    "JSONExceptionFormatter",
    "get_logger",
    "setup_logging",
]
