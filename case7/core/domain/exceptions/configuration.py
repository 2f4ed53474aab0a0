"""Configuration-related exceptions for case7."""

from .base import Case7Error


class ConfigurationError(Case7Error):
    """Configuration or environment variable errors.

    Raised at startup; the service must not serve traffic after one.
    """

    error_code = "C7_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """Required API key or endpoint is not configured."""

    error_code = "C7_CFG_002"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "C7_CFG_003"
