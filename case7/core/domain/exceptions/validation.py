"""Request validation exceptions for case7."""

from .base import Case7Error


class ValidationError(Case7Error):
    """Input validation failed."""

    error_code = "C7_VAL_001"


class InvalidParameterError(ValidationError):
    """A tool parameter is missing, malformed or out of range."""

    error_code = "C7_VAL_002"


class UnknownToolError(ValidationError):
    """The requested tool name is not registered."""

    error_code = "C7_VAL_003"
