"""Case loading exceptions for case7."""

from .base import Case7Error


class DataIngestionError(Case7Error):
    """Error while loading the case corpus."""

    error_code = "C7_DAT_001"


class CaseParseError(DataIngestionError):
    """A case file could not be read or its frontmatter could not be parsed."""

    error_code = "C7_DAT_002"


class CaseValidationError(DataIngestionError):
    """Case frontmatter does not match the schema."""

    error_code = "C7_DAT_003"
