"""Embedding exceptions for case7."""

from .base import Case7Error


class EmbeddingError(Case7Error):
    """Failed to generate embeddings."""

    error_code = "C7_EMB_001"


class EmbeddingAPIError(EmbeddingError):
    """Embedding API returned an error."""

    error_code = "C7_EMB_002"


class EmbeddingRateLimitError(EmbeddingError):
    """Embedding API rate limit exceeded."""

    error_code = "C7_EMB_003"
