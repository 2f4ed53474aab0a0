"""Custom exception hierarchy for case7.

Each exception includes an error code, the location it was raised from,
an optional cause and JSON serialization for structured logging.

    from case7.core.domain.exceptions import Case7Error, QdrantConnectionError
"""

# Base classes
from .base import Case7Error, ExceptionContext

# Configuration exceptions
from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingAPIKeyError,
)

# Case loading exceptions
from .data_ingestion import (
    CaseParseError,
    CaseValidationError,
    DataIngestionError,
)

# Embedding exceptions
from .embedding import (
    EmbeddingAPIError,
    EmbeddingError,
    EmbeddingRateLimitError,
)

# Validation exceptions
from .validation import (
    InvalidParameterError,
    UnknownToolError,
    ValidationError,
)

# Vector index exceptions
from .vector_store import (
    QdrantConnectionError,
    QdrantQueryError,
    VectorStoreError,
)

__all__ = [
    # Base
    "ExceptionContext",
    "Case7Error",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    "InvalidConfigurationError",
    # Case loading
    "DataIngestionError",
    "CaseParseError",
    "CaseValidationError",
    # Embedding
    "EmbeddingError",
    "EmbeddingAPIError",
    "EmbeddingRateLimitError",
    # Validation
    "ValidationError",
    "InvalidParameterError",
    "UnknownToolError",
    # Vector index
    "VectorStoreError",
    "QdrantConnectionError",
    "QdrantQueryError",
]
