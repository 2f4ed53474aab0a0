"""Vector index exceptions for case7."""

from .base import Case7Error


class VectorStoreError(Case7Error):
    """Base error for vector index operations."""

    error_code = "C7_VEC_001"


class QdrantConnectionError(VectorStoreError):
    """Failed to connect to Qdrant.

    Common causes:
    - Invalid URL or API key
    - Network connectivity issues
    - Qdrant service is down
    """

    error_code = "C7_VEC_002"


class QdrantQueryError(VectorStoreError):
    """A Qdrant upsert, query or delete call failed.

    Common causes:
    - Collection does not exist
    - Embedding dimension mismatch
    """

    error_code = "C7_VEC_003"
