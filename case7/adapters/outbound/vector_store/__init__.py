"""Vector index adapters."""

from .memory_adapter import InMemoryVectorIndex
from .qdrant_adapter import QdrantIndexAdapter

__all__ = ["InMemoryVectorIndex", "QdrantIndexAdapter"]
