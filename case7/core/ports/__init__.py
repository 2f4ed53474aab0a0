"""Ports: the interfaces core services depend on."""

from .case_source_port import CaseSourcePort
from .embedding_port import EmbeddingPort
from .vector_index_port import VectorIndexPort

__all__ = ["CaseSourcePort", "EmbeddingPort", "VectorIndexPort"]
