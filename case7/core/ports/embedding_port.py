"""Embedding Port Interface."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Abstract interface for text embedding functions."""

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed one case's search text."""
        ...

    def embed_query(self, text: str) -> list[float]:
        """Embed a search query; same as ``embed`` unless the model distinguishes them."""
        return self.embed(text)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed several texts; adapters may override with a batched call."""
        return [self.embed(text) for text in texts]
