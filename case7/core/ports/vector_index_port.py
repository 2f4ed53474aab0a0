"""Vector Index Port Interface."""

from abc import ABC, abstractmethod
from typing import Any

from ..domain import VectorHit


class VectorIndexPort(ABC):
    """Abstract interface for a nearest-neighbour index keyed by case id.

    Implementations own the index state. Nothing guarantees the index agrees
    with the case store at any instant; callers must tolerate cases that were
    never indexed.
    """

    @abstractmethod
    def upsert(self, id: str, vector: list[float], metadata: dict[str, Any]) -> None:
        """Insert or replace the vector stored for ``id``."""
        ...

    @abstractmethod
    def query(self, vector: list[float], top_k: int) -> list[VectorHit]:
        """Return up to ``top_k`` hits ordered by descending similarity."""
        ...

    @abstractmethod
    def delete(self, id: str) -> None:
        """Remove the vector stored for ``id``."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Remove every vector from the index."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of vectors currently stored."""
        ...
