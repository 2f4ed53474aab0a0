"""In-process vector index for tests and local runs without Qdrant."""

import math
import threading
from typing import Any

from ....core.domain import VectorHit
from ....core.ports.vector_index_port import VectorIndexPort


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two equal-length vectors; 0.0 if either is zero."""
    if len(a) != len(b):
        raise ValueError(f"Vector dimension mismatch: {len(a)} != {len(b)}")
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class InMemoryVectorIndex(VectorIndexPort):
    """Brute-force cosine index held in a dict."""

    def __init__(self) -> None:
        self._vectors: dict[str, tuple[list[float], dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def upsert(self, id: str, vector: list[float], metadata: dict[str, Any]) -> None:
        with self._lock:
            self._vectors[id] = (list(vector), dict(metadata))

    def query(self, vector: list[float], top_k: int) -> list[VectorHit]:
        with self._lock:
            items = list(self._vectors.items())

        hits = [
            VectorHit(id=case_id, score=cosine_similarity(vector, stored), metadata=dict(meta))
            for case_id, (stored, meta) in items
        ]
        hits.sort(key=lambda hit: hit.score, reverse=True)
        return hits[:top_k]

    def delete(self, id: str) -> None:
        with self._lock:
            self._vectors.pop(id, None)

    def reset(self) -> None:
        with self._lock:
            self._vectors.clear()

    def count(self) -> int:
        return len(self._vectors)
