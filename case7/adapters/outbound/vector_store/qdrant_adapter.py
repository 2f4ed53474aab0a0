"""Qdrant vector index for case embeddings.

Qdrant point ids must be unsigned integers or UUIDs, so each case id is
mapped to a deterministic UUIDv5 and the original id is kept in the payload.
"""

import logging
import uuid
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from qdrant_client import QdrantClient

from ....core.domain import VectorHit
from ....core.domain.exceptions import QdrantConnectionError, QdrantQueryError
from ....core.ports.vector_index_port import VectorIndexPort

logger = logging.getLogger(__name__)

CASE_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "case7/cases")
CASE_ID_FIELD = "case_id"
DEFAULT_COLLECTION = "cases"
EMBEDDING_DIMENSION = 3072  # gemini-embedding-001 default dimension


def point_id(case_id: str) -> str:
    """Stable Qdrant point id for a case id."""
    return str(uuid.uuid5(CASE_ID_NAMESPACE, case_id))


class QdrantIndexAdapter(VectorIndexPort):
    """Qdrant-backed nearest-neighbour index using cosine distance."""

    def __init__(
        self,
        url: str,
        api_key: str,
        collection_name: str = DEFAULT_COLLECTION,
        dimension: int = EMBEDDING_DIMENSION,
    ) -> None:
        """Initialize the adapter; the connection is opened lazily.

        Args:
            url: Qdrant cluster URL.
            api_key: Qdrant API key.
            collection_name: Collection holding case vectors.
            dimension: Embedding vector size.
        """
        self.url = url
        self.api_key = api_key
        self.collection_name = collection_name
        self.dimension = dimension
        self._client: QdrantClient | None = None

    def _get_client(self) -> "QdrantClient":
        """Get or create Qdrant client connection."""
        if not self._client:
            try:
                from qdrant_client import QdrantClient

                self._client = QdrantClient(url=self.url, api_key=self.api_key)
                logger.info("Connected to Qdrant at: %s", self.url)
                self._ensure_collection()
            except Exception as e:
                self._client = None
                raise QdrantConnectionError(
                    f"Failed to connect to Qdrant at {self.url}",
                    cause=e,
                    context={"url": self.url},
                ) from e

        return self._client

    def _ensure_collection(self) -> None:
        """Create the case collection if it does not exist yet."""
        from qdrant_client.http import models

        client = self._client
        existing = {c.name for c in client.get_collections().collections}
        if self.collection_name not in existing:
            logger.info("Creating collection %s", self.collection_name)
            client.create_collection(
                collection_name=self.collection_name,
                vectors_config=models.VectorParams(
                    size=self.dimension,
                    distance=models.Distance.COSINE,
                ),
            )

    def upsert(self, id: str, vector: list[float], metadata: dict[str, Any]) -> None:
        from qdrant_client.http import models

        client = self._get_client()
        try:
            client.upsert(
                collection_name=self.collection_name,
                points=[
                    models.PointStruct(
                        id=point_id(id),
                        vector=vector,
                        payload={**metadata, CASE_ID_FIELD: id},
                    )
                ],
            )
        except Exception as e:
            raise QdrantQueryError(
                f"Failed to upsert case {id}",
                cause=e,
                context={"collection": self.collection_name, "case_id": id},
            ) from e

    def query(self, vector: list[float], top_k: int) -> list[VectorHit]:
        client = self._get_client()
        try:
            response = client.query_points(
                collection_name=self.collection_name,
                query=vector,
                limit=top_k,
                with_payload=True,
            )
        except Exception as e:
            raise QdrantQueryError(
                "Nearest-neighbour query failed",
                cause=e,
                context={"collection": self.collection_name, "top_k": top_k},
            ) from e

        hits = []
        for point in response.points:
            payload = dict(point.payload or {})
            case_id = payload.pop(CASE_ID_FIELD, None)
            if case_id is None:
                logger.warning("Skipping point %s without a case id", point.id)
                continue
            hits.append(VectorHit(id=case_id, score=point.score or 0.0, metadata=payload))
        return hits

    def delete(self, id: str) -> None:
        from qdrant_client.http import models

        client = self._get_client()
        try:
            client.delete(
                collection_name=self.collection_name,
                points_selector=models.PointIdsList(points=[point_id(id)]),
            )
        except Exception as e:
            raise QdrantQueryError(
                f"Failed to delete case {id}",
                cause=e,
                context={"collection": self.collection_name, "case_id": id},
            ) from e
        logger.debug("Deleted case from Qdrant: %s", id)

    def reset(self) -> None:
        """Drop and recreate the case collection."""
        client = self._get_client()
        try:
            client.delete_collection(collection_name=self.collection_name)
            self._ensure_collection()
        except Exception as e:
            raise QdrantQueryError(
                "Failed to reset collection",
                cause=e,
                context={"collection": self.collection_name},
            ) from e
        logger.info("Qdrant collection %s reset", self.collection_name)

    def count(self) -> int:
        client = self._get_client()
        try:
            return client.count(collection_name=self.collection_name, exact=True).count
        except Exception as e:
            raise QdrantQueryError(
                "Failed to count points",
                cause=e,
                context={"collection": self.collection_name},
            ) from e
