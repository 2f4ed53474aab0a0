"""Google Gemini embeddings for case search text and queries."""

import logging
import time
from typing import Any

from ....common.rate_limiter import RateLimiter
from ....core.domain.exceptions import EmbeddingAPIError, EmbeddingRateLimitError
from ....core.ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)

# Constants
EMBEDDING_BATCH_SIZE = 20
MAX_EMBEDDING_RETRIES = 3
DEFAULT_MODEL = "gemini-embedding-001"

DOCUMENT_TASK = "RETRIEVAL_DOCUMENT"
QUERY_TASK = "RETRIEVAL_QUERY"


class GeminiEmbeddingFunction(EmbeddingPort):
    """Embedding function backed by the ``google-genai`` SDK.

    Documents and queries are embedded with their matching retrieval task
    types. Calls pass through an optional rate limiter and are retried with
    exponential backoff before failing.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL,
        rate_limiter: RateLimiter | None = None,
        retry_delay: float = 1.0,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.rate_limiter = rate_limiter or RateLimiter(None)
        self.retry_delay = retry_delay
        self._client: Any = None

    def _get_client(self) -> Any:
        """Get or create the genai client."""
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def embed(self, text: str) -> list[float]:
        return self._embed_texts([text], DOCUMENT_TASK)[0]

    def embed_query(self, text: str) -> list[float]:
        return self._embed_texts([text], QUERY_TASK)[0]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        embeddings: list[list[float]] = []
        for i in range(0, len(texts), EMBEDDING_BATCH_SIZE):
            batch = texts[i : i + EMBEDDING_BATCH_SIZE]
            embeddings.extend(self._embed_texts(batch, DOCUMENT_TASK))
        return embeddings

    def _embed_texts(self, texts: list[str], task_type: str) -> list[list[float]]:
        """Call the embedding API, retrying transient failures.

        Raises:
            EmbeddingRateLimitError: If the API keeps answering 429.
            EmbeddingAPIError: For any other failure after the last retry,
                or a response with a different number of embeddings.
        """
        client = self._get_client()

        for attempt in range(MAX_EMBEDDING_RETRIES):
            self.rate_limiter.acquire()
            try:
                result = client.models.embed_content(
                    model=self.model_name,
                    contents=texts,
                    config={"task_type": task_type},
                )
                break
            except Exception as e:
                if attempt == MAX_EMBEDDING_RETRIES - 1:
                    logger.error("Failed to embed texts after retries: %s", e)
                    error_cls = (
                        EmbeddingRateLimitError
                        if getattr(e, "code", None) == 429
                        else EmbeddingAPIError
                    )
                    raise error_cls(
                        "Embedding request failed",
                        cause=e,
                        context={"model": self.model_name, "attempts": attempt + 1},
                    ) from e
                logger.warning("Embedding attempt %d failed: %s", attempt + 1, e)
                time.sleep(self.retry_delay * 2**attempt)

        vectors = [list(embedding.values) for embedding in (result.embeddings or [])]
        if len(vectors) != len(texts):
            raise EmbeddingAPIError(
                "Embedding response size mismatch",
                context={"expected": len(texts), "received": len(vectors)},
            )
        return vectors
