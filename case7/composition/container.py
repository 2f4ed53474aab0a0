"""Composition root wiring adapters to the core and application services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.case_source.markdown_loader import MarkdownCaseLoader
from ..adapters.outbound.embeddings.gemini_embedding import GeminiEmbeddingFunction
from ..adapters.outbound.vector_store.qdrant_adapter import QdrantIndexAdapter
from ..application.services.case_tools import CaseToolsService
from ..common.rate_limiter import RateLimiter
from ..config.settings import settings
from ..core.services.case_store import CaseStore
from ..core.services.indexing_service import IndexingService
from ..core.services.search_service import SearchService

logger = logging.getLogger(__name__)


def check_configuration() -> None:
    """Raise MissingAPIKeyError unless embedding and index credentials are set."""
    settings.require_index_credentials()


@lru_cache
def get_case_store() -> CaseStore:
    logger.info("Initializing CaseStore...")
    store = CaseStore(settings.cases_dir, MarkdownCaseLoader())
    store.load_all()
    return store


@lru_cache
def get_embeddings() -> GeminiEmbeddingFunction:
    logger.info("Initializing GeminiEmbeddingFunction...")
    check_configuration()
    return GeminiEmbeddingFunction(
        api_key=settings.google_api_key,
        model_name=settings.embedding_model,
        rate_limiter=RateLimiter(settings.embedding_requests_per_minute),
    )


@lru_cache
def get_vector_index() -> QdrantIndexAdapter:
    logger.info("Initializing QdrantIndexAdapter...")
    check_configuration()
    return QdrantIndexAdapter(
        url=settings.qdrant_url,
        api_key=settings.qdrant_api_key,
        collection_name=settings.qdrant_collection,
        dimension=settings.embedding_dimension,
    )


@lru_cache
def get_search_service() -> SearchService:
    logger.info("Initializing SearchService...")
    return SearchService(get_case_store(), get_embeddings(), get_vector_index())


@lru_cache
def get_indexing_service() -> IndexingService:
    logger.info("Initializing IndexingService...")
    return IndexingService(
        get_embeddings(),
        get_vector_index(),
        batch_size=settings.index_batch_size,
        batch_pause=settings.index_batch_pause,
    )


@lru_cache
def get_case_tools() -> CaseToolsService:
    logger.info("Initializing CaseToolsService...")
    return CaseToolsService(get_case_store(), get_search_service())
