"""Core services: case store, ranking, excerpts, indexing and validation."""

from .case_store import CaseStore
from .excerpt import create_excerpt
from .indexing_service import IndexingService, build_search_text
from .search_service import SearchService, keyword_score
from .validation_service import validate_cases

__all__ = [
    "CaseStore",
    "SearchService",
    "IndexingService",
    "build_search_text",
    "create_excerpt",
    "keyword_score",
    "validate_cases",
]
