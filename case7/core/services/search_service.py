"""Hybrid case search: vector retrieval with a keyword-scoring fallback."""

import logging
import re

from ..domain import Case, CaseSearchResult, Category, Difficulty, VectorHit
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_index_port import VectorIndexPort
from .case_store import CaseStore
from .excerpt import create_excerpt

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
MIN_KEYWORD_LENGTH = 3

# Keyword scoring weights
TITLE_WEIGHT = 3.0
TAG_WEIGHT = 2.0
OCCURRENCE_WEIGHT = 0.5


def keyword_terms(query: str) -> list[str]:
    """Lowercased query terms long enough to be worth scoring."""
    return [term for term in query.lower().split() if len(term) >= MIN_KEYWORD_LENGTH]


def keyword_score(case: Case, terms: list[str]) -> float:
    """Additive lexical score of ``case`` for already-tokenized ``terms``.

    Per term: +3 for a title hit, +2 if any tag contains it, and +0.5 for
    every occurrence anywhere in title, tags and body together.
    """
    title = case.title.lower()
    tags = [tag.lower() for tag in case.tags]
    search_text = f"{title} {' '.join(tags)} {case.content.lower()}"

    score = 0.0
    for term in terms:
        if term in title:
            score += TITLE_WEIGHT
        if any(term in tag for tag in tags):
            score += TAG_WEIGHT
        score += len(re.findall(re.escape(term), search_text)) * OCCURRENCE_WEIGHT
    return score


class SearchService:
    """Ranks cases for a query by merging vector hits with keyword matches.

    Vector and keyword scores are merged on their raw scales: a hit keeps the
    index's similarity score and a keyword match keeps its additive score.
    """

    def __init__(
        self,
        store: CaseStore,
        embeddings: EmbeddingPort,
        index: VectorIndexPort,
    ) -> None:
        """Initialize the search service.

        Args:
            store: Loaded case corpus.
            embeddings: Embedding function for queries.
            index: Nearest-neighbour index over case embeddings.
        """
        self.store = store
        self.embeddings = embeddings
        self.index = index

    def search(
        self,
        query: str,
        category: Category | None = None,
        difficulty: Difficulty | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[CaseSearchResult]:
        """Search cases for ``query``.

        Args:
            query: Free-text search query.
            category: Only return cases of this category.
            difficulty: Only return cases of this difficulty.
            limit: Maximum number of results.

        Returns:
            Results sorted by descending relevance, at most ``limit`` long.
            Empty if the embedding or index call fails.
        """
        try:
            # Over-fetch to make up for hits the filters drop
            vector_hits = self._vector_search(query, limit * 2)
        except Exception as e:
            logger.error("Vector search failed for %r, returning no results: %s", query, e)
            return []

        candidates = self.filter_cases(self.store.get_all(), category, difficulty)
        candidates_by_id = {case.id: case for case in candidates}

        results: dict[str, CaseSearchResult] = {}

        for hit in vector_hits:
            case = candidates_by_id.get(hit.id)
            if case is None or case.id in results:
                continue
            results[case.id] = self._to_result(case, query, hit.score)

        remaining = [case for case in candidates if case.id not in results]
        for match in self.keyword_search(remaining, query):
            if len(results) >= limit:
                break
            results[match.id] = match

        ranked = sorted(results.values(), key=lambda r: r.relevance_score, reverse=True)
        logger.debug(
            "Query %r: %d vector hits, %d candidates, %d results",
            query,
            len(vector_hits),
            len(candidates),
            min(len(ranked), limit),
        )
        return ranked[:limit]

    def keyword_search(self, cases: list[Case], query: str) -> list[CaseSearchResult]:
        """Score ``cases`` lexically, dropping non-matches.

        Returns:
            Matches sorted by descending keyword score; equal scores keep the
            order of ``cases``.
        """
        terms = keyword_terms(query)
        matches = []
        for case in cases:
            score = keyword_score(case, terms)
            if score > 0:
                matches.append(self._to_result(case, query, score))

        matches.sort(key=lambda r: r.relevance_score, reverse=True)
        return matches

    @staticmethod
    def filter_cases(
        cases: list[Case],
        category: Category | None = None,
        difficulty: Difficulty | None = None,
    ) -> list[Case]:
        """Apply exact category and difficulty filters (both must match)."""
        return [
            case
            for case in cases
            if (category is None or case.category == category)
            and (difficulty is None or case.difficulty == difficulty)
        ]

    def _vector_search(self, query: str, top_k: int) -> list[VectorHit]:
        vector = self.embeddings.embed_query(query)
        return self.index.query(vector, top_k)

    @staticmethod
    def _to_result(case: Case, query: str, score: float) -> CaseSearchResult:
        return CaseSearchResult(
            id=case.id,
            title=case.title,
            category=case.category,
            tags=case.tags,
            relevance_score=score,
            excerpt=create_excerpt(case.content, query),
        )
