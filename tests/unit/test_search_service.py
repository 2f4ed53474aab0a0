"""Unit tests for hybrid case search and keyword scoring."""

from unittest.mock import MagicMock

import pytest

from case7.core.domain import Category, Difficulty, VectorHit
from case7.core.services.case_store import CaseStore
from case7.core.services.search_service import SearchService, keyword_score, keyword_terms

pytestmark = pytest.mark.unit


def build_store(cases):
    source = MagicMock()
    source.load_all.return_value = cases
    store = CaseStore("cases", source)
    store.load_all()
    return store


@pytest.fixture
def index():
    """Vector index double returning no hits unless a test says otherwise."""
    mock = MagicMock()
    mock.query.return_value = []
    return mock


@pytest.fixture
def service(sample_cases, fake_embedding, index):
    return SearchService(build_store(sample_cases), fake_embedding, index)


class TestKeywordTerms:
    """Tests for query tokenization."""

    def test_drops_short_tokens_and_lowercases(self):
        """Tokens of two characters or fewer never score."""
        assert keyword_terms("Add Stripe to an App") == ["add", "stripe", "app"]

    def test_blank_query_has_no_terms(self):
        assert keyword_terms("   ") == []


class TestKeywordScore:
    """Tests for the additive keyword score."""

    def test_stripe_example_scores(self, sample_cases):
        """Title, tag and occurrence weights add up per term."""
        stripe, auth, _ = sample_cases
        terms = keyword_terms("stripe checkout")

        # stripe: title 3 + tag 2 + 3 occurrences; checkout: title 3 + 2 occurrences
        assert keyword_score(stripe, terms) == pytest.approx(10.5)
        assert keyword_score(auth, terms) == 0

    def test_extra_occurrence_increases_score(self, make_case):
        """Adding one more occurrence adds exactly the occurrence weight."""
        terms = ["webhook"]
        once = make_case("x", content="Configure the webhook.")
        twice = make_case("x", content="Configure the webhook. Test the webhook.")

        assert keyword_score(twice, terms) == keyword_score(once, terms) + 0.5

    def test_adjacent_occurrences_all_count(self, make_case):
        case = make_case("x", content="stripestripe")
        assert keyword_score(case, ["stripe"]) == pytest.approx(1.0)

    def test_tag_match_is_substring(self, make_case):
        """A term inside a longer tag still earns the tag weight."""
        case = make_case("x", tags=["react-native"])
        # tag 2 + one occurrence in the composite text
        assert keyword_score(case, ["native"]) == pytest.approx(2.5)

    def test_regex_characters_are_literal(self, make_case):
        case = make_case("x", content="Use c++ and c++ again.")
        assert keyword_score(case, ["c++"]) == pytest.approx(1.0)


class TestSearch:
    """Tests for SearchService.search."""

    def test_keyword_fallback_without_vector_hits(self, service):
        """With no vector hits, only positively scored keyword matches return."""
        results = service.search("stripe checkout")

        assert [r.id for r in results] == ["a"]
        assert results[0].relevance_score == pytest.approx(10.5)
        assert results[0].excerpt == "Use Stripe for checkout"

    def test_over_fetches_twice_the_limit(self, service, index):
        service.search("stripe", limit=4)

        index.query.assert_called_once()
        _, top_k = index.query.call_args.args
        assert top_k == 8

    def test_vector_hit_keeps_raw_score(self, service, index):
        """Vector and keyword scores are merged on their raw scales."""
        index.query.return_value = [VectorHit(id="b", score=0.9)]

        results = service.search("stripe checkout")

        assert [(r.id, r.relevance_score) for r in results] == [("a", 10.5), ("b", 0.9)]

    def test_vector_hits_fill_limit_before_keywords(self, service, index):
        index.query.return_value = [VectorHit(id="b", score=0.9)]

        results = service.search("stripe checkout", limit=1)

        assert [r.id for r in results] == ["b"]

    def test_vector_hit_not_rescored_by_keywords(self, service, index):
        """A case found by the vector index keeps its similarity score."""
        index.query.return_value = [VectorHit(id="a", score=0.42)]

        results = service.search("stripe checkout")

        assert [(r.id, r.relevance_score) for r in results] == [("a", 0.42)]

    def test_duplicate_vector_hits_first_wins(self, service, index):
        index.query.return_value = [
            VectorHit(id="c", score=0.8),
            VectorHit(id="c", score=0.1),
        ]

        results = service.search("unrelated words")

        assert [(r.id, r.relevance_score) for r in results] == [("c", 0.8)]

    def test_unknown_vector_hits_are_ignored(self, service, index):
        """Hits for ids missing from the store never surface."""
        index.query.return_value = [VectorHit(id="deleted", score=0.99)]

        assert service.search("unrelated words") == []

    def test_ties_keep_vector_hits_first(self, service, index):
        """Equal scores keep merge order: vector matches before keyword matches."""
        index.query.return_value = [VectorHit(id="c", score=10.5)]

        results = service.search("stripe checkout")

        assert [r.id for r in results] == ["c", "a"]

    def test_category_filter(self, service, index):
        index.query.return_value = [
            VectorHit(id="b", score=0.9),
            VectorHit(id="c", score=0.8),
        ]

        results = service.search("stripe checkout", category=Category.WEB)

        assert [r.id for r in results] == ["a"]
        assert all(r.category == Category.WEB for r in results)

    def test_difficulty_filter_combines_with_category(self, service, index):
        index.query.return_value = [VectorHit(id="c", score=0.8)]

        assert service.search("expo", category=Category.MOBILE, difficulty=Difficulty.BEGINNER) == []
        results = service.search("expo", category=Category.MOBILE, difficulty=Difficulty.ADVANCED)
        assert [r.id for r in results] == ["c"]

    def test_embedding_failure_returns_empty(self, sample_cases, index):
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = RuntimeError("quota exceeded")
        service = SearchService(build_store(sample_cases), embeddings, index)

        assert service.search("stripe checkout") == []
        index.query.assert_not_called()

    def test_index_failure_returns_empty(self, service, index):
        """Even keyword matches are dropped when the index call fails."""
        index.query.side_effect = ConnectionError("qdrant down")

        assert service.search("stripe checkout") == []

    def test_result_count_never_exceeds_limit(self, make_case, fake_embedding, index):
        cases = [make_case(f"case-{i}", title=f"Stripe guide {i}") for i in range(30)]
        index.query.return_value = [VectorHit(id=f"case-{i}", score=0.5) for i in range(0, 30, 3)]
        service = SearchService(build_store(cases), fake_embedding, index)

        for limit in range(1, 21):
            assert len(service.search("stripe guide", limit=limit)) <= limit

    def test_search_is_idempotent(self, service, index):
        index.query.return_value = [VectorHit(id="c", score=0.3)]

        first = service.search("stripe checkout expo")
        second = service.search("stripe checkout expo")

        assert first == second


class TestSearchWithMemoryIndex:
    """End-to-end ranking against the in-process index."""

    def test_indexed_case_is_found_by_similarity(self, sample_cases, fake_embedding, memory_index):
        for case in sample_cases:
            memory_index.upsert(case.id, fake_embedding.embed(case.title), {})
        service = SearchService(build_store(sample_cases), fake_embedding, memory_index)

        results = service.search("Expo Push Notifications", limit=1)

        assert results[0].id == "c"
        assert results[0].relevance_score == pytest.approx(1.0)
