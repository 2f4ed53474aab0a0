"""Unit tests for the search-cases and get-case tools."""

import json
from unittest.mock import MagicMock

import pytest

from case7.application.services.case_tools import (
    GET_CASE_TOOL,
    SEARCH_CASES_TOOL,
    TRUNCATION_MARKER,
    CaseToolsService,
    GetCaseParams,
    SearchCasesParams,
    filter_sections,
    truncate_content,
)
from case7.core.domain import CaseSearchResult, Category, Difficulty
from case7.core.services.case_store import CaseStore

pytestmark = pytest.mark.unit

SECTIONED_CONTENT = """# Stripe Checkout

Intro paragraph.

## Install

npm install stripe

## Usage

Create a session.
Redirect the customer.

## Troubleshooting

Check webhooks."""


@pytest.fixture
def search_service():
    mock = MagicMock()
    mock.search.return_value = [
        CaseSearchResult(
            id="a",
            title="Stripe Checkout",
            category=Category.WEB,
            tags=["stripe", "web"],
            relevance_score=0.87654,
            excerpt="Use Stripe for checkout",
        )
    ]
    return mock


@pytest.fixture
def tools(make_case, sample_cases, search_service):
    cases = [*sample_cases, make_case("sectioned", title="Sectioned", content=SECTIONED_CONTENT)]
    source = MagicMock()
    source.load_all.return_value = cases
    store = CaseStore("cases", source)
    store.load_all()
    return CaseToolsService(store, search_service)


class TestFilterSections:
    """Tests for markdown section filtering."""

    def test_keeps_only_requested_section(self):
        assert filter_sections(SECTIONED_CONTENT, ["usage"]) == (
            "## Usage\n\nCreate a session.\nRedirect the customer."
        )

    def test_matching_is_case_insensitive_both_ways(self):
        """A header matches when it contains the name or the name contains it."""
        content = "## Usage Examples\nA\n## Set\nB\n## Other\nC"
        assert filter_sections(content, ["USAGE", "setup"]) == "## Usage Examples\nA\n## Set\nB"

    def test_multiple_sections_keep_document_order(self):
        result = filter_sections(SECTIONED_CONTENT, ["troubleshooting", "install"])
        assert result.index("## Install") < result.index("## Troubleshooting")
        assert "## Usage" not in result

    def test_no_matching_section_yields_empty(self):
        assert filter_sections(SECTIONED_CONTENT, ["deployment"]) == ""


class TestTruncateContent:
    """Tests for token-based truncation."""

    def test_short_content_is_unchanged(self):
        assert truncate_content("x" * 2000, 500) == "x" * 2000

    def test_long_content_is_cut_with_marker(self):
        result = truncate_content("x" * 2001, 500)
        assert result == "x" * 2000 + TRUNCATION_MARKER


class TestParams:
    """Tests for tool argument validation."""

    @pytest.mark.parametrize("limit", [0, 21])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValueError):
            SearchCasesParams(query="stripe", limit=limit)

    def test_max_tokens_alias(self):
        assert GetCaseParams.model_validate({"id": "a", "maxTokens": 600}).max_tokens == 600
        assert GetCaseParams(id="a", max_tokens=700).max_tokens == 700

    @pytest.mark.parametrize("max_tokens", [499, 16001])
    def test_max_tokens_out_of_range(self, max_tokens):
        with pytest.raises(ValueError):
            GetCaseParams(id="a", max_tokens=max_tokens)


class TestCaseToolsService:
    """Tests for CaseToolsService."""

    def test_list_tools(self, tools):
        listed = {tool["name"]: tool for tool in tools.list_tools()}

        assert set(listed) == {SEARCH_CASES_TOOL, GET_CASE_TOOL}
        assert "maxTokens" in listed[GET_CASE_TOOL]["input_schema"]["properties"]
        assert listed[SEARCH_CASES_TOOL]["input_schema"]["required"] == ["query"]

    def test_search_cases_payload(self, tools, search_service):
        payload = tools.search_cases(
            SearchCasesParams(query="stripe", category="web", difficulty="beginner", limit=3)
        )

        search_service.search.assert_called_once_with(
            "stripe", category=Category.WEB, difficulty=Difficulty.BEGINNER, limit=3
        )
        assert payload == {
            "query": "stripe",
            "total_results": 1,
            "cases": [
                {
                    "id": "a",
                    "title": "Stripe Checkout",
                    "category": "web",
                    "tags": ["stripe", "web"],
                    "relevance_score": 0.88,
                    "excerpt": "Use Stripe for checkout",
                }
            ],
        }

    def test_get_case_returns_fields_and_content(self, tools):
        lookup = tools.get_case(GetCaseParams(id="a"))

        assert not lookup.is_error
        assert lookup.payload["id"] == "a"
        assert lookup.payload["category"] == "web"
        assert lookup.payload["last_updated"] == "2025-01-01"
        assert lookup.payload["content"] == "Use Stripe for checkout. It is fast."

    def test_get_case_with_sections(self, tools):
        lookup = tools.get_case(GetCaseParams(id="sectioned", sections=["usage"]))
        assert lookup.payload["content"] == "## Usage\n\nCreate a session.\nRedirect the customer."

    def test_get_case_not_found(self, tools):
        lookup = tools.get_case(GetCaseParams(id="nonexistent"))

        assert lookup.is_error
        assert lookup.payload is None
        assert lookup.message == 'Case with ID "nonexistent" not found.'

    def test_call_tool_search(self, tools):
        result = tools.call_tool(SEARCH_CASES_TOOL, {"query": "stripe"})

        assert not result.is_error
        assert json.loads(result.text)["cases"][0]["relevance_score"] == 0.88

    def test_call_tool_get_case_with_alias(self, tools):
        result = tools.call_tool(GET_CASE_TOOL, {"id": "a", "maxTokens": 500})

        assert not result.is_error
        assert json.loads(result.text)["title"] == "Stripe Checkout"

    def test_call_tool_not_found_is_error_result(self, tools):
        result = tools.call_tool(GET_CASE_TOOL, {"id": "nonexistent"})

        assert result.is_error
        assert result.text == 'Case with ID "nonexistent" not found.'
        assert result.to_dict() == {
            "content": [{"type": "text", "text": result.text}],
            "is_error": True,
        }

    @pytest.mark.parametrize(
        "arguments",
        [
            {"query": "stripe", "limit": 50},
            {"query": "stripe", "category": "desktop"},
            {"query": ""},
            {},
            {"query": "stripe", "unexpected": True},
        ],
    )
    def test_invalid_arguments_rejected_before_search(self, tools, search_service, arguments):
        result = tools.call_tool(SEARCH_CASES_TOOL, arguments)

        assert result.is_error
        assert result.text.startswith("Error: ")
        search_service.search.assert_not_called()

    def test_validation_message_names_the_field(self, tools):
        result = tools.call_tool(SEARCH_CASES_TOOL, {"query": "stripe", "limit": 50})
        assert "limit" in result.text

    def test_unknown_tool(self, tools):
        result = tools.call_tool("delete-case", {"id": "a"})

        assert result.is_error
        assert result.text == "Error: Unknown tool: delete-case"

    def test_unexpected_failure_becomes_error_result(self, tools, search_service):
        search_service.search.side_effect = RuntimeError("boom")

        result = tools.call_tool(SEARCH_CASES_TOOL, {"query": "stripe"})

        assert result.is_error
        assert result.text == "Error: boom"
