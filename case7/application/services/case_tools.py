"""The ``search-cases`` and ``get-case`` tools, independent of transport.

Inbound adapters (HTTP routes, CLI commands) validate their input into the
parameter models below and call :class:`CaseToolsService`. ``call_tool``
offers the same operations behind a name + arguments dispatch for RPC
clients, reporting every failure as an error result instead of raising.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ...core.domain import CaseLookup, Category, Difficulty
from ...core.domain.exceptions import InvalidParameterError, UnknownToolError
from ...core.services.case_store import CaseStore
from ...core.services.search_service import SearchService

logger = logging.getLogger(__name__)

SEARCH_CASES_TOOL = "search-cases"
GET_CASE_TOOL = "get-case"

CHARS_PER_TOKEN = 4
TRUNCATION_MARKER = "\n\n[Content truncated due to token limit...]"


class SearchCasesParams(BaseModel):
    """Arguments of the ``search-cases`` tool."""

    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., min_length=1, description="Search query for cases")
    category: Category | None = Field(None, description="Filter by category")
    difficulty: Difficulty | None = Field(None, description="Filter by difficulty")
    limit: int = Field(5, ge=1, le=20, description="Maximum number of results")


class GetCaseParams(BaseModel):
    """Arguments of the ``get-case`` tool."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(..., min_length=1, description="Case ID to retrieve")
    sections: list[str] | None = Field(
        None,
        description='Specific sections to include (e.g., "install", "setup", "usage")',
    )
    max_tokens: int = Field(
        8000,
        ge=500,
        le=16000,
        alias="maxTokens",
        description="Maximum tokens to return",
    )


@dataclass
class ToolResult:
    """RPC envelope returned by :meth:`CaseToolsService.call_tool`."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "is_error": self.is_error}


def filter_sections(content: str, sections: list[str]) -> str:
    """Keep only the markdown sections whose header matches a requested name.

    A header matches when its text contains a requested name or is contained
    in one, ignoring case. Each kept section runs from its header line up to
    the next header of any level. Text before the first header is dropped.
    """
    wanted = [section.lower() for section in sections]
    kept: list[str] = []
    include = False

    for line in content.split("\n"):
        if line.startswith("#"):
            header = line.lstrip("#").strip().lower()
            include = any(header in name or name in header for name in wanted)
        if include:
            kept.append(line)

    return "\n".join(kept).strip()


def truncate_content(content: str, max_tokens: int) -> str:
    """Hard-cut ``content`` to ``max_tokens`` worth of characters."""
    max_chars = max_tokens * CHARS_PER_TOKEN
    if len(content) > max_chars:
        return content[:max_chars] + TRUNCATION_MARKER
    return content


def fetch_case(store: CaseStore, params: GetCaseParams) -> CaseLookup:
    """Look a case up by id; needs only the store, not the vector index."""
    case = store.get_by_id(params.id)
    if case is None:
        logger.info("Case not found: %s", params.id)
        return CaseLookup.not_found(params.id)

    content = case.content
    if params.sections:
        content = filter_sections(content, params.sections)
    content = truncate_content(content, params.max_tokens)

    return CaseLookup(payload={**case.to_frontmatter(), "content": content})


class CaseToolsService:
    """Serves the case search and fetch tools over a loaded store."""

    TOOLS = {
        SEARCH_CASES_TOOL: (
            "Search for development cases based on query, category, or difficulty",
            SearchCasesParams,
        ),
        GET_CASE_TOOL: (
            "Retrieve a specific case by ID with optional section filtering",
            GetCaseParams,
        ),
    }

    def __init__(self, store: CaseStore, search_service: SearchService) -> None:
        self.store = store
        self.search_service = search_service

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool names, descriptions and JSON schemas of their arguments."""
        return [
            {
                "name": name,
                "description": description,
                "input_schema": params_model.model_json_schema(by_alias=True),
            }
            for name, (description, params_model) in self.TOOLS.items()
        ]

    def search_cases(self, params: SearchCasesParams) -> dict[str, Any]:
        """Run a hybrid search and shape the response payload."""
        results = self.search_service.search(
            params.query,
            category=params.category,
            difficulty=params.difficulty,
            limit=params.limit,
        )
        return {
            "query": params.query,
            "total_results": len(results),
            "cases": [
                {
                    "id": result.id,
                    "title": result.title,
                    "category": result.category.value,
                    "tags": result.tags,
                    "relevance_score": round(result.relevance_score, 2),
                    "excerpt": result.excerpt,
                }
                for result in results
            ],
        }

    def get_case(self, params: GetCaseParams) -> CaseLookup:
        """Fetch one case, optionally narrowed to sections and truncated."""
        return fetch_case(self.store, params)

    def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Validate ``arguments`` for tool ``name`` and run it.

        Validation failures, unknown tools, not-found lookups and unexpected
        errors all come back as ``is_error`` results.
        """
        try:
            if name not in self.TOOLS:
                raise UnknownToolError(f"Unknown tool: {name}", context={"tool": name})

            _, params_model = self.TOOLS[name]
            try:
                params = params_model.model_validate(arguments or {})
            except PydanticValidationError as e:
                raise InvalidParameterError(
                    _describe_validation_error(e),
                    cause=e,
                    context={"tool": name},
                ) from e

            if isinstance(params, SearchCasesParams):
                return ToolResult(json.dumps(self.search_cases(params), indent=2))

            lookup = self.get_case(params)
            if lookup.is_error:
                return ToolResult(lookup.message, is_error=True)
            return ToolResult(json.dumps(lookup.payload, indent=2))

        except Exception as e:
            logger.error("Error handling tool call %s: %s", name, e)
            message = getattr(e, "message", None) or str(e) or "Unknown error occurred"
            return ToolResult(f"Error: {message}", is_error=True)


def _describe_validation_error(error: PydanticValidationError) -> str:
    """One-line summary of a pydantic error, e.g. ``limit: Input should be ...``."""
    parts = []
    for detail in error.errors(include_url=False):
        location = ".".join(str(part) for part in detail["loc"]) or "arguments"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)
