"""Pydantic models for API requests and responses.

Tool argument models live with the tools in
``case7.application.services.case_tools``; this module only shapes what the
HTTP layer sends back.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CaseSummary(BaseModel):
    """One ranked case in a search response."""

    id: str = Field(..., description="Case ID")
    title: str = Field(..., description="Case title")
    category: str = Field(..., description="Case category")
    tags: list[str] = Field(default_factory=list, description="Case tags")
    relevance_score: float = Field(..., description="Relevance score, 2 decimals")
    excerpt: str = Field("", description="Most relevant sentence of the case")


class SearchCasesResponse(BaseModel):
    """Response of the search-cases tool."""

    query: str = Field(..., description="The query that was searched")
    total_results: int = Field(..., description="Number of cases returned")
    cases: list[CaseSummary] = Field(default_factory=list)


class CaseResponse(BaseModel):
    """Response of the get-case tool."""

    id: str
    title: str
    category: str
    tags: list[str]
    difficulty: str
    last_updated: str = Field(..., description="YYYY-MM-DD")
    tested_versions: dict[str, str] | None = None
    estimated_time: str | None = None
    prerequisites: list[str] | None = None
    content: str = Field(..., description="Markdown body, possibly filtered and truncated")


class ToolInfo(BaseModel):
    """A tool exposed over the RPC surface."""

    name: str
    description: str
    input_schema: dict[str, Any]


class ToolCallRequest(BaseModel):
    """Name + arguments dispatch request."""

    name: str = Field(..., description="Tool name (search-cases or get-case)")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")


class ToolContent(BaseModel):
    type: str = "text"
    text: str


class ToolCallResponse(BaseModel):
    """RPC envelope: JSON text on success, error text otherwise."""

    content: list[ToolContent]
    is_error: bool = False


class HealthResponse(BaseModel):
    """Response model for health and readiness checks."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    cases: int | None = Field(None, description="Number of loaded cases")
    vector_index: str = Field(..., description="Vector index status")


class InfoResponse(BaseModel):
    """Service description for clients."""

    name: str
    version: str
    transport: str
    endpoints: dict[str, str]
    tools: list[dict[str, str]]


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., C7_VEC_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "QdrantQueryError", "code": "C7_VEC_003", "message": "..."},
            "location": {"class": "QdrantIndexAdapter", "method": "query", ...},
            "context": {"collection": "cases"},
            "stack_trace": ["Traceback...", ...]  # Only in debug mode
        }
    """

    error: ErrorDetail
    location: ErrorLocation | None = None
    context: dict | None = None
    cause: dict | None = None
    stack_trace: list[str] | None = None


class NotFoundResponse(BaseModel):
    """Returned by get-case for an unknown id."""

    error: str = "not_found"
    message: str
