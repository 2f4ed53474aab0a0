"""Tool endpoints: search-cases, get-case and the name + arguments dispatcher."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .....application.services.case_tools import (
    CaseToolsService,
    GetCaseParams,
    SearchCasesParams,
)
from .....core.domain.exceptions import InvalidParameterError
from .....core.domain.utils import normalize_text
from ..deps import get_case_tools
from ..models import (
    CaseResponse,
    ErrorResponse,
    NotFoundResponse,
    SearchCasesResponse,
    ToolCallRequest,
    ToolCallResponse,
    ToolInfo,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get("", response_model=list[ToolInfo])
def list_tools(tools: CaseToolsService = Depends(get_case_tools)) -> list[ToolInfo]:
    """List the available tools and their argument schemas."""
    return [ToolInfo(**tool) for tool in tools.list_tools()]


@router.post(
    "/search-cases",
    response_model=SearchCasesResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid request"}},
)
def search_cases(
    params: SearchCasesParams,
    tools: CaseToolsService = Depends(get_case_tools),
) -> SearchCasesResponse:
    """Hybrid search over the case corpus.

    Search never fails because of the vector index; if it is unavailable the
    response simply has no results.
    """
    query = normalize_text(params.query)
    if not query:
        raise InvalidParameterError("query must not be blank", context={"query": params.query})

    payload = tools.search_cases(params.model_copy(update={"query": query}))
    return SearchCasesResponse(**payload)


@router.post(
    "/get-case",
    response_model=CaseResponse,
    responses={404: {"model": NotFoundResponse, "description": "Unknown case id"}},
)
def get_case(
    params: GetCaseParams,
    tools: CaseToolsService = Depends(get_case_tools),
):
    """Fetch one case with optional section filtering and truncation."""
    lookup = tools.get_case(params)
    if lookup.is_error:
        return JSONResponse(
            status_code=404,
            content=NotFoundResponse(message=lookup.message).model_dump(),
        )
    return CaseResponse(**lookup.payload)


@router.post("/call", response_model=ToolCallResponse)
def call_tool(
    request: ToolCallRequest,
    tools: CaseToolsService = Depends(get_case_tools),
) -> ToolCallResponse:
    """Dispatch a tool by name; failures are reported in the envelope."""
    result = tools.call_tool(request.name, request.arguments)
    if result.is_error:
        logger.info("Tool call %s returned an error", request.name)
    return ToolCallResponse(**result.to_dict())
