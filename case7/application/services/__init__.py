"""Application services."""

from .case_tools import (
    CaseToolsService,
    GetCaseParams,
    SearchCasesParams,
    ToolResult,
    fetch_case,
    filter_sections,
    truncate_content,
)

__all__ = [
    "CaseToolsService",
    "GetCaseParams",
    "SearchCasesParams",
    "ToolResult",
    "fetch_case",
    "filter_sections",
    "truncate_content",
]
