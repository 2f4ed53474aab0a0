"""Health, readiness and service info endpoints."""

import logging

from fastapi import APIRouter, Depends

from ..... import __version__
from .....core.ports.vector_index_port import VectorIndexPort
from .....core.services.case_store import CaseStore
from ..deps import get_case_store, get_vector_index
from ..models import HealthResponse, InfoResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Basic liveness check; touches no collaborator."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        vector_index="not_checked",
    )


@router.get("/ready", response_model=HealthResponse)
def readiness_check(
    store: CaseStore = Depends(get_case_store),
    index: VectorIndexPort = Depends(get_vector_index),
) -> HealthResponse:
    """Readiness probe: reports loaded cases and vector index reachability."""
    try:
        vector_status = f"connected ({index.count()} vectors)"
    except Exception as e:
        logger.warning("Vector index not reachable: %s", e)
        vector_status = f"error: {e}"

    return HealthResponse(
        status="ready",
        version=__version__,
        cases=len(store),
        vector_index=vector_status,
    )


@router.get("/info", response_model=InfoResponse)
def info() -> InfoResponse:
    return InfoResponse(
        name="case7",
        version=__version__,
        transport="http",
        endpoints={
            "tools": "/api/v1/tools",
            "call": "/api/v1/tools/call",
            "health": "/health",
            "ready": "/ready",
            "info": "/info",
        },
        tools=[
            {"name": "search-cases", "description": "Search for development cases"},
            {"name": "get-case", "description": "Get specific case by ID"},
        ],
    )
