"""FastAPI application for the case7 search service."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....composition import container
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import Case7Error
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import health, tools

setup_logging(settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = settings.debug

app = FastAPI(
    title="case7 API",
    description=(
        "Hybrid (vector + keyword) search over markdown product development cases."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(tools.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(Case7Error)
async def case7_error_handler(request: Request, exc: Case7Error) -> JSONResponse:
    """Handle all Case7Error exceptions with structured JSON response."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with structured JSON response."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


# =============================================================================
# Lifecycle Events
# =============================================================================


@app.on_event("startup")
async def startup_event():
    """Refuse to start without index credentials, then load the corpus."""
    logger.info("Initializing case7 API...")
    container.check_configuration()
    store = container.get_case_store()
    logger.info("case7 API ready with %d cases", len(store))
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("case7 API shutting down...")


# Export for uvicorn
__all__ = ["app"]
