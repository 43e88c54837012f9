"""
Quillnote Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌──────────────┐ ┌────────────┐ │
    │  │ /api/summarize │ │ /api/notes*  │ │ /health    │ │
    │  └────────────────┘ └──────────────┘ └────────────┘ │
    │                                                     │
    │  Exception Handlers (body is always {"error": ...}):│
    │  400 Validation │ 401 Unauthorized │ 404 NotFound   │
    │  500 SummarizationFailed │ 500 Database/unexpected  │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.auth import resolve_request_user
from app.config import settings
from app.database import dispose_engine
from app.exceptions import (
    DatabaseError,
    NotFoundError,
    QuillnoteError,
    SummarizationFailedError,
    UnauthorizedError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import health, notes, summarize

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    httpx/httpcore are clamped to WARNING: their INFO lines include full
    request URLs, and the Gemini URL carries the API key.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check. Shutdown: dispose the engine.

    Configuration problems are logged, not fatal: the health endpoint
    stays reachable and reports what is missing.
    """
    setup_logging()
    logger.info("Quillnote Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Quillnote Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes. Every body is {"error": <message>}.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400 (401 first if no session)
        UnauthorizedError                        → 401
        NotFoundError                            → 404
        SummarizationFailedError                 → 500 (fixed summary message)
        DatabaseError / QuillnoteError           → 500 "Internal server error"
        Exception (fallback)                     → 500 "Internal server error"

    Context dicts and stack traces go to the log, never to the response.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        # Every route taking a body requires a session; check it before the body
        try:
            await resolve_request_user(request)
        except UnauthorizedError as e:
            logger.info("[%s] Unauthorized: %s", rid, e.reason or "no reason given")
            return _error(401, e.message)

        logger.warning("[%s] Invalid request body: %s", rid, exc.errors())
        return _error(400, INVALID_BODY_MESSAGE)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        rid = request_id_var.get("")
        logger.info("[%s] Unauthorized: %s", rid, exc.reason or "no reason given")
        return _error(401, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(SummarizationFailedError)
    async def handle_summarization_failed(request: Request, exc: SummarizationFailedError):
        # Cause was already logged with full detail by SummaryService
        return _error(500, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(QuillnoteError)
    async def handle_app_error(request: Request, exc: QuillnoteError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Quillnote API",
        description=(
            "Private note-taking API. Users manage their own notes and can request "
            "a short AI-generated summary of any note from OpenAI or Google Gemini."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(summarize.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
