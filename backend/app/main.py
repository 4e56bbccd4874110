"""
NoteShare Backend — FastAPI Application Factories
===================================================

What:  Builds the two FastAPI applications served from this package.
How:   Factory functions assemble middleware, exception handlers and
       routers; a lifespan per service prepares its database.
Who:   uvicorn (`app.main:app`, `app.main:summarizer_app`) and
       `python -m app board|summarizer`.

Applications:
    app              board service: accounts, groups, memberships, notes
    summarizer_app   summarizer: POST text, store and list summaries

    Each owns its own Database (separate SQLite file, separate schema
    policy) and they can run side by side on different ports.

Middleware chain (outermost first):
    RequestID → Access log → CORS → Route Handler

Error bodies:
    Every failure renders {"code": "...", "message": "..."} with the
    status carried by the exception; the X-Request-ID header is set on
    error responses as well.

Lifecycle:
    Startup:   logging → config checks → database file + schema
    Shutdown:  dispose the connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.database import Database, board_db, get_board_db, get_summary_db, summary_db
from app.exceptions import DatabaseError, NoteShareError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.routes import accounts, debug, groups, notes, summaries
from app.routes.health import create_health_router

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."

_HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging once for the process.

    Format: 2026-01-15T12:00:00 [INFO] app.services.note_service: message
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def create_lifespan(
    service: str,
    db: Database,
    check_config: Optional[Callable[[], None]] = None,
):
    """
    Build the lifespan for one service.

    A failed `check_config` is logged, not fatal: the service still starts
    and answers /health; affected endpoints report the problem per request.
    A database that cannot be prepared is fatal.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging()
        logger.info("=" * 60)
        logger.info("NoteShare %s %s starting up...", service, __version__)

        if check_config is not None:
            try:
                check_config()
            except ValueError as e:
                logger.error("Configuration error: %s", str(e))

        await db.init()

        logger.info("Server ready at http://%s:%d", settings.host, settings.port)
        logger.info("API docs: http://%s:%d/docs", settings.host, settings.port)
        logger.info("=" * 60)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("NoteShare %s shutting down...", service)
        await db.dispose()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def error_response(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    """The single error body shape: {code, message}."""
    rid = _request_id(request)
    headers = {REQUEST_ID_HEADER: rid} if rid else None
    return JSONResponse(
        status_code=status_code,
        content={"code": code, "message": message},
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "The request is malformed."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "invalid value")
    return f"Invalid request: {location}: {detail}" if location else f"Invalid request: {detail}"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to {code, message} responses.

    Handler hierarchy:
        NoteShareError          → exc.status_code / exc.code
                                  (4xx logged as warning, 5xx as error)
        DatabaseError           → 500 internal, opaque message
        RequestValidationError  → 400 invalid_request
        Starlette HTTPException → its status (unknown route, wrong method)
        Exception (fallback)    → 500 internal, opaque message
    """

    @app.exception_handler(NoteShareError)
    async def handle_app_error(request: Request, exc: NoteShareError):
        rid = _request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s (%s) | Context: %s", rid, exc.message, exc.code, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, exc.code, exc.message)
        message = INTERNAL_ERROR_MESSAGE if isinstance(exc, DatabaseError) else exc.message
        return error_response(request, exc.status_code, exc.code, message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning("[%s] invalid_request: %s", _request_id(request), message)
        return error_response(request, 400, "invalid_request", message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        code = _HTTP_ERROR_CODES.get(exc.status_code, "http_error")
        return error_response(request, exc.status_code, code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return error_response(request, 500, "internal", INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factories
# ══════════════════════════════════════════════════════════════════════════

def _add_middleware(app: FastAPI) -> None:
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)


def create_board_app() -> FastAPI:
    """Accounts, groups, memberships and sticky-note boards."""
    app = FastAPI(
        title="NoteShare Board API",
        description=(
            "Collaborative sticky-note boards: accounts, groups with owner/member "
            "roles, and notes with position, size, stacking order and color."
        ),
        version=__version__,
        lifespan=create_lifespan("board", board_db),
    )
    _add_middleware(app)
    register_exception_handlers(app)

    app.include_router(accounts.router)
    app.include_router(groups.router)
    app.include_router(notes.router)
    app.include_router(debug.board_router)
    app.include_router(create_health_router("board", get_board_db))
    return app


def create_summarizer_app() -> FastAPI:
    """Text summarization through an external chat-completion API."""
    app = FastAPI(
        title="NoteShare Summarizer API",
        description=(
            "Accepts text, asks a language model for a short bullet summary, "
            "and keeps every request/summary pair for later retrieval."
        ),
        version=__version__,
        lifespan=create_lifespan(
            "summarizer",
            summary_db,
            check_config=settings.validate_required_for_summarizer,
        ),
    )
    _add_middleware(app)
    register_exception_handlers(app)

    app.include_router(summaries.router)
    app.include_router(debug.summarizer_router)
    app.include_router(create_health_router("summarizer", get_summary_db))
    return app


# ── Application Instances ────────────────────────────────────────────────
# uvicorn expects importable module attributes
app = create_board_app()
summarizer_app = create_summarizer_app()
