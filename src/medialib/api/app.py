"""FastAPI application factory.

The api layer validates inputs, reads/writes the DB through the entry
service, and renders every outcome, success or failure, as an envelope.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from medialib.api.envelope import error_response
from medialib.config import Settings, load_settings
from medialib.core.errors import MediaLibError
from medialib.db.repo import DbSession
from medialib.db.session import get_session, init_db

logger = logging.getLogger(__name__)


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session(request.app.state.db_path)
    try:
        yield session
    finally:
        session.close()


def _request_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten FastAPI request errors to ``{field, message}`` items."""
    errors = []
    for err in exc.errors():
        loc = [
            part
            for part in err.get("loc", ())
            if isinstance(part, str) and part not in ("body", "path", "query")
        ]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "")})
    return errors


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(MediaLibError)
    async def handle_medialib_error(request: Request, exc: MediaLibError):
        return error_response(exc.message, exc.detail, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return error_response("Validation failed", _request_errors(exc), 400)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), None, exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return error_response("Internal server error", None, 500)


def create_app(settings: Settings | None = None, db_path: Path | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings. Defaults to load_settings().
        db_path: Optional path to database file, overriding settings.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()
    resolved_db_path = db_path if db_path is not None else settings.db_path

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(resolved_db_path)
        logger.info(f"Database ready at {resolved_db_path}")
        yield

    app = FastAPI(
        title="Media Library API",
        description="Track movies and TV shows",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.db_path = resolved_db_path

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    # Include routes
    from medialib.api.routes import entries

    app.include_router(entries.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
