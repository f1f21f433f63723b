"""
Main API module for Link Platform.

Responsibilities:
    - Expose REST endpoints to create, inspect, list/search and delete short links
    - Redirect GET /{code} to the target URL while recording the click
    - Map domain errors to HTTP statuses with human-readable messages
    - Liveness endpoint backed by a storage ping

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory Storage by default; PostgreSQL via LINK_STORAGE_BACKEND=postgres.
    - LinkManager owns validation and code allocation; RedirectHandler owns click recording.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and business logic."
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from link_platform.config import load_settings
from link_platform.errors import InternalError, LinkError
from link_platform.logging_config import setup_logging
from link_platform.manager.link_manager import LinkManager
from link_platform.manager.redirect_handler import RedirectHandler
from link_platform.manager.strategies import get_strategy_from_config
from link_platform.middleware import RequestLoggingMiddleware
from link_platform.storage.base import BaseStorage
from link_platform.storage.storage_factory import get_storage

INTERNAL_ERROR_MESSAGE = "Internal server error"


class LinkCreateRequest(BaseModel):
    """Request payload for creating a new short link."""

    target_url: str = Field(..., alias="targetUrl")
    code: Optional[str] = None


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "Invalid request")
    return f"{loc}: {msg}" if loc else msg


def create_app(storage: Optional[BaseStorage] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        storage (Optional[BaseStorage]): Backend to use. When omitted the backend
            is chosen from LINK_STORAGE_BACKEND / LINK_DB_DSN.

    Returns:
        FastAPI: A fully configured application instance with its own
                 storage, manager and redirect handler.

    Why an app factory?
        - Enables per-test isolation in pytest.
        - Encourages dependency injection and easy swapping of implementations.
        - Settings are re-read from the environment on each call.
    """
    cfg = load_settings()
    setup_logging(level=cfg.LOG_LEVEL, json_format=cfg.LOG_JSON)
    log = logging.getLogger("link_platform.api")

    app = FastAPI(
        title="Link Platform",
        description="URL shortener with click counting",
        docs_url="/docs",  # Swagger UI endpoint
    )
    app.add_middleware(RequestLoggingMiddleware)

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    if storage is None:
        storage = get_storage(cfg.STORAGE_BACKEND, dsn=cfg.DB_DSN)
        if cfg.DB_INIT_SCHEMA and hasattr(storage, "ensure_schema"):
            storage.ensure_schema()
    link_manager = LinkManager(
        storage=storage,
        code_strategy=get_strategy_from_config(cfg.CODE_STRATEGY, length=cfg.CODE_LENGTH),
        max_attempts=cfg.MAX_CODE_ATTEMPTS,
    )
    redirect_handler = RedirectHandler(storage=storage)

    app.state.storage = storage
    app.state.link_manager = link_manager
    app.state.redirect_handler = redirect_handler

    log.info("Link storage backend: %s", storage.name)

    # ----------------------------------------------------------------
    # Error mapping
    # ----------------------------------------------------------------
    @app.exception_handler(LinkError)
    async def handle_link_error(request: Request, exc: LinkError) -> JSONResponse:
        if isinstance(exc, InternalError):
            log.error(
                "%s %s failed: %s",
                request.method, request.url.path, exc.message,
                exc_info=exc,
            )
            return JSONResponse({"detail": INTERNAL_ERROR_MESSAGE}, status_code=exc.status_code)
        return JSONResponse({"detail": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse({"detail": _first_error_message(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"detail": INTERNAL_ERROR_MESSAGE}, status_code=500)

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/health")
    def health() -> JSONResponse:
        if storage.ping():
            return JSONResponse({"status": "ok", "backend": storage.name})
        return JSONResponse({"status": "unavailable", "backend": storage.name}, status_code=503)

    @app.post("/links", status_code=201)
    def create_link(req: LinkCreateRequest) -> Dict[str, Any]:
        """
        Create a short link.

        Returns:
            dict: The created link record (201).

        Raises:
            ValidationError (400): Invalid URL or code pattern.
            ConflictError (409): Supplied code already exists.
        """
        link = link_manager.create_link(req.target_url, req.code)
        return link.to_dict()

    @app.get("/links")
    def list_links(
        search: Optional[str] = Query(None, description="Case-insensitive match on code or target URL."),
    ) -> List[Dict[str, Any]]:
        return [link.to_dict() for link in link_manager.list_links(search)]

    @app.get("/links/{code}")
    def get_link(code: str) -> Dict[str, Any]:
        return link_manager.get_link(code).to_dict()

    @app.delete("/links/{code}")
    def delete_link(code: str) -> Dict[str, Any]:
        link_manager.delete_link(code)
        return {"message": "Link deleted successfully", "code": code}

    # Registered last so it never shadows the fixed paths above.
    @app.get("/{code}")
    def redirect_link(code: str) -> RedirectResponse:
        """
        Record a click on `code` and redirect to its target URL.

        Raises:
            NotFoundError (404): Unknown code.
            InternalError (500): Click could not be recorded; no redirect is issued.
        """
        outcome = redirect_handler.resolve(code)
        return RedirectResponse(url=outcome.target_url, status_code=cfg.REDIRECT_STATUS)

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
