"""
Main entrypoint for the Restaurant Directory API.

This module assembles the FastAPI application, sets up logging and
includes the versioned routers.  The ``create_app`` function builds
and configures the app from an immutable ``Settings`` value; the
module-level ``app`` is built from the environment at import time so
that it can be served directly, e.g.::

    uvicorn restaurant_directory_api.app.main:app --reload

Errors are rendered as ``{"success": false, "message": ...}``.
Malformed request parameters are reported as 400.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.cache import RestaurantCache
from .core.config import Settings
from .core.db import get_database_path, init_db
from .core.logging_config import setup_logging
from .services.restaurant_service import RestaurantService


logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration for this instance.  When omitted, settings are
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    if settings is None:
        settings = Settings.from_env()

    # Logging first so that the setup below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    database_path = get_database_path(settings.database_url)
    cache = RestaurantCache(ttl_seconds=settings.cache_ttl_seconds) if settings.use_cache else None

    app.state.settings = settings
    app.state.cache = cache
    app.state.restaurant_service = RestaurantService(
        database_path, table_name=settings.table_name, cache=cache
    )

    # The public paths (``/restaurants/...``) are part of the contract,
    # so the v1 router is mounted without a version prefix.
    app.include_router(v1_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = []
        for err in exc.errors():
            field = ".".join(str(p) for p in err.get("loc", ()) if p not in ("query", "path", "body"))
            messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
        return _error(400, "; ".join(messages) or "Invalid request")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return _error(500, "Internal server error")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and brings the schema up to date.
        version = init_db(database_path, settings.table_name)
        logger.info(
            "Restaurant table %s ready at %s (schema version %s, cache %s)",
            settings.table_name,
            database_path,
            version,
            "enabled" if cache is not None else "disabled",
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
