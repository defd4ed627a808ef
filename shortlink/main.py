"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- API routes
- Middleware (write guard, CORS, recovery, request id, logging)
- Application metadata

Run with ``uvicorn shortlink.main:app`` or the ``shortlink`` console script.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shortlink import __version__
from shortlink.api import endpoints
from shortlink.api.schemas import HealthResponse
from shortlink.core.logging_config import setup_logging
from shortlink.core.setting import EnvSettingsOptions, Settings, settings
from shortlink.middleware import (
    add_logging_middleware,
    add_recovery_middleware,
    add_request_id_middleware,
    add_write_guard_middleware,
)
from shortlink.services.code_store import CodeStore


def create_app(
    code_store: Optional[CodeStore] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        code_store: Store to serve from (default: a new empty CodeStore)
        app_settings: Settings override (default: module-level settings)
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL, json_format=app_settings.LOG_JSON)

    # Interactive docs are not served in production
    expose_docs = app_settings.ENV_SETTING != EnvSettingsOptions.production

    app = FastAPI(
        title="URL Shortener Service",
        description="Maps long URLs to short codes and redirects them back",
        version=__version__,
        docs_url="/docs" if expose_docs else None,
        redoc_url="/redoc" if expose_docs else None,
        openapi_url="/openapi.json" if expose_docs else None,
    )

    # The store is owned by the app, endpoints reach it through a dependency
    app.state.code_store = code_store if code_store is not None else CodeStore()

    # Added innermost first, the stack seen by a request is:
    # write guard -> CORS -> recovery -> request id -> logging -> router
    add_logging_middleware(app)
    add_request_id_middleware(app)
    add_recovery_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_write_guard_middleware(app)

    # Defined before the router so it matches before the catch-all code route
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint for monitoring."""
        return HealthResponse(
            status="healthy",
            mappings=len(request.app.state.code_store),
        )

    app.include_router(endpoints.router, tags=["URL Shortener"])

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured settings."""
    uvicorn.run(
        "shortlink.main:app",
        host=settings.HOST,
        port=settings.PORT,
        timeout_keep_alive=settings.IDLE_TIMEOUT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
