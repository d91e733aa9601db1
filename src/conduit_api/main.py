"""
Conduit API Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures CORS and global exception handling, and provides a test-friendly
application factory.

Design Goals
------------
- Settings resolved once, before the first request
- Business services injected, never constructed by the HTTP layer
- Centralized router registration
- Global exception safety net
- Test-friendly via create_app()
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers

from .config import DEV_JWT_SECRET, Settings, settings
from .core.errors import request_validation_exception_handler, unhandled_exception_handler
from .auth.jwt_utils import JwtTokenResolver
from .services.protocols import Services, TokenResolver
from .api.dependencies import load_services
from .api import (
    user_routes,
    profile_routes,
    article_routes,
    comment_routes,
    tag_routes,
    health_routes,
)


logger = logging.getLogger("conduit.app")

SIMPLE_METHODS = ["GET", "HEAD", "POST"]
SIMPLE_HEADERS = ["Accept", "Accept-Language", "Content-Language", "Content-Type"]


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware whose accepted preflight responses carry no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


# ---------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown logging and configuration sanity checks."""
    app_settings: Settings = app.state.settings

    logger.info("Starting conduit-api")

    if app_settings.jwt_secret.get_secret_value() == DEV_JWT_SECRET:
        logger.warning("JWT_SECRET is not set; using the development secret")

    if app.state.services is None:
        logger.warning(
            "No business services configured; only /api/health will succeed"
        )

    yield

    logger.info("Shutting down conduit-api")


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app(
    services: Optional[Services] = None,
    token_resolver: Optional[TokenResolver] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    services : Optional[Services]
        Business collaborators. When omitted they are loaded from the
        ``services_factory`` setting, if any.

    token_resolver : Optional[TokenResolver]
        Token exchange collaborator. Defaults to local JWT verification.

    app_settings : Optional[Settings]
        Configuration snapshot for this app. Defaults to the process settings.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    cfg = app_settings or settings

    app = FastAPI(
        title="conduit-api",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.services = services if services is not None else load_services(cfg.services_factory)
    app.state.token_resolver = token_resolver or JwtTokenResolver(cfg)

    # --------------------------------------------------------------
    # CORS
    # --------------------------------------------------------------

    app.add_middleware(
        EmptyPreflightCORSMiddleware,
        allow_origins=["*"],
        allow_methods=["PUT", "DELETE"] + SIMPLE_METHODS,
        allow_headers=["Authorization"] + SIMPLE_HEADERS,
    )

    # --------------------------------------------------------------
    # Global Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(user_routes.router)
    app.include_router(profile_routes.router)
    app.include_router(article_routes.router)
    app.include_router(comment_routes.router)
    app.include_router(tag_routes.router)

    @app.options("/{path:path}", include_in_schema=False)
    async def preflight(path: str) -> Response:
        return Response(status_code=200)

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn)
# ---------------------------------------------------------------------

app = create_app()
