# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the Adaptive Tutor
API. Run it with ``uvicorn adaptive_tutor.api:create_app --factory``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from adaptive_tutor import __version__
from adaptive_tutor.api.middleware.auth import AuthMiddleware
from adaptive_tutor.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from adaptive_tutor.api.routes import health
from adaptive_tutor.api.v1 import router as v1_router
from adaptive_tutor.core.config import get_settings
from adaptive_tutor.domains.learning import get_adaptation_catalog
from adaptive_tutor.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and loads the static adaptation tables once so a
    broken table fails startup rather than the first request.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting Adaptive Tutor API: environment=%s, debug=%s",
        settings.environment,
        settings.debug,
    )

    catalog = get_adaptation_catalog()
    logger.info(
        "Adaptation tables ready: needs=%d, levels=%d",
        len(catalog.need_tags),
        len(catalog.levels),
    )

    if not settings.llm.is_configured:
        logger.warning(
            "LLM provider '%s' has no credentials; /learn requests will fail",
            settings.llm.default_provider,
        )

    yield

    logger.info("Shutting down Adaptive Tutor API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    docs = settings.debug and settings.api.docs_enabled

    app = FastAPI(
        title=settings.api.title,
        description="Adaptive learning content pipeline for the 3D tutor classroom",
        version=__version__,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        root_path=settings.api.root_path,
        lifespan=lifespan,
        # 307 redirects to a trailing slash drop the Authorization header
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.limiter = limiter

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================
    app.add_middleware(AuthMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
