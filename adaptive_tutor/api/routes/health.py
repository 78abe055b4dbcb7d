# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoint."""

import time
import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from adaptive_tutor import __version__
from adaptive_tutor.core.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ServicesConfigured(BaseModel):
    """Which outbound services have credentials configured."""
    llm: bool = Field(description="Language model provider configured")
    speech: bool = Field(description="Speech synthesis API key configured")
    image_search: bool = Field(description="Image search endpoint configured")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    services: ServicesConfigured


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report service status without calling any outbound service.

    Status is "degraded" when the language model is not configured, since
    no learning content can be generated without it.
    """
    settings = get_settings()
    services = ServicesConfigured(
        llm=settings.llm.is_configured,
        speech=settings.speech_api_key is not None,
        image_search=bool(settings.image_search.api_url),
    )

    return HealthResponse(
        status="healthy" if services.llm else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        services=services,
    )
