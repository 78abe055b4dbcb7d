# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rate limiting using slowapi.

Pipeline requests fan out to the language model, image and speech
services, so they are limited per client (user ID when authenticated,
otherwise IP address).

Example:
    @router.post("/learn")
    @limiter.limit(learn_limit)
    async def learn(request: Request):
        ...
"""

import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from adaptive_tutor.core.config import get_settings

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """Get a unique identifier for the client.

    Args:
        request: HTTP request.

    Returns:
        ``user:<id>`` when authenticated, otherwise ``ip:<address>``.
    """
    user = getattr(request.state, "user", None)
    if user:
        return f"user:{user.id}"
    return f"ip:{get_remote_address(request)}"


def learn_limit() -> str:
    return f"{get_settings().rate_limit.learn_per_minute}/minute"


def preview_limit() -> str:
    return f"{get_settings().rate_limit.preview_per_minute}/minute"


limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri=get_settings().rate_limit.storage_uri,
)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> Response:
    """Return 429 Too Many Requests with a Retry-After header."""
    logger.warning(
        "Rate limit exceeded: %s for %s",
        exc.detail,
        get_client_identifier(request),
    )

    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later."},
        headers={"Retry-After": "60"},
    )
