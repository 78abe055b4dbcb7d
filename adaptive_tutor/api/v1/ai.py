# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""AI tutor API endpoints.

This module provides the endpoints behind the 3D tutor classroom:
- POST /learn - Generate adapted, multi-modal learning content
- GET /preview-images/{term} - Preview images for a term

Errors are returned as flat JSON bodies with an ``error`` key rather than
FastAPI's ``detail`` wrapper, since the classroom client reads them as is.

Example:
    POST /api/v1/ai/learn
    {
        "text": "Explain gravity",
        "userProfile": {
            "learningNeeds": ["dyslexia"],
            "culturalBackground": "Kenyan",
            "academicLevel": "basic",
            "interests": ["science"],
            "learningGoals": ["understand gravity"]
        }
    }
"""

import logging
import traceback
import uuid

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from adaptive_tutor.api.dependencies import get_learning_orchestrator, require_auth
from adaptive_tutor.api.middleware.auth import CurrentUser
from adaptive_tutor.api.middleware.rate_limit import learn_limit, limiter, preview_limit
from adaptive_tutor.core.config import get_settings
from adaptive_tutor.domains.learning import LearningOrchestrator, ValidationError
from adaptive_tutor.domains.learning.schemas import LearnResponse, PreviewImagesResponse
from adaptive_tutor.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

router = APIRouter()

LEARN_FAILED = "Failed to generate learning content"


def _server_error(error: str) -> JSONResponse:
    """Build a 500 body, with the traceback outside production."""
    content: dict = {"error": error}
    if not get_settings().is_production:
        content["details"] = traceback.format_exc()
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@router.post(
    "/learn",
    response_model=LearnResponse,
    summary="Generate learning content",
    description="Generate tutoring content adapted to a learner profile, "
    "with images and speech where the learner's needs call for them.",
)
@limiter.limit(learn_limit)
async def learn(
    request: Request,
    current_user: CurrentUser = Depends(require_auth),
    orchestrator: LearningOrchestrator = Depends(get_learning_orchestrator),
) -> LearnResponse | JSONResponse:
    """Run the learning content pipeline.

    The body is read as raw JSON so that missing and malformed fields can
    be reported in the classroom client's error format.

    Args:
        request: HTTP request with ``text`` and ``userProfile``.
        current_user: Authenticated user.
        orchestrator: Pipeline orchestrator for this request.

    Returns:
        LearnResponse, or a JSON error body (400 or 500).
    """
    bind_context(request_id=str(uuid.uuid4()), user_id=current_user.id)
    try:
        try:
            payload = await request.json()
        except ValueError:
            payload = None

        try:
            return await orchestrator.run(payload, user_id=current_user.id)
        except ValidationError as e:
            logger.info("Rejected learn request: %s", e)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=e.to_response(),
            )
        except Exception as e:
            logger.exception("Learning pipeline failed: %s", e)
            return _server_error(LEARN_FAILED)
    finally:
        clear_context()


@router.get(
    "/preview-images/{term}",
    response_model=PreviewImagesResponse,
    summary="Preview images for a term",
    description="Return up to five usable images for a term, with license metadata.",
)
@limiter.limit(preview_limit)
async def preview_images(
    request: Request,
    term: str,
    current_user: CurrentUser = Depends(require_auth),
    orchestrator: LearningOrchestrator = Depends(get_learning_orchestrator),
) -> PreviewImagesResponse | JSONResponse:
    """Look up preview images for a term.

    Args:
        request: HTTP request.
        term: Search term.
        current_user: Authenticated user.
        orchestrator: Pipeline orchestrator for this request.

    Returns:
        PreviewImagesResponse, or a 500 JSON error body.
    """
    try:
        return await orchestrator.preview_images(
            term, limit=get_settings().image_search.preview_limit
        )
    except Exception as e:
        logger.exception("Image preview failed: term=%s", term)
        return _server_error(str(e))
