# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

Example:
    @router.post("/learn")
    async def learn(
        current_user: CurrentUser = Depends(require_auth),
        orchestrator: LearningOrchestrator = Depends(get_learning_orchestrator),
    ):
        ...
"""

import logging

from fastapi import HTTPException, Request, status

from adaptive_tutor.api.middleware.auth import CurrentUser, get_current_user
from adaptive_tutor.core.config import get_settings
from adaptive_tutor.core.intelligence.llm import LLMClient
from adaptive_tutor.domains.learning import (
    ContentGenerator,
    LearningOrchestrator,
    ProfileAdapter,
    SpeechSynthesizer,
    VisualEnrichmentEngine,
)
from adaptive_tutor.services.image_search import WikimediaImageClient
from adaptive_tutor.services.speech import GoogleSpeechClient

logger = logging.getLogger(__name__)


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_learning_orchestrator() -> LearningOrchestrator:
    """Build a pipeline orchestrator for one request.

    Clients hold no connections between calls, so a fresh set per request
    shares no mutable state with other requests.
    """
    settings = get_settings()
    image_client = WikimediaImageClient(settings.image_search)

    return LearningOrchestrator(
        adapter=ProfileAdapter(),
        generator=ContentGenerator(LLMClient(llm_settings=settings.llm), settings.llm),
        enrichment=VisualEnrichmentEngine(
            image_client,
            section_limit=settings.image_search.section_limit,
        ),
        synthesizer=SpeechSynthesizer(GoogleSpeechClient(settings=settings.speech)),
        image_client=image_client,
    )
