# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request orchestrator for the learning content pipeline.

One orchestrator run handles one request and walks these stages strictly
in order:

    VALIDATING -> GENERATING -> ENRICHING -> SYNTHESIZING -> ASSEMBLING -> DONE

FAILED is reachable from every stage. All validation finishes before any
outbound call is made. Enrichment and synthesis failures degrade the
response instead of failing it; generation failures end the request.

Example:
    >>> orchestrator = LearningOrchestrator(adapter, generator, enrichment, synthesizer)
    >>> result = await orchestrator.run({"text": "Explain gravity", "userProfile": {...}})
    >>> result.metadata.audio_support
    True
"""

import base64
from enum import Enum
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from adaptive_tutor.domains.learning.adapter import ProfileAdapter
from adaptive_tutor.domains.learning.enrichment import VisualEnrichmentEngine, filter_candidates
from adaptive_tutor.domains.learning.exceptions import (
    LearningPipelineError,
    PipelineError,
    SynthesisError,
    ValidationError,
)
from adaptive_tutor.domains.learning.generator import ContentGenerator
from adaptive_tutor.domains.learning.models import (
    AdaptedProfile,
    EnrichedContent,
    LearnerProfile,
)
from adaptive_tutor.domains.learning.schemas import (
    AdaptationSummary,
    LearnContent,
    LearnMetadata,
    LearnResponse,
    PreviewImage,
    PreviewImagesResponse,
    ResponseImage,
)
from adaptive_tutor.domains.learning.speech import SpeechSynthesizer
from adaptive_tutor.services.image_search import WikimediaImageClient
from adaptive_tutor.utils.logging import bind_context, get_logger, unbind_context

logger = get_logger(__name__)

REQUIRED_PROFILE_FIELDS = (
    "learningNeeds",
    "culturalBackground",
    "academicLevel",
    "interests",
    "learningGoals",
)

PREVIEW_LIMIT = 5


class PipelineStage(str, Enum):
    """Stages of one pipeline run."""

    VALIDATING = "validating"
    GENERATING = "generating"
    ENRICHING = "enriching"
    SYNTHESIZING = "synthesizing"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


def _format_profile_errors(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"])
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class LearningOrchestrator:
    """Runs the learning content pipeline for one request.

    Attributes:
        stage: Current pipeline stage.
    """

    def __init__(
        self,
        adapter: ProfileAdapter,
        generator: ContentGenerator,
        enrichment: VisualEnrichmentEngine,
        synthesizer: SpeechSynthesizer,
        image_client: WikimediaImageClient | None = None,
    ) -> None:
        self._adapter = adapter
        self._generator = generator
        self._enrichment = enrichment
        self._synthesizer = synthesizer
        self._image_client = image_client
        self.stage = PipelineStage.VALIDATING

    def _transition(self, stage: PipelineStage, **kwargs: Any) -> None:
        logger.info(
            "pipeline_stage",
            from_stage=self.stage.value,
            to_stage=stage.value,
            **kwargs,
        )
        self.stage = stage
        bind_context(pipeline_stage=stage.value)

    def validate(self, payload: Any) -> tuple[str, AdaptedProfile]:
        """Validate a request payload and adapt its learner profile.

        Args:
            payload: Decoded JSON request body.

        Returns:
            Tuple of (topic text, adapted profile).

        Raises:
            ValidationError: If the payload or profile is missing, incomplete
                or malformed.
        """
        body = payload if isinstance(payload, dict) else {}
        text = body.get("text")
        profile = body.get("userProfile")

        text_error = None
        if not text:
            text_error = "Text is required"
        elif not isinstance(text, str):
            text_error = "Text must be a string"

        profile_error = None
        if not profile:
            profile_error = "User profile is required"
        elif not isinstance(profile, dict):
            profile_error = "User profile must be an object"

        if text_error or profile_error:
            raise ValidationError(
                "Missing required information",
                details={"text": text_error, "userProfile": profile_error},
            )

        missing = [name for name in REQUIRED_PROFILE_FIELDS if not profile.get(name)]
        if missing:
            raise ValidationError("Incomplete user profile", missing_fields=missing)

        try:
            learner = LearnerProfile.model_validate(profile)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid user profile",
                details={"userProfile": _format_profile_errors(e)},
            ) from e

        return text, self._adapter.adapt(learner)

    async def run(self, payload: Any, user_id: str | None = None) -> LearnResponse:
        """Run the whole pipeline for a request payload.

        Args:
            payload: Decoded JSON request body with ``text`` and ``userProfile``.
            user_id: Authenticated caller, used for logging only.

        Returns:
            LearnResponse success envelope.

        Raises:
            ValidationError: If the request is invalid.
            GenerationError: If the language model fails.
            PipelineError: If a stage fails for any other reason.
        """
        self.stage = PipelineStage.VALIDATING
        bind_context(pipeline_stage=self.stage.value)
        try:
            topic, adapted = self.validate(payload)

            self._transition(
                PipelineStage.GENERATING,
                user_id=user_id,
                needs=list(adapted.need_tags),
                level=adapted.academic.level,
            )
            generated = await self._generator.generate(topic, adapted)

            self._transition(PipelineStage.ENRICHING, key_terms=len(generated.key_terms))
            enriched = await self._enrichment.enrich(generated.text, generated.key_terms, adapted)

            self._transition(PipelineStage.SYNTHESIZING, images=len(enriched.images))
            audio = await self._synthesize(enriched.text, adapted)

            self._transition(PipelineStage.ASSEMBLING, audio=audio is not None)
            response = self._assemble(enriched, audio, adapted)

            self._transition(PipelineStage.DONE)
            return response

        except LearningPipelineError as e:
            failed_at = self.stage
            self._transition(PipelineStage.FAILED, failed_stage=failed_at.value, error=e.message)
            raise
        except Exception as e:
            failed_at = self.stage
            self._transition(PipelineStage.FAILED, failed_stage=failed_at.value, error=str(e))
            raise PipelineError(
                f"Pipeline failed during {failed_at.value}: {e}",
                stage=failed_at.value,
            ) from e
        finally:
            unbind_context("pipeline_stage")

    async def _synthesize(self, text: str, adapted: AdaptedProfile) -> bytes | None:
        try:
            return await self._synthesizer.synthesize(text, adapted)
        except SynthesisError as e:
            logger.warning("speech_omitted", error=e.message, details=e.details)
            return None

    @staticmethod
    def _assemble(
        enriched: EnrichedContent,
        audio: bytes | None,
        adapted: AdaptedProfile,
    ) -> LearnResponse:
        images = [
            ResponseImage(url=image.url, description=image.description, title=image.title)
            for image in enriched.images
            if image.url
        ]
        return LearnResponse(
            response=LearnContent(
                text=enriched.text,
                images=images,
                audio=base64.b64encode(audio).decode("ascii") if audio is not None else None,
            ),
            metadata=LearnMetadata(
                adaptations=[
                    AdaptationSummary(type=profile.tag, features=profile.features)
                    for profile in adapted.adaptations
                ],
                visual_support=len(images) > 0,
                audio_support=audio is not None,
            ),
        )

    async def preview_images(
        self,
        term: str,
        limit: int = PREVIEW_LIMIT,
    ) -> PreviewImagesResponse:
        """Look up preview images for a term.

        Args:
            term: Search term.
            limit: Maximum number of images returned.

        Returns:
            PreviewImagesResponse with at most ``limit`` usable images.

        Raises:
            ImageSearchError: If the image service fails.
        """
        if self._image_client is None:
            raise PipelineError("Image preview is not configured", stage="preview")

        candidates = await self._image_client.search(term, limit=limit)
        images = [
            PreviewImage(
                url=image.url,
                title=image.title,
                description=image.description,
                license=image.license,
            )
            for image in filter_candidates(candidates)[:limit]
        ]
        logger.info("preview_images", term=term, images=len(images))
        return PreviewImagesResponse(images=images)
