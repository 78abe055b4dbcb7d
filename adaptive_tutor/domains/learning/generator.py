# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content generator.

Runs two sequential exchanges on one conversation: the tutoring request,
then a follow-up asking the model for the key terms of its own reply.

Example:
    >>> generator = ContentGenerator(LLMClient())
    >>> content = await generator.generate("Photosynthesis", adapted)
    >>> content.key_terms
    ('Chlorophyll', 'Sunlight', 'Glucose')
"""

import logging
import re
from typing import Iterable

from adaptive_tutor.core.config.settings import LLMSettings, get_settings
from adaptive_tutor.core.intelligence.llm import Conversation, LLMClient, LLMError
from adaptive_tutor.domains.learning.exceptions import GenerationError
from adaptive_tutor.domains.learning.models import (
    AdaptedProfile,
    GeneratedContent,
    GenerationConfig,
    GenerationRequest,
)
from adaptive_tutor.domains.learning.prompts import build_key_terms_prompt, build_topic_prompt

logger = logging.getLogger(__name__)

# Checked in table order, the first rule whose tag is declared wins
GENERATION_RULES: tuple[tuple[str, GenerationConfig], ...] = (
    ("dyslexia", GenerationConfig(temperature=0.3, max_output_tokens=1000)),
    ("languageLearner", GenerationConfig(temperature=0.4, max_output_tokens=1200)),
)

KEY_TERMS_MAX_TOKENS = 256

_LIST_MARKER = re.compile(r"^(?:[-*•]+|\d+[.)])\s*")
_WRAPPING = "*_\"'`“”"


def configure_generation(
    needs: Iterable[str],
    llm_settings: LLMSettings | None = None,
) -> GenerationConfig:
    """Pick sampling parameters for a set of needs.

    Args:
        needs: Declared need tags.
        llm_settings: Source of the default parameters. Uses get_settings() if None.

    Returns:
        The config of the first matching rule, else the configured defaults.
    """
    declared = set(needs)
    for tag, config in GENERATION_RULES:
        if tag in declared:
            return config

    settings = llm_settings or get_settings().llm
    return GenerationConfig(
        temperature=settings.temperature,
        max_output_tokens=settings.max_tokens,
    )


def parse_key_terms(reply: str) -> tuple[str, ...]:
    """Split a key-term reply into terms.

    Each line is trimmed, list markers and wrapping quotes or bold markers
    are removed, and empty lines are dropped.
    """
    terms: list[str] = []
    for line in reply.splitlines():
        term = _LIST_MARKER.sub("", line.strip())
        term = term.strip().strip(_WRAPPING).strip()
        if term:
            terms.append(term)
    return tuple(terms)


class ContentGenerator:
    """Generates tutoring content and its key terms."""

    def __init__(
        self,
        llm_client: LLMClient,
        llm_settings: LLMSettings | None = None,
    ) -> None:
        self._llm = llm_client
        self._llm_settings = llm_settings

    def configure_generation(self, needs: Iterable[str]) -> GenerationConfig:
        return configure_generation(needs, self._llm_settings)

    def build_request(self, topic: str, adapted: AdaptedProfile) -> GenerationRequest:
        return GenerationRequest(
            directive=adapted.directive,
            config=self.configure_generation(adapted.need_tags),
            topic=build_topic_prompt(topic, adapted.learner),
        )

    async def generate(self, topic: str, adapted: AdaptedProfile) -> GeneratedContent:
        """Run both exchanges for a topic.

        Args:
            topic: Learner's question or topic text.
            adapted: Adapted learner profile carrying the directive.

        Returns:
            GeneratedContent with the tutoring text and key terms.

        Raises:
            GenerationError: If either exchange fails.
        """
        request = self.build_request(topic, adapted)
        config = request.config
        conversation = Conversation(system_prompt=request.directive)

        try:
            content = await self._llm.converse(
                conversation,
                request.topic,
                temperature=config.temperature,
                max_tokens=config.max_output_tokens,
            )
        except (LLMError, ValueError) as e:
            raise GenerationError(
                "Content generation failed",
                details={"exchange": "content", "error": str(e)},
            ) from e

        text = content.content
        if not text.strip():
            raise GenerationError(
                "Content generation returned no text",
                details={"exchange": "content", "model": content.model},
            )

        try:
            reply = await self._llm.converse(
                conversation,
                build_key_terms_prompt(text),
                temperature=config.temperature,
                max_tokens=KEY_TERMS_MAX_TOKENS,
            )
        except (LLMError, ValueError) as e:
            raise GenerationError(
                "Key term extraction failed",
                details={"exchange": "key_terms", "error": str(e)},
            ) from e

        key_terms = parse_key_terms(reply.content)
        logger.info(
            "Content generated: chars=%d, key_terms=%d, temperature=%.1f, max_tokens=%d",
            len(text),
            len(key_terms),
            config.temperature,
            config.max_output_tokens,
        )
        return GeneratedContent(text=text, key_terms=key_terms)
