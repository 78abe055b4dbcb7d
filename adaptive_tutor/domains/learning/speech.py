# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Speech synthesizer with need-specific voice shaping."""

import logging
from dataclasses import replace
from typing import Any, Iterable

from adaptive_tutor.domains.learning.exceptions import SynthesisError
from adaptive_tutor.domains.learning.models import AdaptedProfile
from adaptive_tutor.services.speech import (
    GoogleSpeechClient,
    SpeechServiceError,
    VoiceParameters,
)

logger = logging.getLogger(__name__)

# Applied in order over the neutral voice; later rules override earlier ones
VOICE_RULES: tuple[tuple[str, dict[str, Any]], ...] = (
    ("dyslexia", {"speaking_rate": 0.85, "pitch": -1.0}),
    ("visualImpairment", {"speaking_rate": 0.95, "volume_gain_db": 1.0}),
)


def voice_parameters(needs: Iterable[str]) -> VoiceParameters:
    """Compose voice parameters for a set of needs."""
    declared = set(needs)
    voice = VoiceParameters()
    for tag, overrides in VOICE_RULES:
        if tag in declared:
            voice = replace(voice, **overrides)
    return voice


class SpeechSynthesizer:
    """Turns tutoring text into audio for learners who need it."""

    def __init__(self, speech_client: GoogleSpeechClient) -> None:
        self._speech = speech_client

    async def synthesize(self, text: str, adapted: AdaptedProfile) -> bytes | None:
        """Synthesize the text if any declared need calls for audio.

        Args:
            text: Text to speak.
            adapted: Adapted learner profile.

        Returns:
            Audio bytes, or None when no need calls for audio.

        Raises:
            SynthesisError: If the speech service fails.
        """
        if not adapted.wants_audio_support:
            return None

        voice = voice_parameters(adapted.need_tags)
        language = adapted.learner.language_preference

        try:
            return await self._speech.synthesize(text, language, voice)
        except SpeechServiceError as e:
            raise SynthesisError(
                "Speech synthesis failed",
                details={"error": e.message, "status_code": e.status_code},
            ) from e
