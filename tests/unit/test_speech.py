# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the speech synthesizer."""

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from adaptive_tutor.domains.learning import (
    AdaptedProfile,
    SpeechSynthesizer,
    SynthesisError,
    voice_parameters,
)
from adaptive_tutor.services.speech import (
    GoogleSpeechClient,
    SpeechServiceError,
    VoiceParameters,
)


@pytest.fixture
def speech_client() -> MagicMock:
    """Create a mock speech client."""
    client = MagicMock(spec=GoogleSpeechClient)
    client.synthesize = AsyncMock(return_value=b"ID3audio")
    return client


@pytest.mark.unit
class TestVoiceParameters:
    """Tests for voice parameter composition."""

    def test_neutral_voice(self) -> None:
        """Test needs without voice rules keep the natural voice."""
        assert voice_parameters(["adhd"]) == VoiceParameters(1.0, 0.0, 0.0)

    def test_dyslexia(self) -> None:
        """Test dyslexia slows and lowers the voice."""
        assert voice_parameters(["dyslexia"]) == VoiceParameters(0.85, -1.0, 0.0)

    def test_visual_impairment(self) -> None:
        """Test visual impairment slows slightly and raises volume."""
        assert voice_parameters(["visualImpairment"]) == VoiceParameters(0.95, 0.0, 1.0)

    @pytest.mark.parametrize(
        "needs",
        [["dyslexia", "visualImpairment"], ["visualImpairment", "dyslexia"]],
    )
    def test_later_rule_overrides(self, needs: list[str]) -> None:
        """Test both rules apply and the visual-impairment rate wins."""
        assert voice_parameters(needs) == VoiceParameters(0.95, -1.0, 1.0)


@pytest.mark.unit
class TestSpeechSynthesizer:
    """Tests for SpeechSynthesizer.synthesize."""

    @pytest.mark.asyncio
    async def test_no_audio_need_is_noop(
        self,
        speech_client: MagicMock,
        make_adapted: Callable[..., AdaptedProfile],
    ) -> None:
        """Test profiles without audio support make no speech calls."""
        synthesizer = SpeechSynthesizer(speech_client)

        audio = await synthesizer.synthesize("Hello", make_adapted(learningNeeds=["adhd"]))

        assert audio is None
        speech_client.synthesize.assert_not_called()

    @pytest.mark.asyncio
    async def test_synthesizes_with_profile_locale(
        self,
        speech_client: MagicMock,
        make_adapted: Callable[..., AdaptedProfile],
    ) -> None:
        """Test the learner's locale and voice are passed to the service."""
        synthesizer = SpeechSynthesizer(speech_client)
        adapted = make_adapted(languagePreference="sw-KE")

        audio = await synthesizer.synthesize("Habari", adapted)

        assert audio == b"ID3audio"
        speech_client.synthesize.assert_awaited_once_with(
            "Habari", "sw-KE", VoiceParameters(0.85, -1.0, 0.0)
        )

    @pytest.mark.asyncio
    async def test_service_failure_raises_synthesis_error(
        self,
        speech_client: MagicMock,
        make_adapted: Callable[..., AdaptedProfile],
    ) -> None:
        """Test speech service errors surface as SynthesisError."""
        speech_client.synthesize = AsyncMock(
            side_effect=SpeechServiceError("Speech API error: 403", status_code=403)
        )
        synthesizer = SpeechSynthesizer(speech_client)

        with pytest.raises(SynthesisError) as exc_info:
            await synthesizer.synthesize("Hello", make_adapted())

        assert exc_info.value.details["status_code"] == 403
