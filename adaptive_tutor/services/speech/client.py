# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Google Cloud Text-to-Speech client.

Calls the text:synthesize REST endpoint and returns the decoded audio
bytes. Voice shaping (speaking rate, pitch, volume gain) is passed through
as given; choosing those values is the caller's job.
"""

import base64
import binascii
import logging
from dataclasses import dataclass

import aiohttp

from adaptive_tutor.core.config.settings import SpeechSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoiceParameters:
    """Voice shaping parameters for one synthesis call.

    Attributes:
        speaking_rate: 1.0 is the voice's natural speed.
        pitch: Semitones relative to the natural pitch.
        volume_gain_db: Gain relative to the natural volume.
    """

    speaking_rate: float = 1.0
    pitch: float = 0.0
    volume_gain_db: float = 0.0


class SpeechServiceError(Exception):
    """Raised when the speech service fails.

    Attributes:
        message: Error description.
        status_code: HTTP status code if the service answered.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GoogleSpeechClient:
    """Async client for Google Cloud Text-to-Speech.

    Attributes:
        api_url: text:synthesize endpoint.
        timeout: aiohttp client timeout.
    """

    def __init__(
        self,
        api_key: str | None = None,
        settings: SpeechSettings | None = None,
    ) -> None:
        """Initialize the speech client.

        Args:
            api_key: Google API key. Resolved from settings if None.
            settings: Speech configuration. Uses get_settings() if None.
        """
        app_settings = get_settings()
        self._settings = settings or app_settings.speech
        self._api_key = api_key or app_settings.speech_api_key
        self.api_url = self._settings.api_url
        self.timeout = aiohttp.ClientTimeout(total=self._settings.timeout)

    def _build_payload(
        self,
        text: str,
        language_code: str,
        voice: VoiceParameters,
    ) -> dict:
        return {
            "input": {"text": text},
            "voice": {
                "languageCode": language_code,
                "ssmlGender": self._settings.ssml_gender,
            },
            "audioConfig": {
                "audioEncoding": self._settings.audio_encoding,
                "speakingRate": voice.speaking_rate,
                "pitch": voice.pitch,
                "volumeGainDb": voice.volume_gain_db,
            },
        }

    async def synthesize(
        self,
        text: str,
        language_code: str,
        voice: VoiceParameters,
    ) -> bytes:
        """Synthesize speech for a text.

        Args:
            text: Text to speak.
            language_code: BCP-47 locale, e.g. "en-US".
            voice: Voice shaping parameters.

        Returns:
            Encoded audio bytes.

        Raises:
            SpeechServiceError: If the key is missing, the request fails or
                the response holds no audio.
        """
        if not self._api_key:
            raise SpeechServiceError("Google API key not configured for speech synthesis")

        payload = self._build_payload(text, language_code, voice)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    self.api_url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": self._api_key,
                    },
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(
                            "Speech API error: status=%d, response=%s",
                            response.status,
                            error_text[:500],
                        )
                        raise SpeechServiceError(
                            f"Speech API error: {response.status}",
                            status_code=response.status,
                        )
                    try:
                        response_data = await response.json()
                    except ValueError as e:
                        raise SpeechServiceError("Speech API returned an invalid body") from e

        except aiohttp.ClientError as e:
            logger.error("Speech API connection error: %s", str(e))
            raise SpeechServiceError(f"Failed to connect to speech API: {e}") from e
        except TimeoutError as e:
            raise SpeechServiceError("Speech API request timed out") from e

        if not isinstance(response_data, dict):
            raise SpeechServiceError("Speech API returned an invalid body")

        audio_content = response_data.get("audioContent")
        if not audio_content:
            raise SpeechServiceError("Speech API returned no audio content")

        try:
            audio = base64.b64decode(audio_content)
        except (binascii.Error, ValueError) as e:
            raise SpeechServiceError("Speech API returned malformed audio content") from e

        logger.info(
            "Synthesized speech: chars=%d, language=%s, bytes=%d",
            len(text),
            language_code,
            len(audio),
        )
        return audio
