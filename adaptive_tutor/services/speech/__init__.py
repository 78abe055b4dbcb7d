# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Speech synthesis service client."""

from adaptive_tutor.services.speech.client import (
    GoogleSpeechClient,
    SpeechServiceError,
    VoiceParameters,
)

__all__ = [
    "GoogleSpeechClient",
    "SpeechServiceError",
    "VoiceParameters",
]
