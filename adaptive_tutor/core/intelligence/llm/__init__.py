# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""LLM client module using LiteLLM.

Components:
- LLMClient: Async completions over message lists and conversations
- Conversation: Turns exchanged during one request
"""

from adaptive_tutor.core.intelligence.llm.client import (
    Conversation,
    LLMClient,
    LLMError,
    LLMResponse,
    Message,
)

__all__ = [
    "Conversation",
    "LLMClient",
    "LLMError",
    "LLMResponse",
    "Message",
]
