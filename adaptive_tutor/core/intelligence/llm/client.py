# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""LLM client using LiteLLM for multi-provider support.

This module provides the language-model access used by the content
pipeline. Requests go through LiteLLM's acompletion(), so the provider
(Gemini, OpenAI, Anthropic, Ollama) is selected purely by configuration.

A Conversation holds the turns of one logical exchange sequence. The
pipeline sends the tutoring request, records the reply, then sends a
follow-up on the same conversation; nothing is kept across requests.

Example:
    >>> from adaptive_tutor.core.intelligence.llm import Conversation, LLMClient
    >>> client = LLMClient()
    >>> conversation = Conversation(system_prompt="You are a tutor.")
    >>> response = await client.converse(conversation, "Explain gravity")
    >>> print(response.content)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import litellm
from litellm import acompletion

from adaptive_tutor.core.config.settings import LLMSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from an LLM completion.

    Attributes:
        content: The generated text content.
        model: The model that generated the response.
        tokens_input: Number of input tokens used.
        tokens_output: Number of output tokens generated.
        finish_reason: Why generation stopped (stop, length, etc.).
    """

    content: str
    model: str
    tokens_input: int = 0
    tokens_output: int = 0
    finish_reason: str = "stop"

    @property
    def total_tokens(self) -> int:
        """Get total tokens used (input + output)."""
        return self.tokens_input + self.tokens_output


class LLMError(Exception):
    """Raised when a model exchange fails.

    Attributes:
        message: Error description.
        model: Model that caused the error.
        original_error: Original exception if any.
    """

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.model = model
        self.original_error = original_error
        super().__init__(self.message)


@dataclass
class Message:
    """A message in a conversation.

    Attributes:
        role: Message role (system, user, assistant).
        content: Message text content.
    """

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary format for LiteLLM."""
        return {"role": self.role, "content": self.content}


@dataclass
class Conversation:
    """Turns exchanged with the model during a single request.

    Attributes:
        system_prompt: Optional system directive sent first on every exchange.
        messages: User and assistant turns in order.
    """

    system_prompt: Optional[str] = None
    messages: list[Message] = field(default_factory=list)

    def add(self, role: str, content: str) -> None:
        """Append a turn."""
        self.messages.append(Message(role=role, content=content))

    def to_messages(self) -> list[dict[str, str]]:
        """Render the conversation in OpenAI message format."""
        rendered: list[dict[str, str]] = []
        if self.system_prompt:
            rendered.append({"role": "system", "content": self.system_prompt})
        rendered.extend(m.to_dict() for m in self.messages)
        return rendered


class LLMClient:
    """Client for LLM operations via LiteLLM.

    Attributes:
        model: Default model to use for completions.
        timeout: Request timeout in seconds.
        max_retries: Retry attempts delegated to LiteLLM.

    Example:
        >>> client = LLMClient()
        >>> response = await client.complete_with_messages(
        ...     [{"role": "user", "content": "What is photosynthesis?"}],
        ...     temperature=0.3,
        ... )
    """

    def __init__(
        self,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        llm_settings: Optional[LLMSettings] = None,
    ):
        """Initialize the LLM client.

        Args:
            model: Default model in LiteLLM format. Falls back to settings.
            timeout: Request timeout in seconds. Falls back to settings.
            max_retries: Retry attempts. Falls back to settings.
            llm_settings: LLM configuration. Uses get_settings() if None.
        """
        self._settings = llm_settings or get_settings().llm
        self._model = model or self._settings.get_default_model()
        self._timeout = timeout or self._settings.request_timeout
        self._max_retries = self._settings.max_retries if max_retries is None else max_retries

        litellm.drop_params = True

        logger.debug(
            "LLMClient initialized with model=%s, timeout=%.1fs, max_retries=%d",
            self._model,
            self._timeout,
            self._max_retries,
        )

    @property
    def model(self) -> str:
        """Get the default model."""
        return self._model

    @property
    def timeout(self) -> float:
        """Get the request timeout in seconds."""
        return self._timeout

    @property
    def max_retries(self) -> int:
        """Get the retry count passed to LiteLLM."""
        return self._max_retries

    async def complete_with_messages(
        self,
        messages: list[dict[str, Any]],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        **kwargs,
    ) -> LLMResponse:
        """Generate a completion from a list of messages.

        Args:
            messages: Conversation messages in OpenAI format.
            model: Override default model for this request.
            temperature: Sampling temperature (0-2).
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional LiteLLM parameters.

        Returns:
            LLMResponse with generated content and metadata.

        Raises:
            LLMError: If the completion fails.
            ValueError: If messages list is empty.
        """
        if not messages:
            raise ValueError("Messages list cannot be empty")

        use_model = model or self._model
        provider_params = self._settings.get_litellm_params(use_model)

        try:
            response = await acompletion(
                model=use_model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=self._timeout,
                num_retries=self._max_retries,
                **provider_params,
                **kwargs,
            )

            content = response.choices[0].message.content or ""
            finish_reason = response.choices[0].finish_reason or "stop"

            usage = getattr(response, "usage", None)
            tokens_input = getattr(usage, "prompt_tokens", 0) or 0
            tokens_output = getattr(usage, "completion_tokens", 0) or 0

            logger.debug(
                "Completion generated: model=%s, tokens_in=%d, tokens_out=%d",
                use_model,
                tokens_input,
                tokens_output,
            )

            return LLMResponse(
                content=content,
                model=use_model,
                tokens_input=tokens_input,
                tokens_output=tokens_output,
                finish_reason=finish_reason,
            )

        except Exception as e:
            logger.error(
                "Completion failed: model=%s, messages=%d, error=%s",
                use_model,
                len(messages),
                str(e),
            )
            raise LLMError(
                message=f"Completion failed: {str(e)}",
                model=use_model,
                original_error=e,
            ) from e

    async def converse(
        self,
        conversation: Conversation,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        **kwargs,
    ) -> LLMResponse:
        """Send a user turn on a conversation and record the reply.

        The user turn is only kept when the model answers, so a failed
        exchange leaves the conversation as it was.

        Args:
            conversation: Conversation to extend.
            prompt: User message text.
            temperature: Sampling temperature (0-2).
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional LiteLLM parameters.

        Returns:
            LLMResponse for this exchange.

        Raises:
            LLMError: If the completion fails.
            ValueError: If prompt is empty.
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt cannot be empty")

        messages = conversation.to_messages()
        messages.append({"role": "user", "content": prompt})

        response = await self.complete_with_messages(
            messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

        conversation.add("user", prompt)
        conversation.add("assistant", response.content)
        return response
