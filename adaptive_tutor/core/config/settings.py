# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for Adaptive Tutor.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from adaptive_tutor.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """LLM provider configuration using LiteLLM.

    The provider is picked by configuration; LiteLLM routes on the model
    prefix. Gemini is the default since the speech key can be shared with it.

    Attributes:
        default_provider: Default LLM provider to use.
        ollama_base_url: Base URL for Ollama server.
        ollama_default_model: Default Ollama model.
        openai_api_key: OpenAI API key.
        openai_default_model: Default OpenAI model.
        google_api_key: Google AI API key.
        google_default_model: Default Google model.
        temperature: Sampling temperature when no need-specific rule applies.
        max_tokens: Output cap when no need-specific rule applies.
        request_timeout: Request timeout in seconds.
        max_retries: Maximum retry attempts inside LiteLLM.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    default_provider: Literal["ollama", "openai", "google"] = "google"

    ollama_base_url: str = Field(
        default="http://localhost:11434",
        validation_alias="OLLAMA_BASE_URL",
    )
    ollama_default_model: str = Field(
        default="qwen2.5:7b",
        validation_alias="OLLAMA_DEFAULT_MODEL",
    )

    openai_api_key: SecretStr | None = Field(
        default=None,
        validation_alias="OPENAI_API_KEY",
    )
    openai_default_model: str = Field(
        default="gpt-4o",
        validation_alias="OPENAI_DEFAULT_MODEL",
    )

    google_api_key: SecretStr | None = Field(
        default=None,
        validation_alias="GOOGLE_API_KEY",
    )
    google_default_model: str = Field(
        default="gemini-1.5-flash",
        validation_alias="GOOGLE_DEFAULT_MODEL",
    )

    temperature: float = Field(default=0.7, validation_alias="LLM_TEMPERATURE")
    max_tokens: int = Field(default=1500, validation_alias="LLM_MAX_TOKENS")
    request_timeout: float = Field(default=60.0, validation_alias="LLM_REQUEST_TIMEOUT")
    max_retries: int = Field(default=0, validation_alias="LLM_MAX_RETRIES")

    def get_default_model(self) -> str:
        """Get the default model for the configured provider.

        Returns:
            Model identifier string for the default provider.
        """
        models = {
            "ollama": f"ollama/{self.ollama_default_model}",
            "openai": self.openai_default_model,
            "google": f"gemini/{self.google_default_model}",
        }
        return models[self.default_provider]

    def get_litellm_params(self, model: str) -> dict[str, Any]:
        """Get api_base/api_key to pass to LiteLLM acompletion() for a model.

        The provider is detected from the model string prefix.

        Args:
            model: Model string in LiteLLM format.

        Returns:
            Dictionary with api_base and/or api_key if configured.
        """
        model_lower = model.lower()
        params: dict[str, Any] = {}

        if model_lower.startswith(("ollama/", "ollama_chat/")):
            params["api_base"] = self.ollama_base_url
        elif model_lower.startswith(("gpt", "openai/")):
            if self.openai_api_key:
                params["api_key"] = self.openai_api_key.get_secret_value()
        elif model_lower.startswith(("gemini", "google/")):
            if self.google_api_key:
                params["api_key"] = self.google_api_key.get_secret_value()

        return params

    @property
    def is_configured(self) -> bool:
        """Check whether the default provider has the credentials it needs."""
        if self.default_provider == "ollama":
            return bool(self.ollama_base_url)
        keys = {
            "openai": self.openai_api_key,
            "google": self.google_api_key,
        }
        return keys[self.default_provider] is not None


class ImageSearchSettings(BaseSettings):
    """Image search service configuration (Wikimedia Commons).

    Attributes:
        api_url: MediaWiki API endpoint.
        user_agent: User-Agent header required by Wikimedia API etiquette.
        timeout: Request timeout in seconds.
        section_limit: Candidates requested per enriched section.
        preview_limit: Candidates requested by the preview endpoint.
        thumbnail_width: Width requested for scaled image URLs.
    """

    model_config = SettingsConfigDict(
        env_prefix="IMAGE_SEARCH_",
        extra="ignore",
    )

    api_url: str = "https://commons.wikimedia.org/w/api.php"
    user_agent: str = "AdaptiveTutor/1.0 (educational content pipeline)"
    timeout: float = 15.0
    section_limit: int = 3
    preview_limit: int = 5
    thumbnail_width: int = 800


class SpeechSettings(BaseSettings):
    """Google Cloud Text-to-Speech configuration.

    Attributes:
        api_key: Google API key (falls back to GOOGLE_API_KEY).
        api_url: text:synthesize REST endpoint.
        timeout: Request timeout in seconds.
        audio_encoding: Output encoding requested from the service.
        ssml_gender: Voice gender requested from the service.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPEECH_",
        extra="ignore",
    )

    api_key: SecretStr | None = None
    api_url: str = "https://texttospeech.googleapis.com/v1/text:synthesize"
    timeout: float = 60.0
    audio_encoding: str = "MP3"
    ssml_gender: str = "NEUTRAL"


class JWTSettings(BaseSettings):
    """JWT authentication configuration.

    Attributes:
        secret_key: Secret key for signing tokens.
        algorithm: JWT signing algorithm.
        access_token_expire_minutes: Access token expiration time.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        extra="ignore",
    )

    secret_key: SecretStr = SecretStr("change-this-in-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(
        default=30,
        validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration.

    Attributes:
        learn_per_minute: Pipeline requests allowed per client per minute.
        preview_per_minute: Image previews allowed per client per minute.
        storage_uri: slowapi storage backend.
    """

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        extra="ignore",
    )

    learn_per_minute: int = 30
    preview_per_minute: int = 120
    storage_uri: str = "memory://"


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """HTTP surface configuration.

    Attributes:
        title: OpenAPI title.
        root_path: Prefix stripped by a reverse proxy, if any.
        docs_enabled: Serve interactive docs (only honoured in debug mode).
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    title: str = "Adaptive Tutor API"
    root_path: str = ""
    docs_enabled: bool = True


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        adaptation_config_dir: Directory holding the static adaptation tables.
        llm: LLM provider settings.
        image_search: Image search settings.
        speech: Speech synthesis settings.
        jwt: JWT authentication settings.
        rate_limit: Rate limiting settings.
        cors: CORS settings.
        api: HTTP surface settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    adaptation_config_dir: Path | None = None

    llm: LLMSettings = Field(default_factory=LLMSettings)
    image_search: ImageSearchSettings = Field(default_factory=ImageSearchSettings)
    speech: SpeechSettings = Field(default_factory=SpeechSettings)
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            default_jwt_secret = "change-this-in-production"
            if self.jwt.secret_key.get_secret_value() == default_jwt_secret:
                raise ValueError(
                    "JWT secret key must be changed from default in production. "
                    "Set JWT_SECRET_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def speech_api_key(self) -> str | None:
        """Resolve the speech API key, falling back to the Google LLM key."""
        if self.speech.api_key:
            return self.speech.api_key.get_secret_value()
        if self.llm.google_api_key:
            return self.llm.google_api_key.get_secret_value()
        return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
