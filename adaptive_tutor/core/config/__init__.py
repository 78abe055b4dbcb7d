# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for Adaptive Tutor.

This package provides centralized configuration management:
- Settings: Pydantic-based settings loaded from environment variables
- data/: Static adaptation and academic-level tables (YAML)

Example:
    >>> from adaptive_tutor.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from pathlib import Path

from adaptive_tutor.core.config.settings import (
    APISettings,
    CORSSettings,
    ImageSearchSettings,
    JWTSettings,
    LLMSettings,
    RateLimitSettings,
    Settings,
    SpeechSettings,
    clear_settings_cache,
    get_settings,
)

DATA_DIR = Path(__file__).parent / "data"

__all__ = [
    "DATA_DIR",
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "LLMSettings",
    "ImageSearchSettings",
    "SpeechSettings",
    "JWTSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
]
