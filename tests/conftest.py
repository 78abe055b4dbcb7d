# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Callable, Generator
from typing import Any

import pytest

from adaptive_tutor.core.config import DATA_DIR
from adaptive_tutor.domains.learning import (
    AdaptationCatalog,
    AdaptedProfile,
    LearnerProfile,
    ProfileAdapter,
)
from adaptive_tutor.services.image_search import ImageCandidate


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (in-process app, mocked services)"
    )


# =============================================================================
# Rate Limiting
# =============================================================================


@pytest.fixture(autouse=True)
def disable_rate_limit() -> Generator[None, None, None]:
    """Disable the shared slowapi limiter so tests don't trip each other."""
    from adaptive_tutor.api.middleware.rate_limit import limiter

    limiter.enabled = False
    yield
    limiter.enabled = True


# =============================================================================
# Profile Fixtures
# =============================================================================


@pytest.fixture
def sample_profile() -> dict[str, Any]:
    """Provide a learner profile as sent by the classroom client."""
    return {
        "learningNeeds": ["dyslexia"],
        "culturalBackground": "Kenyan",
        "academicLevel": "basic",
        "interests": ["science"],
        "learningGoals": ["understand gravity"],
    }


@pytest.fixture
def sample_payload(sample_profile: dict[str, Any]) -> dict[str, Any]:
    """Provide a complete /learn request body."""
    return {"text": "Explain gravity", "userProfile": sample_profile}


@pytest.fixture(scope="session")
def catalog() -> AdaptationCatalog:
    """Provide the adaptation catalog shipped with the package."""
    return AdaptationCatalog.from_directory(DATA_DIR)


@pytest.fixture
def adapter(catalog: AdaptationCatalog) -> ProfileAdapter:
    """Provide a profile adapter over the shipped catalog."""
    return ProfileAdapter(catalog)


@pytest.fixture
def make_adapted(
    adapter: ProfileAdapter,
    sample_profile: dict[str, Any],
) -> Callable[..., AdaptedProfile]:
    """Provide a factory for adapted profiles with overridden fields."""

    def _make(**overrides: Any) -> AdaptedProfile:
        data = {**sample_profile, **overrides}
        return adapter.adapt(LearnerProfile.model_validate(data))

    return _make


# =============================================================================
# Image Fixtures
# =============================================================================


@pytest.fixture
def sample_images() -> list[ImageCandidate]:
    """Provide image candidates with one SVG and one missing URL."""
    return [
        ImageCandidate(
            title="File:Apple falling.jpg",
            url="https://upload.wikimedia.org/apple_falling.jpg",
            description="An apple falling from a tree",
            license="CC BY-SA 4.0",
        ),
        ImageCandidate(
            title="File:Gravity diagram.svg",
            url="https://upload.wikimedia.org/gravity_diagram.svg",
        ),
        ImageCandidate(title="File:Broken.png", url=None),
        ImageCandidate(
            title="File:Moon orbit.png",
            url="https://upload.wikimedia.org/moon_orbit.png",
            description="The Moon orbiting the Earth",
            license="Public domain",
        ),
    ]
