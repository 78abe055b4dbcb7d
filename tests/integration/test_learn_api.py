# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the AI tutor endpoints.

Runs the real application with JWT auth and routing; outbound services
are replaced with mocks behind the orchestrator dependency.
"""

import base64
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from adaptive_tutor.api import create_app
from adaptive_tutor.api.dependencies import get_learning_orchestrator
from adaptive_tutor.core.config import get_settings
from adaptive_tutor.domains.auth import JWTManager
from adaptive_tutor.domains.learning import (
    ContentGenerator,
    GeneratedContent,
    GenerationError,
    LearningOrchestrator,
    ProfileAdapter,
    SpeechSynthesizer,
    VisualEnrichmentEngine,
)
from adaptive_tutor.services.image_search import (
    ImageCandidate,
    ImageSearchError,
    WikimediaImageClient,
)
from adaptive_tutor.services.speech import GoogleSpeechClient

pytestmark = pytest.mark.integration

GENERATED = GeneratedContent(
    text="Gravity pulls apples down.\n\nThe Moon stays in orbit.",
    key_terms=("Gravity", "Moon"),
)


@pytest.fixture
def generator() -> MagicMock:
    """Create a mock content generator."""
    mock = MagicMock(spec=ContentGenerator)
    mock.generate = AsyncMock(return_value=GENERATED)
    return mock


@pytest.fixture
def image_client() -> MagicMock:
    """Create a mock image client."""
    client = MagicMock(spec=WikimediaImageClient)
    client.search = AsyncMock(return_value=[])
    return client


@pytest.fixture
def speech_client() -> MagicMock:
    """Create a mock speech client."""
    client = MagicMock(spec=GoogleSpeechClient)
    client.synthesize = AsyncMock(return_value=b"ID3audio")
    return client


@pytest.fixture
def app(
    adapter: ProfileAdapter,
    generator: MagicMock,
    image_client: MagicMock,
    speech_client: MagicMock,
) -> FastAPI:
    """Create the application with a mocked orchestrator."""
    application = create_app()

    def orchestrator_override() -> LearningOrchestrator:
        return LearningOrchestrator(
            adapter=adapter,
            generator=generator,
            enrichment=VisualEnrichmentEngine(image_client),
            synthesizer=SpeechSynthesizer(speech_client),
            image_client=image_client,
        )

    application.dependency_overrides[get_learning_orchestrator] = orchestrator_override
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Create a bearer header signed with the configured secret."""
    token = JWTManager(get_settings().jwt).create_access_token(
        user_id="learner-1",
        user_type="student",
    )
    return {"Authorization": f"Bearer {token}"}


class TestAuthentication:
    """Tests for bearer authentication on the AI routes."""

    def test_learn_requires_token(self, client: TestClient, sample_payload: dict[str, Any]) -> None:
        """Test unauthenticated pipeline calls get 401."""
        response = client.post("/api/v1/ai/learn", json=sample_payload)

        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}

    def test_invalid_token_rejected(
        self,
        client: TestClient,
        sample_payload: dict[str, Any],
    ) -> None:
        """Test invalid tokens get 401."""
        response = client.post(
            "/api/v1/ai/learn",
            json=sample_payload,
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    def test_preview_requires_token(self, client: TestClient) -> None:
        """Test unauthenticated previews get 401."""
        assert client.get("/api/v1/ai/preview-images/atom").status_code == 401

    def test_health_is_public(self, client: TestClient) -> None:
        """Test the health endpoint needs no token."""
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] in ("healthy", "degraded")
        assert set(body["services"]) == {"llm", "speech", "image_search"}


class TestLearnEndpoint:
    """Tests for POST /api/v1/ai/learn."""

    def test_dyslexia_learner(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sample_payload: dict[str, Any],
        image_client: MagicMock,
    ) -> None:
        """Test a dyslexia learner gets audio, images and camelCase metadata."""
        image = ImageCandidate(
            title="File:Apple.jpg",
            url="https://x.test/Apple.jpg",
            description="An apple",
        )
        image_client.search = AsyncMock(side_effect=[[image], []])

        response = client.post("/api/v1/ai/learn", json=sample_payload, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert base64.b64decode(body["response"]["audio"]) == b"ID3audio"
        assert body["response"]["images"] == [
            {"url": "https://x.test/Apple.jpg", "description": "An apple", "title": "File:Apple.jpg"}
        ]
        assert body["metadata"]["visualSupport"] is True
        assert body["metadata"]["audioSupport"] is True
        assert body["metadata"]["contentType"] == "multimodal"
        assert [a["type"] for a in body["metadata"]["adaptations"]] == ["dyslexia"]

    def test_empty_needs(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sample_payload: dict[str, Any],
        generator: MagicMock,
    ) -> None:
        """Test an empty needs list is reported as an incomplete profile."""
        sample_payload["userProfile"]["learningNeeds"] = []

        response = client.post("/api/v1/ai/learn", json=sample_payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Incomplete user profile",
            "missingFields": ["learningNeeds"],
        }
        generator.generate.assert_not_called()

    def test_missing_text(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sample_profile: dict[str, Any],
    ) -> None:
        """Test a missing text field."""
        response = client.post(
            "/api/v1/ai/learn",
            json={"userProfile": sample_profile},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Missing required information",
            "details": {"text": "Text is required", "userProfile": None},
        }

    def test_invalid_json_body(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test a non-JSON body is reported as missing information."""
        response = client.post(
            "/api/v1/ai/learn",
            content=b"not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required information"

    def test_unknown_need(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sample_payload: dict[str, Any],
    ) -> None:
        """Test an unknown tag is an invalid profile."""
        sample_payload["userProfile"]["learningNeeds"] = ["telepathy"]

        response = client.post("/api/v1/ai/learn", json=sample_payload, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid user profile"
        assert "telepathy" in body["details"]["userProfile"]

    def test_image_service_unavailable(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sample_payload: dict[str, Any],
        image_client: MagicMock,
    ) -> None:
        """Test image outages still return 200 with the generated text."""
        image_client.search = AsyncMock(side_effect=ImageSearchError("down", status_code=503))

        response = client.post("/api/v1/ai/learn", json=sample_payload, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["response"]["images"] == []
        assert body["response"]["text"] == GENERATED.text
        assert body["metadata"]["visualSupport"] is False

    def test_generation_failure(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sample_payload: dict[str, Any],
        generator: MagicMock,
    ) -> None:
        """Test generation failures return 500 with details outside production."""
        generator.generate = AsyncMock(side_effect=GenerationError("Content generation failed"))

        response = client.post("/api/v1/ai/learn", json=sample_payload, headers=auth_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to generate learning content"
        assert "GenerationError" in body["details"]

    def test_generation_failure_in_production_hides_details(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sample_payload: dict[str, Any],
        generator: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test production responses carry no traceback."""
        generator.generate = AsyncMock(side_effect=GenerationError("Content generation failed"))
        production = MagicMock(is_production=True)
        monkeypatch.setattr("adaptive_tutor.api.v1.ai.get_settings", lambda: production)

        response = client.post("/api/v1/ai/learn", json=sample_payload, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate learning content"}


class TestPreviewImagesEndpoint:
    """Tests for GET /api/v1/ai/preview-images/{term}."""

    def test_atom_preview(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        image_client: MagicMock,
    ) -> None:
        """Test at most five raster images are returned."""
        candidates = [
            ImageCandidate(title="File:Atom.svg", url="https://x.test/Atom.svg"),
            *[
                ImageCandidate(
                    title=f"File:Atom{i}.jpg",
                    url=f"https://x.test/Atom{i}.jpg",
                    license="CC BY-SA 4.0",
                )
                for i in range(6)
            ],
        ]
        image_client.search = AsyncMock(return_value=candidates)

        response = client.get("/api/v1/ai/preview-images/atom", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert 0 < len(body["images"]) <= 5
        assert all(not image["url"].lower().endswith(".svg") for image in body["images"])
        assert set(body["images"][0]) == {"url", "title", "description", "license"}

    def test_preview_failure(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        image_client: MagicMock,
    ) -> None:
        """Test image service failures return 500 with an error message."""
        image_client.search = AsyncMock(side_effect=ImageSearchError("Image search failed"))

        response = client.get("/api/v1/ai/preview-images/atom", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Image search failed"
