# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the profile adapter."""

from typing import Any, Callable

import pytest

from adaptive_tutor.domains.learning import (
    AdaptedProfile,
    LearnerProfile,
    ProfileAdapter,
    ValidationError,
)


@pytest.mark.unit
class TestLearnerProfile:
    """Tests for LearnerProfile parsing."""

    def test_camel_case_fields(self, sample_profile: dict[str, Any]) -> None:
        """Test wire-format aliases and defaults."""
        profile = LearnerProfile.model_validate(sample_profile)

        assert profile.learning_needs == ("dyslexia",)
        assert profile.cultural_background == "Kenyan"
        assert profile.language_preference == "en-US"
        assert profile.community_resources == ()

    def test_duplicate_needs_collapse(self, sample_profile: dict[str, Any]) -> None:
        """Test duplicate tags keep their first occurrence."""
        sample_profile["learningNeeds"] = ["adhd", "dyslexia", "adhd"]

        profile = LearnerProfile.model_validate(sample_profile)

        assert profile.learning_needs == ("adhd", "dyslexia")

    def test_null_language_uses_default(self, sample_profile: dict[str, Any]) -> None:
        """Test a null language preference falls back to en-US."""
        sample_profile["languagePreference"] = None

        assert LearnerProfile.model_validate(sample_profile).language_preference == "en-US"


@pytest.mark.unit
class TestProfileAdapter:
    """Tests for ProfileAdapter.adapt."""

    def test_adapts_in_declaration_order(
        self,
        make_adapted: Callable[..., AdaptedProfile],
    ) -> None:
        """Test adaptations follow the declared need order."""
        adapted = make_adapted(learningNeeds=["visualImpairment", "adhd"])

        assert [a.tag for a in adapted.adaptations] == ["visualImpairment", "adhd"]
        assert adapted.academic.level == "basic"
        assert adapted.wants_visual_support is True
        assert adapted.wants_audio_support is True

    def test_support_flags(self, make_adapted: Callable[..., AdaptedProfile]) -> None:
        """Test support flags for single needs."""
        adhd = make_adapted(learningNeeds=["adhd"])
        blind = make_adapted(learningNeeds=["visualImpairment"])

        assert (adhd.wants_visual_support, adhd.wants_audio_support) == (True, False)
        assert (blind.wants_visual_support, blind.wants_audio_support) == (False, True)

    def test_directive_sections_in_order(
        self,
        make_adapted: Callable[..., AdaptedProfile],
    ) -> None:
        """Test the directive holds every section in a fixed order."""
        adapted = make_adapted(
            learningNeeds=["dyslexia", "languageLearner"],
            communityResources=["library", "radio"],
        )
        directive = adapted.directive

        headings = [
            "LEARNING ADAPTATIONS:",
            "CULTURAL CONTEXT:",
            "ACADEMIC FRAMEWORK:",
            "PERSONALIZATION:",
            "TEACHING APPROACH:",
            "RESPONSE GUIDELINES:",
            "CONTENT STRUCTURING:",
        ]
        positions = [directive.index(h) for h in headings]
        assert positions == sorted(positions)

        assert "DYSLEXIA Accommodations:" in directive
        assert "LANGUAGELEARNER Accommodations:" in directive
        assert "- textFormatting: true" in directive
        assert "- Background: Kenyan" in directive
        assert "- Community Resources: library, radio" in directive
        assert "- Structure: fundamental" in directive
        assert "- Support System: community-based" in directive
        assert "- Interests: science" in directive
        assert "- Learning Goals: understand gravity" in directive

    def test_unknown_need_rejected(
        self,
        adapter: ProfileAdapter,
        sample_profile: dict[str, Any],
    ) -> None:
        """Test an unknown tag is a validation error."""
        sample_profile["learningNeeds"] = ["dyslexia", "dyscalculia"]
        learner = LearnerProfile.model_validate(sample_profile)

        with pytest.raises(ValidationError) as exc_info:
            adapter.adapt(learner)

        assert exc_info.value.message == "Invalid user profile"
        assert "dyscalculia" in exc_info.value.details["userProfile"]

    def test_unknown_level_rejected(
        self,
        adapter: ProfileAdapter,
        sample_profile: dict[str, Any],
    ) -> None:
        """Test an unsupported academic level is a validation error."""
        sample_profile["academicLevel"] = "expert"
        learner = LearnerProfile.model_validate(sample_profile)

        with pytest.raises(ValidationError) as exc_info:
            adapter.adapt(learner)

        assert "expert" in exc_info.value.details["userProfile"]

    def test_empty_needs_rejected(
        self,
        adapter: ProfileAdapter,
        sample_profile: dict[str, Any],
    ) -> None:
        """Test a profile constructed without needs is rejected."""
        learner = LearnerProfile.model_construct(
            **{
                "learning_needs": (),
                "cultural_background": "Kenyan",
                "academic_level": "basic",
                "interests": ("science",),
                "learning_goals": ("understand gravity",),
                "language_preference": "en-US",
                "community_resources": (),
            }
        )

        with pytest.raises(ValidationError):
            adapter.adapt(learner)
