# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Prompt builders for the tutoring and key-term exchanges."""

from adaptive_tutor.domains.learning.models import (
    AcademicLevel,
    AdaptationProfile,
    LearnerProfile,
)

TEACHING_APPROACH = (
    "Use culturally relevant examples",
    "Focus on practical applications",
    "Include community-based learning",
    "Provide multiple explanation approaches",
    "Adapt to learning needs",
)

RESPONSE_GUIDELINES = (
    "Maintain clear structure",
    "Include practical exercises",
    "Provide concrete examples",
    "Include collaborative activities",
    "Support various learning styles",
)

CONTENT_STRUCTURING = (
    "Break into manageable segments",
    "Include clear summaries",
    "Provide practice materials",
    "Support group learning activities",
    "Enable progress tracking",
)

KEY_TERMS_PROMPT = (
    "Extract 3-5 key terms or concepts from this text that would benefit from "
    "visual representation. Reply with one term per line and nothing else:\n"
)


def _numbered(items: tuple[str, ...] | list[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def _accommodations(profile: AdaptationProfile) -> str:
    lines = [f"{profile.tag.upper()} Accommodations:"]
    for key, value in profile.content_style.items():
        # YAML booleans render as JSON-style literals
        rendered = str(value).lower() if isinstance(value, bool) else value
        lines.append(f"- {key}: {rendered}")
    lines.append(f"Pacing: {profile.pacing}")
    return "\n".join(lines)


def build_directive(
    learner: LearnerProfile,
    adaptations: tuple[AdaptationProfile, ...],
    academic: AcademicLevel,
) -> str:
    """Render the system directive for a learner.

    Sections appear in a fixed order: learning adaptations, cultural
    context, academic framework, personalization, then the fixed teaching
    approach, response guidelines and content structuring lists.
    """
    accommodations = "\n\n".join(_accommodations(p) for p in adaptations)
    return f"""You are an adaptive tutor creating personalized learning content.

LEARNING ADAPTATIONS:
{accommodations}

CULTURAL CONTEXT:
- Background: {learner.cultural_background}
- Language: {learner.language_preference}
- Community Resources: {", ".join(learner.community_resources)}

ACADEMIC FRAMEWORK:
- Level: {academic.level}
- Structure: {academic.structure}
- Assessment: {academic.assessment}
- Teaching Style: {academic.teaching_style}
- Support System: {academic.support}

PERSONALIZATION:
- Interests: {", ".join(learner.interests)}
- Learning Goals: {", ".join(learner.learning_goals)}

TEACHING APPROACH:
{_numbered(TEACHING_APPROACH)}

RESPONSE GUIDELINES:
{_numbered(RESPONSE_GUIDELINES)}

CONTENT STRUCTURING:
{_numbered(CONTENT_STRUCTURING)}"""


def build_topic_prompt(topic: str, learner: LearnerProfile) -> str:
    """Render the user turn of the tutoring exchange."""
    requests = [
        f"Uses examples relevant to {learner.cultural_background}",
        f"Supports {', '.join(learner.learning_needs)} learning needs",
        f"Connects to student interests: {', '.join(learner.interests)}",
        f"Aligns with {learner.academic_level} academic level",
        "Incorporates cultural context and understanding",
        "Provides practical applications and examples",
        "Includes collaborative learning opportunities",
        "Supports multiple learning styles",
    ]
    return (
        f"Question/Topic: {topic}\n\n"
        f"Please provide a response that:\n{_numbered(requests)}"
    )


def build_key_terms_prompt(text: str) -> str:
    """Render the user turn of the key-term exchange."""
    return f"{KEY_TERMS_PROMPT}{text}"
