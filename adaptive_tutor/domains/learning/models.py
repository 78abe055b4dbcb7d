# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for the learning content pipeline.

LearnerProfile is the caller-supplied description of the learner; it uses
camelCase aliases to match the wire format. AdaptationProfile and
AcademicLevel are rows of the static tables loaded by the catalog. The
remaining types are the values passed between pipeline stages.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from adaptive_tutor.services.image_search import ImageCandidate

DEFAULT_LANGUAGE = "en-US"


class LearnerProfile(BaseModel):
    """Learner profile supplied with each request.

    Attributes:
        learning_needs: Need tags in declaration order, duplicates removed.
        cultural_background: Free-text cultural descriptor.
        academic_level: Academic level key (basic, standard, advanced).
        interests: Learner interests.
        learning_goals: Learner goals.
        language_preference: Locale tag used for speech synthesis.
        community_resources: Resources available in the learner's community.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    learning_needs: tuple[str, ...] = Field(min_length=1)
    cultural_background: str
    academic_level: str
    interests: tuple[str, ...]
    learning_goals: tuple[str, ...]
    language_preference: str = DEFAULT_LANGUAGE
    community_resources: tuple[str, ...] = ()

    @field_validator("learning_needs")
    @classmethod
    def dedupe_needs(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @field_validator("language_preference", mode="before")
    @classmethod
    def default_language(cls, value: Any) -> Any:
        return value or DEFAULT_LANGUAGE

    @field_validator("community_resources", mode="before")
    @classmethod
    def default_resources(cls, value: Any) -> Any:
        return value or ()


class AdaptationProfile(BaseModel):
    """Static content adaptation for one need tag.

    Attributes:
        tag: Need tag this profile answers to.
        label: Human-readable name.
        content_style: Capability flags in display order.
        pacing: Pacing descriptor.
        visual_support: Whether the need qualifies for visual enrichment.
        audio_support: Whether the need qualifies for speech synthesis.
        attributes: Other descriptors carried for reference.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = Field(min_length=1)
    label: str = ""
    content_style: dict[str, bool | str]
    pacing: str
    visual_support: bool = False
    audio_support: bool = False
    attributes: dict[str, Any] = Field(default_factory=dict)

    @property
    def features(self) -> list[str]:
        """Names of the content-style capabilities."""
        return list(self.content_style)


class AcademicLevel(BaseModel):
    """Static academic framework for one academic level."""

    model_config = ConfigDict(frozen=True)

    level: str
    structure: str
    assessment: str
    pacing: str
    support: str
    evaluation_method: str
    teaching_style: str


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters for the tutoring exchange."""

    temperature: float
    max_output_tokens: int


@dataclass(frozen=True)
class GenerationRequest:
    """Everything the tutoring exchange sends to the language model."""

    directive: str
    config: GenerationConfig
    topic: str


@dataclass(frozen=True)
class AdaptedProfile:
    """Result of adapting a learner profile.

    Attributes:
        learner: The validated learner profile.
        adaptations: Adaptation profiles in need declaration order.
        academic: Academic framework for the learner's level.
        directive: Rendered system directive for the language model.
    """

    learner: LearnerProfile
    adaptations: tuple[AdaptationProfile, ...]
    academic: AcademicLevel
    directive: str

    @property
    def need_tags(self) -> tuple[str, ...]:
        return self.learner.learning_needs

    @property
    def wants_visual_support(self) -> bool:
        return any(a.visual_support for a in self.adaptations)

    @property
    def wants_audio_support(self) -> bool:
        return any(a.audio_support for a in self.adaptations)


@dataclass(frozen=True)
class GeneratedContent:
    """Tutoring text together with the key terms extracted from it."""

    text: str
    key_terms: tuple[str, ...]


@dataclass
class EnrichedContent:
    """Text annotated with visual-reference markers plus matched images."""

    text: str
    images: list[ImageCandidate] = field(default_factory=list)
