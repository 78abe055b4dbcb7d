# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response schemas for the learning endpoints.

Fields are snake_case in Python and camelCase on the wire.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseImage(_CamelModel):
    """Image reference included with generated content."""

    url: str
    description: str | None = None
    title: str


class LearnContent(_CamelModel):
    """Generated content of a learn response."""

    text: str
    images: list[ResponseImage] = Field(default_factory=list)
    audio: str | None = Field(default=None, description="Base64-encoded MP3 audio")


class AdaptationSummary(_CamelModel):
    """Adaptation applied for one declared need."""

    type: str
    features: list[str]


class LearnMetadata(_CamelModel):
    """Describes how the content was adapted."""

    adaptations: list[AdaptationSummary]
    visual_support: bool
    audio_support: bool
    content_type: Literal["multimodal"] = "multimodal"


class LearnResponse(_CamelModel):
    """Success envelope of POST /learn."""

    success: Literal[True] = True
    response: LearnContent
    metadata: LearnMetadata


class PreviewImage(_CamelModel):
    """Image descriptor returned by the preview endpoint."""

    url: str
    title: str
    description: str | None = None
    license: str | None = None


class PreviewImagesResponse(_CamelModel):
    """Success envelope of GET /preview-images/{term}."""

    success: Literal[True] = True
    images: list[PreviewImage]
