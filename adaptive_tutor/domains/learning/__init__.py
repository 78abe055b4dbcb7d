# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learning content pipeline.

- ProfileAdapter: learner profile to adaptations and system directive
- ContentGenerator: tutoring content and key terms from the language model
- VisualEnrichmentEngine: per-section image references
- SpeechSynthesizer: need-specific speech audio
- LearningOrchestrator: request validation, sequencing and assembly
"""

from adaptive_tutor.domains.learning.adapter import ProfileAdapter
from adaptive_tutor.domains.learning.catalog import (
    AdaptationCatalog,
    YAMLLoadError,
    get_adaptation_catalog,
)
from adaptive_tutor.domains.learning.enrichment import (
    VisualEnrichmentEngine,
    filter_candidates,
    strip_visual_markers,
)
from adaptive_tutor.domains.learning.exceptions import (
    EnrichmentFailure,
    GenerationError,
    LearningPipelineError,
    PipelineError,
    SynthesisError,
    ValidationError,
)
from adaptive_tutor.domains.learning.generator import (
    ContentGenerator,
    configure_generation,
    parse_key_terms,
)
from adaptive_tutor.domains.learning.models import (
    AcademicLevel,
    AdaptationProfile,
    AdaptedProfile,
    EnrichedContent,
    GeneratedContent,
    GenerationConfig,
    GenerationRequest,
    LearnerProfile,
)
from adaptive_tutor.domains.learning.orchestrator import LearningOrchestrator, PipelineStage
from adaptive_tutor.domains.learning.speech import SpeechSynthesizer, voice_parameters

__all__ = [
    # Components
    "ProfileAdapter",
    "ContentGenerator",
    "VisualEnrichmentEngine",
    "SpeechSynthesizer",
    "LearningOrchestrator",
    "PipelineStage",
    # Catalog
    "AdaptationCatalog",
    "YAMLLoadError",
    "get_adaptation_catalog",
    # Functions
    "configure_generation",
    "parse_key_terms",
    "filter_candidates",
    "strip_visual_markers",
    "voice_parameters",
    # Models
    "AcademicLevel",
    "AdaptationProfile",
    "AdaptedProfile",
    "EnrichedContent",
    "GeneratedContent",
    "GenerationConfig",
    "GenerationRequest",
    "LearnerProfile",
    # Exceptions
    "LearningPipelineError",
    "ValidationError",
    "GenerationError",
    "EnrichmentFailure",
    "SynthesisError",
    "PipelineError",
]
