# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for the learning content pipeline.

- LearningPipelineError: Base exception for pipeline errors
- ValidationError: Malformed or incomplete request (reported as 400)
- GenerationError: Language-model failure (aborts the request)
- EnrichmentFailure: Image lookup failure for one term (recovered locally)
- SynthesisError: Speech failure (recovered by omitting audio)
- PipelineError: Unexpected failure inside a stage
"""


class LearningPipelineError(Exception):
    """Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ValidationError(LearningPipelineError):
    """Request or learner profile is malformed or incomplete.

    Attributes:
        missing_fields: Required profile fields that were absent or empty.
            When set, the error is reported as a missingFields list
            instead of a details mapping.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        missing_fields: list[str] | None = None,
    ):
        self.missing_fields = missing_fields or []
        super().__init__(message, details)

    def to_response(self) -> dict:
        """Render the 400 response body."""
        if self.missing_fields:
            return {"error": self.message, "missingFields": self.missing_fields}
        return {"error": self.message, "details": self.details}


class GenerationError(LearningPipelineError):
    """The language-model service failed on either exchange."""


class EnrichmentFailure(LearningPipelineError):
    """Image lookup failed for one term.

    Attributes:
        term: Search term of the failed lookup.
    """

    def __init__(self, message: str, term: str, details: dict | None = None):
        self.term = term
        super().__init__(message, details)


class SynthesisError(LearningPipelineError):
    """The speech service failed to produce audio."""


class PipelineError(LearningPipelineError):
    """A stage failed for an unexpected reason.

    Attributes:
        stage: Pipeline stage that was running.
    """

    def __init__(self, message: str, stage: str, details: dict | None = None):
        self.stage = stage
        super().__init__(message, details)
