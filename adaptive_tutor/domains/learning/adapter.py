# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Profile adapter.

Turns a learner profile into the adaptation profiles for its needs, the
academic framework for its level and the rendered system directive. No
I/O happens here; the static tables come from the catalog.
"""

import logging

from adaptive_tutor.domains.learning.catalog import AdaptationCatalog, get_adaptation_catalog
from adaptive_tutor.domains.learning.exceptions import ValidationError
from adaptive_tutor.domains.learning.models import AdaptedProfile, LearnerProfile
from adaptive_tutor.domains.learning.prompts import build_directive

logger = logging.getLogger(__name__)


class ProfileAdapter:
    """Adapts learner profiles using the static adaptation tables."""

    def __init__(self, catalog: AdaptationCatalog | None = None) -> None:
        self._catalog = catalog or get_adaptation_catalog()

    @property
    def catalog(self) -> AdaptationCatalog:
        return self._catalog

    def adapt(self, learner: LearnerProfile) -> AdaptedProfile:
        """Adapt a learner profile.

        Args:
            learner: Validated learner profile.

        Returns:
            AdaptedProfile with adaptations in need declaration order.

        Raises:
            ValidationError: If no needs are declared, a need tag is unknown
                or the academic level is not supported.
        """
        if not learner.learning_needs:
            raise ValidationError(
                "Invalid user profile",
                details={"userProfile": "learningNeeds must not be empty"},
            )

        unknown = [tag for tag in learner.learning_needs if self._catalog.profile(tag) is None]
        if unknown:
            raise ValidationError(
                "Invalid user profile",
                details={
                    "userProfile": (
                        f"Unknown learning needs: {', '.join(unknown)}. "
                        f"Supported: {', '.join(self._catalog.need_tags)}"
                    )
                },
            )

        academic = self._catalog.academic_level(learner.academic_level)
        if academic is None:
            raise ValidationError(
                "Invalid user profile",
                details={
                    "userProfile": (
                        f"Unknown academic level: {learner.academic_level}. "
                        f"Supported: {', '.join(self._catalog.levels)}"
                    )
                },
            )

        adaptations = tuple(self._catalog.adaptations[tag] for tag in learner.learning_needs)
        directive = build_directive(learner, adaptations, academic)

        logger.debug(
            "Profile adapted: needs=%s, level=%s, directive_chars=%d",
            ",".join(learner.learning_needs),
            academic.level,
            len(directive),
        )
        return AdaptedProfile(
            learner=learner,
            adaptations=adaptations,
            academic=academic,
            directive=directive,
        )
