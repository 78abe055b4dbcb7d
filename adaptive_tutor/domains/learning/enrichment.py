# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Visual enrichment engine.

Walks the generated text section by section. For each section that
mentions a key term, the first matching term is looked up in the image
service; when usable images come back, a visual-reference marker section
is inserted right after the section and the images are appended to the
running list.

Lookups happen sequentially in section order, so both the marker layout
and the image list follow visitation order. The same image may appear for
several sections.
"""

import logging
import re
from typing import Iterable

from adaptive_tutor.domains.learning.exceptions import EnrichmentFailure
from adaptive_tutor.domains.learning.models import AdaptedProfile, EnrichedContent
from adaptive_tutor.services.image_search import (
    ImageCandidate,
    ImageSearchError,
    WikimediaImageClient,
)

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"
VISUAL_MARKER = "[Visual Aid: {title}]"
DEFAULT_SECTION_LIMIT = 3

_MARKER_PATTERN = re.compile(r"^\[Visual Aid: .*\]$")


def filter_candidates(images: Iterable[ImageCandidate]) -> list[ImageCandidate]:
    """Keep candidates that have a URL and are not SVG files.

    Order is preserved and applying the filter twice gives the same result.
    """
    return [
        image for image in images if image.url and not image.url.lower().endswith(".svg")
    ]


def strip_visual_markers(text: str) -> str:
    """Remove visual-reference marker sections from enriched text."""
    sections = [
        section
        for section in text.split(SECTION_SEPARATOR)
        if not _MARKER_PATTERN.match(section)
    ]
    return SECTION_SEPARATOR.join(sections)


def matching_terms(section: str, key_terms: Iterable[str]) -> list[str]:
    """Key terms contained in a section, case-insensitively, in term order."""
    lowered = section.lower()
    return [term for term in key_terms if term and term.lower() in lowered]


class VisualEnrichmentEngine:
    """Adds image references to generated content."""

    def __init__(
        self,
        image_client: WikimediaImageClient,
        section_limit: int = DEFAULT_SECTION_LIMIT,
    ) -> None:
        self._images = image_client
        self._section_limit = section_limit

    async def _lookup(self, term: str) -> list[ImageCandidate]:
        try:
            candidates = await self._images.search(term, limit=self._section_limit)
        except ImageSearchError as e:
            raise EnrichmentFailure(
                f"Image lookup failed for '{term}'",
                term=term,
                details={"error": e.message, "status_code": e.status_code},
            ) from e
        return filter_candidates(candidates)

    async def enrich(
        self,
        text: str,
        key_terms: Iterable[str],
        adapted: AdaptedProfile,
    ) -> EnrichedContent:
        """Enrich text with visual references.

        Args:
            text: Generated tutoring text.
            key_terms: Terms extracted from the text.
            adapted: Adapted learner profile.

        Returns:
            EnrichedContent. When no declared need calls for visual support
            the text is returned unchanged with no images.
        """
        if not adapted.wants_visual_support:
            return EnrichedContent(text=text)

        terms = list(key_terms)
        sections: list[str] = []
        images: list[ImageCandidate] = []
        failures = 0

        for section in text.split(SECTION_SEPARATOR):
            sections.append(section)

            matches = matching_terms(section, terms)
            if not matches:
                continue

            term = matches[0]
            try:
                found = await self._lookup(term)
            except EnrichmentFailure as e:
                failures += 1
                logger.warning("Skipping images for section: %s", e)
                continue

            if found:
                sections.append(VISUAL_MARKER.format(title=found[0].title))
                images.extend(found)

        logger.info(
            "Content enriched: sections=%d, images=%d, failed_lookups=%d",
            len(sections),
            len(images),
            failures,
        )
        return EnrichedContent(text=SECTION_SEPARATOR.join(sections), images=images)
