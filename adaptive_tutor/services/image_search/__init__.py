# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Image search service client."""

from adaptive_tutor.services.image_search.client import (
    ImageCandidate,
    ImageSearchError,
    WikimediaImageClient,
)

__all__ = [
    "ImageCandidate",
    "ImageSearchError",
    "WikimediaImageClient",
]
