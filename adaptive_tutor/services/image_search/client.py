# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Wikimedia Commons image search client.

Queries the MediaWiki API with a search generator and returns image
candidates with their URL, description and license metadata. The client
does not filter results; callers decide which candidates are usable.

Example:
    client = WikimediaImageClient()
    candidates = await client.search("gravity", limit=3)
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from adaptive_tutor.core.config.settings import ImageSearchSettings, get_settings

logger = logging.getLogger(__name__)

# Restrict the search to files that carry a "depicts" statement
DEPICTS_FILTER = "haswbstatement:P180"


class ImageCandidate(BaseModel):
    """Image descriptor returned by the image service.

    Attributes:
        title: File page title.
        url: Direct media URL, None when the service returned no usable info.
        description: Image description (may contain HTML).
        license: License short name.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    url: str | None = None
    description: str | None = None
    license: str | None = None


class ImageSearchError(Exception):
    """Raised when the image service cannot be reached or answers badly.

    Attributes:
        message: Error description.
        term: Search term of the failed lookup.
        status_code: HTTP status code if the service answered.
    """

    def __init__(
        self,
        message: str,
        term: str | None = None,
        status_code: int | None = None,
    ):
        self.message = message
        self.term = term
        self.status_code = status_code
        super().__init__(message)


class WikimediaImageClient:
    """Async client for the Wikimedia Commons search API.

    A new httpx.AsyncClient is opened for every lookup and closed on both
    success and failure paths.

    Attributes:
        api_url: MediaWiki API endpoint.
        timeout: Request timeout in seconds.
    """

    def __init__(self, settings: ImageSearchSettings | None = None) -> None:
        """Initialize the client.

        Args:
            settings: Image search configuration. Uses get_settings() if None.
        """
        self._settings = settings or get_settings().image_search

    @property
    def api_url(self) -> str:
        """Get the MediaWiki API endpoint."""
        return self._settings.api_url

    @property
    def timeout(self) -> float:
        """Get the request timeout in seconds."""
        return self._settings.timeout

    def _build_params(self, term: str, limit: int) -> dict[str, Any]:
        return {
            "action": "query",
            "format": "json",
            "generator": "search",
            "gsrsearch": f"{term} {DEPICTS_FILTER}",
            "gsrlimit": limit,
            "prop": "imageinfo",
            "iiprop": "url|extmetadata",
            "iiurlwidth": self._settings.thumbnail_width,
            "origin": "*",
        }

    async def search(self, term: str, limit: int = 3) -> list[ImageCandidate]:
        """Search for images illustrating a term.

        Args:
            term: Search term.
            limit: Maximum number of candidates to request.

        Returns:
            Candidates in search-rank order. Empty if nothing matched.

        Raises:
            ImageSearchError: On transport errors, non-2xx answers or
                unparseable bodies.
        """
        params = self._build_params(term, limit)
        headers = {"User-Agent": self._settings.user_agent}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=headers) as client:
                response = await client.get(self.api_url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Image search returned error status: term=%s, status=%d",
                term,
                e.response.status_code,
            )
            raise ImageSearchError(
                message=f"Image search failed with status {e.response.status_code}",
                term=term,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Image search request failed: term=%s, error=%s", term, e)
            raise ImageSearchError(
                message=f"Image search request failed: {e}",
                term=term,
            ) from e
        except ValueError as e:
            raise ImageSearchError(
                message="Image search returned an invalid body",
                term=term,
            ) from e

        if not isinstance(data, dict):
            raise ImageSearchError(
                message="Image search returned an invalid body",
                term=term,
            )

        try:
            candidates = self._parse_pages(data)
        except (AttributeError, KeyError, IndexError, TypeError, PydanticValidationError) as e:
            logger.warning("Image search body could not be parsed: term=%s, error=%s", term, e)
            raise ImageSearchError(
                message="Image search returned an invalid body",
                term=term,
            ) from e

        logger.debug("Image search: term=%s, candidates=%d", term, len(candidates))
        return candidates[:limit]

    @staticmethod
    def _parse_pages(data: dict[str, Any]) -> list[ImageCandidate]:
        """Convert a MediaWiki query response into candidates."""
        pages = (data.get("query") or {}).get("pages")
        if not pages:
            return []

        if isinstance(pages, dict):
            pages = list(pages.values())
        pages = sorted(pages, key=lambda page: page.get("index", 0))

        candidates: list[ImageCandidate] = []
        for page in pages:
            image_info = (page.get("imageinfo") or [{}])[0]
            metadata = image_info.get("extmetadata") or {}
            candidates.append(
                ImageCandidate(
                    title=page.get("title", ""),
                    url=image_info.get("url"),
                    description=(metadata.get("ImageDescription") or {}).get("value"),
                    license=(metadata.get("License") or {}).get("value"),
                )
            )
        return candidates
