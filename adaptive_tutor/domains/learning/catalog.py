# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Static adaptation tables.

Adaptation profiles live one per file under ``adaptations/`` and the
academic frameworks in ``academic_levels.yaml``. Both are loaded once per
process and exposed through read-only mappings.

Example:
    >>> from adaptive_tutor.domains.learning.catalog import get_adaptation_catalog
    >>> catalog = get_adaptation_catalog()
    >>> catalog.profile("dyslexia").pacing
    'flexible'
"""

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from pydantic import ValidationError as PydanticValidationError

from adaptive_tutor.core.config import DATA_DIR, get_settings
from adaptive_tutor.domains.learning.models import AcademicLevel, AdaptationProfile

logger = logging.getLogger(__name__)

ADAPTATIONS_DIR = "adaptations"
ACADEMIC_LEVELS_FILE = "academic_levels.yaml"


class YAMLLoadError(Exception):
    """Raised when a table file cannot be loaded or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML file '{path}': {reason}")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file whose root is a mapping.

    Args:
        path: File to load.

    Returns:
        Parsed mapping.

    Raises:
        YAMLLoadError: If the file is missing, unreadable, not valid YAML
            or not a non-empty mapping.
    """
    if not path.is_file():
        raise YAMLLoadError(path, "File does not exist")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"Invalid YAML syntax: {e}") from e

    if not isinstance(parsed, dict) or not parsed:
        raise YAMLLoadError(path, "YAML root must be a non-empty mapping")
    return parsed


class AdaptationCatalog:
    """Read-only lookup of adaptation profiles and academic levels.

    Attributes:
        adaptations: Need tag to adaptation profile.
        academic_levels: Level key to academic framework.
    """

    def __init__(
        self,
        adaptations: Mapping[str, AdaptationProfile],
        academic_levels: Mapping[str, AcademicLevel],
    ) -> None:
        self.adaptations: Mapping[str, AdaptationProfile] = MappingProxyType(dict(adaptations))
        self.academic_levels: Mapping[str, AcademicLevel] = MappingProxyType(
            dict(academic_levels)
        )

    @property
    def need_tags(self) -> tuple[str, ...]:
        return tuple(self.adaptations)

    @property
    def levels(self) -> tuple[str, ...]:
        return tuple(self.academic_levels)

    def profile(self, tag: str) -> AdaptationProfile | None:
        """Get the adaptation profile for a need tag, or None if unknown."""
        return self.adaptations.get(tag)

    def academic_level(self, level: str) -> AcademicLevel | None:
        """Get the academic framework for a level, or None if unknown."""
        return self.academic_levels.get(level)

    @classmethod
    def from_directory(cls, directory: Path) -> "AdaptationCatalog":
        """Load the catalog from a data directory.

        Args:
            directory: Directory holding ``adaptations/`` and
                ``academic_levels.yaml``.

        Returns:
            Loaded catalog.

        Raises:
            YAMLLoadError: If any file is missing or malformed.
        """
        adaptations_dir = directory / ADAPTATIONS_DIR
        if not adaptations_dir.is_dir():
            raise YAMLLoadError(adaptations_dir, "Directory does not exist")

        adaptations: dict[str, AdaptationProfile] = {}
        for path in sorted(adaptations_dir.glob("*.yaml")):
            data = load_yaml(path)
            try:
                profile = AdaptationProfile.model_validate(data.get("adaptation"))
            except PydanticValidationError as e:
                raise YAMLLoadError(path, f"Invalid adaptation profile: {e}") from e
            if profile.tag in adaptations:
                raise YAMLLoadError(path, f"Duplicate need tag '{profile.tag}'")
            adaptations[profile.tag] = profile

        if not adaptations:
            raise YAMLLoadError(adaptations_dir, "No adaptation profiles found")

        levels_path = directory / ACADEMIC_LEVELS_FILE
        raw_levels = load_yaml(levels_path).get("academic_levels")
        if not isinstance(raw_levels, dict) or not raw_levels:
            raise YAMLLoadError(levels_path, "Missing 'academic_levels' mapping")

        academic_levels: dict[str, AcademicLevel] = {}
        for level, values in raw_levels.items():
            try:
                academic_levels[level] = AcademicLevel.model_validate(
                    {"level": level, **(values or {})}
                )
            except PydanticValidationError as e:
                raise YAMLLoadError(levels_path, f"Invalid academic level '{level}': {e}") from e

        logger.info(
            "Loaded adaptation catalog: needs=%s, levels=%s",
            ",".join(adaptations),
            ",".join(academic_levels),
        )
        return cls(adaptations, academic_levels)


@lru_cache
def get_adaptation_catalog() -> AdaptationCatalog:
    """Get the process-wide adaptation catalog.

    Reads from ``settings.adaptation_config_dir`` when set, otherwise from
    the tables shipped with the package.
    """
    directory = get_settings().adaptation_config_dir or DATA_DIR
    return AdaptationCatalog.from_directory(Path(directory))
