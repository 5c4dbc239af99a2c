"""
Generation config validation.

Checks a GenerationConfig before any generation attempt is made. All
violations are collected and reported together; nothing is corrected.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from papersmith.errors import InvalidConfiguration
from papersmith.models import BloomLevel, DifficultyLevel, GenerationConfig, ValidationResult

logger = logging.getLogger(__name__)

# Absorbs rounding in UI-entered percentages.
DISTRIBUTION_TOLERANCE = 1.0

KNOWN_DIFFICULTIES = frozenset(d.value for d in DifficultyLevel)
KNOWN_BLOOM_LEVELS = frozenset(b.value for b in BloomLevel)


def _check_distribution(name: str, dist: dict, known: Iterable) -> list[str]:
    errors: list[str] = []
    if not dist:
        return [f"{name} distribution is empty"]

    known = set(known)
    unknown = [k for k in dist if k not in known]
    if unknown:
        errors.append(f"{name} distribution has unknown levels: {sorted(map(str, unknown))}")

    values = list(dist.values())
    if any(not math.isfinite(v) or v < 0 for v in values):
        errors.append(f"{name} distribution has negative or non-finite percentages")
    else:
        total = sum(values)
        if abs(total - 100.0) > DISTRIBUTION_TOLERANCE:
            errors.append(f"{name} distribution sums to {total:g}, expected 100")
    return errors


def validate_config(config: GenerationConfig) -> ValidationResult:
    errors: list[str] = []

    if config.total_marks <= 0:
        errors.append(f"total_marks must be positive, got {config.total_marks}")

    if not config.units:
        errors.append("at least one unit must be selected")
    else:
        ids = config.unit_ids
        if len(set(ids)) != len(ids):
            errors.append("selected units contain duplicates")
        foreign = [u.id for u in config.units if u.course_id != config.course_id]
        if foreign:
            errors.append(f"units {foreign} do not belong to course {config.course_id}")

    errors += _check_distribution("difficulty", config.difficulty_distribution, KNOWN_DIFFICULTIES)
    errors += _check_distribution("bloom", config.bloom_distribution, KNOWN_BLOOM_LEVELS)

    return ValidationResult(valid=not errors, errors=errors)


def ensure_valid(config: GenerationConfig) -> None:
    result = validate_config(config)
    if not result.valid:
        logger.info("Rejected generation config for course %s: %s", config.course_id, result.errors)
        raise InvalidConfiguration(result.errors)
