"""
Shared scoring utilities.

This module contains small, reusable helpers used across dimension scorers:
- `clamp100`: keep values within 0..100 for stable output
- `round2`: two-decimal rounding (half away from zero, matching stored scores)
- `combine_scores`: weighted sum of dimension scores into one combined score
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from eventrank.config.settings import DimensionName
from eventrank.domain.models import Tag

DIMENSIONS: tuple[DimensionName, ...] = ("travel_style", "food", "budget", "event_type")


def clamp100(x: float) -> float:
    """Clamp a number into the [0.0, 100.0] range."""
    return max(0.0, min(100.0, float(x)))


def round2(x: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return math.copysign(math.floor(abs(float(x)) * 100 + 0.5), x) / 100


@dataclass(frozen=True)
class DimensionResult:
    """A dimension score in 0..100 plus explainability payload."""

    score: float
    details: dict[str, Any]
    reasons: list[str]

    @property
    def matched_tags(self) -> list[Tag]:
        return list(self.details.get("matched_tags", []))


def combine_scores(scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Weighted sum of dimension scores, clamped to 0..100 and rounded to 2 decimals."""
    total = math.fsum(float(scores[name]) * float(weights[name]) for name in DIMENSIONS)
    return round2(clamp100(total))
