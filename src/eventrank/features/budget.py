# src/eventrank/features/budget.py
"""
Budget match feature (event-level).

Compares the event's budget interval with the user's budget interval for the event's
duration class (meal / one-day trip / overnight).

Rules, in priority order:
1. Unlimited budget matches everything (100).
2. Events without any budget bound are neutral.
3. Users without a bound for this duration class are neutral.
4. Otherwise compare effective intervals (open bounds filled from config):
   - disjoint: penalize the gap relative to the user's range width (0 past the cutoff),
   - overlapping: 70..100 by overlap share of the event range; nested events score 100.
"""

from __future__ import annotations

from eventrank.config.settings import Settings
from eventrank.domain.models import Event, PreferenceProfile
from eventrank.scoring.composite import DimensionResult, clamp100, round2


def _effective_event_range(event: Event, *, settings: Settings) -> tuple[int, int]:
    cfg = settings.features.budget
    event_min = event.budget_min if event.budget_min is not None else 0
    if event.budget_max is not None:
        event_max = event.budget_max
    else:
        event_max = max(event_min * cfg.open_event_max_multiplier, cfg.open_event_max_floor)
    return event_min, event_max


def _score_ranges(
    user_min: int, user_max: int, event_min: int, event_max: int, *, settings: Settings
) -> tuple[float, str]:
    cfg = settings.features.budget
    overlap_min = max(user_min, event_min)
    overlap_max = min(user_max, event_max)

    if overlap_min > overlap_max:
        if overlap_min > event_max:
            distance = overlap_min - event_max
            reason = "Event is below your budget range"
        else:
            distance = event_min - overlap_max
            reason = "Event is above your budget range"
        width = float(user_max - user_min)
        if width <= 0:
            width = float(cfg.default_user_width)
        gap_percent = distance / width * 100
        if gap_percent > cfg.max_gap_percent:
            return 0.0, reason
        return settings.scoring.neutral_score - gap_percent * cfg.gap_penalty_multiplier, reason

    event_width = float(event_max - event_min)
    user_width = float(user_max - user_min)
    if event_width <= 0 or user_width <= 0:
        return 100.0, "Budget matches exactly"

    if event_min >= user_min and event_max <= user_max:
        return 100.0, "Event budget fits within your range"

    overlap_percent = (overlap_max - overlap_min) / event_width * 100
    score = cfg.overlap_base_score + overlap_percent * cfg.overlap_multiplier
    return score, f"Budget overlaps {overlap_percent:.0f}% of the event range"


def score_budget(event: Event, *, profile: PreferenceProfile, settings: Settings) -> DimensionResult:
    neutral = float(settings.scoring.neutral_score)
    budget = profile.budget
    details: dict = {"event_type": event.event_type.value, "matched_tags": []}

    if budget is not None and budget.unlimited:
        return DimensionResult(score=100.0, details={**details, "unlimited": True}, reasons=["Unlimited budget"])

    if not event.has_budget:
        return DimensionResult(score=neutral, details=details, reasons=["Event has no budget"])

    user_range = budget.range_for(event.event_type) if budget is not None else None
    if user_range is None or user_range.is_empty:
        return DimensionResult(
            score=neutral, details=details, reasons=[f"No budget set for {event.event_type.value}"]
        )

    cfg = settings.features.budget
    user_min = user_range.min if user_range.min is not None else 0
    user_max = user_range.max if user_range.max is not None else cfg.open_user_max
    event_min, event_max = _effective_event_range(event, settings=settings)

    score, reason = _score_ranges(user_min, user_max, event_min, event_max, settings=settings)
    details.update(
        {
            "user_range": [user_min, user_max],
            "event_range": [event_min, event_max],
            "currency": budget.currency,
        }
    )
    return DimensionResult(score=round2(clamp100(score)), details=details, reasons=[reason])
