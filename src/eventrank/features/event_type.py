# src/eventrank/features/event_type.py
"""
Event-type affinity feature.

There is no explicit "preferred duration class" preference yet, so a recorded budget
upper bound for the event's duration class is used as an implicit interest signal.
"""

from __future__ import annotations

from eventrank.config.settings import Settings
from eventrank.domain.models import Event, PreferenceProfile
from eventrank.scoring.composite import DimensionResult


def score_event_type(event: Event, *, profile: PreferenceProfile, settings: Settings) -> DimensionResult:
    details = {"event_type": event.event_type.value, "matched_tags": []}
    if profile.budget is not None and profile.budget.range_for(event.event_type).max is not None:
        return DimensionResult(
            score=float(settings.features.event_type.budget_signal_score),
            details={**details, "budget_signal": True},
            reasons=[f"You budget for {event.event_type.value} events"],
        )
    return DimensionResult(
        score=float(settings.scoring.neutral_score),
        details={**details, "budget_signal": False},
        reasons=["No event type signal"],
    )
