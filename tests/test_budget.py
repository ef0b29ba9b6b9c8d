import pytest
from pydantic import ValidationError

from eventrank.config.settings import get_settings
from eventrank.domain.models import BudgetPreference, BudgetRange, Event, EventType, PreferenceProfile
from eventrank.features.budget import score_budget

USER_ID = "9b2e6d4a-5c1f-4e8a-bf0d-2a7c3e9f1b10"


def _profile(ranges: dict | None = None, *, unlimited: bool = False) -> PreferenceProfile:
    budget = BudgetPreference(unlimited=unlimited, ranges={k: BudgetRange(**v) for k, v in (ranges or {}).items()})
    return PreferenceProfile(user_id=USER_ID, budget=budget)


def _score(profile: PreferenceProfile, *, event_type: str = "meal", lo: int | None = None, hi: int | None = None):
    event = Event(id="e1", event_type=event_type, budget_min=lo, budget_max=hi)
    return score_budget(event, profile=profile, settings=get_settings()).score


@pytest.mark.parametrize("lo,hi", [(None, None), (100, 200), (5_000_000, None), (None, 10)])
def test_unlimited_always_scores_100(lo, hi):
    assert _score(_profile(unlimited=True), lo=lo, hi=hi) == 100.0


def test_event_without_budget_is_neutral():
    assert _score(_profile({"meal": {"min": 100, "max": 200}})) == 50.0


def test_missing_budget_for_duration_class_is_neutral():
    assert _score(PreferenceProfile(user_id=USER_ID), lo=100, hi=200) == 50.0
    assert _score(_profile({"meal": {"min": 100, "max": 200}}), event_type="overnight", lo=100, hi=200) == 50.0


def test_exact_range_is_a_perfect_match():
    assert _score(_profile({"meal": {"min": 100, "max": 200}}), lo=100, hi=200) == 100.0


def test_nested_event_range_scores_100():
    assert _score(_profile({"meal": {"min": 200, "max": 800}}), lo=300, hi=600) == 100.0


def test_partial_overlap_scores_by_overlap_share():
    # overlap 500..800 is 60% of the event range -> 70 + 60 * 0.3
    assert _score(_profile({"meal": {"min": 200, "max": 800}}), lo=500, hi=1000) == 88.0


def test_event_above_user_range_is_penalized_by_gap():
    # gap 100 over width 600 -> 16.67% -> 50 - 10
    assert _score(_profile({"meal": {"min": 200, "max": 800}}), lo=900, hi=1000) == 40.0


def test_event_below_user_range_is_penalized_by_gap():
    # gap 500 over width 1000 -> exactly 50% is still scored
    assert _score(_profile({"meal": {"min": 1000, "max": 2000}}), lo=100, hi=500) == 20.0


def test_gap_beyond_half_the_user_width_scores_zero():
    assert _score(_profile({"meal": {"min": 200, "max": 800}}), lo=1200, hi=1500) == 0.0


def test_open_event_max_uses_floor_of_100k():
    profile = _profile({"one_day_trip": {"max": 2000}})
    # event 1500..100000 vs user 0..2000 -> overlap 500 / 98500
    assert _score(profile, event_type="one_day_trip", lo=1500) == 70.15


def test_zero_width_event_range_inside_overlap_scores_100():
    assert _score(_profile({"meal": {"min": 200, "max": 800}}), lo=500, hi=500) == 100.0


def test_open_user_max_defaults_to_large_sentinel():
    # user 300..1_000_000, event 100..200 -> gap 100 over width 999_700
    assert _score(_profile({"meal": {"min": 300}}), lo=100, hi=200) == 49.99


def test_budget_range_rejects_min_above_max():
    with pytest.raises(ValidationError, match="min must be <= max"):
        BudgetRange(min=500, max=100)


def test_ranges_are_keyed_by_event_type():
    pref = BudgetPreference.model_validate({"ranges": {"overnight": {"min": 1, "max": 2}}})
    assert pref.range_for(EventType.OVERNIGHT) == BudgetRange(min=1, max=2)
    assert pref.range_for(EventType.MEAL).is_empty
