import json

import pytest
from pydantic import ValidationError

from eventrank.catalog.loader import load_candidate_events, load_preference_profile
from eventrank.catalog.stores import (
    InMemoryEventCatalog,
    InMemoryPreferenceStore,
    JsonEventCatalog,
    JsonPreferenceStore,
)
from eventrank.config.settings import get_settings
from eventrank.domain.errors import DependencyUnavailableError, NotFoundError
from eventrank.domain.models import Event, EventType, PreferenceLevel

USER_ID = "9b2e6d4a-5c1f-4e8a-bf0d-2a7c3e9f1b10"


def test_json_preference_store_parses_profile(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text(
        json.dumps(
            [
                {
                    "user_id": USER_ID.upper(),
                    "travel_styles": ["karaoke", "karaoke", "movie"],
                    "food_preferences": {"thai_food": 3},
                    "budget": {"ranges": {"meal": {"min": 100, "max": 300}}},
                }
            ]
        ),
        encoding="utf-8",
    )
    profile = JsonPreferenceStore(path).load_preference_profile(USER_ID)
    assert profile.travel_styles == frozenset({"karaoke", "movie"})
    assert profile.food_preferences["thai_food"] is PreferenceLevel.LOVE
    assert profile.budget.range_for(EventType.MEAL).max == 300


def test_json_preference_store_raises_not_found_for_unknown_user(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(NotFoundError):
        JsonPreferenceStore(path).load_preference_profile(USER_ID)


def test_missing_json_file_is_dependency_unavailable(tmp_path):
    with pytest.raises(DependencyUnavailableError):
        JsonEventCatalog(tmp_path / "nope.json").load_candidate_events()


def test_malformed_catalog_is_dependency_unavailable(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([{"id": "e1", "event_type": "space_flight"}]), encoding="utf-8")
    with pytest.raises(DependencyUnavailableError, match="malformed"):
        JsonEventCatalog(path).load_candidate_events()


def test_inverted_event_budget_is_rejected_as_malformed(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([{"id": "e1", "budget_min": 900, "budget_max": 100}]), encoding="utf-8")
    with pytest.raises(DependencyUnavailableError, match="malformed"):
        JsonEventCatalog(path).load_candidate_events()


def test_event_budget_bounds_must_be_ordered():
    with pytest.raises(ValidationError, match="budget_min must be <= budget_max"):
        Event(id="e1", budget_min=900, budget_max=100)
    assert Event(id="e2", budget_min=100, budget_max=100).has_budget


def test_profile_loader_turns_not_found_into_empty_profile():
    profile, found = load_preference_profile(InMemoryPreferenceStore(), USER_ID)
    assert found is False
    assert profile.user_id == USER_ID
    assert not profile.travel_styles and not profile.food_preferences and profile.budget is None


def test_candidate_loader_keeps_only_open_statuses():
    events = [
        Event(id="a", status="published"),
        Event(id="b", status="active"),
        Event(id="c", status="draft"),
        Event(id="d", status="cancelled"),
    ]
    candidates = load_candidate_events(InMemoryEventCatalog(events), settings=get_settings())
    assert [e.id for e in candidates] == ["a", "b"]


def test_event_tags_are_deduplicated_in_order():
    event = Event.model_validate(
        {
            "id": "e1",
            "tags": [
                {"id": "t2", "name": "Sushi", "kind": "food"},
                {"id": "t1", "name": "Hiking", "kind": "activity"},
                {"id": "t2", "name": "Sushi", "kind": "food"},
            ],
        }
    )
    assert [t.id for t in event.tags] == ["t2", "t1"]


def test_bundled_sample_data_loads():
    settings = get_settings()
    events = JsonEventCatalog(settings.catalog.events_path).load_candidate_events()
    assert len(load_candidate_events(InMemoryEventCatalog(events), settings=settings)) == 3


def test_relative_store_paths_resolve_against_project_root(tmp_path, monkeypatch):
    from eventrank.core import env

    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "events.json").write_text(json.dumps([{"id": "e1"}]), encoding="utf-8")
    monkeypatch.setenv("EVENTRANK_PROJECT_ROOT", str(tmp_path))
    env.get_project_root.cache_clear()
    try:
        assert env.resolve_project_path("data/events.json") == (tmp_path / "data" / "events.json").resolve()
        assert [e.id for e in JsonEventCatalog("data/events.json").load_candidate_events()] == ["e1"]
    finally:
        monkeypatch.delenv("EVENTRANK_PROJECT_ROOT")
        env.get_project_root.cache_clear()
