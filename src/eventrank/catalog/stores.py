"""
Read-only collaborator stores.

The engine only needs two queries:
- `PreferenceStore.load_preference_profile(user_id)`
- `EventCatalog.load_candidate_events()`

In-memory implementations are used by tests and embedding callers; JSON-file
implementations back the CLI and the API (paths come from settings).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Protocol

from pydantic import TypeAdapter, ValidationError

from eventrank.core.env import resolve_project_path
from eventrank.domain.errors import DependencyUnavailableError, NotFoundError
from eventrank.domain.models import Event, PreferenceProfile

logger = logging.getLogger(__name__)

_EVENTS_ADAPTER = TypeAdapter(list[Event])
_PROFILES_ADAPTER = TypeAdapter(list[PreferenceProfile])


class PreferenceStore(Protocol):
    def load_preference_profile(self, user_id: str) -> PreferenceProfile: ...


class EventCatalog(Protocol):
    def load_candidate_events(self) -> list[Event]: ...


class InMemoryPreferenceStore:
    def __init__(self, profiles: Iterable[PreferenceProfile] = ()) -> None:
        self._profiles = {p.user_id.lower(): p for p in profiles}

    def load_preference_profile(self, user_id: str) -> PreferenceProfile:
        profile = self._profiles.get(user_id.lower())
        if profile is None:
            raise NotFoundError(f"No preference profile for user {user_id}")
        return profile


class InMemoryEventCatalog:
    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events = list(events)

    def load_candidate_events(self) -> list[Event]:
        return list(self._events)


def _read_json(path: Path, *, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read %s from %s: %s", what, path, e)
        raise DependencyUnavailableError(f"{what} unavailable: {e}") from e


class JsonPreferenceStore:
    """Preference profiles from a JSON list file (re-read per request for a fresh snapshot)."""

    def __init__(self, path: str | Path) -> None:
        self.path = resolve_project_path(path)

    def load_preference_profile(self, user_id: str) -> PreferenceProfile:
        payload = _read_json(self.path, what="preference store")
        try:
            profiles = _PROFILES_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise DependencyUnavailableError(f"preference store is malformed: {e}") from e
        return InMemoryPreferenceStore(profiles).load_preference_profile(user_id)


class JsonEventCatalog:
    """Event snapshots from a JSON list file."""

    def __init__(self, path: str | Path) -> None:
        self.path = resolve_project_path(path)

    def load_candidate_events(self) -> list[Event]:
        payload = _read_json(self.path, what="event catalog")
        try:
            return _EVENTS_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise DependencyUnavailableError(f"event catalog is malformed: {e}") from e
