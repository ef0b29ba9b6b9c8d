"""
Profile and candidate loaders.

Thin adapters between the collaborator stores and the engine:
- a missing profile becomes an empty (all-neutral) profile instead of an error,
- store failures surface as `DependencyUnavailableError`,
- candidates are restricted to open statuses from config.
"""

from __future__ import annotations

import logging

from eventrank.catalog.stores import EventCatalog, PreferenceStore
from eventrank.config.settings import Settings
from eventrank.domain.errors import DependencyUnavailableError, EventRankError, NotFoundError
from eventrank.domain.models import Event, PreferenceProfile

logger = logging.getLogger(__name__)


def load_preference_profile(store: PreferenceStore, user_id: str) -> tuple[PreferenceProfile, bool]:
    """Return `(profile, found)`; `found` is False when the store had no rows for the user."""
    try:
        return store.load_preference_profile(user_id), True
    except NotFoundError:
        logger.info("No preference profile for user %s; scoring with neutral defaults", user_id)
        return PreferenceProfile.empty(user_id), False
    except EventRankError:
        raise
    except Exception as e:
        raise DependencyUnavailableError(f"preference store unavailable: {e}") from e


def load_candidate_events(catalog: EventCatalog, *, settings: Settings) -> list[Event]:
    """Load published/open events from the catalog."""
    try:
        events = catalog.load_candidate_events()
    except EventRankError:
        raise
    except Exception as e:
        raise DependencyUnavailableError(f"event catalog unavailable: {e}") from e

    open_statuses = set(settings.catalog.open_statuses)
    candidates = [e for e in events if e.status.value in open_statuses]
    if len(candidates) != len(events):
        logger.debug("Dropped %d non-open events from catalog snapshot", len(events) - len(candidates))
    return candidates
