"""
API routes.

Endpoints:
- GET `/api/events/suggestions`: ranked, paginated event suggestions for a user.
- GET `/api/settings`: public scoring settings (weights + keyword tables).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from eventrank.catalog.stores import EventCatalog, JsonEventCatalog, JsonPreferenceStore, PreferenceStore
from eventrank.config.settings import get_settings
from eventrank.domain.errors import DependencyUnavailableError, InvalidArgumentError
from eventrank.recommender.suggest import suggest_events

logger = logging.getLogger(__name__)

router = APIRouter()


def _stores() -> tuple[PreferenceStore, EventCatalog]:
    settings = get_settings()
    return (
        JsonPreferenceStore(settings.catalog.preferences_path),
        JsonEventCatalog(settings.catalog.events_path),
    )


@router.get("/api/events/suggestions")
def get_event_suggestions(user_id: str, page: int = 1, limit: int | None = None) -> dict:
    """Rank published events for a user and return one page of suggestions."""
    settings = get_settings()
    preference_store, event_catalog = _stores()
    try:
        result = suggest_events(
            user_id,
            page=page,
            limit=limit,
            settings=settings,
            preference_store=preference_store,
            event_catalog=event_catalog,
        )
    except InvalidArgumentError as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": str(e)},
        ) from e
    except DependencyUnavailableError as e:
        logger.warning("Suggestion request failed for user %s: %s", user_id, e)
        raise HTTPException(
            status_code=503,
            detail={"code": "DEPENDENCY_UNAVAILABLE", "message": str(e)},
        ) from e

    payload = result.model_dump(mode="json")
    return {
        "events": [
            {
                "event": item["event"],
                "match_score": item["combined_score"],
                "matched_tags": item["matched_tags"],
                "breakdown": item["breakdown"],
            }
            for item in payload["results"]
        ],
        "total": payload["total"],
        "page": payload["page"],
        "limit": payload["limit"],
        "meta": payload["meta"],
    }


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return scoring knobs that explain how suggestions are ranked."""
    settings = get_settings()
    data = settings.model_dump(mode="json")
    return {
        "scoring": data["scoring"],
        "features": data["features"],
        "pagination": data["pagination"],
    }
