from __future__ import annotations

# This module is the "orchestrator" for the suggestion pipeline.
# It wires together:
# - caller input (user id + page/limit)
# - collaborator reads (preference store + event catalog)
# - dimension scoring (travel style, food, budget, event type)
# - combination, ranking, pagination and result assembly (SuggestionPage)
#
# Each request owns its working set; nothing here is shared between requests.

import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from zoneinfo import ZoneInfo

from eventrank.catalog.loader import load_candidate_events, load_preference_profile
from eventrank.catalog.stores import EventCatalog, JsonEventCatalog, JsonPreferenceStore, PreferenceStore
from eventrank.config.settings import Settings, get_settings
from eventrank.domain.errors import InvalidArgumentError
from eventrank.domain.models import DimensionScore, Event, MatchResult, PreferenceProfile, SuggestionPage
from eventrank.features.budget import score_budget
from eventrank.features.event_type import score_event_type
from eventrank.features.food_preference import score_food_preference
from eventrank.features.travel_style import score_travel_style
from eventrank.recommender.ranking import paginate, rank_results, validate_page_args
from eventrank.scoring.composite import DimensionResult, clamp100, combine_scores, round2

logger = logging.getLogger(__name__)

_SCORERS = (
    ("travel_style", score_travel_style),
    ("food", score_food_preference),
    ("budget", score_budget),
    ("event_type", score_event_type),
)


def normalize_user_id(user_id: str) -> str:
    """Validate a caller-supplied user id (must be a UUID) and return its canonical form."""
    try:
        return str(uuid.UUID(str(user_id).strip()))
    except (ValueError, AttributeError, TypeError) as e:
        raise InvalidArgumentError(f"invalid user ID: {user_id!r}") from e


def score_event(event: Event, *, profile: PreferenceProfile, settings: Settings) -> MatchResult:
    """Run every dimension scorer for one event and assemble its MatchResult."""
    weights = settings.scoring.dimension_weights
    dims: dict[str, DimensionResult] = {
        name: scorer(event, profile=profile, settings=settings) for name, scorer in _SCORERS
    }

    breakdown = [
        DimensionScore(
            name=name,
            score=clamp100(dims[name].score),
            weight=float(weights[name]),
            contribution=round2(clamp100(dims[name].score) * float(weights[name])),
            details={k: v for k, v in dims[name].details.items() if k != "matched_tags"},
            reasons=dims[name].reasons,
        )
        for name, _ in _SCORERS
    ]
    combined = combine_scores({d.name: d.score for d in breakdown}, weights)

    # Evidence in discovery order: travel-style hits first, then food matches.
    matched_tags = [*dims["travel_style"].matched_tags, *dims["food"].matched_tags]
    return MatchResult(event=event, combined_score=combined, matched_tags=matched_tags, breakdown=breakdown)


def _score_all(candidates: list[Event], *, profile: PreferenceProfile, settings: Settings) -> list[MatchResult]:
    workers = settings.engine.max_workers
    if workers > 1 and len(candidates) >= settings.engine.parallel_threshold:
        # map() preserves input order and only returns once every candidate is scored.
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda e: score_event(e, profile=profile, settings=settings), candidates))
    return [score_event(e, profile=profile, settings=settings) for e in candidates]


def suggest_events(
    user_id: str,
    page: int | None = None,
    limit: int | None = None,
    *,
    settings: Settings | None = None,
    preference_store: PreferenceStore | None = None,
    event_catalog: EventCatalog | None = None,
) -> SuggestionPage:
    t0 = time.monotonic()
    timings_ms: dict[str, int] = {}

    # ---- Step 1: Resolve settings and validate caller arguments before any loading ----
    settings = settings or get_settings()
    page = settings.pagination.default_page if page is None else page
    limit = settings.pagination.default_limit if limit is None else limit
    canonical_id = normalize_user_id(user_id)
    validate_page_args(page, limit)

    # ---- Step 2: Construct stores (unless the caller injected them) ----
    if preference_store is None:
        preference_store = JsonPreferenceStore(settings.catalog.preferences_path)
    if event_catalog is None:
        event_catalog = JsonEventCatalog(settings.catalog.events_path)

    # ---- Step 3: Load the profile (missing profile -> all-neutral) and candidates ----
    profile, profile_found = load_preference_profile(preference_store, canonical_id)
    timings_ms["load_profile"] = int((time.monotonic() - t0) * 1000)
    candidates = load_candidate_events(event_catalog, settings=settings)
    timings_ms["load_candidates"] = int((time.monotonic() - t0) * 1000)

    # ---- Step 4: Score every candidate, then rank (barrier: ranking starts after scoring) ----
    t_score = time.monotonic()
    results = _score_all(candidates, profile=profile, settings=settings)
    timings_ms["score_total"] = int((time.monotonic() - t_score) * 1000)

    t_rank = time.monotonic()
    ranked = rank_results(results)
    timings_ms["rank"] = int((time.monotonic() - t_rank) * 1000)

    # ---- Step 5: Paginate; total is the full candidate count ----
    page_items, total = paginate(ranked, page=page, limit=limit)
    logger.debug(
        "Scored %d candidates for user %s (profile_found=%s); returning page %d (%d items)",
        total,
        canonical_id,
        profile_found,
        page,
        len(page_items),
    )

    return SuggestionPage(
        generated_at=datetime.now(ZoneInfo(settings.app.timezone)),
        user_id=canonical_id,
        page=page,
        limit=limit,
        total=total,
        results=page_items,
        meta={
            "profile_found": profile_found,
            "candidates_scored": total,
            "dimension_weights": dict(settings.scoring.dimension_weights),
            "tie_break": ["combined_score desc", "created_at desc", "id asc"],
            "timings_ms": timings_ms,
        },
    )
