"""
Ranking and pagination.

Ranking is a stable descending sort on `combined_score`. Ties are ordered by
`created_at` descending (newest first, events without a timestamp last) and then
by event id ascending, so identical inputs always produce identical pages.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from eventrank.domain.errors import InvalidArgumentError
from eventrank.domain.models import MatchResult

T = TypeVar("T")


def _created_ts(result: MatchResult) -> float:
    created = result.event.created_at
    return created.timestamp() if created is not None else float("-inf")


def rank_results(results: Sequence[MatchResult]) -> list[MatchResult]:
    """Return a new list sorted by combined score (desc) with the deterministic tie-break."""
    ranked = sorted(results, key=lambda r: r.event.id)
    # Python's sort is stable (also with reverse=True), so each pass keeps the previous order on ties.
    ranked.sort(key=_created_ts, reverse=True)
    ranked.sort(key=lambda r: r.combined_score, reverse=True)
    return ranked


def validate_page_args(page: int, limit: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidArgumentError(f"page must be an integer >= 1, got {page!r}")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgumentError(f"limit must be an integer >= 1, got {limit!r}")


def paginate(items: Sequence[T], *, page: int, limit: int) -> tuple[list[T], int]:
    """Return `(page_items, total)`; an offset past the end yields an empty page, not an error."""
    validate_page_args(page, limit)
    total = len(items)
    offset = (page - 1) * limit
    if offset >= total:
        return [], total
    return list(items[offset : min(offset + limit, total)]), total
