"""
EventRank CLI entrypoint.

This CLI is intended for quick local demos and debugging without the API.
It delegates all ranking logic to `eventrank.recommender.suggest.suggest_events`.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
from typing import Any

from eventrank.catalog.stores import JsonEventCatalog, JsonPreferenceStore
from eventrank.config.settings import get_settings
from eventrank.core.logging import configure_logging
from eventrank.domain.errors import DependencyUnavailableError, InvalidArgumentError
from eventrank.recommender.suggest import suggest_events
from eventrank.scoring.explain import one_line_summary

logger = logging.getLogger(__name__)


def _cmd_suggest(args: argparse.Namespace) -> int:
    """Handle the `suggest` subcommand."""
    settings = get_settings()
    preference_store = JsonPreferenceStore(args.preferences or settings.catalog.preferences_path)
    event_catalog = JsonEventCatalog(args.events or settings.catalog.events_path)

    try:
        result = suggest_events(
            args.user_id,
            page=args.page,
            limit=args.limit,
            settings=settings,
            preference_store=preference_store,
            event_catalog=event_catalog,
        )
    except InvalidArgumentError as e:
        logger.error("Invalid argument: %s", e)
        return 2
    except DependencyUnavailableError as e:
        logger.error("Data source unavailable: %s", e)
        return 3

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Generated at: {result.generated_at.isoformat()}")
    print(f"Page {result.page} (limit {result.limit}) of {result.total} candidates:")
    offset = (result.page - 1) * result.limit
    for i, item in enumerate(result.results, start=offset + 1):
        event = item.event
        print(f"{i:>3}. {event.title or event.id} [{event.event_type.value}]  {one_line_summary(item)}")
        if item.matched_tags:
            print("     matched: " + ", ".join(t.name for t in item.matched_tags))
        for dim in item.breakdown:
            reasons = "; ".join(dim.reasons[:2]) if dim.reasons else ""
            print(f"     - {dim.name}: score={dim.score:.2f} weight={dim.weight:.2f}  {reasons}")
    return 0


def _cmd_weights(_: argparse.Namespace) -> int:
    weights = get_settings().scoring.dimension_weights
    for name, weight in weights.items():
        print(f"{name:<14} {weight:.2f}")
    print(f"{'sum':<14} {math.fsum(weights.values()):.2f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the EventRank CLI."""
    parser = argparse.ArgumentParser(prog="eventrank")
    sub = parser.add_subparsers(dest="command", required=True)

    sug = sub.add_parser("suggest", help="Rank published events for a user's preference profile.")
    sug.add_argument("--user-id", required=True, help="User UUID")
    sug.add_argument("--page", type=int, default=None)
    sug.add_argument("--limit", type=int, default=None)
    sug.add_argument("--events", type=str, default=None, help="Event catalog JSON (defaults to config)")
    sug.add_argument("--preferences", type=str, default=None, help="Preference store JSON (defaults to config)")
    sug.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    sug.set_defaults(func=_cmd_suggest)

    w = sub.add_parser("weights", help="Print the configured dimension weights.")
    w.set_defaults(func=_cmd_weights)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m eventrank.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
