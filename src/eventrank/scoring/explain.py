"""
Small explainability formatting helpers.

Used by the CLI to print compact summaries of suggestion results.
"""

from __future__ import annotations

from eventrank.domain.models import MatchResult


def one_line_summary(result: MatchResult) -> str:
    """Render a compact single-line summary for a match result."""
    parts = [f"total={result.combined_score:.2f}"]
    for dim in result.breakdown:
        parts.append(f"{dim.name}={dim.score:.2f} (w={dim.weight:.2f})")
    return " | ".join(parts)
