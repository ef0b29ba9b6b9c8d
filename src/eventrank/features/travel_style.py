# src/eventrank/features/travel_style.py
"""
Travel-style match feature (event-level).

Each travel style maps to a short list of keyword fragments (config-driven). For every
event tag and every selected style that appears in the keyword table we perform one
"check"; the check hits when any keyword is a case-insensitive substring of the tag name.

    score = hits / checks * 100

Low scores are damped toward neutral so a partial mismatch is not punished as hard as
the raw ratio suggests. Scores above neutral are left untouched.
"""

from __future__ import annotations

from eventrank.config.settings import Settings
from eventrank.domain.models import Event, PreferenceProfile, Tag
from eventrank.scoring.composite import DimensionResult, clamp100, round2


def _matches_any(tag_name: str, keywords: list[str]) -> bool:
    return any(k.lower() in tag_name for k in keywords)


def score_travel_style(event: Event, *, profile: PreferenceProfile, settings: Settings) -> DimensionResult:
    neutral = float(settings.scoring.neutral_score)
    cfg = settings.features.travel_style

    if not profile.travel_styles:
        return DimensionResult(
            score=neutral,
            details={"checks": 0, "hits": 0, "matched_tags": []},
            reasons=["No travel styles selected"],
        )

    # Table order keeps evidence ordering deterministic.
    selected = [(style, kws) for style, kws in cfg.keywords.items() if style in profile.travel_styles]

    checks = 0
    hits = 0
    matched: list[Tag] = []
    matched_styles: list[str] = []
    for tag in event.tags:
        name = tag.name.lower()
        tag_hit = False
        for style, keywords in selected:
            checks += 1
            if _matches_any(name, keywords):
                hits += 1
                tag_hit = True
                if style not in matched_styles:
                    matched_styles.append(style)
        if tag_hit:
            matched.append(tag)

    details = {
        "checks": checks,
        "hits": hits,
        "recognized_styles": [s for s, _ in selected],
        "matched_styles": matched_styles,
        "matched_tags": matched,
    }

    if checks == 0:
        reason = "Event has no tags" if not event.tags else "No recognized travel styles"
        return DimensionResult(score=neutral, details=details, reasons=[reason])

    raw = hits / checks * 100
    score = raw
    if score < neutral:
        score = neutral - (neutral - score) * cfg.damping_factor
    score = round2(clamp100(score))
    details["raw_score"] = round2(raw)

    if matched_styles:
        reasons = ["Matches styles: " + ", ".join(matched_styles[:6])]
    else:
        reasons = ["No travel style match"]
    return DimensionResult(score=score, details=details, reasons=reasons)
