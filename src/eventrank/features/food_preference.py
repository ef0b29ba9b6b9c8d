# src/eventrank/features/food_preference.py
"""
Food preference feature (event-level).

Only `food`-kind tags are considered. Each (tag, food category) pair whose keywords
match the tag name, and for which the user recorded a preference level, is one match
contributing a fixed score for that level (dislike/neutral/love). The dimension score
is the mean contribution over matches.

No matches always yields the neutral score. The dislike/love skew of the user's
preferences is reported in `details` but does not change the score.
"""

from __future__ import annotations

from eventrank.config.settings import Settings
from eventrank.domain.models import Event, PreferenceLevel, PreferenceProfile, Tag, TagKind
from eventrank.scoring.composite import DimensionResult, clamp100, round2

_LEVEL_KEYS = {
    PreferenceLevel.DISLIKE: "dislike",
    PreferenceLevel.NEUTRAL: "neutral",
    PreferenceLevel.LOVE: "love",
}


def score_food_preference(event: Event, *, profile: PreferenceProfile, settings: Settings) -> DimensionResult:
    neutral = float(settings.scoring.neutral_score)
    cfg = settings.features.food_preference
    prefs = profile.food_preferences

    if not prefs:
        return DimensionResult(
            score=neutral,
            details={"matches": 0, "matched_tags": []},
            reasons=["No food preferences recorded"],
        )

    total = 0.0
    matches = 0
    matched: list[Tag] = []
    matched_categories: list[str] = []
    for tag in event.tags:
        if tag.kind != TagKind.FOOD:
            continue
        name = tag.name.lower()
        for category, keywords in cfg.keywords.items():
            level = prefs.get(category)
            if level is None:
                continue
            if not any(k.lower() in name for k in keywords):
                continue
            matches += 1
            total += float(cfg.level_scores[_LEVEL_KEYS[PreferenceLevel(level)]])
            matched.append(tag)
            matched_categories.append(category)

    dislike_count = sum(1 for v in prefs.values() if v == PreferenceLevel.DISLIKE)
    love_count = sum(1 for v in prefs.values() if v == PreferenceLevel.LOVE)
    details = {
        "matches": matches,
        "matched_categories": matched_categories,
        "dislike_count": dislike_count,
        "love_count": love_count,
        "matched_tags": matched,
    }

    if matches == 0:
        return DimensionResult(score=neutral, details=details, reasons=["No food tag match"])

    score = round2(clamp100(total / matches))
    return DimensionResult(
        score=score,
        details=details,
        reasons=["Food: " + ", ".join(dict.fromkeys(matched_categories))],
    )
