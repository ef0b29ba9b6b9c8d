# src/eventrank/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/eventrank/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `EVENTRANK_LOG_LEVEL`, `EVENTRANK_EVENTS_PATH`)
- an external YAML file via `EVENTRANK_CONFIG_PATH`

Design rule:
- Tuning knobs (weights, keyword tables, budget constants) live in YAML, not hard-coded in scorers.
"""

from __future__ import annotations

import math
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from eventrank.core.env import load_dotenv_if_present

DimensionName = Literal["travel_style", "food", "budget", "event_type"]


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `eventrank.config`."""
    text = resources.files("eventrank.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "EventRank"
    timezone: str = "Asia/Bangkok"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    events_path: str = "data/events.json"
    preferences_path: str = "data/preferences.json"
    open_statuses: list[str] = Field(default_factory=lambda: ["published", "active"])


class TravelStyleSettings(BaseModel):
    keywords: dict[str, list[str]] = Field(default_factory=dict)
    damping_factor: float = Field(0.5, ge=0, le=1)


class FoodPreferenceSettings(BaseModel):
    keywords: dict[str, list[str]] = Field(default_factory=dict)
    level_scores: dict[Literal["dislike", "neutral", "love"], float] = Field(
        default_factory=lambda: {"dislike": 10.0, "neutral": 50.0, "love": 90.0}
    )


class BudgetSettings(BaseModel):
    open_event_max_floor: int = 100_000
    open_event_max_multiplier: int = 2
    open_user_max: int = 1_000_000
    default_user_width: int = 10_000
    max_gap_percent: float = 50.0
    gap_penalty_multiplier: float = 0.6
    overlap_base_score: float = 70.0
    overlap_multiplier: float = 0.3


class EventTypeSettings(BaseModel):
    budget_signal_score: float = Field(70.0, ge=0, le=100)


class FeaturesSettings(BaseModel):
    travel_style: TravelStyleSettings = Field(default_factory=TravelStyleSettings)
    food_preference: FoodPreferenceSettings = Field(default_factory=FoodPreferenceSettings)
    budget: BudgetSettings = Field(default_factory=BudgetSettings)
    event_type: EventTypeSettings = Field(default_factory=EventTypeSettings)


class ScoringSettings(BaseModel):
    neutral_score: float = Field(50.0, ge=0, le=100)
    dimension_weights: dict[DimensionName, float] = Field(
        default_factory=lambda: {
            "travel_style": 0.3,
            "food": 0.3,
            "budget": 0.3,
            "event_type": 0.1,
        }
    )

    @model_validator(mode="after")
    def _validate_weights(self) -> "ScoringSettings":
        missing = {"travel_style", "food", "budget", "event_type"} - set(self.dimension_weights)
        if missing:
            raise ValueError(f"scoring.dimension_weights is missing: {', '.join(sorted(missing))}")
        if any(w < 0 for w in self.dimension_weights.values()):
            raise ValueError("scoring.dimension_weights must be non-negative")
        if math.fsum(self.dimension_weights.values()) != 1.0:
            raise ValueError("scoring.dimension_weights must sum to 1.0")
        return self


class PaginationSettings(BaseModel):
    default_page: int = Field(1, ge=1)
    default_limit: int = Field(20, ge=1)


class EngineSettings(BaseModel):
    max_workers: int = Field(1, ge=1)
    parallel_threshold: int = Field(200, ge=1)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    features: FeaturesSettings = Field(default_factory=FeaturesSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small to avoid exposing unsafe overrides.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("EVENTRANK_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    events_path = os.getenv("EVENTRANK_EVENTS_PATH")
    if events_path:
        data.setdefault("catalog", {})["events_path"] = events_path

    preferences_path = os.getenv("EVENTRANK_PREFERENCES_PATH")
    if preferences_path:
        data.setdefault("catalog", {})["preferences_path"] = preferences_path

    max_workers = os.getenv("EVENTRANK_MAX_WORKERS")
    if max_workers:
        data.setdefault("engine", {})["max_workers"] = int(max_workers)

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("EVENTRANK_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
