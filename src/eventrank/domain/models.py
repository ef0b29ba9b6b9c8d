"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- collaborator records (`PreferenceProfile`, `Event`, `Tag`)
- explainable scoring output (`MatchResult`, `SuggestionPage`)

Keeping these models in one place helps:
- validation (reject malformed store rows early),
- typed refactors,
- consistent JSON output across CLI/API.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PreferenceLevel(IntEnum):
    DISLIKE = 1
    NEUTRAL = 2
    LOVE = 3


class EventType(str, Enum):
    """Event duration class; also the key of per-class budget ranges."""

    MEAL = "meal"
    ONE_DAY_TRIP = "one_day_trip"
    OVERNIGHT = "overnight"


class EventStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ACTIVE = "active"
    CLOSED = "closed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class TagKind(str, Enum):
    INTEREST = "interest"
    ACTIVITY = "activity"
    LOCATION = "location"
    FOOD = "food"
    CATEGORY = "category"
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"


class Tag(BaseModel):
    """A catalog tag attached to events."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: TagKind


class BudgetRange(BaseModel):
    """An integer budget interval; a missing bound means open on that side."""

    model_config = ConfigDict(frozen=True)

    min: int | None = None
    max: int | None = None

    @model_validator(mode="after")
    def _validate_order(self) -> "BudgetRange":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("budget range min must be <= max")
        return self

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None


class BudgetPreference(BaseModel):
    """A user's budget ranges keyed by event duration class."""

    model_config = ConfigDict(frozen=True)

    unlimited: bool = False
    currency: str = "THB"
    ranges: dict[EventType, BudgetRange] = Field(default_factory=dict)

    def range_for(self, event_type: EventType) -> BudgetRange:
        """Return the range for a duration class (an empty range when none is recorded)."""
        return self.ranges.get(event_type) or BudgetRange()


class PreferenceProfile(BaseModel):
    """Everything the engine knows about one user's preferences."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    travel_styles: frozenset[str] = Field(default_factory=frozenset)
    food_preferences: dict[str, PreferenceLevel] = Field(default_factory=dict)
    budget: BudgetPreference | None = None

    @classmethod
    def empty(cls, user_id: str) -> "PreferenceProfile":
        """A profile with no signal in any dimension."""
        return cls(user_id=user_id)


class Event(BaseModel):
    """A candidate event snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    event_type: EventType = EventType.MEAL
    tags: tuple[Tag, ...] = ()
    budget_min: int | None = None
    budget_max: int | None = None
    status: EventStatus = EventStatus.PUBLISHED
    member_count: int = Field(default=0, ge=0)
    created_at: datetime | None = None

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, tags: tuple[Tag, ...]) -> tuple[Tag, ...]:
        seen: set[str] = set()
        out: list[Tag] = []
        for tag in tags:
            if tag.id in seen:
                continue
            seen.add(tag.id)
            out.append(tag)
        return tuple(out)

    @model_validator(mode="after")
    def _validate_budget_order(self) -> "Event":
        if self.budget_min is not None and self.budget_max is not None and self.budget_min > self.budget_max:
            raise ValueError("event budget_min must be <= budget_max")
        return self

    @property
    def has_budget(self) -> bool:
        return self.budget_min is not None or self.budget_max is not None


class DimensionScore(BaseModel):
    """One explainable dimension score (travel_style/food/budget/event_type)."""

    name: Literal["travel_style", "food", "budget", "event_type"]
    score: float = Field(..., ge=0, le=100)
    weight: float = Field(..., ge=0, le=1)
    contribution: float = Field(..., ge=0, le=100)
    details: dict[str, Any] = Field(default_factory=dict)
    reasons: list[str] = Field(default_factory=list)


class MatchResult(BaseModel):
    """One ranked output item: event + combined score + evidence."""

    event: Event
    combined_score: float = Field(..., ge=0, le=100)
    matched_tags: list[Tag] = Field(default_factory=list)
    breakdown: list[DimensionScore] = Field(default_factory=list)


class SuggestionPage(BaseModel):
    """One page of ranked suggestions plus the total candidate count."""

    generated_at: datetime
    user_id: str
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    results: list[MatchResult]
    meta: dict[str, Any] = Field(default_factory=dict)
