"""Goal / score contract — Pydantic v2 models.

Goal configuration and score payloads serialize with camelCase keys
(`enabledCategories`, `presetId`, `totalScore`, ...) to match the persisted
JSON; metric keys inside `targets` stay snake_case.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryGoal(BaseModel):
    enabled: list[str] = Field(default_factory=list)  # display order
    targets: dict[str, float] = Field(default_factory=dict)


class GoalConfig(_CamelModel):
    enabled_categories: list[str] = Field(default_factory=list)
    categories: dict[str, CategoryGoal] = Field(default_factory=dict)
    preset_id: str = "default"

    def to_raw(self) -> dict[str, Any]:
        """Plain JSON-ready dict in the persisted (camelCase) shape."""
        return self.model_dump(by_alias=True)


class DrinkingEvent(BaseModel):
    id: str | None = None
    user_id: str | None = None
    date: str | None = None
    tier: Literal[1, 2, 3]
    drinks: int = Field(default=0, ge=0)
    note: str | None = None
    created_at: str | None = None


class AlcoholPenalty(_CamelModel):
    total: float = 0.0
    tier2: float = 0.0
    tier3: float = 0.0
    tier2_drinks: int = 0
    tier3_drinks: int = 0


class WeeklyActuals(BaseModel):
    """Week-to-date totals for weekly-cadence metrics (Monday start)."""

    workouts_logged_weekly: float = 0.0
    calls_friends_weekly: float = 0.0
    calls_family_weekly: float = 0.0
    social_events_weekly: float = 0.0
    pages_weekly: float = 0.0
    history_complete: bool = True


class DayScore(_CamelModel):
    total_score: float = 0.0  # 0–100
    workout_score: float = 0.0  # 0–25 each
    sleep_score: float = 0.0
    diet_score: float = 0.0
    reading_score: float = 0.0
    community_score: float = 0.0
    diet_score_base100: float = 0.0
    diet_score_final100: float = 0.0
    diet_penalty_total: float = 0.0
    diet_penalty_tier2: float = 0.0
    diet_penalty_tier3: float = 0.0

    def to_row(self) -> dict[str, float]:
        """Flat snake_case columns stored next to the raw daily log."""
        return self.model_dump(by_alias=False)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class NormalizeRequest(_CamelModel):
    goals: Any = None
    enabled_categories: list[str] | None = None


class PresetApplyRequest(_CamelModel):
    current: dict[str, Any] | None = None


class PenaltyRequest(BaseModel):
    events: list[DrinkingEvent] = Field(default_factory=list)


class ScoreRequest(_CamelModel):
    day_data: dict[str, Any] = Field(default_factory=dict)
    goals: dict[str, Any] | None = None
    drinking_events: list[DrinkingEvent] = Field(default_factory=list)
    weekly_actuals: WeeklyActuals | None = None
