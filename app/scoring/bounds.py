"""Inclusive target bounds per metric — static data, no DB.

Keys missing from GOAL_BOUNDS are unbounded and pass through clamp_target
unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class MetricBounds:
    min: float
    max: float


GOAL_BOUNDS: MappingProxyType[str, MetricBounds] = MappingProxyType(
    {
        # exercise
        "minutes": MetricBounds(min=1, max=240),
        "calories_burned": MetricBounds(min=1, max=3000),
        "steps": MetricBounds(min=100, max=50000),
        "workouts_logged": MetricBounds(min=1, max=10),
        "workouts_logged_weekly": MetricBounds(min=1, max=20),
        # sleep
        "hours": MetricBounds(min=1, max=16),
        # diet
        "meals_cooked_percent": MetricBounds(min=0, max=100),
        "healthiness_self_rating": MetricBounds(min=1, max=10),
        "protein_grams": MetricBounds(min=1, max=400),
        "water_oz": MetricBounds(min=0, max=300),
        # reading
        "pages": MetricBounds(min=1, max=500),
        "fiction_pages": MetricBounds(min=1, max=500),
        "nonfiction_pages": MetricBounds(min=1, max=500),
        "pages_weekly": MetricBounds(min=1, max=5000),
        # community
        "calls_friends_weekly": MetricBounds(min=0, max=14),
        "calls_family_weekly": MetricBounds(min=0, max=14),
        "social_events_weekly": MetricBounds(min=0, max=14),
    }
)


def get_bounds(key: str) -> MetricBounds | None:
    return GOAL_BOUNDS.get(key)


def clamp_target(key: str, value: float) -> float:
    bounds = GOAL_BOUNDS.get(key)
    if bounds is None:
        return value
    return max(bounds.min, min(bounds.max, value))
