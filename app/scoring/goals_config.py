"""Static goal catalogue — categories, built-in defaults, metric options.

The defaults live in read-only containers. Callers always receive a fresh
deep copy from get_default_goals() / get_default_goal_config(), so nothing
can mutate the canonical template through an alias.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from app.scoring.models import CategoryGoal, GoalConfig

GOAL_CATEGORIES: tuple[str, ...] = ("exercise", "sleep", "diet", "reading", "community")

GOAL_CATEGORY_LABELS: MappingProxyType[str, str] = MappingProxyType(
    {
        "exercise": "Exercise",
        "sleep": "Sleep",
        "diet": "Diet",
        "reading": "Knowledge",
        "community": "Community",
    }
)

DEFAULT_ENABLED_CATEGORIES: tuple[str, ...] = ("exercise", "sleep", "diet", "reading")

DEFAULT_PRESET_ID = "default"

# category -> (enabled metrics, targets)
_DEFAULT_GOALS: MappingProxyType[str, tuple[tuple[str, ...], MappingProxyType[str, float]]] = MappingProxyType(
    {
        "exercise": (("minutes",), MappingProxyType({"minutes": 60})),
        "sleep": (("hours",), MappingProxyType({"hours": 8})),
        "diet": (("meals_cooked_percent",), MappingProxyType({"meals_cooked_percent": 100})),
        "reading": (("pages",), MappingProxyType({"pages": 20})),
        "community": ((), MappingProxyType({})),
    }
)


def get_default_category(category: str) -> CategoryGoal:
    enabled, targets = _DEFAULT_GOALS[category]
    return CategoryGoal(enabled=list(enabled), targets=dict(targets))


def get_default_goals() -> dict[str, CategoryGoal]:
    return {category: get_default_category(category) for category in GOAL_CATEGORIES}


def get_default_goal_config() -> GoalConfig:
    return GoalConfig(
        enabled_categories=list(DEFAULT_ENABLED_CATEGORIES),
        categories=get_default_goals(),
        preset_id=DEFAULT_PRESET_ID,
    )


# ---------------------------------------------------------------------------
# Selectable metrics per category
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MetricOption:
    key: str
    label: str
    hint: str
    cadence: str = "daily"  # "daily" | "weekly"


GOAL_OPTIONS: MappingProxyType[str, tuple[MetricOption, ...]] = MappingProxyType(
    {
        "exercise": (
            MetricOption("minutes", "Minutes", "Total exercise minutes"),
            MetricOption("calories_burned", "Calories", "Calories burned"),
            MetricOption("steps", "Steps", "Daily steps"),
            MetricOption("workouts_logged", "Workouts logged", "Count of workouts"),
            MetricOption("workouts_logged_weekly", "Workouts (weekly)", "Total workouts per week", "weekly"),
        ),
        "sleep": (MetricOption("hours", "Hours", "Total sleep hours"),),
        "diet": (
            MetricOption("meals_cooked_percent", "Cooked meals %", "Percent of meals cooked at home"),
            MetricOption("healthiness_self_rating", "Healthiness (1–10)", "Self rating"),
            MetricOption("protein_grams", "Protein grams", "Daily protein"),
            MetricOption("water_oz", "Water (oz)", "Daily water intake"),
        ),
        "reading": (
            MetricOption("pages", "Pages", "Total pages read"),
            MetricOption("pages_weekly", "Pages (weekly)", "Total pages per week", "weekly"),
            MetricOption("fiction_pages", "Fiction pages", "Fiction only"),
            MetricOption("nonfiction_pages", "Non-fiction pages", "Non-fiction only"),
        ),
        "community": (
            MetricOption("calls_friends_weekly", "Friend calls (weekly)", "Calls to friends per week", "weekly"),
            MetricOption("calls_family_weekly", "Family calls (weekly)", "Calls to family per week", "weekly"),
            MetricOption("social_events_weekly", "Social events (weekly)", "Social events attended per week", "weekly"),
        ),
    }
)

WEEKLY_METRICS: frozenset[str] = frozenset(
    opt.key for options in GOAL_OPTIONS.values() for opt in options if opt.cadence == "weekly"
)


def list_metric_options(category: str) -> list[MetricOption]:
    return list(GOAL_OPTIONS.get(category, ()))


def is_weekly_metric(key: str) -> bool:
    return key in WEEKLY_METRICS
