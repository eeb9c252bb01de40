"""Score composer — one day's DayScore from raw inputs.

Always a pure recomputation: normalized goals + day actuals + weekly
actuals + drinking events → DayScore. Missing or invalid numbers count as
0, so composition never fails on data.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from app.scoring.actuals import extract_actuals
from app.scoring.goals_config import GOAL_CATEGORIES, get_default_goal_config, get_default_goals
from app.scoring.models import DayScore, DrinkingEvent, GoalConfig, WeeklyActuals
from app.scoring.normalizer import normalize_goal_config
from app.scoring.penalty import calculate_alcohol_penalty
from app.scoring.scorer import compute_category_score
from app.scoring.weekly import day_totals

CATEGORY_POINTS = 25.0

# category -> DayScore field holding its 0–25 score
SCORE_FIELDS: dict[str, str] = {
    "exercise": "workout_score",
    "sleep": "sleep_score",
    "diet": "diet_score",
    "reading": "reading_score",
    "community": "community_score",
}


def compute_ratios(
    day_data: Any,
    config: GoalConfig,
    weekly: WeeklyActuals,
    *,
    strict_validation: bool | None = None,
) -> dict[str, float]:
    """Raw completion ratio per category (before the alcohol penalty)."""
    actuals = extract_actuals(day_data, weekly)
    defaults = get_default_goals()
    return {
        category: compute_category_score(
            actuals[category],
            config.categories[category],
            defaults[category],
            strict_validation=strict_validation,
        )
        for category in GOAL_CATEGORIES
    }


def compute_scores(
    day_data: Any,
    goal_config: GoalConfig | Mapping[str, Any] | None = None,
    drinking_events: Iterable[DrinkingEvent | Mapping[str, Any]] = (),
    weekly_actuals: WeeklyActuals | None = None,
    *,
    strict_validation: bool | None = None,
) -> DayScore:
    """Compose the full DayScore for one day.

    `weekly_actuals` defaults to the day's own contribution only. The
    alcohol penalty comes off the diet score on a 0–100 scale (floored at
    0); the post-penalty diet ratio is what enters `total_score`.
    Categories outside `enabled_categories` score 0 and are left out of
    the total.
    """
    if goal_config is None:
        config = get_default_goal_config()
    else:
        config = normalize_goal_config(goal_config, strict_validation=strict_validation)

    weekly = weekly_actuals if weekly_actuals is not None else day_totals(day_data)
    ratios = compute_ratios(day_data, config, weekly, strict_validation=strict_validation)

    penalty = calculate_alcohol_penalty(drinking_events)
    diet_base100 = ratios["diet"] * 100
    diet_final100 = max(0.0, diet_base100 - penalty.total)
    ratios["diet"] = diet_final100 / 100

    enabled = [c for c in GOAL_CATEGORIES if c in config.enabled_categories]
    total = sum(ratios[c] for c in enabled) / len(enabled) * 100 if enabled else 0.0

    category_scores = {
        SCORE_FIELDS[c]: ratios[c] * CATEGORY_POINTS if c in enabled else 0.0 for c in GOAL_CATEGORIES
    }

    return DayScore(
        total_score=total,
        diet_score_base100=diet_base100,
        diet_score_final100=diet_final100,
        diet_penalty_total=penalty.total,
        diet_penalty_tier2=penalty.tier2,
        diet_penalty_tier3=penalty.tier3,
        **category_scores,
    )
