"""Tests for the score composer."""

from __future__ import annotations

import pytest

from app.scoring.composer import compute_scores
from app.scoring.models import DrinkingEvent, WeeklyActuals
from app.scoring.normalizer import DeprecatedCategoryKeyError
from tests.conftest import make_day_data, make_workout


def _full_day(**overrides):
    fields = dict(
        workouts=[make_workout("60")],
        sleep_hours="8",
        cooked="2",
        restaurant="0",
        pages="20",
    )
    fields.update(overrides)
    return make_day_data(**fields)


class TestComputeScores:
    def test_full_marks_with_defaults(self):
        score = compute_scores(_full_day())
        assert score.total_score == 100.0
        assert score.workout_score == 25.0
        assert score.sleep_score == 25.0
        assert score.diet_score == 25.0
        assert score.reading_score == 25.0
        assert score.community_score == 0.0

    def test_empty_day(self):
        score = compute_scores({})
        assert score.total_score == 0.0
        assert score.diet_score_base100 == 0.0

    def test_partial_day(self):
        data = _full_day(workouts=[make_workout("30")], pages="5")
        score = compute_scores(data)
        assert score.workout_score == 12.5
        assert score.reading_score == 6.25
        assert score.total_score == pytest.approx((0.5 + 1 + 1 + 0.25) / 4 * 100)

    def test_disabled_categories_forced_to_zero(self):
        data = _full_day(workouts=[make_workout("30")])
        score = compute_scores(data, {"enabledCategories": ["exercise"]})
        assert score.sleep_score == 0
        assert score.diet_score == 0
        assert score.reading_score == 0
        assert score.community_score == 0
        assert score.workout_score == 12.5
        assert score.total_score == 50.0

    def test_goal_targets_used(self):
        goals = {"categories": {"reading": {"enabled": ["pages"], "targets": {"pages": 40}}}}
        score = compute_scores(_full_day(), goals)
        assert score.reading_score == 12.5


class TestDietPenalty:
    def test_penalty_applied_to_diet(self):
        score = compute_scores(_full_day(), None, [DrinkingEvent(tier=3, drinks=4)])
        assert score.diet_score_base100 == 100.0
        assert score.diet_penalty_total == 16
        assert score.diet_penalty_tier3 == 16
        assert score.diet_score_final100 == 84.0
        assert score.diet_score == pytest.approx(21.0)
        assert score.total_score == pytest.approx(96.0)

    def test_penalty_floors_at_zero(self):
        data = _full_day(cooked="1", restaurant="1")
        score = compute_scores(data, None, [{"tier": 3, "drinks": 10}])
        assert score.diet_score_base100 == 50.0
        assert score.diet_score_final100 == 0.0
        assert score.diet_score == 0.0

    def test_tier1_no_effect(self):
        score = compute_scores(_full_day(), None, [DrinkingEvent(tier=1, drinks=8)])
        assert score.diet_score == 25.0
        assert score.diet_penalty_total == 0

    def test_penalty_reported_when_diet_disabled(self):
        score = compute_scores(
            _full_day(), {"enabledCategories": ["sleep"]}, [DrinkingEvent(tier=2, drinks=5)]
        )
        assert score.diet_score == 0
        assert score.diet_penalty_tier2 == 10
        assert score.total_score == 100.0


class TestWeeklyMetrics:
    def _community_goals(self, **targets):
        return {
            "enabledCategories": ["community"],
            "categories": {"community": {"enabled": list(targets), "targets": targets}},
        }

    def test_uses_weekly_actuals(self):
        goals = self._community_goals(calls_friends_weekly=2)
        weekly = WeeklyActuals(calls_friends_weekly=1)
        score = compute_scores(make_day_data(calls_friends="5"), goals, [], weekly)
        assert score.community_score == 12.5
        assert score.total_score == 50.0

    def test_defaults_to_same_day_counts(self):
        goals = self._community_goals(social_events_weekly=1)
        score = compute_scores(make_day_data(social_events="1"), goals)
        assert score.community_score == 25.0

    def test_weekly_pages(self):
        goals = {
            "enabledCategories": ["reading"],
            "categories": {"reading": {"enabled": ["pages_weekly"], "targets": {"pages_weekly": 100}}},
        }
        score = compute_scores(make_day_data(pages="10"), goals, [], WeeklyActuals(pages_weekly=75))
        assert score.reading_score == pytest.approx(18.75)


class TestComposerValidation:
    def test_knowledge_key_raises_when_strict(self):
        with pytest.raises(DeprecatedCategoryKeyError):
            compute_scores({}, {"enabledCategories": ["knowledge"]}, strict_validation=True)

    def test_knowledge_key_lenient(self):
        score = compute_scores(_full_day(), {"enabledCategories": ["knowledge"]}, strict_validation=False)
        assert score.total_score == 100.0

    def test_to_row_columns(self):
        row = compute_scores(_full_day()).to_row()
        assert row["total_score"] == 100.0
        assert set(row) >= {"workout_score", "community_score", "diet_penalty_tier3", "diet_score_base100"}

    def test_camel_case_payload(self):
        data = compute_scores(_full_day()).model_dump(by_alias=True)
        assert data["totalScore"] == 100.0
        assert "dietScoreFinal100" in data
