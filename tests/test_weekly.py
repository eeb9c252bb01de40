"""Tests for week windows and weekly aggregation."""

from __future__ import annotations

from datetime import date

import pytest

from app.scoring.weekly import (
    WeekHistory,
    aggregate_weekly_actuals,
    get_week_window,
    summarize_history,
)
from tests.conftest import make_day_data, make_log_row, make_workout


class TestWeekWindow:
    def test_sunday_belongs_to_previous_monday(self):
        window = get_week_window("2026-02-08")
        assert window.start_key == "2026-02-02"
        assert window.end_key == "2026-02-08"

    def test_monday_starts_week(self):
        window = get_week_window("2026-02-09")
        assert window.start_key == "2026-02-09"
        assert window.end_key == "2026-02-15"

    def test_dst_sunday(self):
        # US clocks change on 2026-03-08; calendar keys must not shift
        window = get_week_window("2026-03-08")
        assert (window.start_key, window.end_key) == ("2026-03-02", "2026-03-08")

    def test_month_and_year_boundaries(self):
        window = get_week_window("2026-01-01")
        assert (window.start_key, window.end_key) == ("2025-12-29", "2026-01-04")

    def test_accepts_date(self):
        assert get_week_window(date(2026, 2, 11)).start == date(2026, 2, 9)

    def test_window_always_seven_days(self):
        for day in range(1, 29):
            window = get_week_window(date(2026, 2, day))
            assert (window.end - window.start).days == 6
            assert window.start.weekday() == 0
            assert window.contains(date(2026, 2, day))

    def test_bad_key(self):
        with pytest.raises(ValueError):
            get_week_window("not-a-date")


class TestSummarizeHistory:
    def test_excludes_target_day(self):
        rows = [
            make_log_row("2026-02-09", pages="10", calls_friends="1"),
            make_log_row("2026-02-10", pages="20", calls_family="2"),
            make_log_row("2026-02-11", pages="500"),  # target day
        ]
        totals = summarize_history(rows, "2026-02-11")
        assert totals.pages_weekly == 30
        assert totals.calls_friends_weekly == 1
        assert totals.calls_family_weekly == 2

    def test_ignores_rows_outside_week(self):
        rows = [
            make_log_row("2026-02-08", pages="99"),
            make_log_row("2026-02-16", pages="99"),
            make_log_row("2026-02-12", social_events="1"),
        ]
        totals = summarize_history(rows, "2026-02-11")
        assert totals.pages_weekly == 0
        assert totals.social_events_weekly == 1

    def test_counts_workouts(self):
        rows = [
            make_log_row("2026-02-09", workouts=[make_workout("30"), make_workout("20")]),
            make_log_row("2026-02-10", workouts=[make_workout("45")]),
        ]
        assert summarize_history(rows, "2026-02-12").workouts_logged_weekly == 3

    def test_counts_activities_without_numbers(self):
        rows = [{"date": "2026-02-09", "data": {"workouts": {"activities": [{"name": "Run"}, {"minutesText": ""}]}}}]
        assert summarize_history(rows, "2026-02-12").workouts_logged_weekly == 2

    def test_date_objects_and_bad_rows(self):
        rows = [
            {"date": date(2026, 2, 9), "data": make_day_data(pages="5")},
            {"date": None, "data": make_day_data(pages="5")},
            {"date": "2026-02-10", "data": None},
        ]
        assert summarize_history(rows, "2026-02-11").pages_weekly == 5


class TestAggregateWeeklyActuals:
    def test_adds_same_day(self):
        rows = [make_log_row("2026-02-09", pages="10")]
        today = make_day_data(pages="15", calls_friends="1")
        weekly = aggregate_weekly_actuals(WeekHistory(rows=rows), "2026-02-10", today)
        assert weekly.pages_weekly == 25
        assert weekly.calls_friends_weekly == 1
        assert weekly.history_complete

    def test_same_day_counts_every_activity(self):
        today = make_day_data(workouts=[make_workout("30"), make_workout("")])
        weekly = aggregate_weekly_actuals(WeekHistory(), "2026-02-10", today)
        assert weekly.workouts_logged_weekly == 2

    def test_target_row_in_history_not_double_counted(self):
        rows = [make_log_row("2026-02-10", pages="15")]
        weekly = aggregate_weekly_actuals(rows, "2026-02-10", make_day_data(pages="15"))
        assert weekly.pages_weekly == 15

    def test_failed_fetch_degrades_to_today(self):
        history = WeekHistory(rows=[make_log_row("2026-02-09", pages="10")], error="connection reset")
        weekly = aggregate_weekly_actuals(history, "2026-02-10", make_day_data(pages="15"))
        assert weekly.pages_weekly == 15
        assert not weekly.history_complete

    def test_none_history_is_incomplete(self):
        weekly = aggregate_weekly_actuals(None, "2026-02-10", make_day_data(social_events="2"))
        assert weekly.social_events_weekly == 2
        assert weekly.history_complete is False
