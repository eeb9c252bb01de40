"""Weekly aggregation — Monday–Sunday windows keyed by calendar date.

Windows are computed from the date's year/month/day only; no timestamps or
timezones are involved, so a key never shifts across a day boundary.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from app.scoring import actuals
from app.scoring.models import WeeklyActuals


@dataclass(frozen=True, slots=True)
class WeekWindow:
    start: date
    end: date  # inclusive

    @property
    def start_key(self) -> str:
        return self.start.isoformat()

    @property
    def end_key(self) -> str:
        return self.end.isoformat()

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(slots=True)
class WeekHistory:
    """Daily log rows for a week; `error` is set when the fetch failed."""

    rows: list[Mapping[str, Any]] = field(default_factory=list)
    error: str | None = None

    @property
    def complete(self) -> bool:
        return self.error is None


def to_date(value: date | str) -> date:
    """Accept a date or a 'YYYY-MM-DD' key (ValueError on anything else)."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def get_week_window(day: date | str) -> WeekWindow:
    """Monday-start week containing `day` (Sunday is offset 6)."""
    d = to_date(day)
    start = d - timedelta(days=d.weekday())
    return WeekWindow(start=start, end=start + timedelta(days=6))


def _row_date(row: Mapping[str, Any]) -> date | None:
    try:
        return to_date(row.get("date"))
    except (TypeError, ValueError):
        return None


def day_totals(day_data: Any) -> WeeklyActuals:
    community = actuals.community_counts(day_data)
    return WeeklyActuals(
        workouts_logged_weekly=len(actuals.list_items(actuals.section(day_data, "workouts"), "activities")),
        calls_friends_weekly=community.calls_friends,
        calls_family_weekly=community.calls_family,
        social_events_weekly=community.social_events,
        pages_weekly=actuals.reading_pages(day_data).total,
    )


def _add(a: WeeklyActuals, b: WeeklyActuals) -> WeeklyActuals:
    return WeeklyActuals(
        workouts_logged_weekly=a.workouts_logged_weekly + b.workouts_logged_weekly,
        calls_friends_weekly=a.calls_friends_weekly + b.calls_friends_weekly,
        calls_family_weekly=a.calls_family_weekly + b.calls_family_weekly,
        social_events_weekly=a.social_events_weekly + b.social_events_weekly,
        pages_weekly=a.pages_weekly + b.pages_weekly,
        history_complete=a.history_complete and b.history_complete,
    )


def summarize_history(rows: Iterable[Mapping[str, Any]], target_date: date | str) -> WeeklyActuals:
    """Totals over the target's week, excluding the target day's own row."""
    target = to_date(target_date)
    window = get_week_window(target)
    totals = WeeklyActuals()
    for row in rows:
        row_date = _row_date(row)
        if row_date is None or row_date == target or not window.contains(row_date):
            continue
        totals = _add(totals, day_totals(row.get("data")))
    return totals


def aggregate_weekly_actuals(
    history: WeekHistory | Iterable[Mapping[str, Any]] | None,
    target_date: date | str,
    day_data: Any,
) -> WeeklyActuals:
    """Week-to-date actuals: prior days of the week plus today's own values.

    A failed history fetch degrades to today's values only and is reported
    through `history_complete = False`.
    """
    if history is None:
        history = WeekHistory(error="history not loaded")
    elif not isinstance(history, WeekHistory):
        history = WeekHistory(rows=list(history))

    prior = summarize_history(history.rows, target_date) if history.complete else WeeklyActuals()
    result = _add(prior, day_totals(day_data))
    result.history_complete = history.complete
    return result
