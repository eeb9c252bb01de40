"""Activity streaks and the 007 badge (seven logged days in a row)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from app.scoring import actuals
from app.scoring.textnum import int_from_text, num_from_text
from app.scoring.weekly import to_date

BADGE_007_ID = "bond_007"
STREAK_FOR_BADGE = 7


@dataclass(frozen=True, slots=True)
class Badge:
    id: str
    name: str
    description: str
    icon_key: str


BADGE_007 = Badge(
    id=BADGE_007_ID,
    name="007",
    description=(
        "James Bond is the ultimate operator. This badge is earned by logging 7 days in a row. "
        "You are still early on your journey, but you are on the right track. "
        "Perhaps a vesper martini to celebrate? Shaken, of course."
    ),
    icon_key="007",
)


@dataclass(frozen=True, slots=True)
class Streak:
    longest: int
    has7: bool


def _positive(value: Any, parse=int_from_text) -> bool:
    return (parse(value) or 0) > 0


def _has_reading(data: Any) -> bool:
    reading = actuals.section(data, "reading")
    for event in actuals.list_items(reading, "events"):
        if event.get("title") or actuals.split_pages(
            event.get("pages"), event.get("fictionPages"), event.get("nonfictionPages")
        ).total > 0:
            return True
    return bool(reading.get("title")) or _positive(reading.get("pagesText"))


def is_meaningful_daily_log(row: Mapping[str, Any]) -> bool:
    """True when anything was actually entered for the day."""
    if _positive(row.get("steps"), num_from_text):
        return True

    data = row.get("data") or {}
    if actuals.workout_count(data) > 0:
        return True

    sleep = actuals.section(data, "sleep")
    if _positive(sleep.get("hoursText"), num_from_text) or any(
        _positive(sleep.get(f)) for f in ("minutesText", "restingHrText")
    ):
        return True

    diet = actuals.section(data, "diet")
    if _positive(diet.get("healthinessText"), num_from_text) or any(
        _positive(diet.get(f)) for f in ("cookedMealsText", "restaurantMealsText", "proteinText", "waterOzText")
    ):
        return True

    if _has_reading(data):
        return True

    community = actuals.community_counts(data)
    return community.calls_friends > 0 or community.calls_family > 0 or community.social_events > 0


def active_date_keys(
    log_rows: Iterable[Mapping[str, Any]],
    drinking_rows: Iterable[Mapping[str, Any]] = (),
) -> list[str]:
    """Sorted date keys with a meaningful log or at least one drink."""
    active: set[str] = set()
    for row in log_rows:
        if row.get("date") and is_meaningful_daily_log(row):
            active.add(to_date(row["date"]).isoformat())

    drinks_by_date: dict[str, int] = {}
    for row in drinking_rows:
        if not row.get("date"):
            continue
        key = to_date(row["date"]).isoformat()
        drinks_by_date[key] = drinks_by_date.get(key, 0) + (int_from_text(row.get("drinks")) or 0)
    active.update(key for key, total in drinks_by_date.items() if total > 0)

    return sorted(active)


def longest_consecutive_streak(date_keys: Iterable[str]) -> Streak:
    days = sorted({to_date(key) for key in date_keys})
    if not days:
        return Streak(longest=0, has7=False)

    longest = run = 1
    for prev, current in zip(days, days[1:]):
        run = run + 1 if current - prev == timedelta(days=1) else 1
        longest = max(longest, run)
    return Streak(longest=longest, has7=longest >= STREAK_FOR_BADGE)


def should_award_badge(existing: bool, has7: bool) -> bool:
    return not existing and has7
