"""Derive numeric actuals from a raw daily log payload (DayData).

DayData is the JSON blob the app persists per (user, date):

  workouts.activities[].{minutesText, secondsText, caloriesText, intensityText}
  workouts.stepsText
  sleep.{hoursText, minutesText, restingHrText}
  diet.{cookedMealsText, restaurantMealsText, healthinessText, proteinText, waterOzText}
  reading.events[].{pages, fictionPages, nonfictionPages, title}
  reading.{pagesText, fictionPagesText, nonfictionPagesText, title}
  community.{callsFriendsText, callsText (legacy), callsFamilyText, socialEventsText}

Every helper returns 0 for anything missing or unparsable — never raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.scoring.models import WeeklyActuals
from app.scoring.textnum import clamp_int, int_from_text, num_from_text


def section(data: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        return {}
    value = data.get(name)
    return value if isinstance(value, Mapping) else {}


def list_items(parent: Mapping[str, Any], name: str) -> list[Mapping[str, Any]]:
    value = parent.get(name)
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


# ---------------------------------------------------------------------------
# Exercise
# ---------------------------------------------------------------------------


def is_valid_workout(activity: Mapping[str, Any]) -> bool:
    """An activity counts once any of its numeric fields is positive."""
    return any(
        (int_from_text(activity.get(field)) or 0) > 0
        for field in ("minutesText", "secondsText", "caloriesText", "intensityText")
    )


def workout_count(data: Any) -> int:
    return sum(1 for a in list_items(section(data, "workouts"), "activities") if is_valid_workout(a))


def exercise_actuals(data: Any) -> dict[str, float]:
    workouts = section(data, "workouts")
    minutes = 0.0
    calories = 0
    for activity in list_items(workouts, "activities"):
        seconds = clamp_int(int_from_text(activity.get("secondsText")) or 0, 0, 59)
        minutes += (int_from_text(activity.get("minutesText")) or 0) + seconds / 60
        calories += int_from_text(activity.get("caloriesText")) or 0
    return {
        "minutes": minutes,
        "calories_burned": float(calories),
        "steps": float(int_from_text(workouts.get("stepsText")) or 0),
        "workouts_logged": float(workout_count(data)),
    }


# ---------------------------------------------------------------------------
# Sleep / diet
# ---------------------------------------------------------------------------


def sleep_hours(data: Any) -> float:
    """Hours plus minutes as one decimal value."""
    sleep = section(data, "sleep")
    hours = num_from_text(sleep.get("hoursText")) or 0.0
    minutes = clamp_int(int_from_text(sleep.get("minutesText")) or 0, 0, 59)
    return hours + minutes / 60


def diet_actuals(data: Any) -> dict[str, float]:
    diet = section(data, "diet")
    cooked = int_from_text(diet.get("cookedMealsText")) or 0
    restaurant = int_from_text(diet.get("restaurantMealsText")) or 0
    total_meals = cooked + restaurant
    return {
        "meals_cooked_percent": (cooked / total_meals) * 100 if total_meals > 0 else 0.0,
        "healthiness_self_rating": num_from_text(diet.get("healthinessText")) or 0.0,
        "protein_grams": float(int_from_text(diet.get("proteinText")) or 0),
        "water_oz": float(int_from_text(diet.get("waterOzText")) or 0),
    }


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReadingPages:
    total: int = 0
    fiction: int = 0
    nonfiction: int = 0


def split_pages(total_raw: Any, fiction_raw: Any, nonfiction_raw: Any) -> ReadingPages:
    """Fiction + non-fiction breakdown wins over a raw total when present."""
    fiction = int_from_text(fiction_raw)
    nonfiction = int_from_text(nonfiction_raw)
    if fiction is not None or nonfiction is not None:
        fiction = fiction or 0
        nonfiction = nonfiction or 0
        return ReadingPages(total=fiction + nonfiction, fiction=fiction, nonfiction=nonfiction)
    return ReadingPages(total=int_from_text(total_raw) or 0)


def reading_pages(data: Any) -> ReadingPages:
    """Pages for one day: event list when non-empty, else legacy flat fields."""
    reading = section(data, "reading")
    events = list_items(reading, "events")
    if events:
        per_event = [split_pages(e.get("pages"), e.get("fictionPages"), e.get("nonfictionPages")) for e in events]
        return ReadingPages(
            total=sum(p.total for p in per_event),
            fiction=sum(p.fiction for p in per_event),
            nonfiction=sum(p.nonfiction for p in per_event),
        )
    return split_pages(reading.get("pagesText"), reading.get("fictionPagesText"), reading.get("nonfictionPagesText"))


# ---------------------------------------------------------------------------
# Community
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CommunityCounts:
    calls_friends: int = 0
    calls_family: int = 0
    social_events: int = 0


def community_counts(data: Any) -> CommunityCounts:
    community = section(data, "community")
    friends = int_from_text(community.get("callsFriendsText"))
    if friends is None:
        friends = int_from_text(community.get("callsText"))
    return CommunityCounts(
        calls_friends=friends or 0,
        calls_family=int_from_text(community.get("callsFamilyText")) or 0,
        social_events=int_from_text(community.get("socialEventsText")) or 0,
    )


# ---------------------------------------------------------------------------
# All categories
# ---------------------------------------------------------------------------


def extract_actuals(data: Any, weekly: WeeklyActuals) -> dict[str, dict[str, float]]:
    """Per-category actuals keyed by metric; weekly metrics come from `weekly`."""
    exercise = exercise_actuals(data)
    exercise["workouts_logged_weekly"] = weekly.workouts_logged_weekly

    pages = reading_pages(data)

    return {
        "exercise": exercise,
        "sleep": {"hours": sleep_hours(data)},
        "diet": diet_actuals(data),
        "reading": {
            "pages": float(pages.total),
            "fiction_pages": float(pages.fiction),
            "nonfiction_pages": float(pages.nonfiction),
            "pages_weekly": weekly.pages_weekly,
        },
        "community": {
            "calls_friends_weekly": weekly.calls_friends_weekly,
            "calls_family_weekly": weekly.calls_family_weekly,
            "social_events_weekly": weekly.social_events_weekly,
        },
    }
