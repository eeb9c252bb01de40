"""Database connector — async access to the app's goal, log and drinking tables.

Tables:
  user_goals       (user_id, goals JSONB, enabled_categories text[], onboarding_completed)
  daily_logs       (user_id, date, steps, data JSONB, total_score, workout_score, ...)
  drinking_events  (id, user_id, date, tier, drinks, note, created_at)
  user_badges      (user_id, badge_id, earned_at)

Dates are always bound as calendar dates, never timestamps.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.scoring.models import DayScore
from app.scoring.weekly import WeekHistory, WeekWindow, to_date

logger = logging.getLogger(__name__)

SCORE_COLUMNS = tuple(DayScore.model_fields)


def _rows(result: Any) -> list[dict[str, Any]]:
    columns = list(result.keys())
    return [dict(zip(columns, row)) for row in result.fetchall()]


def _first(result: Any) -> dict[str, Any] | None:
    rows = _rows(result)
    return rows[0] if rows else None


async def fetch_goal_config_row(session: AsyncSession, user_id: str) -> dict[str, Any] | None:
    result = await session.execute(
        text("SELECT goals, enabled_categories FROM user_goals WHERE user_id = :user_id"),
        {"user_id": user_id},
    )
    return _first(result)


async def fetch_daily_log(session: AsyncSession, user_id: str, day: date | str) -> dict[str, Any] | None:
    result = await session.execute(
        text("SELECT date, steps, data FROM daily_logs WHERE user_id = :user_id AND date = :day"),
        {"user_id": user_id, "day": to_date(day)},
    )
    return _first(result)


async def fetch_drinking_events(session: AsyncSession, user_id: str, day: date | str) -> list[dict[str, Any]]:
    result = await session.execute(
        text(
            "SELECT id, user_id, date, tier, drinks, note, created_at "
            "FROM drinking_events "
            "WHERE user_id = :user_id AND date = :day "
            "ORDER BY created_at ASC"
        ),
        {"user_id": user_id, "day": to_date(day)},
    )
    return _rows(result)


async def fetch_week_history(session: AsyncSession, user_id: str, window: WeekWindow) -> WeekHistory:
    """Daily logs inside `window`. A failed query is reported, not raised."""
    try:
        result = await session.execute(
            text(
                "SELECT date, data FROM daily_logs "
                "WHERE user_id = :user_id AND date >= :start AND date <= :end "
                "ORDER BY date ASC"
            ),
            {"user_id": user_id, "start": window.start, "end": window.end},
        )
        return WeekHistory(rows=_rows(result))
    except SQLAlchemyError as exc:
        logger.warning(
            "Week history fetch failed for %s (%s..%s): %s",
            user_id,
            window.start_key,
            window.end_key,
            exc,
            extra={"score_user_id": user_id},
        )
        return WeekHistory(error=str(exc))


async def fetch_activity_rows(
    session: AsyncSession, user_id: str, since: date
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """(daily log rows, drinking rows) on or after `since`, for streaks."""
    params = {"user_id": user_id, "since": since}
    logs = await session.execute(
        text("SELECT date, steps, data FROM daily_logs WHERE user_id = :user_id AND date >= :since"),
        params,
    )
    drinks = await session.execute(
        text("SELECT date, drinks FROM drinking_events WHERE user_id = :user_id AND date >= :since"),
        params,
    )
    return _rows(logs), _rows(drinks)


async def upsert_day_score(session: AsyncSession, user_id: str, day: date | str, score: DayScore) -> None:
    """Write score columns onto the (user, date) log row, creating it if needed."""
    columns = ", ".join(SCORE_COLUMNS)
    values = ", ".join(f":{c}" for c in SCORE_COLUMNS)
    updates = ", ".join(f"{c} = EXCLUDED.{c}" for c in SCORE_COLUMNS)
    await session.execute(
        text(
            f"INSERT INTO daily_logs (user_id, date, {columns}) "
            f"VALUES (:user_id, :day, {values}) "
            f"ON CONFLICT (user_id, date) DO UPDATE SET {updates}"
        ),
        {"user_id": user_id, "day": to_date(day), **score.to_row()},
    )


async def has_badge(session: AsyncSession, user_id: str, badge_id: str) -> bool:
    result = await session.execute(
        text("SELECT badge_id FROM user_badges WHERE user_id = :user_id AND badge_id = :badge_id"),
        {"user_id": user_id, "badge_id": badge_id},
    )
    return _first(result) is not None


async def award_badge(session: AsyncSession, user_id: str, badge_id: str) -> None:
    await session.execute(
        text(
            "INSERT INTO user_badges (user_id, badge_id) VALUES (:user_id, :badge_id) "
            "ON CONFLICT (user_id, badge_id) DO NOTHING"
        ),
        {"user_id": user_id, "badge_id": badge_id},
    )
