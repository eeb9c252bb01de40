"""Recompute and persist scores — the seam between the engine and the DB.

A DayScore is never patched in place: every save of a daily log or a
drinking event recomputes it from the current rows. Writes for the same
(user, date) are serialized so two near-simultaneous triggers cannot
persist a stale score over a fresh one.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Awaitable
from datetime import date, timedelta
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.scoring import connector
from app.scoring.composer import compute_scores
from app.scoring.models import DayScore
from app.scoring.normalizer import normalize_goal_config
from app.scoring.streaks import BADGE_007_ID, Streak, active_date_keys, longest_consecutive_streak, should_award_badge
from app.scoring.textnum import format_score
from app.scoring.weekly import aggregate_weekly_actuals, get_week_window, to_date

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScoreInputsUnavailable(RuntimeError):
    """A read needed for scoring (goals, daily log, drinking events) failed."""

    def __init__(self, date_key: str, source: str, reason: str):
        super().__init__(f"Could not read {source} for {date_key}: {reason}")
        self.date_key = date_key
        self.source = source
        self.reason = reason


class WeeklyHistoryUnavailable(RuntimeError):
    """The week's history could not be read; the score was not saved."""

    def __init__(self, date_key: str, reason: str | None, partial_score: DayScore):
        super().__init__(f"Weekly history unavailable for {date_key}: {reason}")
        self.date_key = date_key
        self.reason = reason
        self.partial_score = partial_score


_locks: weakref.WeakValueDictionary[tuple[str, str], asyncio.Lock] = weakref.WeakValueDictionary()


def _lock_for(user_id: str, date_key: str) -> asyncio.Lock:
    key = (user_id, date_key)
    lock = _locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _locks[key] = lock
    return lock


async def _read(query: Awaitable[T], source: str, user_id: str, date_key: str) -> T:
    try:
        return await query
    except SQLAlchemyError as exc:
        logger.error(
            "Not scoring %s on %s: %s read failed",
            user_id,
            date_key,
            source,
            extra={"score_user_id": user_id, "score_date": date_key},
        )
        raise ScoreInputsUnavailable(date_key, source, str(exc)) from exc


async def recompute_day_score(session: AsyncSession, user_id: str, day: date | str) -> DayScore:
    """Gather goal row, drinking events and the week's logs, score, persist.

    Raises ScoreInputsUnavailable when a goal, log or drinking read fails
    and WeeklyHistoryUnavailable when the week's history could not be
    fetched. Nothing is persisted in either case.
    """
    target = to_date(day)
    date_key = target.isoformat()

    async with _lock_for(user_id, date_key):
        goal_row = await _read(connector.fetch_goal_config_row(session, user_id), "goals", user_id, date_key)
        log_row = await _read(connector.fetch_daily_log(session, user_id, target), "daily log", user_id, date_key)
        events = await _read(
            connector.fetch_drinking_events(session, user_id, target), "drinking events", user_id, date_key
        )
        history = await connector.fetch_week_history(session, user_id, get_week_window(target))

        day_data = (log_row or {}).get("data") or {}
        config = None
        if goal_row:
            config = normalize_goal_config(
                {"categories": goal_row.get("goals"), "enabledCategories": goal_row.get("enabled_categories")}
            )

        weekly = aggregate_weekly_actuals(history, target, day_data)
        score = compute_scores(day_data, config, events, weekly)

        if not history.complete:
            logger.error(
                "Not saving score for %s on %s: week history incomplete",
                user_id,
                date_key,
                extra={"score_user_id": user_id, "score_date": date_key},
            )
            raise WeeklyHistoryUnavailable(date_key, history.error, score)

        await connector.upsert_day_score(session, user_id, target, score)
        await session.commit()

    logger.info(
        "Recomputed score for %s on %s: %s",
        user_id,
        date_key,
        format_score(score.total_score),
        extra={"score_user_id": user_id, "score_date": date_key},
    )
    return score


async def load_streak(session: AsyncSession, user_id: str, today: date) -> Streak:
    since = today - timedelta(days=settings.streak_lookback_days)
    log_rows, drinking_rows = await connector.fetch_activity_rows(session, user_id, since)
    return longest_consecutive_streak(active_date_keys(log_rows, drinking_rows))


async def check_streak_badge(session: AsyncSession, user_id: str, today: date) -> bool:
    """Award the 007 badge once a seven-day streak exists. True if newly awarded."""
    existing = await connector.has_badge(session, user_id, BADGE_007_ID)
    if existing:
        return False

    streak = await load_streak(session, user_id, today)
    if not should_award_badge(existing, streak.has7):
        return False

    await connector.award_badge(session, user_id, BADGE_007_ID)
    await session.commit()
    logger.info("Awarded %s to %s", BADGE_007_ID, user_id, extra={"score_user_id": user_id})
    return True
