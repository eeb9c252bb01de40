"""Scoring HTTP router — goals, presets, penalty, scores, streaks."""

from __future__ import annotations

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import verify_api_key
from app.db import get_session
from app.scoring import service
from app.scoring.composer import compute_scores
from app.scoring.goals_config import GOAL_CATEGORIES, GOAL_CATEGORY_LABELS, get_default_goal_config, list_metric_options
from app.scoring.models import (
    AlcoholPenalty,
    DayScore,
    GoalConfig,
    NormalizeRequest,
    PenaltyRequest,
    PresetApplyRequest,
    ScoreRequest,
)
from app.scoring.normalizer import DeprecatedCategoryKeyError, normalize_goal_config
from app.scoring.penalty import calculate_alcohol_penalty
from app.scoring.presets import CUSTOM_PRESET_ID, apply_preset, get_preset, get_preset_config, list_presets
from app.scoring.weekly import get_week_window, to_date

router = APIRouter(prefix="/scoring", tags=["scoring"])


def _parse_date(value: str, name: str) -> date:
    try:
        return to_date(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


def _normalize(raw, override=None) -> GoalConfig:
    try:
        return normalize_goal_config(raw, override)
    except DeprecatedCategoryKeyError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


# ---------------------------------------------------------------------------
# /scoring/goals
# ---------------------------------------------------------------------------


@router.get("/goals/defaults", response_model=GoalConfig)
async def goals_defaults(_: str = Depends(verify_api_key)) -> GoalConfig:
    return get_default_goal_config()


@router.post("/goals/normalize", response_model=GoalConfig)
async def goals_normalize(body: NormalizeRequest, _: str = Depends(verify_api_key)) -> GoalConfig:
    return _normalize(body.goals, body.enabled_categories)


@router.get("/goals/options")
async def goals_options(_: str = Depends(verify_api_key)) -> dict:
    return {
        category: {
            "label": GOAL_CATEGORY_LABELS[category],
            "metrics": [
                {"key": o.key, "label": o.label, "hint": o.hint, "cadence": o.cadence}
                for o in list_metric_options(category)
            ],
        }
        for category in GOAL_CATEGORIES
    }


# ---------------------------------------------------------------------------
# /scoring/presets
# ---------------------------------------------------------------------------


@router.get("/presets")
async def presets_list(_: str = Depends(verify_api_key)) -> list[dict]:
    return [p.summary() for p in list_presets()]


@router.get("/presets/{preset_id}")
async def preset_detail(preset_id: str, _: str = Depends(verify_api_key)) -> dict:
    preset = get_preset(preset_id)
    if preset is None:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {preset_id}")
    return {**preset.summary(), "config": get_preset_config(preset_id).to_raw()}


@router.post("/presets/{preset_id}/apply", response_model=GoalConfig)
async def preset_apply(
    preset_id: str,
    body: PresetApplyRequest,
    _: str = Depends(verify_api_key),
) -> GoalConfig:
    if preset_id != CUSTOM_PRESET_ID and get_preset(preset_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {preset_id}")
    return apply_preset(_normalize(body.current), preset_id)


# ---------------------------------------------------------------------------
# /scoring/week-window, /penalty, /score
# ---------------------------------------------------------------------------


@router.get("/week-window")
async def week_window(
    _: str = Depends(verify_api_key),
    day: str = Query(..., alias="date", description="Date (YYYY-MM-DD)"),
) -> dict[str, str]:
    window = get_week_window(_parse_date(day, "date"))
    return {"start": window.start_key, "end": window.end_key}


@router.post("/penalty", response_model=AlcoholPenalty)
async def penalty(body: PenaltyRequest, _: str = Depends(verify_api_key)) -> AlcoholPenalty:
    return calculate_alcohol_penalty(body.events)


@router.post("/score", response_model=DayScore)
async def score(body: ScoreRequest, _: str = Depends(verify_api_key)) -> DayScore:
    try:
        return compute_scores(body.day_data, body.goals, body.drinking_events, body.weekly_actuals)
    except DeprecatedCategoryKeyError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


# ---------------------------------------------------------------------------
# /scoring/users/{user_id}/...
# ---------------------------------------------------------------------------


@router.post("/users/{user_id}/days/{day}/recompute", response_model=DayScore)
async def recompute(
    user_id: str,
    day: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> DayScore:
    target = _parse_date(day, "day")
    try:
        return await service.recompute_day_score(session, user_id, target)
    except service.ScoreInputsUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except service.WeeklyHistoryUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except DeprecatedCategoryKeyError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.get("/users/{user_id}/streak")
async def streak(
    user_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    today: date | None = Query(default=None, description="Reference date (default: today, UTC)"),
) -> dict:
    reference = today or datetime.now(timezone.utc).date()
    result = await service.load_streak(session, user_id, reference)
    awarded = await service.check_streak_badge(session, user_id, reference)
    return {"longest": result.longest, "has7": result.has7, "badge_awarded": awarded}
