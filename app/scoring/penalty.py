"""Alcohol penalty — points deducted from the 0–100 diet score.

Tier 1 (major / rare events) carries no penalty. Tier 2 (social) gets a
free allowance; tier 3 (casual / regular) is charged from the first drink
and more steeply past the third.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from app.scoring.models import AlcoholPenalty, DrinkingEvent
from app.scoring.textnum import int_from_text

TIER2_FREE_DRINKS = 3
TIER2_POINTS_PER_DRINK = 5

TIER3_BASE_DRINKS = 3
TIER3_BASE_POINTS = 3
TIER3_EXCESS_POINTS = 7


def tier2_penalty(drinks: int) -> int:
    return max(0, drinks - TIER2_FREE_DRINKS) * TIER2_POINTS_PER_DRINK


def tier3_penalty(drinks: int) -> int:
    if drinks <= TIER3_BASE_DRINKS:
        return drinks * TIER3_BASE_POINTS
    return TIER3_BASE_DRINKS * TIER3_BASE_POINTS + (drinks - TIER3_BASE_DRINKS) * TIER3_EXCESS_POINTS


def _tier_and_drinks(event: DrinkingEvent | Mapping[str, Any]) -> tuple[int | None, int]:
    if isinstance(event, DrinkingEvent):
        return event.tier, event.drinks
    tier = int_from_text(event.get("tier"))
    drinks = int_from_text(event.get("drinks")) or 0
    return tier, max(0, drinks)


def calculate_alcohol_penalty(events: Iterable[DrinkingEvent | Mapping[str, Any]]) -> AlcoholPenalty:
    """Sum drinks per tier and price them. Pure; bad rows count as 0 drinks."""
    tier2_drinks = 0
    tier3_drinks = 0
    for event in events:
        tier, drinks = _tier_and_drinks(event)
        if tier == 2:
            tier2_drinks += drinks
        elif tier == 3:
            tier3_drinks += drinks

    tier2 = tier2_penalty(tier2_drinks)
    tier3 = tier3_penalty(tier3_drinks)
    return AlcoholPenalty(
        total=tier2 + tier3,
        tier2=tier2,
        tier3=tier3,
        tier2_drinks=tier2_drinks,
        tier3_drinks=tier3_drinks,
    )
