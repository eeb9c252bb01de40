"""Category scorer — completion ratio for one category."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from app.config import settings
from app.scoring.models import CategoryGoal

logger = logging.getLogger(__name__)


def _usable_target(target: Any) -> bool:
    return (
        isinstance(target, (int, float))
        and not isinstance(target, bool)
        and math.isfinite(target)
        and target > 0
    )


def compute_category_score(
    actuals: Mapping[str, Any],
    goal: CategoryGoal,
    defaults: CategoryGoal,
    *,
    strict_validation: bool | None = None,
) -> float:
    """Unweighted mean of min(actual / target, 1) over the enabled metrics.

    - empty `goal.enabled` falls back to `defaults.enabled`
    - targets are `defaults.targets` overlaid by `goal.targets`
    - a metric with a missing / non-finite / non-positive target is skipped
    - a non-finite actual contributes 0 but still counts
    - nothing counted → 0.0
    """
    strict = settings.strict_validation if strict_validation is None else strict_validation

    enabled = goal.enabled or defaults.enabled
    if not enabled:
        return 0.0
    targets = {**defaults.targets, **goal.targets}

    total = 0.0
    counted = 0
    for key in enabled:
        target = targets.get(key)
        if not _usable_target(target):
            if strict and isinstance(target, float) and math.isnan(target):
                logger.warning("NaN target for %s", key)
            continue

        actual = actuals.get(key)
        if actual is None:
            actual = 0.0
        elif isinstance(actual, bool) or not isinstance(actual, (int, float)) or not math.isfinite(actual):
            if strict:
                logger.warning("Non-finite actual for %s: %r", key, actual)
            actual = 0.0

        total += min(actual / target, 1.0)
        counted += 1

    return total / counted if counted else 0.0
