"""Goal normalizer — turns any persisted goal payload into a GoalConfig.

Total by construction: malformed input falls back to defaults, out-of-range
targets are clamped. The single exception is the renamed category key
"knowledge" under strict validation, which is a caller bug.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from app.config import settings
from app.scoring.bounds import clamp_target
from app.scoring.goals_config import (
    DEFAULT_ENABLED_CATEGORIES,
    DEFAULT_PRESET_ID,
    GOAL_CATEGORIES,
    get_default_goal_config,
    get_default_goals,
)
from app.scoring.models import CategoryGoal, GoalConfig

logger = logging.getLogger(__name__)

LEGACY_CALLS_KEY = "calls_weekly"
CALLS_FRIENDS_KEY = "calls_friends_weekly"
RENAMED_CATEGORY_KEYS: Mapping[str, str] = {"knowledge": "reading"}


class DeprecatedCategoryKeyError(ValueError):
    """A renamed category key was used to enable a category."""

    def __init__(self, key: str, replacement: str):
        super().__init__(f"Invalid category key '{key}'. Use '{replacement}'.")
        self.key = key
        self.replacement = replacement


# ---------------------------------------------------------------------------
# Legacy payload shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LegacyShapeAdapter:
    name: str
    extract: Callable[[Mapping[str, Any]], Any]


# Tried in order; the first one that yields a mapping wins.
LEGACY_SHAPE_ADAPTERS: tuple[LegacyShapeAdapter, ...] = (
    LegacyShapeAdapter("categories", lambda raw: raw.get("categories")),
    LegacyShapeAdapter("goals", lambda raw: raw.get("goals")),
    LegacyShapeAdapter("bare", lambda raw: raw),
)


def resolve_category_map(raw: Mapping[str, Any]) -> tuple[str, Mapping[str, Any]]:
    """Return (adapter name, per-category map) for a raw goal payload."""
    for adapter in LEGACY_SHAPE_ADAPTERS:
        candidate = adapter.extract(raw)
        if isinstance(candidate, Mapping):
            return adapter.name, candidate
    return "bare", raw


# ---------------------------------------------------------------------------
# Per-category normalization
# ---------------------------------------------------------------------------


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _dedupe(keys: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(keys))


def _normalize_enabled(category: str, enabled: list[Any]) -> list[str]:
    cleaned = [key for key in enabled if isinstance(key, str) and key]
    if category == "community" and LEGACY_CALLS_KEY in cleaned:
        cleaned = [key for key in cleaned if key != LEGACY_CALLS_KEY] + [CALLS_FRIENDS_KEY]
    return _dedupe(cleaned)


def _merge_targets(category: str, base: CategoryGoal, incoming: Mapping[str, Any]) -> None:
    for key, value in incoming.items():
        if not _is_finite_number(value):
            continue
        if category == "community" and key == LEGACY_CALLS_KEY:
            if CALLS_FRIENDS_KEY not in base.targets:
                base.targets[CALLS_FRIENDS_KEY] = clamp_target(CALLS_FRIENDS_KEY, value)
            continue
        base.targets[key] = clamp_target(key, value)


def normalize_goals(raw_categories: Mapping[str, Any] | None) -> dict[str, CategoryGoal]:
    """Merge a per-category goals map over the built-in defaults.

    - missing category → default untouched
    - `enabled` list → replaces the default list (legacy `calls_weekly`
      becomes `calls_friends_weekly`)
    - `targets` → merged key by key; non-finite values dropped, the rest
      clamped to GOAL_BOUNDS
    """
    base = get_default_goals()
    if not isinstance(raw_categories, Mapping):
        return base

    for category in GOAL_CATEGORIES:
        incoming = raw_categories.get(category)
        if isinstance(incoming, CategoryGoal):
            incoming = incoming.model_dump()
        if not isinstance(incoming, Mapping):
            continue

        enabled = incoming.get("enabled")
        if isinstance(enabled, (list, tuple)):
            base[category].enabled = _normalize_enabled(category, list(enabled))

        targets = incoming.get("targets")
        if isinstance(targets, Mapping):
            _merge_targets(category, base[category], targets)

    return base


def _check_renamed_keys(enabled_raw: Any) -> None:
    if not isinstance(enabled_raw, (list, tuple)):
        return
    for key in enabled_raw:
        if isinstance(key, str) and key in RENAMED_CATEGORY_KEYS:
            raise DeprecatedCategoryKeyError(key, RENAMED_CATEGORY_KEYS[key])


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def normalize_goal_config(
    raw: Any,
    enabled_categories_override: Iterable[str] | None = None,
    *,
    strict_validation: bool | None = None,
) -> GoalConfig:
    """Normalize a persisted goal payload (any legacy shape) into a GoalConfig.

    Output always has all five categories, a non-empty `enabled_categories`
    and every target clamped. With strict validation on, enabling a renamed
    category key raises DeprecatedCategoryKeyError.
    """
    strict = settings.strict_validation if strict_validation is None else strict_validation

    if isinstance(raw, GoalConfig):
        raw = raw.to_raw()
    if not isinstance(raw, Mapping):
        return get_default_goal_config()

    _, category_map = resolve_category_map(raw)
    categories = normalize_goals(category_map)

    enabled_raw = _first_present(raw, "enabledCategories", "enabled_categories")
    if enabled_raw is None and enabled_categories_override is not None:
        enabled_raw = list(enabled_categories_override)
    if enabled_raw is None:
        enabled_raw = list(DEFAULT_ENABLED_CATEGORIES)

    if strict:
        _check_renamed_keys(enabled_raw)

    enabled_list = enabled_raw if isinstance(enabled_raw, (list, tuple)) else []
    enabled_categories = _dedupe(key for key in enabled_list if key in GOAL_CATEGORIES)
    if not enabled_categories:
        if enabled_list:
            logger.debug("No recognized categories in %r; using defaults", enabled_list)
        enabled_categories = list(DEFAULT_ENABLED_CATEGORIES)

    preset_id = _first_present(raw, "presetId", "preset")
    if not isinstance(preset_id, str) or not preset_id:
        preset_id = DEFAULT_PRESET_ID

    return GoalConfig(
        enabled_categories=enabled_categories,
        categories=categories,
        preset_id=preset_id,
    )


# ---------------------------------------------------------------------------
# Config editing (settings / onboarding flow)
# ---------------------------------------------------------------------------


def clear_enabled_variables_for_domains(config: GoalConfig, domains: Iterable[str]) -> GoalConfig:
    """Copy of `config` with the enabled metrics of `domains` emptied.

    Targets and every other category are left as they are.
    """
    result = config.model_copy(deep=True)
    for category in domains:
        goal = result.categories.get(category)
        if goal is None:
            continue
        result.categories[category] = CategoryGoal(enabled=[], targets=dict(goal.targets))
    return result


def toggle_category(config: GoalConfig, category: str) -> GoalConfig:
    """Enable/disable a category. Refuses to leave the enabled set empty."""
    result = config.model_copy(deep=True)
    if category in result.enabled_categories:
        remaining = [c for c in result.enabled_categories if c != category]
        if remaining:
            result.enabled_categories = remaining
    elif category in GOAL_CATEGORIES:
        result.enabled_categories = result.enabled_categories + [category]
    return result


def toggle_metric(config: GoalConfig, category: str, key: str) -> GoalConfig:
    result = config.model_copy(deep=True)
    goal = result.categories.get(category)
    if goal is None:
        return result
    if key in goal.enabled:
        goal.enabled = [k for k in goal.enabled if k != key]
    else:
        goal.enabled = goal.enabled + [key]
    return result


def set_target(config: GoalConfig, category: str, key: str, value: Any) -> GoalConfig:
    """Set one target; a non-finite value keeps the previous target."""
    result = config.model_copy(deep=True)
    goal = result.categories.get(category)
    if goal is None or not _is_finite_number(value):
        return result
    goal.targets[key] = clamp_target(key, value)
    return result
