"""Hardcoded goal presets — read-only templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from app.scoring.goals_config import DEFAULT_PRESET_ID, get_default_goal_config
from app.scoring.models import GoalConfig
from app.scoring.normalizer import clear_enabled_variables_for_domains, normalize_goal_config

CUSTOM_PRESET_ID = "custom"

_COMMUNITY_WEEKLY_ONES = {"calls_friends_weekly": 1, "calls_family_weekly": 1, "social_events_weekly": 1}


@dataclass(frozen=True, slots=True)
class GoalPreset:
    id: str
    name: str
    description: str
    config: MappingProxyType[str, Any]  # raw payload, normalized on read
    notes: tuple[str, ...] = field(default_factory=tuple)

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description, "notes": list(self.notes)}


def _preset(
    preset_id: str,
    name: str,
    description: str,
    enabled_categories: list[str],
    categories: dict[str, dict[str, Any]],
) -> GoalPreset:
    raw = {"enabledCategories": enabled_categories, "categories": categories, "presetId": preset_id}
    return GoalPreset(id=preset_id, name=name, description=description, config=MappingProxyType(raw))


PRESETS: MappingProxyType[str, GoalPreset] = MappingProxyType(
    {
        DEFAULT_PRESET_ID: GoalPreset(
            id=DEFAULT_PRESET_ID,
            name="Default",
            description="Baseline across exercise, sleep, diet, and knowledge.",
            config=MappingProxyType(get_default_goal_config().to_raw()),
        ),
        "75-hard": _preset(
            "75-hard",
            "75 Hard",
            "Two workouts, strict diet, daily reading, and recovery targets.",
            ["exercise", "diet", "reading", "sleep"],
            {
                "exercise": {
                    "enabled": ["minutes", "workouts_logged", "steps"],
                    "targets": {"minutes": 90, "workouts_logged": 2, "steps": 10000},
                },
                "diet": {
                    "enabled": ["meals_cooked_percent", "healthiness_self_rating", "water_oz"],
                    "targets": {"meals_cooked_percent": 100, "healthiness_self_rating": 9, "water_oz": 128},
                },
                "reading": {"enabled": ["pages"], "targets": {"pages": 10}},
                "sleep": {"enabled": ["hours"], "targets": {"hours": 8}},
                "community": {"enabled": [], "targets": dict(_COMMUNITY_WEEKLY_ONES)},
            },
        ),
        "75-soft": _preset(
            "75-soft",
            "75 Soft",
            "Progressive structure with sustainable targets.",
            ["exercise", "diet", "reading", "sleep", "community"],
            {
                "exercise": {
                    "enabled": ["minutes", "workouts_logged"],
                    "targets": {"minutes": 45, "workouts_logged": 1},
                },
                "diet": {
                    "enabled": ["meals_cooked_percent", "healthiness_self_rating"],
                    "targets": {"meals_cooked_percent": 80, "healthiness_self_rating": 7},
                },
                "reading": {"enabled": ["pages"], "targets": {"pages": 10}},
                "sleep": {"enabled": ["hours"], "targets": {"hours": 7.5}},
                "community": {
                    "enabled": ["calls_friends_weekly", "calls_family_weekly", "social_events_weekly"],
                    "targets": dict(_COMMUNITY_WEEKLY_ONES),
                },
            },
        ),
        "jacks-standard": _preset(
            "jacks-standard",
            "Jack’s targets",
            "Jack’s current targets across training, sleep, diet, knowledge.",
            ["exercise", "sleep", "diet", "reading", "community"],
            {
                "exercise": {"enabled": ["minutes", "steps"], "targets": {"minutes": 60, "steps": 10000}},
                "diet": {"enabled": ["healthiness_self_rating"], "targets": {"healthiness_self_rating": 9}},
                "reading": {"enabled": ["pages"], "targets": {"pages": 25}},
                "sleep": {"enabled": ["hours"], "targets": {"hours": 8}},
                "community": {"enabled": [], "targets": dict(_COMMUNITY_WEEKLY_ONES)},
            },
        ),
        "scholars-track": _preset(
            "scholars-track",
            "Scholar’s Track",
            "Knowledge-heavy focus with recovery and minimal exercise.",
            ["reading", "sleep", "exercise"],
            {
                "reading": {"enabled": ["pages"], "targets": {"pages": 40}},
                "sleep": {"enabled": ["hours"], "targets": {"hours": 8}},
                "exercise": {"enabled": ["minutes"], "targets": {"minutes": 30}},
                "diet": {"enabled": [], "targets": {"meals_cooked_percent": 100}},
                "community": {"enabled": [], "targets": dict(_COMMUNITY_WEEKLY_ONES)},
            },
        ),
    }
)


def list_presets() -> list[GoalPreset]:
    return list(PRESETS.values())


def get_preset(preset_id: str) -> GoalPreset | None:
    return PRESETS.get(preset_id)


def get_preset_config(preset_id: str) -> GoalConfig:
    """Normalized copy of a preset's config; unknown ids give the defaults."""
    preset = PRESETS.get(preset_id)
    if preset is None:
        return get_default_goal_config()
    return normalize_goal_config(dict(preset.config), strict_validation=False)


def apply_preset(current: GoalConfig, preset_id: str) -> GoalConfig:
    """Apply a preset on top of the user's config (merge-on-apply).

    Only categories currently enabled in `current` take the preset's goals;
    `enabled_categories` is kept as the user chose it. "custom" instead
    clears the enabled metrics of every enabled category.
    """
    if preset_id == CUSTOM_PRESET_ID:
        cleared = clear_enabled_variables_for_domains(current, current.enabled_categories)
        cleared.preset_id = CUSTOM_PRESET_ID
        return cleared

    preset_config = get_preset_config(preset_id)
    merged = current.model_copy(deep=True)
    for category in merged.enabled_categories:
        merged.categories[category] = preset_config.categories[category].model_copy(deep=True)
    merged.preset_id = preset_id
    return merged
