"""Tests for goal presets and merge-on-apply."""

from __future__ import annotations

from app.scoring.goals_config import get_default_goal_config
from app.scoring.normalizer import normalize_goal_config
from app.scoring.presets import (
    PRESETS,
    apply_preset,
    get_preset,
    get_preset_config,
    list_presets,
)


class TestPresetCatalogue:
    def test_five_presets(self):
        ids = [p.id for p in list_presets()]
        assert ids == ["default", "75-hard", "75-soft", "jacks-standard", "scholars-track"]

    def test_unknown_preset(self):
        assert get_preset("couch-to-5k") is None

    def test_unknown_preset_config_is_default(self):
        assert get_preset_config("couch-to-5k") == get_default_goal_config()

    def test_default_preset_matches_defaults(self):
        assert get_preset_config("default") == get_default_goal_config()

    def test_75_hard(self):
        config = get_preset_config("75-hard")
        assert config.preset_id == "75-hard"
        assert config.categories["exercise"].enabled == ["minutes", "workouts_logged", "steps"]
        assert config.categories["exercise"].targets["minutes"] == 90
        assert config.categories["diet"].targets["water_oz"] == 128
        assert "community" not in config.enabled_categories

    def test_75_soft_enables_community(self):
        config = get_preset_config("75-soft")
        assert "community" in config.enabled_categories
        assert config.categories["sleep"].targets["hours"] == 7.5

    def test_preset_configs_are_normalized(self):
        for preset in list_presets():
            config = get_preset_config(preset.id)
            assert normalize_goal_config(config) == config

    def test_preset_config_is_a_copy(self):
        config = get_preset_config("75-hard")
        config.categories["exercise"].enabled.clear()
        assert get_preset_config("75-hard").categories["exercise"].enabled
        assert PRESETS["75-hard"].summary()["name"] == "75 Hard"


class TestApplyPreset:
    def test_only_enabled_categories_overwritten(self):
        current = normalize_goal_config(
            {
                "enabledCategories": ["exercise", "sleep"],
                "categories": {
                    "exercise": {"enabled": ["steps"], "targets": {"steps": 5000}},
                    "reading": {"enabled": ["fiction_pages"], "targets": {"fiction_pages": 15}},
                },
            }
        )
        applied = apply_preset(current, "75-hard")

        assert applied.enabled_categories == ["exercise", "sleep"]
        assert applied.categories["exercise"].enabled == ["minutes", "workouts_logged", "steps"]
        assert applied.categories["exercise"].targets["steps"] == 10000
        assert applied.categories["reading"].enabled == ["fiction_pages"]
        assert applied.preset_id == "75-hard"

    def test_user_enabled_categories_survive(self):
        current = normalize_goal_config({"enabledCategories": ["exercise", "community"]})
        applied = apply_preset(current, "scholars-track")
        assert applied.enabled_categories == ["exercise", "community"]
        assert applied.categories["exercise"].targets["minutes"] == 30

    def test_apply_does_not_mutate_input(self):
        current = get_default_goal_config()
        apply_preset(current, "75-hard")
        assert current == get_default_goal_config()

    def test_custom_clears_enabled_metrics(self):
        current = get_preset_config("75-soft")
        custom = apply_preset(current, "custom")
        assert custom.preset_id == "custom"
        for category in current.enabled_categories:
            assert custom.categories[category].enabled == []
        assert custom.categories["exercise"].targets == current.categories["exercise"].targets
