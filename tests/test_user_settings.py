"""Tests for the user settings service."""

import pytest

from foodai.domain.settings import Goal, UserSettings
from foodai.services.store import SETTINGS_KEY, JsonStore
from foodai.services.user_settings import (
    UserSettingsService,
    calculate_target_calories,
)
from tests.conftest import RecordingBackend


def test_ensure_defaults_writes_only_once(
    store: JsonStore, backend: RecordingBackend
) -> None:
    service = UserSettingsService(store)

    assert service.ensure_defaults() is True
    assert service.ensure_defaults() is False
    assert len(backend.writes) == 1
    assert service.get() == UserSettings()


def test_get_returns_defaults_for_corrupt_fields(store: JsonStore) -> None:
    store.set(SETTINGS_KEY, {"age": "old", "goal": "bulk", "target_calories": 1800})

    settings = UserSettingsService(store).get()

    assert settings.age == 25
    assert settings.goal is Goal.MAINTAIN
    assert settings.target_calories == 1800


def test_update_merges_fields(store: JsonStore) -> None:
    service = UserSettingsService(store)
    service.ensure_defaults()

    updated = service.update(weight_kg=80, goal="lose")

    assert updated.weight_kg == 80
    assert updated.goal is Goal.LOSE
    assert service.get().height_cm == 170


def test_update_rejects_unknown_fields(store: JsonStore) -> None:
    with pytest.raises(ValueError, match="Unknown settings"):
        UserSettingsService(store).update(shoe_size=44)


def test_target_calories_falls_back_to_default(store: JsonStore) -> None:
    store.set(SETTINGS_KEY, {"target_calories": 0})

    assert UserSettingsService(store).target_calories() == 2000


def test_calculate_target_calories() -> None:
    assert calculate_target_calories(UserSettings()) == 2635
    assert calculate_target_calories(UserSettings(goal=Goal.LOSE)) == 2135
    female = UserSettings(
        gender="female",
        age=30,
        height_cm=160,
        weight_kg=55,
        activity_level="sedentary",
        goal=Goal.GAIN,
    )
    # 447.593 + 508.585 + 495.68 - 129.9 = 1321.958 * 1.2 + 500
    assert calculate_target_calories(female) == 2086


def test_apply_calculated_target_saves(store: JsonStore) -> None:
    service = UserSettingsService(store)

    updated = service.apply_calculated_target()

    assert updated.target_calories == 2635
    assert service.target_calories() == 2635


def test_non_positive_stored_values_fall_back_to_defaults(store: JsonStore) -> None:
    store.set(
        SETTINGS_KEY,
        {"age": 0, "height_cm": -5, "weight_kg": 82, "target_calories": -2000},
    )

    settings = UserSettingsService(store).get()

    assert settings.age == 25
    assert settings.height_cm == 170
    assert settings.weight_kg == 82
    assert settings.target_calories == 2000


def test_update_rejects_non_positive_values(store: JsonStore) -> None:
    service = UserSettingsService(store)
    service.ensure_defaults()

    with pytest.raises(ValueError, match="must be positive"):
        service.update(target_calories=-100)
    assert service.target_calories() == 2000


def test_camel_case_settings_are_accepted(store: JsonStore) -> None:
    store.set(
        SETTINGS_KEY,
        {
            "gender": "female",
            "height": 160,
            "weight": 55,
            "activity": "light",
            "goal": "lose",
            "targetCalories": 1600,
        },
    )

    settings = UserSettingsService(store).get()

    assert settings.height_cm == 160
    assert settings.weight_kg == 55
    assert settings.activity_level == "light"
    assert settings.target_calories == 1600


def test_snake_case_wins_over_alias(store: JsonStore) -> None:
    store.set(SETTINGS_KEY, {"target_calories": 1800, "targetCalories": 1500})

    assert UserSettingsService(store).target_calories() == 1800


def test_apply_calculated_target_rejects_non_positive_result(store: JsonStore) -> None:
    service = UserSettingsService(store)
    service.save(
        UserSettings(gender="female", age=200, height_cm=1, weight_kg=1)
    )

    assert service.apply_calculated_target().target_calories == 2000
