"""Tests for meal classifiers."""

from datetime import date

from foodai.domain.meals import MealType, meal_type_for_hour
from foodai.services.classifiers import (
    DEFAULT_FOOD_EMOJI,
    HIGH_PROTEIN,
    VEGETABLE,
    food_emoji,
)
from foodai.services.suggestions import SUGGESTIONS, suggestions_for_hour
from tests.conftest import make_meal


def test_vegetable_classifier_matches_keywords() -> None:
    assert VEGETABLE.matches(make_meal(date(2024, 5, 1), name="Green Salad"))
    assert VEGETABLE.matches(make_meal(date(2024, 5, 1), name="시금치 나물"))
    assert not VEGETABLE.matches(make_meal(date(2024, 5, 1), name="Pork cutlet"))


def test_high_protein_threshold_is_inclusive() -> None:
    assert HIGH_PROTEIN.matches(make_meal(date(2024, 5, 1), protein=20.0))
    assert not HIGH_PROTEIN.matches(make_meal(date(2024, 5, 1), protein=19.9))


def test_food_emoji_uses_first_matching_category() -> None:
    assert food_emoji("Chicken fried rice") == "🍚"
    assert food_emoji("Kimchi Stew") == "🥬"
    assert food_emoji("Mystery") == DEFAULT_FOOD_EMOJI


def test_meal_type_for_hour_boundaries() -> None:
    assert meal_type_for_hour(6) is MealType.BREAKFAST
    assert meal_type_for_hour(10) is MealType.MORNING_SNACK
    assert meal_type_for_hour(14) is MealType.LUNCH
    assert meal_type_for_hour(15) is MealType.AFTERNOON_SNACK
    assert meal_type_for_hour(20) is MealType.DINNER
    assert meal_type_for_hour(21) is MealType.LATE_NIGHT
    assert meal_type_for_hour(3) is MealType.LATE_NIGHT


def test_suggestions_follow_meal_slot_boundaries() -> None:
    assert suggestions_for_hour(5).meal_type is MealType.LATE_NIGHT
    assert suggestions_for_hour(6).meal_type is MealType.BREAKFAST
    assert suggestions_for_hour(11).meal_type is MealType.MORNING_SNACK
    assert suggestions_for_hour(12).meal_type is MealType.LUNCH
    assert suggestions_for_hour(17).meal_type is MealType.AFTERNOON_SNACK
    assert suggestions_for_hour(18).meal_type is MealType.DINNER
    assert suggestions_for_hour(21).meal_type is MealType.LATE_NIGHT


def test_every_meal_slot_has_three_suggestions() -> None:
    assert set(SUGGESTIONS) == set(MealType)
    for meal_type, entry in SUGGESTIONS.items():
        assert entry.meal_type is meal_type
        assert len(entry.suggestions) == 3
        assert all(item.calories > 0 for item in entry.suggestions)
        assert entry.tip
