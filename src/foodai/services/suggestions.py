"""Food suggestions for the current meal slot."""

from dataclasses import dataclass

from foodai.domain.meals import MealType, meal_type_for_hour


@dataclass(frozen=True)
class FoodSuggestion:
    """A suggested food with its approximate calories."""

    food: str
    calories: int
    reason: str


@dataclass(frozen=True)
class MealSuggestions:
    """Suggestions and a tip for one meal slot."""

    meal_type: MealType
    suggestions: tuple[FoodSuggestion, ...]
    tip: str


SUGGESTIONS: dict[MealType, MealSuggestions] = {
    MealType.BREAKFAST: MealSuggestions(
        meal_type=MealType.BREAKFAST,
        suggestions=(
            FoodSuggestion("Oatmeal with fruit", 300, "Energy and fiber"),
            FoodSuggestion(
                "Two eggs with whole-wheat toast", 350, "Protein and complex carbs"
            ),
            FoodSuggestion("Greek yogurt with nuts", 280, "Protein and healthy fats"),
        ),
        tip="Eat 25-30% of the day's energy at breakfast",
    ),
    MealType.MORNING_SNACK: MealSuggestions(
        meal_type=MealType.MORNING_SNACK,
        suggestions=(
            FoodSuggestion("Banana", 105, "Quick energy"),
            FoodSuggestion("Handful of almonds", 160, "Fullness and focus"),
            FoodSuggestion("Apple", 95, "Fiber and vitamins"),
        ),
        tip="Keep it light, around 100-150 kcal",
    ),
    MealType.LUNCH: MealSuggestions(
        meal_type=MealType.LUNCH,
        suggestions=(
            FoodSuggestion("Salmon salad", 450, "Protein and omega-3"),
            FoodSuggestion("Chicken breast rice bowl", 550, "Balanced nutrients"),
            FoodSuggestion("Quinoa bowl", 480, "Complete protein and vegetables"),
        ),
        tip="Eat 35-40% of the day's energy at lunch",
    ),
    MealType.AFTERNOON_SNACK: MealSuggestions(
        meal_type=MealType.AFTERNOON_SNACK,
        suggestions=(
            FoodSuggestion("Protein shake", 150, "Muscle recovery and fullness"),
            FoodSuggestion("Carrots with hummus", 120, "Low calorie, high nutrition"),
            FoodSuggestion("Boiled egg", 70, "Extra protein"),
        ),
        tip="Pick a light snack that lasts until dinner",
    ),
    MealType.DINNER: MealSuggestions(
        meal_type=MealType.DINNER,
        suggestions=(
            FoodSuggestion("Tofu kimchi stew", 350, "Low calorie, high protein"),
            FoodSuggestion(
                "Grilled chicken with vegetables", 400, "Light and easy to digest"
            ),
            FoodSuggestion("Shrimp salad", 320, "Low calorie, high protein"),
        ),
        tip="Keep dinner light and finish three hours before bed",
    ),
    MealType.LATE_NIGHT: MealSuggestions(
        meal_type=MealType.LATE_NIGHT,
        suggestions=(
            FoodSuggestion("Warm milk", 100, "Helps you sleep"),
            FoodSuggestion("Cherry tomatoes", 30, "Low-calorie snack"),
            FoodSuggestion("Plain yogurt", 80, "Easy to digest"),
        ),
        tip="Best avoided; if you must, stay under 200 kcal",
    ),
}


def suggestions_for_hour(hour: int) -> MealSuggestions:
    """Return the suggestions for the meal slot of a local hour."""
    return SUGGESTIONS[meal_type_for_hour(hour)]
