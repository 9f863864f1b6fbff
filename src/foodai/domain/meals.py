"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class MealType(StrEnum):
    """Time-of-day slot a meal was eaten in."""

    BREAKFAST = "breakfast"
    MORNING_SNACK = "morning-snack"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon-snack"
    DINNER = "dinner"
    LATE_NIGHT = "late-night"


# (start hour inclusive, end hour exclusive, slot); anything else is late-night.
_MEAL_TYPE_HOURS = (
    (6, 10, MealType.BREAKFAST),
    (10, 12, MealType.MORNING_SNACK),
    (12, 15, MealType.LUNCH),
    (15, 18, MealType.AFTERNOON_SNACK),
    (18, 21, MealType.DINNER),
)


def meal_type_for_hour(hour: int) -> MealType:
    """Return the meal slot for a local hour of day."""
    for start, end, meal_type in _MEAL_TYPE_HOURS:
        if start <= hour < end:
            return meal_type
    return MealType.LATE_NIGHT


@dataclass(frozen=True)
class Meal:
    """A recorded meal. The date is fixed when the meal is written."""

    id: int
    name: str
    calories: int
    carbs: float
    protein: float
    fat: float
    sodium: float
    meal_type: MealType
    timestamp: datetime
    date: date
