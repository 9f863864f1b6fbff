"""Domain models for statistics."""

from dataclasses import dataclass, field

from foodai.domain.meals import Meal


@dataclass
class PeriodStats:
    """Calories and meals grouped under one period key."""

    total_calories: int = 0
    count: int = 0
    meals: list[Meal] = field(default_factory=list)


@dataclass(frozen=True)
class FoodFrequency:
    """How often a food name was logged."""

    name: str
    count: int
    total_calories: int


@dataclass(frozen=True)
class WeeklyTotals:
    """Nutrients summed over the rolling week and the number of active days."""

    calories: float
    carbs: float
    protein: float
    fat: float
    sodium: float
    days: int


@dataclass(frozen=True)
class WeeklyScore:
    """Weekly nutrition-balance score with its component breakdown.

    ``macro_balance`` is None when the week had meals but no macro calories,
    in which case the component was not scored.
    """

    score: int
    macro_balance: int | None
    calorie_consistency: int
    sodium_control: int
    protein_adequacy: int
    notes: list[str]
    totals: WeeklyTotals | None = None
