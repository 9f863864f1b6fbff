"""Meal recording unit of work."""

from dataclasses import dataclass, field

from foodai.domain.achievements import Badge
from foodai.domain.meals import Meal
from foodai.domain.nutrition import NutritionEstimate
from foodai.services.achievements import AchievementEngine
from foodai.services.ledger import MealLedger
from foodai.services.store import JsonStore


@dataclass(frozen=True)
class RecordResult:
    """The recorded meal and the badges it unlocked."""

    meal: Meal
    new_badges: list[Badge] = field(default_factory=list)


@dataclass
class MealRecorder:
    """Appends a meal, advances achievements and grants badges as one write."""

    store: JsonStore
    ledger: MealLedger
    achievements: AchievementEngine

    def record(self, estimate: NutritionEstimate) -> RecordResult:
        """Record a meal from a nutrition estimate."""
        with self.store.batch():
            meal = self.ledger.record(estimate)
            new_badges = self.achievements.on_meal_recorded(meal)
        return RecordResult(meal=meal, new_badges=new_badges)
