"""Meal ledger: the append-only history of recorded meals."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

from foodai.domain.meals import Meal, MealType, meal_type_for_hour
from foodai.domain.nutrition import UNKNOWN_FOOD, NutritionEstimate
from foodai.domain.stats import FoodFrequency, PeriodStats
from foodai.services.store import MEALS_KEY, JsonStore

PERIODS = ("daily", "weekly", "monthly")

_logger = logging.getLogger(__name__)


@dataclass
class MealLedger:
    """Records meals and answers date-based queries over them."""

    store: JsonStore
    clock: Callable[[], datetime]
    timezone: tzinfo

    def record(self, draft: NutritionEstimate) -> Meal:
        """Append a meal stamped with the current time and local date."""
        now = self.clock().astimezone(self.timezone)
        meals = self.all()
        meal = Meal(
            id=_next_id(now, meals),
            name=draft.name,
            calories=draft.calories,
            carbs=draft.carbs,
            protein=draft.protein,
            fat=draft.fat,
            sodium=draft.sodium,
            meal_type=draft.meal_type or meal_type_for_hour(now.hour),
            timestamp=now,
            date=now.date(),
        )
        meals.insert(0, meal)
        self._save(meals)
        _logger.info(
            "Recorded meal: id=%s name=%s calories=%s", meal.id, meal.name, meal.calories
        )
        return meal

    def all(self) -> list[Meal]:
        """Return every meal, most recent first."""
        raw = self.store.get(MEALS_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            _logger.warning("Ignoring stored meals with unexpected type %s", type(raw))
            return []
        meals = []
        for row in raw:
            meal = meal_from_record(row)
            if meal is not None:
                meals.append(meal)
        return meals

    def by_date(self, day: date) -> list[Meal]:
        """Return meals recorded on a calendar date."""
        return [meal for meal in self.all() if meal.date == day]

    def today(self) -> list[Meal]:
        """Return meals recorded on today's local date."""
        return self.by_date(self.local_today())

    def today_calories(self) -> int:
        """Return today's calorie total."""
        return sum(meal.calories for meal in self.today())

    def recent(self, window_days: int = 7) -> list[Meal]:
        """Return meals dated on or after ``today - window_days``."""
        cutoff = self.local_today() - timedelta(days=window_days)
        return [meal for meal in self.all() if meal.date >= cutoff]

    def stats_by_period(self, period: str = "daily") -> dict[str, PeriodStats]:
        """Group meals by day, Sunday-started week, or month."""
        if period not in PERIODS:
            raise ValueError(f"Unknown period: {period}")
        stats: dict[str, PeriodStats] = {}
        for meal in self.all():
            key = _period_key(meal.date, period)
            bucket = stats.setdefault(key, PeriodStats())
            bucket.total_calories += meal.calories
            bucket.count += 1
            bucket.meals.append(meal)
        return stats

    def top_foods(self, limit: int = 5) -> list[FoodFrequency]:
        """Return the most frequently logged foods; ties keep first-seen order."""
        counts: dict[str, list[int]] = {}
        for meal in self.all():
            entry = counts.setdefault(meal.name or UNKNOWN_FOOD, [0, 0])
            entry[0] += 1
            entry[1] += meal.calories
        ranked = sorted(counts.items(), key=lambda item: item[1][0], reverse=True)
        return [
            FoodFrequency(name=name, count=count, total_calories=calories)
            for name, (count, calories) in ranked[: max(limit, 0)]
        ]

    def delete(self, meal_id: int) -> bool:
        """Remove a meal by id. Returns False when no meal matched."""
        meals = self.all()
        remaining = [meal for meal in meals if meal.id != meal_id]
        if len(remaining) == len(meals):
            return False
        self._save(remaining)
        _logger.info("Deleted meal: id=%s", meal_id)
        return True

    def count(self) -> int:
        """Return the number of recorded meals."""
        return len(self.all())

    def local_now(self) -> datetime:
        """Return the current time in the ledger's timezone."""
        return self.clock().astimezone(self.timezone)

    def local_today(self) -> date:
        """Return today's date in the ledger's timezone."""
        return self.local_now().date()

    def _save(self, meals: list[Meal]) -> None:
        self.store.set(MEALS_KEY, [meal_to_record(meal) for meal in meals])


def meal_to_record(meal: Meal) -> dict[str, object]:
    """Serialize a meal for storage."""
    return {
        "id": meal.id,
        "name": meal.name,
        "calories": meal.calories,
        "carbs": meal.carbs,
        "protein": meal.protein,
        "fat": meal.fat,
        "sodium": meal.sodium,
        "meal_type": meal.meal_type.value,
        "timestamp": meal.timestamp.isoformat(),
        "date": meal.date.isoformat(),
    }


def meal_from_record(row: object) -> Meal | None:
    """Parse a stored meal; malformed rows yield None.

    ``mealType`` is read when ``meal_type`` is absent.
    """
    if not isinstance(row, dict):
        _logger.warning("Skipping malformed meal row: %r", row)
        return None
    try:
        timestamp = datetime.fromisoformat(str(row["timestamp"]))
        raw_type = row.get("meal_type") or row.get("mealType")
        meal_type = (
            MealType(raw_type)
            if raw_type in set(MealType)
            else meal_type_for_hour(timestamp.hour)
        )
        return Meal(
            id=int(row["id"]),
            name=str(row.get("name") or UNKNOWN_FOOD),
            calories=int(row.get("calories") or 0),
            carbs=float(row.get("carbs") or 0.0),
            protein=float(row.get("protein") or 0.0),
            fat=float(row.get("fat") or 0.0),
            sodium=float(row.get("sodium") or 0.0),
            meal_type=meal_type,
            timestamp=timestamp,
            date=date.fromisoformat(str(row.get("date") or timestamp.date())),
        )
    except (KeyError, TypeError, ValueError):
        _logger.warning("Skipping malformed meal row: %r", row)
        return None


def _next_id(now: datetime, meals: list[Meal]) -> int:
    candidate = int(now.timestamp() * 1000)
    if meals:
        candidate = max(candidate, max(meal.id for meal in meals) + 1)
    return candidate


def _period_key(day: date, period: str) -> str:
    if period == "weekly":
        # date.weekday() is Monday=0; shift so Sunday starts the week.
        days_since_sunday = (day.weekday() + 1) % 7
        return (day - timedelta(days=days_since_sunday)).isoformat()
    if period == "monthly":
        return day.isoformat()[:7]
    return day.isoformat()
