"""Nutrition domain models."""

import logging
from dataclasses import dataclass, field

from pydantic import BaseModel, field_validator, model_validator

from foodai.domain.meals import MealType

UNKNOWN_FOOD = "Unknown food"
CALORIE_MISMATCH_RATIO = 0.3

_logger = logging.getLogger(__name__)


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


class NutritionEstimate(BaseModel):
    """Nutrition estimate handed over by the food analysis collaborator.

    Numeric fields never fail validation: anything unparseable becomes 0 and
    negative amounts are clamped to 0.
    """

    name: str = UNKNOWN_FOOD
    calories: int = 0
    carbs: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    sodium: float = 0.0
    meal_type: MealType | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: object) -> str:
        if value is None:
            return UNKNOWN_FOOD
        text = str(value).strip()
        return text or UNKNOWN_FOOD

    @field_validator("calories", mode="before")
    @classmethod
    def _clamp_calories(cls, value: object) -> int:
        return max(0, int(_to_float(value)))

    @field_validator("carbs", "protein", "fat", "sodium", mode="before")
    @classmethod
    def _clamp_amount(cls, value: object) -> float:
        return max(0.0, _to_float(value))

    @field_validator("meal_type", mode="before")
    @classmethod
    def _known_meal_type(cls, value: object) -> MealType | None:
        if value is None or isinstance(value, MealType):
            return value
        try:
            return MealType(str(value))
        except ValueError:
            return None

    @model_validator(mode="after")
    def _warn_on_calorie_mismatch(self) -> "NutritionEstimate":
        derived = self.carbs * 4 + self.protein * 4 + self.fat * 9
        if (
            self.calories > 0
            and abs(self.calories - derived) > self.calories * CALORIE_MISMATCH_RATIO
        ):
            _logger.warning(
                "Macro calories do not match stated calories: name=%s stated=%s "
                "derived=%.0f",
                self.name,
                self.calories,
                derived,
            )
        return self


@dataclass(frozen=True)
class NutrientTotals:
    """Summed nutrients over a set of meals."""

    calories: float = 0.0
    carbs: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    sodium: float = 0.0


@dataclass(frozen=True)
class MacroRatios:
    """Rounded percentage share of each macro in macro calories."""

    carbs: int
    protein: int
    fat: int


@dataclass(frozen=True)
class MealEvaluation:
    """Issues, recommendations and quality score for a single meal."""

    issues: list[str]
    recommendations: list[str]
    score: int


@dataclass(frozen=True)
class NutrientGap:
    """A nutrient that is short of, or over, the recommended daily amount."""

    nutrient: str
    current: int
    recommended: int
    amount: int
    severity: str
    suggestion: str


@dataclass(frozen=True)
class NutrientGapReport:
    """Daily intake compared with recommended amounts."""

    total: NutrientTotals
    recommended: NutrientTotals
    deficiencies: list[NutrientGap] = field(default_factory=list)
    excesses: list[NutrientGap] = field(default_factory=list)
    score: int = 0
