"""Domain model for the user's profile settings."""

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_TARGET_CALORIES = 2000


class Goal(StrEnum):
    """Body-weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class UserSettings:
    """Profile and calorie target."""

    gender: str = "male"
    age: int = 25
    height_cm: float = 170
    weight_kg: float = 70
    activity_level: str = "moderate"
    goal: Goal = Goal.MAINTAIN
    target_calories: int = DEFAULT_TARGET_CALORIES
