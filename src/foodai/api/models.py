"""Pydantic models for API payloads."""

from pydantic import BaseModel, Field

from foodai.domain.settings import DEFAULT_TARGET_CALORIES, Goal


class SettingsPayload(BaseModel):
    """Full user settings payload."""

    gender: str = "male"
    age: int = Field(default=25, gt=0)
    height_cm: float = Field(default=170, gt=0)
    weight_kg: float = Field(default=70, gt=0)
    activity_level: str = "moderate"
    goal: Goal = Goal.MAINTAIN
    target_calories: int = Field(default=DEFAULT_TARGET_CALORIES, gt=0)


class SettingsPatch(BaseModel):
    """Partial user settings update."""

    gender: str | None = None
    age: int | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    activity_level: str | None = None
    goal: Goal | None = None
    target_calories: int | None = Field(default=None, gt=0)


class FastingModePayload(BaseModel):
    """Fasting mode in ``"H:E"`` form."""

    mode: str = "16:8"
