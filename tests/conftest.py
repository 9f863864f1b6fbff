"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

import pytest

from foodai.config import Settings
from foodai.containers import AppContainer, build_container
from foodai.domain.meals import Meal, MealType
from foodai.domain.nutrition import NutritionEstimate
from foodai.services.store import InMemoryBackend, JsonStore


@dataclass
class FakeClock:
    """Settable clock; 2024-05-15 is a Wednesday."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 5, 15, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class RecordingBackend(InMemoryBackend):
    """In-memory backend that counts write calls."""

    writes: list[dict[str, str]] = field(default_factory=list)

    def set_many(self, items: dict[str, str]) -> None:
        self.writes.append(dict(items))
        super().set_many(items)


def estimate(name: str = "Bibimbap", **values: object) -> NutritionEstimate:
    """Build a nutrition estimate with small, neutral defaults."""
    payload: dict[str, object] = {
        "name": name,
        "calories": 500,
        "carbs": 60,
        "protein": 5,
        "fat": 20,
        "sodium": 300,
    }
    payload.update(values)
    return NutritionEstimate(**payload)


def make_meal(day: date, meal_id: int = 1, **values: object) -> Meal:
    """Build a meal dated on the given day."""
    fields: dict[str, object] = {
        "name": "Meal",
        "calories": 500,
        "carbs": 60.0,
        "protein": 25.0,
        "fat": 15.0,
        "sodium": 300.0,
    }
    fields.update(values)
    return Meal(
        id=meal_id,
        meal_type=MealType.LUNCH,
        timestamp=datetime(day.year, day.month, day.day, 12, tzinfo=UTC),
        date=day,
        **fields,  # type: ignore[arg-type]
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def store(backend: RecordingBackend) -> JsonStore:
    return JsonStore(backend)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", timezone="UTC")


@pytest.fixture
def container(
    settings: Settings, backend: RecordingBackend, clock: FakeClock
) -> AppContainer:
    return build_container(settings, backend=backend, clock=clock)
