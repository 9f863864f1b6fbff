"""Domain models for achievements and badges."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class CounterKind(StrEnum):
    """Achievement counter a badge threshold is measured against."""

    STREAK = "streak"
    GOAL_HITS = "goal_hits"
    PERFECT_WEEKS = "perfect_weeks"
    VEGETABLE_DAYS = "vegetable_days"
    PROTEIN_DAYS = "protein_days"


@dataclass(frozen=True)
class AchievementCounters:
    """Incrementally maintained achievement counters."""

    current_streak: int = 0
    max_streak_ever: int = 0
    goal_hit_count: int = 0
    perfect_week_count: int = 0
    vegetable_days: int = 0
    protein_days: int = 0

    def value_for(self, kind: CounterKind) -> int:
        """Return the counter a badge of the given kind is checked against."""
        return {
            CounterKind.STREAK: self.current_streak,
            CounterKind.GOAL_HITS: self.goal_hit_count,
            CounterKind.PERFECT_WEEKS: self.perfect_week_count,
            CounterKind.VEGETABLE_DAYS: self.vegetable_days,
            CounterKind.PROTEIN_DAYS: self.protein_days,
        }[kind]


@dataclass(frozen=True)
class BadgeDefinition:
    """Catalog entry for an unlockable badge."""

    id: str
    name: str
    icon: str
    description: str
    counter_kind: CounterKind
    threshold: int


@dataclass(frozen=True)
class Badge:
    """A badge the user has earned."""

    id: str
    name: str
    icon: str
    description: str
    counter_kind: CounterKind
    threshold: int
    earned_at: datetime

    @classmethod
    def earned(cls, definition: BadgeDefinition, earned_at: datetime) -> "Badge":
        """Create an earned badge from its catalog entry."""
        return cls(
            id=definition.id,
            name=definition.name,
            icon=definition.icon,
            description=definition.description,
            counter_kind=definition.counter_kind,
            threshold=definition.threshold,
            earned_at=earned_at,
        )


BADGE_CATALOG: tuple[BadgeDefinition, ...] = (
    BadgeDefinition(
        "streak3", "3-Day Streak", "🔥", "Log meals 3 days in a row",
        CounterKind.STREAK, 3,
    ),
    BadgeDefinition(
        "streak7", "Week Master", "🏅", "Log meals 7 days in a row",
        CounterKind.STREAK, 7,
    ),
    BadgeDefinition(
        "streak14", "Two Weeks Strong", "💪", "Log meals 14 days in a row",
        CounterKind.STREAK, 14,
    ),
    BadgeDefinition(
        "streak30", "Monthly Champion", "🏆", "Log meals 30 days in a row",
        CounterKind.STREAK, 30,
    ),
    BadgeDefinition(
        "streak100", "Hundred-Day Artisan", "👑", "Log meals 100 days in a row",
        CounterKind.STREAK, 100,
    ),
    BadgeDefinition(
        "goal5", "Goal Starter", "🎯", "Hit the calorie target 5 times",
        CounterKind.GOAL_HITS, 5,
    ),
    BadgeDefinition(
        "goal10", "Goal Novice", "🎖️", "Hit the calorie target 10 times",
        CounterKind.GOAL_HITS, 10,
    ),
    BadgeDefinition(
        "goal30", "Goal Expert", "🥇", "Hit the calorie target 30 times",
        CounterKind.GOAL_HITS, 30,
    ),
    BadgeDefinition(
        "goal100", "Goal Master", "💎", "Hit the calorie target 100 times",
        CounterKind.GOAL_HITS, 100,
    ),
    BadgeDefinition(
        "perfect1", "Perfect Week", "⭐", "Weekly nutrition score of 90 or more",
        CounterKind.PERFECT_WEEKS, 1,
    ),
    BadgeDefinition(
        "perfect3", "Nutrition Master", "🌟", "Weekly score of 90+ three times",
        CounterKind.PERFECT_WEEKS, 3,
    ),
    BadgeDefinition(
        "perfect10", "Nutrition Expert", "✨", "Weekly score of 90+ ten times",
        CounterKind.PERFECT_WEEKS, 10,
    ),
    BadgeDefinition(
        "veggie5", "Veggie Master", "🥗", "Log 5 vegetable meals",
        CounterKind.VEGETABLE_DAYS, 5,
    ),
    BadgeDefinition(
        "protein7", "Protein Champion", "💪", "Log 7 meals with 20 g+ protein",
        CounterKind.PROTEIN_DAYS, 7,
    ),
)
