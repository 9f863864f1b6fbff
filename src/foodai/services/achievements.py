"""Achievement engine: streaks, counters and badges."""

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timedelta

from foodai.domain.achievements import (
    BADGE_CATALOG,
    AchievementCounters,
    Badge,
    BadgeDefinition,
    CounterKind,
)
from foodai.domain.meals import Meal
from foodai.services.classifiers import HIGH_PROTEIN, VEGETABLE, MealClassifier
from foodai.services.ledger import MealLedger
from foodai.services.scoring import weekly_score
from foodai.services.store import ACHIEVEMENTS_KEY, BADGES_KEY, JsonStore
from foodai.services.user_settings import UserSettingsService

GOAL_TOLERANCE = 0.10
PERFECT_WEEK_SCORE = 90
WEEK_WINDOW_DAYS = 7

# Counters advanced by one each time a recorded meal matches the classifier.
MEAL_COUNTERS: tuple[tuple[str, MealClassifier], ...] = (
    ("vegetable_days", VEGETABLE),
    ("protein_days", HIGH_PROTEIN),
)

_logger = logging.getLogger(__name__)


@dataclass
class AchievementEngine:
    """Advances achievement counters after each recorded meal and grants badges."""

    store: JsonStore
    ledger: MealLedger
    settings_service: UserSettingsService
    clock: Callable[[], datetime]
    catalog: tuple[BadgeDefinition, ...] = field(default=BADGE_CATALOG)

    def current_streak(self) -> int:
        """Count consecutive logged days ending today (or yesterday)."""
        dates = {meal.date for meal in self.ledger.all()}
        if not dates:
            return 0
        day = self.ledger.local_today()
        if day not in dates:
            day -= timedelta(days=1)
        streak = 0
        while day in dates:
            streak += 1
            day -= timedelta(days=1)
        return streak

    def counters(self) -> AchievementCounters:
        """Return stored counters, or zeros when missing or corrupt."""
        raw = self.store.get(ACHIEVEMENTS_KEY)
        if raw is None:
            return AchievementCounters()
        return counters_from_record(raw)

    def badges(self) -> list[Badge]:
        """Return earned badges in the order they were granted."""
        raw = self.store.get(BADGES_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            _logger.warning("Ignoring stored badges with unexpected type %s", type(raw))
            return []
        badges = []
        for row in raw:
            badge = badge_from_record(row)
            if badge is not None:
                badges.append(badge)
        return badges

    def on_meal_recorded(self, meal: Meal) -> list[Badge]:
        """Advance counters for a just-recorded meal and return new badges."""
        counters = self.counters()
        streak = self.current_streak()
        updates: dict[str, int] = {
            "current_streak": streak,
            "max_streak_ever": max(counters.max_streak_ever, streak),
        }

        target = self.settings_service.target_calories()
        today_calories = self.ledger.today_calories()
        if abs(today_calories - target) / target <= GOAL_TOLERANCE:
            updates["goal_hit_count"] = counters.goal_hit_count + 1

        for counter_name, classifier in MEAL_COUNTERS:
            if classifier.matches(meal):
                updates[counter_name] = getattr(counters, counter_name) + 1

        weekly = weekly_score(self.ledger.recent(WEEK_WINDOW_DAYS), target)
        if weekly.score >= PERFECT_WEEK_SCORE:
            updates["perfect_week_count"] = counters.perfect_week_count + 1

        updated = replace(counters, **updates)
        self.store.set(ACHIEVEMENTS_KEY, asdict(updated))
        return self.award_badges(updated)

    def award_badges(self, counters: AchievementCounters | None = None) -> list[Badge]:
        """Grant every catalog badge whose threshold is reached and not yet earned."""
        counters = counters or self.counters()
        earned = self.badges()
        earned_ids = {badge.id for badge in earned}
        now = self.clock()
        granted = [
            Badge.earned(definition, now)
            for definition in self.catalog
            if definition.id not in earned_ids
            and counters.value_for(definition.counter_kind) >= definition.threshold
        ]
        if granted:
            self.store.set(
                BADGES_KEY, [badge_to_record(badge) for badge in earned + granted]
            )
            _logger.info("Granted badges: %s", ", ".join(b.id for b in granted))
        return granted


def counters_from_record(raw: object) -> AchievementCounters:
    """Parse stored counters, treating bad values as zero."""
    if not isinstance(raw, dict):
        _logger.warning("Ignoring stored counters with unexpected type %s", type(raw))
        return AchievementCounters()
    values: dict[str, int] = {}
    for name in asdict(AchievementCounters()):
        try:
            values[name] = max(0, int(raw.get(name) or 0))
        except (TypeError, ValueError):
            _logger.warning("Invalid stored counter %s=%r", name, raw.get(name))
    return AchievementCounters(**values)


def badge_to_record(badge: Badge) -> dict[str, object]:
    """Serialize a badge for storage."""
    return {
        "id": badge.id,
        "name": badge.name,
        "icon": badge.icon,
        "description": badge.description,
        "counter_kind": badge.counter_kind.value,
        "threshold": badge.threshold,
        "earned_at": badge.earned_at.isoformat(),
    }


def badge_from_record(row: object) -> Badge | None:
    """Parse a stored badge; malformed rows yield None."""
    if not isinstance(row, dict):
        _logger.warning("Skipping malformed badge row: %r", row)
        return None
    try:
        return Badge(
            id=str(row["id"]),
            name=str(row.get("name", "")),
            icon=str(row.get("icon", "")),
            description=str(row.get("description", "")),
            counter_kind=CounterKind(row["counter_kind"]),
            threshold=int(row["threshold"]),
            earned_at=datetime.fromisoformat(str(row["earned_at"])),
        )
    except (KeyError, TypeError, ValueError):
        _logger.warning("Skipping malformed badge row: %r", row)
        return None
