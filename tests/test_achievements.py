"""Tests for the achievement engine."""

from datetime import timedelta

from foodai.containers import AppContainer
from foodai.services.store import ACHIEVEMENTS_KEY, BADGES_KEY
from tests.conftest import FakeClock, estimate


def _record_daily(container: AppContainer, clock: FakeClock, days: int) -> list[list[str]]:
    """Record one meal per day, ending today; return the badge ids granted each day."""
    today = clock.now
    granted = []
    for offset in range(days - 1, -1, -1):
        clock.now = today - timedelta(days=offset)
        result = container.meal_recorder.record(estimate())
        granted.append([badge.id for badge in result.new_badges])
    return granted


def test_streak_counts_consecutive_days(container: AppContainer, clock: FakeClock) -> None:
    _record_daily(container, clock, 5)

    counters = container.achievement_engine.counters()
    assert container.achievement_engine.current_streak() == 5
    assert counters.current_streak == 5
    assert counters.max_streak_ever == 5


def test_streak_starts_from_yesterday_when_today_is_empty(
    container: AppContainer, clock: FakeClock
) -> None:
    _record_daily(container, clock, 2)

    clock.advance(days=1)
    assert container.achievement_engine.current_streak() == 2

    clock.advance(days=1)
    assert container.achievement_engine.current_streak() == 0


def test_gap_resets_streak_but_keeps_max(
    container: AppContainer, clock: FakeClock
) -> None:
    _record_daily(container, clock, 3)
    clock.advance(days=2)
    container.meal_recorder.record(estimate())

    counters = container.achievement_engine.counters()
    assert counters.current_streak == 1
    assert counters.max_streak_ever == 3


def test_streak7_is_granted_exactly_once(
    container: AppContainer, clock: FakeClock
) -> None:
    granted = _record_daily(container, clock, 7)

    assert granted[2] == ["streak3"]
    assert granted[6] == ["streak7"]
    assert all("streak7" not in ids for ids in granted[:6])

    again = container.meal_recorder.record(estimate())
    assert again.new_badges == []
    assert [badge.id for badge in container.achievement_engine.badges()] == [
        "streak3",
        "streak7",
    ]


def test_badges_are_never_revoked(container: AppContainer, clock: FakeClock) -> None:
    _record_daily(container, clock, 3)
    clock.advance(days=5)

    result = container.meal_recorder.record(estimate())

    assert result.new_badges == []
    assert container.achievement_engine.counters().current_streak == 1
    assert [badge.id for badge in container.achievement_engine.badges()] == ["streak3"]


def test_goal_hit_counts_when_today_is_within_ten_percent(
    container: AppContainer,
) -> None:
    container.meal_recorder.record(estimate(calories=1100))
    assert container.achievement_engine.counters().goal_hit_count == 0

    container.meal_recorder.record(estimate(calories=900))
    assert container.achievement_engine.counters().goal_hit_count == 1


def test_vegetable_and_protein_counters(container: AppContainer) -> None:
    container.meal_recorder.record(estimate("Green Salad", protein=5))
    container.meal_recorder.record(estimate("Chicken breast", protein=35))

    counters = container.achievement_engine.counters()
    assert counters.vegetable_days == 1
    assert counters.protein_days == 1


def test_veggie_badge_after_five_vegetable_meals(container: AppContainer) -> None:
    results = [
        container.meal_recorder.record(estimate("Spinach salad")) for _ in range(5)
    ]

    assert [badge.id for badge in results[4].new_badges] == ["veggie5"]
    assert all(result.new_badges == [] for result in results[:4])


def test_perfect_week_counter_and_badge(container: AppContainer) -> None:
    result = container.meal_recorder.record(
        estimate(
            "Balanced plate",
            calories=2000,
            carbs=275,
            protein=100,
            fat=500 / 9,
            sodium=1500,
        )
    )

    counters = container.achievement_engine.counters()
    assert counters.perfect_week_count == 1
    assert counters.goal_hit_count == 1
    assert "perfect1" in [badge.id for badge in result.new_badges]


def test_corrupt_counters_and_badges_fall_back_to_defaults(
    container: AppContainer,
) -> None:
    container.store.set(ACHIEVEMENTS_KEY, {"current_streak": "lots", "goal_hit_count": 4})
    container.store.set(BADGES_KEY, [{"id": "streak3"}, "junk"])

    counters = container.achievement_engine.counters()
    assert counters.current_streak == 0
    assert counters.goal_hit_count == 4
    assert container.achievement_engine.badges() == []


def test_award_badges_uses_stored_counters(container: AppContainer) -> None:
    container.store.set(ACHIEVEMENTS_KEY, {"goal_hit_count": 10})

    granted = container.achievement_engine.award_badges()

    assert [badge.id for badge in granted] == ["goal5", "goal10"]
    assert container.achievement_engine.award_badges() == []
