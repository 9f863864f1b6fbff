"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import date

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import Response

from foodai.api.fasting import router as fasting_router
from foodai.api.models import SettingsPatch, SettingsPayload
from foodai.app_logging import configure_logging
from foodai.containers import AppContainer
from foodai.domain.achievements import Badge
from foodai.domain.meals import Meal
from foodai.domain.nutrition import NutritionEstimate
from foodai.domain.settings import UserSettings
from foodai.services.classifiers import food_emoji
from foodai.services.scoring import (
    analyze_nutrient_gaps,
    daily_value_percentages,
    evaluate_meal,
    macro_ratios,
    weekly_score,
)
from foodai.services.suggestions import suggestions_for_hour
from foodai.services.user_settings import settings_to_record


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="FoodAI Tracker")
    app.state.container = container

    app.include_router(fasting_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def record_meal(
        estimate: NutritionEstimate, request: Request
    ) -> dict[str, object]:
        """Record a meal from a nutrition estimate."""
        state_container: AppContainer = request.app.state.container
        result = state_container.meal_recorder.record(estimate)
        if result.new_badges:
            logger.info(
                "Meal %s unlocked %s badge(s)", result.meal.id, len(result.new_badges)
            )
        return {
            "meal": _meal_payload(result.meal),
            "new_badges": [_badge_payload(badge) for badge in result.new_badges],
        }

    @app.get("/meals")
    async def list_meals(request: Request, day: date | None = None) -> dict[str, object]:
        """Return all meals, or the meals of one date."""
        ledger = request.app.state.container.ledger
        meals = ledger.by_date(day) if day else ledger.all()
        return {"meals": [_meal_payload(meal) for meal in meals]}

    @app.get("/meals/today")
    async def today_meals(request: Request) -> dict[str, object]:
        """Return today's meals with calorie progress."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.ledger.today()
        total = sum(meal.calories for meal in meals)
        target = state_container.user_settings_service.target_calories()
        return {
            "meals": [_meal_payload(meal) for meal in meals],
            "total_calories": total,
            "target_calories": target,
            "remaining_calories": target - total,
        }

    @app.delete("/meals/{meal_id}")
    async def delete_meal(meal_id: int, request: Request) -> dict[str, object]:
        """Delete a meal by id."""
        deleted = request.app.state.container.ledger.delete(meal_id)
        return {"deleted": deleted}

    @app.get("/stats/top-foods")
    async def top_foods(request: Request, limit: int = 5) -> dict[str, object]:
        """Return the most frequently logged foods."""
        foods = request.app.state.container.ledger.top_foods(limit)
        return {
            "foods": [
                {**asdict(food), "emoji": food_emoji(food.name)} for food in foods
            ]
        }

    @app.get("/stats/{period}")
    async def period_stats(period: str, request: Request) -> dict[str, object]:
        """Return calories and meal counts grouped by period."""
        try:
            stats = request.app.state.container.ledger.stats_by_period(period)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {
            "period": period,
            "stats": {
                key: {
                    "total_calories": bucket.total_calories,
                    "count": bucket.count,
                    "meal_ids": [meal.id for meal in bucket.meals],
                }
                for key, bucket in sorted(stats.items())
            },
        }

    @app.get("/scores/weekly")
    async def weekly_nutrition_score(request: Request) -> dict[str, object]:
        """Return the rolling weekly nutrition-balance score."""
        state_container: AppContainer = request.app.state.container
        result = weekly_score(
            state_container.ledger.recent(7),
            state_container.user_settings_service.target_calories(),
        )
        return asdict(result)

    @app.post("/scores/meal")
    async def meal_score(estimate: NutritionEstimate) -> dict[str, object]:
        """Evaluate a single meal without recording it."""
        evaluation = evaluate_meal(estimate)
        return {
            "score": evaluation.score,
            "issues": evaluation.issues,
            "recommendations": evaluation.recommendations,
            "macro_ratios": asdict(macro_ratios(estimate)),
            "daily_values": daily_value_percentages(estimate),
        }

    @app.get("/nutrients/today")
    async def today_nutrients(request: Request) -> dict[str, object]:
        """Compare today's intake with recommended amounts."""
        state_container: AppContainer = request.app.state.container
        report = analyze_nutrient_gaps(
            state_container.ledger.today(),
            state_container.user_settings_service.target_calories(),
        )
        return asdict(report)

    @app.get("/suggestions")
    async def food_suggestions(
        request: Request, hour: int | None = Query(default=None, ge=0, le=23)
    ) -> dict[str, object]:
        """Suggest foods for the meal slot of the given or current local hour."""
        if hour is None:
            hour = request.app.state.container.ledger.local_now().hour
        return asdict(suggestions_for_hour(hour))

    @app.get("/achievements")
    async def achievements(request: Request) -> dict[str, object]:
        """Return counters, earned badges and the badge catalog."""
        engine = request.app.state.container.achievement_engine
        return {
            "current_streak": engine.current_streak(),
            "counters": asdict(engine.counters()),
            "badges": [_badge_payload(badge) for badge in engine.badges()],
            "catalog": [asdict(definition) for definition in engine.catalog],
        }

    @app.get("/settings")
    async def get_settings(request: Request) -> dict[str, object]:
        """Return the user settings."""
        service = request.app.state.container.user_settings_service
        return settings_to_record(service.get())

    @app.put("/settings")
    async def replace_settings(
        payload: SettingsPayload, request: Request
    ) -> dict[str, object]:
        """Replace the user settings."""
        service = request.app.state.container.user_settings_service
        settings = UserSettings(**payload.model_dump())
        service.save(settings)
        return settings_to_record(settings)

    @app.patch("/settings")
    async def update_settings(
        payload: SettingsPatch, request: Request
    ) -> dict[str, object]:
        """Merge changes into the user settings."""
        service = request.app.state.container.user_settings_service
        updated = service.update(**payload.model_dump(exclude_none=True))
        return settings_to_record(updated)

    @app.post("/settings/target")
    async def recalculate_target(request: Request) -> dict[str, object]:
        """Recompute the calorie target from the profile."""
        service = request.app.state.container.user_settings_service
        return settings_to_record(service.apply_calculated_target())

    @app.get("/export")
    async def export_data(request: Request) -> Response:
        """Download meals and settings as JSON."""
        document = request.app.state.container.transfer_service.export_data()
        return Response(content=document, media_type="application/json")

    @app.post("/import")
    async def import_data(request: Request) -> dict[str, object]:
        """Replace meals and settings from an exported document."""
        document = (await request.body()).decode("utf-8", errors="replace")
        if not request.app.state.container.transfer_service.import_data(document):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Import failed"
            )
        return {"imported": True}

    @app.post("/reset")
    async def reset(request: Request) -> dict[str, str]:
        """Clear all tracked data and restore default settings."""
        request.app.state.container.transfer_service.clear_all()
        return {"status": "ok"}

    return app


def _meal_payload(meal: Meal) -> dict[str, object]:
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
        "emoji": food_emoji(meal.name),
    }


def _badge_payload(badge: Badge) -> dict[str, object]:
    return {
        "id": badge.id,
        "name": badge.name,
        "icon": badge.icon,
        "description": badge.description,
        "threshold": badge.threshold,
        "earned_at": badge.earned_at.isoformat(),
    }
