"""Nutrition scoring: per-meal quality and the weekly balance score."""

from collections.abc import Iterable
from typing import Protocol

from foodai.domain.nutrition import (
    MacroRatios,
    MealEvaluation,
    NutrientGap,
    NutrientGapReport,
    NutrientTotals,
)
from foodai.domain.settings import DEFAULT_TARGET_CALORIES
from foodai.domain.stats import WeeklyScore, WeeklyTotals

CARBS_KCAL_PER_G = 4
PROTEIN_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

HIGH_CALORIE_MEAL = 800
HIGH_SODIUM_MEAL_MG = 1000
DAILY_SODIUM_LIMIT_MG = 2300

# Single meal.
MIN_MEAL_PROTEIN_SHARE = 0.15
MAX_MEAL_FAT_SHARE = 0.35
SODIUM_WARNING_MG = 800
LOW_PROTEIN_MEAL_G = 10
SUBSTANTIAL_MEAL_CALORIES = 300

# Weekly balance, as percentages of macro calories.
MIN_CARBS_PCT = 40
MAX_CARBS_PCT = 70
MIN_PROTEIN_PCT = 15
MAX_PROTEIN_PCT = 30
MIN_FAT_PCT = 15
MAX_FAT_PCT = 35
NEAR_CALORIE_DEVIATION = 0.15
FAR_CALORIE_DEVIATION = 0.3
ELEVATED_SODIUM_MG = 1800
MIN_DAILY_PROTEIN_G = 50
TARGET_DAILY_PROTEIN_G = 60

# Daily intake relative to the recommended amount.
SEVERE_PROTEIN_RATIO = 0.5
LOW_PROTEIN_RATIO = 0.8
SEVERE_CARBS_RATIO = 0.5
HIGH_SODIUM_RATIO = 1.2
SEVERE_SODIUM_RATIO = 1.5
CALORIE_EXCESS_RATIO = 1.2
MAX_DAILY_FAT_SHARE = 0.4

# Reference daily values at 2000 kcal.
DAILY_VALUES = NutrientTotals(
    calories=2000, carbs=300, protein=50, fat=65, sodium=DAILY_SODIUM_LIMIT_MG
)


class Nutrients(Protocol):
    """Anything carrying the tracked nutrient amounts."""

    calories: float
    carbs: float
    protein: float
    fat: float
    sodium: float


def _macro_calories(item: Nutrients) -> tuple[float, float, float]:
    return (
        item.carbs * CARBS_KCAL_PER_G,
        item.protein * PROTEIN_KCAL_PER_G,
        item.fat * FAT_KCAL_PER_G,
    )


def meal_quality_score(meal: Nutrients) -> int:
    """Score a single meal from 0 to 100."""
    carbs_kcal, protein_kcal, fat_kcal = _macro_calories(meal)
    macro_kcal = carbs_kcal + protein_kcal + fat_kcal
    if macro_kcal == 0:
        return 0

    score = 100
    if protein_kcal / macro_kcal < MIN_MEAL_PROTEIN_SHARE:
        score -= 15
    if fat_kcal / macro_kcal > MAX_MEAL_FAT_SHARE:
        score -= 20
    if meal.calories > HIGH_CALORIE_MEAL:
        score -= 15
    if meal.sodium > HIGH_SODIUM_MEAL_MG:
        score -= 20
    return max(0, min(100, score))


def macro_ratios(item: Nutrients) -> MacroRatios:
    """Return the rounded percentage of macro calories from each macro."""
    carbs_kcal, protein_kcal, fat_kcal = _macro_calories(item)
    macro_kcal = carbs_kcal + protein_kcal + fat_kcal
    if macro_kcal == 0:
        return MacroRatios(carbs=0, protein=0, fat=0)
    return MacroRatios(
        carbs=round(carbs_kcal / macro_kcal * 100),
        protein=round(protein_kcal / macro_kcal * 100),
        fat=round(fat_kcal / macro_kcal * 100),
    )


def evaluate_meal(meal: Nutrients) -> MealEvaluation:
    """List the problems of a meal alongside its quality score."""
    issues: list[str] = []
    recommendations: list[str] = []
    if meal.calories > HIGH_CALORIE_MEAL:
        issues.append("High-calorie meal")
        recommendations.append("Pair it with lower-calorie foods")
    if meal.sodium > SODIUM_WARNING_MG:
        issues.append("High sodium content")
        recommendations.append("Drink plenty of water")
    if meal.protein < LOW_PROTEIN_MEAL_G and meal.calories > SUBSTANTIAL_MEAL_CALORIES:
        issues.append("Low in protein")
        recommendations.append("Add a protein source")
    fat_share = meal.fat * FAT_KCAL_PER_G / meal.calories if meal.calories > 0 else 0
    if fat_share > MAX_MEAL_FAT_SHARE:
        issues.append("High fat ratio")
        recommendations.append("Aim for a more balanced plate")
    return MealEvaluation(
        issues=issues,
        recommendations=recommendations,
        score=meal_quality_score(meal),
    )


def daily_value_percentages(item: Nutrients) -> dict[str, int]:
    """Return each nutrient as a rounded percentage of the daily value."""
    return {
        "calories": round(item.calories / DAILY_VALUES.calories * 100),
        "carbs": round(item.carbs / DAILY_VALUES.carbs * 100),
        "protein": round(item.protein / DAILY_VALUES.protein * 100),
        "fat": round(item.fat / DAILY_VALUES.fat * 100),
        "sodium": round(item.sodium / DAILY_VALUES.sodium * 100),
    }


def sum_nutrients(meals: Iterable[Nutrients]) -> NutrientTotals:
    """Sum nutrient amounts across meals."""
    calories = carbs = protein = fat = sodium = 0.0
    for meal in meals:
        calories += meal.calories
        carbs += meal.carbs
        protein += meal.protein
        fat += meal.fat
        sodium += meal.sodium
    return NutrientTotals(
        calories=calories, carbs=carbs, protein=protein, fat=fat, sodium=sodium
    )


def weekly_totals(meals: Iterable[Nutrients]) -> WeeklyTotals | None:
    """Sum a week of meals and count the days that had at least one meal."""
    meals = list(meals)
    if not meals:
        return None
    days = {meal.date for meal in meals}  # type: ignore[attr-defined]
    totals = sum_nutrients(meals)
    return WeeklyTotals(
        calories=totals.calories,
        carbs=totals.carbs,
        protein=totals.protein,
        fat=totals.fat,
        sodium=totals.sodium,
        days=len(days),
    )


def weekly_score(
    meals: Iterable[Nutrients], target_calories: int | None = None
) -> WeeklyScore:
    """Score the nutrition balance of a rolling week from 0 to 100.

    Components: macro balance (40), calorie consistency (30), sodium control
    (20) and protein adequacy (10). Every penalty adds a note.
    """
    totals = weekly_totals(meals)
    if totals is None or totals.days == 0:
        return WeeklyScore(
            score=0,
            macro_balance=0,
            calorie_consistency=0,
            sodium_control=0,
            protein_adequacy=0,
            notes=[],
        )

    target = target_calories or DEFAULT_TARGET_CALORIES
    notes: list[str] = []
    score = 100

    macro_balance = _macro_balance(totals, notes)
    if macro_balance is not None:
        score = score - 40 + macro_balance

    calorie_consistency = _calorie_consistency(totals, target, notes)
    score = score - 30 + calorie_consistency

    sodium_control = _sodium_control(totals, notes)
    score = score - 20 + sodium_control

    protein_adequacy = _protein_adequacy(totals, notes)
    score = score - 10 + protein_adequacy

    return WeeklyScore(
        score=max(0, min(100, round(score))),
        macro_balance=macro_balance,
        calorie_consistency=calorie_consistency,
        sodium_control=sodium_control,
        protein_adequacy=protein_adequacy,
        notes=notes,
        totals=totals,
    )


def _macro_balance(totals: WeeklyTotals, notes: list[str]) -> int | None:
    carbs_kcal, protein_kcal, fat_kcal = _macro_calories(totals)
    macro_kcal = carbs_kcal + protein_kcal + fat_kcal
    if macro_kcal <= 0:
        return None
    carbs_pct = carbs_kcal / macro_kcal * 100
    protein_pct = protein_kcal / macro_kcal * 100
    fat_pct = fat_kcal / macro_kcal * 100

    points = 40
    if carbs_pct > MAX_CARBS_PCT:
        points -= 15
        notes.append(f"Carbs too high ({round(carbs_pct)}%)")
    elif carbs_pct < MIN_CARBS_PCT:
        points -= 15
        notes.append(f"Carbs too low ({round(carbs_pct)}%)")

    if protein_pct < MIN_PROTEIN_PCT:
        points -= 15
        notes.append(f"Protein share too low ({round(protein_pct)}%)")
    elif protein_pct > MAX_PROTEIN_PCT:
        points -= 5

    if fat_pct > MAX_FAT_PCT:
        points -= 10
        notes.append(f"Fat too high ({round(fat_pct)}%)")
    elif fat_pct < MIN_FAT_PCT:
        points -= 5
    return max(0, points)


def _calorie_consistency(totals: WeeklyTotals, target: int, notes: list[str]) -> int:
    avg_calories = totals.calories / totals.days
    deviation = abs(avg_calories - target) / target
    points = 30
    if deviation > FAR_CALORIE_DEVIATION:
        points -= 20
        notes.append("Far from the calorie target")
    elif deviation > NEAR_CALORIE_DEVIATION:
        points -= 10
    return points


def _sodium_control(totals: WeeklyTotals, notes: list[str]) -> int:
    avg_sodium = totals.sodium / totals.days
    points = 20
    if avg_sodium > DAILY_SODIUM_LIMIT_MG:
        points -= 15
        notes.append(f"Too much sodium (avg {round(avg_sodium)} mg/day)")
    elif avg_sodium > ELEVATED_SODIUM_MG:
        points -= 8
    return points


def _protein_adequacy(totals: WeeklyTotals, notes: list[str]) -> int:
    avg_protein = totals.protein / totals.days
    points = 10
    if avg_protein < MIN_DAILY_PROTEIN_G:
        points -= 8
        notes.append(f"Not enough protein (avg {round(avg_protein)} g/day)")
    elif avg_protein < TARGET_DAILY_PROTEIN_G:
        points -= 4
    return points


def analyze_nutrient_gaps(
    meals: Iterable[Nutrients], target_calories: int | None = None
) -> NutrientGapReport:
    """Compare a day's intake with amounts scaled to the calorie target."""
    target = target_calories or DEFAULT_TARGET_CALORIES
    total = sum_nutrients(meals)
    ratio = target / DAILY_VALUES.calories
    recommended = NutrientTotals(
        calories=target,
        carbs=DAILY_VALUES.carbs * ratio,
        protein=DAILY_VALUES.protein * ratio,
        fat=DAILY_VALUES.fat * ratio,
        sodium=DAILY_VALUES.sodium,
    )

    deficiencies: list[NutrientGap] = []
    excesses: list[NutrientGap] = []
    if total.protein < recommended.protein * SEVERE_PROTEIN_RATIO:
        deficiencies.append(
            _gap("protein", total.protein, recommended.protein, "high",
                 "Chicken breast, eggs, tofu, fish")
        )
    elif total.protein < recommended.protein * LOW_PROTEIN_RATIO:
        deficiencies.append(
            _gap("protein", total.protein, recommended.protein, "medium",
                 "Eggs, milk, yogurt")
        )
    if total.carbs < recommended.carbs * SEVERE_CARBS_RATIO:
        deficiencies.append(
            _gap("carbs", total.carbs, recommended.carbs, "high",
                 "Brown rice, sweet potato, whole-wheat bread, oatmeal")
        )
    if total.sodium > recommended.sodium * HIGH_SODIUM_RATIO:
        severity = "high" if total.sodium > recommended.sodium * SEVERE_SODIUM_RATIO else "medium"
        excesses.append(
            _gap("sodium", total.sodium, recommended.sodium, severity,
                 "Drink water and keep the next meal low in salt")
        )
    if total.calories > recommended.calories * CALORIE_EXCESS_RATIO:
        excesses.append(
            _gap("calories", total.calories, recommended.calories, "medium",
                 "Light exercise or a lighter day tomorrow")
        )

    return NutrientGapReport(
        total=total,
        recommended=recommended,
        deficiencies=deficiencies,
        excesses=excesses,
        score=_nutrient_balance_score(total, recommended),
    )


def _gap(
    nutrient: str, current: float, recommended: float, severity: str, suggestion: str
) -> NutrientGap:
    return NutrientGap(
        nutrient=nutrient,
        current=round(current),
        recommended=round(recommended),
        amount=round(abs(recommended - current)),
        severity=severity,
        suggestion=suggestion,
    )


def _nutrient_balance_score(total: NutrientTotals, recommended: NutrientTotals) -> int:
    score = 100
    protein_ratio = total.protein / recommended.protein
    if protein_ratio < SEVERE_PROTEIN_RATIO:
        score -= 30
    elif protein_ratio < LOW_PROTEIN_RATIO:
        score -= 15

    sodium_ratio = total.sodium / recommended.sodium
    if sodium_ratio > SEVERE_SODIUM_RATIO:
        score -= 25
    elif sodium_ratio > HIGH_SODIUM_RATIO:
        score -= 10

    deviation = abs(total.calories - recommended.calories) / recommended.calories
    if deviation > FAR_CALORIE_DEVIATION:
        score -= 20
    elif deviation > NEAR_CALORIE_DEVIATION:
        score -= 10

    fat_ratio = total.fat * FAT_KCAL_PER_G / (total.calories or 1)
    if fat_ratio > MAX_DAILY_FAT_SHARE:
        score -= 15
    return max(0, min(100, score))
