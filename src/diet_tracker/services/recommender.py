"""Heuristic food recommendations.

Scores are additive heuristics tuned by hand, not an optimal ranking. Each
rule that fires adds its weight and, usually, a reason shown to the user.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from diet_tracker.domain.foods import FoodRecord, MealType
from diet_tracker.domain.nutrition import Gap
from diet_tracker.domain.profile import Goal, Profile
from diet_tracker.domain.recommendations import Recommendation
from diet_tracker.services.aggregator import coalesce_amount

DEFAULT_LIMIT = 5
MAX_REASONS = 2
MIN_SCORE = 10

PROTEIN_RICH_G = 10
PROTEIN_SCALE_G = 25
PROTEIN_WEIGHT = 30

CARBS_RICH_G = 10
CARBS_SCALE_G = 30
CARBS_WEIGHT = 20

HEALTHY_FAT_MIN_G = 5
HEALTHY_FAT_MAX_G = 30
FAT_SCALE_G = 15
FAT_WEIGHT = 25

BALANCED_PROTEIN_G = 15
BALANCED_CARBS_G = 20
BALANCED_FAT_G = 10
BALANCE_TOLERANCE = 20
BALANCE_BONUS = 15

DENSITY_MIN_KCAL = 50
DENSITY_MAX_KCAL = 300
DENSITY_BONUS = 10

WEIGHT_LOSS_MAX_KCAL = 400
WEIGHT_LOSS_PENALTY = 15

MEAL_TYPE_LIMIT = 5
KEYWORD_BONUS = 20


@dataclass(frozen=True)
class MealPreference:
    """Preferred macro split and calorie range for a meal type."""

    protein: float
    carbs: float
    fat: float
    min_calories: float
    max_calories: float
    keywords: tuple[str, ...]


MEAL_PREFERENCES = {
    MealType.BREAKFAST: MealPreference(
        protein=0.3,
        carbs=0.5,
        fat=0.2,
        min_calories=200,
        max_calories=500,
        keywords=("egg", "oats", "yogurt", "banana", "milk"),
    ),
    MealType.LUNCH: MealPreference(
        protein=0.35,
        carbs=0.45,
        fat=0.2,
        min_calories=300,
        max_calories=700,
        keywords=("chicken", "rice", "salad", "vegetables"),
    ),
    MealType.DINNER: MealPreference(
        protein=0.4,
        carbs=0.3,
        fat=0.3,
        min_calories=400,
        max_calories=800,
        keywords=("fish", "meat", "vegetables", "quinoa"),
    ),
    MealType.SNACK: MealPreference(
        protein=0.25,
        carbs=0.4,
        fat=0.35,
        min_calories=100,
        max_calories=300,
        keywords=("nuts", "fruit", "yogurt"),
    ),
}


def recommend(
    gaps: Mapping[str, Gap],
    food_catalog: Sequence[FoodRecord],
    profile: Profile | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[Recommendation]:
    """Return catalog foods that best fill the remaining macro gaps.

    Foods scoring ``MIN_SCORE`` or less are dropped. Ties keep catalog order.
    """
    scored = [_score_for_gaps(food, gaps, profile) for food in food_catalog]
    ranked = sorted(
        (item for item in scored if item.score > MIN_SCORE),
        key=lambda item: item.score,
        reverse=True,
    )
    return ranked[: max(limit, 0)]


def recommend_for_meal_type(
    meal_type: MealType | str,
    gaps: Mapping[str, Gap] | None,
    food_catalog: Sequence[FoodRecord],
) -> list[Recommendation]:
    """Return the foods that best match a meal type's typical profile.

    Candidates are foods inside the meal's calorie range or whose name
    contains one of its keywords. Name matching is coarse; tagged foods would
    be more reliable. ``gaps`` is accepted for parity with ``recommend`` and
    does not influence the score.
    """
    parsed = MealType.parse(meal_type)
    preference = MEAL_PREFERENCES.get(parsed, MEAL_PREFERENCES[MealType.SNACK])
    label = parsed.value.lower() if parsed in MEAL_PREFERENCES else "snack"

    results: list[Recommendation] = []
    for food in food_catalog:
        calories = coalesce_amount(food.calories)
        in_range = preference.min_calories <= calories <= preference.max_calories
        name = food.name.lower() if isinstance(food.name, str) else ""
        matched = [keyword for keyword in preference.keywords if keyword in name]
        if not in_range and not matched:
            continue

        score = 0.0
        protein = coalesce_amount(food.protein)
        carbs = coalesce_amount(food.carbs)
        fat = coalesce_amount(food.fat)
        total = protein + carbs + fat
        if total > 0:
            deviation = (
                abs(protein / total - preference.protein)
                + abs(carbs / total - preference.carbs)
                + abs(fat / total - preference.fat)
            )
            score += 100 - deviation * 100
        score += KEYWORD_BONUS * len(matched)

        reasons = []
        if matched:
            reasons.append(f"Popular {label} choice ({matched[0]})")
        if in_range:
            reasons.append(f"Fits {label} calorie range")
        results.append(Recommendation(food=food, score=score, reasons=reasons))

    results.sort(key=lambda item: item.score, reverse=True)
    return results[:MEAL_TYPE_LIMIT]


def _score_for_gaps(
    food: FoodRecord, gaps: Mapping[str, Gap], profile: Profile | None
) -> Recommendation:
    calories = coalesce_amount(food.calories)
    protein = coalesce_amount(food.protein)
    carbs = coalesce_amount(food.carbs)
    fat = coalesce_amount(food.fat)
    score = 0.0
    reasons: list[str] = []

    if _has_gap(gaps, "protein") and protein > PROTEIN_RICH_G:
        score += protein / PROTEIN_SCALE_G * PROTEIN_WEIGHT
        reasons.append(f"High protein ({protein:g}g per 100g)")

    if _has_gap(gaps, "carbs") and carbs > CARBS_RICH_G:
        score += carbs / CARBS_SCALE_G * CARBS_WEIGHT
        reasons.append(f"Good carbs source ({carbs:g}g per 100g)")

    if _has_gap(gaps, "fat") and HEALTHY_FAT_MIN_G < fat < HEALTHY_FAT_MAX_G:
        score += fat / FAT_SCALE_G * FAT_WEIGHT
        reasons.append(f"Healthy fats ({fat:g}g per 100g)")

    balance = (
        abs(protein - BALANCED_PROTEIN_G)
        + abs(carbs - BALANCED_CARBS_G)
        + abs(fat - BALANCED_FAT_G)
    )
    if balance < BALANCE_TOLERANCE:
        score += BALANCE_BONUS
        reasons.append("Well-balanced nutrition")

    if DENSITY_MIN_KCAL < calories < DENSITY_MAX_KCAL:
        score += DENSITY_BONUS
        reasons.append("Appropriate calorie density")

    if (
        profile is not None
        and profile.goal == Goal.LOSE
        and calories > WEIGHT_LOSS_MAX_KCAL
    ):
        score -= WEIGHT_LOSS_PENALTY

    return Recommendation(food=food, score=score, reasons=reasons[:MAX_REASONS])


def _has_gap(gaps: Mapping[str, Gap], macro: str) -> bool:
    gap = gaps.get(macro)
    return gap is not None and coalesce_amount(gap.gap) > 0
