"""Health formulas: BMR, TDEE, BMI and calorie targets."""

import logging

from diet_tracker.domain.errors import InvalidProfileError
from diet_tracker.domain.health import (
    BMIClassification,
    HealthRecommendation,
    WeightRange,
)
from diet_tracker.domain.profile import ActivityLevel, Gender, Goal, Profile
from diet_tracker.services.aggregator import coalesce_amount

DEFAULT_DAILY_CALORIES = 2000
MIN_SAFE_CALORIES = 1200
GOAL_CALORIE_DELTA = 500

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS[ActivityLevel.SEDENTARY]

WATER_ML_PER_KG = 35
WATER_GLASS_ML = 250
DEFAULT_WATER_GLASSES = 8
MIN_WATER_GLASSES = 6
MAX_WATER_GLASSES = 16
WATER_ACTIVITY_FACTORS = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.1,
    ActivityLevel.MODERATE: 1.2,
    ActivityLevel.ACTIVE: 1.3,
    ActivityLevel.VERY_ACTIVE: 1.4,
}
DEFAULT_WATER_ACTIVITY_FACTOR = 1.2

UNDERWEIGHT_BMI = 18.5
OVERWEIGHT_BMI = 25.0
OBESE_BMI = 30.0
HEALTHY_BMI_MAX = 24.9

CALORIE_TARGET_TOLERANCE = 200
WATER_TARGET_TOLERANCE_GLASSES = 2

_logger = logging.getLogger(__name__)


def calculate_bmr(profile: Profile) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation.

    Raises:
        InvalidProfileError: weight, height or age is missing or not positive.
    """
    weight, height, age = _measurements(profile)
    base = 10 * weight + 6.25 * height - 5 * age
    if profile.gender == Gender.MALE:
        return base + 5
    return base - 161


def calculate_tdee(profile: Profile) -> float:
    """Return total daily energy expenditure.

    An unknown activity level uses the sedentary multiplier.
    """
    bmr = calculate_bmr(profile)
    return bmr * activity_multiplier(profile.activity_level)


def activity_multiplier(activity_level: object) -> float:
    """Return the TDEE multiplier for an activity level."""
    try:
        level = ActivityLevel(activity_level)
    except ValueError:
        return DEFAULT_ACTIVITY_MULTIPLIER
    return ACTIVITY_MULTIPLIERS[level]


def suggest_daily_calories(profile: Profile | None) -> int:
    """Return a goal-adjusted daily calorie target.

    Falls back to ``DEFAULT_DAILY_CALORIES`` when the profile cannot be used.
    """
    if profile is None:
        return DEFAULT_DAILY_CALORIES
    try:
        tdee = calculate_tdee(profile)
    except InvalidProfileError as exc:
        _logger.warning("Using default calorie target: %s", exc)
        return DEFAULT_DAILY_CALORIES

    if profile.goal == Goal.LOSE:
        return round(max(MIN_SAFE_CALORIES, tdee - GOAL_CALORIE_DELTA))
    if profile.goal == Goal.GAIN:
        return round(tdee + GOAL_CALORIE_DELTA)
    return round(tdee)


def calculate_bmi(weight: float | None, height: float | None) -> float | None:
    """Return BMI rounded to one decimal, or None for non-positive inputs."""
    if not _is_positive(weight) or not _is_positive(height):
        return None
    height_m = height / 100
    return round(weight / (height_m * height_m), 1)


def classify_bmi(bmi: float | None) -> BMIClassification:
    """Return the BMI band for a value."""
    if bmi is None:
        return BMIClassification(label="Unknown", severity="unknown")
    if bmi < UNDERWEIGHT_BMI:
        return BMIClassification(
            label="Underweight",
            severity="warning",
            range="< 18.5",
            description="Below normal weight",
        )
    if bmi < OVERWEIGHT_BMI:
        return BMIClassification(
            label="Normal",
            severity="ok",
            range="18.5 - 24.9",
            description="Normal weight range",
        )
    if bmi < OBESE_BMI:
        return BMIClassification(
            label="Overweight",
            severity="warning",
            range="25.0 - 29.9",
            description="Above normal weight",
        )
    return BMIClassification(
        label="Obese",
        severity="danger",
        range=">= 30.0",
        description="Significantly above normal weight",
    )


def ideal_weight_range(height: float | None) -> WeightRange | None:
    """Return the weight range that keeps BMI within the normal band."""
    if not _is_positive(height):
        return None
    height_m = height / 100
    return WeightRange(
        min_kg=round(UNDERWEIGHT_BMI * height_m * height_m),
        max_kg=round(HEALTHY_BMI_MAX * height_m * height_m),
    )


def calculate_water_intake(weight: float | None, activity_level: object) -> int:
    """Return recommended daily water in 250 ml glasses."""
    if not _is_positive(weight):
        return DEFAULT_WATER_GLASSES
    try:
        factor = WATER_ACTIVITY_FACTORS[ActivityLevel(activity_level)]
    except ValueError:
        factor = DEFAULT_WATER_ACTIVITY_FACTOR
    glasses = round(weight * WATER_ML_PER_KG * factor / WATER_GLASS_ML)
    return max(MIN_WATER_GLASSES, min(MAX_WATER_GLASSES, glasses))


def health_recommendations(
    profile: Profile | None,
    calorie_target: float | None = None,
    water_target_ml: float | None = None,
) -> list[HealthRecommendation]:
    """Return profile-based advice; empty when the profile is incomplete."""
    if profile is None:
        return []
    try:
        _measurements(profile)
    except InvalidProfileError:
        return []

    recommendations: list[HealthRecommendation] = []
    bmi = calculate_bmi(profile.weight, profile.height)
    if bmi is not None and bmi < UNDERWEIGHT_BMI:
        recommendations.append(
            HealthRecommendation(
                category="weight",
                title="Weight Management",
                message=(
                    "Consider gaining weight gradually through a balanced diet "
                    "with adequate calories and protein."
                ),
                priority="high",
            )
        )
    elif bmi is not None and bmi >= OBESE_BMI:
        recommendations.append(
            HealthRecommendation(
                category="weight",
                title="Weight Management",
                message=(
                    "Consider losing weight gradually through a balanced diet "
                    "and regular exercise."
                ),
                priority="high",
            )
        )

    suggested = suggest_daily_calories(profile)
    if (
        calorie_target is not None
        and abs(calorie_target - suggested) > CALORIE_TARGET_TOLERANCE
    ):
        recommendations.append(
            HealthRecommendation(
                category="calories",
                title="Calorie Target",
                message=(
                    "Based on your profile, consider adjusting your calorie "
                    f"target to around {suggested} calories per day."
                ),
                priority="medium",
            )
        )

    water_glasses = calculate_water_intake(profile.weight, profile.activity_level)
    if water_target_ml is not None:
        target_glasses = water_target_ml / WATER_GLASS_ML
        if abs(target_glasses - water_glasses) > WATER_TARGET_TOLERANCE_GLASSES:
            recommendations.append(
                HealthRecommendation(
                    category="water",
                    title="Hydration",
                    message=(
                        "Based on your weight and activity level, consider "
                        f"drinking around {water_glasses} glasses of water per day."
                    ),
                    priority="medium",
                )
            )

    if profile.activity_level == ActivityLevel.SEDENTARY:
        recommendations.append(
            HealthRecommendation(
                category="activity",
                title="Physical Activity",
                message=(
                    "Try to incorporate at least 150 minutes of moderate "
                    "exercise per week for better health."
                ),
                priority="medium",
            )
        )
    return recommendations


def _measurements(profile: Profile) -> tuple[float, float, float]:
    missing = [
        name
        for name in ("weight", "height", "age")
        if not _is_positive(getattr(profile, name))
    ]
    if missing:
        raise InvalidProfileError(
            f"Profile needs positive values for: {', '.join(missing)}"
        )
    return (
        coalesce_amount(profile.weight),
        coalesce_amount(profile.height),
        coalesce_amount(profile.age),
    )


def _is_positive(value: object) -> bool:
    return coalesce_amount(value) > 0
