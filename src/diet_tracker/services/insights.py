"""Application service combining store data with the nutrition engine."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from diet_tracker.domain.foods import FoodRecord, MealEntry, MealType
from diet_tracker.domain.insights import (
    DailySummary,
    HealthReport,
    HydrationStatus,
    Insight,
)
from diet_tracker.domain.nutrition import Gap, MacroTargets, MacroTotals
from diet_tracker.domain.profile import Goal, Profile
from diet_tracker.domain.recommendations import Recommendation
from diet_tracker.domain.timing import TimingProfile
from diet_tracker.services import health, recommender
from diet_tracker.services.aggregator import aggregate, filter_by_date, group_by_day
from diet_tracker.services.cache import Cache
from diet_tracker.services.gaps import compute_gaps, resolve_targets
from diet_tracker.services.timing import analyze_timing

DEFAULT_WATER_GOAL_ML = 2000
MAX_RECOMMENDED_WATER_ML = 4000
MAX_INSIGHTS = 5

LOW_CALORIE_PERCENT = 80
HIGH_CALORIE_PERCENT = 120
LOW_PROTEIN_PERCENT = 70
HIGH_PROTEIN_SHARE = 35
LOW_CARBS_SHARE = 30

_PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for profiles and saved targets."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the user's profile, if one exists."""

    def get_custom_targets(self, user_id: UUID) -> MacroTargets | None:
        """Return targets the user set by hand, if any."""


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return meal entries logged between ``start`` and ``end`` inclusive."""


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def list_foods(self, user_id: UUID) -> list[FoodRecord]:
        """Return shared foods plus the user's custom foods."""


class WaterRepository(Protocol):
    """Persistence interface for water logs."""

    def total_for_day(self, user_id: UUID, day: date) -> float:
        """Return millilitres of water logged on ``day``."""


@dataclass
class InsightsService:
    """Fetch a user's data and run the nutrition engine over it."""

    profile_repository: ProfileRepository
    meal_repository: MealRepository
    food_repository: FoodRepository
    water_repository: WaterRepository
    cache: Cache
    food_catalog_ttl_seconds: int = 3600
    timing_window_days: int = 14
    recommendation_limit: int = recommender.DEFAULT_LIMIT
    debug: bool = False

    def get_targets(self, user_id: UUID) -> MacroTargets:
        """Return the user's effective daily targets."""
        return resolve_targets(
            self.profile_repository.get_profile(user_id),
            self.profile_repository.get_custom_targets(user_id),
        )

    def get_daily_summary(self, user_id: UUID, day: date) -> DailySummary:
        """Return totals, targets, gaps and hydration for a day."""
        return self._daily_summary(
            user_id, day, self.profile_repository.get_profile(user_id)
        )

    def recommend_foods(
        self, user_id: UUID, day: date, limit: int | None = None
    ) -> list[Recommendation]:
        """Return foods that fill the day's remaining macro gaps."""
        profile = self.profile_repository.get_profile(user_id)
        summary = self._daily_summary(user_id, day, profile)
        return recommender.recommend(
            summary.gaps,
            self.get_food_catalog(user_id),
            profile,
            limit=self.recommendation_limit if limit is None else limit,
        )

    def recommend_for_meal_type(
        self, user_id: UUID, day: date, meal_type: MealType | str
    ) -> list[Recommendation]:
        """Return foods suited to a meal type."""
        summary = self.get_daily_summary(user_id, day)
        return recommender.recommend_for_meal_type(
            meal_type, summary.gaps, self.get_food_catalog(user_id)
        )

    def analyze_timing(
        self, user_id: UUID, end: date, days: int | None = None
    ) -> TimingProfile:
        """Return the meal timing profile for the window ending on ``end``."""
        window = self.timing_window_days if days is None else days
        start = end - timedelta(days=max(window, 1) - 1)
        meals = self.meal_repository.list_meals(user_id, start, end)
        return analyze_timing(group_by_day(meals))

    def get_insights(self, user_id: UUID, day: date) -> list[Insight]:
        """Return prioritised insights for a day."""
        profile = self.profile_repository.get_profile(user_id)
        summary = self._daily_summary(user_id, day, profile)
        return build_nutrition_insights(
            summary.nutrition.totals,
            summary.gaps,
            self.analyze_timing(user_id, day),
            profile,
        )

    def _daily_summary(
        self, user_id: UUID, day: date, profile: Profile | None
    ) -> DailySummary:
        targets = resolve_targets(
            profile, self.profile_repository.get_custom_targets(user_id)
        )
        meals = self._meals_for_day(user_id, day)
        nutrition = aggregate(meals)
        water_goal = (
            profile.daily_water_target_ml
            if profile is not None and profile.daily_water_target_ml
            else DEFAULT_WATER_GOAL_ML
        )
        summary = DailySummary(
            day=day,
            nutrition=nutrition,
            targets=targets,
            gaps=compute_gaps(nutrition.totals, targets),
            hydration=hydration_status(
                self.water_repository.total_for_day(user_id, day), water_goal
            ),
            meal_count=len(meals),
        )
        if self.debug:
            _logger.info(
                "Daily summary: user_id=%s day=%s meals=%s calories=%.0f",
                user_id,
                day,
                len(meals),
                nutrition.totals.calories,
            )
        return summary

    def get_health_report(self, user_id: UUID) -> HealthReport:
        """Return BMI, calorie and hydration guidance for the user's profile."""
        profile = self.profile_repository.get_profile(user_id)
        custom = self.profile_repository.get_custom_targets(user_id)
        weight = profile.weight if profile is not None else None
        height = profile.height if profile is not None else None
        activity = profile.activity_level if profile is not None else None
        bmi = health.calculate_bmi(weight, height)
        return HealthReport(
            bmi=bmi,
            classification=health.classify_bmi(bmi),
            ideal_weight=health.ideal_weight_range(height),
            suggested_calories=health.suggest_daily_calories(profile),
            water_glasses=health.calculate_water_intake(weight, activity),
            recommendations=health.health_recommendations(
                profile,
                calorie_target=custom.calories if custom is not None else None,
                water_target_ml=(
                    profile.daily_water_target_ml if profile is not None else None
                ),
            ),
        )

    def get_food_catalog(self, user_id: UUID) -> list[FoodRecord]:
        """Return the food catalog, cached per user."""
        cache_key = f"foods:{user_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached
        foods = self.food_repository.list_foods(user_id)
        self.cache.set(cache_key, foods, ttl_seconds=self.food_catalog_ttl_seconds)
        if self.debug:
            _logger.info("Food catalog loaded: user_id=%s foods=%s", user_id, len(foods))
        return foods

    def _meals_for_day(self, user_id: UUID, day: date) -> list[MealEntry]:
        meals = self.meal_repository.list_meals(user_id, day, day)
        return filter_by_date(meals, day.isoformat())


def hydration_status(consumed_ml: float, goal_ml: float) -> HydrationStatus:
    """Return water intake against the goal."""
    return HydrationStatus(
        consumed_ml=consumed_ml,
        goal_ml=goal_ml,
        percentage=consumed_ml / goal_ml * 100 if goal_ml > 0 else 0.0,
        exceeds_maximum=consumed_ml > MAX_RECOMMENDED_WATER_ML,
    )


def build_nutrition_insights(
    totals: MacroTotals,
    gaps: Mapping[str, Gap],
    timing: TimingProfile | None = None,
    profile: Profile | None = None,
) -> list[Insight]:
    """Turn a day's gaps and timing profile into at most five insights."""
    insights: list[Insight] = []
    calories_pct = _percentage(gaps, "calories")
    protein_pct = _percentage(gaps, "protein")

    if calories_pct < LOW_CALORIE_PERCENT:
        insights.append(
            Insight(
                kind="warning",
                category="calories",
                message=(
                    f"You're {round(100 - calories_pct)}% below your calorie goal. "
                    "Consider adding a healthy snack."
                ),
                priority="high",
            )
        )
    elif calories_pct > HIGH_CALORIE_PERCENT:
        insights.append(
            Insight(
                kind="warning",
                category="calories",
                message=(
                    f"You're {round(calories_pct - 100)}% over your calorie goal. "
                    "Consider lighter meals tomorrow."
                ),
                priority="medium",
            )
        )

    if protein_pct < LOW_PROTEIN_PERCENT:
        insights.append(
            Insight(
                kind="suggestion",
                category="protein",
                message=(
                    "Low protein intake today. Try adding eggs, lean meat, "
                    "or legumes to your next meal."
                ),
                priority="high",
            )
        )

    protein_kcal = totals.protein * 4
    carbs_kcal = totals.carbs * 4
    fat_kcal = totals.fat * 9
    macro_kcal = protein_kcal + carbs_kcal + fat_kcal
    if macro_kcal > 0:
        if protein_kcal / macro_kcal * 100 > HIGH_PROTEIN_SHARE:
            insights.append(
                Insight(
                    kind="info",
                    category="balance",
                    message=(
                        "High protein day! Great for muscle maintenance "
                        "and satiety."
                    ),
                    priority="low",
                )
            )
        if carbs_kcal / macro_kcal * 100 < LOW_CARBS_SHARE:
            insights.append(
                Insight(
                    kind="suggestion",
                    category="balance",
                    message=(
                        "Low carb intake may affect energy levels. Consider "
                        "adding fruits or whole grains."
                    ),
                    priority="medium",
                )
            )

    if timing is not None and timing.suggestions:
        insights.append(
            Insight(
                kind="suggestion",
                category="timing",
                message=timing.suggestions[0],
                priority="medium",
            )
        )

    goal = profile.goal if profile is not None else None
    if goal == Goal.LOSE and calories_pct > 100:
        insights.append(
            Insight(
                kind="suggestion",
                category="goals",
                message=(
                    "For weight loss, try to stay within your calorie goal. "
                    "Focus on high-volume, low-calorie foods."
                ),
                priority="high",
            )
        )
    elif goal == Goal.GAIN and calories_pct < 100:
        insights.append(
            Insight(
                kind="suggestion",
                category="goals",
                message=(
                    "For weight gain, aim to consistently meet your calorie "
                    "goals. Add healthy calorie-dense foods."
                ),
                priority="high",
            )
        )

    insights.sort(key=lambda insight: _PRIORITY_ORDER[insight.priority], reverse=True)
    return insights[:MAX_INSIGHTS]


def _percentage(gaps: Mapping[str, Gap], macro: str) -> float:
    gap = gaps.get(macro)
    return gap.percentage_consumed if gap is not None else 0.0
