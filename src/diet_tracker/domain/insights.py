"""Domain models for daily summaries and insights."""

from dataclasses import dataclass
from datetime import date

from diet_tracker.domain.health import (
    BMIClassification,
    HealthRecommendation,
    WeightRange,
)
from diet_tracker.domain.nutrition import Gap, MacroTargets, NutritionAggregate


@dataclass(frozen=True)
class Insight:
    """A prioritised message about today's intake or habits."""

    kind: str
    category: str
    message: str
    priority: str


@dataclass(frozen=True)
class HydrationStatus:
    """Water consumed against the daily goal."""

    consumed_ml: float
    goal_ml: float
    percentage: float
    exceeds_maximum: bool


@dataclass(frozen=True)
class DailySummary:
    """Everything the dashboard needs for one day."""

    day: date
    nutrition: NutritionAggregate
    targets: MacroTargets
    gaps: dict[str, Gap]
    hydration: HydrationStatus
    meal_count: int


@dataclass(frozen=True)
class HealthReport:
    """Profile-derived health metrics."""

    bmi: float | None
    classification: BMIClassification
    ideal_weight: WeightRange | None
    suggested_calories: int
    water_glasses: int
    recommendations: list[HealthRecommendation]
