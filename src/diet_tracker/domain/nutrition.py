"""Nutrition domain models."""

from dataclasses import dataclass, field

from diet_tracker.domain.foods import MealType

MACROS = ("calories", "protein", "carbs", "fat")
NUTRIENTS = (*MACROS, "fiber", "sugar", "sodium")


@dataclass(frozen=True)
class MacroTotals:
    """Summed nutrients for a set of meal entries."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macro targets in kcal and grams."""

    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class Gap:
    """Consumption against a target for one macro."""

    consumed: float
    target: float
    gap: float
    percentage_consumed: float


@dataclass(frozen=True)
class NutritionAggregate:
    """Totals for a set of meals, overall and per meal type."""

    totals: MacroTotals
    by_meal_type: dict[MealType, MacroTotals] = field(default_factory=dict)
