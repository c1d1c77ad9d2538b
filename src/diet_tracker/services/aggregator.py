"""Aggregation of logged meals into nutrient totals."""

import logging
import math
from collections.abc import Iterable

from diet_tracker.domain.foods import DEFAULT_REFERENCE_QUANTITY, MealEntry, MealType
from diet_tracker.domain.nutrition import NUTRIENTS, MacroTotals, NutritionAggregate

_logger = logging.getLogger(__name__)


def coalesce_amount(value: object) -> float:
    """Return a non-negative finite number, treating anything else as 0."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def entry_nutrients(entry: MealEntry) -> MacroTotals:
    """Return the nutrients contributed by a single meal entry."""
    quantity = coalesce_amount(entry.quantity)
    reference = coalesce_amount(entry.food.reference_quantity)
    if reference <= 0:
        reference = DEFAULT_REFERENCE_QUANTITY
    if quantity <= 0:
        _logger.debug("Meal entry without usable quantity: %s", entry.food.name)
    factor = quantity / reference
    return MacroTotals(
        **{
            nutrient: coalesce_amount(getattr(entry.food, nutrient)) * factor
            for nutrient in NUTRIENTS
        }
    )


def aggregate(meals: Iterable[MealEntry]) -> NutritionAggregate:
    """Sum meal entries into overall and per meal type totals.

    Malformed values count as 0 and unknown meal types land in ``Other`` so a
    single bad entry never prevents totals for the rest of the day.
    """
    totals = _zero()
    by_meal_type = {meal_type: _zero() for meal_type in MealType}
    for entry in meals:
        contribution = entry_nutrients(entry)
        meal_type = MealType.parse(entry.meal_type)
        totals = _add(totals, contribution)
        by_meal_type[meal_type] = _add(by_meal_type[meal_type], contribution)
    return NutritionAggregate(
        totals=MacroTotals(**totals),
        by_meal_type={
            meal_type: MacroTotals(**values)
            for meal_type, values in by_meal_type.items()
        },
    )


def filter_by_date(meals: Iterable[MealEntry], iso_date: str) -> list[MealEntry]:
    """Return entries whose timestamp falls on ``iso_date`` (``YYYY-MM-DD``).

    Timestamps are compared as provided; no timezone conversion happens.
    """
    return [entry for entry in meals if _day_key(entry) == iso_date]


def group_by_day(meals: Iterable[MealEntry]) -> dict[str, list[MealEntry]]:
    """Group entries by the date part of their timestamp, oldest day first."""
    grouped: dict[str, list[MealEntry]] = {}
    for entry in meals:
        grouped.setdefault(_day_key(entry), []).append(entry)
    return dict(sorted(grouped.items()))


def _day_key(entry: MealEntry) -> str:
    return entry.timestamp.isoformat()[:10]


def _zero() -> dict[str, float]:
    return dict.fromkeys(NUTRIENTS, 0.0)


def _add(totals: dict[str, float], contribution: MacroTotals) -> dict[str, float]:
    return {
        nutrient: totals[nutrient] + getattr(contribution, nutrient)
        for nutrient in NUTRIENTS
    }
