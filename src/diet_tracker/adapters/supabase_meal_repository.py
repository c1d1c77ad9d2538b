"""Supabase repository for logged meals."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from uuid import UUID

from supabase import Client

from diet_tracker.adapters.rows import first_value, to_datetime, to_float
from diet_tracker.adapters.supabase_food_repository import parse_food, parse_serving_size
from diet_tracker.domain.foods import FoodRecord, MealEntry, MealType
from diet_tracker.services.insights import MealRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation reading ``meal_entries`` joined with ``foods``."""

    client: Client

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return meal entries dated between ``start`` and ``end``."""
        response = (
            self.client.table("meal_entries")
            .select("*, foods(*)")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .order("created_at", desc=False)
            .execute()
        )
        meals = []
        for row in response.data or []:
            entry = parse_meal_entry(row)
            if entry is None:
                _logger.warning("Skipping unreadable meal entry: %s", row.get("id"))
                continue
            meals.append(entry)
        return meals


def parse_meal_entry(row: dict[str, object]) -> MealEntry | None:
    """Parse a meal row; the food may be embedded or flattened into the row."""
    embedded = row.get("foods")
    food = parse_food(embedded if isinstance(embedded, dict) else row)
    timestamp, time_known = _meal_timestamp(row)
    if food is None or timestamp is None:
        return None
    raw_id = row.get("id")
    return MealEntry(
        id=UUID(str(raw_id)) if raw_id else None,
        food=food,
        quantity=_serving_quantity(row, food),
        meal_type=MealType.parse(first_value(row, "meal_type", "mealType")),
        timestamp=timestamp,
        time_known=time_known,
    )


def _serving_quantity(row: dict[str, object], food: FoodRecord) -> float | None:
    """Convert the stored serving count into the food's reference units.

    A ``serving_size`` on the meal row overrides the food's own serving.
    """
    servings = to_float(row.get("quantity"))
    if servings is None:
        return None
    override = None
    if isinstance(row.get("foods"), dict):
        override = parse_serving_size(row.get("serving_size"))
    return servings * (override or food.reference_quantity)


def _meal_timestamp(row: dict[str, object]) -> tuple[datetime | None, bool]:
    """Return the meal time and whether the time of day is real.

    ``created_at`` is trusted only when it falls on the entry's ``date``;
    otherwise the entry was logged after the fact and only the day is known.
    """
    logged_at = to_datetime(first_value(row, "logged_at", "created_at"))
    raw_day = row.get("date")
    if not isinstance(raw_day, str):
        return logged_at, logged_at is not None
    try:
        day = date.fromisoformat(raw_day[:10])
    except ValueError:
        return logged_at, logged_at is not None
    if logged_at is not None and logged_at.date() == day:
        return logged_at, True
    return datetime.combine(day, time.min), False
