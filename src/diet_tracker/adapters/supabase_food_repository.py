"""Supabase repository for the food catalog."""

import logging
import re
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_tracker.adapters.rows import first_value, to_float
from diet_tracker.domain.foods import DEFAULT_REFERENCE_QUANTITY, FoodRecord
from diet_tracker.services.insights import FoodRepository

_SERVING_PARENTHESIS = re.compile(r"\((\d+(?:\.\d+)?)\s*(?:g|ml)\)", re.IGNORECASE)
_SERVING_LEADING = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:g|ml)\b", re.IGNORECASE)

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation reading the ``foods`` table."""

    client: Client

    def list_foods(self, user_id: UUID) -> list[FoodRecord]:
        """Return shared foods and the user's custom foods."""
        response = (
            self.client.table("foods")
            .select("*")
            .or_(f"user_id.is.null,user_id.eq.{user_id}")
            .order("name", desc=False)
            .execute()
        )
        foods = []
        for row in response.data or []:
            food = parse_food(row)
            if food is None:
                _logger.warning("Skipping food row without a name: %s", row.get("id"))
                continue
            foods.append(food)
        return foods


def parse_food(row: dict[str, object]) -> FoodRecord | None:
    """Parse a food row into a ``FoodRecord``, or None without a name.

    Nutrient columns may use either the short or the long name
    (``carbs``/``carbohydrates``, ``fat``/``total_fat``).
    """
    name = row.get("name") or row.get("food_name")
    if not isinstance(name, str) or not name.strip():
        return None
    raw_id = row.get("id")
    return FoodRecord(
        id=UUID(str(raw_id)) if raw_id else None,
        name=name.strip(),
        calories=to_float(row.get("calories")),
        protein=to_float(row.get("protein")),
        carbs=to_float(first_value(row, "carbs", "carbohydrates")),
        fat=to_float(first_value(row, "fat", "total_fat")),
        fiber=to_float(row.get("fiber")),
        sugar=to_float(row.get("sugar")),
        sodium=to_float(row.get("sodium")),
        reference_quantity=_reference_quantity(row),
    )


def parse_serving_size(serving_size: object) -> float | None:
    """Return grams or millilitres from strings like ``1 piece (30g)``."""
    if not isinstance(serving_size, str):
        return None
    match = _SERVING_PARENTHESIS.search(serving_size) or _SERVING_LEADING.search(
        serving_size
    )
    if match is None:
        return None
    value = float(match.group(1))
    return value if value > 0 else None


def _reference_quantity(row: dict[str, object]) -> float:
    explicit = to_float(row.get("reference_quantity"))
    if explicit is not None and explicit > 0:
        return explicit
    return parse_serving_size(row.get("serving_size")) or DEFAULT_REFERENCE_QUANTITY
