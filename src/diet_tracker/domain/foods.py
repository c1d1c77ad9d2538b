"""Domain models for foods and logged meals."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

DEFAULT_REFERENCE_QUANTITY = 100.0


class MealType(StrEnum):
    """Bucket a meal entry is logged under."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: object) -> "MealType":
        """Return the meal type for a raw value, or ``Other`` when unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return cls.OTHER


@dataclass(frozen=True)
class FoodRecord:
    """Nutrition facts for a food per ``reference_quantity`` units."""

    name: str
    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    reference_quantity: float = DEFAULT_REFERENCE_QUANTITY
    id: UUID | None = None

    @property
    def name_key(self) -> str:
        """Case-insensitive identity used for lookups."""
        return self.name.strip().lower()


@dataclass(frozen=True)
class MealEntry:
    """A logged quantity of a food.

    ``time_known`` is False when the store only recorded the date, in which
    case ``timestamp`` carries midnight of that day.
    """

    food: FoodRecord
    quantity: float | None
    meal_type: MealType | str
    timestamp: datetime
    time_known: bool = True
    id: UUID | None = None
