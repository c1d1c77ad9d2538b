"""Domain models for food recommendations."""

from dataclasses import dataclass, field

from diet_tracker.domain.foods import FoodRecord


@dataclass(frozen=True)
class Recommendation:
    """A scored catalog food with up to two reasons."""

    food: FoodRecord
    score: float
    reasons: list[str] = field(default_factory=list)
