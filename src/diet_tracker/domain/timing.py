"""Domain models for meal timing analysis."""

from dataclasses import dataclass, field
from enum import StrEnum


class TimingPattern(StrEnum):
    """Eating pattern classification."""

    EARLY_BIRD = "early_bird"
    LATE_STARTER = "late_starter"
    IRREGULAR = "irregular"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class TimingProfile:
    """Averaged meal timing over a number of days."""

    average_first_meal_time: str | None
    average_last_meal_time: str | None
    meals_per_day: float
    average_gap_hours: float
    pattern: TimingPattern
    suggestions: list[str] = field(default_factory=list)
    days_analyzed: int = 0
