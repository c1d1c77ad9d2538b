"""Meal timing pattern analysis."""

import logging
from collections.abc import Mapping, Sequence
from datetime import date

from diet_tracker.domain.foods import MealEntry
from diet_tracker.domain.timing import TimingPattern, TimingProfile

# Breakfast, lunch, snack, dinner. Used when a day has entries without a time.
TYPICAL_MEAL_HOURS = (8, 12, 15, 19)

EARLY_FIRST_MEAL_HOUR = 8
LATE_FIRST_MEAL_HOUR = 11
LATE_LAST_MEAL_HOUR = 21
MIN_MEALS_PER_DAY = 3
MAX_MEALS_PER_DAY = 6
LONG_GAP_HOURS = 6
SHORT_GAP_HOURS = 2
MAX_SUGGESTIONS = 3

NO_DATA_SUGGESTION = "Start logging meals to get timing insights"

_logger = logging.getLogger(__name__)


def analyze_timing(
    meals_by_day: Mapping[str | date, Sequence[MealEntry]],
) -> TimingProfile:
    """Summarise when meals are eaten across several days.

    Days whose entries lack a time of day are analysed with
    ``TYPICAL_MEAL_HOURS`` by position, so the result degrades to typical
    meal hours rather than failing.
    """
    days = [_day_hours(entries) for entries in meals_by_day.values() if entries]
    if not days:
        return TimingProfile(
            average_first_meal_time=None,
            average_last_meal_time=None,
            meals_per_day=0.0,
            average_gap_hours=0.0,
            pattern=TimingPattern.INSUFFICIENT_DATA,
            suggestions=[NO_DATA_SUGGESTION],
            days_analyzed=0,
        )

    count = len(days)
    avg_first = sum(hours[0] for hours in days) / count
    avg_last = sum(hours[-1] for hours in days) / count
    avg_meals = sum(len(hours) for hours in days) / count
    gaps = [
        later - earlier
        for hours in days
        for earlier, later in zip(hours, hours[1:], strict=False)
    ]
    avg_gap = sum(gaps) / len(gaps) if gaps else 0.0

    pattern = TimingPattern.IRREGULAR
    suggestions: list[str] = []
    if avg_first < EARLY_FIRST_MEAL_HOUR:
        pattern = TimingPattern.EARLY_BIRD
        suggestions.append(
            "Great job eating breakfast early! This can boost metabolism."
        )
    elif avg_first > LATE_FIRST_MEAL_HOUR:
        pattern = TimingPattern.LATE_STARTER
        suggestions.append(
            "Consider eating breakfast earlier to stabilize energy levels."
        )

    if avg_last > LATE_LAST_MEAL_HOUR:
        suggestions.append(
            "Try to finish eating 2-3 hours before bedtime for better digestion."
        )

    if avg_meals < MIN_MEALS_PER_DAY:
        suggestions.append("Consider eating more regularly throughout the day.")
    elif avg_meals > MAX_MEALS_PER_DAY:
        suggestions.append(
            "You eat frequently - make sure portion sizes are appropriate."
        )

    if avg_gap > LONG_GAP_HOURS:
        suggestions.append(
            "Long gaps between meals may lead to overeating. "
            "Consider healthy snacks."
        )
    elif avg_gap < SHORT_GAP_HOURS:
        suggestions.append(
            "Very frequent eating - ensure each meal has nutritional value."
        )

    _logger.debug(
        "Timing analysis: days=%s first=%.2f last=%.2f pattern=%s",
        count,
        avg_first,
        avg_last,
        pattern,
    )
    return TimingProfile(
        average_first_meal_time=format_hour(avg_first),
        average_last_meal_time=format_hour(avg_last),
        meals_per_day=round(avg_meals, 1),
        average_gap_hours=round(avg_gap, 1),
        pattern=pattern,
        suggestions=suggestions[:MAX_SUGGESTIONS],
        days_analyzed=count,
    )


def format_hour(hour: float) -> str:
    """Format a fractional hour of day as ``H:MM``."""
    total_minutes = round(hour * 60)
    return f"{total_minutes // 60}:{total_minutes % 60:02d}"


def _day_hours(entries: Sequence[MealEntry]) -> list[float]:
    """Return sorted fractional meal hours for one day."""
    if all(entry.time_known for entry in entries):
        return sorted(
            entry.timestamp.hour
            + entry.timestamp.minute / 60
            + entry.timestamp.second / 3600
            for entry in entries
        )
    return sorted(
        TYPICAL_MEAL_HOURS[index % len(TYPICAL_MEAL_HOURS)]
        for index in range(len(entries))
    )
