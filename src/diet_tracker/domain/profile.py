"""Domain models for user profiles."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Gender values stored with a profile."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Goal(StrEnum):
    """Body weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class Profile:
    """Body measurements and goals used by the health formulas.

    Weight is in kilograms, height in centimetres and age in years. Any of
    them may be ``None`` when the user has not filled in their profile yet.
    """

    weight: float | None
    height: float | None
    age: int | None
    gender: Gender | str | None = None
    activity_level: ActivityLevel | str | None = None
    goal: Goal | str | None = None
    daily_water_target_ml: int | None = None
