"""Supabase repository for user profiles and saved targets."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from supabase import Client

from diet_tracker.adapters.rows import first_value, to_float
from diet_tracker.domain.nutrition import MacroTargets
from diet_tracker.domain.profile import ActivityLevel, Gender, Goal, Profile
from diet_tracker.services.insights import ProfileRepository

# The store's activity scale runs one name ahead: its "very_active" is the
# 1.725 tier and "extremely_active" the 1.9 tier.
_ACTIVITY_ALIASES = {
    "lightly_active": ActivityLevel.LIGHT,
    "moderately_active": ActivityLevel.MODERATE,
    "very_active": ActivityLevel.ACTIVE,
    "extremely_active": ActivityLevel.VERY_ACTIVE,
}
_GOAL_ALIASES = {
    "lose_weight": Goal.LOSE,
    "maintain_weight": Goal.MAINTAIN,
    "gain_weight": Goal.GAIN,
}


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation reading the ``user_profiles`` table."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the stored profile for a user."""
        row = self._fetch_row(user_id)
        if row is None:
            return None
        return _parse_profile(row)

    def get_custom_targets(self, user_id: UUID) -> MacroTargets | None:
        """Return targets saved on the profile, if a calorie target is set."""
        row = self._fetch_row(user_id)
        if row is None:
            return None
        calories = to_float(row.get("daily_calorie_target"))
        if calories is None or calories <= 0:
            return None
        return MacroTargets(
            calories=calories,
            protein=to_float(row.get("daily_protein_target")) or 0.0,
            carbs=to_float(row.get("daily_carbs_target")) or 0.0,
            fat=to_float(row.get("daily_fat_target")) or 0.0,
        )

    def _fetch_row(self, user_id: UUID) -> dict[str, object] | None:
        response = (
            self.client.table("user_profiles")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]


def _parse_profile(row: dict[str, object]) -> Profile:
    """Parse a profile row, accepting legacy column names and enum values."""
    age = to_float(row.get("age"))
    water = to_float(first_value(row, "daily_water_target", "daily_water_target_ml"))
    return Profile(
        weight=to_float(first_value(row, "weight", "weight_kg")),
        height=to_float(first_value(row, "height", "height_cm")),
        age=int(age) if age is not None else None,
        gender=_parse_choice(Gender, row.get("gender")),
        activity_level=_parse_choice(
            ActivityLevel,
            first_value(row, "activity_level", "activityLevel"),
            _ACTIVITY_ALIASES,
        ),
        goal=_parse_choice(Goal, row.get("goal"), _GOAL_ALIASES),
        daily_water_target_ml=int(water) if water is not None else None,
    )


def _parse_choice(
    enum_type: type[StrEnum],
    value: object,
    aliases: dict[str, StrEnum] | None = None,
) -> StrEnum | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lower()
    if aliases and cleaned in aliases:
        return aliases[cleaned]
    try:
        return enum_type(cleaned)
    except ValueError:
        return None
