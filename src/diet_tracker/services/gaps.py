"""Comparison of consumed nutrients against daily targets."""

from diet_tracker.domain.nutrition import MACROS, Gap, MacroTargets, MacroTotals
from diet_tracker.domain.profile import Profile
from diet_tracker.services.aggregator import coalesce_amount
from diet_tracker.services.health import suggest_daily_calories

PROTEIN_CALORIE_SHARE = 0.25
CARBS_CALORIE_SHARE = 0.45
FAT_CALORIE_SHARE = 0.30
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

DEFAULT_TARGETS = MacroTargets(calories=2000, protein=125, carbs=225, fat=67)


def compute_gaps(totals: MacroTotals, targets: MacroTargets) -> dict[str, Gap]:
    """Return the remaining amount and percentage consumed per macro.

    Gaps are never negative: going over a target only shows up as a
    percentage above 100.
    """
    gaps: dict[str, Gap] = {}
    for macro in MACROS:
        consumed = coalesce_amount(getattr(totals, macro))
        target = coalesce_amount(getattr(targets, macro))
        gaps[macro] = Gap(
            consumed=consumed,
            target=target,
            gap=max(0.0, target - consumed),
            percentage_consumed=consumed / target * 100 if target > 0 else 0.0,
        )
    return gaps


def resolve_targets(
    profile: Profile | None, custom_targets: MacroTargets | None = None
) -> MacroTargets:
    """Return custom targets when usable, otherwise profile-derived ones."""
    if custom_targets is not None and coalesce_amount(custom_targets.calories) > 0:
        return MacroTargets(
            calories=custom_targets.calories,
            protein=coalesce_amount(custom_targets.protein),
            carbs=coalesce_amount(custom_targets.carbs),
            fat=coalesce_amount(custom_targets.fat),
        )
    if profile is None:
        return DEFAULT_TARGETS
    return targets_for_calories(suggest_daily_calories(profile))


def targets_for_calories(calories: float) -> MacroTargets:
    """Split a calorie target into macro grams."""
    return MacroTargets(
        calories=calories,
        protein=round(calories * PROTEIN_CALORIE_SHARE / KCAL_PER_GRAM_PROTEIN),
        carbs=round(calories * CARBS_CALORIE_SHARE / KCAL_PER_GRAM_CARBS),
        fat=round(calories * FAT_CALORIE_SHARE / KCAL_PER_GRAM_FAT),
    )
