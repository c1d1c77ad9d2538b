"""Domain models for health metrics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BMIClassification:
    """BMI band with a display label."""

    label: str
    severity: str
    range: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class WeightRange:
    """Healthy weight range in kilograms."""

    min_kg: int
    max_kg: int


@dataclass(frozen=True)
class HealthRecommendation:
    """Profile-based advice."""

    category: str
    title: str
    message: str
    priority: str
