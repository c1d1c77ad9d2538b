"""Helpers for reading loosely typed Supabase rows."""

from datetime import datetime


def first_value(row: dict[str, object], *keys: str) -> object | None:
    """Return the first non-null value among ``keys``."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def to_float(value: object) -> float | None:
    """Convert numbers and numeric strings; None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_datetime(value: object) -> datetime | None:
    """Parse an ISO timestamp string."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
