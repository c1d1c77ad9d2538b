"""Supabase repository for water logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from diet_tracker.adapters.rows import to_float
from diet_tracker.services.insights import WaterRepository


@dataclass
class SupabaseWaterRepository(WaterRepository):
    """Supabase implementation reading the ``water_entries`` table."""

    client: Client

    def total_for_day(self, user_id: UUID, day: date) -> float:
        """Return the millilitres logged on a day."""
        response = (
            self.client.table("water_entries")
            .select("amount")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .execute()
        )
        return sum(
            (max(to_float(row.get("amount")) or 0.0, 0.0) for row in response.data or []),
            0.0,
        )
