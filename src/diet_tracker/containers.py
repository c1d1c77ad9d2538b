"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from diet_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from diet_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from diet_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_tracker.adapters.supabase_water_repository import SupabaseWaterRepository
from diet_tracker.config import Settings
from diet_tracker.services.cache import InMemoryCache
from diet_tracker.services.insights import InsightsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    insights_service: InsightsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    insights_service = InsightsService(
        profile_repository=SupabaseProfileRepository(supabase_client),
        meal_repository=SupabaseMealRepository(supabase_client),
        food_repository=SupabaseFoodRepository(supabase_client),
        water_repository=SupabaseWaterRepository(supabase_client),
        cache=InMemoryCache(),
        food_catalog_ttl_seconds=resolved_settings.food_catalog_ttl_seconds,
        timing_window_days=resolved_settings.timing_window_days,
        recommendation_limit=resolved_settings.recommendation_limit,
        debug=resolved_settings.debug,
    )
    return AppContainer(settings=resolved_settings, insights_service=insights_service)
