"""FastAPI application factory."""

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import TypeVar
from uuid import UUID

from fastapi import FastAPI, HTTPException, Query, Request, status

from diet_tracker.app_logging import configure_logging
from diet_tracker.containers import AppContainer
from diet_tracker.domain.foods import MealType
from diet_tracker.services.insights import InsightsService

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    app = FastAPI(title="Diet Tracker Insights")
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users/{user_id}/targets")
    def targets(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the user's effective daily targets."""
        service = _service(request)
        return {"targets": _from_store(lambda: service.get_targets(user_id))}

    @app.get("/users/{user_id}/summary")
    def summary(
        user_id: UUID, request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return totals, gaps and hydration for a day."""
        service = _service(request)
        resolved_day = day or _today()
        return {
            "summary": _from_store(
                lambda: service.get_daily_summary(user_id, resolved_day)
            )
        }

    @app.get("/users/{user_id}/recommendations")
    def recommendations(
        user_id: UUID,
        request: Request,
        day: date | None = None,
        meal_type: str | None = None,
        limit: int | None = Query(default=None, ge=1, le=50),
    ) -> dict[str, object]:
        """Return food recommendations, optionally for a meal type."""
        service = _service(request)
        resolved_day = day or _today()
        if meal_type is not None:
            parsed = _meal_type(meal_type)
            items = _from_store(
                lambda: service.recommend_for_meal_type(user_id, resolved_day, parsed)
            )
        else:
            items = _from_store(
                lambda: service.recommend_foods(user_id, resolved_day, limit)
            )
        return {"recommendations": items}

    @app.get("/users/{user_id}/timing")
    def timing(
        user_id: UUID,
        request: Request,
        day: date | None = None,
        days: int | None = Query(default=None, ge=1, le=90),
    ) -> dict[str, object]:
        """Return the meal timing profile for the window ending on ``day``."""
        service = _service(request)
        resolved_day = day or _today()
        return {
            "timing": _from_store(
                lambda: service.analyze_timing(user_id, resolved_day, days)
            )
        }

    @app.get("/users/{user_id}/insights")
    def insights(
        user_id: UUID, request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return prioritised insights for a day."""
        service = _service(request)
        resolved_day = day or _today()
        return {
            "insights": _from_store(lambda: service.get_insights(user_id, resolved_day))
        }

    @app.get("/users/{user_id}/health-report")
    def health_report(user_id: UUID, request: Request) -> dict[str, object]:
        """Return BMI and profile-based guidance."""
        service = _service(request)
        return {"report": _from_store(lambda: service.get_health_report(user_id))}

    return app


def _service(request: Request) -> InsightsService:
    container: AppContainer = request.app.state.container
    return container.insights_service


def _from_store(func: Callable[[], T]) -> T:
    """Run a store-backed call, mapping store failures to 503."""
    try:
        return func()
    except Exception as exc:
        _logger.exception("Store request failed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Data store unavailable",
        ) from exc


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _meal_type(value: str) -> MealType:
    """Parse a meal type in any letter case; unknown names are a 422."""
    parsed = MealType.parse(value)
    if parsed == MealType.OTHER and value.strip().lower() != MealType.OTHER.lower():
        raise HTTPException(
            status_code=422,
            detail=f"Unknown meal type: {value}",
        )
    return parsed
