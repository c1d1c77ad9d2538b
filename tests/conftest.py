"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer
from diet_tracker.domain.foods import FoodRecord, MealEntry, MealType
from diet_tracker.domain.nutrition import MacroTargets
from diet_tracker.domain.profile import ActivityLevel, Gender, Goal, Profile
from diet_tracker.services.cache import InMemoryCache
from diet_tracker.services.insights import (
    FoodRepository,
    InsightsService,
    MealRepository,
    ProfileRepository,
    WaterRepository,
)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository that counts profile reads."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)
    targets: dict[UUID, MacroTargets] = field(default_factory=dict)
    profile_reads: int = 0

    def get_profile(self, user_id: UUID) -> Profile | None:
        self.profile_reads += 1
        return self.profiles.get(user_id)

    def get_custom_targets(self, user_id: UUID) -> MacroTargets | None:
        return self.targets.get(user_id)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, list[MealEntry]] = field(default_factory=dict)
    failing: bool = False

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        if self.failing:
            raise RuntimeError("store offline")
        return [
            meal
            for meal in self.meals.get(user_id, [])
            if start <= meal.timestamp.date() <= end
        ]


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog that counts reads."""

    foods: list[FoodRecord] = field(default_factory=list)
    calls: int = 0

    def list_foods(self, user_id: UUID) -> list[FoodRecord]:
        self.calls += 1
        return list(self.foods)


@dataclass
class InMemoryWaterRepository(WaterRepository):
    """In-memory water log for tests."""

    totals: dict[tuple[UUID, date], float] = field(default_factory=dict)

    def total_for_day(self, user_id: UUID, day: date) -> float:
        return self.totals.get((user_id, day), 0.0)


def make_food(  # noqa: PLR0913
    name: str,
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
    reference_quantity: float = 100.0,
) -> FoodRecord:
    return FoodRecord(
        name=name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        reference_quantity=reference_quantity,
    )


def make_meal(
    food: FoodRecord,
    quantity: float,
    meal_type: MealType | str,
    timestamp: datetime,
    *,
    time_known: bool = True,
) -> MealEntry:
    return MealEntry(
        food=food,
        quantity=quantity,
        meal_type=meal_type,
        timestamp=timestamp,
        time_known=time_known,
    )


CHICKEN = make_food("Chicken Breast (grilled)", 165, 31.0, 0, 3.6)
SALMON = make_food("Fish (Salmon)", 208, 25.0, 0, 12.0)
BANANA = make_food("Banana", 89, 1.1, 23.0, 0.3)
APPLE = make_food("Apple", 52, 0.3, 14.0, 0.2)
IDLI = make_food("Idli", 58, 2.0, 12.0, 0.4, reference_quantity=30)
OLIVE_OIL = make_food("Olive Oil", 884, 0, 0, 100.0)
YOGURT = make_food("Yogurt (plain)", 59, 10.0, 3.6, 0.4)
OATS = make_food("Oats", 68, 2.4, 12.0, 1.4, reference_quantity=50)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def profile() -> Profile:
    return Profile(
        weight=70,
        height=175,
        age=30,
        gender=Gender.MALE,
        activity_level=ActivityLevel.MODERATE,
        goal=Goal.MAINTAIN,
    )


@pytest.fixture
def catalog() -> list[FoodRecord]:
    return [BANANA, CHICKEN, APPLE, SALMON, IDLI, OLIVE_OIL, YOGURT, OATS]


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def profile_repository(profile: Profile, user_id: UUID) -> InMemoryProfileRepository:
    return InMemoryProfileRepository(profiles={user_id: profile})


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def food_repository(catalog: list[FoodRecord]) -> InMemoryFoodRepository:
    return InMemoryFoodRepository(foods=catalog)


@pytest.fixture
def water_repository() -> InMemoryWaterRepository:
    return InMemoryWaterRepository()


@pytest.fixture
def insights_service(
    profile_repository: InMemoryProfileRepository,
    meal_repository: InMemoryMealRepository,
    food_repository: InMemoryFoodRepository,
    water_repository: InMemoryWaterRepository,
) -> InsightsService:
    return InsightsService(
        profile_repository=profile_repository,
        meal_repository=meal_repository,
        food_repository=food_repository,
        water_repository=water_repository,
        cache=InMemoryCache(),
    )


@pytest.fixture
def container(settings: Settings, insights_service: InsightsService) -> AppContainer:
    return AppContainer(settings=settings, insights_service=insights_service)
