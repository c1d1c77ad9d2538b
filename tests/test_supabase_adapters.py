"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

import pytest

from diet_tracker.adapters.supabase_food_repository import (
    SupabaseFoodRepository,
    parse_serving_size,
)
from diet_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from diet_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_tracker.adapters.supabase_water_repository import SupabaseWaterRepository
from diet_tracker.domain.foods import MealType
from diet_tracker.services.aggregator import aggregate
from diet_tracker.domain.profile import ActivityLevel, Gender, Goal


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    responses: list[list[dict[str, object]]] = field(default_factory=list)
    selected: list[str] = field(default_factory=list)
    filters: list[tuple[str, str, object]] = field(default_factory=list)

    def queue(self, data: list[dict[str, object]]) -> None:
        self.responses.append(data)

    def select(self, columns: str) -> "FakeTable":
        self.selected.append(columns)
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("lte", column, value))
        return self

    def or_(self, expression: str) -> "FakeTable":
        self.filters.append(("or", "", expression))
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        data = self.responses.pop(0) if self.responses else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


IDLI_ROW = {
    "id": str(uuid4()),
    "name": "Idli",
    "calories": 58,
    "protein": "2.00",
    "carbs": "12.00",
    "fat": "0.40",
    "fiber": "0.80",
    "serving_size": "1 piece (30g)",
}


def test_profile_repository_normalizes_legacy_values() -> None:
    client = FakeSupabaseClient()
    client.table("user_profiles").queue(
        [
            {
                "height": 175,
                "weight": "70.00",
                "age": 30,
                "gender": "male",
                "activity_level": "moderately_active",
                "goal": "lose_weight",
                "daily_water_target": 2500,
            }
        ]
    )

    profile = SupabaseProfileRepository(client).get_profile(uuid4())

    assert profile is not None
    assert profile.weight == 70.0
    assert profile.gender == Gender.MALE
    assert profile.activity_level == ActivityLevel.MODERATE
    assert profile.goal == Goal.LOSE
    assert profile.daily_water_target_ml == 2500


@pytest.mark.parametrize(
    ("stored", "expected"),
    [
        ("sedentary", ActivityLevel.SEDENTARY),
        ("lightly_active", ActivityLevel.LIGHT),
        ("very_active", ActivityLevel.ACTIVE),
        ("extremely_active", ActivityLevel.VERY_ACTIVE),
        ("active", ActivityLevel.ACTIVE),
    ],
)
def test_profile_repository_maps_store_activity_scale(stored, expected) -> None:
    client = FakeSupabaseClient()
    client.table("user_profiles").queue(
        [{"height": 175, "weight": 70, "age": 30, "activity_level": stored}]
    )

    profile = SupabaseProfileRepository(client).get_profile(uuid4())

    assert profile is not None
    assert profile.activity_level == expected


def test_profile_repository_missing_profile_and_targets() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_profiles")
    table.queue([])
    table.queue([{"daily_calorie_target": None, "daily_protein_target": 120}])
    repository = SupabaseProfileRepository(client)

    assert repository.get_profile(uuid4()) is None
    assert repository.get_custom_targets(uuid4()) is None


def test_profile_repository_custom_targets() -> None:
    client = FakeSupabaseClient()
    client.table("user_profiles").queue(
        [{"daily_calorie_target": 1900, "daily_protein_target": "140.5"}]
    )

    targets = SupabaseProfileRepository(client).get_custom_targets(uuid4())

    assert targets is not None
    assert targets.calories == 1900
    assert targets.protein == 140.5
    assert targets.fat == 0


def test_food_repository_parses_aliases_and_serving_size() -> None:
    client = FakeSupabaseClient()
    table = client.table("foods")
    table.queue(
        [
            IDLI_ROW,
            {"name": "Granola", "calories": 471, "protein": 10,
             "carbohydrates": 64, "total_fat": 20, "serving_size": "100g"},
            {"name": "", "calories": 10},
        ]
    )
    user_id = uuid4()

    foods = SupabaseFoodRepository(client).list_foods(user_id)

    assert [food.name for food in foods] == ["Idli", "Granola"]
    assert foods[0].reference_quantity == 30
    assert foods[0].protein == 2.0
    assert foods[1].carbs == 64
    assert foods[1].fat == 20
    assert ("or", "", f"user_id.is.null,user_id.eq.{user_id}") in table.filters


@pytest.mark.parametrize(
    ("serving_size", "expected"),
    [
        ("1 piece (30g)", 30.0),
        ("100ml", 100.0),
        ("50g dry", 50.0),
        ("1 tbsp (15ml)", 15.0),
        ("1 medium", None),
        (None, None),
    ],
)
def test_parse_serving_size(serving_size, expected) -> None:
    assert parse_serving_size(serving_size) == expected


def test_meal_repository_uses_created_at_when_same_day() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_entries")
    table.queue(
        [
            {
                "id": str(uuid4()),
                "meal_type": "breakfast",
                "quantity": "2",
                "date": "2024-05-01",
                "created_at": "2024-05-01T08:15:00+00:00",
                "foods": IDLI_ROW,
            },
            {
                "id": str(uuid4()),
                "meal_type": "supper",
                "quantity": 1,
                "serving_size": "1 plate (90g)",
                "date": "2024-05-01",
                "created_at": "2024-05-03T10:00:00+00:00",
                "foods": IDLI_ROW,
            },
            {"id": str(uuid4()), "date": "2024-05-01", "foods": None},
        ]
    )

    meals = SupabaseMealRepository(client).list_meals(
        uuid4(), date(2024, 5, 1), date(2024, 5, 1)
    )

    assert len(meals) == 2
    assert meals[0].meal_type == MealType.BREAKFAST
    assert meals[0].time_known is True
    assert meals[0].timestamp.hour == 8
    assert meals[0].food.reference_quantity == 30
    assert meals[0].quantity == 60
    assert meals[1].meal_type == MealType.OTHER
    assert meals[1].time_known is False
    assert meals[1].quantity == 90
    assert meals[1].timestamp.isoformat().startswith("2024-05-01")
    assert ("gte", "date", "2024-05-01") in table.filters
    assert table.selected == ["*, foods(*)"]


def test_meal_repository_scales_servings_to_food_nutrients() -> None:
    client = FakeSupabaseClient()
    client.table("meal_entries").queue(
        [
            {
                "id": str(uuid4()),
                "meal_type": "breakfast",
                "quantity": 2,
                "date": "2024-05-01",
                "foods": IDLI_ROW,
            },
            {
                "id": str(uuid4()),
                "meal_type": "snack",
                "quantity": "0.5",
                "date": "2024-05-01",
                "foods": {"name": "Granola", "calories": 471, "protein": 10,
                          "carbs": 64, "fat": 20, "serving_size": "100g"},
            },
        ]
    )

    meals = SupabaseMealRepository(client).list_meals(
        uuid4(), date(2024, 5, 1), date(2024, 5, 1)
    )
    result = aggregate(meals)

    assert result.by_meal_type[MealType.BREAKFAST].calories == pytest.approx(116)
    assert result.by_meal_type[MealType.SNACK].calories == pytest.approx(235.5)
    assert result.totals.protein == pytest.approx(9.0)


def test_water_repository_sums_amounts() -> None:
    client = FakeSupabaseClient()
    client.table("water_entries").queue(
        [{"amount": 250}, {"amount": 500}, {"amount": None}, {"amount": -100}]
    )

    total = SupabaseWaterRepository(client).total_for_day(uuid4(), date(2024, 5, 1))

    assert total == 750
