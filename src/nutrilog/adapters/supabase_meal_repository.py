"""Supabase repository for meals and their food items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client, PostgrestAPIError

from nutrilog.domain.errors import NotFoundError, TransactionFailureError
from nutrilog.domain.meals import (
    FoodItemInput,
    FoodItemRecord,
    MealDraft,
    MealPatch,
    MealRecord,
    MealType,
)
from nutrilog.services.meals import MealRepository

MEAL_COLUMNS = (
    "id, user_id, meal_type, description, image_url, total_calories, protein, "
    "carbs, fats, fiber, meal_date, created_at, "
    "food_items(id, meal_id, food_name, quantity, unit, calories, protein, carbs, fats)"
)

# Postgres error codes raised from inside the meal transactions
NO_DATA_FOUND = "P0002"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal persistence.

    Writes that touch both ``meals`` and ``food_items`` go through database
    functions so they commit or roll back together.
    """

    client: Client

    def create_meal(
        self, user_id: UUID, draft: MealDraft, timeout_ms: int
    ) -> MealRecord:
        """Insert the meal and its items through ``create_meal_with_items``."""
        meal = {
            "user_id": str(user_id),
            "meal_type": draft.meal_type.value,
            "description": draft.description,
            "image_url": draft.image_url,
            "total_calories": draft.total_calories,
            "protein": draft.protein,
            "carbs": draft.carbs,
            "fats": draft.fats,
            "fiber": draft.fiber,
            "meal_date": draft.meal_date.isoformat() if draft.meal_date else None,
        }
        row = self._call(
            "create_meal_with_items",
            {
                "p_meal": meal,
                "p_items": [_item_payload(item) for item in draft.food_items],
                "p_timeout_ms": timeout_ms,
            },
        )
        return parse_meal(row)

    def get_meal(self, meal_id: UUID, user_id: UUID) -> MealRecord | None:
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_meal(response.data[0])

    def list_meals(  # noqa: PLR0913
        self,
        user_id: UUID,
        start: datetime | None,
        end: datetime | None,
        meal_type: MealType | None,
        offset: int,
        limit: int,
    ) -> tuple[list[MealRecord], int]:
        """Return a page of meals, newest first, with the exact match count."""
        query = (
            self.client.table("meals")
            .select(MEAL_COLUMNS, count="exact")
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("meal_date", start.isoformat())
        if end is not None:
            query = query.lte("meal_date", end.isoformat())
        if meal_type is not None:
            query = query.eq("meal_type", meal_type.value)
        response = (
            query.order("meal_date", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        meals = [parse_meal(row) for row in response.data or []]
        return meals, response.count or 0

    def list_meals_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        return list_meals_between(self.client, user_id, start, end)

    def update_meal(
        self, meal_id: UUID, user_id: UUID, patch: MealPatch, timeout_ms: int
    ) -> MealRecord:
        """Apply the patch through ``update_meal_with_items``."""
        changes = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in patch.changes.items()
        }
        row = self._call(
            "update_meal_with_items",
            {
                "p_meal_id": str(meal_id),
                "p_user_id": str(user_id),
                "p_changes": changes,
                "p_items": [_item_payload(item) for item in patch.food_items or []],
                "p_replace_items": patch.food_items is not None,
                "p_timeout_ms": timeout_ms,
            },
        )
        return parse_meal(row)

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> None:
        self.client.table("meals").delete().eq("id", str(meal_id)).eq(
            "user_id", str(user_id)
        ).execute()

    def _call(self, function: str, params: dict[str, object]) -> dict[str, object]:
        try:
            response = self.client.rpc(function, params).execute()
        except PostgrestAPIError as exc:
            if exc.code == NO_DATA_FOUND:
                raise NotFoundError("Meal not found") from exc
            raise TransactionFailureError(
                f"Meal transaction failed: {exc.message}"
            ) from exc
        if not response.data:
            raise TransactionFailureError(f"{function} returned no meal")
        return response.data


def list_meals_between(
    client: Client, user_id: UUID, start: datetime, end: datetime
) -> list[MealRecord]:
    """Return meals with ``start <= meal_date <= end``, oldest first."""
    response = (
        client.table("meals")
        .select(MEAL_COLUMNS)
        .eq("user_id", str(user_id))
        .gte("meal_date", start.isoformat())
        .lte("meal_date", end.isoformat())
        .order("meal_date", desc=False)
        .execute()
    )
    return [parse_meal(row) for row in response.data or []]


def parse_meal(row: dict[str, object]) -> MealRecord:
    items = row.get("food_items") or []
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_type=MealType(row["meal_type"]),
        description=row.get("description"),
        image_url=row.get("image_url"),
        total_calories=int(row.get("total_calories") or 0),
        protein=_optional_float(row.get("protein")),
        carbs=_optional_float(row.get("carbs")),
        fats=_optional_float(row.get("fats")),
        fiber=_optional_float(row.get("fiber")),
        meal_date=datetime.fromisoformat(str(row["meal_date"])),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        food_items=[_parse_item(item) for item in items],
    )


def _parse_item(row: dict[str, object]) -> FoodItemRecord:
    return FoodItemRecord(
        id=UUID(str(row["id"])),
        meal_id=UUID(str(row["meal_id"])),
        food_name=str(row.get("food_name", "")),
        quantity=float(row.get("quantity") or 0),
        unit=str(row.get("unit", "")),
        calories=int(row.get("calories") or 0),
        protein=_optional_float(row.get("protein")),
        carbs=_optional_float(row.get("carbs")),
        fats=_optional_float(row.get("fats")),
    )


def _item_payload(item: FoodItemInput) -> dict[str, object]:
    return {
        "food_name": item.food_name,
        "quantity": item.quantity,
        "unit": item.unit,
        "calories": item.calories,
        "protein": item.protein,
        "carbs": item.carbs,
        "fats": item.fats,
    }


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
