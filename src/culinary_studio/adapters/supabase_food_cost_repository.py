"""Supabase repository for saved food cost sheets."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from culinary_studio.domain.costing import CostTemplate, FoodCostSheet
from culinary_studio.services.costing import FoodCostRepository


@dataclass
class SupabaseFoodCostRepository(FoodCostRepository):
    client: Client

    def create_sheet(self, user_id: str, payload: dict[str, object]) -> FoodCostSheet:
        response = (
            self.client.table("food_costs")
            .insert({"user_id": user_id, **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save food cost sheet")
        return _parse_sheet(response.data[0])

    def list_sheets(self, user_id: str) -> list[FoodCostSheet]:
        response = (
            self.client.table("food_costs")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_sheet(row) for row in response.data or []]

    def get_sheet(self, user_id: str, sheet_id: str) -> FoodCostSheet | None:
        response = (
            self.client.table("food_costs")
            .select("*")
            .eq("id", sheet_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_sheet(response.data[0])

    def delete_sheet(self, user_id: str, sheet_id: str) -> None:
        (
            self.client.table("food_costs")
            .delete()
            .eq("id", sheet_id)
            .eq("user_id", user_id)
            .execute()
        )


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_sheet(row: dict[str, object]) -> FoodCostSheet:
    template_raw = row.get("template")
    return FoodCostSheet(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        project_id=row.get("project_id"),
        recipe_name=str(row.get("recipe_name") or ""),
        template=(
            CostTemplate(template_raw)
            if template_raw in CostTemplate.__members__.values()
            else CostTemplate.BASIC
        ),
        total_cost=float(row.get("total_cost") or 0),
        servings=int(row.get("servings") or 1),
        cost_per_serving=float(row.get("cost_per_serving") or 0),
        ingredients=list(row.get("ingredients") or []),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
