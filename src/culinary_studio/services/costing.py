"""Cost sheet calculation, persistence and optimization."""

from dataclasses import asdict, dataclass
from typing import Protocol

from culinary_studio.domain.costing import (
    CostIngredient,
    CostSettings,
    CostTemplate,
    CostTotals,
    FoodCostSheet,
    compute_cost_totals,
)
from culinary_studio.domain.pairing import OptimizationSuggestion
from culinary_studio.domain.worksheet import CostWorksheet
from culinary_studio.errors import InvalidRequestError, NotFoundError
from culinary_studio.services.assistant import AssistantService


class FoodCostRepository(Protocol):
    """Persistence interface for saved cost sheets."""

    def create_sheet(self, user_id: str, payload: dict[str, object]) -> FoodCostSheet:
        """Insert a sheet and return it."""

    def list_sheets(self, user_id: str) -> list[FoodCostSheet]:
        """Return the user's sheets, newest first."""

    def get_sheet(self, user_id: str, sheet_id: str) -> FoodCostSheet | None:
        """Return one of the user's sheets, if present."""

    def delete_sheet(self, user_id: str, sheet_id: str) -> None:
        """Delete one of the user's sheets."""


@dataclass
class CostingService:
    """Application service for food cost sheets."""

    repository: FoodCostRepository
    assistant: AssistantService

    def calculate(
        self,
        ingredients: list[CostIngredient],
        settings: CostSettings,
        template: CostTemplate,
    ) -> CostTotals:
        """Compute the figures of an unsaved sheet."""
        return compute_cost_totals(ingredients, settings, template)

    def save_worksheet(
        self, user_id: str, worksheet: CostWorksheet, project_id: str | None = None
    ) -> FoodCostSheet:
        """Snapshot a worksheet into the saved sheets."""
        recipe_name = worksheet.recipe_name.strip()
        if not recipe_name:
            raise InvalidRequestError("Recipe name is required")
        totals = worksheet.totals()
        payload: dict[str, object] = {
            "recipe_name": recipe_name,
            "template": worksheet.template.value,
            "total_cost": totals.total_cost,
            "servings": worksheet.settings.servings,
            "cost_per_serving": totals.cost_per_serving,
            "ingredients": [asdict(row) for row in worksheet.rows],
        }
        if project_id:
            payload["project_id"] = project_id
        return self.repository.create_sheet(user_id, payload)

    def list_sheets(self, user_id: str) -> list[FoodCostSheet]:
        return self.repository.list_sheets(user_id)

    def get_sheet(self, user_id: str, sheet_id: str) -> FoodCostSheet:
        sheet = self.repository.get_sheet(user_id, sheet_id)
        if sheet is None:
            raise NotFoundError(f"Cost sheet {sheet_id} not found")
        return sheet

    def delete_sheet(self, user_id: str, sheet_id: str) -> None:
        self.repository.delete_sheet(user_id, sheet_id)

    async def optimize(
        self, ingredients: list[CostIngredient], template: CostTemplate
    ) -> list[OptimizationSuggestion]:
        """Ask the assistant for improvements matching the template."""
        if not ingredients:
            return []
        return await self.assistant.optimize(ingredients, template)
