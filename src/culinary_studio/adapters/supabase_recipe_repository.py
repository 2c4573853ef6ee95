"""Supabase repository for recipes."""

from dataclasses import dataclass

from supabase import Client

from culinary_studio.domain.recipes import Recipe
from culinary_studio.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe repository; every query is owner scoped."""

    client: Client

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        response = self.client.table("recipes").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return Recipe.from_record(response.data[0])

    def update_recipe(
        self, user_id: str, recipe_id: str, payload: dict[str, object]
    ) -> Recipe:
        response = (
            self.client.table("recipes")
            .update(payload)
            .eq("id", recipe_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update recipe")
        return Recipe.from_record(response.data[0])

    def get_recipe(self, user_id: str, recipe_id: str) -> Recipe | None:
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", recipe_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return Recipe.from_record(response.data[0])

    def list_recipes(self, user_id: str) -> list[Recipe]:
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .execute()
        )
        return [Recipe.from_record(row) for row in response.data or []]

    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        (
            self.client.table("recipes")
            .delete()
            .eq("id", recipe_id)
            .eq("user_id", user_id)
            .execute()
        )
