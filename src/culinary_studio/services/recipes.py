"""Recipe editing, images and community sharing."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from culinary_studio.domain.recipes import DEFAULT_SHARE_IMAGE, Recipe, RecipeDraft
from culinary_studio.errors import InvalidRequestError, NotFoundError
from culinary_studio.services.social import SocialRepository
from culinary_studio.services.storage import (
    FileStorage,
    content_type_for,
    recipe_image_path,
)

logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        """Insert a recipe and return it."""

    def update_recipe(
        self, user_id: str, recipe_id: str, payload: dict[str, object]
    ) -> Recipe:
        """Update one of the user's recipes and return it."""

    def get_recipe(self, user_id: str, recipe_id: str) -> Recipe | None:
        """Return one of the user's recipes, if present."""

    def list_recipes(self, user_id: str) -> list[Recipe]:
        """Return the user's recipes, most recently updated first."""

    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        """Delete one of the user's recipes."""


@dataclass
class RecipeService:
    """Application service for the recipe editor."""

    repository: RecipeRepository
    social_repository: SocialRepository
    storage: FileStorage

    def new_draft(self) -> RecipeDraft:
        return RecipeDraft.blank()

    def list_recipes(self, user_id: str) -> list[Recipe]:
        return self.repository.list_recipes(user_id)

    def get_recipe(self, user_id: str, recipe_id: str) -> Recipe:
        recipe = self.repository.get_recipe(user_id, recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    def save(
        self, user_id: str, draft: RecipeDraft, recipe_id: str | None = None
    ) -> Recipe:
        """Insert a new recipe or update the owner's existing one."""
        if not draft.title.strip():
            raise InvalidRequestError("Recipe title is required")
        payload = {
            **draft.to_record(),
            "is_draft": True,
            "user_id": user_id,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        if recipe_id:
            return self.repository.update_recipe(user_id, recipe_id, payload)
        return self.repository.create_recipe(payload)

    def delete(self, user_id: str, recipe_id: str) -> None:
        self.repository.delete_recipe(user_id, recipe_id)

    def upload_image(
        self, user_id: str, recipe_id: str, filename: str, content: bytes
    ) -> str:
        """Store an image and append its public URL to the recipe."""
        recipe = self.get_recipe(user_id, recipe_id)
        path = recipe_image_path(user_id, filename)
        self.storage.upload(path, content, content_type_for(filename))
        url = self.storage.public_url(path)
        images = [*recipe.draft.images, url]
        self.repository.update_recipe(
            user_id,
            recipe_id,
            {"images": images, "updated_at": datetime.now(tz=UTC).isoformat()},
        )
        return url

    def is_shared(self, user_id: str, recipe_id: str) -> bool:
        return recipe_id in self.social_repository.shared_recipe_ids(user_id)

    def set_shared(
        self,
        user_id: str,
        recipe_id: str,
        shared: bool,
        draft: RecipeDraft | None = None,
    ) -> Recipe:
        """Publish or unpublish a recipe.

        Publishing saves ``draft`` first when given, then inserts the post.
        The steps are independent writes, so a failed post insert leaves the
        saved recipe in place.
        """
        if draft is not None:
            recipe = self.save(user_id, draft, recipe_id)
        else:
            recipe = self.get_recipe(user_id, recipe_id)
        self.social_repository.delete_recipe_posts(user_id, recipe.id)
        if shared:
            self.social_repository.create_post(
                {
                    "user_id": user_id,
                    "recipe_id": recipe.id,
                    "title": recipe.title,
                    "description": recipe.draft.description,
                    "image_url": (
                        recipe.draft.images[0]
                        if recipe.draft.images
                        else DEFAULT_SHARE_IMAGE
                    ),
                    "difficulty": recipe.draft.difficulty.value,
                }
            )
            logger.info("Recipe %s shared by %s", recipe.id, user_id)
        return recipe
