"""Project folders and the user's library overview."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from supabase import PostgrestAPIError

from culinary_studio.domain.projects import (
    MemberKind,
    Project,
    ProjectColor,
    ProjectMembers,
    StudioLibrary,
)
from culinary_studio.errors import InvalidRequestError
from culinary_studio.services.costing import FoodCostRepository
from culinary_studio.services.pairings import PairingRepository
from culinary_studio.services.recipes import RecipeRepository
from culinary_studio.services.social import SocialRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProjectRepository(Protocol):
    """Persistence interface for projects and their links."""

    def create_project(self, payload: dict[str, object]) -> Project:
        """Insert a project and return it."""

    def list_projects(self, user_id: str) -> list[Project]:
        """Return the user's projects, most recently updated first."""

    def delete_project(self, user_id: str, project_id: str) -> None:
        """Delete one of the user's projects."""

    def set_project(
        self, kind: MemberKind, user_id: str, item_id: str, project_id: str | None
    ) -> None:
        """Set or clear the project of one item."""

    def unlink_all(self, kind: MemberKind, user_id: str, project_id: str) -> None:
        """Clear the project of every item of a kind linked to it."""


@dataclass
class ProjectService:
    """Application service for the projects page."""

    repository: ProjectRepository
    recipe_repository: RecipeRepository
    pairing_repository: PairingRepository
    food_cost_repository: FoodCostRepository
    social_repository: SocialRepository

    def library(self, user_id: str) -> StudioLibrary:
        """Load everything the user saved; each list degrades on its own."""
        return StudioLibrary(
            projects=_or_empty(
                "projects", lambda: self.repository.list_projects(user_id), []
            ),
            recipes=_or_empty(
                "recipes", lambda: self.recipe_repository.list_recipes(user_id), []
            ),
            pairings=_or_empty(
                "pairings", lambda: self.pairing_repository.list_pairings(user_id), []
            ),
            food_costs=_or_empty(
                "food costs", lambda: self.food_cost_repository.list_sheets(user_id), []
            ),
            shared_recipe_ids=_or_empty(
                "shared recipes",
                lambda: self.social_repository.shared_recipe_ids(user_id),
                set(),
            ),
        )

    def create(
        self,
        user_id: str,
        title: str,
        description: str = "",
        color: ProjectColor = ProjectColor.ORANGE,
    ) -> Project:
        if not title.strip():
            raise InvalidRequestError("Project title is required")
        return self.repository.create_project(
            {
                "user_id": user_id,
                "title": title.strip(),
                "description": description,
                "color": color.value,
            }
        )

    def delete(self, user_id: str, project_id: str) -> None:
        """Unlink every member, then delete the project itself."""
        for kind in MemberKind:
            self.repository.unlink_all(kind, user_id, project_id)
        self.repository.delete_project(user_id, project_id)

    def link(
        self, user_id: str, project_id: str, kind: MemberKind, item_id: str
    ) -> None:
        self.repository.set_project(kind, user_id, item_id, project_id)

    def unlink(self, user_id: str, kind: MemberKind, item_id: str) -> None:
        self.repository.set_project(kind, user_id, item_id, None)

    def members(self, user_id: str, project_id: str) -> ProjectMembers:
        """Return the items linked to a project."""
        library = self.library(user_id)
        return ProjectMembers(
            recipes=[item for item in library.recipes if item.project_id == project_id],
            pairings=[
                item for item in library.pairings if item.project_id == project_id
            ],
            food_costs=[
                item for item in library.food_costs if item.project_id == project_id
            ],
        )


def _or_empty(label: str, load: Callable[[], T], empty: T) -> T:
    try:
        return load()
    except (PostgrestAPIError, RuntimeError):
        logger.exception("Failed to load %s", label)
        return empty
