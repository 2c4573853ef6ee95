"""Domain models for project folders."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from culinary_studio.domain.costing import FoodCostSheet
from culinary_studio.domain.pairing import SavedPairing
from culinary_studio.domain.recipes import Recipe


class ProjectColor(StrEnum):
    ORANGE = "orange"
    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    YELLOW = "yellow"
    CYAN = "cyan"


class MemberKind(StrEnum):
    """Tables whose rows can be linked to a project."""

    RECIPES = "recipes"
    PAIRINGS = "pairings"
    FOOD_COSTS = "food_costs"


@dataclass(frozen=True)
class Project:
    """Named folder grouping recipes, pairings and cost sheets."""

    id: str
    user_id: str
    title: str
    description: str = ""
    color: ProjectColor = ProjectColor.ORANGE
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProjectMembers:
    """Items linked to one project, by kind."""

    recipes: list[Recipe] = field(default_factory=list)
    pairings: list[SavedPairing] = field(default_factory=list)
    food_costs: list[FoodCostSheet] = field(default_factory=list)


@dataclass(frozen=True)
class StudioLibrary:
    """Everything a user has saved, plus which recipes are shared."""

    projects: list[Project] = field(default_factory=list)
    recipes: list[Recipe] = field(default_factory=list)
    pairings: list[SavedPairing] = field(default_factory=list)
    food_costs: list[FoodCostSheet] = field(default_factory=list)
    shared_recipe_ids: set[str] = field(default_factory=set)
