"""Recipe records and the persisted recipe shape."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

MINUTES_PER_HOUR = 60
DEFAULT_SHARE_IMAGE = (
    "https://images.unsplash.com/photo-1504674900247-0877df9cc836"
    "?auto=format&fit=crop&q=80&w=1600"
)


class Difficulty(StrEnum):
    """Difficulty of a recipe."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ChefNoteType(StrEnum):
    """Vocabulary of chef notes."""

    TIP = "tip"
    SUGGESTION = "suggestion"
    ALTERNATIVE = "alternative"
    SUBSTITUTE = "substitute"
    VARIATION = "variation"


class AttachmentType(StrEnum):
    """Entities a recipe can reference."""

    PAIRING = "pairing"
    FOOD_COST = "foodCost"
    CONTEXT = "context"


class PrepTimeUnit(StrEnum):
    MINS = "mins"
    HOURS = "hours"


class IngredientItem(BaseModel):
    name: str = ""
    quantity: str = ""
    unit: str = ""


class IngredientSubdivision(BaseModel):
    """Named group of ingredient items."""

    title: str = ""
    items: list[IngredientItem] = Field(default_factory=list)


class ChefNote(BaseModel):
    type: ChefNoteType = ChefNoteType.TIP
    content: str = ""


class Attachment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: AttachmentType
    item_id: str = Field(alias="itemId")
    item_name: str = Field(alias="itemName")


class PrepTime(BaseModel):
    """Prep time as edited: a value and its unit."""

    value: int = 45
    unit: PrepTimeUnit = PrepTimeUnit.MINS

    def to_minutes(self) -> int:
        """Return the prep time in minutes."""
        if self.unit == PrepTimeUnit.HOURS:
            return self.value * MINUTES_PER_HOUR
        return self.value

    @classmethod
    def from_minutes(cls, minutes: int) -> "PrepTime":
        """Show whole hours as hours, anything else in minutes."""
        if minutes >= MINUTES_PER_HOUR and minutes % MINUTES_PER_HOUR == 0:
            return cls(value=minutes // MINUTES_PER_HOUR, unit=PrepTimeUnit.HOURS)
        return cls(value=minutes, unit=PrepTimeUnit.MINS)


class RecipeDraft(BaseModel):
    """Recipe contents as edited by its owner."""

    title: str = ""
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    prep_time: PrepTime = Field(default_factory=PrepTime)
    servings: int = 4
    ingredients: list[IngredientSubdivision] = Field(default_factory=list)
    prep_steps: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    chef_notes: list[ChefNote] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)

    @classmethod
    def blank(cls) -> "RecipeDraft":
        """Return the starting point of a new recipe."""
        return cls(
            ingredients=[
                IngredientSubdivision(
                    title="Main Ingredients", items=[IngredientItem(unit="kg")]
                )
            ],
            prep_steps=[""],
        )

    def to_record(self) -> dict[str, object]:
        """Return the persisted JSON shape, with prep time in minutes."""
        return {
            "title": self.title,
            "name": self.title,
            "description": self.description,
            "difficulty": self.difficulty.value,
            "prep_time": self.prep_time.to_minutes(),
            "servings": self.servings,
            "ingredients": [item.model_dump() for item in self.ingredients],
            "prep_steps": list(self.prep_steps),
            "images": list(self.images),
            "chef_notes": [note.model_dump(mode="json") for note in self.chef_notes],
            "attachments": [
                item.model_dump(mode="json", by_alias=True)
                for item in self.attachments
            ],
        }


class Recipe(BaseModel):
    """Stored recipe."""

    id: str
    user_id: str
    project_id: str | None = None
    is_draft: bool = True
    draft: RecipeDraft
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def title(self) -> str:
        return self.draft.title

    @classmethod
    def from_record(cls, row: dict[str, object]) -> "Recipe":
        """Build a recipe from a stored row."""
        prep_minutes = row.get("prep_time")
        draft = RecipeDraft(
            title=str(row.get("title") or row.get("name") or ""),
            description=str(row.get("description") or ""),
            difficulty=row.get("difficulty") or Difficulty.BEGINNER,
            prep_time=(
                PrepTime.from_minutes(int(prep_minutes))
                if prep_minutes is not None
                else PrepTime()
            ),
            servings=row.get("servings") or 4,
            ingredients=row.get("ingredients") or [],
            prep_steps=row.get("prep_steps") or [],
            images=row.get("images") or [],
            chef_notes=row.get("chef_notes") or [],
            attachments=row.get("attachments") or [],
        )
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            project_id=row.get("project_id"),
            is_draft=bool(row.get("is_draft", True)),
            draft=draft,
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
