"""Models for AI pairing analysis and cost optimization results."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MIN_PAIRING_INGREDIENTS = 2


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuggestedDish(_CamelModel):
    name: str
    difficulty: str


class PairingAnalysis(_CamelModel):
    """Structured output of a pairing analysis, stored verbatim."""

    compatibility_score: float = Field(ge=0, le=100)
    flavor_profile: list[str]
    detailed_explanation: str
    suggested_dishes: list[SuggestedDish]
    complexity: str | None = None
    intensity: str | None = None
    recommended_ratio: str | None = None
    sources: list[str] | None = None
    physicochemical_info: str | None = None
    complementary_ingredients: list[str] | None = None
    tips: list[str] | None = None
    things_to_avoid: list[str] | None = None
    historical_context: str | None = None


class OptimizationKind(StrEnum):
    NUTRITIONAL = "nutritional"
    ECONOMIC = "economic"


class OptimizationSuggestion(_CamelModel):
    """One AI suggestion for improving a cost sheet."""

    title: str
    current: str
    recommendation: str
    impact: str
    type: OptimizationKind = OptimizationKind.ECONOMIC


@dataclass(frozen=True)
class SavedPairing:
    """Stored pairing analysis."""

    id: str
    user_id: str
    project_id: str | None
    title: str
    ingredients: list[str]
    analysis: dict[str, object]
    created_at: datetime | None = None

    @property
    def score(self) -> float | None:
        value = self.analysis.get("compatibilityScore")
        return float(value) if isinstance(value, int | float) else None


def pairing_title(ingredients: list[str], name: str | None = None) -> str:
    """Return the display title of a pairing."""
    return name.strip() if name and name.strip() else " + ".join(ingredients)


def distinct_ingredients(ingredients: list[str]) -> list[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for item in ingredients:
        cleaned = item.strip()
        if cleaned and cleaned.lower() not in {key.lower() for key in seen}:
            seen[cleaned] = None
    return list(seen)
