"""Cost sheet templates and the cost aggregation used by every template."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

BULK_UNITS = frozenset({"kg", "L"})
FINE_UNITS = frozenset({"g", "ml"})
NUTRIENT_BASIS_FACTOR = 10
FALLBACK_PRICE_MULTIPLIER = 3
FULL_PERCENT = 100


class CostTemplate(StrEnum):
    """Cost sheet layouts sharing one aggregation."""

    BASIC = "BASIC"
    RESTAURANT = "RESTAURANT"
    NUTRITIONAL = "NUTRITIONAL"
    ECONOMIC = "ECONOMIC"


class PricingStrategy(StrEnum):
    """Menu price strategy of the economic template."""

    COST_MARGIN = "cost-margin"
    MARKET = "market"


@dataclass(frozen=True)
class TemplateCapabilities:
    """Which optional row inputs and derived figures a template exposes."""

    editable_fields: frozenset[str]
    surfaced_totals: frozenset[str]
    applies_discount: bool = False
    offers_optimization: bool = False


_BASE_FIELDS = frozenset({"name", "quantity", "unit", "unit_price"})

TEMPLATE_CAPABILITIES: dict[CostTemplate, TemplateCapabilities] = {
    CostTemplate.BASIC: TemplateCapabilities(
        editable_fields=_BASE_FIELDS,
        surfaced_totals=frozenset(
            {"total_cost", "cost_per_serving", "cooked_net_weight"}
        ),
    ),
    CostTemplate.RESTAURANT: TemplateCapabilities(
        editable_fields=_BASE_FIELDS | {"handling_loss"},
        surfaced_totals=frozenset(
            {
                "total_cost",
                "cost_per_serving",
                "total_gross_weight",
                "total_net_weight",
                "cooked_net_weight",
            }
        ),
    ),
    CostTemplate.NUTRITIONAL: TemplateCapabilities(
        editable_fields=_BASE_FIELDS
        | {"protein", "carbs", "fats", "calories", "fiber", "allergens"},
        surfaced_totals=frozenset(
            {"total_cost", "cost_per_serving", "macros", "macros_per_serving"}
        ),
        offers_optimization=True,
    ),
    CostTemplate.ECONOMIC: TemplateCapabilities(
        editable_fields=_BASE_FIELDS | {"bulk_discount", "current_supplier"},
        surfaced_totals=frozenset(
            {
                "total_cost",
                "cost_per_serving",
                "suggested_price",
                "profit_per_serving",
                "savings",
            }
        ),
        applies_discount=True,
        offers_optimization=True,
    ),
}


@dataclass(frozen=True)
class CostIngredient:
    """Editable ingredient row of a cost worksheet."""

    id: str
    name: str = ""
    quantity: float = 1
    unit: str = "kg"
    unit_price: float = 0
    currency: str = "€"
    handling_loss: float | None = None
    bulk_discount: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    calories: float | None = None
    fiber: float | None = None
    allergens: str | None = None
    current_supplier: str | None = None
    cheapest_supplier: str | None = None
    cheapest_price: float | None = None


@dataclass(frozen=True)
class CostSettings:
    """Scalar settings of a cost worksheet."""

    servings: int = 1
    cooking_loss: float = 20
    target_margin: float = 30
    pricing_strategy: str = PricingStrategy.COST_MARGIN
    classification: str = "Main"
    target_protein: str = ""
    target_calories: str = ""


@dataclass(frozen=True)
class MacroTotals:
    """Macro-nutrient sums."""

    protein: float = 0
    carbs: float = 0
    fats: float = 0
    calories: float = 0
    fiber: float = 0

    def divided(self, divisor: float) -> "MacroTotals":
        """Return the totals split into ``divisor`` equal parts."""
        return MacroTotals(
            protein=self.protein / divisor,
            carbs=self.carbs / divisor,
            fats=self.fats / divisor,
            calories=self.calories / divisor,
            fiber=self.fiber / divisor,
        )


@dataclass(frozen=True)
class CostLine:
    """A row with its derived figures."""

    ingredient: CostIngredient
    gross_cost: float
    net_weight: float
    final_cost: float
    savings: float
    cost_share: float = 0


@dataclass(frozen=True)
class CostTotals:
    """Aggregated result of a cost worksheet."""

    template: CostTemplate
    lines: list[CostLine]
    total_cost: float
    total_gross_weight: float
    total_net_weight: float
    cooked_net_weight: float
    cost_per_serving: float
    suggested_price: float | None
    profit_per_serving: float | None
    total_savings: float
    macros: MacroTotals
    macros_per_serving: MacroTotals
    margin_undefined: bool = False
    nutrient_basis_warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FoodCostSheet:
    """Persisted snapshot of a cost worksheet."""

    id: str
    user_id: str
    project_id: str | None
    recipe_name: str
    template: CostTemplate
    total_cost: float
    servings: int
    cost_per_serving: float
    ingredients: list[dict[str, object]]
    created_at: datetime | None
    updated_at: datetime | None


def compute_cost_totals(
    ingredients: list[CostIngredient],
    settings: CostSettings,
    template: CostTemplate = CostTemplate.BASIC,
) -> CostTotals:
    """Compute per-row and aggregate figures for a worksheet.

    Percentages are used as given, so values outside 0-100 produce negative
    weights or costs. Nutrient values are read per 100 g or ml; rows whose
    unit is neither a bulk nor a fine mass/volume unit are scaled like fine
    units and reported in ``nutrient_basis_warnings``.
    """
    capabilities = TEMPLATE_CAPABILITIES[template]
    total_cost = 0.0
    total_gross_weight = 0.0
    total_net_weight = 0.0
    total_savings = 0.0
    protein = carbs = fats = calories = fiber = 0.0
    warnings: list[str] = []
    drafts: list[CostLine] = []

    for ingredient in ingredients:
        quantity = ingredient.quantity or 0
        price = ingredient.unit_price or 0
        gross_cost = quantity * price
        net_weight = quantity * (1 - (ingredient.handling_loss or 0) / 100)
        discounted = gross_cost * (1 - (ingredient.bulk_discount or 0) / 100)
        final_cost = discounted if capabilities.applies_discount else gross_cost
        cheapest = ingredient.cheapest_price or ingredient.unit_price
        savings = (ingredient.unit_price - cheapest) * quantity

        total_cost += final_cost
        total_gross_weight += quantity
        total_net_weight += net_weight
        total_savings += savings

        scale = nutrient_scale(quantity, ingredient.unit)
        if ingredient.unit not in BULK_UNITS | FINE_UNITS:
            warnings.append(ingredient.id)
        protein += (ingredient.protein or 0) * scale
        carbs += (ingredient.carbs or 0) * scale
        fats += (ingredient.fats or 0) * scale
        calories += (ingredient.calories or 0) * scale
        fiber += (ingredient.fiber or 0) * scale

        drafts.append(
            CostLine(
                ingredient=ingredient,
                gross_cost=gross_cost,
                net_weight=net_weight,
                final_cost=final_cost,
                savings=savings,
            )
        )

    share_base = total_cost or 1
    lines = [
        CostLine(
            ingredient=line.ingredient,
            gross_cost=line.gross_cost,
            net_weight=line.net_weight,
            final_cost=line.final_cost,
            savings=line.savings,
            cost_share=line.final_cost / share_base * 100,
        )
        for line in drafts
    ]

    servings = settings.servings or 1
    cost_per_serving = total_cost / servings
    suggested_price = suggest_menu_price(
        cost_per_serving, settings.target_margin, settings.pricing_strategy
    )
    macros = MacroTotals(
        protein=protein, carbs=carbs, fats=fats, calories=calories, fiber=fiber
    )
    return CostTotals(
        template=template,
        lines=lines,
        total_cost=total_cost,
        total_gross_weight=total_gross_weight,
        total_net_weight=total_net_weight,
        cooked_net_weight=total_net_weight * (1 - settings.cooking_loss / 100),
        cost_per_serving=cost_per_serving,
        suggested_price=suggested_price,
        profit_per_serving=(
            suggested_price - cost_per_serving if suggested_price is not None else None
        ),
        total_savings=total_savings,
        macros=macros,
        macros_per_serving=macros.divided(servings),
        margin_undefined=suggested_price is None,
        nutrient_basis_warnings=warnings,
    )


def nutrient_scale(quantity: float, unit: str) -> float:
    """Return the multiplier applied to per-100 nutrient values."""
    multiplier = quantity if unit in BULK_UNITS else quantity / 1000
    return multiplier * NUTRIENT_BASIS_FACTOR


def suggest_menu_price(
    cost_per_serving: float, target_margin: float, pricing_strategy: str
) -> float | None:
    """Return the suggested menu price, or None when the margin is 100%."""
    if pricing_strategy != PricingStrategy.COST_MARGIN:
        return cost_per_serving * FALLBACK_PRICE_MULTIPLIER
    if target_margin == FULL_PERCENT:
        return None
    return cost_per_serving / (1 - target_margin / 100)
