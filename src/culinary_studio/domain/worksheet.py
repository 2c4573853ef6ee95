"""Session-local cost worksheet."""

from dataclasses import dataclass, field, replace
from uuid import uuid4

from culinary_studio.domain.catalog import find_base_ingredient
from culinary_studio.domain.costing import (
    CostIngredient,
    CostSettings,
    CostTemplate,
    CostTotals,
    compute_cost_totals,
)
from culinary_studio.domain.prices import ClipboardItem

IMPORT_HANDLING_LOSS = 5
IMPORT_CHEAPEST_FACTOR = 0.9
IMPORT_CHEAPEST_SUPPLIER = "Bulk Market"


def _row_id() -> str:
    return uuid4().hex[:9]


@dataclass
class CostWorksheet:
    """Editable ingredient rows with the settings they are costed under."""

    recipe_name: str = ""
    template: CostTemplate = CostTemplate.BASIC
    settings: CostSettings = field(default_factory=CostSettings)
    rows: list[CostIngredient] = field(default_factory=list)

    def add_row(self) -> CostIngredient:
        """Append an empty row and return it."""
        row = CostIngredient(id=_row_id())
        self.rows.append(row)
        return row

    def update_row(self, row_id: str, changes: dict[str, object]) -> CostIngredient:
        """Apply field changes to a row."""
        for index, row in enumerate(self.rows):
            if row.id == row_id:
                updated = replace(row, **changes)
                self.rows[index] = updated
                return updated
        raise KeyError(row_id)

    def remove_row(self, row_id: str) -> None:
        """Drop a row; unknown ids are ignored."""
        self.rows = [row for row in self.rows if row.id != row_id]

    def clear(self) -> None:
        """Drop every row."""
        self.rows = []

    def import_clipboard(self, items: list[ClipboardItem]) -> list[CostIngredient]:
        """Append rows built from picked price entries."""
        imported = [_row_from_clipboard(item) for item in items]
        self.rows.extend(imported)
        return imported

    def totals(self) -> CostTotals:
        """Recompute every derived figure."""
        return compute_cost_totals(self.rows, self.settings, self.template)


def _row_from_clipboard(item: ClipboardItem) -> CostIngredient:
    entry = item.entry
    base = find_base_ingredient(entry.name)
    return CostIngredient(
        id=_row_id(),
        name=entry.name,
        quantity=item.quantity,
        unit=entry.unit,
        unit_price=entry.price,
        currency=entry.currency,
        handling_loss=IMPORT_HANDLING_LOSS,
        bulk_discount=0,
        protein=base.protein if base else 0,
        carbs=base.carbs if base else 0,
        fats=base.fats if base else 0,
        calories=base.calories if base else 0,
        fiber=0,
        allergens="None",
        current_supplier=entry.supplier,
        cheapest_supplier=IMPORT_CHEAPEST_SUPPLIER,
        cheapest_price=entry.price * IMPORT_CHEAPEST_FACTOR,
    )
