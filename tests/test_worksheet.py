"""Tests for the session cost worksheet."""

import pytest

from culinary_studio.domain.costing import CostSettings, CostTemplate
from culinary_studio.domain.prices import ClipboardItem, PriceEntry
from culinary_studio.domain.worksheet import (
    IMPORT_CHEAPEST_SUPPLIER,
    CostWorksheet,
)


def _price(name: str, price: float) -> PriceEntry:
    return PriceEntry(
        id=f"pe-{name}",
        ingredient_id=name.lower(),
        name=name,
        category="Protein",
        country="Spain",
        country_code="ES",
        supplier="Mercabarna",
        unit="kg",
        price=price,
        currency="€",
        last_updated="1h ago",
        trend="up",
        trend_value="1.0%",
    )


def test_rows_can_be_added_updated_and_removed() -> None:
    worksheet = CostWorksheet()

    row = worksheet.add_row()
    updated = worksheet.update_row(row.id, {"name": "Rice", "unit_price": 2.5})

    assert updated.name == "Rice"
    assert worksheet.rows == [updated]

    worksheet.remove_row(row.id)
    assert worksheet.rows == []


def test_update_of_unknown_row_raises() -> None:
    with pytest.raises(KeyError):
        CostWorksheet().update_row("missing", {"name": "Rice"})


def test_import_uses_nutrients_of_known_ingredients() -> None:
    worksheet = CostWorksheet()

    rows = worksheet.import_clipboard(
        [
            ClipboardItem(entry=_price("Chicken Breast", 6.0), quantity=2),
            ClipboardItem(entry=_price("Dragon Fruit", 4.0)),
        ]
    )

    chicken, dragon = rows
    assert chicken.protein == 31
    assert chicken.quantity == 2
    assert chicken.handling_loss == 5
    assert chicken.cheapest_price == pytest.approx(5.4)
    assert chicken.cheapest_supplier == IMPORT_CHEAPEST_SUPPLIER
    assert dragon.protein == 0
    assert worksheet.rows == rows


def test_totals_follow_template_and_settings() -> None:
    worksheet = CostWorksheet(
        template=CostTemplate.ECONOMIC, settings=CostSettings(servings=2)
    )
    worksheet.import_clipboard([ClipboardItem(entry=_price("Rice", 3.0), quantity=2)])

    totals = worksheet.totals()

    assert totals.total_cost == pytest.approx(6.0)
    assert totals.cost_per_serving == pytest.approx(3.0)
    assert totals.total_savings == pytest.approx(0.6)
