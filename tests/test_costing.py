"""Tests for the cost sheet aggregation."""

import math
import random

import pytest

from culinary_studio.domain.costing import (
    TEMPLATE_CAPABILITIES,
    CostIngredient,
    CostSettings,
    CostTemplate,
    PricingStrategy,
    compute_cost_totals,
    nutrient_scale,
    suggest_menu_price,
)


def _rows() -> list[CostIngredient]:
    return [
        CostIngredient(id="a", name="Rice", quantity=2, unit="kg", unit_price=5.0),
        CostIngredient(id="b", name="Beef", quantity=1, unit="kg", unit_price=10.0),
    ]


def test_basic_sheet_totals() -> None:
    totals = compute_cost_totals(_rows(), CostSettings(servings=4))

    assert totals.total_cost == pytest.approx(20.0)
    assert totals.cost_per_serving == pytest.approx(5.0)
    assert totals.total_gross_weight == pytest.approx(3.0)
    assert [line.cost_share for line in totals.lines] == pytest.approx([50.0, 50.0])


def test_zero_servings_counts_as_one() -> None:
    totals = compute_cost_totals(_rows(), CostSettings(servings=0))

    assert totals.cost_per_serving == pytest.approx(totals.total_cost)


def test_empty_sheet_has_zero_figures() -> None:
    totals = compute_cost_totals([], CostSettings())

    assert totals.total_cost == 0
    assert totals.lines == []
    assert totals.cost_per_serving == 0


def test_handling_and_cooking_loss_reduce_weight() -> None:
    rows = [CostIngredient(id="a", quantity=10, unit="kg", handling_loss=10)]

    totals = compute_cost_totals(
        rows, CostSettings(cooking_loss=50), CostTemplate.RESTAURANT
    )

    assert totals.total_net_weight == pytest.approx(9.0)
    assert totals.cooked_net_weight == pytest.approx(4.5)


def test_bulk_discount_applies_only_to_economic_template() -> None:
    rows = [
        CostIngredient(id="a", quantity=2, unit="kg", unit_price=10, bulk_discount=25)
    ]

    basic = compute_cost_totals(rows, CostSettings(), CostTemplate.BASIC)
    economic = compute_cost_totals(rows, CostSettings(), CostTemplate.ECONOMIC)

    assert basic.total_cost == pytest.approx(20.0)
    assert economic.total_cost == pytest.approx(15.0)


def test_savings_against_cheapest_price() -> None:
    rows = [
        CostIngredient(
            id="a", quantity=3, unit="kg", unit_price=4.0, cheapest_price=3.0
        ),
        CostIngredient(id="b", quantity=1, unit="kg", unit_price=2.0),
    ]

    totals = compute_cost_totals(rows, CostSettings(), CostTemplate.ECONOMIC)

    assert totals.total_savings == pytest.approx(3.0)


def test_margin_of_one_hundred_percent_is_undefined() -> None:
    totals = compute_cost_totals(_rows(), CostSettings(target_margin=100))

    assert totals.suggested_price is None
    assert totals.profit_per_serving is None
    assert totals.margin_undefined is True


def test_suggested_price_strategies() -> None:
    assert suggest_menu_price(7.0, 30, PricingStrategy.COST_MARGIN) == pytest.approx(
        10.0
    )
    assert suggest_menu_price(5.0, 30, PricingStrategy.MARKET) == pytest.approx(15.0)


def test_nutrients_scale_per_unit_family() -> None:
    assert nutrient_scale(2, "kg") == pytest.approx(20.0)
    assert nutrient_scale(500, "g") == pytest.approx(5.0)


def test_unknown_units_are_flagged_not_rescaled() -> None:
    rows = [
        CostIngredient(id="eggs", quantity=12, unit="doz", protein=13),
        CostIngredient(id="milk", quantity=1, unit="L", protein=3.2),
    ]

    totals = compute_cost_totals(rows, CostSettings(), CostTemplate.NUTRITIONAL)

    assert totals.nutrient_basis_warnings == ["eggs"]
    assert totals.macros.protein == pytest.approx(13 * 0.12 + 32)


def test_macros_per_serving_divide_by_servings() -> None:
    rows = [CostIngredient(id="a", quantity=1, unit="kg", calories=100)]

    totals = compute_cost_totals(rows, CostSettings(servings=4))

    assert totals.macros.calories == pytest.approx(1000)
    assert totals.macros_per_serving.calories == pytest.approx(250)


def test_templates_share_the_same_cost_arithmetic() -> None:
    results = {
        template: compute_cost_totals(_rows(), CostSettings(servings=4), template)
        for template in CostTemplate
    }

    assert {round(item.total_cost, 2) for item in results.values()} == {20.0}
    assert TEMPLATE_CAPABILITIES[CostTemplate.ECONOMIC].offers_optimization
    assert not TEMPLATE_CAPABILITIES[CostTemplate.BASIC].offers_optimization


SEEDS = [3, 17, 2026, 90210]


def _random_rows(rng: random.Random) -> list[CostIngredient]:
    rows = []
    for index in range(rng.randint(0, 12)):
        rows.append(
            CostIngredient(
                id=f"row-{index}",
                name=f"Item {index}",
                quantity=round(rng.uniform(0, 25), 3),
                unit=rng.choice(["kg", "L", "g", "ml"]),
                unit_price=round(rng.uniform(0, 60), 2),
                handling_loss=rng.choice([None, 0, 100, round(rng.uniform(0, 100), 1)]),
                bulk_discount=rng.choice([None, 0, round(rng.uniform(0, 100), 1)]),
            )
        )
    return rows


@pytest.mark.parametrize("seed", SEEDS)
def test_economic_lines_apply_their_discount(seed: int) -> None:
    rows = _random_rows(random.Random(seed))

    economic = compute_cost_totals(rows, CostSettings(), CostTemplate.ECONOMIC)
    basic = compute_cost_totals(rows, CostSettings(), CostTemplate.BASIC)

    for line in economic.lines:
        discount = line.ingredient.bulk_discount or 0
        assert line.final_cost == pytest.approx(line.gross_cost * (1 - discount / 100))
        if discount == 0:
            assert line.final_cost == line.gross_cost
    assert [line.final_cost for line in basic.lines] == [
        line.gross_cost for line in basic.lines
    ]


@pytest.mark.parametrize("template", list(CostTemplate))
@pytest.mark.parametrize("seed", SEEDS)
def test_losses_never_add_weight(seed: int, template: CostTemplate) -> None:
    rng = random.Random(seed)
    rows = _random_rows(rng)
    settings = CostSettings(cooking_loss=rng.uniform(0, 100))

    totals = compute_cost_totals(rows, settings, template)

    for line in totals.lines:
        assert line.net_weight <= line.ingredient.quantity
    assert totals.total_net_weight <= totals.total_gross_weight + 1e-9
    assert totals.cooked_net_weight <= totals.total_net_weight + 1e-9


@pytest.mark.parametrize("template", list(CostTemplate))
@pytest.mark.parametrize("seed", SEEDS)
def test_total_is_the_sum_of_line_costs(seed: int, template: CostTemplate) -> None:
    totals = compute_cost_totals(
        _random_rows(random.Random(seed)), CostSettings(servings=4), template
    )

    assert totals.total_cost == pytest.approx(
        math.fsum(line.final_cost for line in totals.lines)
    )
    assert totals.cost_per_serving == pytest.approx(totals.total_cost / 4)
    if totals.total_cost:
        assert math.fsum(line.cost_share for line in totals.lines) == pytest.approx(100)
