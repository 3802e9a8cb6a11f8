"""
Tests for the costing step of the ARR engine.

Tests cover:
- Cake example totals and difference
- Per-line price per unit, original and adjusted cost
- Totals equal the sum of the displayed line costs
- Missing pricing (strict and allow_unpriced)
- Invalid pricing data
- Accepted pricing sources
"""

from decimal import Decimal

import pytest

from src.services.arr import (
    IngredientPricing,
    RecipeIngredientInput,
    RecipeInput,
    calculate,
    compute_costs,
    compute_scaling,
    quantize5,
    round5,
)
from src.services.exceptions import (
    InvalidIngredientDataError,
    MissingPricingDataError,
)


def _recipe(*lines):
    return RecipeInput(recipe_id=1, name="Test", ingredients=lines)


def _line(ingredient_id, quantity, unit_price=None, base_amount=None):
    return RecipeIngredientInput(
        ingredient_id=ingredient_id,
        name=f"Ingredient {ingredient_id}",
        measure_unit="g",
        quantity=quantity,
        unit_price=unit_price,
        base_amount=base_amount,
    )


class TestCakeCosts:
    """The Cake scenario end to end."""

    def test_totals(self, cake_input):
        arr_result = compute_scaling(cake_input, 1, 750)
        result = compute_costs(arr_result, cake_input.pricing())

        assert result.original_total_cost == 6600.0
        assert result.adjusted_total_cost == 9900.0
        assert result.cost_difference == 3300.0
        assert result.is_partial is False
        assert result.unpriced_ingredient_ids == ()

    def test_line_items(self, cake_input):
        arr_result = compute_scaling(cake_input, 1, 750)
        result = compute_costs(arr_result, cake_input.pricing())

        flour, sugar = result.ingredient_costs
        assert flour.is_base is True
        assert flour.price_per_unit == 10.0
        assert flour.original_cost == 5000.0
        assert flour.adjusted_cost == 7500.0

        assert sugar.is_base is False
        assert sugar.price_per_unit == 8.0
        assert sugar.original_cost == 1600.0
        assert sugar.adjusted_cost == 2400.0

    def test_base_line_listed_first(self, cake_input):
        """The base ingredient leads the breakdown even when it is not first in the recipe."""
        arr_result = compute_scaling(cake_input, 2, 300)
        result = compute_costs(arr_result, cake_input.pricing())

        assert [c.id for c in result.ingredient_costs] == [2, 1]
        assert result.ingredient_costs[0].is_base
        assert result.original_total_cost == 6600.0
        assert result.adjusted_total_cost == 9900.0

    def test_calculate_runs_both_steps(self, cake_input):
        arr_result, cost_result = calculate(cake_input, 1, 750)
        assert arr_result.scaling_factor == 1.5
        assert cost_result.cost_difference == 3300.0
        assert cost_result.recipe_id == arr_result.recipe_id

    def test_identity_has_zero_difference(self, cake_input):
        _, cost_result = calculate(cake_input, 1, 500)
        assert cost_result.original_total_cost == cost_result.adjusted_total_cost
        assert cost_result.cost_difference == 0.0


class TestRoundingConsistency:
    """Totals are the rounded sum of rounded line items."""

    def test_price_per_unit_rounded_to_five_places(self):
        recipe = _recipe(_line(1, 10, unit_price=10, base_amount=3))
        _, result = calculate(recipe, 1, 10)

        assert result.ingredient_costs[0].price_per_unit == 3.33333
        assert result.ingredient_costs[0].original_cost == 33.3333

    def test_totals_equal_sum_of_lines(self):
        recipe = _recipe(
            _line(1, 7, unit_price=10, base_amount=3),
            _line(2, 11, unit_price=1, base_amount=7),
            _line(3, 13.3, unit_price=2.5, base_amount=0.9),
        )
        _, result = calculate(recipe, 1, 9.1)

        original_sum = sum(Decimal(str(c.original_cost)) for c in result.ingredient_costs)
        adjusted_sum = sum(Decimal(str(c.adjusted_cost)) for c in result.ingredient_costs)
        assert result.original_total_cost == round5(original_sum)
        assert result.adjusted_total_cost == round5(adjusted_sum)

    def test_difference_from_rounded_totals(self):
        recipe = _recipe(
            _line(1, 3, unit_price=1, base_amount=3),
            _line(2, 7, unit_price=2, base_amount=9),
        )
        _, result = calculate(recipe, 1, 1)

        expected = quantize5(
            Decimal(str(result.adjusted_total_cost)) - Decimal(str(result.original_total_cost))
        )
        assert result.cost_difference == float(expected)

    def test_order_of_lines_does_not_change_totals(self):
        lines = [
            _line(1, 7, unit_price=10, base_amount=3),
            _line(2, 11, unit_price=1, base_amount=7),
            _line(3, 5, unit_price=4, base_amount=6),
        ]
        _, forward = calculate(_recipe(*lines), 1, 2)
        _, backward = calculate(_recipe(*reversed(lines)), 1, 2)

        assert forward.original_total_cost == backward.original_total_cost
        assert forward.adjusted_total_cost == backward.adjusted_total_cost

    def test_free_ingredient(self):
        """A zero price is valid and costs nothing."""
        recipe = _recipe(
            _line(1, 100, unit_price=0, base_amount=1),
            _line(2, 50, unit_price=100, base_amount=10),
        )
        _, result = calculate(recipe, 1, 200)

        assert result.ingredient_costs[0].original_cost == 0.0
        assert result.original_total_cost == 500.0
        assert result.adjusted_total_cost == 1000.0


class TestMissingPricing:
    """Tests for ingredients without pricing data."""

    def test_strict_mode_raises_with_all_missing_ids(self):
        recipe = _recipe(
            _line(1, 100, unit_price=10, base_amount=1),
            _line(2, 50),
            _line(3, 25, unit_price=5),
        )
        arr_result = compute_scaling(recipe, 1, 200)

        with pytest.raises(MissingPricingDataError) as exc:
            compute_costs(arr_result, recipe.pricing())
        assert exc.value.ingredient_ids == [2, 3]

    def test_missing_base_ingredient_pricing(self):
        recipe = _recipe(_line(1, 100), _line(2, 50, unit_price=10, base_amount=1))
        arr_result = compute_scaling(recipe, 1, 200)

        with pytest.raises(MissingPricingDataError) as exc:
            compute_costs(arr_result, {})
        assert exc.value.ingredient_ids == [1, 2]

    def test_allow_unpriced_gives_partial_result(self):
        recipe = _recipe(
            _line(1, 100, unit_price=10, base_amount=1),
            _line(2, 50),
        )
        arr_result = compute_scaling(recipe, 1, 200)
        result = compute_costs(arr_result, recipe.pricing(), allow_unpriced=True)

        assert result.is_partial is True
        assert result.unpriced_ingredient_ids == (2,)
        assert result.original_total_cost == 1000.0
        assert result.adjusted_total_cost == 2000.0

        unpriced = result.ingredient_costs[1]
        assert unpriced.priced is False
        assert unpriced.price_per_unit is None
        assert unpriced.original_cost is None
        assert unpriced.adjusted_cost is None
        assert unpriced.adjusted_amount == 100

    def test_allow_unpriced_with_nothing_priced(self):
        recipe = _recipe(_line(1, 100), _line(2, 50))
        _, result = calculate(recipe, 1, 50, allow_unpriced=True)

        assert result.original_total_cost == 0.0
        assert result.adjusted_total_cost == 0.0
        assert result.is_partial is True


class TestInvalidPricing:
    """Tests for pricing data that violates ingredient invariants."""

    @pytest.mark.parametrize("base_amount", [0, -1])
    def test_non_positive_base_amount(self, base_amount):
        recipe = _recipe(_line(1, 100, unit_price=10, base_amount=base_amount))
        with pytest.raises(InvalidIngredientDataError) as exc:
            calculate(recipe, 1, 50)
        assert exc.value.field == "base_amount"
        assert exc.value.ingredient_id == 1

    def test_negative_price(self):
        recipe = _recipe(_line(1, 100, unit_price=-5, base_amount=10))
        with pytest.raises(InvalidIngredientDataError) as exc:
            calculate(recipe, 1, 50)
        assert exc.value.field == "unit_price"

    def test_non_numeric_price(self):
        arr_result = compute_scaling(_recipe(_line(1, 100)), 1, 50)
        pricing = {1: IngredientPricing(unit_price="abc", base_amount=10)}
        with pytest.raises(InvalidIngredientDataError) as exc:
            compute_costs(arr_result, pricing)
        assert exc.value.field == "unit_price"

    def test_invalid_data_fails_even_when_unpriced_allowed(self):
        recipe = _recipe(
            _line(1, 100, unit_price=10, base_amount=0),
            _line(2, 50),
        )
        with pytest.raises(InvalidIngredientDataError):
            calculate(recipe, 1, 50, allow_unpriced=True)


class TestPricingSources:
    """compute_costs() accepts a mapping, a RecipeInput or its lines."""

    def test_mapping(self, cake_input):
        arr_result = compute_scaling(cake_input, 1, 750)
        pricing = {
            1: IngredientPricing(unit_price=10000, base_amount=1000),
            2: IngredientPricing(unit_price=8000, base_amount=1000),
        }
        assert compute_costs(arr_result, pricing).adjusted_total_cost == 9900.0

    def test_recipe_input(self, cake_input):
        arr_result = compute_scaling(cake_input, 1, 750)
        assert compute_costs(arr_result, cake_input).adjusted_total_cost == 9900.0

    def test_line_list(self, cake_input):
        arr_result = compute_scaling(cake_input, 1, 750)
        assert compute_costs(arr_result, list(cake_input.ingredients)).adjusted_total_cost == 9900.0


class TestSerialization:
    """to_dict() documents use camelCase keys and string identifiers."""

    def test_cost_result_to_dict(self, cake_input):
        _, result = calculate(cake_input, 1, 750)
        data = result.to_dict()

        assert data["recipeId"] == "1"
        assert data["originalTotalCost"] == 6600.0
        assert data["adjustedTotalCost"] == 9900.0
        assert data["costDifference"] == 3300.0
        assert data["isPartial"] is False
        assert data["ingredientCosts"][0]["id"] == "1"
        assert data["ingredientCosts"][0]["isBase"] is True
        assert data["ingredientCosts"][1]["pricePerUnit"] == 8.0

    def test_arr_result_to_dict(self, cake_input):
        arr_result, _ = calculate(cake_input, 1, 750)
        data = arr_result.to_dict()

        assert data["scalingFactor"] == 1.5
        assert data["baseIngredient"] == {
            "id": "1",
            "name": "Flour",
            "measureUnit": "g",
            "originalAmount": 500.0,
            "newAmount": 750.0,
        }
        assert data["adjustedIngredients"][0]["adjustedAmount"] == pytest.approx(300)
