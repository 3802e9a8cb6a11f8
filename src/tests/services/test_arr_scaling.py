"""
Tests for the scaling step of the ARR engine.

Tests cover:
- Scaling factor and adjusted amounts (Cake example)
- Proportionality and identity
- Reference ingredient reporting
- Input validation (empty recipe, bad reference, bad amounts, bad lines)
"""

import math
from decimal import Decimal

import pytest

from src.services.arr import (
    RecipeIngredientInput,
    RecipeInput,
    compute_scaling,
    validate_new_amount,
)
from src.services.exceptions import (
    ARRError,
    EmptyRecipeError,
    InvalidAmountError,
    InvalidIngredientDataError,
    ReferenceNotInRecipeError,
)


def _line(ingredient_id, quantity, name=None, unit="g"):
    return RecipeIngredientInput(
        ingredient_id=ingredient_id,
        name=name or f"Ingredient {ingredient_id}",
        measure_unit=unit,
        quantity=quantity,
        unit_price=1000,
        base_amount=100,
    )


class TestComputeScaling:
    """Tests for compute_scaling()."""

    def test_cake_flour_to_750(self, cake_input):
        """Raising Flour from 500 to 750 scales Sugar from 200 to 300."""
        result = compute_scaling(cake_input, 1, 750)

        assert result.scaling_factor == 1.5
        assert result.recipe_id == 1
        assert result.recipe_name == "Cake"
        assert len(result.adjusted_ingredients) == 1

        sugar = result.adjusted_ingredients[0]
        assert sugar.id == 2
        assert sugar.name == "Sugar"
        assert sugar.measure_unit == "g"
        assert sugar.original_amount == 200
        assert sugar.adjusted_amount == pytest.approx(300)

    def test_base_ingredient_snapshot(self, cake_input):
        """The reference ingredient is reported separately with new_amount echoed."""
        result = compute_scaling(cake_input, 1, 750)

        base = result.base_ingredient
        assert base.id == 1
        assert base.name == "Flour"
        assert base.measure_unit == "g"
        assert base.original_amount == 500
        assert base.new_amount == 750

    def test_reference_excluded_from_adjusted(self, cake_input):
        """The reference ingredient never appears among adjusted ingredients."""
        result = compute_scaling(cake_input, 2, 100)

        assert result.base_ingredient.id == 2
        assert [item.id for item in result.adjusted_ingredients] == [1]
        assert result.scaling_factor == 0.5
        assert result.adjusted_ingredients[0].adjusted_amount == pytest.approx(250)

    def test_adjusted_keep_recipe_order(self):
        """Adjusted ingredients are listed in recipe order, skipping the reference."""
        recipe = RecipeInput(
            recipe_id=7,
            name="Bread",
            ingredients=(_line(3, 100), _line(1, 200), _line(2, 300), _line(5, 400)),
        )
        result = compute_scaling(recipe, 2, 600)

        assert [item.id for item in result.adjusted_ingredients] == [3, 1, 5]
        assert result.ingredient_count == 4

    def test_proportionality(self):
        """Every adjusted amount keeps its ratio to the reference amount."""
        recipe = RecipeInput(
            recipe_id=1,
            name="Mix",
            ingredients=(_line(1, 3), _line(2, 7), _line(3, 11.5), _line(4, 0.25)),
        )
        result = compute_scaling(recipe, 1, 10)

        for item in result.adjusted_ingredients:
            assert item.adjusted_amount / result.base_ingredient.new_amount == pytest.approx(
                item.original_amount / result.base_ingredient.original_amount
            )

    def test_identity_when_new_amount_equals_original(self, cake_input):
        """Scaling a reference to its own amount leaves every amount unchanged."""
        result = compute_scaling(cake_input, 1, 500)

        assert result.scaling_factor == 1.0
        for item in result.adjusted_ingredients:
            assert item.adjusted_amount == item.original_amount

    def test_single_ingredient_recipe(self):
        """A one-line recipe scales only its reference."""
        recipe = RecipeInput(recipe_id=1, name="Solo", ingredients=(_line(1, 40),))
        result = compute_scaling(recipe, 1, 10)

        assert result.scaling_factor == 0.25
        assert result.adjusted_ingredients == ()
        assert result.ingredient_count == 1

    def test_scaling_factor_not_rounded(self):
        """The scaling factor keeps full precision."""
        recipe = RecipeInput(recipe_id=1, name="Thirds", ingredients=(_line(1, 3), _line(2, 9)))
        result = compute_scaling(recipe, 1, 1)

        assert result.scaling_factor == 1 / 3
        assert result.adjusted_ingredients[0].adjusted_amount == pytest.approx(3)

    def test_string_ingredient_ids(self):
        """Ingredient identities only need to be hashable."""
        recipe = RecipeInput(
            recipe_id="r-1",
            name="Cake",
            ingredients=(_line("flour", 500), _line("sugar", 200)),
        )
        result = compute_scaling(recipe, "flour", 750)

        assert result.adjusted_ingredients[0].id == "sugar"
        assert result.to_dict()["recipeId"] == "r-1"

    def test_decimal_new_amount(self, cake_input):
        result = compute_scaling(cake_input, 1, Decimal("750"))
        assert result.scaling_factor == 1.5
        assert isinstance(result.base_ingredient.new_amount, float)

    def test_input_not_mutated(self, cake_input):
        before = cake_input.to_dict()
        compute_scaling(cake_input, 1, 750)
        assert cake_input.to_dict() == before


class TestScalingErrors:
    """Tests for compute_scaling() failure modes."""

    def test_empty_recipe(self):
        recipe = RecipeInput(recipe_id=9, name="Empty", ingredients=())
        with pytest.raises(EmptyRecipeError) as exc:
            compute_scaling(recipe, 1, 100)
        assert exc.value.recipe_id == 9

    def test_empty_recipe_checked_before_amount(self):
        """An empty recipe is reported even when the amount is also bad."""
        recipe = RecipeInput(recipe_id=9, name="Empty", ingredients=())
        with pytest.raises(EmptyRecipeError):
            compute_scaling(recipe, 1, -5)

    def test_reference_not_in_recipe(self, cake_input):
        with pytest.raises(ReferenceNotInRecipeError) as exc:
            compute_scaling(cake_input, 99, 100)
        assert exc.value.recipe_id == 1
        assert exc.value.ingredient_id == 99

    @pytest.mark.parametrize("amount", [0, -1, -0.001, 0.0])
    def test_non_positive_amount(self, cake_input, amount):
        with pytest.raises(InvalidAmountError) as exc:
            compute_scaling(cake_input, 1, amount)
        assert "greater than 0" in exc.value.reason

    @pytest.mark.parametrize("amount", [math.inf, -math.inf, math.nan])
    def test_non_finite_amount(self, cake_input, amount):
        with pytest.raises(InvalidAmountError):
            compute_scaling(cake_input, 1, amount)

    @pytest.mark.parametrize("amount", ["750", None, True, [750]])
    def test_non_numeric_amount(self, cake_input, amount):
        with pytest.raises(InvalidAmountError):
            compute_scaling(cake_input, 1, amount)

    def test_duplicate_ingredient_lines(self):
        recipe = RecipeInput(recipe_id=1, name="Dup", ingredients=(_line(1, 10), _line(1, 20)))
        with pytest.raises(InvalidIngredientDataError) as exc:
            compute_scaling(recipe, 1, 5)
        assert exc.value.field == "ingredient_id"

    @pytest.mark.parametrize("quantity", [0, -10, math.nan, None])
    def test_bad_line_quantity(self, quantity):
        recipe = RecipeInput(
            recipe_id=1, name="Bad", ingredients=(_line(1, 100), _line(2, quantity))
        )
        with pytest.raises(InvalidIngredientDataError) as exc:
            compute_scaling(recipe, 1, 50)
        assert exc.value.ingredient_id == 2
        assert exc.value.field == "quantity"

    def test_overflowing_amount(self):
        """A factor that overflows to infinity is rejected."""
        recipe = RecipeInput(
            recipe_id=1, name="Tiny", ingredients=(_line(1, 1e-300), _line(2, 1e10))
        )
        with pytest.raises(InvalidAmountError):
            compute_scaling(recipe, 1, 1e300)

    def test_errors_share_base_class(self, cake_input):
        with pytest.raises(ARRError):
            compute_scaling(cake_input, 42, 1)


class TestValidateNewAmount:
    """Tests for validate_new_amount()."""

    def test_int_returns_float(self):
        assert validate_new_amount(750) == 750.0
        assert isinstance(validate_new_amount(750), float)

    def test_small_positive(self):
        assert validate_new_amount(0.0001) == 0.0001

    def test_bool_rejected(self):
        with pytest.raises(InvalidAmountError):
            validate_new_amount(False)
