"""
Scaling step of the Automatic Ratio Result (ARR) calculation.

Given a recipe, a reference ingredient and a new amount for that ingredient,
computes the scaling factor and rescales every other ingredient by it.

Transaction boundary: Pure computation (no database access).
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any, Dict, Hashable, Set, Tuple

from src.services.exceptions import (
    EmptyRecipeError,
    InvalidAmountError,
    InvalidIngredientDataError,
    ReferenceNotInRecipeError,
)
from .inputs import RecipeInput


@dataclass(frozen=True)
class BaseIngredientSnapshot:
    """The reference ingredient with its original and requested amounts."""

    id: Hashable
    name: str
    measure_unit: str
    original_amount: float
    new_amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "measureUnit": self.measure_unit,
            "originalAmount": self.original_amount,
            "newAmount": self.new_amount,
        }


@dataclass(frozen=True)
class AdjustedIngredient:
    """A non-reference ingredient rescaled by the scaling factor."""

    id: Hashable
    name: str
    measure_unit: str
    original_amount: float
    adjusted_amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "measureUnit": self.measure_unit,
            "originalAmount": self.original_amount,
            "adjustedAmount": self.adjusted_amount,
        }


@dataclass(frozen=True)
class ARRResult:
    """Result of the scaling step.

    Attributes:
        recipe_id: The recipe ID
        recipe_name: The recipe display name
        scaling_factor: new_amount / original amount of the reference ingredient
        base_ingredient: Snapshot of the reference ingredient
        adjusted_ingredients: Every other ingredient, in recipe order
    """

    recipe_id: Hashable
    recipe_name: str
    scaling_factor: float
    base_ingredient: BaseIngredientSnapshot
    adjusted_ingredients: Tuple[AdjustedIngredient, ...]

    @property
    def ingredient_count(self) -> int:
        return len(self.adjusted_ingredients) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipeId": str(self.recipe_id),
            "recipeName": self.recipe_name,
            "scalingFactor": self.scaling_factor,
            "baseIngredient": self.base_ingredient.to_dict(),
            "adjustedIngredients": [item.to_dict() for item in self.adjusted_ingredients],
        }


def validate_new_amount(new_amount) -> float:
    """
    Check a requested amount and return it as a float.

    Raises:
        InvalidAmountError: If the amount is not a number, not finite, or <= 0

    Examples:
        >>> validate_new_amount(750)
        750.0
    """
    if isinstance(new_amount, bool) or not isinstance(new_amount, (Real, Decimal)):
        raise InvalidAmountError(new_amount, "must be a number")

    value = float(new_amount)
    if not math.isfinite(value):
        raise InvalidAmountError(new_amount, "must be finite")
    if value <= 0:
        raise InvalidAmountError(new_amount, "must be greater than 0")
    return value


def _check_recipe_entries(recipe: RecipeInput) -> None:
    """Reject duplicate ingredients and non-positive quantities."""
    seen: Set[Hashable] = set()
    for entry in recipe.ingredients:
        if entry.ingredient_id in seen:
            raise InvalidIngredientDataError(entry.ingredient_id, "ingredient_id", "duplicate")
        seen.add(entry.ingredient_id)

        quantity = entry.quantity
        if (
            isinstance(quantity, bool)
            or not isinstance(quantity, (Real, Decimal))
            or not math.isfinite(float(quantity))
            or quantity <= 0
        ):
            raise InvalidIngredientDataError(entry.ingredient_id, "quantity", quantity)


def compute_scaling(
    recipe: RecipeInput, reference_ingredient_id: Hashable, new_amount
) -> ARRResult:
    """
    Rescale a recipe around one reference ingredient.

    scaling_factor = new_amount / reference quantity, and every other
    ingredient's adjusted amount is its quantity times that factor. The
    reference ingredient is reported separately with new_amount echoed as
    given, never recomputed from the factor.

    Args:
        recipe: Recipe snapshot with at least one ingredient line
        reference_ingredient_id: Ingredient whose amount changes
        new_amount: Requested amount of the reference ingredient (> 0)

    Returns:
        ARRResult with one base ingredient and len(recipe.ingredients) - 1
        adjusted ingredients

    Raises:
        EmptyRecipeError: If the recipe has no ingredients
        InvalidAmountError: If new_amount is not a finite number > 0
        InvalidIngredientDataError: If a recipe line has a bad quantity or is duplicated
        ReferenceNotInRecipeError: If the reference ingredient is not in the recipe

    Examples:
        Flour 500 g and Sugar 200 g, Flour raised to 750 g:
        scaling_factor is 1.5 and Sugar becomes 300 g.
    """
    if not recipe.ingredients:
        raise EmptyRecipeError(recipe.recipe_id)

    amount = validate_new_amount(new_amount)
    _check_recipe_entries(recipe)

    reference = recipe.get_ingredient(reference_ingredient_id)
    if reference is None:
        raise ReferenceNotInRecipeError(recipe.recipe_id, reference_ingredient_id)

    original_amount = float(reference.quantity)
    scaling_factor = amount / original_amount
    if not math.isfinite(scaling_factor) or scaling_factor <= 0:
        raise InvalidAmountError(new_amount, "produces an unusable scaling factor")

    adjusted = []
    for entry in recipe.ingredients:
        if entry.ingredient_id == reference_ingredient_id:
            continue
        adjusted_amount = float(entry.quantity) * scaling_factor
        if not math.isfinite(adjusted_amount):
            raise InvalidAmountError(new_amount, "produces a non-finite adjusted amount")
        adjusted.append(
            AdjustedIngredient(
                id=entry.ingredient_id,
                name=entry.name,
                measure_unit=entry.measure_unit,
                original_amount=float(entry.quantity),
                adjusted_amount=adjusted_amount,
            )
        )

    return ARRResult(
        recipe_id=recipe.recipe_id,
        recipe_name=recipe.name,
        scaling_factor=scaling_factor,
        base_ingredient=BaseIngredientSnapshot(
            id=reference.ingredient_id,
            name=reference.name,
            measure_unit=reference.measure_unit,
            original_amount=original_amount,
            new_amount=amount,
        ),
        adjusted_ingredients=tuple(adjusted),
    )
