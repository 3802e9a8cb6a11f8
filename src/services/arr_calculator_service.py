"""
ARR Calculator Service - fetch, scale and cost a stored recipe.

This service is the single entry point the UI and CLI use for ARR
calculations. It loads the recipe through recipe_service, runs the pure
engine in src.services.arr and logs the outcome of every calculation.

Transaction boundary: Read-only. The recipe is loaded in its own session;
the calculation itself touches no database state.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.services import recipe_service
from src.services.arr import (
    ARRResult,
    CostResult,
    RecipeInput,
    compute_costs,
    compute_scaling,
)
from src.services.exceptions import ARRError, EmptyRecipeError
from src.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


@dataclass(frozen=True)
class ARRCalculation:
    """Scaling result plus (optionally) its cost breakdown."""

    arr_result: ARRResult
    cost_result: Optional[CostResult] = None

    def to_dict(self) -> Dict[str, Any]:
        result = self.arr_result.to_dict()
        result["priceCalculations"] = (
            self.cost_result.to_dict() if self.cost_result is not None else None
        )
        return result


def _outcome(error: ARRError) -> str:
    """snake_case outcome label for an engine error, e.g. 'invalid_amount'."""
    name = type(error).__name__
    if name.endswith("Error"):
        name = name[: -len("Error")]
    chars = []
    for index, char in enumerate(name):
        if char.isupper() and index and name[index - 1].islower():
            chars.append("_")
        chars.append(char.lower())
    return "".join(chars)


def run_calculation(
    recipe: RecipeInput,
    reference_ingredient_id: int,
    new_amount,
    include_costs: bool = True,
    allow_unpriced: bool = False,
) -> ARRCalculation:
    """
    Scale and cost an already-loaded recipe.

    Args:
        recipe: Engine input for the recipe
        reference_ingredient_id: Ingredient whose amount changes
        new_amount: Requested amount of the reference ingredient
        include_costs: If False, only the scaling step runs
        allow_unpriced: Passed to compute_costs()

    Returns:
        ARRCalculation

    Raises:
        ARRError: Any engine error, after it has been logged
    """
    try:
        arr_result = compute_scaling(recipe, reference_ingredient_id, new_amount)
        cost_result = None
        if include_costs:
            cost_result = compute_costs(arr_result, recipe.pricing(), allow_unpriced=allow_unpriced)
    except ARRError as e:
        log_operation(
            logger,
            operation="calculate_arr",
            outcome=_outcome(e),
            level=logging.WARNING,
            recipe_id=recipe.recipe_id,
            reference_ingredient_id=reference_ingredient_id,
            new_amount=repr(new_amount),
            error=e.message,
        )
        raise

    context = {}
    if cost_result is not None:
        context = {
            "original_total_cost": cost_result.original_total_cost,
            "adjusted_total_cost": cost_result.adjusted_total_cost,
            "is_partial": cost_result.is_partial,
        }
    log_operation(
        logger,
        operation="calculate_arr",
        outcome="success",
        recipe_id=recipe.recipe_id,
        reference_ingredient_id=reference_ingredient_id,
        scaling_factor=arr_result.scaling_factor,
        **context,
    )
    return ARRCalculation(arr_result=arr_result, cost_result=cost_result)


def calculate_arr(
    recipe_id: int,
    reference_ingredient_id: int,
    new_amount,
    include_costs: bool = True,
    allow_unpriced: bool = False,
) -> ARRCalculation:
    """
    Load a recipe and rescale it around one ingredient's new amount.

    Args:
        recipe_id: Recipe ID
        reference_ingredient_id: Ingredient whose amount changes
        new_amount: Requested amount of the reference ingredient (> 0)
        include_costs: If False, skip the costing step
        allow_unpriced: If True, unpriced ingredients are reported instead
            of failing the calculation

    Returns:
        ARRCalculation with arr_result and cost_result

    Raises:
        RecipeNotFound: If recipe doesn't exist
        EmptyRecipeError: If the recipe has no ingredients
        ReferenceNotInRecipeError: If the ingredient is not in the recipe
        InvalidAmountError: If new_amount is not a finite number > 0
        InvalidIngredientDataError: If stored ingredient data is unusable
        MissingPricingDataError: If pricing is missing and allow_unpriced is False
        DatabaseError: If database operation fails

    Example:
        >>> calculation = calculate_arr(recipe_id=1, reference_ingredient_id=3, new_amount=750)
        >>> calculation.arr_result.scaling_factor
        1.5
    """
    recipe = recipe_service.fetch_recipe_with_ingredients(recipe_id)
    return run_calculation(
        recipe,
        reference_ingredient_id,
        new_amount,
        include_costs=include_costs,
        allow_unpriced=allow_unpriced,
    )


def get_recipe_cost(recipe_id: int, allow_unpriced: bool = True) -> CostResult:
    """
    Cost a recipe at its stored amounts.

    Runs an identity calculation (first ingredient at its own amount), so
    adjusted figures equal the original ones and cost_difference is 0.

    Raises:
        RecipeNotFound: If recipe doesn't exist
        EmptyRecipeError: If the recipe has no ingredients
        InvalidIngredientDataError: If stored ingredient data is unusable
    """
    recipe = recipe_service.fetch_recipe_with_ingredients(recipe_id)
    return _identity_cost(recipe, allow_unpriced)


def _identity_cost(recipe: RecipeInput, allow_unpriced: bool) -> CostResult:
    if not recipe.ingredients:
        raise EmptyRecipeError(recipe.recipe_id)
    first = recipe.ingredients[0]
    arr_result = compute_scaling(recipe, first.ingredient_id, first.quantity)
    return compute_costs(arr_result, recipe.pricing(), allow_unpriced=allow_unpriced)


def get_all_recipe_costs() -> Dict[int, Optional[CostResult]]:
    """
    Cost every recipe at its stored amounts.

    Recipes that cannot be costed (no ingredients, unusable data) map to
    None; the failure is logged.

    Returns:
        Dict of recipe id to CostResult or None
    """
    costs: Dict[int, Optional[CostResult]] = {}
    for recipe in recipe_service.fetch_all_recipes_with_ingredients():
        try:
            costs[recipe.recipe_id] = _identity_cost(recipe, allow_unpriced=True)
        except ARRError as e:
            log_operation(
                logger,
                operation="get_all_recipe_costs",
                outcome=_outcome(e),
                level=logging.WARNING,
                recipe_id=recipe.recipe_id,
                error=e.message,
            )
            costs[recipe.recipe_id] = None
    return costs


def get_reference_options(recipe_id: int) -> List[Dict[str, Any]]:
    """
    List the ingredients of a recipe that can be used as the reference.

    Returns:
        List of dicts with id, name, measure_unit and amount, in recipe order

    Raises:
        RecipeNotFound: If recipe doesn't exist
    """
    recipe = recipe_service.fetch_recipe_with_ingredients(recipe_id)
    return [
        {
            "id": entry.ingredient_id,
            "name": entry.name,
            "measure_unit": entry.measure_unit,
            "amount": entry.quantity,
        }
        for entry in recipe.ingredients
    ]


__all__ = [
    "ARRCalculation",
    "calculate_arr",
    "get_all_recipe_costs",
    "get_recipe_cost",
    "get_reference_options",
    "run_calculation",
]
