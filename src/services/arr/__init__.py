"""
ARR (Automatic Ratio Result) engine.

This module provides pure functions for:
- Scaling every ingredient of a recipe proportionally to a change in one
  reference ingredient's amount
- Costing the original and scaled recipe from per-unit pricing
- The shared 5-decimal rounding policy

Usage:
    from src.services.arr import (
        RecipeInput,
        RecipeIngredientInput,
        compute_scaling,
        compute_costs,
        calculate,
    )

    arr_result = compute_scaling(recipe, reference_ingredient_id=1, new_amount=750)
    cost_result = compute_costs(arr_result, recipe.pricing())
"""

from .inputs import (
    IngredientPricing,
    RecipeIngredientInput,
    RecipeInput,
)

from .rounding import (
    DECIMAL_PLACES,
    quantize5,
    round5,
    to_decimal,
)

from .scaling import (
    ARRResult,
    AdjustedIngredient,
    BaseIngredientSnapshot,
    compute_scaling,
    validate_new_amount,
)

from .costing import (
    CostResult,
    IngredientCost,
    calculate,
    compute_costs,
)

__all__ = [
    # Inputs
    "IngredientPricing",
    "RecipeIngredientInput",
    "RecipeInput",
    # Rounding
    "DECIMAL_PLACES",
    "quantize5",
    "round5",
    "to_decimal",
    # Scaling
    "ARRResult",
    "AdjustedIngredient",
    "BaseIngredientSnapshot",
    "compute_scaling",
    "validate_new_amount",
    # Costing
    "CostResult",
    "IngredientCost",
    "calculate",
    "compute_costs",
]
