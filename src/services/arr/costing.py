"""
Costing step of the ARR calculation.

Consumes an ARRResult plus per-ingredient pricing and derives the price per
unit, original cost and adjusted cost of every ingredient (reference
ingredient included), then the two recipe totals and their difference.

All values are quantized with quantize5() immediately after the step that
produced them: price per unit, each line cost, each total and the
difference. Totals are summed from the already-quantized line items.

Transaction boundary: Pure computation (no database access).
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, Union

from src.services.exceptions import (
    InvalidAmountError,
    InvalidIngredientDataError,
    MissingPricingDataError,
)
from .inputs import IngredientPricing, RecipeIngredientInput, RecipeInput
from .rounding import quantize5, to_decimal
from .scaling import ARRResult, compute_scaling

PricingSource = Union[
    RecipeInput,
    Mapping[Hashable, IngredientPricing],
    Iterable[RecipeIngredientInput],
]


@dataclass(frozen=True)
class IngredientCost:
    """Cost figures for one ingredient of a scaled recipe.

    Unpriced lines (only produced with allow_unpriced=True) carry None for
    every cost figure and priced=False.
    """

    id: Hashable
    name: str
    measure_unit: str
    original_amount: float
    adjusted_amount: float
    price_per_unit: Optional[float]
    original_cost: Optional[float]
    adjusted_cost: Optional[float]
    is_base: bool = False
    priced: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "measureUnit": self.measure_unit,
            "originalAmount": self.original_amount,
            "adjustedAmount": self.adjusted_amount,
            "pricePerUnit": self.price_per_unit,
            "originalCost": self.original_cost,
            "adjustedCost": self.adjusted_cost,
            "isBase": self.is_base,
            "priced": self.priced,
        }


@dataclass(frozen=True)
class CostResult:
    """Result of the costing step.

    Attributes:
        recipe_id: The recipe ID
        ingredient_costs: Base ingredient first, then adjusted ingredients
        original_total_cost: Sum of original line costs (priced lines only)
        adjusted_total_cost: Sum of adjusted line costs (priced lines only)
        cost_difference: adjusted_total_cost - original_total_cost
        is_partial: True when some lines were left unpriced
        unpriced_ingredient_ids: Ingredients excluded from the totals
    """

    recipe_id: Hashable
    ingredient_costs: Tuple[IngredientCost, ...]
    original_total_cost: float
    adjusted_total_cost: float
    cost_difference: float
    is_partial: bool = False
    unpriced_ingredient_ids: Tuple[Hashable, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipeId": str(self.recipe_id),
            "originalTotalCost": self.original_total_cost,
            "adjustedTotalCost": self.adjusted_total_cost,
            "costDifference": self.cost_difference,
            "isPartial": self.is_partial,
            "unpricedIngredientIds": [str(i) for i in self.unpriced_ingredient_ids],
            "ingredientCosts": [item.to_dict() for item in self.ingredient_costs],
        }


def _pricing_lookup(pricing: PricingSource) -> Mapping[Hashable, IngredientPricing]:
    if isinstance(pricing, RecipeInput):
        return pricing.pricing()
    if isinstance(pricing, Mapping):
        return pricing
    return RecipeInput(recipe_id=None, name="", ingredients=tuple(pricing)).pricing()


def _checked_price_per_unit(ingredient_id: Hashable, pricing: IngredientPricing) -> Decimal:
    """Validate one pricing record and return its quantized price per unit."""
    try:
        base_amount = to_decimal(pricing.base_amount)
    except InvalidAmountError:
        raise InvalidIngredientDataError(ingredient_id, "base_amount", pricing.base_amount)
    if base_amount <= 0:
        raise InvalidIngredientDataError(ingredient_id, "base_amount", pricing.base_amount)

    try:
        unit_price = to_decimal(pricing.unit_price)
    except InvalidAmountError:
        raise InvalidIngredientDataError(ingredient_id, "unit_price", pricing.unit_price)
    if unit_price < 0:
        raise InvalidIngredientDataError(ingredient_id, "unit_price", pricing.unit_price)

    try:
        return quantize5(unit_price / base_amount)
    except (InvalidOperation, InvalidAmountError):
        raise InvalidIngredientDataError(ingredient_id, "unit_price", pricing.unit_price)


def compute_costs(
    arr_result: ARRResult,
    pricing: PricingSource,
    allow_unpriced: bool = False,
) -> CostResult:
    """
    Derive original and adjusted costs for a scaled recipe.

    price_per_unit = unit_price / base_amount, original_cost =
    price_per_unit * original_amount, adjusted_cost = price_per_unit *
    adjusted_amount (new_amount for the base ingredient). Totals include the
    base ingredient.

    Args:
        arr_result: Output of compute_scaling()
        pricing: Pricing per ingredient id; a RecipeInput or its ingredient
            lines are accepted as well
        allow_unpriced: If False, any ingredient without pricing fails the
            whole calculation. If True, such lines are flagged unpriced,
            excluded from both totals and the result is marked partial.

    Returns:
        CostResult

    Raises:
        MissingPricingDataError: If pricing is missing and allow_unpriced is False
        InvalidIngredientDataError: If a base amount is <= 0 or a price is negative

    Examples:
        Flour 10 per g (500 -> 750) and Sugar 8 per g (200 -> 300):
        original_total_cost 6600.0, adjusted_total_cost 9900.0,
        cost_difference 3300.0.
    """
    lookup = _pricing_lookup(pricing)

    base = arr_result.base_ingredient
    lines: List[Tuple[Hashable, str, str, float, float, bool]] = [
        (base.id, base.name, base.measure_unit, base.original_amount, base.new_amount, True)
    ]
    lines.extend(
        (item.id, item.name, item.measure_unit, item.original_amount, item.adjusted_amount, False)
        for item in arr_result.adjusted_ingredients
    )

    missing = [line[0] for line in lines if lookup.get(line[0]) is None]
    if missing and not allow_unpriced:
        raise MissingPricingDataError(missing)

    # Validate every priced line before producing any figures
    prices: Dict[Hashable, Decimal] = {
        line[0]: _checked_price_per_unit(line[0], lookup[line[0]])
        for line in lines
        if line[0] not in missing
    }

    costs: List[IngredientCost] = []
    original_total = Decimal(0)
    adjusted_total = Decimal(0)
    for ingredient_id, name, unit, original_amount, adjusted_amount, is_base in lines:
        if ingredient_id in missing:
            costs.append(
                IngredientCost(
                    id=ingredient_id,
                    name=name,
                    measure_unit=unit,
                    original_amount=original_amount,
                    adjusted_amount=adjusted_amount,
                    price_per_unit=None,
                    original_cost=None,
                    adjusted_cost=None,
                    is_base=is_base,
                    priced=False,
                )
            )
            continue

        price_per_unit = prices[ingredient_id]
        original_cost = quantize5(price_per_unit * to_decimal(original_amount))
        adjusted_cost = quantize5(price_per_unit * to_decimal(adjusted_amount))
        original_total += original_cost
        adjusted_total += adjusted_cost

        costs.append(
            IngredientCost(
                id=ingredient_id,
                name=name,
                measure_unit=unit,
                original_amount=original_amount,
                adjusted_amount=adjusted_amount,
                price_per_unit=float(price_per_unit),
                original_cost=float(original_cost),
                adjusted_cost=float(adjusted_cost),
                is_base=is_base,
            )
        )

    original_total = quantize5(original_total)
    adjusted_total = quantize5(adjusted_total)

    return CostResult(
        recipe_id=arr_result.recipe_id,
        ingredient_costs=tuple(costs),
        original_total_cost=float(original_total),
        adjusted_total_cost=float(adjusted_total),
        cost_difference=float(quantize5(adjusted_total - original_total)),
        is_partial=bool(missing),
        unpriced_ingredient_ids=tuple(missing),
    )


def calculate(
    recipe: RecipeInput,
    reference_ingredient_id: Hashable,
    new_amount,
    allow_unpriced: bool = False,
) -> Tuple[ARRResult, CostResult]:
    """
    Run the scaling step and then the costing step on one recipe.

    Pricing is taken from the recipe's own ingredient lines.

    Returns:
        Tuple of (ARRResult, CostResult)
    """
    arr_result = compute_scaling(recipe, reference_ingredient_id, new_amount)
    return arr_result, compute_costs(arr_result, recipe.pricing(), allow_unpriced=allow_unpriced)
