"""
Validated input types for ARR calculations.

The engine never reads form submissions or ORM objects directly. The data
layer converts a stored recipe into a RecipeInput (see
recipe_service.fetch_recipe_with_ingredients) and the engine works only on
these immutable snapshots.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Optional, Tuple


@dataclass(frozen=True)
class IngredientPricing:
    """Price of an ingredient: unit_price buys base_amount of its measure unit."""

    unit_price: float
    base_amount: float


@dataclass(frozen=True)
class RecipeIngredientInput:
    """One ingredient line of a recipe, joined with its ingredient record.

    Attributes:
        ingredient_id: Identity of the ingredient
        name: Ingredient display name
        measure_unit: Unit the quantity and base amount are expressed in
        quantity: Amount of the ingredient the recipe uses
        unit_price: Price for base_amount units (None when unknown)
        base_amount: Amount the unit_price is quoted for (None when unknown)
    """

    ingredient_id: Hashable
    name: str
    measure_unit: str
    quantity: float
    unit_price: Optional[float] = None
    base_amount: Optional[float] = None

    @property
    def has_pricing(self) -> bool:
        return self.unit_price is not None and self.base_amount is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ingredientId": str(self.ingredient_id),
            "name": self.name,
            "measureUnit": self.measure_unit,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "baseAmount": self.base_amount,
        }


@dataclass(frozen=True)
class RecipeInput:
    """A recipe and its ingredient lines as consumed by the ARR engine."""

    recipe_id: Hashable
    name: str
    ingredients: Tuple[RecipeIngredientInput, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ingredients", tuple(self.ingredients))

    def get_ingredient(self, ingredient_id: Hashable) -> Optional[RecipeIngredientInput]:
        for entry in self.ingredients:
            if entry.ingredient_id == ingredient_id:
                return entry
        return None

    def pricing(self) -> Dict[Hashable, IngredientPricing]:
        """
        Build the pricing lookup used by compute_costs().

        Lines without a price or base amount are left out, so the costing
        step reports them as missing instead of pricing them at zero.
        """
        return {
            entry.ingredient_id: IngredientPricing(
                unit_price=entry.unit_price, base_amount=entry.base_amount
            )
            for entry in self.ingredients
            if entry.has_pricing
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.recipe_id),
            "name": self.name,
            "ingredients": [entry.to_dict() for entry in self.ingredients],
        }
