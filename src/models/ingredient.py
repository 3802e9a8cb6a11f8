"""
Ingredient model for priced ingredient definitions.

An ingredient carries a price quoted for a base amount of its measure unit,
e.g. "Flour: 10000 per 1000 g". The price per single unit is derived, never
stored.
"""

from typing import Optional

from sqlalchemy import Column, String, Float, Index, CheckConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel


class Ingredient(BaseModel):
    """
    Ingredient model.

    Attributes:
        name: Ingredient name (unique, e.g. "Flour")
        price: Price paid for base_amount units (>= 0)
        base_amount: Amount the price is quoted for (> 0)
        measure_unit: Unit shared by base_amount and every recipe quantity
            of this ingredient (e.g. "g", "ml", "pcs")
    """

    __tablename__ = "ingredients"

    name = Column(String(200), nullable=False, unique=True, index=True)
    price = Column(Float, nullable=False)
    base_amount = Column(Float, nullable=False)
    measure_unit = Column(String(50), nullable=False)

    # Relationships
    recipe_ingredients = relationship(
        "RecipeIngredient", back_populates="ingredient", lazy="select"
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_ingredient_price_non_negative"),
        CheckConstraint("base_amount > 0", name="ck_ingredient_base_amount_positive"),
        Index("idx_ingredient_measure_unit", "measure_unit"),
    )

    def __repr__(self) -> str:
        """String representation of ingredient."""
        return (
            f"Ingredient(id={self.id}, name='{self.name}', "
            f"price={self.price}, base_amount={self.base_amount}, "
            f"measure_unit='{self.measure_unit}')"
        )

    @property
    def price_per_unit(self) -> Optional[float]:
        """
        Price of one measure unit (price / base_amount).

        Returns:
            Price per unit, or None if base_amount is not positive
        """
        if not self.base_amount or self.base_amount <= 0:
            return None
        return self.price / self.base_amount

    def to_dict(self, include_relationships: bool = False) -> dict:
        """
        Convert ingredient to dictionary.

        Args:
            include_relationships: If True, include recipe usage entries

        Returns:
            Dictionary representation with price_per_unit
        """
        result = super().to_dict(include_relationships)
        result["price_per_unit"] = self.price_per_unit
        return result
