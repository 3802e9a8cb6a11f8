"""
Recipe models.

This module contains:
- Recipe: A named collection of ingredient lines
- RecipeIngredient: Junction table linking a recipe to an ingredient with
  the amount the recipe uses
"""

from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    ForeignKey,
    Index,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class Recipe(BaseModel):
    """
    Recipe model.

    Attributes:
        name: Recipe name (required)
        recipe_ingredients: Ingredient lines, in insertion order
    """

    __tablename__ = "recipes"

    name = Column(String(200), nullable=False, index=True)

    # Relationships
    recipe_ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        lazy="joined",
        order_by="RecipeIngredient.id",
    )

    def __repr__(self) -> str:
        """String representation of recipe."""
        return f"Recipe(id={self.id}, name='{self.name}')"

    @property
    def ingredient_count(self) -> int:
        return len(self.recipe_ingredients)

    def to_dict(self, include_relationships: bool = False) -> dict:
        """
        Convert recipe to dictionary.

        Args:
            include_relationships: If True, include ingredient lines

        Returns:
            Dictionary representation with ingredient_count
        """
        result = super().to_dict(include_relationships)
        result["ingredient_count"] = self.ingredient_count
        return result


class RecipeIngredient(BaseModel):
    """
    Junction table linking recipes to ingredients with amounts.

    The amount is expressed in the ingredient's own measure unit. Each
    ingredient appears at most once per recipe.

    Attributes:
        recipe_id: Foreign key to Recipe
        ingredient_id: Foreign key to Ingredient
        amount: Amount of the ingredient the recipe uses (> 0)
    """

    __tablename__ = "recipe_ingredients"

    # Foreign keys
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    ingredient_id = Column(
        Integer, ForeignKey("ingredients.id", ondelete="RESTRICT"), nullable=False
    )

    amount = Column(Float, nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="recipe_ingredients", lazy="joined")
    ingredient = relationship("Ingredient", back_populates="recipe_ingredients", lazy="joined")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_recipe_ingredient_amount_positive"),
        UniqueConstraint(
            "recipe_id",
            "ingredient_id",
            name="uq_recipe_ingredient_recipe_ingredient",
        ),
        Index("idx_recipe_ingredient_recipe", "recipe_id"),
        Index("idx_recipe_ingredient_ingredient", "ingredient_id"),
    )

    def __repr__(self) -> str:
        """String representation of recipe ingredient."""
        return (
            f"RecipeIngredient(recipe_id={self.recipe_id}, "
            f"ingredient_id={self.ingredient_id}, "
            f"amount={self.amount})"
        )

    def to_dict(self, include_relationships: bool = False) -> dict:
        """
        Convert recipe ingredient to dictionary.

        Args:
            include_relationships: Ignored; the ingredient summary is always included

        Returns:
            Dictionary representation with ingredient name and unit
        """
        result = super().to_dict(False)

        if self.ingredient is not None:
            result["ingredient_name"] = self.ingredient.name
            result["measure_unit"] = self.ingredient.measure_unit

        return result
