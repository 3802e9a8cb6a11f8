"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .ingredient import Ingredient
from .recipe import Recipe, RecipeIngredient

__all__ = [
    "Base",
    "BaseModel",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
]
