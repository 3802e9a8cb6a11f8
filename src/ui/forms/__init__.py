"""
Form dialogs for the UI package.
"""

from src.ui.forms.ingredient_form import IngredientFormDialog
from src.ui.forms.recipe_form import RecipeFormDialog
from src.ui.forms.recipe_ingredient_form import RecipeIngredientFormDialog

__all__ = [
    "IngredientFormDialog",
    "RecipeFormDialog",
    "RecipeIngredientFormDialog",
]
