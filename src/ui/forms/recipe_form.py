"""
Recipe form dialog for adding and renaming recipes.

Ingredient lines are edited from the Recipes tab after the recipe exists.
"""

from typing import Any, Dict, Optional

from src.models.recipe import Recipe
from src.ui.forms.base_form import FormDialog
from src.utils.validators import validate_recipe_data


class RecipeFormDialog(FormDialog):
    """Dialog for creating or renaming a recipe."""

    def __init__(self, parent, recipe: Optional[Recipe] = None, title: str = "Add Recipe"):
        self.recipe = recipe
        super().__init__(parent, title, geometry="480x160")

    def _create_form_fields(self, parent):
        self.name_entry = self._add_entry(parent, 0, "Name*:", "e.g., Butter Cake")
        self.name_entry.focus()

    def _populate_form(self):
        if self.recipe:
            self.name_entry.insert(0, self.recipe.name)

    def _validate_form(self) -> Optional[Dict[str, Any]]:
        return validate_recipe_data({"name": self.name_entry.get()})
