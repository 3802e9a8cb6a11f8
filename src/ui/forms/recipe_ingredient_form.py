"""
Dialog for adding an ingredient line to a recipe or changing its amount.
"""

import customtkinter as ctk
from typing import Any, Dict, List, Optional

from src.models import Ingredient, RecipeIngredient
from src.services.exceptions import ValidationError
from src.ui.forms.base_form import FormDialog
from src.utils.constants import PADDING_MEDIUM
from src.utils.validators import validate_recipe_ingredient_data


def _ingredient_label(ingredient: Ingredient) -> str:
    return f"{ingredient.name} ({ingredient.measure_unit})"


class RecipeIngredientFormDialog(FormDialog):
    """
    Pick an ingredient and an amount.

    When editing an existing line the ingredient is fixed and only the
    amount can change.
    """

    def __init__(
        self,
        parent,
        ingredients: List[Ingredient],
        line: Optional[RecipeIngredient] = None,
        title: str = "Add Ingredient to Recipe",
    ):
        self.ingredients = ingredients
        self.line = line
        self._by_label = {_ingredient_label(ing): ing for ing in ingredients}
        super().__init__(parent, title, geometry="480x200")

    def _create_form_fields(self, parent):
        ctk.CTkLabel(parent, text="Ingredient*:", anchor="w").grid(
            row=0, column=0, sticky="w", padx=PADDING_MEDIUM, pady=5
        )
        labels = list(self._by_label) or [""]
        self.ingredient_combo = ctk.CTkComboBox(parent, width=280, values=labels, state="readonly")
        self.ingredient_combo.set(labels[0])
        self.ingredient_combo.grid(row=0, column=1, sticky="ew", padx=PADDING_MEDIUM, pady=5)

        self.amount_entry = self._add_entry(parent, 1, "Amount*:", "e.g., 500")

    def _populate_form(self):
        if not self.line:
            return
        label = _ingredient_label(self.line.ingredient)
        self.ingredient_combo.configure(values=[label], state="disabled")
        self.ingredient_combo.set(label)
        self.amount_entry.insert(0, f"{self.line.amount:g}")

    def _validate_form(self) -> Optional[Dict[str, Any]]:
        if self.line:
            ingredient_id = self.line.ingredient_id
        else:
            ingredient = self._by_label.get(self.ingredient_combo.get())
            if ingredient is None:
                raise ValidationError(["Ingredient: An ingredient must be selected"])
            ingredient_id = ingredient.id

        return validate_recipe_ingredient_data(
            {"ingredient_id": ingredient_id, "amount": self.amount_entry.get()}
        )
