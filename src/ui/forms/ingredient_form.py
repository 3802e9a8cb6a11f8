"""
Ingredient form dialog for adding and editing priced ingredients.
"""

import customtkinter as ctk
from typing import Any, Dict, Optional

from src.models.ingredient import Ingredient
from src.ui.forms.base_form import FormDialog
from src.utils.constants import MEASURE_UNITS, PADDING_MEDIUM
from src.utils.validators import validate_ingredient_data


class IngredientFormDialog(FormDialog):
    """
    Dialog for creating or editing an ingredient.

    Price is what the shop charges for "Base amount" of the measure unit,
    e.g. price 10000 for 1000 g of flour.
    """

    def __init__(self, parent, ingredient: Optional[Ingredient] = None, title: str = "Add Ingredient"):
        self.ingredient = ingredient
        super().__init__(parent, title, geometry="480x300")

    def _create_form_fields(self, parent):
        self.name_entry = self._add_entry(parent, 0, "Name*:", "e.g., Flour")
        self.price_entry = self._add_entry(parent, 1, "Price*:", "e.g., 10000")
        self.base_amount_entry = self._add_entry(parent, 2, "Base Amount*:", "e.g., 1000")

        ctk.CTkLabel(parent, text="Measure Unit*:", anchor="w").grid(
            row=3, column=0, sticky="w", padx=PADDING_MEDIUM, pady=5
        )
        self.unit_combo = ctk.CTkComboBox(parent, width=280, values=MEASURE_UNITS)
        self.unit_combo.set(MEASURE_UNITS[0])
        self.unit_combo.grid(row=3, column=1, sticky="ew", padx=PADDING_MEDIUM, pady=5)

        ctk.CTkLabel(
            parent,
            text="Price is for the base amount in the measure unit.",
            text_color="gray",
            anchor="w",
        ).grid(row=4, column=0, columnspan=2, sticky="w", padx=PADDING_MEDIUM, pady=(10, 0))

    def _populate_form(self):
        if not self.ingredient:
            return
        self.name_entry.insert(0, self.ingredient.name)
        self.price_entry.insert(0, f"{self.ingredient.price:g}")
        self.base_amount_entry.insert(0, f"{self.ingredient.base_amount:g}")
        self.unit_combo.set(self.ingredient.measure_unit)

    def _validate_form(self) -> Optional[Dict[str, Any]]:
        return validate_ingredient_data(
            {
                "name": self.name_entry.get(),
                "price": self.price_entry.get(),
                "base_amount": self.base_amount_entry.get(),
                "measure_unit": self.unit_combo.get(),
            }
        )
