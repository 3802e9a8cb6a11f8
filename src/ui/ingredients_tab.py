"""
Ingredients tab for the Recipe ARR application.

Provides a CRUD interface for priced ingredients.
"""

import customtkinter as ctk
from typing import Optional

from src.models.ingredient import Ingredient
from src.services import ingredient_service
from src.ui.forms.ingredient_form import IngredientFormDialog
from src.ui.utils.error_handler import handle_error
from src.ui.widgets.data_table import IngredientDataTable
from src.ui.widgets.dialogs import confirm_delete
from src.ui.widgets.search_bar import SearchBar
from src.utils.config import get_config
from src.utils.constants import (
    COLOR_DEFAULT_TEXT,
    COLOR_ERROR,
    COLOR_SUCCESS,
    PADDING_LARGE,
    PADDING_MEDIUM,
)


class IngredientsTab(ctk.CTkFrame):
    """
    Ingredient management tab.

    Provides interface for:
    - Viewing and searching ingredients (by name or measure unit)
    - Adding, editing and deleting ingredients
    """

    def __init__(self, parent, on_change=None):
        """
        Initialize the ingredients tab.

        Args:
            parent: Parent widget
            on_change: Called after an ingredient is added, edited or deleted
        """
        super().__init__(parent)

        self.selected_ingredient: Optional[Ingredient] = None
        self.on_change = on_change
        self.search_text = ""

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self.search_bar = SearchBar(
            self,
            search_callback=self._on_search,
            placeholder="Search by name or unit...",
        )
        self.search_bar.grid(
            row=0, column=0, sticky="ew", padx=PADDING_LARGE, pady=(PADDING_LARGE, PADDING_MEDIUM)
        )

        self._create_action_buttons()

        self.data_table = IngredientDataTable(
            self,
            currency=get_config().currency,
            select_callback=self._on_row_select,
            double_click_callback=lambda ingredient: self._edit_ingredient(),
        )
        self.data_table.grid(row=2, column=0, sticky="nsew", padx=PADDING_LARGE, pady=PADDING_MEDIUM)

        self.status_label = ctk.CTkLabel(self, text="Ready", anchor="w")
        self.status_label.grid(row=3, column=0, sticky="ew", padx=PADDING_LARGE, pady=(0, PADDING_MEDIUM))

        self.refresh()

        self.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)

    def _create_action_buttons(self):
        button_frame = ctk.CTkFrame(self, fg_color="transparent")
        button_frame.grid(row=1, column=0, sticky="ew", padx=PADDING_LARGE, pady=PADDING_MEDIUM)

        ctk.CTkButton(
            button_frame, text="Add Ingredient", command=self._add_ingredient, width=150
        ).grid(row=0, column=0, padx=PADDING_MEDIUM)

        self.edit_button = ctk.CTkButton(
            button_frame, text="Edit", command=self._edit_ingredient, width=120, state="disabled"
        )
        self.edit_button.grid(row=0, column=1, padx=PADDING_MEDIUM)

        self.delete_button = ctk.CTkButton(
            button_frame,
            text="Delete",
            command=self._delete_ingredient,
            width=120,
            state="disabled",
            fg_color="darkred",
            hover_color="red",
        )
        self.delete_button.grid(row=0, column=2, padx=PADDING_MEDIUM)

        ctk.CTkButton(button_frame, text="Refresh", command=self.refresh, width=120).grid(
            row=0, column=3, padx=PADDING_MEDIUM
        )

    def _on_search(self, search_text: str):
        self.search_text = search_text
        self.refresh()

    def _on_row_select(self, ingredient: Optional[Ingredient]):
        self.selected_ingredient = ingredient
        state = "normal" if ingredient is not None else "disabled"
        self.edit_button.configure(state=state)
        self.delete_button.configure(state=state)
        if ingredient:
            self._update_status(f"Selected: {ingredient.name}")

    def _add_ingredient(self):
        result = IngredientFormDialog(self, title="Add Ingredient").get_result()
        if not result:
            return

        try:
            ingredient = ingredient_service.create_ingredient(result)
        except Exception as e:
            handle_error(e, parent=self, operation="Add ingredient")
            self._update_status("Failed to add ingredient", error=True)
            return

        self._changed(f"Added: {ingredient.name}")

    def _edit_ingredient(self):
        if not self.selected_ingredient:
            return

        result = IngredientFormDialog(
            self,
            ingredient=self.selected_ingredient,
            title=f"Edit Ingredient: {self.selected_ingredient.name}",
        ).get_result()
        if not result:
            return

        try:
            ingredient = ingredient_service.update_ingredient(self.selected_ingredient.id, result)
        except Exception as e:
            handle_error(e, parent=self, operation="Update ingredient")
            self._update_status("Failed to update ingredient", error=True)
            return

        self._changed(f"Updated: {ingredient.name}")

    def _delete_ingredient(self):
        if not self.selected_ingredient:
            return

        name = self.selected_ingredient.name
        if not confirm_delete("ingredient", name, parent=self):
            return

        try:
            ingredient_service.delete_ingredient(self.selected_ingredient.id)
        except Exception as e:
            handle_error(e, parent=self, operation="Delete ingredient")
            self._update_status("Failed to delete ingredient", error=True)
            return

        self._changed(f"Deleted: {name}")

    def _changed(self, message: str):
        self.refresh()
        self._update_status(message, success=True)
        if self.on_change:
            self.on_change()

    def refresh(self):
        """Reload the ingredient list using the current search text."""
        try:
            ingredients = ingredient_service.get_all_ingredients(query=self.search_text or None)
        except Exception as e:
            handle_error(e, parent=self, operation="Load ingredients")
            self._update_status("Failed to load ingredients", error=True)
            return

        self.data_table.set_data(ingredients)
        self._on_row_select(None)
        self._update_status(f"Loaded {len(ingredients)} ingredient(s)")

    def _update_status(self, message: str, success: bool = False, error: bool = False):
        color = COLOR_SUCCESS if success else COLOR_ERROR if error else COLOR_DEFAULT_TEXT
        self.status_label.configure(text=message, text_color=color)
