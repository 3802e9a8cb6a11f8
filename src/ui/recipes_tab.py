"""
Recipes tab for the Recipe ARR application.

Provides a CRUD interface for recipes and their ingredient lines, with the
cost of each recipe at its stored amounts.
"""

import customtkinter as ctk
from typing import Optional

from src.models.recipe import Recipe, RecipeIngredient
from src.services import arr_calculator_service, ingredient_service, recipe_service
from src.ui.forms.recipe_form import RecipeFormDialog
from src.ui.forms.recipe_ingredient_form import RecipeIngredientFormDialog
from src.ui.utils.error_handler import handle_error
from src.ui.widgets.data_table import RecipeDataTable, RecipeIngredientDataTable
from src.ui.widgets.dialogs import confirm_delete, show_warning
from src.ui.widgets.search_bar import SearchBar
from src.utils.config import get_config
from src.utils.constants import (
    COLOR_DEFAULT_TEXT,
    COLOR_ERROR,
    COLOR_SUCCESS,
    PADDING_LARGE,
    PADDING_MEDIUM,
)


class RecipesTab(ctk.CTkFrame):
    """
    Recipe management tab.

    Left: searchable recipe list (newest first) with total cost.
    Right: ingredient lines of the selected recipe.
    """

    def __init__(self, parent, on_change=None):
        super().__init__(parent)

        self.selected_recipe: Optional[Recipe] = None
        self.selected_line: Optional[RecipeIngredient] = None
        self.on_change = on_change
        self.search_text = ""
        currency = get_config().currency

        self.grid_columnconfigure((0, 1), weight=1)
        self.grid_rowconfigure(2, weight=1)

        self.search_bar = SearchBar(
            self, search_callback=self._on_search, placeholder="Search by recipe name..."
        )
        self.search_bar.grid(
            row=0, column=0, columnspan=2, sticky="ew",
            padx=PADDING_LARGE, pady=(PADDING_LARGE, PADDING_MEDIUM),
        )

        self._create_recipe_buttons()
        self._create_line_buttons()

        self.recipe_table = RecipeDataTable(
            self,
            currency=currency,
            select_callback=self._on_recipe_select,
            double_click_callback=lambda recipe: self._rename_recipe(),
        )
        self.recipe_table.grid(row=2, column=0, sticky="nsew", padx=(PADDING_LARGE, PADDING_MEDIUM))

        self.line_table = RecipeIngredientDataTable(
            self,
            currency=currency,
            select_callback=self._on_line_select,
            double_click_callback=lambda line: self._edit_line(),
        )
        self.line_table.grid(row=2, column=1, sticky="nsew", padx=(PADDING_MEDIUM, PADDING_LARGE))

        self.status_label = ctk.CTkLabel(self, text="Ready", anchor="w")
        self.status_label.grid(
            row=3, column=0, columnspan=2, sticky="ew", padx=PADDING_LARGE, pady=PADDING_MEDIUM
        )

        self.refresh()

        self.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)

    def _create_recipe_buttons(self):
        frame = ctk.CTkFrame(self, fg_color="transparent")
        frame.grid(row=1, column=0, sticky="ew", padx=PADDING_LARGE, pady=PADDING_MEDIUM)

        ctk.CTkButton(frame, text="Add Recipe", command=self._add_recipe, width=120).grid(
            row=0, column=0, padx=(0, PADDING_MEDIUM)
        )
        self.rename_button = ctk.CTkButton(
            frame, text="Rename", command=self._rename_recipe, width=100, state="disabled"
        )
        self.rename_button.grid(row=0, column=1, padx=PADDING_MEDIUM)
        self.delete_button = ctk.CTkButton(
            frame,
            text="Delete",
            command=self._delete_recipe,
            width=100,
            state="disabled",
            fg_color="darkred",
            hover_color="red",
        )
        self.delete_button.grid(row=0, column=2, padx=PADDING_MEDIUM)

    def _create_line_buttons(self):
        frame = ctk.CTkFrame(self, fg_color="transparent")
        frame.grid(row=1, column=1, sticky="ew", padx=PADDING_LARGE, pady=PADDING_MEDIUM)

        self.add_line_button = ctk.CTkButton(
            frame, text="Add Ingredient", command=self._add_line, width=130, state="disabled"
        )
        self.add_line_button.grid(row=0, column=0, padx=(0, PADDING_MEDIUM))
        self.edit_line_button = ctk.CTkButton(
            frame, text="Edit Amount", command=self._edit_line, width=120, state="disabled"
        )
        self.edit_line_button.grid(row=0, column=1, padx=PADDING_MEDIUM)
        self.remove_line_button = ctk.CTkButton(
            frame, text="Remove", command=self._remove_line, width=100, state="disabled"
        )
        self.remove_line_button.grid(row=0, column=2, padx=PADDING_MEDIUM)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _on_search(self, search_text: str):
        self.search_text = search_text
        self.refresh()

    def _on_recipe_select(self, recipe: Optional[Recipe]):
        self.selected_recipe = recipe
        state = "normal" if recipe is not None else "disabled"
        self.rename_button.configure(state=state)
        self.delete_button.configure(state=state)
        self.add_line_button.configure(state=state)
        self._load_lines()

    def _on_line_select(self, line: Optional[RecipeIngredient]):
        self.selected_line = line
        state = "normal" if line is not None else "disabled"
        self.edit_line_button.configure(state=state)
        self.remove_line_button.configure(state=state)

    def _load_lines(self):
        self._on_line_select(None)
        if self.selected_recipe is None:
            self.line_table.clear()
            return
        try:
            lines = recipe_service.get_recipe_ingredients(self.selected_recipe.id)
        except Exception as e:
            handle_error(e, parent=self, operation="Load recipe ingredients")
            return
        self.line_table.set_data(lines)
        self._update_status(f"{self.selected_recipe.name}: {len(lines)} ingredient(s)")

    # ------------------------------------------------------------------
    # Recipe actions
    # ------------------------------------------------------------------

    def _add_recipe(self):
        result = RecipeFormDialog(self, title="Add Recipe").get_result()
        if not result:
            return
        try:
            recipe = recipe_service.create_recipe(result)
        except Exception as e:
            handle_error(e, parent=self, operation="Add recipe")
            self._update_status("Failed to add recipe", error=True)
            return
        self._changed(f"Added: {recipe.name}")

    def _rename_recipe(self):
        if not self.selected_recipe:
            return
        result = RecipeFormDialog(
            self, recipe=self.selected_recipe, title=f"Rename Recipe: {self.selected_recipe.name}"
        ).get_result()
        if not result:
            return
        try:
            recipe = recipe_service.update_recipe(self.selected_recipe.id, result)
        except Exception as e:
            handle_error(e, parent=self, operation="Rename recipe")
            self._update_status("Failed to rename recipe", error=True)
            return
        self._changed(f"Renamed: {recipe.name}")

    def _delete_recipe(self):
        if not self.selected_recipe:
            return
        name = self.selected_recipe.name
        if not confirm_delete("recipe", name, parent=self):
            return
        try:
            recipe_service.delete_recipe(self.selected_recipe.id)
        except Exception as e:
            handle_error(e, parent=self, operation="Delete recipe")
            self._update_status("Failed to delete recipe", error=True)
            return
        self._changed(f"Deleted: {name}")

    # ------------------------------------------------------------------
    # Ingredient line actions
    # ------------------------------------------------------------------

    def _add_line(self):
        if not self.selected_recipe:
            return
        try:
            used = {line.ingredient_id for line in self.line_table.data}
            available = [
                ing for ing in ingredient_service.get_all_ingredients() if ing.id not in used
            ]
        except Exception as e:
            handle_error(e, parent=self, operation="Load ingredients")
            return

        if not available:
            show_warning(
                "No Ingredients Available",
                "Every ingredient is already in this recipe. Add ingredients on the Ingredients tab.",
                parent=self,
            )
            return

        result = RecipeIngredientFormDialog(self, ingredients=available).get_result()
        if not result:
            return
        try:
            recipe_service.add_ingredient_to_recipe(
                self.selected_recipe.id, result["ingredient_id"], result["amount"]
            )
        except Exception as e:
            handle_error(e, parent=self, operation="Add ingredient to recipe")
            return
        self._changed("Ingredient added", keep_selection=True)

    def _edit_line(self):
        if not (self.selected_recipe and self.selected_line):
            return
        result = RecipeIngredientFormDialog(
            self,
            ingredients=[self.selected_line.ingredient],
            line=self.selected_line,
            title=f"Edit Amount: {self.selected_line.ingredient.name}",
        ).get_result()
        if not result:
            return
        try:
            recipe_service.update_recipe_ingredient_amount(
                self.selected_recipe.id, result["ingredient_id"], result["amount"]
            )
        except Exception as e:
            handle_error(e, parent=self, operation="Update ingredient amount")
            return
        self._changed("Amount updated", keep_selection=True)

    def _remove_line(self):
        if not (self.selected_recipe and self.selected_line):
            return
        name = self.selected_line.ingredient.name
        if not confirm_delete("ingredient line", name, parent=self):
            return
        try:
            recipe_service.remove_ingredient_from_recipe(
                self.selected_recipe.id, self.selected_line.ingredient_id
            )
        except Exception as e:
            handle_error(e, parent=self, operation="Remove ingredient from recipe")
            return
        self._changed(f"Removed: {name}", keep_selection=True)

    # ------------------------------------------------------------------

    def _changed(self, message: str, keep_selection: bool = False):
        selected_id = self.selected_recipe.id if (keep_selection and self.selected_recipe) else None
        self.refresh()
        if selected_id is not None:
            for index, recipe in enumerate(self.recipe_table.data):
                if recipe.id == selected_id:
                    self.recipe_table.select_row(index)
                    break
        self._update_status(message, success=True)
        if self.on_change:
            self.on_change()

    def refresh(self):
        """Reload recipes and their costs."""
        try:
            recipes = recipe_service.get_all_recipes(query=self.search_text or None)
            costs = arr_calculator_service.get_all_recipe_costs()
        except Exception as e:
            handle_error(e, parent=self, operation="Load recipes")
            self._update_status("Failed to load recipes", error=True)
            return

        self.recipe_table.set_costs(costs)
        self.recipe_table.set_data(recipes)
        self._on_recipe_select(None)
        self._update_status(f"Loaded {len(recipes)} recipe(s)")

    def _update_status(self, message: str, success: bool = False, error: bool = False):
        color = COLOR_SUCCESS if success else COLOR_ERROR if error else COLOR_DEFAULT_TEXT
        self.status_label.configure(text=message, text_color=color)
