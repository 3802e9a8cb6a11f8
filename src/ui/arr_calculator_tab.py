"""
ARR Calculator tab for the Recipe ARR application.

Pick a recipe, pick the ingredient whose amount changes, enter the new
amount and see every other ingredient rescaled with the original and
adjusted cost of the recipe.
"""

import customtkinter as ctk
from typing import Any, Dict, List, Optional

from src.services import arr_calculator_service, recipe_service
from src.services.arr_calculator_service import ARRCalculation
from src.services.dto_utils import format_amount, format_currency, format_scaling_factor
from src.ui.utils.error_handler import handle_error
from src.ui.widgets.data_table import CostBreakdownTable
from src.utils.config import get_config
from src.utils.constants import (
    COLOR_DEFAULT_TEXT,
    COLOR_ERROR,
    COLOR_SUCCESS,
    COLOR_WARNING,
    PADDING_LARGE,
    PADDING_MEDIUM,
)
from src.utils.validators import parse_new_amount

NO_SELECTION = ""


class ARRCalculatorTab(ctk.CTkFrame):
    """
    Automatic Ratio Result calculator.

    Inputs: recipe, reference ingredient, new amount.
    Output: scaling factor, per-ingredient amounts and costs, totals.
    """

    def __init__(self, parent):
        super().__init__(parent)

        config = get_config()
        self.currency = config.currency
        self.decimals = config.amount_decimals
        self._recipes: Dict[str, int] = {}
        self._references: Dict[str, Dict[str, Any]] = {}
        self.last_calculation: Optional[ARRCalculation] = None

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._create_input_panel()
        self._create_summary_panel()

        self.result_table = CostBreakdownTable(self, currency=self.currency, decimals=self.decimals)
        self.result_table.grid(row=2, column=0, sticky="nsew", padx=PADDING_LARGE, pady=PADDING_MEDIUM)

        self.status_label = ctk.CTkLabel(self, text="Ready", anchor="w")
        self.status_label.grid(row=3, column=0, sticky="ew", padx=PADDING_LARGE, pady=(0, PADDING_MEDIUM))

        self.refresh()

        self.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)

    def _create_input_panel(self):
        frame = ctk.CTkFrame(self)
        frame.grid(row=0, column=0, sticky="ew", padx=PADDING_LARGE, pady=(PADDING_LARGE, PADDING_MEDIUM))
        frame.grid_columnconfigure((1, 3), weight=1)

        ctk.CTkLabel(frame, text="Recipe:").grid(row=0, column=0, padx=PADDING_MEDIUM, pady=PADDING_MEDIUM, sticky="w")
        self.recipe_combo = ctk.CTkComboBox(
            frame, values=[NO_SELECTION], state="readonly", command=self._on_recipe_changed, width=260
        )
        self.recipe_combo.grid(row=0, column=1, padx=PADDING_MEDIUM, pady=PADDING_MEDIUM, sticky="ew")

        ctk.CTkLabel(frame, text="Ingredient:").grid(row=0, column=2, padx=PADDING_MEDIUM, pady=PADDING_MEDIUM, sticky="w")
        self.reference_combo = ctk.CTkComboBox(
            frame, values=[NO_SELECTION], state="readonly", command=self._on_reference_changed, width=260
        )
        self.reference_combo.grid(row=0, column=3, padx=PADDING_MEDIUM, pady=PADDING_MEDIUM, sticky="ew")

        ctk.CTkLabel(frame, text="New amount:").grid(row=1, column=0, padx=PADDING_MEDIUM, pady=PADDING_MEDIUM, sticky="w")
        self.amount_entry = ctk.CTkEntry(frame, placeholder_text="e.g., 750")
        self.amount_entry.grid(row=1, column=1, padx=PADDING_MEDIUM, pady=PADDING_MEDIUM, sticky="ew")
        self.amount_entry.bind("<Return>", lambda e: self.calculate())

        self.original_label = ctk.CTkLabel(frame, text="", text_color="gray", anchor="w")
        self.original_label.grid(row=1, column=2, padx=PADDING_MEDIUM, sticky="w")

        self.allow_unpriced_var = ctk.BooleanVar(value=False)
        ctk.CTkCheckBox(
            frame, text="Allow unpriced ingredients", variable=self.allow_unpriced_var
        ).grid(row=1, column=3, padx=PADDING_MEDIUM, sticky="w")

        ctk.CTkButton(frame, text="Calculate", command=self.calculate, width=140).grid(
            row=0, column=4, rowspan=2, padx=PADDING_MEDIUM, pady=PADDING_MEDIUM
        )

    def _create_summary_panel(self):
        frame = ctk.CTkFrame(self, fg_color="transparent")
        frame.grid(row=1, column=0, sticky="ew", padx=PADDING_LARGE)

        bold = ctk.CTkFont(size=14, weight="bold")
        self.factor_label = ctk.CTkLabel(frame, text="Scaling factor: -", font=bold)
        self.factor_label.grid(row=0, column=0, padx=PADDING_MEDIUM, sticky="w")
        self.original_total_label = ctk.CTkLabel(frame, text="Original cost: -", font=bold)
        self.original_total_label.grid(row=0, column=1, padx=PADDING_LARGE, sticky="w")
        self.adjusted_total_label = ctk.CTkLabel(frame, text="Adjusted cost: -", font=bold)
        self.adjusted_total_label.grid(row=0, column=2, padx=PADDING_LARGE, sticky="w")
        self.difference_label = ctk.CTkLabel(frame, text="Difference: -", font=bold)
        self.difference_label.grid(row=0, column=3, padx=PADDING_LARGE, sticky="w")

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def refresh(self):
        """Reload the recipe list, keeping the current recipe when it still exists."""
        current = self.recipe_combo.get()
        try:
            recipes = recipe_service.get_all_recipes()
        except Exception as e:
            handle_error(e, parent=self, operation="Load recipes")
            return

        self._recipes = {f"{recipe.name} (#{recipe.id})": recipe.id for recipe in recipes}
        labels = list(self._recipes) or [NO_SELECTION]
        self.recipe_combo.configure(values=labels)
        self.recipe_combo.set(current if current in self._recipes else labels[0])
        self._on_recipe_changed(self.recipe_combo.get())

    def _on_recipe_changed(self, label: str):
        recipe_id = self._recipes.get(label)
        self._references = {}
        if recipe_id is not None:
            try:
                options = arr_calculator_service.get_reference_options(recipe_id)
            except Exception as e:
                handle_error(e, parent=self, operation="Load recipe ingredients")
                options = []
            self._references = {
                f"{option['name']} ({option['measure_unit']})": option for option in options
            }

        labels = list(self._references) or [NO_SELECTION]
        self.reference_combo.configure(values=labels)
        self.reference_combo.set(labels[0])
        self._on_reference_changed(labels[0])
        self._clear_results()

    def _on_reference_changed(self, label: str):
        option = self._references.get(label)
        if option is None:
            self.original_label.configure(text="")
            return
        self.original_label.configure(
            text=f"Currently {format_amount(option['amount'], option['measure_unit'], self.decimals)}"
        )

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    def calculate(self):
        """Run the calculation for the current inputs and show the result."""
        recipe_id = self._recipes.get(self.recipe_combo.get())
        reference = self._references.get(self.reference_combo.get())
        if recipe_id is None or reference is None:
            self._update_status("Select a recipe and an ingredient first", error=True)
            return

        try:
            new_amount = parse_new_amount(self.amount_entry.get())
            calculation = arr_calculator_service.calculate_arr(
                recipe_id,
                reference["id"],
                new_amount,
                allow_unpriced=self.allow_unpriced_var.get(),
            )
        except Exception as e:
            self._clear_results()
            title, message = handle_error(e, parent=self, operation="Calculate")
            self._update_status(message, error=True)
            return

        self._show_results(calculation)

    def _show_results(self, calculation: ARRCalculation):
        self.last_calculation = calculation
        arr_result = calculation.arr_result
        cost_result = calculation.cost_result

        self.factor_label.configure(
            text=f"Scaling factor: {format_scaling_factor(arr_result.scaling_factor)}"
        )
        self.original_total_label.configure(
            text=f"Original cost: {format_currency(cost_result.original_total_cost, self.currency)}"
        )
        self.adjusted_total_label.configure(
            text=f"Adjusted cost: {format_currency(cost_result.adjusted_total_cost, self.currency)}"
        )
        self.difference_label.configure(
            text=f"Difference: {format_currency(cost_result.cost_difference, self.currency)}"
        )
        self.result_table.set_data(list(cost_result.ingredient_costs))

        if cost_result.is_partial:
            names = self._unpriced_names(cost_result.ingredient_costs)
            self._update_status(f"Partial totals: no price for {', '.join(names)}", warning=True)
        else:
            self._update_status(
                f"{arr_result.recipe_name}: {arr_result.ingredient_count} ingredient(s) rescaled",
                success=True,
            )

    @staticmethod
    def _unpriced_names(ingredient_costs) -> List[str]:
        return [cost.name for cost in ingredient_costs if not cost.priced]

    def _clear_results(self):
        self.last_calculation = None
        self.factor_label.configure(text="Scaling factor: -")
        self.original_total_label.configure(text="Original cost: -")
        self.adjusted_total_label.configure(text="Adjusted cost: -")
        self.difference_label.configure(text="Difference: -")
        self.result_table.clear()

    def _update_status(self, message: str, success: bool = False, error: bool = False,
                       warning: bool = False):
        if success:
            color = COLOR_SUCCESS
        elif error:
            color = COLOR_ERROR
        elif warning:
            color = COLOR_WARNING
        else:
            color = COLOR_DEFAULT_TEXT
        self.status_label.configure(text=message, text_color=color)
