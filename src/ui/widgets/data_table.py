"""
Data table widget for displaying tabular data.

Provides a scrollable table with column headers and row selection, plus
specialized tables for ingredients, recipes, recipe lines and ARR results.
"""

import customtkinter as ctk
from typing import Any, Callable, Dict, List, Optional, Tuple

from src.services.dto_utils import format_amount, format_currency
from src.utils.datetime_utils import format_timestamp


class DataTable(ctk.CTkFrame):
    """
    Reusable data table widget with scrolling and selection.

    Subclasses define COLUMNS and override _get_row_values().
    """

    COLUMNS: List[Tuple[str, int]] = []

    def __init__(
        self,
        parent,
        columns: Optional[List[Tuple[str, int]]] = None,
        select_callback: Optional[Callable[[Any], None]] = None,
        double_click_callback: Optional[Callable[[Any], None]] = None,
    ):
        """
        Initialize the data table.

        Args:
            parent: Parent widget
            columns: List of (column_name, width) tuples; defaults to COLUMNS
            select_callback: Called with the row data when a row is clicked
            double_click_callback: Called with the row data on double-click
        """
        super().__init__(parent)

        self.columns = columns or self.COLUMNS
        self.select_callback = select_callback
        self.double_click_callback = double_click_callback
        self.data: List[Any] = []
        self.row_frames: List[ctk.CTkFrame] = []
        self.selected_row: Optional[int] = None

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header_frame = ctk.CTkFrame(self, fg_color=("gray85", "gray25"))
        header_frame.grid(row=0, column=0, sticky="ew")
        for i, (col_name, col_width) in enumerate(self.columns):
            ctk.CTkLabel(
                header_frame,
                text=col_name,
                width=col_width,
                anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=5, pady=8, sticky="w")

        self.scrollable_frame = ctk.CTkScrollableFrame(self)
        self.scrollable_frame.grid(row=1, column=0, sticky="nsew")

    def set_data(self, data: List[Any]):
        """Replace the table contents and clear the selection."""
        self.data = list(data)
        self.selected_row = None

        for widget in self.scrollable_frame.winfo_children():
            widget.destroy()
        self.row_frames = []

        for row_index, row_data in enumerate(self.data):
            self._create_row(row_index, row_data)

    def _create_row(self, row_index: int, row_data: Any):
        row_frame = ctk.CTkFrame(self.scrollable_frame, fg_color="transparent")
        row_frame.grid(row=row_index, column=0, sticky="ew")

        widgets = [row_frame]
        for col_index, (value, (_, col_width)) in enumerate(
            zip(self._get_row_values(row_data), self.columns)
        ):
            cell = ctk.CTkLabel(row_frame, text=str(value), width=col_width, anchor="w")
            cell.grid(row=0, column=col_index, padx=5, pady=4, sticky="w")
            widgets.append(cell)

        for widget in widgets:
            widget.bind("<Button-1>", lambda e, idx=row_index: self._on_row_click(idx))
            widget.bind("<Double-Button-1>", lambda e, idx=row_index: self._on_row_double_click(idx))

        self.row_frames.append(row_frame)

    def _get_row_values(self, row_data: Any) -> List[str]:
        """Default: read dict keys or attributes named after the columns."""
        values = []
        for col_name, _ in self.columns:
            key = col_name.lower().replace(" ", "_")
            if isinstance(row_data, dict):
                values.append(row_data.get(key, ""))
            else:
                values.append(getattr(row_data, key, ""))
        return values

    def _on_row_click(self, row_index: int):
        if self.selected_row is not None and self.selected_row < len(self.row_frames):
            self.row_frames[self.selected_row].configure(fg_color="transparent")

        self.selected_row = row_index
        if row_index < len(self.row_frames):
            self.row_frames[row_index].configure(fg_color=("gray75", "gray30"))

        if self.select_callback and row_index < len(self.data):
            self.select_callback(self.data[row_index])

    def _on_row_double_click(self, row_index: int):
        if self.double_click_callback and row_index < len(self.data):
            self.double_click_callback(self.data[row_index])

    def select_row(self, row_index: int):
        """Select a row programmatically (runs the select callback)."""
        self._on_row_click(row_index)

    def get_selected_row(self) -> Optional[Any]:
        if self.selected_row is not None and self.selected_row < len(self.data):
            return self.data[self.selected_row]
        return None

    def clear(self):
        self.set_data([])


class IngredientDataTable(DataTable):
    """Ingredients with their price, base amount and derived price per unit."""

    COLUMNS = [("Name", 220), ("Price", 140), ("Per", 120), ("Price per Unit", 160)]

    def __init__(self, parent, currency: str, **kwargs):
        self.currency = currency
        super().__init__(parent, **kwargs)

    def _get_row_values(self, row_data: Any) -> List[str]:
        return [
            row_data.name,
            format_currency(row_data.price, self.currency),
            format_amount(row_data.base_amount, row_data.measure_unit),
            f"{row_data.price_per_unit:.5f} / {row_data.measure_unit}",
        ]


class RecipeDataTable(DataTable):
    """Recipes with ingredient count and cost at stored amounts."""

    COLUMNS = [("Name", 240), ("Ingredients", 100), ("Total Cost", 150), ("Created", 150)]

    def __init__(self, parent, currency: str, **kwargs):
        self.currency = currency
        self.costs: Dict[int, Any] = {}
        super().__init__(parent, **kwargs)

    def set_costs(self, costs: Dict[int, Any]):
        """Recipe id -> CostResult (or None); call before set_data()."""
        self.costs = costs

    def _get_row_values(self, row_data: Any) -> List[str]:
        cost = self.costs.get(row_data.id)
        if cost is None:
            total = "-"
        else:
            total = format_currency(cost.original_total_cost, self.currency)
            if cost.is_partial:
                total += " *"
        return [
            row_data.name,
            str(row_data.ingredient_count),
            total,
            format_timestamp(row_data.created_at),
        ]


class RecipeIngredientDataTable(DataTable):
    """Ingredient lines of one recipe."""

    COLUMNS = [("Ingredient", 220), ("Amount", 140), ("Line Cost", 160)]

    def __init__(self, parent, currency: str, **kwargs):
        self.currency = currency
        super().__init__(parent, **kwargs)

    def _get_row_values(self, row_data: Any) -> List[str]:
        ingredient = row_data.ingredient
        line_cost = None
        if ingredient.price_per_unit is not None:
            line_cost = ingredient.price_per_unit * row_data.amount
        return [
            ingredient.name,
            format_amount(row_data.amount, ingredient.measure_unit),
            format_currency(line_cost, self.currency),
        ]


class CostBreakdownTable(DataTable):
    """Per-ingredient rows of an ARR calculation (IngredientCost items)."""

    COLUMNS = [
        ("Ingredient", 180),
        ("Original", 120),
        ("Adjusted", 120),
        ("Original Cost", 140),
        ("Adjusted Cost", 140),
    ]

    def __init__(self, parent, currency: str, decimals: int = 2, **kwargs):
        self.currency = currency
        self.decimals = decimals
        super().__init__(parent, **kwargs)

    def _get_row_values(self, row_data: Any) -> List[str]:
        name = f"{row_data.name} (base)" if row_data.is_base else row_data.name
        return [
            name,
            format_amount(row_data.original_amount, row_data.measure_unit, self.decimals),
            format_amount(row_data.adjusted_amount, row_data.measure_unit, self.decimals),
            format_currency(row_data.original_cost, self.currency),
            format_currency(row_data.adjusted_cost, self.currency),
        ]
