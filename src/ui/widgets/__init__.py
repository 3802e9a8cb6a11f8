"""
Widget exports for the UI package.
"""

from src.ui.widgets.data_table import (
    DataTable,
    IngredientDataTable,
    RecipeDataTable,
    RecipeIngredientDataTable,
    CostBreakdownTable,
)
from src.ui.widgets.search_bar import SearchBar

__all__ = [
    "DataTable",
    "IngredientDataTable",
    "RecipeDataTable",
    "RecipeIngredientDataTable",
    "CostBreakdownTable",
    "SearchBar",
]
