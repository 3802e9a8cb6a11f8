"""
Constants for the Recipe ARR application.

This module defines all system-wide constants including:
- Application metadata
- Measure units offered in forms
- Validation limits and error messages
- Currency display settings
- UI constants (sizes, padding)
"""

from typing import Dict, List

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Recipe ARR"
APP_VERSION = "0.1.0"
DATABASE_VERSION = "1.0"
DATABASE_FILENAME = "recipe_arr.db"
APP_DIR_NAME = "RecipeARR"

# ============================================================================
# Measure Units
# ============================================================================

# Units suggested in forms. Any non-empty unit string is accepted; amounts of
# one ingredient are always expressed in that ingredient's own unit.
MEASURE_UNITS: List[str] = [
    "g",
    "kg",
    "ml",
    "l",
    "pcs",
    "tsp",
    "tbsp",
    "cup",
]

# ============================================================================
# Validation Limits
# ============================================================================

MAX_NAME_LENGTH = 200
MAX_UNIT_LENGTH = 50

MAX_QUANTITY = 1_000_000_000.0
MAX_COST = 1_000_000_000_000.0

# ============================================================================
# Error Messages
# ============================================================================

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_NUMBER = "Must be a valid number"
ERROR_INVALID_POSITIVE = "Must be a positive number"
ERROR_INVALID_NON_NEGATIVE = "Must be zero or a positive number"

# ============================================================================
# Currency Display
# ============================================================================

DEFAULT_CURRENCY = "IDR"

# symbol, thousands separator, decimal separator, fraction digits
CURRENCY_FORMATS: Dict[str, Dict] = {
    "IDR": {"symbol": "Rp", "thousands": ".", "decimal": ",", "digits": 0},
    "USD": {"symbol": "$", "thousands": ",", "decimal": ".", "digits": 2},
    "EUR": {"symbol": "€", "thousands": ".", "decimal": ",", "digits": 2},
}

# Amounts in result tables
AMOUNT_DISPLAY_DECIMALS = 2

# ============================================================================
# Pagination
# ============================================================================

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 1000

# ============================================================================
# UI Constants
# ============================================================================

WINDOW_WIDTH = 1100
WINDOW_HEIGHT = 720

PADDING_MEDIUM = 10
PADDING_LARGE = 20

# Status colors
COLOR_SUCCESS = "#4CAF50"
COLOR_WARNING = "#FF9800"
COLOR_ERROR = "#F44336"
COLOR_DEFAULT_TEXT = ("gray10", "gray90")
