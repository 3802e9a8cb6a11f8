"""Services package - Business logic layer for Recipe ARR.

This package contains all service modules that provide business logic
and database operations for the application.

Architecture:
- Services: Stateless functions organized by domain
- Transactions: Managed via session_scope() context manager
- Exceptions: Consistent error handling via the ServiceError hierarchy
- Validation: Input validation before database operations

Service Modules:
- ingredient_service: Ingredient CRUD operations
- recipe_service: Recipe and recipe-ingredient CRUD plus the recipe data fetch
- arr: Pure ARR scaling and costing engine (no database access)
- arr_calculator_service: Fetch + scale + cost facade used by the UI and CLI

Infrastructure:
- exceptions: Custom exception classes for service layer errors
- database: Session management and database utilities
- logging_utils: Structured operation logging
- dto / dto_utils: Pagination containers and display formatting

Service modules are imported explicitly by callers, e.g.
``from src.services import recipe_service``.
"""

from .exceptions import (
    ServiceError,
    RecipeNotFound,
    IngredientNotFound,
    IngredientInUse,
    DuplicateRecipeIngredient,
    ValidationError,
    DatabaseError,
    ARRError,
    EmptyRecipeError,
    ReferenceNotInRecipeError,
    InvalidAmountError,
    InvalidIngredientDataError,
    MissingPricingDataError,
)
from .database import session_scope

__all__ = [
    "session_scope",
    "ServiceError",
    "RecipeNotFound",
    "IngredientNotFound",
    "IngredientInUse",
    "DuplicateRecipeIngredient",
    "ValidationError",
    "DatabaseError",
    "ARRError",
    "EmptyRecipeError",
    "ReferenceNotInRecipeError",
    "InvalidAmountError",
    "InvalidIngredientDataError",
    "MissingPricingDataError",
]
