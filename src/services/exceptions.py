"""Service layer exception classes for Recipe ARR.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application.

Exception Hierarchy:
    ServiceError (base)
    ├── RecipeNotFound
    ├── IngredientNotFound
    ├── IngredientInUse
    ├── DuplicateRecipeIngredient
    ├── ValidationError
    ├── DatabaseError
    └── ARRError (calculation failures)
        ├── EmptyRecipeError
        ├── ReferenceNotInRecipeError
        ├── InvalidAmountError
        ├── InvalidIngredientDataError
        └── MissingPricingDataError
"""

from typing import Any, Dict, Iterable, Optional


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.

    Args:
        message: Human-readable error message
        correlation_id: Optional identifier tying the error to a request
        **context: Structured context (entity ids, offending values)
    """

    http_status_code = 500

    def __init__(self, message: str = "", correlation_id: Optional[str] = None, **context: Any):
        self.message = message
        self.correlation_id = correlation_id
        self.context = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for logging or API responses."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "correlation_id": self.correlation_id,
            "http_status_code": self.http_status_code,
            "context": dict(self.context),
        }


class RecipeNotFound(ServiceError):
    """Raised when a recipe cannot be found by ID."""

    http_status_code = 404

    def __init__(self, recipe_id, correlation_id: Optional[str] = None):
        self.recipe_id = recipe_id
        super().__init__(
            f"Recipe with ID {recipe_id} not found",
            correlation_id=correlation_id,
            recipe_id=recipe_id,
        )


class IngredientNotFound(ServiceError):
    """Raised when an ingredient cannot be found by ID."""

    http_status_code = 404

    def __init__(self, ingredient_id, correlation_id: Optional[str] = None):
        self.ingredient_id = ingredient_id
        super().__init__(
            f"Ingredient with ID {ingredient_id} not found",
            correlation_id=correlation_id,
            ingredient_id=ingredient_id,
        )


class IngredientInUse(ServiceError):
    """Raised when attempting to delete an ingredient still used by recipes.

    Args:
        ingredient_id: The ingredient being deleted
        recipe_count: Number of recipes referencing it

    Example:
        >>> raise IngredientInUse(7, 3)
        IngredientInUse: Cannot delete ingredient 7: used in 3 recipe(s)
    """

    http_status_code = 409

    def __init__(self, ingredient_id, recipe_count: int, correlation_id: Optional[str] = None):
        self.ingredient_id = ingredient_id
        self.recipe_count = recipe_count
        super().__init__(
            f"Cannot delete ingredient {ingredient_id}: used in {recipe_count} recipe(s)",
            correlation_id=correlation_id,
            ingredient_id=ingredient_id,
            recipe_count=recipe_count,
        )


class DuplicateRecipeIngredient(ServiceError):
    """Raised when an ingredient would appear twice in the same recipe."""

    http_status_code = 409

    def __init__(self, recipe_id, ingredient_id, correlation_id: Optional[str] = None):
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id
        super().__init__(
            f"Ingredient {ingredient_id} is already in recipe {recipe_id}",
            correlation_id=correlation_id,
            recipe_id=recipe_id,
            ingredient_id=ingredient_id,
        )


class ValidationError(ServiceError):
    """Raised when data validation fails."""

    http_status_code = 400

    def __init__(self, errors: list, correlation_id: Optional[str] = None):
        self.errors = errors
        error_msg = "; ".join(str(e) for e in errors)
        super().__init__(f"Validation failed: {error_msg}", correlation_id=correlation_id)


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


# ============================================================================
# ARR calculation errors
# ============================================================================


class ARRError(ServiceError):
    """Base class for scaling and costing failures.

    Calculations fail atomically: when one of these is raised no partial
    result has been produced.
    """

    http_status_code = 422


class EmptyRecipeError(ARRError):
    """Raised when a recipe has no ingredient entries to scale."""

    def __init__(self, recipe_id, correlation_id: Optional[str] = None):
        self.recipe_id = recipe_id
        super().__init__(
            f"Recipe {recipe_id} has no ingredients",
            correlation_id=correlation_id,
            recipe_id=recipe_id,
        )


class ReferenceNotInRecipeError(ARRError):
    """Raised when the chosen reference ingredient is not part of the recipe."""

    def __init__(self, recipe_id, ingredient_id, correlation_id: Optional[str] = None):
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id
        super().__init__(
            f"Ingredient {ingredient_id} is not part of recipe {recipe_id}",
            correlation_id=correlation_id,
            recipe_id=recipe_id,
            ingredient_id=ingredient_id,
        )


class InvalidAmountError(ARRError):
    """Raised when a requested amount is non-numeric, non-finite or not positive."""

    http_status_code = 400

    def __init__(self, value, reason: str = "must be a finite number greater than 0",
                 correlation_id: Optional[str] = None):
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid amount {value!r}: {reason}",
            correlation_id=correlation_id,
            value=repr(value),
        )


class InvalidIngredientDataError(ARRError):
    """Raised when stored ingredient data violates its invariants.

    Examples are a base amount of zero, a negative price or a recipe entry
    with a non-positive quantity.
    """

    def __init__(self, ingredient_id, field: str, value, correlation_id: Optional[str] = None):
        self.ingredient_id = ingredient_id
        self.field = field
        self.value = value
        super().__init__(
            f"Ingredient {ingredient_id} has invalid {field}: {value!r}",
            correlation_id=correlation_id,
            ingredient_id=ingredient_id,
            field=field,
        )


class MissingPricingDataError(ARRError):
    """Raised when ingredients in a scaling result have no pricing data."""

    def __init__(self, ingredient_ids: Iterable, correlation_id: Optional[str] = None):
        self.ingredient_ids = list(ingredient_ids)
        ids = ", ".join(str(i) for i in self.ingredient_ids)
        super().__init__(
            f"No pricing data for ingredient(s): {ids}",
            correlation_id=correlation_id,
            ingredient_ids=self.ingredient_ids,
        )
