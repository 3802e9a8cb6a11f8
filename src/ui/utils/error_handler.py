"""Centralized error handler for UI layer.

Maps service and calculation exceptions to user-facing (title, message)
pairs and logs the technical details. Class names never reach the user.
"""

import logging
from tkinter import messagebox
from typing import Any, Optional, Tuple

from src.services.exceptions import (
    ServiceError,
    RecipeNotFound,
    IngredientNotFound,
    IngredientInUse,
    DuplicateRecipeIngredient,
    ValidationError,
    DatabaseError,
    EmptyRecipeError,
    ReferenceNotInRecipeError,
    InvalidAmountError,
    InvalidIngredientDataError,
    MissingPricingDataError,
)

logger = logging.getLogger(__name__)


def handle_error(
    exception: Exception,
    parent: Optional[Any] = None,
    operation: str = "Operation",
    show_dialog: bool = True,
) -> Tuple[str, str]:
    """Handle an exception and optionally display a user-friendly error dialog.

    Args:
        exception: The caught exception to handle
        parent: Parent widget for dialog positioning (optional)
        operation: Description of what was being attempted (e.g., "Calculate")
        show_dialog: Whether to show error dialog (default True)

    Returns:
        Tuple of (title, user_message) for further handling if needed

    Example:
        try:
            calculate_arr(recipe_id, ingredient_id, amount)
        except Exception as e:
            handle_error(e, parent=self, operation="Calculate")
    """
    title, message = get_user_message(exception, operation)

    _log_error(exception, operation)

    if show_dialog:
        if parent is not None:
            messagebox.showerror(title, message, parent=parent)
        else:
            messagebox.showerror(title, message)

    return title, message


def get_user_message(exception: Exception, operation: str = "Operation") -> Tuple[str, str]:
    """Convert an exception to a user-friendly title and message.

    Specific exception types are handled first, then a fallback based on
    http_status_code, then a generic message for unexpected exceptions.
    """
    # Calculation errors
    if isinstance(exception, EmptyRecipeError):
        return "Cannot Calculate", "This recipe has no ingredients yet. Add ingredients first."

    if isinstance(exception, ReferenceNotInRecipeError):
        return "Cannot Calculate", "The selected ingredient is not part of this recipe."

    if isinstance(exception, InvalidAmountError):
        return "Invalid Amount", "Enter a new amount greater than 0."

    if isinstance(exception, MissingPricingDataError):
        count = len(exception.ingredient_ids)
        return (
            "Missing Prices",
            f"{count} ingredient(s) in this recipe have no price. "
            "Set a price and base amount for every ingredient.",
        )

    if isinstance(exception, InvalidIngredientDataError):
        return (
            "Invalid Ingredient Data",
            f"An ingredient has an invalid {exception.field.replace('_', ' ')}. "
            "Check its price, base amount and recipe amount.",
        )

    # Not found (404)
    if isinstance(exception, IngredientNotFound):
        return "Not Found", "Ingredient not found."

    if isinstance(exception, RecipeNotFound):
        return "Not Found", "Recipe not found."

    # Validation (400)
    if isinstance(exception, ValidationError):
        if exception.errors:
            return "Validation Error", "\n".join(str(e) for e in exception.errors)
        return "Validation Error", str(exception)

    # Conflicts (409)
    if isinstance(exception, IngredientInUse):
        return (
            "Cannot Delete",
            f"This ingredient is used in {exception.recipe_count} recipe(s). "
            "Remove it from those recipes first.",
        )

    if isinstance(exception, DuplicateRecipeIngredient):
        return "Duplicate", "This ingredient is already in the recipe. Edit its amount instead."

    # Database errors (500)
    if isinstance(exception, DatabaseError):
        return "Database Error", "A database error occurred. Please try again."

    # Category-based fallbacks
    if isinstance(exception, ServiceError):
        status = getattr(exception, "http_status_code", 500)

        if status == 404:
            return "Not Found", f"{operation} failed: the requested item was not found."

        if status == 400:
            return "Validation Error", f"{operation} failed: {exception.message or 'invalid input'}"

        if status == 409:
            return "Conflict", f"{operation} failed: {exception.message or 'resource conflict'}"

        if status == 422:
            return "Cannot Complete", f"{operation} failed: {exception.message or 'invalid data'}"

        return "Error", f"{operation} failed: {exception.message or 'an error occurred'}"

    return "Unexpected Error", "An unexpected error occurred. Please try again."


def _log_error(exception: Exception, operation: str) -> None:
    """Log technical error details.

    ServiceError subclasses are logged at WARNING (user input problems,
    status < 500) or ERROR with their context; anything else is logged with
    a full stack trace.
    """
    if isinstance(exception, ServiceError):
        correlation_id = exception.correlation_id or "no-correlation"
        log_data = exception.to_dict()
        log_data["operation"] = operation

        level = logging.WARNING if exception.http_status_code < 500 else logging.ERROR
        logger.log(
            level,
            f"[{correlation_id}] {operation} failed: "
            f"{exception.__class__.__name__}: {exception}",
            extra={"error_data": log_data},
        )
    else:
        logger.exception(
            f"{operation} failed with unexpected error: {exception.__class__.__name__}"
        )
