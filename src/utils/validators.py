"""
Input validation functions for the Recipe ARR application.

This module provides validation functions for user input including:
- String validation (required, length)
- Numeric validation (positive, non-negative, ranges)
- Complete record validation (ingredient, recipe, recipe ingredient)
- Parsing of the ARR "new amount" field

All validation functions raise ValidationError on failure, except
parse_new_amount() which raises InvalidAmountError so that calculator
input errors share the calculation error type.
"""

import math
from typing import Any, Dict, List, Optional

from src.services.exceptions import InvalidAmountError, ValidationError

from .constants import (
    ERROR_INVALID_NON_NEGATIVE,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_REQUIRED_FIELD,
    MAX_COST,
    MAX_NAME_LENGTH,
    MAX_QUANTITY,
    MAX_UNIT_LENGTH,
)


def _to_number(value: Any, field_name: str) -> float:
    """Coerce form input (str, int, float, Decimal) to a finite float."""
    if isinstance(value, bool) or value is None:
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NUMBER}"])
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (ValueError, TypeError):
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NUMBER}"])
    if not math.isfinite(number):
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NUMBER}"])
    return number


def validate_required_string(value: Optional[str], field_name: str = "Field") -> str:
    """
    Validate that a string field is not empty.

    Returns:
        The stripped string

    Raises:
        ValidationError: If the value is None, empty or whitespace
    """
    if value is None or not isinstance(value, str) or value.strip() == "":
        raise ValidationError([f"{field_name}: {ERROR_REQUIRED_FIELD}"])
    return value.strip()


def validate_string_length(value: Optional[str], max_length: int, field_name: str = "Field") -> None:
    """
    Validate that a string doesn't exceed maximum length.

    Raises:
        ValidationError: If the string is longer than max_length
    """
    if value and len(value) > max_length:
        raise ValidationError([f"{field_name}: Must be {max_length} characters or less"])


def validate_positive_number(value: Any, field_name: str = "Field") -> float:
    """
    Validate that a value is a positive number (> 0).

    Returns:
        The value as a float

    Raises:
        ValidationError: If the value is not numeric or <= 0
    """
    number = _to_number(value, field_name)
    if number <= 0:
        raise ValidationError([f"{field_name}: {ERROR_INVALID_POSITIVE}"])
    return number


def validate_non_negative_number(value: Any, field_name: str = "Field") -> float:
    """
    Validate that a value is a non-negative number (>= 0).

    Returns:
        The value as a float

    Raises:
        ValidationError: If the value is not numeric or < 0
    """
    number = _to_number(value, field_name)
    if number < 0:
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NON_NEGATIVE}"])
    return number


def validate_number_range(
    value: Any, min_value: float, max_value: float, field_name: str = "Field"
) -> float:
    """
    Validate that a number is within [min_value, max_value].

    Raises:
        ValidationError: If the value is not numeric or out of range
    """
    number = _to_number(value, field_name)
    if number < min_value or number > max_value:
        raise ValidationError([f"{field_name}: Must be between {min_value} and {max_value}"])
    return number


def _collect(errors: List[str], check, *args) -> Any:
    """Run one validator, appending its messages to errors instead of raising."""
    try:
        return check(*args)
    except ValidationError as e:
        errors.extend(e.errors)
        return None


def validate_ingredient_data(data: Dict) -> Dict:
    """
    Validate ingredient form data.

    Required fields: name, price (>= 0), base_amount (> 0), measure_unit.

    Returns:
        Cleaned dictionary with stripped strings and float numbers

    Raises:
        ValidationError: With every problem found
    """
    errors: List[str] = []

    name = _collect(errors, validate_required_string, data.get("name"), "Name")
    if name:
        _collect(errors, validate_string_length, name, MAX_NAME_LENGTH, "Name")

    price = _collect(errors, validate_non_negative_number, data.get("price"), "Price")
    if price is not None and price > MAX_COST:
        errors.append(f"Price: Must be {MAX_COST:g} or less")

    base_amount = _collect(
        errors, validate_positive_number, data.get("base_amount"), "Base amount"
    )
    if base_amount is not None and base_amount > MAX_QUANTITY:
        errors.append(f"Base amount: Must be {MAX_QUANTITY:g} or less")

    unit = _collect(errors, validate_required_string, data.get("measure_unit"), "Measure unit")
    if unit:
        _collect(errors, validate_string_length, unit, MAX_UNIT_LENGTH, "Measure unit")

    if errors:
        raise ValidationError(errors)

    return {"name": name, "price": price, "base_amount": base_amount, "measure_unit": unit}


def validate_recipe_data(data: Dict) -> Dict:
    """
    Validate recipe form data.

    Returns:
        Cleaned dictionary

    Raises:
        ValidationError: If the name is missing or too long
    """
    errors: List[str] = []

    name = _collect(errors, validate_required_string, data.get("name"), "Recipe name")
    if name:
        _collect(errors, validate_string_length, name, MAX_NAME_LENGTH, "Recipe name")

    if errors:
        raise ValidationError(errors)

    return {"name": name}


def validate_recipe_ingredient_data(data: Dict) -> Dict:
    """
    Validate one recipe ingredient line: {"ingredient_id": int, "amount": number}.

    Returns:
        Cleaned dictionary with an int ingredient_id and float amount

    Raises:
        ValidationError: With every problem found
    """
    errors: List[str] = []

    ingredient_id = data.get("ingredient_id")
    if ingredient_id is None or (isinstance(ingredient_id, str) and not ingredient_id.strip()):
        errors.append("Ingredient: An ingredient must be selected")
        ingredient_id = None
    else:
        try:
            ingredient_id = int(ingredient_id)
        except (TypeError, ValueError):
            errors.append(f"Ingredient: Invalid ingredient id {ingredient_id!r}")
            ingredient_id = None

    amount = _collect(errors, validate_positive_number, data.get("amount"), "Amount")
    if amount is not None and amount > MAX_QUANTITY:
        errors.append(f"Amount: Must be {MAX_QUANTITY:g} or less")

    if errors:
        raise ValidationError(errors)

    return {"ingredient_id": ingredient_id, "amount": amount}


def parse_new_amount(raw: Any) -> float:
    """
    Parse the calculator's "new amount" input.

    Accepts numbers or numeric strings (surrounding whitespace allowed).

    Returns:
        Finite positive float

    Raises:
        InvalidAmountError: If the input is empty, non-numeric, non-finite or <= 0

    Examples:
        >>> parse_new_amount(" 750 ")
        750.0
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidAmountError(raw, "must be a number")
    if isinstance(raw, str):
        if raw.strip() == "":
            raise InvalidAmountError(raw, "is required")
        raw = raw.strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidAmountError(raw, "must be a number")
    if not math.isfinite(value):
        raise InvalidAmountError(raw, "must be finite")
    if value <= 0:
        raise InvalidAmountError(raw, "must be greater than 0")
    return value
