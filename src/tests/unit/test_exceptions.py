"""Unit tests for the service exception hierarchy."""

import pytest

from src.services.exceptions import (
    ARRError,
    DatabaseError,
    DuplicateRecipeIngredient,
    EmptyRecipeError,
    IngredientInUse,
    IngredientNotFound,
    InvalidAmountError,
    InvalidIngredientDataError,
    MissingPricingDataError,
    RecipeNotFound,
    ReferenceNotInRecipeError,
    ServiceError,
    ValidationError,
)


class TestServiceError:
    """Tests for the ServiceError base class."""

    def test_message_and_context(self):
        exc = ServiceError("boom", correlation_id="abc", recipe_id=3)
        assert str(exc) == "boom"
        assert exc.message == "boom"
        assert exc.correlation_id == "abc"
        assert exc.context == {"recipe_id": 3}

    def test_to_dict(self):
        data = RecipeNotFound(5, correlation_id="req-1").to_dict()
        assert data == {
            "type": "RecipeNotFound",
            "message": "Recipe with ID 5 not found",
            "correlation_id": "req-1",
            "http_status_code": 404,
            "context": {"recipe_id": 5},
        }

    def test_default_status(self):
        assert ServiceError().http_status_code == 500
        assert DatabaseError("x").http_status_code == 500


class TestHttpStatusCodes:
    """Each exception maps to an HTTP-like status code."""

    @pytest.mark.parametrize(
        "exc,status",
        [
            (RecipeNotFound(1), 404),
            (IngredientNotFound(1), 404),
            (IngredientInUse(1, 2), 409),
            (DuplicateRecipeIngredient(1, 2), 409),
            (ValidationError(["x"]), 400),
            (EmptyRecipeError(1), 422),
            (ReferenceNotInRecipeError(1, 2), 422),
            (InvalidAmountError(-1), 400),
            (InvalidIngredientDataError(1, "base_amount", 0), 422),
            (MissingPricingDataError([1]), 422),
        ],
    )
    def test_status(self, exc, status):
        assert exc.http_status_code == status
        assert isinstance(exc, ServiceError)


class TestARRErrors:
    """Tests for calculation errors."""

    @pytest.mark.parametrize(
        "exc",
        [
            EmptyRecipeError(1),
            ReferenceNotInRecipeError(1, 2),
            InvalidAmountError(0),
            InvalidIngredientDataError(1, "quantity", -1),
            MissingPricingDataError([1, 2]),
        ],
    )
    def test_all_are_arr_errors(self, exc):
        assert isinstance(exc, ARRError)

    def test_empty_recipe(self):
        exc = EmptyRecipeError(7)
        assert exc.recipe_id == 7
        assert "no ingredients" in exc.message

    def test_reference_not_in_recipe(self):
        exc = ReferenceNotInRecipeError(7, 3)
        assert exc.recipe_id == 7
        assert exc.ingredient_id == 3
        assert exc.message == "Ingredient 3 is not part of recipe 7"

    def test_invalid_amount(self):
        exc = InvalidAmountError("abc", "must be a number")
        assert exc.value == "abc"
        assert exc.reason == "must be a number"
        assert exc.message == "Invalid amount 'abc': must be a number"
        assert exc.context["value"] == "'abc'"

    def test_invalid_ingredient_data(self):
        exc = InvalidIngredientDataError(4, "base_amount", 0)
        assert exc.ingredient_id == 4
        assert exc.field == "base_amount"
        assert exc.value == 0
        assert "base_amount" in exc.message

    def test_missing_pricing_data(self):
        exc = MissingPricingDataError(iter([2, 5]))
        assert exc.ingredient_ids == [2, 5]
        assert exc.message == "No pricing data for ingredient(s): 2, 5"


class TestOtherErrors:
    """Tests for CRUD errors."""

    def test_validation_error_joins_messages(self):
        exc = ValidationError(["Name: required", "Price: invalid"])
        assert exc.errors == ["Name: required", "Price: invalid"]
        assert str(exc) == "Validation failed: Name: required; Price: invalid"

    def test_ingredient_in_use(self):
        exc = IngredientInUse(7, 3)
        assert exc.recipe_count == 3
        assert str(exc) == "Cannot delete ingredient 7: used in 3 recipe(s)"

    def test_database_error_keeps_original(self):
        original = RuntimeError("disk full")
        exc = DatabaseError("Failed to save", original)
        assert exc.original_error is original
        assert str(exc) == "Database error: Failed to save"
