"""
Tests for Recipe Service.

Tests cover:
- Recipe CRUD with ingredient lines
- Adding, updating and removing ingredient lines
- Duplicate and unknown ingredient handling
- Conversion of stored recipes into engine inputs
"""

import pytest

from src.models import RecipeIngredient
from src.services import recipe_service
from src.services.arr import RecipeInput
from src.services.dto import PaginationParams
from src.services.exceptions import (
    DuplicateRecipeIngredient,
    IngredientNotFound,
    RecipeNotFound,
    ValidationError,
)


class TestCreateRecipe:
    """Tests for create_recipe()."""

    def test_create_with_ingredients(self, cake_recipe, flour, sugar):
        assert cake_recipe.id is not None
        assert cake_recipe.name == "Cake"
        assert cake_recipe.ingredient_count == 2
        assert [ri.ingredient_id for ri in cake_recipe.recipe_ingredients] == [flour.id, sugar.id]
        assert cake_recipe.recipe_ingredients[0].ingredient.name == "Flour"

    def test_create_without_ingredients(self, empty_recipe):
        assert empty_recipe.ingredient_count == 0

    def test_create_requires_name(self, test_db):
        with pytest.raises(ValidationError):
            recipe_service.create_recipe({"name": "  "})

    def test_create_with_unknown_ingredient(self, test_db):
        with pytest.raises(IngredientNotFound):
            recipe_service.create_recipe({"name": "Ghost"}, [{"ingredient_id": 99, "amount": 1}])
        assert recipe_service.get_recipe_count() == 0

    def test_create_with_duplicate_ingredient(self, flour):
        with pytest.raises(DuplicateRecipeIngredient):
            recipe_service.create_recipe(
                {"name": "Twice"},
                [
                    {"ingredient_id": flour.id, "amount": 1},
                    {"ingredient_id": flour.id, "amount": 2},
                ],
            )
        assert recipe_service.get_recipe_count() == 0

    @pytest.mark.parametrize("amount", [0, -3, "abc", None])
    def test_create_with_invalid_amount(self, flour, amount):
        with pytest.raises(ValidationError):
            recipe_service.create_recipe(
                {"name": "Bad"}, [{"ingredient_id": flour.id, "amount": amount}]
            )


class TestReadRecipes:
    """Tests for get_recipe(), get_all_recipes() and lookups."""

    def test_get_recipe(self, cake_recipe):
        recipe = recipe_service.get_recipe(cake_recipe.id)
        assert recipe.name == "Cake"
        assert recipe.ingredient_count == 2

    def test_get_recipe_not_found(self, test_db):
        with pytest.raises(RecipeNotFound):
            recipe_service.get_recipe(1)

    def test_get_all_newest_first(self, cake_recipe, empty_recipe):
        names = [r.name for r in recipe_service.get_all_recipes()]
        assert names == ["Empty", "Cake"]

    def test_search(self, cake_recipe, empty_recipe):
        results = recipe_service.get_all_recipes(query="cak")
        assert [r.name for r in results] == ["Cake"]

    def test_pagination(self, cake_recipe, empty_recipe):
        page = recipe_service.get_all_recipes(pagination=PaginationParams(page=1, per_page=1))
        assert page.total == 2
        assert [r.name for r in page.items] == ["Empty"]
        assert page.has_next

    def test_recipes_using_ingredient(self, cake_recipe, flour, egg):
        assert [r.name for r in recipe_service.get_recipes_using_ingredient(flour.id)] == ["Cake"]
        assert recipe_service.get_recipes_using_ingredient(egg.id) == []

    def test_recipe_ingredients_ordered_by_name(self, flour, sugar, egg):
        recipe = recipe_service.create_recipe(
            {"name": "Sponge"},
            [
                {"ingredient_id": sugar.id, "amount": 100},
                {"ingredient_id": egg.id, "amount": 4},
                {"ingredient_id": flour.id, "amount": 120},
            ],
        )
        lines = recipe_service.get_recipe_ingredients(recipe.id)
        assert [line.ingredient.name for line in lines] == ["Egg", "Flour", "Sugar"]


class TestUpdateAndDeleteRecipe:
    """Tests for update_recipe() and delete_recipe()."""

    def test_rename(self, cake_recipe):
        updated = recipe_service.update_recipe(cake_recipe.id, {"name": "Birthday Cake"})
        assert updated.name == "Birthday Cake"
        assert updated.ingredient_count == 2

    def test_rename_not_found(self, test_db):
        with pytest.raises(RecipeNotFound):
            recipe_service.update_recipe(3, {"name": "X"})

    def test_delete_removes_lines(self, cake_recipe, test_db):
        assert recipe_service.delete_recipe(cake_recipe.id) is True

        session = test_db()
        assert session.query(RecipeIngredient).count() == 0
        with pytest.raises(RecipeNotFound):
            recipe_service.get_recipe(cake_recipe.id)

    def test_delete_not_found(self, test_db):
        with pytest.raises(RecipeNotFound):
            recipe_service.delete_recipe(8)


class TestRecipeIngredientLines:
    """Tests for adding, updating and removing ingredient lines."""

    def test_add_ingredient(self, cake_recipe, egg):
        line = recipe_service.add_ingredient_to_recipe(cake_recipe.id, egg.id, 3)

        assert line.recipe_id == cake_recipe.id
        assert line.amount == 3
        assert recipe_service.get_recipe(cake_recipe.id).ingredient_count == 3

    def test_add_existing_ingredient(self, cake_recipe, flour):
        with pytest.raises(DuplicateRecipeIngredient) as exc:
            recipe_service.add_ingredient_to_recipe(cake_recipe.id, flour.id, 10)
        assert exc.value.ingredient_id == flour.id

    def test_add_to_unknown_recipe(self, flour):
        with pytest.raises(RecipeNotFound):
            recipe_service.add_ingredient_to_recipe(42, flour.id, 10)

    def test_add_batch_is_atomic(self, empty_recipe, flour, sugar):
        with pytest.raises(IngredientNotFound):
            recipe_service.add_ingredients_to_recipe(
                empty_recipe.id,
                [
                    {"ingredient_id": flour.id, "amount": 1},
                    {"ingredient_id": 999, "amount": 1},
                ],
            )
        assert recipe_service.get_recipe(empty_recipe.id).ingredient_count == 0

        added = recipe_service.add_ingredients_to_recipe(
            empty_recipe.id,
            [
                {"ingredient_id": sugar.id, "amount": 5},
                {"ingredient_id": flour.id, "amount": 10},
            ],
        )
        assert [line.ingredient_id for line in added] == [sugar.id, flour.id]

    def test_add_empty_batch(self, empty_recipe):
        with pytest.raises(ValidationError):
            recipe_service.add_ingredients_to_recipe(empty_recipe.id, [])

    def test_update_amount(self, cake_recipe, sugar):
        line = recipe_service.update_recipe_ingredient_amount(cake_recipe.id, sugar.id, 250)
        assert line.amount == 250

    def test_update_amount_invalid(self, cake_recipe, sugar):
        with pytest.raises(ValidationError):
            recipe_service.update_recipe_ingredient_amount(cake_recipe.id, sugar.id, 0)

    def test_update_amount_not_in_recipe(self, cake_recipe, egg):
        with pytest.raises(IngredientNotFound):
            recipe_service.update_recipe_ingredient_amount(cake_recipe.id, egg.id, 2)

    def test_remove_ingredient(self, cake_recipe, sugar, egg):
        assert recipe_service.remove_ingredient_from_recipe(cake_recipe.id, sugar.id) is True
        assert recipe_service.remove_ingredient_from_recipe(cake_recipe.id, egg.id) is False
        assert recipe_service.get_recipe(cake_recipe.id).ingredient_count == 1


class TestFetchRecipeWithIngredients:
    """Tests for the engine input conversion."""

    def test_fetch(self, cake_recipe, flour, sugar):
        recipe = recipe_service.fetch_recipe_with_ingredients(cake_recipe.id)

        assert isinstance(recipe, RecipeInput)
        assert recipe.recipe_id == cake_recipe.id
        assert recipe.name == "Cake"

        first, second = recipe.ingredients
        assert first.ingredient_id == flour.id
        assert first.name == "Flour"
        assert first.measure_unit == "g"
        assert first.quantity == 500
        assert first.unit_price == 10000
        assert first.base_amount == 1000
        assert second.ingredient_id == sugar.id

    def test_fetch_keeps_insertion_order(self, flour, sugar):
        recipe = recipe_service.create_recipe(
            {"name": "Reversed"},
            [
                {"ingredient_id": sugar.id, "amount": 1},
                {"ingredient_id": flour.id, "amount": 2},
            ],
        )
        fetched = recipe_service.fetch_recipe_with_ingredients(recipe.id)
        assert [e.ingredient_id for e in fetched.ingredients] == [sugar.id, flour.id]

    def test_fetch_empty(self, empty_recipe):
        assert recipe_service.fetch_recipe_with_ingredients(empty_recipe.id).ingredients == ()

    def test_fetch_not_found(self, test_db):
        with pytest.raises(RecipeNotFound):
            recipe_service.fetch_recipe_with_ingredients(100)

    def test_fetch_all(self, cake_recipe, empty_recipe):
        recipes = recipe_service.fetch_all_recipes_with_ingredients()
        assert [r.name for r in recipes] == ["Empty", "Cake"]
        assert len(recipes[1].ingredients) == 2
