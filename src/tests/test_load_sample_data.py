"""Tests for loading sample ingredients and recipes."""

import json

import pytest

from src.services import arr_calculator_service, ingredient_service, recipe_service
from src.services.exceptions import ValidationError
from src.utils.load_sample_data import (
    SAMPLE_DATA_FILE,
    load_sample_data,
    load_sample_data_from_json,
)


class TestLoadSampleData:
    """Tests for load_sample_data()."""

    def test_bundled_file(self, test_db):
        counts = load_sample_data_from_json()

        assert counts == {
            "ingredients": 7,
            "recipes": 3,
            "skipped_ingredients": 0,
            "skipped_recipes": 0,
        }
        assert ingredient_service.get_ingredient_count() == 7
        assert recipe_service.get_recipe_count() == 3

    def test_bundled_cake_matches_worked_example(self, test_db):
        load_sample_data_from_json(SAMPLE_DATA_FILE)
        cake = recipe_service.get_all_recipes(query="Cake")
        cake = next(r for r in cake if r.name == "Cake")
        flour_id = cake.recipe_ingredients[0].ingredient_id

        calculation = arr_calculator_service.calculate_arr(cake.id, flour_id, 750)
        assert calculation.cost_result.original_total_cost == 6600.0
        assert calculation.cost_result.adjusted_total_cost == 9900.0

    def test_reload_skips_existing(self, test_db):
        load_sample_data_from_json()
        counts = load_sample_data_from_json()

        assert counts["ingredients"] == 0
        assert counts["recipes"] == 0
        assert counts["skipped_ingredients"] == 7
        assert counts["skipped_recipes"] == 3

    def test_existing_names_case_insensitive(self, flour):
        counts = load_sample_data(
            {
                "ingredients": [
                    {"name": "FLOUR", "price": 1, "base_amount": 1, "measure_unit": "g"}
                ],
                "recipes": [
                    {"name": "Plain", "ingredients": [{"ingredient": "flour", "amount": 10}]}
                ],
            }
        )
        assert counts["skipped_ingredients"] == 1
        assert counts["recipes"] == 1
        assert ingredient_service.get_ingredient(flour.id).price == 10000

    def test_unknown_ingredient_in_recipe(self, test_db):
        with pytest.raises(ValidationError) as exc:
            load_sample_data(
                {"recipes": [{"name": "Ghost", "ingredients": [{"ingredient": "Nope", "amount": 1}]}]}
            )
        assert "Unknown ingredient 'Nope'" in exc.value.errors[0]

    def test_invalid_ingredient(self, test_db):
        with pytest.raises(ValidationError):
            load_sample_data(
                {"ingredients": [{"name": "Bad", "price": 1, "base_amount": 0, "measure_unit": "g"}]}
            )

    def test_not_an_object(self, test_db):
        with pytest.raises(ValidationError):
            load_sample_data([])

    def test_from_custom_file(self, test_db, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(
            json.dumps(
                {"ingredients": [{"name": "Rice", "price": 15000, "base_amount": 1000, "measure_unit": "g"}]}
            ),
            encoding="utf-8",
        )
        assert load_sample_data_from_json(path)["ingredients"] == 1
