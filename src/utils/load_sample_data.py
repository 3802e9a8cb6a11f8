"""
Utility to load sample data for development and testing.

Reads a JSON seed file of priced ingredients and recipes and creates them
through the service layer, so every record passes the same validation as
data entered in the UI.

File format:
    {
      "ingredients": [
        {"name": "Flour", "price": 10000, "base_amount": 1000, "measure_unit": "g"}
      ],
      "recipes": [
        {"name": "Cake", "ingredients": [{"ingredient": "Flour", "amount": 500}]}
      ]
    }

Recipe ingredient lines refer to ingredients by name. Ingredients and
recipes whose name already exists are skipped.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from src.services import ingredient_service, recipe_service
from src.services.exceptions import ValidationError
from src.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)

SAMPLE_DATA_FILE = Path(__file__).parent.parent.parent / "test_data" / "sample_recipes.json"


def load_sample_data(data: Dict[str, Any]) -> Dict[str, int]:
    """
    Create the ingredients and recipes described by a seed document.

    Args:
        data: Parsed seed document

    Returns:
        Dictionary with counts of created and skipped entities

    Raises:
        ValidationError: If the document is malformed or a record is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(["Sample data: Expected a JSON object"])

    counts = {
        "ingredients": 0,
        "recipes": 0,
        "skipped_ingredients": 0,
        "skipped_recipes": 0,
    }

    ingredient_ids = {
        ingredient.name.lower(): ingredient.id
        for ingredient in ingredient_service.get_all_ingredients()
    }
    for item in data.get("ingredients", []):
        name = str(item.get("name", "")).strip()
        if name.lower() in ingredient_ids:
            counts["skipped_ingredients"] += 1
            continue
        ingredient = ingredient_service.create_ingredient(item)
        ingredient_ids[ingredient.name.lower()] = ingredient.id
        counts["ingredients"] += 1

    existing_recipes = {recipe.name.lower() for recipe in recipe_service.get_all_recipes()}
    for item in data.get("recipes", []):
        name = str(item.get("name", "")).strip()
        if name.lower() in existing_recipes:
            counts["skipped_recipes"] += 1
            continue

        lines = []
        for line in item.get("ingredients", []):
            ingredient_name = str(line.get("ingredient", "")).strip()
            ingredient_id = ingredient_ids.get(ingredient_name.lower())
            if ingredient_id is None:
                raise ValidationError(
                    [f"Recipe '{name}': Unknown ingredient '{ingredient_name}'"]
                )
            lines.append({"ingredient_id": ingredient_id, "amount": line.get("amount")})

        recipe_service.create_recipe({"name": name}, lines)
        existing_recipes.add(name.lower())
        counts["recipes"] += 1

    log_operation(logger, operation="load_sample_data", outcome="success", **counts)
    return counts


def load_sample_data_from_json(json_file_path: Union[str, Path] = SAMPLE_DATA_FILE) -> Dict[str, int]:
    """
    Load sample data from a JSON file into the database.

    Args:
        json_file_path: Path to the seed file (defaults to the bundled sample)

    Returns:
        Dictionary with counts of created and skipped entities
    """
    with open(json_file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return load_sample_data(data)
