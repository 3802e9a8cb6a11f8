"""
Recipe Service - Business logic for recipe management.

This service provides CRUD operations for recipes with:
- Input validation
- Recipe ingredient management (single and batch)
- Search and pagination
- Conversion of stored recipes into ARR engine inputs
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from src.models import Recipe, RecipeIngredient, Ingredient
from src.services.arr import RecipeIngredientInput, RecipeInput
from src.services.database import session_scope
from src.services.dto import PaginatedResult, PaginationParams
from src.services.exceptions import (
    RecipeNotFound,
    IngredientNotFound,
    DuplicateRecipeIngredient,
    ValidationError,
    DatabaseError,
)
from src.services.logging_utils import get_service_logger, log_operation
from src.utils.validators import validate_recipe_data, validate_recipe_ingredient_data

logger = get_service_logger(__name__)


def _load_ingredients(recipe: Recipe) -> None:
    """Touch relationships so they survive the session closing."""
    _ = recipe.recipe_ingredients
    for ri in recipe.recipe_ingredients:
        _ = ri.ingredient


def _get_recipe_or_raise(session, recipe_id: int) -> Recipe:
    recipe = session.query(Recipe).filter_by(id=recipe_id).first()
    if not recipe:
        raise RecipeNotFound(recipe_id)
    return recipe


def _get_ingredient_or_raise(session, ingredient_id: int) -> Ingredient:
    ingredient = session.query(Ingredient).filter_by(id=ingredient_id).first()
    if not ingredient:
        raise IngredientNotFound(ingredient_id)
    return ingredient


# ============================================================================
# CRUD Operations
# ============================================================================


def create_recipe(recipe_data: Dict, ingredients_data: Optional[List[Dict]] = None) -> Recipe:
    """
    Create a new recipe with optional ingredients.

    Args:
        recipe_data: Dictionary with recipe fields (name)
        ingredients_data: List of ingredient dicts with:
            - ingredient_id: int
            - amount: float

    Returns:
        Created Recipe instance with ingredients

    Raises:
        ValidationError: If data validation fails
        IngredientNotFound: If an ingredient_id doesn't exist
        DuplicateRecipeIngredient: If an ingredient is listed twice
        DatabaseError: If database operation fails
    """
    cleaned = validate_recipe_data(recipe_data)
    lines = [validate_recipe_ingredient_data(item) for item in ingredients_data or []]

    try:
        with session_scope() as session:
            recipe = Recipe(name=cleaned["name"])

            session.add(recipe)
            session.flush()

            _add_lines(session, recipe, lines)

            session.flush()
            session.refresh(recipe)
            _load_ingredients(recipe)

            return recipe

    except (ValidationError, IngredientNotFound, DuplicateRecipeIngredient):
        raise
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create recipe", e)


def get_recipe(recipe_id: int) -> Recipe:
    """
    Retrieve a recipe by ID.

    Args:
        recipe_id: Recipe ID

    Returns:
        Recipe instance with ingredients

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            recipe = _get_recipe_or_raise(session, recipe_id)
            _load_ingredients(recipe)
            return recipe

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to retrieve recipe {recipe_id}", e)


def get_all_recipes(
    query: Optional[str] = None,
    pagination: Optional[PaginationParams] = None,
) -> Union[List[Recipe], PaginatedResult]:
    """
    Retrieve recipes, newest first, with optional search and paging.

    Args:
        query: Case-insensitive partial match on the recipe name
        pagination: Page to return; None returns every match as a list

    Returns:
        List of Recipe instances, or a PaginatedResult when pagination is given

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            q = session.query(Recipe)

            if query and query.strip():
                q = q.filter(Recipe.name.ilike(f"%{query.strip()}%"))

            q = q.order_by(Recipe.created_at.desc(), Recipe.id.desc())

            if pagination is None:
                recipes = q.all()
            else:
                total = q.count()
                recipes = q.offset(pagination.offset()).limit(pagination.per_page).all()

            for recipe in recipes:
                _load_ingredients(recipe)

            if pagination is None:
                return recipes

            return PaginatedResult(
                items=recipes,
                total=total,
                page=pagination.page,
                per_page=pagination.per_page,
            )

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to retrieve recipes", e)


def update_recipe(recipe_id: int, recipe_data: Dict) -> Recipe:
    """
    Update a recipe's own fields.

    Ingredient lines are managed through the recipe ingredient functions.

    Args:
        recipe_id: Recipe ID
        recipe_data: Dictionary with recipe fields to update

    Returns:
        Updated Recipe instance

    Raises:
        RecipeNotFound: If recipe doesn't exist
        ValidationError: If data validation fails
        DatabaseError: If database operation fails
    """
    cleaned = validate_recipe_data(recipe_data)

    try:
        with session_scope() as session:
            recipe = _get_recipe_or_raise(session, recipe_id)
            recipe.update_from_dict(cleaned)

            session.flush()
            session.refresh(recipe)
            _load_ingredients(recipe)

            return recipe

    except (RecipeNotFound, ValidationError):
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update recipe {recipe_id}", e)


def delete_recipe(recipe_id: int) -> bool:
    """
    Delete a recipe and its ingredient lines.

    Args:
        recipe_id: Recipe ID

    Returns:
        True if deleted successfully

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            recipe = _get_recipe_or_raise(session, recipe_id)

            # Delete recipe (cascade will remove recipe_ingredients)
            session.delete(recipe)

        log_operation(logger, operation="delete_recipe", outcome="success", recipe_id=recipe_id)
        return True

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete recipe {recipe_id}", e)


# ============================================================================
# Recipe Ingredient Management
# ============================================================================


def _add_lines(session, recipe: Recipe, lines: Iterable[Dict]) -> List[RecipeIngredient]:
    """
    Add validated ingredient lines to a recipe inside an open session.

    Every line is checked before anything is added: ingredients must exist,
    appear once in the batch and not already be in the recipe.
    """
    lines = list(lines)
    existing = {ri.ingredient_id for ri in recipe.recipe_ingredients}
    seen = set()
    for line in lines:
        ingredient_id = line["ingredient_id"]
        _get_ingredient_or_raise(session, ingredient_id)
        if ingredient_id in seen or ingredient_id in existing:
            raise DuplicateRecipeIngredient(recipe.id, ingredient_id)
        seen.add(ingredient_id)

    added = []
    for line in lines:
        recipe_ingredient = RecipeIngredient(
            recipe_id=recipe.id,
            ingredient_id=line["ingredient_id"],
            amount=line["amount"],
        )
        session.add(recipe_ingredient)
        added.append(recipe_ingredient)
    return added


def add_ingredient_to_recipe(recipe_id: int, ingredient_id: int, amount: float) -> RecipeIngredient:
    """
    Add an ingredient to a recipe.

    Args:
        recipe_id: Recipe ID
        ingredient_id: Ingredient ID
        amount: Amount needed, in the ingredient's measure unit

    Returns:
        Created RecipeIngredient instance

    Raises:
        RecipeNotFound: If recipe doesn't exist
        IngredientNotFound: If ingredient doesn't exist
        DuplicateRecipeIngredient: If the ingredient is already in the recipe
        ValidationError: If amount is invalid
        DatabaseError: If database operation fails
    """
    return add_ingredients_to_recipe(
        recipe_id, [{"ingredient_id": ingredient_id, "amount": amount}]
    )[0]


def add_ingredients_to_recipe(recipe_id: int, ingredients_data: List[Dict]) -> List[RecipeIngredient]:
    """
    Add several ingredients to a recipe in one transaction.

    Either every line is added or none is.

    Args:
        recipe_id: Recipe ID
        ingredients_data: List of dicts with ingredient_id and amount

    Returns:
        Created RecipeIngredient instances, in input order

    Raises:
        RecipeNotFound: If recipe doesn't exist
        IngredientNotFound: If an ingredient doesn't exist
        DuplicateRecipeIngredient: If an ingredient repeats in the batch or
            is already in the recipe
        ValidationError: If a line is invalid or the batch is empty
        DatabaseError: If database operation fails
    """
    if not ingredients_data:
        raise ValidationError(["Ingredients: At least one ingredient is required"])

    lines = [validate_recipe_ingredient_data(item) for item in ingredients_data]

    try:
        with session_scope() as session:
            recipe = _get_recipe_or_raise(session, recipe_id)
            added = _add_lines(session, recipe, lines)

            session.flush()
            for recipe_ingredient in added:
                session.refresh(recipe_ingredient)

            return added

    except (RecipeNotFound, IngredientNotFound, DuplicateRecipeIngredient, ValidationError):
        raise
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to add ingredients to recipe", e)


def update_recipe_ingredient_amount(
    recipe_id: int, ingredient_id: int, amount: float
) -> RecipeIngredient:
    """
    Change the amount of an ingredient already in a recipe.

    Args:
        recipe_id: Recipe ID
        ingredient_id: Ingredient ID
        amount: New amount (> 0)

    Returns:
        Updated RecipeIngredient instance

    Raises:
        RecipeNotFound: If recipe doesn't exist
        IngredientNotFound: If the ingredient is not in the recipe
        ValidationError: If amount is invalid
        DatabaseError: If database operation fails
    """
    line = validate_recipe_ingredient_data({"ingredient_id": ingredient_id, "amount": amount})

    try:
        with session_scope() as session:
            _get_recipe_or_raise(session, recipe_id)

            recipe_ingredient = (
                session.query(RecipeIngredient)
                .filter_by(recipe_id=recipe_id, ingredient_id=line["ingredient_id"])
                .first()
            )
            if not recipe_ingredient:
                raise IngredientNotFound(ingredient_id)

            recipe_ingredient.amount = line["amount"]

            session.flush()
            session.refresh(recipe_ingredient)

            return recipe_ingredient

    except (RecipeNotFound, IngredientNotFound, ValidationError):
        raise
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to update recipe ingredient", e)


def remove_ingredient_from_recipe(recipe_id: int, ingredient_id: int) -> bool:
    """
    Remove an ingredient from a recipe.

    Args:
        recipe_id: Recipe ID
        ingredient_id: Ingredient ID

    Returns:
        True if a line was removed, False if the ingredient wasn't in the recipe

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            _get_recipe_or_raise(session, recipe_id)

            deleted = (
                session.query(RecipeIngredient)
                .filter_by(recipe_id=recipe_id, ingredient_id=ingredient_id)
                .delete()
            )

            return deleted > 0

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to remove ingredient from recipe", e)


def get_recipe_ingredients(recipe_id: int) -> List[RecipeIngredient]:
    """
    Get a recipe's ingredient lines ordered by ingredient name.

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            _get_recipe_or_raise(session, recipe_id)

            return (
                session.query(RecipeIngredient)
                .join(Ingredient, RecipeIngredient.ingredient_id == Ingredient.id)
                .filter(RecipeIngredient.recipe_id == recipe_id)
                .order_by(Ingredient.name)
                .all()
            )

    except RecipeNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to retrieve ingredients for recipe {recipe_id}", e)


def get_recipes_using_ingredient(ingredient_id: int) -> List[Recipe]:
    """
    Get all recipes that use a specific ingredient, ordered by name.

    Args:
        ingredient_id: Ingredient ID

    Returns:
        List of Recipe instances

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            recipes = (
                session.query(Recipe)
                .join(RecipeIngredient, RecipeIngredient.recipe_id == Recipe.id)
                .filter(RecipeIngredient.ingredient_id == ingredient_id)
                .order_by(Recipe.name)
                .all()
            )

            for recipe in recipes:
                _load_ingredients(recipe)

            return recipes

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to retrieve recipes using ingredient {ingredient_id}", e)


def get_recipe_count() -> int:
    """
    Get total count of recipes.

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            return session.query(Recipe).count()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to count recipes", e)


# ============================================================================
# ARR data fetch
# ============================================================================


def _to_recipe_input(recipe: Recipe) -> RecipeInput:
    return RecipeInput(
        recipe_id=recipe.id,
        name=recipe.name,
        ingredients=tuple(
            RecipeIngredientInput(
                ingredient_id=ri.ingredient_id,
                name=ri.ingredient.name,
                measure_unit=ri.ingredient.measure_unit,
                quantity=ri.amount,
                unit_price=ri.ingredient.price,
                base_amount=ri.ingredient.base_amount,
            )
            for ri in recipe.recipe_ingredients
        ),
    )


def fetch_recipe_with_ingredients(recipe_id: int) -> RecipeInput:
    """
    Load a recipe and its priced ingredient lines as an engine input.

    Lines keep the order they were added to the recipe.

    Args:
        recipe_id: Recipe ID

    Returns:
        RecipeInput snapshot (may have no ingredients)

    Raises:
        RecipeNotFound: If recipe doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            recipe = _get_recipe_or_raise(session, recipe_id)
            recipe_input = _to_recipe_input(recipe)

        log_operation(
            logger,
            operation="fetch_recipe_with_ingredients",
            outcome="success",
            level=logging.DEBUG,
            recipe_id=recipe_id,
            ingredient_count=len(recipe_input.ingredients),
        )
        return recipe_input

    except RecipeNotFound:
        log_operation(
            logger,
            operation="fetch_recipe_with_ingredients",
            outcome="not_found",
            level=logging.WARNING,
            recipe_id=recipe_id,
        )
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to fetch recipe {recipe_id}", e)


def fetch_all_recipes_with_ingredients() -> List[RecipeInput]:
    """
    Load every recipe as an engine input, newest first.

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            recipes = (
                session.query(Recipe).order_by(Recipe.created_at.desc(), Recipe.id.desc()).all()
            )
            recipe_inputs = [_to_recipe_input(recipe) for recipe in recipes]

        log_operation(
            logger,
            operation="fetch_all_recipes_with_ingredients",
            outcome="success",
            level=logging.DEBUG,
            recipe_count=len(recipe_inputs),
        )
        return recipe_inputs

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to fetch recipes", e)
