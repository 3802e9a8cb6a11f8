"""
Ingredient Service - Business logic for ingredient management.

This service provides CRUD operations for priced ingredients with:
- Input validation
- Search and pagination
- Dependency checking before deletion
"""

from typing import Dict, List, Optional, Union

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.models import Ingredient, RecipeIngredient
from src.services.database import session_scope
from src.services.dto import PaginatedResult, PaginationParams
from src.services.exceptions import (
    IngredientNotFound,
    IngredientInUse,
    ValidationError,
    DatabaseError,
)
from src.services.logging_utils import get_service_logger, log_operation
from src.utils.validators import validate_ingredient_data

logger = get_service_logger(__name__)


def _ensure_unique_name(session, name: str, exclude_id: Optional[int] = None) -> None:
    """Raise ValidationError if another ingredient already uses this name."""
    query = session.query(Ingredient).filter(func.lower(Ingredient.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Ingredient.id != exclude_id)
    if query.first() is not None:
        raise ValidationError([f"Name: An ingredient named '{name}' already exists"])


# ============================================================================
# CRUD Operations
# ============================================================================


def create_ingredient(data: Dict) -> Ingredient:
    """
    Create a new ingredient.

    Args:
        data: Dictionary with name, price, base_amount and measure_unit

    Returns:
        Created Ingredient instance

    Raises:
        ValidationError: If data validation fails or the name is taken
        DatabaseError: If database operation fails
    """
    cleaned = validate_ingredient_data(data)

    try:
        with session_scope() as session:
            _ensure_unique_name(session, cleaned["name"])

            ingredient = Ingredient(**cleaned)

            session.add(ingredient)
            session.flush()
            session.refresh(ingredient)

            return ingredient

    except ValidationError:
        raise
    except IntegrityError:
        raise ValidationError([f"Name: An ingredient named '{cleaned['name']}' already exists"])
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create ingredient", e)


def get_ingredient(ingredient_id: int) -> Ingredient:
    """
    Retrieve an ingredient by ID.

    Args:
        ingredient_id: Ingredient ID

    Returns:
        Ingredient instance

    Raises:
        IngredientNotFound: If ingredient doesn't exist
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            ingredient = session.query(Ingredient).filter_by(id=ingredient_id).first()

            if not ingredient:
                raise IngredientNotFound(ingredient_id)

            return ingredient

    except IngredientNotFound:
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to retrieve ingredient {ingredient_id}", e)


def get_all_ingredients(
    query: Optional[str] = None,
    pagination: Optional[PaginationParams] = None,
) -> Union[List[Ingredient], PaginatedResult]:
    """
    Retrieve ingredients ordered by name, with optional search and paging.

    Args:
        query: Case-insensitive partial match on name or measure unit
        pagination: Page to return; None returns every match as a list

    Returns:
        List of Ingredient instances, or a PaginatedResult when pagination
        is given

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            q = session.query(Ingredient)

            if query and query.strip():
                term = f"%{query.strip()}%"
                q = q.filter(
                    or_(
                        Ingredient.name.ilike(term),
                        Ingredient.measure_unit.ilike(term),
                    )
                )

            q = q.order_by(Ingredient.name)

            if pagination is None:
                return q.all()

            total = q.count()
            items = q.offset(pagination.offset()).limit(pagination.per_page).all()

            return PaginatedResult(
                items=items,
                total=total,
                page=pagination.page,
                per_page=pagination.per_page,
            )

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to retrieve ingredients", e)


def update_ingredient(ingredient_id: int, data: Dict) -> Ingredient:
    """
    Update an ingredient.

    Args:
        ingredient_id: Ingredient ID
        data: Dictionary with the full set of ingredient fields

    Returns:
        Updated Ingredient instance

    Raises:
        IngredientNotFound: If ingredient doesn't exist
        ValidationError: If data validation fails or the name is taken
        DatabaseError: If database operation fails
    """
    cleaned = validate_ingredient_data(data)

    try:
        with session_scope() as session:
            ingredient = session.query(Ingredient).filter_by(id=ingredient_id).first()

            if not ingredient:
                raise IngredientNotFound(ingredient_id)

            _ensure_unique_name(session, cleaned["name"], exclude_id=ingredient_id)

            ingredient.update_from_dict(cleaned)

            session.flush()
            session.refresh(ingredient)

            return ingredient

    except (IngredientNotFound, ValidationError):
        raise
    except IntegrityError:
        raise ValidationError([f"Name: An ingredient named '{cleaned['name']}' already exists"])
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update ingredient {ingredient_id}", e)


def delete_ingredient(ingredient_id: int) -> bool:
    """
    Delete an ingredient.

    Args:
        ingredient_id: Ingredient ID

    Returns:
        True if deleted successfully

    Raises:
        IngredientNotFound: If ingredient doesn't exist
        IngredientInUse: If ingredient is used in any recipe
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            ingredient = session.query(Ingredient).filter_by(id=ingredient_id).first()

            if not ingredient:
                raise IngredientNotFound(ingredient_id)

            recipe_count = (
                session.query(RecipeIngredient).filter_by(ingredient_id=ingredient_id).count()
            )

            if recipe_count > 0:
                log_operation(
                    logger,
                    operation="delete_ingredient",
                    outcome="in_use",
                    ingredient_id=ingredient_id,
                    recipe_count=recipe_count,
                )
                raise IngredientInUse(ingredient_id, recipe_count)

            session.delete(ingredient)

        log_operation(
            logger,
            operation="delete_ingredient",
            outcome="success",
            ingredient_id=ingredient_id,
        )
        return True

    except (IngredientNotFound, IngredientInUse):
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete ingredient {ingredient_id}", e)


# ============================================================================
# Utility Functions
# ============================================================================


def search_ingredients(search_term: str) -> List[Ingredient]:
    """Search ingredients by name or measure unit (case-insensitive partial match)."""
    return get_all_ingredients(query=search_term)


def get_ingredient_count() -> int:
    """
    Get total count of ingredients.

    Returns:
        Number of ingredients in database

    Raises:
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            return session.query(Ingredient).count()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to count ingredients", e)
