"""Pytest configuration and fixtures for service layer tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session

from src.models.base import Base
from src.services.arr import RecipeIngredientInput, RecipeInput
from src.utils.config import reset_config


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Provides the database to the test
    4. Drops all tables after the test completes
    """
    # Create in-memory SQLite database for testing
    engine = create_engine("sqlite:///:memory:", echo=False)

    # Create all tables
    Base.metadata.create_all(engine)

    # Create session factory
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import src.services.database as db_module

    original_get_session = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    # Provide database to test
    yield Session

    # Cleanup
    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    # Restore original session factory
    db_module.get_session_factory = original_get_session


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Run every test with default configuration."""
    for name in (
        "RECIPE_ARR_ENV",
        "RECIPE_ARR_DB_PATH",
        "RECIPE_ARR_DB_URL",
        "RECIPE_ARR_DB_TIMEOUT",
        "RECIPE_ARR_CURRENCY",
        "RECIPE_ARR_AMOUNT_DECIMALS",
        "RECIPE_ARR_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


# ============================================================================
# Engine inputs (no database)
# ============================================================================


@pytest.fixture
def cake_input():
    """Cake: Flour 500 g (10000 per 1000 g), Sugar 200 g (8000 per 1000 g)."""
    return RecipeInput(
        recipe_id=1,
        name="Cake",
        ingredients=(
            RecipeIngredientInput(
                ingredient_id=1,
                name="Flour",
                measure_unit="g",
                quantity=500,
                unit_price=10000,
                base_amount=1000,
            ),
            RecipeIngredientInput(
                ingredient_id=2,
                name="Sugar",
                measure_unit="g",
                quantity=200,
                unit_price=8000,
                base_amount=1000,
            ),
        ),
    )


# ============================================================================
# Stored data
# ============================================================================


@pytest.fixture
def flour(test_db):
    from src.services import ingredient_service

    return ingredient_service.create_ingredient(
        {"name": "Flour", "price": 10000, "base_amount": 1000, "measure_unit": "g"}
    )


@pytest.fixture
def sugar(test_db):
    from src.services import ingredient_service

    return ingredient_service.create_ingredient(
        {"name": "Sugar", "price": 8000, "base_amount": 1000, "measure_unit": "g"}
    )


@pytest.fixture
def egg(test_db):
    from src.services import ingredient_service

    return ingredient_service.create_ingredient(
        {"name": "Egg", "price": 28000, "base_amount": 10, "measure_unit": "pcs"}
    )


@pytest.fixture
def cake_recipe(test_db, flour, sugar):
    """Stored Cake recipe: Flour 500 g then Sugar 200 g."""
    from src.services import recipe_service

    return recipe_service.create_recipe(
        {"name": "Cake"},
        [
            {"ingredient_id": flour.id, "amount": 500},
            {"ingredient_id": sugar.id, "amount": 200},
        ],
    )


@pytest.fixture
def empty_recipe(test_db):
    from src.services import recipe_service

    return recipe_service.create_recipe({"name": "Empty"})
