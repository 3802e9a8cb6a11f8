"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across calculation and CRUD services.

Usage:
    from src.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    # Log successful calculation
    log_operation(
        logger,
        operation="calculate_arr",
        outcome="success",
        recipe_id=12,
        scaling_factor=1.5,
    )

    # Log rejected input
    log_operation(
        logger,
        operation="calculate_arr",
        outcome="invalid_amount",
        level=logging.WARNING,
        recipe_id=12,
        new_amount=-5,
    )
"""

import logging
from typing import Any

LOGGER_PREFIX = "recipe_arr.services"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger named '<LOGGER_PREFIX>.<module>'

    Example:
        >>> get_service_logger("src.services.recipe_service").name
        'recipe_arr.services.recipe_service'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    Emits "<operation>: <outcome>" with the operation, outcome and context
    fields attached to the record via 'extra'.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "calculate_arr", "delete_ingredient")
        outcome: Outcome description (e.g., "success", "reference_not_in_recipe")
        level: Log level (default: INFO)
        **context: Additional context fields (entity IDs, amounts, error text).
            Keys must not collide with LogRecord attributes such as "name"
            or "message".
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)
