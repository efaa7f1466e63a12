"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across pricing, CRUD and export
operations.

Usage:
    from pricing_tracker.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    # Log successful operation
    log_operation(
        logger,
        operation="price_recipe",
        outcome="success",
        recipe_id=12,
        suggested_price="30.85",
    )

    # Log a degraded result
    log_operation(
        logger,
        operation="price_recipe",
        outcome="incomplete_data",
        level=logging.WARNING,
        recipe_id=12,
        unresolved=["ingredient:7"],
    )
"""

import logging
from typing import Any

LOGGER_PREFIX = "pricing_tracker.services"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance with the 'pricing_tracker.services' prefix.

    Example:
        >>> logger = get_service_logger(__name__)
        >>> logger.name
        'pricing_tracker.services.pricing_service'
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

    The message is always "<operation>: <outcome>"; the context fields are
    attached to the record through ``extra`` for structured handlers.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "price_recipe", "create_ingredient")
        outcome: Outcome description (e.g., "success", "incomplete_data")
        level: Log level (default: INFO). Use DEBUG for verbose/frequent logs.
        **context: Additional context fields (entity IDs, error details, etc.)
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)
