"""Service layer exception classes for Pricing Tracker.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   └── InvalidInput
    ├── ConfigurationIncomplete
    ├── ProfileNotFound
    ├── IngredientNotFound
    ├── PackagingNotFound
    ├── RecipeNotFound
    ├── FixedExpenseNotFound
    └── DatabaseError

Missing recipe references are not exceptions: the cost aggregator records
them as UnresolvedReference entries (see services.pricing.entities) and
keeps going.
"""

from typing import Optional


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class ValidationError(ServiceError):
    """Raised when data validation fails."""

    def __init__(self, errors: list):
        self.errors = errors
        error_msg = "; ".join(errors)
        super().__init__(f"Validation failed: {error_msg}")


class InvalidInput(ValidationError):
    """Raised when a quantity, cost, time or percentage is non-numeric or negative.

    Args:
        errors: List of "Field: message" strings

    Example:
        >>> raise InvalidInput(["Quantity: Must be zero or greater"])
        InvalidInput: Validation failed: Quantity: Must be zero or greater
    """

    pass


class ConfigurationIncomplete(ServiceError):
    """Raised when a pricing calculation needs configuration the profile lacks.

    Args:
        setting: Name of the missing setting
        message: Actionable message shown to the user

    Example:
        >>> raise ConfigurationIncomplete("monthly_working_hours", "Set your working hours")
        ConfigurationIncomplete: Set your working hours
    """

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(message)


class ProfileNotFound(ServiceError):
    """Raised when a business profile cannot be found by ID."""

    def __init__(self, profile_id: int):
        self.profile_id = profile_id
        super().__init__(f"Business profile with ID {profile_id} not found")


class IngredientNotFound(ServiceError):
    """Raised when an ingredient cannot be found by ID for its owner."""

    def __init__(self, ingredient_id: int):
        self.ingredient_id = ingredient_id
        super().__init__(f"Ingredient with ID {ingredient_id} not found")


class PackagingNotFound(ServiceError):
    """Raised when a packaging cannot be found by ID for its owner."""

    def __init__(self, packaging_id: int):
        self.packaging_id = packaging_id
        super().__init__(f"Packaging with ID {packaging_id} not found")


class RecipeNotFound(ServiceError):
    """Raised when a recipe cannot be found by ID for its owner."""

    def __init__(self, recipe_id: int):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with ID {recipe_id} not found")


class FixedExpenseNotFound(ServiceError):
    """Raised when a fixed expense cannot be found by ID for its owner."""

    def __init__(self, expense_id: int):
        self.expense_id = expense_id
        super().__init__(f"Fixed expense with ID {expense_id} not found")


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
