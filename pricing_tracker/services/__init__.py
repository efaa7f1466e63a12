"""Services package - Business logic layer for Pricing Tracker.

This package contains all service modules that provide business logic
and database operations for the application.

Architecture:
- Pricing engine (services.pricing): pure functions over plain records, no I/O
- Services: Stateless functions organized by entity, keyed by profile_id
- Transactions: Managed via session_scope() context manager
- Exceptions: Consistent error handling via ServiceError hierarchy
- Validation: Input validation before database operations

Service Modules:
- profile_service: Business profile and monthly working hours
- ingredient_service: Ingredient CRUD operations
- packaging_service: Packaging CRUD operations
- fixed_expense_service: Monthly fixed expense CRUD operations
- recipe_service: Recipes and their ingredient lines
- pricing_service: Loads stored records and runs the pricing engine
- report_service: Pricing report rows and CSV export

Infrastructure:
- exceptions: Custom exception classes for service layer errors
- database: Session management and database utilities
- logging_utils: Structured operation logging
- dto_utils: Presentation-time rounding and formatting
"""

from . import (
    database,
    profile_service,
    ingredient_service,
    packaging_service,
    fixed_expense_service,
    recipe_service,
    pricing_service,
    report_service,
)

from .exceptions import (
    ServiceError,
    ValidationError,
    InvalidInput,
    ConfigurationIncomplete,
    DatabaseError,
    ProfileNotFound,
    IngredientNotFound,
    PackagingNotFound,
    RecipeNotFound,
    FixedExpenseNotFound,
)

__all__ = [
    "database",
    "profile_service",
    "ingredient_service",
    "packaging_service",
    "fixed_expense_service",
    "recipe_service",
    "pricing_service",
    "report_service",
    "ServiceError",
    "ValidationError",
    "InvalidInput",
    "ConfigurationIncomplete",
    "DatabaseError",
    "ProfileNotFound",
    "IngredientNotFound",
    "PackagingNotFound",
    "RecipeNotFound",
    "FixedExpenseNotFound",
]
