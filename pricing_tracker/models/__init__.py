"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .enums import MeasurementUnit
from .business_profile import BusinessProfile
from .ingredient import Ingredient
from .packaging import Packaging
from .recipe import Recipe, RecipeLine
from .fixed_expense import FixedExpense

__all__ = [
    "Base",
    "BaseModel",
    "MeasurementUnit",
    "BusinessProfile",
    "Ingredient",
    "Packaging",
    "Recipe",
    "RecipeLine",
    "FixedExpense",
]
