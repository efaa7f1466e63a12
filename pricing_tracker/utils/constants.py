"""
Constants and enumerations for the Pricing Tracker application.

This module defines all system-wide constants including:
- Measurement units for ingredients
- Validation limits and error messages
- Default pricing parameters
- Application metadata
"""

from decimal import Decimal
from typing import List

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Small Batch Pricing Tracker"
APP_VERSION = "0.1.0"
DATABASE_FILENAME = "pricing_tracker.db"

# ============================================================================
# Measurement Units
# ============================================================================

# Weight units
WEIGHT_UNITS: List[str] = [
    "kg",  # Kilogram
    "g",  # Gram
    "mg",  # Milligram
]

# Volume units
VOLUME_UNITS: List[str] = [
    "l",  # Liter
    "ml",  # Milliliter
]

# Count units
COUNT_UNITS: List[str] = [
    "unit",
    "dozen",
    "package",
]

ALL_UNITS: List[str] = WEIGHT_UNITS + VOLUME_UNITS + COUNT_UNITS

# ============================================================================
# Money and Display
# ============================================================================

CURRENCY_SYMBOL = "R$"
MONEY_PLACES = Decimal("0.01")
PERCENT_PLACES = Decimal("0.1")
REPORT_DATE_FORMAT = "%d/%m/%Y"

# ============================================================================
# Pricing Defaults
# ============================================================================

DEFAULT_PREPARATION_MINUTES = 30
DEFAULT_TAXES_PERCENT = Decimal("8")
DEFAULT_COMMISSIONS_PERCENT = Decimal("5")
DEFAULT_OTHERS_PERCENT = Decimal("2")
DEFAULT_DESIRED_PROFIT_PERCENT = Decimal("30")

# 8 hours/day x 20 working days
DEFAULT_MONTHLY_WORKING_HOURS = Decimal("160")

MINUTES_PER_HOUR = Decimal("60")

# ============================================================================
# Validation Limits
# ============================================================================

MAX_NAME_LENGTH = 200
MAX_COMPANY_NAME_LENGTH = 200
MAX_IMAGE_REF_LENGTH = 500
MAX_MONTHLY_WORKING_HOURS = Decimal("744")  # 31 days x 24 hours

# ============================================================================
# Error Messages
# ============================================================================

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_NUMBER = "Must be a valid number"
ERROR_INVALID_POSITIVE = "Must be greater than zero"
ERROR_INVALID_NON_NEGATIVE = "Must be zero or greater"
ERROR_INVALID_UNIT = "Invalid unit"
ERROR_INVALID_TEXT = "Must be text"
ERROR_WORKING_HOURS_MISSING = (
    "Monthly working hours are not configured. "
    "Set them in the business profile before calculating prices."
)
