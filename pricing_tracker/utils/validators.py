"""
Input validation functions for the Pricing Tracker application.

This module provides validation functions for all user inputs including:
- Numeric validation (positive, non-negative)
- String validation (length, required fields)
- Unit validation
- Whole-record validation for ingredients, packagings, recipes,
  fixed expenses and business profiles

Field validators return a (is_valid, error_message) tuple. Record
validators return (is_valid, errors) so services can raise a single
InvalidInput with every problem listed.

Negative or non-numeric values are rejected here and never coerced, so
the pricing engine only ever sees clean Decimals.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    ALL_UNITS,
    MAX_NAME_LENGTH,
    MAX_COMPANY_NAME_LENGTH,
    MAX_IMAGE_REF_LENGTH,
    MAX_MONTHLY_WORKING_HOURS,
    ERROR_REQUIRED_FIELD,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_INVALID_NON_NEGATIVE,
    ERROR_INVALID_UNIT,
    ERROR_INVALID_TEXT,
)


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a user-supplied value into a finite Decimal.

    Args:
        value: int, float, Decimal or numeric string (comma decimal
               separators are accepted, e.g. "4,50")

    Returns:
        Decimal value, or None if the value is not a finite number
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if value == "":
            return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not result.is_finite():
        return None
    return result


def validate_required_string(value: Optional[str], field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a string field is not empty.

    Args:
        value: The string value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"
    if not isinstance(value, str):
        return False, f"{field_name}: {ERROR_INVALID_TEXT}"
    return True, ""


def validate_string_length(
    value: Optional[str], max_length: int, field_name: str = "Field"
) -> Tuple[bool, str]:
    """Validate that a string doesn't exceed maximum length (None passes)."""
    if value is None:
        return True, ""
    if not isinstance(value, str):
        return False, f"{field_name}: {ERROR_INVALID_TEXT}"
    if len(value) > max_length:
        return False, f"{field_name}: Must be {max_length} characters or less"
    return True, ""


def validate_positive_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a positive number (> 0).

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    num_value = to_decimal(value)
    if num_value is None:
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if num_value <= 0:
        return False, f"{field_name}: {ERROR_INVALID_POSITIVE}"
    return True, ""


def validate_non_negative_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a non-negative number (>= 0).

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    num_value = to_decimal(value)
    if num_value is None:
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if num_value < 0:
        return False, f"{field_name}: {ERROR_INVALID_NON_NEGATIVE}"
    return True, ""


def validate_unit(unit: Optional[str], field_name: str = "Unit") -> Tuple[bool, str]:
    """Validate that a unit is in the list of valid units."""
    if not unit:
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"

    if str(unit).lower() not in ALL_UNITS:
        return False, f"{field_name}: {ERROR_INVALID_UNIT}"

    return True, ""


def _collect(errors: List[str], result: Tuple[bool, str]) -> None:
    is_valid, message = result
    if not is_valid:
        errors.append(message)


def _validate_required_text(value: Any, max_length: int, label: str, errors: List[str]) -> None:
    is_valid, message = validate_required_string(value, label)
    if not is_valid:
        errors.append(message)
        return
    _collect(errors, validate_string_length(value, max_length, label))


def _validate_name(data: Dict, errors: List[str], partial: bool) -> None:
    if partial and "name" not in data:
        return
    _validate_required_text(data.get("name"), MAX_NAME_LENGTH, "Name", errors)


def validate_ingredient_data(data: Dict, partial: bool = False) -> Tuple[bool, List[str]]:
    """
    Validate ingredient data.

    Args:
        data: Dictionary with name, unit and cost_per_unit
        partial: If True, only validate keys that are present (updates)

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors: List[str] = []
    _validate_name(data, errors, partial)

    if not partial or "unit" in data:
        _collect(errors, validate_unit(data.get("unit")))

    if not partial or "cost_per_unit" in data:
        _collect(errors, validate_non_negative_number(data.get("cost_per_unit"), "Cost per unit"))

    return len(errors) == 0, errors


def validate_packaging_data(data: Dict, partial: bool = False) -> Tuple[bool, List[str]]:
    """Validate packaging data (name, unit_cost)."""
    errors: List[str] = []
    _validate_name(data, errors, partial)

    if not partial or "unit_cost" in data:
        _collect(errors, validate_non_negative_number(data.get("unit_cost"), "Unit cost"))

    return len(errors) == 0, errors


def validate_fixed_expense_data(data: Dict, partial: bool = False) -> Tuple[bool, List[str]]:
    """Validate fixed expense data (name, monthly_value)."""
    errors: List[str] = []
    _validate_name(data, errors, partial)

    if not partial or "monthly_value" in data:
        _collect(
            errors, validate_non_negative_number(data.get("monthly_value"), "Monthly value")
        )

    return len(errors) == 0, errors


def validate_monthly_working_hours(value: Any) -> Tuple[bool, str]:
    """
    Validate the business profile's monthly working hours.

    Hours must be positive and fit in one calendar month.
    """
    is_valid, message = validate_positive_number(value, "Monthly working hours")
    if not is_valid:
        return is_valid, message
    if to_decimal(value) > MAX_MONTHLY_WORKING_HOURS:
        return False, f"Monthly working hours: Must be {MAX_MONTHLY_WORKING_HOURS} or less"
    return True, ""


def validate_profile_data(data: Dict, partial: bool = False) -> Tuple[bool, List[str]]:
    """
    Validate business profile data.

    monthly_working_hours may be None (not configured yet); when present it
    must be positive.
    """
    errors: List[str] = []

    if not partial or "company_name" in data:
        _validate_required_text(
            data.get("company_name"), MAX_COMPANY_NAME_LENGTH, "Company name", errors
        )

    if data.get("monthly_working_hours") is not None:
        _collect(errors, validate_monthly_working_hours(data["monthly_working_hours"]))

    return len(errors) == 0, errors


def validate_recipe_lines(lines: List[Dict]) -> Tuple[bool, List[str]]:
    """
    Validate recipe lines.

    Args:
        lines: List of dicts with ingredient_id and quantity

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors: List[str] = []
    seen = set()

    for index, line in enumerate(lines, start=1):
        label = f"Line {index}"
        ingredient_id = line.get("ingredient_id")
        if ingredient_id is None:
            errors.append(f"{label} ingredient: {ERROR_REQUIRED_FIELD}")
        elif ingredient_id in seen:
            errors.append(f"{label} ingredient: Ingredient {ingredient_id} is listed twice")
        else:
            seen.add(ingredient_id)

        _collect(errors, validate_non_negative_number(line.get("quantity"), f"{label} quantity"))

    return len(errors) == 0, errors


def validate_recipe_data(data: Dict, partial: bool = False) -> Tuple[bool, List[str]]:
    """Validate recipe header data (name, image_ref)."""
    errors: List[str] = []
    _validate_name(data, errors, partial)
    _collect(
        errors, validate_string_length(data.get("image_ref"), MAX_IMAGE_REF_LENGTH, "Image")
    )
    return len(errors) == 0, errors
