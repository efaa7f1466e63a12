"""
Fixed expense allocation.

Transaction boundary: Pure computation (no database access).

The business's monthly fixed expenses are turned into an hourly rate by
dividing by the monthly working hours; a recipe then absorbs that rate
for the time it takes to prepare:

    hourly_rate = sum(monthly_value) / monthly_working_hours
    allocation  = hourly_rate x (preparation_minutes / 60)
"""

from decimal import Decimal
from typing import Any, Iterable, Optional

from pricing_tracker.services.exceptions import ConfigurationIncomplete, InvalidInput
from pricing_tracker.utils.constants import ERROR_WORKING_HOURS_MISSING, MINUTES_PER_HOUR

from .entities import ZERO, FixedExpenseRecord, as_decimal


def total_fixed_expenses(fixed_expenses: Iterable[FixedExpenseRecord]) -> Decimal:
    """
    Sum of monthly values; expenses without a value count as 0.

    Examples:
        Rent 1500 + Electricity 400 -> 1900
        [] -> 0
    """
    total = ZERO
    for expense in fixed_expenses:
        if expense.monthly_value is not None:
            total += expense.monthly_value
    return total


def hourly_rate(
    fixed_expenses: Iterable[FixedExpenseRecord],
    monthly_working_hours: Optional[Any],
) -> Decimal:
    """
    Cost of one operating hour.

    Args:
        fixed_expenses: All of the business's fixed expenses
        monthly_working_hours: Operating hours per month

    Returns:
        total_fixed_expenses / monthly_working_hours (0 when there are no expenses)

    Raises:
        ConfigurationIncomplete: If monthly_working_hours is missing or <= 0

    Examples:
        1900 / 160 -> 11.875
    """
    if monthly_working_hours is None:
        raise ConfigurationIncomplete("monthly_working_hours", ERROR_WORKING_HOURS_MISSING)

    hours = as_decimal(monthly_working_hours)
    if hours <= 0:
        raise ConfigurationIncomplete("monthly_working_hours", ERROR_WORKING_HOURS_MISSING)

    return total_fixed_expenses(fixed_expenses) / hours


def allocate(rate: Decimal, preparation_minutes: Any) -> Decimal:
    """
    Fixed expense share of one recipe unit.

    Args:
        rate: Hourly rate from hourly_rate()
        preparation_minutes: Preparation time in minutes (> 0)

    Returns:
        rate x preparation_minutes / 60

    Raises:
        InvalidInput: If preparation_minutes <= 0

    Examples:
        allocate(11.875, 30) -> 5.9375
    """
    minutes = as_decimal(preparation_minutes)
    if minutes <= 0:
        raise InvalidInput(["Preparation time: Must be greater than zero"])
    return rate * (minutes / MINUTES_PER_HOUR)
