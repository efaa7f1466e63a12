"""DTO utilities for service layer.

Provides standardized formatting functions for data transfer objects.
Monetary values stay unrounded inside the pricing engine; these helpers
are the only place where rounding happens.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from pricing_tracker.utils.constants import CURRENCY_SYMBOL, MONEY_PLACES, PERCENT_PLACES

Number = Union[Decimal, float, int, str, None]


def _to_decimal(value: Number) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def cost_to_string(value: Number) -> str:
    """
    Convert a cost value to a 2-decimal string format.

    Args:
        value: Cost value (Decimal, float, int, str, or None)

    Returns:
        String formatted as "12.34" (2 decimal places).
        Returns "0.00" if value is None.

    Examples:
        >>> cost_to_string(Decimal("12.345"))
        '12.35'
        >>> cost_to_string(None)
        '0.00'
    """
    rounded = _to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    return str(rounded)


def percent_to_string(value: Number) -> str:
    """
    Convert a percentage value to a 1-decimal string format.

    Examples:
        >>> percent_to_string(Decimal("23.0769"))
        '23.1'
    """
    rounded = _to_decimal(value).quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)
    return str(rounded)


def format_currency(value: Number) -> str:
    """
    Format a cost for display with the currency symbol.

    Examples:
        >>> format_currency(Decimal("30.8530625"))
        'R$ 30.85'
    """
    return f"{CURRENCY_SYMBOL} {cost_to_string(value)}"
