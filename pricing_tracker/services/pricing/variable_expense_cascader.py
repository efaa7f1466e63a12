"""
Variable expenses charged as percentages of the base cost.

Transaction boundary: Pure computation (no database access).

Taxes, commissions and other charges are each computed from the same base
cost and then added together. They do not compound on each other:

    taxes       = base x taxes% / 100
    commissions = base x commissions% / 100
    others      = base x others% / 100
    total       = taxes + commissions + others
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .entities import ZERO, as_decimal

HUNDRED = Decimal("100")


def _rate(value: Any) -> Decimal:
    """Missing or negative percentages count as 0."""
    if value is None:
        return ZERO
    rate = as_decimal(value)
    if rate < 0:
        return ZERO
    return rate


def percent_of(amount: Decimal, percent: Any) -> Decimal:
    """Return ``percent`` percent of ``amount`` (8 means 8%)."""
    return amount * (_rate(percent) / HUNDRED)


@dataclass(frozen=True)
class VariableExpenseRates:
    """Percentages for the three variable expense components."""

    taxes_percent: Decimal = ZERO
    commissions_percent: Decimal = ZERO
    others_percent: Decimal = ZERO

    def __post_init__(self):
        object.__setattr__(self, "taxes_percent", _rate(self.taxes_percent))
        object.__setattr__(self, "commissions_percent", _rate(self.commissions_percent))
        object.__setattr__(self, "others_percent", _rate(self.others_percent))

    @property
    def combined_percent(self) -> Decimal:
        return self.taxes_percent + self.commissions_percent + self.others_percent


@dataclass(frozen=True)
class VariableExpenses:
    """Variable expense amounts for one base cost."""

    taxes: Decimal
    commissions: Decimal
    others: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "taxes": self.taxes,
            "commissions": self.commissions,
            "others": self.others,
            "total": self.total,
        }


def cascade(base_cost: Any, rates: VariableExpenseRates) -> VariableExpenses:
    """
    Apply the variable expense percentages to a base cost.

    Args:
        base_cost: Ingredient + packaging + fixed expense allocation
        rates: Percentages for taxes, commissions and others

    Returns:
        VariableExpenses with each component and their total

    Examples:
        cascade(100, rates(8, 5, 2)) -> taxes 8, commissions 5, others 2, total 15
    """
    base = as_decimal(base_cost)
    taxes = percent_of(base, rates.taxes_percent)
    commissions = percent_of(base, rates.commissions_percent)
    others = percent_of(base, rates.others_percent)
    return VariableExpenses(
        taxes=taxes,
        commissions=commissions,
        others=others,
        total=taxes + commissions + others,
    )
