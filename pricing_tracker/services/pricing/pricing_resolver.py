"""
Pricing resolver - suggested sale price for one recipe unit.

Transaction boundary: Pure computation (no database access).

Combines the cost aggregator, the fixed expense allocator and the variable
expense cascader, in this order:

    1. ingredient_costs       = sum(quantity x cost_per_unit)
    2. packaging_cost         = packaging.unit_cost or 0
    3. (monthly_working_hours must be configured)
    4. fixed_expense_allocation = hourly_rate x preparation_minutes / 60
    5. base_cost              = 1 + 2 + 4
    6. variable_expenses      = cascade(base_cost, rates)
    7. total_cost             = base_cost + variable_expenses.total
    8. desired_profit         = total_cost x desired_profit% / 100
    9. suggested_price        = total_cost + desired_profit

Every intermediate figure is kept on PricingResult. Nothing is rounded
here; use dto_utils at presentation time.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from pricing_tracker.services.exceptions import ConfigurationIncomplete, InvalidInput
from pricing_tracker.utils.constants import (
    DEFAULT_COMMISSIONS_PERCENT,
    DEFAULT_DESIRED_PROFIT_PERCENT,
    DEFAULT_OTHERS_PERCENT,
    DEFAULT_PREPARATION_MINUTES,
    DEFAULT_TAXES_PERCENT,
    ERROR_INVALID_NON_NEGATIVE,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_REQUIRED_FIELD,
    ERROR_WORKING_HOURS_MISSING,
)
from pricing_tracker.utils.validators import to_decimal

from .cost_aggregator import ingredient_cost, packaging_cost, unresolved_references
from .entities import (
    ZERO,
    BusinessProfileRecord,
    FixedExpenseRecord,
    RecipeRecord,
    UnresolvedReference,
)
from .fixed_expense_allocator import allocate, hourly_rate
from .variable_expense_cascader import (
    HUNDRED,
    VariableExpenseRates,
    VariableExpenses,
    cascade,
    percent_of,
)

PERCENT_FIELDS = (
    ("taxes_percent", "Taxes"),
    ("commissions_percent", "Commissions"),
    ("others_percent", "Other expenses"),
    ("desired_profit_percent", "Desired profit"),
)


@dataclass(frozen=True)
class PricingParams:
    """User-entered pricing parameters.

    Percentages are plain percent values (8 means 8%) with no upper bound.
    Construction validates every field, so an invalid PricingParams never
    reaches the pricing functions.

    Attributes:
        preparation_minutes: Time to prepare one unit (> 0)
        taxes_percent: Taxes on the base cost
        commissions_percent: Sales commissions on the base cost
        others_percent: Other variable charges on the base cost
        desired_profit_percent: Profit on top of the total cost

    Raises:
        InvalidInput: If preparation_minutes is not positive or any
            percentage is non-numeric or negative
    """

    preparation_minutes: Decimal
    taxes_percent: Decimal = ZERO
    commissions_percent: Decimal = ZERO
    others_percent: Decimal = ZERO
    desired_profit_percent: Decimal = ZERO

    def __post_init__(self):
        errors: List[str] = []

        minutes = to_decimal(self.preparation_minutes)
        if self.preparation_minutes is None:
            errors.append(f"Preparation time: {ERROR_REQUIRED_FIELD}")
        elif minutes is None:
            errors.append(f"Preparation time: {ERROR_INVALID_NUMBER}")
        elif minutes <= 0:
            errors.append(f"Preparation time: {ERROR_INVALID_POSITIVE}")
        else:
            object.__setattr__(self, "preparation_minutes", minutes)

        for attr, label in PERCENT_FIELDS:
            raw = getattr(self, attr)
            if raw is None:
                object.__setattr__(self, attr, ZERO)
                continue
            value = to_decimal(raw)
            if value is None:
                errors.append(f"{label}: {ERROR_INVALID_NUMBER}")
            elif value < 0:
                errors.append(f"{label}: {ERROR_INVALID_NON_NEGATIVE}")
            else:
                object.__setattr__(self, attr, value)

        if errors:
            raise InvalidInput(errors)

    @classmethod
    def defaults(cls) -> "PricingParams":
        """Parameters pre-filled in a new pricing form."""
        return cls(
            preparation_minutes=DEFAULT_PREPARATION_MINUTES,
            taxes_percent=DEFAULT_TAXES_PERCENT,
            commissions_percent=DEFAULT_COMMISSIONS_PERCENT,
            others_percent=DEFAULT_OTHERS_PERCENT,
            desired_profit_percent=DEFAULT_DESIRED_PROFIT_PERCENT,
        )

    @classmethod
    def from_input(cls, data: Mapping[str, Any]) -> "PricingParams":
        """
        Build parameters from raw form or CLI values.

        Blank percentages count as 0; a blank preparation time is an error.

        Args:
            data: Mapping with any of the field names; values may be strings

        Raises:
            InvalidInput: If any value is invalid
        """

        def blank_to_none(value: Any) -> Any:
            if isinstance(value, str) and value.strip() == "":
                return None
            return value

        return cls(
            preparation_minutes=blank_to_none(data.get("preparation_minutes")),
            taxes_percent=blank_to_none(data.get("taxes_percent")),
            commissions_percent=blank_to_none(data.get("commissions_percent")),
            others_percent=blank_to_none(data.get("others_percent")),
            desired_profit_percent=blank_to_none(data.get("desired_profit_percent")),
        )

    @property
    def variable_rates(self) -> VariableExpenseRates:
        return VariableExpenseRates(
            taxes_percent=self.taxes_percent,
            commissions_percent=self.commissions_percent,
            others_percent=self.others_percent,
        )


@dataclass(frozen=True)
class PricingResult:
    """Itemized cost breakdown and suggested price for one recipe unit.

    Attributes:
        ingredient_costs: Sum of ingredient line costs
        packaging_cost: Packaging unit cost (0 if none)
        hourly_rate: Fixed expenses per operating hour
        fixed_expense_allocation: Share of fixed expenses for the preparation time
        base_cost: ingredient_costs + packaging_cost + fixed_expense_allocation
        variable_expenses: Taxes, commissions, others and their total
        total_cost: base_cost + variable_expenses.total
        desired_profit: Profit on top of total_cost
        suggested_price: total_cost + desired_profit
        warnings: References that could not be resolved (costed as 0)
    """

    ingredient_costs: Decimal
    packaging_cost: Decimal
    hourly_rate: Decimal
    fixed_expense_allocation: Decimal
    base_cost: Decimal
    variable_expenses: VariableExpenses
    total_cost: Decimal
    desired_profit: Decimal
    suggested_price: Decimal
    warnings: Tuple[UnresolvedReference, ...] = field(default_factory=tuple)

    @property
    def is_complete(self) -> bool:
        """False when the figures are based on missing ingredient or packaging data."""
        return not self.warnings

    @property
    def profit_margin_percent(self) -> Decimal:
        """Desired profit as a percentage of the suggested price (0 for a free item)."""
        if self.suggested_price == 0:
            return ZERO
        return self.desired_profit / self.suggested_price * HUNDRED

    def to_dict(self) -> Dict[str, Any]:
        """Unrounded breakdown keyed like the report columns."""
        return {
            "ingredient_costs": self.ingredient_costs,
            "packaging_cost": self.packaging_cost,
            "hourly_rate": self.hourly_rate,
            "fixed_expense_allocation": self.fixed_expense_allocation,
            "base_cost": self.base_cost,
            "variable_expenses": self.variable_expenses.to_dict(),
            "total_cost": self.total_cost,
            "desired_profit": self.desired_profit,
            "suggested_price": self.suggested_price,
            "profit_margin_percent": self.profit_margin_percent,
            "warnings": [w.message for w in self.warnings],
        }


def resolve(
    recipe: RecipeRecord,
    fixed_expenses: Iterable[FixedExpenseRecord],
    profile: BusinessProfileRecord,
    params: PricingParams,
) -> PricingResult:
    """
    Compute the full cost breakdown and suggested price of a recipe.

    The function has no memory between calls and never mutates its inputs:
    identical inputs give identical results.

    Args:
        recipe: Recipe with resolved (or unresolved) references
        fixed_expenses: All of the owner's fixed expenses
        profile: Owner profile (monthly_working_hours is required)
        params: Validated pricing parameters

    Returns:
        PricingResult

    Raises:
        ConfigurationIncomplete: If the profile has no positive monthly working hours
    """
    ingredient_costs = ingredient_cost(recipe)
    packaging = packaging_cost(recipe)

    hours = profile.monthly_working_hours
    if hours is None or hours <= 0:
        raise ConfigurationIncomplete("monthly_working_hours", ERROR_WORKING_HOURS_MISSING)

    rate = hourly_rate(fixed_expenses, hours)
    allocation = allocate(rate, params.preparation_minutes)

    base_cost = ingredient_costs + packaging + allocation
    variable_expenses = cascade(base_cost, params.variable_rates)
    total_cost = base_cost + variable_expenses.total
    desired_profit = percent_of(total_cost, params.desired_profit_percent)
    suggested_price = total_cost + desired_profit

    return PricingResult(
        ingredient_costs=ingredient_costs,
        packaging_cost=packaging,
        hourly_rate=rate,
        fixed_expense_allocation=allocation,
        base_cost=base_cost,
        variable_expenses=variable_expenses,
        total_cost=total_cost,
        desired_profit=desired_profit,
        suggested_price=suggested_price,
        warnings=tuple(unresolved_references(recipe)),
    )
