"""
Dashboard and report aggregates.

Transaction boundary: Pure computation (no database access).

These are read-only summaries over entity collections and pricing results.
They never call the fixed expense allocator or the pricing resolver.

Note: recipe_chart_costs() deliberately shows ingredient + packaging cost
only, without the fixed expense allocation the pricing page adds. The two
figures are different aggregates and must stay separately named.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from pricing_tracker.services.exceptions import InvalidInput
from pricing_tracker.utils.constants import ERROR_INVALID_NON_NEGATIVE

from .cost_aggregator import ingredient_cost, packaging_cost
from .entities import ZERO, FixedExpenseRecord, RecipeRecord
from .pricing_resolver import PricingResult
from .variable_expense_cascader import HUNDRED


@dataclass(frozen=True)
class RecipeChartCost:
    """Direct cost (ingredients + packaging) of one recipe for charting."""

    recipe_id: Optional[int]
    name: str
    cost: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Headline numbers shown on the dashboard."""

    recipe_count: int
    ingredient_count: int
    packaging_count: int
    total_monthly_fixed_expenses: Decimal


@dataclass(frozen=True)
class PricingSummary:
    """Totals across several pricing results (report summary sheet)."""

    recipe_count: int
    total_suggested_price: Decimal
    total_cost: Decimal
    total_profit: Decimal
    average_margin_percent: Decimal


def total_monthly_fixed_expenses(fixed_expenses: Iterable[FixedExpenseRecord]) -> Decimal:
    """
    Sum of monthly values across all fixed expenses.

    Missing or zero values count as 0.
    """
    total = ZERO
    for expense in fixed_expenses:
        if expense.monthly_value:
            total += expense.monthly_value
    return total


def _limited(items: list, limit: Optional[int]) -> list:
    if limit is None:
        return items
    if limit < 0:
        raise InvalidInput([f"Chart limit: {ERROR_INVALID_NON_NEGATIVE}"])
    return items[:limit]


def recipe_chart_cost(recipe: RecipeRecord) -> Decimal:
    """Ingredient cost plus packaging cost of one recipe."""
    return ingredient_cost(recipe) + packaging_cost(recipe)


def recipe_chart_costs(
    recipes: Iterable[RecipeRecord], limit: Optional[int] = None
) -> List[RecipeChartCost]:
    """
    Per-recipe direct cost for the dashboard cost chart.

    Args:
        recipes: Recipes to chart, in display order
        limit: Optional maximum number of recipes to include (>= 0)

    Returns:
        One RecipeChartCost per recipe, in input order

    Raises:
        InvalidInput: If limit is negative
    """
    recipes = _limited(list(recipes), limit)
    return [
        RecipeChartCost(recipe_id=recipe.id, name=recipe.name, cost=recipe_chart_cost(recipe))
        for recipe in recipes
    ]


def expense_distribution(
    fixed_expenses: Iterable[FixedExpenseRecord], limit: Optional[int] = None
) -> List[Tuple[str, Optional[Decimal]]]:
    """
    (name, monthly_value) pairs for the expense distribution chart.

    Values are passed through unmodified. A negative limit raises
    InvalidInput.
    """
    pairs = [(expense.name, expense.monthly_value) for expense in fixed_expenses]
    return _limited(pairs, limit)


def build_dashboard_summary(
    recipes: Sequence[RecipeRecord],
    ingredient_count: int,
    packaging_count: int,
    fixed_expenses: Iterable[FixedExpenseRecord],
) -> DashboardSummary:
    """Assemble the dashboard headline numbers."""
    return DashboardSummary(
        recipe_count=len(recipes),
        ingredient_count=ingredient_count,
        packaging_count=packaging_count,
        total_monthly_fixed_expenses=total_monthly_fixed_expenses(fixed_expenses),
    )


def summarize_pricing_results(results: Sequence[PricingResult]) -> PricingSummary:
    """
    Totals across pricing results.

    The average margin is total profit over total suggested price, so large
    items weigh more than small ones. It is 0 when there is nothing priced.
    """
    total_price = ZERO
    total_cost = ZERO
    total_profit = ZERO
    for result in results:
        total_price += result.suggested_price
        total_cost += result.total_cost
        total_profit += result.desired_profit

    if total_price == 0:
        average_margin = ZERO
    else:
        average_margin = total_profit / total_price * HUNDRED

    return PricingSummary(
        recipe_count=len(results),
        total_suggested_price=total_price,
        total_cost=total_cost,
        total_profit=total_profit,
        average_margin_percent=average_margin,
    )
