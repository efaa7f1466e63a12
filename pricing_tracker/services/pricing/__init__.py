"""
Pricing engine package.

Pure, synchronous computations over in-memory records:
- entities: Plain records and optional references consumed by the engine
- cost_aggregator: Ingredient and packaging cost of a recipe
- fixed_expense_allocator: Hourly rate and per-recipe fixed expense share
- variable_expense_cascader: Percentage-based taxes, commissions and others
- pricing_resolver: Full breakdown and suggested price
- dashboard: Read-only summaries for the dashboard and reports

Usage:
    from pricing_tracker.services.pricing import PricingParams, resolve

    result = resolve(recipe, fixed_expenses, profile, PricingParams.defaults())
    print(result.suggested_price)
"""

from .entities import (
    BusinessProfileRecord,
    FixedExpenseRecord,
    IngredientRecord,
    IngredientRef,
    LineCost,
    PackagingRecord,
    PackagingRef,
    RecipeCostBreakdown,
    RecipeLineRecord,
    RecipeRecord,
    UnresolvedReference,
)
from .cost_aggregator import (
    aggregate_recipe_costs,
    ingredient_cost,
    line_cost,
    packaging_cost,
    unresolved_references,
)
from .fixed_expense_allocator import allocate, hourly_rate, total_fixed_expenses
from .variable_expense_cascader import VariableExpenseRates, VariableExpenses, cascade
from .pricing_resolver import PricingParams, PricingResult, resolve
from .dashboard import (
    DashboardSummary,
    PricingSummary,
    RecipeChartCost,
    build_dashboard_summary,
    expense_distribution,
    recipe_chart_cost,
    recipe_chart_costs,
    summarize_pricing_results,
    total_monthly_fixed_expenses,
)

__all__ = [
    # Entities
    "BusinessProfileRecord",
    "FixedExpenseRecord",
    "IngredientRecord",
    "IngredientRef",
    "LineCost",
    "PackagingRecord",
    "PackagingRef",
    "RecipeCostBreakdown",
    "RecipeLineRecord",
    "RecipeRecord",
    "UnresolvedReference",
    # Cost aggregation
    "aggregate_recipe_costs",
    "ingredient_cost",
    "line_cost",
    "packaging_cost",
    "unresolved_references",
    # Fixed expenses
    "allocate",
    "hourly_rate",
    "total_fixed_expenses",
    # Variable expenses
    "VariableExpenseRates",
    "VariableExpenses",
    "cascade",
    # Resolver
    "PricingParams",
    "PricingResult",
    "resolve",
    # Dashboard
    "DashboardSummary",
    "PricingSummary",
    "RecipeChartCost",
    "build_dashboard_summary",
    "expense_distribution",
    "recipe_chart_cost",
    "recipe_chart_costs",
    "summarize_pricing_results",
    "total_monthly_fixed_expenses",
]
