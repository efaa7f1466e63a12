"""
Report Service - pricing reports and CSV export.

Reports consume PricingResult objects as they are; nothing is recomputed
here except presentation rounding. Three tables are produced, mirroring
the spreadsheet layout users are used to:

- Pricing: one row per recipe with the full cost breakdown
- Ingredients: one row per recipe line with its cost
- Summary: company, date and totals across all priced recipes

CSV files are written as UTF-8 with BOM so spreadsheet programs detect
the encoding.
"""

import csv
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pricing_tracker.services.dto_utils import cost_to_string, percent_to_string
from pricing_tracker.services.logging_utils import get_service_logger, log_operation
from pricing_tracker.services.pricing_service import price_all_recipes
from pricing_tracker.services.profile_service import get_profile
from pricing_tracker.services.pricing import (
    PricingParams,
    PricingResult,
    RecipeRecord,
    aggregate_recipe_costs,
    summarize_pricing_results,
)
from pricing_tracker.utils.constants import CURRENCY_SYMBOL
from pricing_tracker.utils.datetime_utils import report_date

logger = get_service_logger(__name__)

PathLike = Union[str, Path]

PRICING_HEADER = [
    "Recipe",
    f"Ingredient Cost ({CURRENCY_SYMBOL})",
    f"Packaging Cost ({CURRENCY_SYMBOL})",
    f"Fixed Expense Allocation ({CURRENCY_SYMBOL})",
    f"Taxes ({CURRENCY_SYMBOL})",
    f"Commissions ({CURRENCY_SYMBOL})",
    f"Other Expenses ({CURRENCY_SYMBOL})",
    f"Total Cost ({CURRENCY_SYMBOL})",
    f"Desired Profit ({CURRENCY_SYMBOL})",
    f"Suggested Price ({CURRENCY_SYMBOL})",
    "Profit Margin (%)",
    "Preparation Time (min)",
    "Warnings",
]

INGREDIENT_HEADER = [
    "Recipe",
    "Ingredient",
    "Quantity",
    "Unit",
    f"Unit Cost ({CURRENCY_SYMBOL})",
    f"Total Cost ({CURRENCY_SYMBOL})",
]


@dataclass(frozen=True)
class PricingReport:
    """A priced recipe plus what the report prints around it."""

    recipe: RecipeRecord
    result: PricingResult
    params: PricingParams
    company_name: Optional[str] = None


def build_pricing_report(
    recipe: RecipeRecord,
    result: PricingResult,
    params: PricingParams,
    company_name: Optional[str] = None,
) -> PricingReport:
    """Bundle a pricing result with its recipe, parameters and company name."""
    return PricingReport(recipe=recipe, result=result, params=params, company_name=company_name)


def build_profile_reports(
    profile_id: int, params: Optional[PricingParams] = None
) -> List[PricingReport]:
    """
    Price every recipe of a profile and wrap the results as reports.

    Raises:
        ConfigurationIncomplete: If the profile has no monthly working hours
        ProfileNotFound: If the profile does not exist
    """
    if params is None:
        params = PricingParams.defaults()

    profile = get_profile(profile_id)
    return [
        build_pricing_report(recipe, result, params, profile.company_name)
        for recipe, result in price_all_recipes(profile_id, params)
    ]


def _quantity(value: Decimal) -> str:
    return format(value.normalize(), "f")


def pricing_report_rows(reports: Sequence[PricingReport]) -> List[List[str]]:
    """Header plus one breakdown row per report."""
    rows = [list(PRICING_HEADER)]
    for report in reports:
        result = report.result
        rows.append(
            [
                report.recipe.name,
                cost_to_string(result.ingredient_costs),
                cost_to_string(result.packaging_cost),
                cost_to_string(result.fixed_expense_allocation),
                cost_to_string(result.variable_expenses.taxes),
                cost_to_string(result.variable_expenses.commissions),
                cost_to_string(result.variable_expenses.others),
                cost_to_string(result.total_cost),
                cost_to_string(result.desired_profit),
                cost_to_string(result.suggested_price),
                percent_to_string(result.profit_margin_percent),
                _quantity(report.params.preparation_minutes),
                "; ".join(w.message for w in result.warnings),
            ]
        )
    return rows


def ingredient_breakdown_rows(reports: Sequence[PricingReport]) -> List[List[str]]:
    """Header plus one row per recipe line across all reports."""
    rows = [list(INGREDIENT_HEADER)]
    for report in reports:
        breakdown = aggregate_recipe_costs(report.recipe)
        for line in breakdown.lines:
            if line.resolved:
                name = line.ingredient_name
                unit = line.unit.value
            else:
                name = f"(missing ingredient #{line.ingredient_id})"
                unit = ""
            rows.append(
                [
                    report.recipe.name,
                    name,
                    _quantity(line.quantity),
                    unit,
                    cost_to_string(line.cost_per_unit),
                    cost_to_string(line.total),
                ]
            )
    return rows


def summary_rows(
    reports: Sequence[PricingReport], company_name: Optional[str] = None
) -> List[List[str]]:
    """
    Report summary table.

    Args:
        reports: Priced recipes
        company_name: Printed when given (falls back to the reports' company)
    """
    if company_name is None and reports:
        company_name = reports[0].company_name

    summary = summarize_pricing_results([report.result for report in reports])

    rows: List[List[str]] = [["Pricing Report"], []]
    if company_name:
        rows.append(["Company:", company_name])
    rows.append(["Generated:", report_date()])
    rows.append(["Recipes:", str(summary.recipe_count)])
    rows.append([])
    rows.append([f"Total Suggested Price ({CURRENCY_SYMBOL}):", cost_to_string(summary.total_suggested_price)])
    rows.append([f"Total Cost ({CURRENCY_SYMBOL}):", cost_to_string(summary.total_cost)])
    rows.append([f"Total Profit ({CURRENCY_SYMBOL}):", cost_to_string(summary.total_profit)])
    rows.append(["Average Margin (%):", percent_to_string(summary.average_margin_percent)])
    return rows


def _write_rows(rows: List[List[str]], path: PathLike) -> None:
    with open(path, "w", newline="", encoding="utf-8-sig") as f:
        writer = csv.writer(f)
        writer.writerows(rows)


def export_pricing_csv(reports: Sequence[PricingReport], path: PathLike) -> bool:
    """
    Write the pricing table to a CSV file.

    Returns:
        True if the file was written, False if there was nothing to export
        (no file is created in that case)

    Raises:
        OSError: If the file cannot be written
    """
    if not reports:
        return False

    _write_rows(pricing_report_rows(reports), path)
    log_operation(
        logger, operation="export_pricing_csv", outcome="success", path=str(path), rows=len(reports)
    )
    return True


def export_ingredients_csv(reports: Sequence[PricingReport], path: PathLike) -> bool:
    """Write the ingredient breakdown table; False if there are no lines."""
    rows = ingredient_breakdown_rows(reports)
    if len(rows) == 1:
        return False

    _write_rows(rows, path)
    log_operation(
        logger,
        operation="export_ingredients_csv",
        outcome="success",
        path=str(path),
        rows=len(rows) - 1,
    )
    return True


def export_summary_csv(
    reports: Sequence[PricingReport], path: PathLike, company_name: Optional[str] = None
) -> bool:
    """Write the summary table; False if there are no reports."""
    if not reports:
        return False

    _write_rows(summary_rows(reports, company_name), path)
    return True
