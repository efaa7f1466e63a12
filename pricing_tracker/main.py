"""
Command-line entry point for Small Batch Pricing Tracker.

Usage Examples:
    # Create the database tables
    python -m pricing_tracker.main init-db

    # Price one recipe with the default parameters
    python -m pricing_tracker.main price --profile 1 --recipe 3

    # Price with custom parameters
    python -m pricing_tracker.main price --profile 1 --recipe 3 --minutes 45 --profit 40

    # Show the dashboard
    python -m pricing_tracker.main dashboard --profile 1

    # Export every recipe's pricing (plus the ingredient breakdown)
    python -m pricing_tracker.main export-csv --profile 1 -o pricing.csv --ingredients lines.csv
"""

import argparse
import logging
import sys
from typing import List, Optional

from pricing_tracker.services import pricing_service, report_service
from pricing_tracker.services.database import initialize_app_database
from pricing_tracker.services.dto_utils import format_currency, percent_to_string
from pricing_tracker.services.exceptions import (
    ConfigurationIncomplete,
    ServiceError,
    ValidationError,
)
from pricing_tracker.services.pricing import PricingParams
from pricing_tracker.utils.config import get_config
from pricing_tracker.utils.constants import APP_NAME, APP_VERSION
from pricing_tracker.utils.datetime_utils import report_file_stamp

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or greater")
    return number


def _params_from_args(args) -> PricingParams:
    return PricingParams.from_input(
        {
            "preparation_minutes": args.minutes,
            "taxes_percent": args.taxes,
            "commissions_percent": args.commissions,
            "others_percent": args.others,
            "desired_profit_percent": args.profit,
        }
    )


def init_db_cmd() -> int:
    """Create the database tables."""
    config = get_config()
    initialize_app_database()
    print(f"Database ready: {config.database_url}")
    return 0


def price_cmd(args) -> int:
    """Print the cost breakdown and suggested price of one recipe."""
    params = _params_from_args(args)
    result = pricing_service.price_recipe(args.profile, args.recipe, params)

    print(f"Recipe {args.recipe}")
    print("-" * 40)
    print(f"Ingredients:              {format_currency(result.ingredient_costs)}")
    print(f"Packaging:                {format_currency(result.packaging_cost)}")
    print(f"Fixed expense allocation: {format_currency(result.fixed_expense_allocation)}")
    print(f"Base cost:                {format_currency(result.base_cost)}")
    print(f"Taxes:                    {format_currency(result.variable_expenses.taxes)}")
    print(f"Commissions:              {format_currency(result.variable_expenses.commissions)}")
    print(f"Other expenses:           {format_currency(result.variable_expenses.others)}")
    print(f"Total cost:               {format_currency(result.total_cost)}")
    print(f"Desired profit:           {format_currency(result.desired_profit)}")
    print(f"Suggested price:          {format_currency(result.suggested_price)}")
    print(f"Profit margin:            {percent_to_string(result.profit_margin_percent)}%")

    for warning in result.warnings:
        print(f"WARNING: {warning.message}")
    return 0


def dashboard_cmd(args) -> int:
    """Print the dashboard summary and chart data."""
    view = pricing_service.get_dashboard(args.profile, chart_limit=args.limit)
    summary = view.summary

    print("Dashboard")
    print("---------")
    print(f"Recipes:      {summary.recipe_count}")
    print(f"Ingredients:  {summary.ingredient_count}")
    print(f"Packagings:   {summary.packaging_count}")
    print(f"Fixed expenses per month: {format_currency(summary.total_monthly_fixed_expenses)}")

    if view.recipe_costs:
        print("\nRecipe costs (ingredients + packaging):")
        for item in view.recipe_costs:
            print(f"  {item.name}: {format_currency(item.cost)}")

    if view.expense_distribution:
        print("\nFixed expenses:")
        for name, value in view.expense_distribution:
            print(f"  {name}: {format_currency(value)}")
    return 0


def export_csv_cmd(args) -> int:
    """Price every recipe of a profile and write the CSV reports."""
    params = _params_from_args(args)
    reports = report_service.build_profile_reports(args.profile, params)
    output = args.output or f"pricing_{report_file_stamp()}.csv"

    if not report_service.export_pricing_csv(reports, output):
        print("Nothing to export: the profile has no recipes")
        return 0
    print(f"Pricing report: {output} ({len(reports)} recipes)")

    if args.ingredients:
        if report_service.export_ingredients_csv(reports, args.ingredients):
            print(f"Ingredient breakdown: {args.ingredients}")
        else:
            print("Ingredient breakdown skipped: no recipe lines")

    if args.summary:
        report_service.export_summary_csv(reports, args.summary)
        print(f"Summary: {args.summary}")
    return 0


def _add_pricing_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = PricingParams.defaults()
    parser.add_argument("--profile", type=int, required=True, help="Business profile ID")
    parser.add_argument(
        "--minutes",
        default=str(defaults.preparation_minutes),
        help="Preparation time in minutes (default: %(default)s)",
    )
    parser.add_argument(
        "--taxes", default=str(defaults.taxes_percent), help="Taxes %% (default: %(default)s)"
    )
    parser.add_argument(
        "--commissions",
        default=str(defaults.commissions_percent),
        help="Commissions %% (default: %(default)s)",
    )
    parser.add_argument(
        "--others",
        default=str(defaults.others_percent),
        help="Other variable expenses %% (default: %(default)s)",
    )
    parser.add_argument(
        "--profit",
        default=str(defaults.desired_profit_percent),
        help="Desired profit %% (default: %(default)s)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pricing-tracker",
        description=f"{APP_NAME} {APP_VERSION} - recipe cost and price calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Create the database:
    pricing-tracker init-db

  Price a recipe:
    pricing-tracker price --profile 1 --recipe 3 --minutes 45 --profit 40

  Export pricing for every recipe:
    pricing-tracker export-csv --profile 1 -o pricing.csv
""",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("init-db", help="Create the database tables")

    price_parser = subparsers.add_parser("price", help="Price one recipe")
    _add_pricing_arguments(price_parser)
    price_parser.add_argument("--recipe", type=int, required=True, help="Recipe ID")

    dashboard_parser = subparsers.add_parser("dashboard", help="Show the dashboard")
    dashboard_parser.add_argument("--profile", type=int, required=True, help="Business profile ID")
    dashboard_parser.add_argument(
        "--limit", type=_non_negative_int, default=None, help="Maximum entries per chart"
    )

    export_parser = subparsers.add_parser("export-csv", help="Export pricing reports to CSV")
    _add_pricing_arguments(export_parser)
    export_parser.add_argument(
        "-o", "--output", help="Pricing CSV file path (default: pricing_<date>.csv)"
    )
    export_parser.add_argument("--ingredients", help="Optional ingredient breakdown CSV file path")
    export_parser.add_argument("--summary", help="Optional summary CSV file path")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "init-db":
        return init_db_cmd()

    initialize_app_database()

    try:
        if args.command == "price":
            return price_cmd(args)
        elif args.command == "dashboard":
            return dashboard_cmd(args)
        elif args.command == "export-csv":
            return export_csv_cmd(args)
        else:
            print(f"Unknown command: {args.command}")
            return 1

    except ConfigurationIncomplete as e:
        print(f"ERROR: {e}")
        return 2
    except ValidationError as e:
        print("ERROR: Invalid input")
        for error in e.errors:
            print(f"  - {error}")
        return 1
    except ServiceError as e:
        print(f"ERROR: {e}")
        return 1
    except OSError as e:
        print(f"ERROR: Could not write file: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
