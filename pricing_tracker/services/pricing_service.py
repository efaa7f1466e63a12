"""
Pricing Service - connects stored records to the pricing engine.

This service:
- Loads a recipe (lines, ingredients, packaging), the owner's fixed
  expenses and profile in one session
- Converts ORM rows into the engine's plain records while the session is open
- Calls the pure pricing functions and logs the outcome
- Builds the dashboard view

The engine itself (services.pricing) never touches the database.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pricing_tracker.models import (
    BusinessProfile,
    FixedExpense,
    Ingredient,
    Packaging,
    Recipe,
)
from pricing_tracker.services.database import session_scope
from pricing_tracker.services.exceptions import ConfigurationIncomplete, DatabaseError
from pricing_tracker.services.logging_utils import get_service_logger, log_operation
from pricing_tracker.services.dto_utils import cost_to_string
from pricing_tracker.services.profile_service import require_profile
from pricing_tracker.services.recipe_service import load_recipe
from pricing_tracker.services.pricing import (
    BusinessProfileRecord,
    DashboardSummary,
    FixedExpenseRecord,
    IngredientRecord,
    IngredientRef,
    PackagingRecord,
    PackagingRef,
    PricingParams,
    PricingResult,
    RecipeChartCost,
    RecipeLineRecord,
    RecipeRecord,
    build_dashboard_summary,
    expense_distribution,
    recipe_chart_costs,
    resolve,
)

logger = get_service_logger(__name__)


# ============================================================================
# ORM -> engine record conversion
# ============================================================================


def to_ingredient_record(ingredient: Ingredient) -> IngredientRecord:
    return IngredientRecord(
        id=ingredient.id,
        name=ingredient.name,
        unit=ingredient.unit,
        cost_per_unit=ingredient.cost_per_unit,
    )


def to_packaging_record(packaging: Packaging) -> PackagingRecord:
    return PackagingRecord(id=packaging.id, name=packaging.name, unit_cost=packaging.unit_cost)


def to_recipe_record(recipe: Recipe) -> RecipeRecord:
    """
    Convert a loaded Recipe into a RecipeRecord.

    A line whose ingredient is gone (or belongs to another owner) becomes
    an unresolved IngredientRef; the same applies to the packaging.
    """
    lines = []
    for line in recipe.lines:
        ingredient = line.ingredient
        if ingredient is not None and ingredient.profile_id == recipe.profile_id:
            ref = IngredientRef(line.ingredient_id, to_ingredient_record(ingredient))
        else:
            ref = IngredientRef(line.ingredient_id)
        lines.append(RecipeLineRecord(ingredient=ref, quantity=line.quantity))

    packaging_ref = None
    if recipe.packaging_id is not None:
        packaging = recipe.packaging
        if packaging is not None and packaging.profile_id == recipe.profile_id:
            packaging_ref = PackagingRef(recipe.packaging_id, to_packaging_record(packaging))
        else:
            packaging_ref = PackagingRef(recipe.packaging_id)

    return RecipeRecord(
        id=recipe.id,
        name=recipe.name,
        lines=tuple(lines),
        packaging=packaging_ref,
        image_ref=recipe.image_ref,
    )


def to_fixed_expense_record(expense: FixedExpense) -> FixedExpenseRecord:
    return FixedExpenseRecord(id=expense.id, name=expense.name, monthly_value=expense.monthly_value)


def to_profile_record(profile: BusinessProfile) -> BusinessProfileRecord:
    return BusinessProfileRecord(
        id=profile.id,
        company_name=profile.company_name,
        monthly_working_hours=profile.monthly_working_hours,
    )


def _load_fixed_expenses(session: Session, profile_id: int) -> List[FixedExpenseRecord]:
    expenses = (
        session.query(FixedExpense)
        .filter(FixedExpense.profile_id == profile_id)
        .order_by(FixedExpense.id)
        .all()
    )
    return [to_fixed_expense_record(expense) for expense in expenses]


def _load_recipes(session: Session, profile_id: int) -> List[RecipeRecord]:
    recipes = (
        session.query(Recipe).filter(Recipe.profile_id == profile_id).order_by(Recipe.name).all()
    )
    return [to_recipe_record(recipe) for recipe in recipes]


# ============================================================================
# Pricing
# ============================================================================


def _resolve_logged(
    recipe: RecipeRecord,
    expenses: List[FixedExpenseRecord],
    profile: BusinessProfileRecord,
    params: PricingParams,
) -> PricingResult:
    try:
        result = resolve(recipe, expenses, profile, params)
    except ConfigurationIncomplete:
        log_operation(
            logger,
            operation="price_recipe",
            outcome="configuration_incomplete",
            level=logging.WARNING,
            profile_id=profile.id,
            recipe_id=recipe.id,
        )
        raise

    if result.is_complete:
        log_operation(
            logger,
            operation="price_recipe",
            outcome="success",
            profile_id=profile.id,
            recipe_id=recipe.id,
            suggested_price=cost_to_string(result.suggested_price),
        )
    else:
        log_operation(
            logger,
            operation="price_recipe",
            outcome="incomplete_data",
            level=logging.WARNING,
            profile_id=profile.id,
            recipe_id=recipe.id,
            unresolved=[f"{w.kind}:{w.reference_id}" for w in result.warnings],
        )
    return result


def load_pricing_inputs(
    profile_id: int, recipe_id: int
) -> Tuple[RecipeRecord, List[FixedExpenseRecord], BusinessProfileRecord]:
    """
    Load everything needed to price one recipe, as engine records.

    Raises:
        ProfileNotFound / RecipeNotFound: For unknown ids
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            profile = to_profile_record(require_profile(session, profile_id))
            recipe = to_recipe_record(load_recipe(session, profile_id, recipe_id))
            expenses = _load_fixed_expenses(session, profile_id)
            return recipe, expenses, profile

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to load pricing data for recipe {recipe_id}", e)


def price_recipe(
    profile_id: int, recipe_id: int, params: Optional[PricingParams] = None
) -> PricingResult:
    """
    Compute the suggested price of a stored recipe.

    Args:
        profile_id: Owning profile
        recipe_id: Recipe to price
        params: Pricing parameters (default: PricingParams.defaults())

    Returns:
        PricingResult with the full breakdown; check ``is_complete`` /
        ``warnings`` for references that could not be resolved

    Raises:
        ConfigurationIncomplete: If the profile has no monthly working hours
        ProfileNotFound / RecipeNotFound: For unknown ids
        DatabaseError: If database operation fails
    """
    if params is None:
        params = PricingParams.defaults()

    recipe, expenses, profile = load_pricing_inputs(profile_id, recipe_id)
    return _resolve_logged(recipe, expenses, profile, params)


def price_all_recipes(
    profile_id: int, params: Optional[PricingParams] = None
) -> List[Tuple[RecipeRecord, PricingResult]]:
    """
    Price every recipe of a profile with the same parameters.

    Returns:
        (recipe, result) pairs ordered by recipe name

    Raises:
        ConfigurationIncomplete: If the profile has no monthly working hours
    """
    if params is None:
        params = PricingParams.defaults()

    try:
        with session_scope() as session:
            profile = to_profile_record(require_profile(session, profile_id))
            recipes = _load_recipes(session, profile_id)
            expenses = _load_fixed_expenses(session, profile_id)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to load pricing data", e)

    return [(recipe, _resolve_logged(recipe, expenses, profile, params)) for recipe in recipes]


# ============================================================================
# Dashboard
# ============================================================================


@dataclass(frozen=True)
class DashboardView:
    """Everything the dashboard shows for one profile."""

    summary: DashboardSummary
    recipe_costs: List[RecipeChartCost]
    expense_distribution: List[Tuple[str, object]]


def get_dashboard(profile_id: int, chart_limit: Optional[int] = None) -> DashboardView:
    """
    Build the dashboard for a profile.

    Recipe chart costs are ingredient + packaging only; they do not include
    the fixed expense allocation used by price_recipe().

    Args:
        profile_id: Owning profile
        chart_limit: Optional maximum number of bars/slices per chart

    Raises:
        ProfileNotFound: If the profile does not exist
        InvalidInput: If chart_limit is negative
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            require_profile(session, profile_id)
            recipes = _load_recipes(session, profile_id)
            expenses = _load_fixed_expenses(session, profile_id)
            ingredient_count = (
                session.query(Ingredient).filter(Ingredient.profile_id == profile_id).count()
            )
            packaging_count = (
                session.query(Packaging).filter(Packaging.profile_id == profile_id).count()
            )

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to load dashboard data", e)

    return DashboardView(
        summary=build_dashboard_summary(recipes, ingredient_count, packaging_count, expenses),
        recipe_costs=recipe_chart_costs(recipes, limit=chart_limit),
        expense_distribution=expense_distribution(expenses, limit=chart_limit),
    )
