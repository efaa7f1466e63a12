"""
Cost aggregation for a single recipe.

Transaction boundary: Pure computation (no database access).

This module provides functions for:
- Costing each ingredient line at the ingredient's current cost per unit
- Summing the ingredient cost of a recipe
- Reading the packaging cost of a recipe (at most one packaging, no multiplier)
- Listing references that could not be resolved

Unresolved ingredient or packaging references contribute 0 and are
reported by unresolved_references() / aggregate_recipe_costs().
"""

from decimal import Decimal
from typing import List

from .entities import (
    ZERO,
    LineCost,
    RecipeCostBreakdown,
    RecipeLineRecord,
    RecipeRecord,
    UnresolvedReference,
)


def line_cost(line: RecipeLineRecord) -> Decimal:
    """
    Cost of one recipe line.

    Args:
        line: Recipe line with a (possibly unresolved) ingredient reference

    Returns:
        quantity x cost_per_unit, or 0 when the ingredient is unresolved

    Example:
        2 kg of flour at 4.50/kg costs 9.00
    """
    if not line.ingredient.is_resolved:
        return ZERO
    return line.quantity * line.ingredient.record.cost_per_unit


def ingredient_cost(recipe: RecipeRecord) -> Decimal:
    """
    Total ingredient cost of a recipe.

    Args:
        recipe: Recipe with its ingredient lines

    Returns:
        Sum of line_cost() over all lines (0 for a recipe without lines)
    """
    total = ZERO
    for line in recipe.lines:
        total += line_cost(line)
    return total


def packaging_cost(recipe: RecipeRecord) -> Decimal:
    """
    Packaging cost of a recipe.

    Returns:
        The packaging's unit_cost, or 0 when the recipe has no packaging or
        its packaging reference is unresolved
    """
    if recipe.packaging is None or not recipe.packaging.is_resolved:
        return ZERO
    return recipe.packaging.record.unit_cost


def unresolved_references(recipe: RecipeRecord) -> List[UnresolvedReference]:
    """
    List the recipe's ingredient and packaging references that did not resolve.

    Returns:
        UnresolvedReference entries in line order, packaging last
    """
    missing = [
        UnresolvedReference("ingredient", line.ingredient.ingredient_id, recipe.name)
        for line in recipe.lines
        if not line.ingredient.is_resolved
    ]
    if recipe.packaging is not None and not recipe.packaging.is_resolved:
        missing.append(
            UnresolvedReference("packaging", recipe.packaging.packaging_id, recipe.name)
        )
    return missing


def aggregate_recipe_costs(recipe: RecipeRecord) -> RecipeCostBreakdown:
    """
    Itemized ingredient and packaging cost of a recipe.

    Args:
        recipe: Recipe to cost

    Returns:
        RecipeCostBreakdown with one LineCost per line, the two totals and
        any unresolved references
    """
    lines = []
    for line in recipe.lines:
        ref = line.ingredient
        if ref.is_resolved:
            lines.append(
                LineCost(
                    ingredient_id=ref.ingredient_id,
                    ingredient_name=ref.record.name,
                    unit=ref.record.unit,
                    quantity=line.quantity,
                    cost_per_unit=ref.record.cost_per_unit,
                    total=line_cost(line),
                )
            )
        else:
            lines.append(
                LineCost(
                    ingredient_id=ref.ingredient_id,
                    ingredient_name=None,
                    unit=None,
                    quantity=line.quantity,
                    cost_per_unit=ZERO,
                    total=ZERO,
                    resolved=False,
                )
            )

    return RecipeCostBreakdown(
        recipe_name=recipe.name,
        lines=tuple(lines),
        ingredient_cost=ingredient_cost(recipe),
        packaging_cost=packaging_cost(recipe),
        unresolved=tuple(unresolved_references(recipe)),
    )
