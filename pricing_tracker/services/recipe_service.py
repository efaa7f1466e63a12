"""
Recipe Service - Business logic for recipe management.

This service provides CRUD operations for recipes with:
- Input validation for the recipe header and its ingredient lines
- Ownership checks for referenced ingredients and packaging
- Wholesale replacement of lines on edit (no line-level diffing)
- Search by name

Recipes never store prices. Costs are always recomputed from the current
ingredient and packaging records by the pricing engine.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pricing_tracker.models import Ingredient, Recipe, RecipeLine
from pricing_tracker.services.database import session_scope
from pricing_tracker.services.exceptions import (
    DatabaseError,
    IngredientNotFound,
    InvalidInput,
    RecipeNotFound,
)
from pricing_tracker.services.logging_utils import get_service_logger, log_operation
from pricing_tracker.services.packaging_service import get_owned_packaging
from pricing_tracker.services.profile_service import require_profile
from pricing_tracker.utils.validators import (
    to_decimal,
    validate_recipe_data,
    validate_recipe_lines,
)

logger = get_service_logger(__name__)


# ============================================================================
# Helpers
# ============================================================================


def load_recipe(
    session: Session, profile_id: int, recipe_id: int, refresh: bool = False
) -> Recipe:
    """
    Load a recipe with lines, ingredients and packaging inside a session.

    Args:
        session: Open session
        profile_id: Owning profile
        recipe_id: Recipe to load
        refresh: Re-populate an object already in the session

    Raises:
        RecipeNotFound: If the recipe does not exist for this owner
    """
    query = session.query(Recipe).filter(Recipe.id == recipe_id, Recipe.profile_id == profile_id)
    if refresh:
        query = query.populate_existing()
    recipe = query.first()
    if recipe is None:
        raise RecipeNotFound(recipe_id)
    return recipe


def _check_ingredients(session: Session, profile_id: int, lines: List[Dict]) -> None:
    wanted = {line["ingredient_id"] for line in lines}
    if not wanted:
        return
    found = {
        row.id
        for row in session.query(Ingredient.id).filter(
            Ingredient.profile_id == profile_id, Ingredient.id.in_(wanted)
        )
    }
    missing = sorted(wanted - found)
    if missing:
        raise IngredientNotFound(missing[0])


def _build_lines(lines: List[Dict]) -> List[RecipeLine]:
    return [
        RecipeLine(
            ingredient_id=line["ingredient_id"],
            quantity=to_decimal(line["quantity"]),
            position=position,
        )
        for position, line in enumerate(lines)
    ]


def _validate(data: Dict, lines: Optional[List[Dict]], partial: bool) -> None:
    is_valid, errors = validate_recipe_data(data, partial=partial)
    if lines is not None:
        lines_valid, line_errors = validate_recipe_lines(lines)
        is_valid = is_valid and lines_valid
        errors.extend(line_errors)
    if not is_valid:
        raise InvalidInput(errors)


# ============================================================================
# CRUD Operations
# ============================================================================


def create_recipe(
    profile_id: int, recipe_data: Dict[str, Any], lines: Optional[List[Dict]] = None
) -> Recipe:
    """
    Create a new recipe with optional ingredient lines and packaging.

    Args:
        profile_id: Owning profile
        recipe_data: Dictionary with name (required), image_ref and packaging_id
        lines: List of dicts with:
            - ingredient_id: int
            - quantity: number in the ingredient's unit

    Returns:
        Created Recipe instance with lines loaded

    Raises:
        InvalidInput: If recipe or line data is invalid
        ProfileNotFound: If the profile does not exist
        IngredientNotFound: If a line references another owner's or unknown ingredient
        PackagingNotFound: If packaging_id is unknown for this owner
        DatabaseError: If database operation fails
    """
    lines = lines or []
    _validate(recipe_data, lines, partial=False)

    try:
        with session_scope() as session:
            require_profile(session, profile_id)
            _check_ingredients(session, profile_id, lines)

            packaging_id = recipe_data.get("packaging_id")
            if packaging_id is not None:
                get_owned_packaging(session, profile_id, packaging_id)

            recipe = Recipe(
                profile_id=profile_id,
                name=recipe_data["name"].strip(),
                image_ref=recipe_data.get("image_ref"),
                packaging_id=packaging_id,
            )
            recipe.lines = _build_lines(lines)

            session.add(recipe)
            session.flush()

            log_operation(
                logger,
                operation="create_recipe",
                outcome="success",
                profile_id=profile_id,
                recipe_id=recipe.id,
                line_count=len(lines),
            )
            return load_recipe(session, profile_id, recipe.id, refresh=True)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create recipe", e)


def get_recipe(profile_id: int, recipe_id: int) -> Recipe:
    """
    Get a recipe by ID with lines, ingredients and packaging loaded.

    Raises:
        RecipeNotFound: If the recipe does not exist for this owner
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            return load_recipe(session, profile_id, recipe_id)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get recipe {recipe_id}", e)


def get_all_recipes(profile_id: int, name_search: Optional[str] = None) -> List[Recipe]:
    """
    Get all recipes of a profile, ordered by name.

    Args:
        profile_id: Owning profile
        name_search: Optional partial, case-insensitive name filter
    """
    try:
        with session_scope() as session:
            query = session.query(Recipe).filter(Recipe.profile_id == profile_id)

            if name_search:
                query = query.filter(Recipe.name.ilike(f"%{name_search}%"))

            return query.order_by(Recipe.name).all()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to get recipes", e)


def count_recipes(profile_id: int) -> int:
    """Number of recipes owned by a profile."""
    try:
        with session_scope() as session:
            return session.query(Recipe).filter(Recipe.profile_id == profile_id).count()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to count recipes", e)


def update_recipe(
    profile_id: int,
    recipe_id: int,
    recipe_data: Dict[str, Any],
    lines: Optional[List[Dict]] = None,
) -> Recipe:
    """
    Update a recipe.

    Args:
        profile_id: Owning profile
        recipe_id: Recipe to update
        recipe_data: Fields to change (name, image_ref, packaging_id;
                     packaging_id=None removes the packaging)
        lines: If given, replaces every existing line

    Raises:
        InvalidInput: If recipe or line data is invalid
        RecipeNotFound: If the recipe does not exist for this owner
        IngredientNotFound / PackagingNotFound: For unknown references
        DatabaseError: If database operation fails
    """
    _validate(recipe_data, lines, partial=True)

    try:
        with session_scope() as session:
            recipe = load_recipe(session, profile_id, recipe_id)

            if "name" in recipe_data:
                recipe.name = recipe_data["name"].strip()
            if "image_ref" in recipe_data:
                recipe.image_ref = recipe_data["image_ref"]
            if "packaging_id" in recipe_data:
                packaging_id = recipe_data["packaging_id"]
                if packaging_id is not None:
                    get_owned_packaging(session, profile_id, packaging_id)
                recipe.packaging_id = packaging_id

            if lines is not None:
                _check_ingredients(session, profile_id, lines)
                recipe.lines.clear()
                session.flush()
                recipe.lines.extend(_build_lines(lines))

            session.flush()

            log_operation(
                logger,
                operation="update_recipe",
                outcome="success",
                profile_id=profile_id,
                recipe_id=recipe_id,
                lines_replaced=lines is not None,
            )
            return load_recipe(session, profile_id, recipe_id, refresh=True)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update recipe {recipe_id}", e)


def delete_recipe(profile_id: int, recipe_id: int) -> bool:
    """
    Delete a recipe and its lines.

    Raises:
        RecipeNotFound: If the recipe does not exist for this owner
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            recipe = load_recipe(session, profile_id, recipe_id)
            session.delete(recipe)

        log_operation(
            logger,
            operation="delete_recipe",
            outcome="success",
            profile_id=profile_id,
            recipe_id=recipe_id,
        )
        return True

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete recipe {recipe_id}", e)
