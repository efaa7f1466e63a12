"""
Ingredient Service - Business logic for ingredient management.

This service provides CRUD operations for ingredients with:
- Input validation (unit from the fixed set, non-negative cost)
- Owner scoping: every call takes the owning profile_id
- Name search

Deleting an ingredient does not touch recipes that use it; their lines
keep the dangling id and are reported as unresolved when priced.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pricing_tracker.models import Ingredient, MeasurementUnit, RecipeLine
from pricing_tracker.services.database import session_scope
from pricing_tracker.services.exceptions import (
    DatabaseError,
    IngredientNotFound,
    InvalidInput,
)
from pricing_tracker.services.logging_utils import get_service_logger, log_operation
from pricing_tracker.services.profile_service import require_profile
from pricing_tracker.utils.validators import to_decimal, validate_ingredient_data

logger = get_service_logger(__name__)


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    if "name" in data:
        values["name"] = data["name"].strip()
    if "unit" in data:
        values["unit"] = MeasurementUnit.parse(data["unit"]).value
    if "cost_per_unit" in data:
        values["cost_per_unit"] = to_decimal(data["cost_per_unit"])
    return values


def _get_owned(session: Session, profile_id: int, ingredient_id: int) -> Ingredient:
    ingredient = (
        session.query(Ingredient)
        .filter(Ingredient.id == ingredient_id, Ingredient.profile_id == profile_id)
        .first()
    )
    if ingredient is None:
        raise IngredientNotFound(ingredient_id)
    return ingredient


def create_ingredient(profile_id: int, data: Dict[str, Any]) -> Ingredient:
    """
    Create a new ingredient.

    Args:
        profile_id: Owning profile
        data: Dictionary with name, unit and cost_per_unit

    Returns:
        Created Ingredient instance

    Raises:
        InvalidInput: If data validation fails
        ProfileNotFound: If the profile does not exist
        DatabaseError: If database operation fails
    """
    is_valid, errors = validate_ingredient_data(data)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            require_profile(session, profile_id)

            ingredient = Ingredient(profile_id=profile_id, **_normalize(data))
            session.add(ingredient)
            session.flush()

            log_operation(
                logger,
                operation="create_ingredient",
                outcome="success",
                profile_id=profile_id,
                ingredient_id=ingredient.id,
            )
            return ingredient

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create ingredient", e)


def get_ingredient(profile_id: int, ingredient_id: int) -> Ingredient:
    """
    Get an ingredient by ID.

    Raises:
        IngredientNotFound: If the ingredient does not exist for this owner
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            return _get_owned(session, profile_id, ingredient_id)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get ingredient {ingredient_id}", e)


def get_all_ingredients(profile_id: int, name_search: Optional[str] = None) -> List[Ingredient]:
    """
    Get all ingredients of a profile, ordered by name.

    Args:
        profile_id: Owning profile
        name_search: Optional partial, case-insensitive name filter
    """
    try:
        with session_scope() as session:
            query = session.query(Ingredient).filter(Ingredient.profile_id == profile_id)

            if name_search:
                query = query.filter(Ingredient.name.ilike(f"%{name_search}%"))

            return query.order_by(Ingredient.name).all()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to get ingredients", e)


def count_ingredients(profile_id: int) -> int:
    """Number of ingredients owned by a profile."""
    try:
        with session_scope() as session:
            return session.query(Ingredient).filter(Ingredient.profile_id == profile_id).count()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to count ingredients", e)


def update_ingredient(profile_id: int, ingredient_id: int, data: Dict[str, Any]) -> Ingredient:
    """
    Update an ingredient.

    Recipes always use the ingredient's current cost, so a new
    cost_per_unit takes effect on the next pricing calculation.

    Raises:
        InvalidInput: If data validation fails
        IngredientNotFound: If the ingredient does not exist for this owner
        DatabaseError: If database operation fails
    """
    is_valid, errors = validate_ingredient_data(data, partial=True)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            ingredient = _get_owned(session, profile_id, ingredient_id)
            ingredient.update_from_dict(_normalize(data))
            session.flush()

            log_operation(
                logger,
                operation="update_ingredient",
                outcome="success",
                profile_id=profile_id,
                ingredient_id=ingredient_id,
            )
            return ingredient

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update ingredient {ingredient_id}", e)


def delete_ingredient(profile_id: int, ingredient_id: int) -> bool:
    """
    Delete an ingredient.

    Returns:
        True if deleted

    Raises:
        IngredientNotFound: If the ingredient does not exist for this owner
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            ingredient = _get_owned(session, profile_id, ingredient_id)
            used_in = (
                session.query(RecipeLine).filter(RecipeLine.ingredient_id == ingredient_id).count()
            )
            session.delete(ingredient)

        log_operation(
            logger,
            operation="delete_ingredient",
            outcome="success",
            profile_id=profile_id,
            ingredient_id=ingredient_id,
            recipe_lines_left_dangling=used_in,
        )
        return True

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete ingredient {ingredient_id}", e)
