"""
Packaging Service - CRUD operations for packagings.

A recipe uses at most one packaging. Deleting a packaging leaves the
recipes that used it pointing at the old id; pricing then reports the
packaging as unresolved instead of silently dropping its cost.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pricing_tracker.models import Packaging
from pricing_tracker.services.database import session_scope
from pricing_tracker.services.exceptions import (
    DatabaseError,
    InvalidInput,
    PackagingNotFound,
)
from pricing_tracker.services.logging_utils import get_service_logger, log_operation
from pricing_tracker.services.profile_service import require_profile
from pricing_tracker.utils.validators import to_decimal, validate_packaging_data

logger = get_service_logger(__name__)


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    if "name" in data:
        values["name"] = data["name"].strip()
    if "unit_cost" in data:
        values["unit_cost"] = to_decimal(data["unit_cost"])
    return values


def get_owned_packaging(session: Session, profile_id: int, packaging_id: int) -> Packaging:
    """
    Load a packaging inside an existing session, checking ownership.

    Raises:
        PackagingNotFound: If the packaging does not exist for this owner
    """
    packaging = (
        session.query(Packaging)
        .filter(Packaging.id == packaging_id, Packaging.profile_id == profile_id)
        .first()
    )
    if packaging is None:
        raise PackagingNotFound(packaging_id)
    return packaging


def create_packaging(profile_id: int, data: Dict[str, Any]) -> Packaging:
    """
    Create a new packaging.

    Args:
        profile_id: Owning profile
        data: Dictionary with name and unit_cost

    Raises:
        InvalidInput: If data validation fails
        ProfileNotFound: If the profile does not exist
        DatabaseError: If database operation fails
    """
    is_valid, errors = validate_packaging_data(data)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            require_profile(session, profile_id)

            packaging = Packaging(profile_id=profile_id, **_normalize(data))
            session.add(packaging)
            session.flush()

            log_operation(
                logger,
                operation="create_packaging",
                outcome="success",
                profile_id=profile_id,
                packaging_id=packaging.id,
            )
            return packaging

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create packaging", e)


def get_packaging(profile_id: int, packaging_id: int) -> Packaging:
    """Get a packaging by ID (PackagingNotFound if missing)."""
    try:
        with session_scope() as session:
            return get_owned_packaging(session, profile_id, packaging_id)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get packaging {packaging_id}", e)


def get_all_packagings(profile_id: int, name_search: Optional[str] = None) -> List[Packaging]:
    """Get all packagings of a profile, ordered by name."""
    try:
        with session_scope() as session:
            query = session.query(Packaging).filter(Packaging.profile_id == profile_id)

            if name_search:
                query = query.filter(Packaging.name.ilike(f"%{name_search}%"))

            return query.order_by(Packaging.name).all()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to get packagings", e)


def count_packagings(profile_id: int) -> int:
    """Number of packagings owned by a profile."""
    try:
        with session_scope() as session:
            return session.query(Packaging).filter(Packaging.profile_id == profile_id).count()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to count packagings", e)


def update_packaging(profile_id: int, packaging_id: int, data: Dict[str, Any]) -> Packaging:
    """
    Update a packaging.

    Raises:
        InvalidInput: If data validation fails
        PackagingNotFound: If the packaging does not exist for this owner
    """
    is_valid, errors = validate_packaging_data(data, partial=True)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            packaging = get_owned_packaging(session, profile_id, packaging_id)
            packaging.update_from_dict(_normalize(data))
            session.flush()
            return packaging

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update packaging {packaging_id}", e)


def delete_packaging(profile_id: int, packaging_id: int) -> bool:
    """
    Delete a packaging.

    Raises:
        PackagingNotFound: If the packaging does not exist for this owner
    """
    try:
        with session_scope() as session:
            packaging = get_owned_packaging(session, profile_id, packaging_id)
            session.delete(packaging)

        log_operation(
            logger,
            operation="delete_packaging",
            outcome="success",
            profile_id=profile_id,
            packaging_id=packaging_id,
        )
        return True

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete packaging {packaging_id}", e)
