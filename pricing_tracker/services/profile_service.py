"""
Profile Service - Business profile management.

This service provides:
- CRUD operations for business profiles (the owner of every other record)
- Monthly working hours configuration used by the pricing engine
- require_profile() for other services that must check ownership
"""

from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pricing_tracker.models import BusinessProfile
from pricing_tracker.services.database import session_scope
from pricing_tracker.services.exceptions import (
    DatabaseError,
    InvalidInput,
    ProfileNotFound,
)
from pricing_tracker.services.logging_utils import get_service_logger, log_operation
from pricing_tracker.utils.validators import (
    to_decimal,
    validate_monthly_working_hours,
    validate_profile_data,
)

logger = get_service_logger(__name__)


def require_profile(session: Session, profile_id: int) -> BusinessProfile:
    """
    Load a profile inside an existing session.

    Raises:
        ProfileNotFound: If the profile does not exist
    """
    profile = session.query(BusinessProfile).filter(BusinessProfile.id == profile_id).first()
    if profile is None:
        raise ProfileNotFound(profile_id)
    return profile


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    if "company_name" in data:
        values["company_name"] = data["company_name"].strip()
    if "owner_email" in data:
        values["owner_email"] = data["owner_email"]
    if "monthly_working_hours" in data:
        values["monthly_working_hours"] = to_decimal(data["monthly_working_hours"])
    return values


def create_profile(data: Dict[str, Any]) -> BusinessProfile:
    """
    Create a new business profile.

    Args:
        data: Dictionary with company_name (required), owner_email and
              monthly_working_hours (optional)

    Returns:
        Created BusinessProfile instance

    Raises:
        InvalidInput: If data validation fails
        DatabaseError: If database operation fails
    """
    is_valid, errors = validate_profile_data(data)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            profile = BusinessProfile(**_normalize(data))
            session.add(profile)
            session.flush()

            log_operation(logger, operation="create_profile", outcome="success", profile_id=profile.id)
            return profile

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create profile", e)


def get_profile(profile_id: int) -> BusinessProfile:
    """
    Get a business profile by ID.

    Raises:
        ProfileNotFound: If profile not found
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            return require_profile(session, profile_id)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get profile {profile_id}", e)


def get_profile_by_email(owner_email: str) -> Optional[BusinessProfile]:
    """Get a business profile by owner email, or None."""
    try:
        with session_scope() as session:
            return (
                session.query(BusinessProfile)
                .filter(BusinessProfile.owner_email == owner_email)
                .first()
            )

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to get profile by email", e)


def update_profile(profile_id: int, data: Dict[str, Any]) -> BusinessProfile:
    """
    Update a business profile.

    Only keys present in ``data`` are changed.

    Raises:
        InvalidInput: If data validation fails
        ProfileNotFound: If profile not found
        DatabaseError: If database operation fails
    """
    is_valid, errors = validate_profile_data(data, partial=True)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            profile = require_profile(session, profile_id)
            profile.update_from_dict(_normalize(data))
            session.flush()

            log_operation(logger, operation="update_profile", outcome="success", profile_id=profile_id)
            return profile

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update profile {profile_id}", e)


def set_monthly_working_hours(profile_id: int, hours: Any) -> BusinessProfile:
    """
    Configure how many hours per month the business operates.

    Args:
        profile_id: Profile to update
        hours: Positive number of hours (e.g. 160 for 8h x 20 days)

    Raises:
        InvalidInput: If hours is not a positive number
        ProfileNotFound: If profile not found
    """
    is_valid, message = validate_monthly_working_hours(hours)
    if not is_valid:
        raise InvalidInput([message])
    return update_profile(profile_id, {"monthly_working_hours": hours})


def delete_profile(profile_id: int) -> bool:
    """
    Delete a profile and everything it owns.

    Raises:
        ProfileNotFound: If profile not found
        DatabaseError: If database operation fails
    """
    try:
        with session_scope() as session:
            profile = require_profile(session, profile_id)
            session.delete(profile)

        log_operation(logger, operation="delete_profile", outcome="success", profile_id=profile_id)
        return True

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete profile {profile_id}", e)
