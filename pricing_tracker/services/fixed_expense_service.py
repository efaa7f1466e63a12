"""
Fixed Expense Service - CRUD operations for monthly fixed expenses.

The full list of a profile's fixed expenses feeds the hourly rate used to
allocate overhead to recipes; expenses are never linked to one recipe.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pricing_tracker.models import FixedExpense
from pricing_tracker.services.database import session_scope
from pricing_tracker.services.exceptions import (
    DatabaseError,
    FixedExpenseNotFound,
    InvalidInput,
)
from pricing_tracker.services.logging_utils import get_service_logger, log_operation
from pricing_tracker.services.profile_service import require_profile
from pricing_tracker.utils.validators import to_decimal, validate_fixed_expense_data

logger = get_service_logger(__name__)


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    if "name" in data:
        values["name"] = data["name"].strip()
    if "monthly_value" in data:
        values["monthly_value"] = to_decimal(data["monthly_value"])
    return values


def _get_owned(session: Session, profile_id: int, expense_id: int) -> FixedExpense:
    expense = (
        session.query(FixedExpense)
        .filter(FixedExpense.id == expense_id, FixedExpense.profile_id == profile_id)
        .first()
    )
    if expense is None:
        raise FixedExpenseNotFound(expense_id)
    return expense


def create_fixed_expense(profile_id: int, data: Dict[str, Any]) -> FixedExpense:
    """
    Create a new fixed expense.

    Args:
        profile_id: Owning profile
        data: Dictionary with name and monthly_value

    Raises:
        InvalidInput: If data validation fails
        ProfileNotFound: If the profile does not exist
        DatabaseError: If database operation fails
    """
    is_valid, errors = validate_fixed_expense_data(data)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            require_profile(session, profile_id)

            expense = FixedExpense(profile_id=profile_id, **_normalize(data))
            session.add(expense)
            session.flush()

            log_operation(
                logger,
                operation="create_fixed_expense",
                outcome="success",
                profile_id=profile_id,
                expense_id=expense.id,
            )
            return expense

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create fixed expense", e)


def get_fixed_expense(profile_id: int, expense_id: int) -> FixedExpense:
    """Get a fixed expense by ID (FixedExpenseNotFound if missing)."""
    try:
        with session_scope() as session:
            return _get_owned(session, profile_id, expense_id)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get fixed expense {expense_id}", e)


def get_all_fixed_expenses(
    profile_id: int, name_search: Optional[str] = None
) -> List[FixedExpense]:
    """Get all fixed expenses of a profile, in creation order."""
    try:
        with session_scope() as session:
            query = session.query(FixedExpense).filter(FixedExpense.profile_id == profile_id)

            if name_search:
                query = query.filter(FixedExpense.name.ilike(f"%{name_search}%"))

            return query.order_by(FixedExpense.id).all()

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to get fixed expenses", e)


def update_fixed_expense(
    profile_id: int, expense_id: int, data: Dict[str, Any]
) -> FixedExpense:
    """
    Update a fixed expense.

    Raises:
        InvalidInput: If data validation fails
        FixedExpenseNotFound: If the expense does not exist for this owner
    """
    is_valid, errors = validate_fixed_expense_data(data, partial=True)
    if not is_valid:
        raise InvalidInput(errors)

    try:
        with session_scope() as session:
            expense = _get_owned(session, profile_id, expense_id)
            expense.update_from_dict(_normalize(data))
            session.flush()
            return expense

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update fixed expense {expense_id}", e)


def delete_fixed_expense(profile_id: int, expense_id: int) -> bool:
    """
    Delete a fixed expense.

    Raises:
        FixedExpenseNotFound: If the expense does not exist for this owner
    """
    try:
        with session_scope() as session:
            expense = _get_owned(session, profile_id, expense_id)
            session.delete(expense)

        log_operation(
            logger,
            operation="delete_fixed_expense",
            outcome="success",
            profile_id=profile_id,
            expense_id=expense_id,
        )
        return True

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete fixed expense {expense_id}", e)
