"""
FixedExpense model.

Monthly overhead (rent, electricity, internet...). The whole set of a
profile's fixed expenses is spread over its monthly working hours; an
expense is never linked to a particular recipe.
"""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel


class FixedExpense(BaseModel):
    """
    Fixed monthly expense owned by a business profile.

    Attributes:
        profile_id: Owner
        name: Display name (e.g., "Rent")
        monthly_value: Amount paid per month (non-negative)
    """

    __tablename__ = "fixed_expenses"

    profile_id = Column(
        Integer, ForeignKey("business_profiles.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(200), nullable=False)
    monthly_value = Column(Numeric(12, 2), nullable=False, default=0)

    profile = relationship("BusinessProfile", back_populates="fixed_expenses")

    __table_args__ = (
        CheckConstraint("monthly_value >= 0", name="ck_fixed_expense_non_negative"),
        Index("idx_fixed_expense_profile", "profile_id"),
    )
