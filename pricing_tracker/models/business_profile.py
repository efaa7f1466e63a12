"""
BusinessProfile model - the owner of every other record.

A profile holds the shop's company name and how many hours per month the
business operates. Monthly working hours may be left unset; pricing
refuses to run until they are configured.
"""

from sqlalchemy import Column, String, Numeric, CheckConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel


class BusinessProfile(BaseModel):
    """
    Business profile (one per shop owner).

    Attributes:
        company_name: Name printed on reports
        owner_email: Login identity of the owner (opaque to this app)
        monthly_working_hours: Operating hours per month (None = not configured)

    Relationships:
        ingredients, packagings, recipes, fixed_expenses: Owned records
    """

    __tablename__ = "business_profiles"

    company_name = Column(String(200), nullable=False)
    owner_email = Column(String(200), nullable=True, unique=True)
    monthly_working_hours = Column(Numeric(10, 2), nullable=True)

    ingredients = relationship(
        "Ingredient", back_populates="profile", cascade="all, delete-orphan"
    )
    packagings = relationship(
        "Packaging", back_populates="profile", cascade="all, delete-orphan"
    )
    recipes = relationship("Recipe", back_populates="profile", cascade="all, delete-orphan")
    fixed_expenses = relationship(
        "FixedExpense", back_populates="profile", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint(
            "monthly_working_hours IS NULL OR monthly_working_hours > 0",
            name="ck_profile_hours_positive",
        ),
    )

    def __repr__(self) -> str:
        """String representation of business profile."""
        return (
            f"BusinessProfile(id={self.id}, company_name='{self.company_name}', "
            f"monthly_working_hours={self.monthly_working_hours})"
        )

    @property
    def has_working_hours(self) -> bool:
        """True when time-based fixed expense allocation is possible."""
        return self.monthly_working_hours is not None and self.monthly_working_hours > 0
