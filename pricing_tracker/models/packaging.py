"""
Packaging model.

A packaging item (box, bag, jar) has a flat unit cost. A recipe may use at
most one packaging; no quantity multiplier applies.
"""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel


class Packaging(BaseModel):
    """
    Packaging owned by a business profile.

    Attributes:
        profile_id: Owner
        name: Display name (e.g., "Kraft box 20x20")
        unit_cost: Cost of one packaging unit (non-negative)
    """

    __tablename__ = "packagings"

    profile_id = Column(
        Integer, ForeignKey("business_profiles.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(200), nullable=False)
    unit_cost = Column(Numeric(10, 4), nullable=False, default=0)

    profile = relationship("BusinessProfile", back_populates="packagings")

    __table_args__ = (
        CheckConstraint("unit_cost >= 0", name="ck_packaging_cost_non_negative"),
        Index("idx_packaging_profile_name", "profile_id", "name"),
    )
