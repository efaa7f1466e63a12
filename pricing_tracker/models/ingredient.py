"""
Ingredient model.

An ingredient is priced per unit of measure (e.g. R$ 4.50 per kg). Recipes
reference ingredients through RecipeLine by id only; deleting an ingredient leaves
those lines dangling instead of deleting them.
"""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel


class Ingredient(BaseModel):
    """
    Ingredient owned by a business profile.

    Attributes:
        profile_id: Owner
        name: Display name (e.g., "Wheat flour")
        unit: MeasurementUnit value the cost refers to
        cost_per_unit: Current cost of one unit (non-negative)
    """

    __tablename__ = "ingredients"

    profile_id = Column(
        Integer, ForeignKey("business_profiles.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(200), nullable=False)
    unit = Column(String(20), nullable=False)
    cost_per_unit = Column(Numeric(10, 4), nullable=False, default=0)

    profile = relationship("BusinessProfile", back_populates="ingredients")

    __table_args__ = (
        CheckConstraint("cost_per_unit >= 0", name="ck_ingredient_cost_non_negative"),
        Index("idx_ingredient_profile_name", "profile_id", "name"),
    )

    def __repr__(self) -> str:
        """String representation of ingredient."""
        return (
            f"Ingredient(id={self.id}, name='{self.name}', "
            f"cost_per_unit={self.cost_per_unit}/{self.unit})"
        )
