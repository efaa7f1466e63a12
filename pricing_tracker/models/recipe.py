"""
Recipe models.

This module contains:
- Recipe: A sellable product made from ingredient lines and an optional packaging
- RecipeLine: Quantity of one ingredient used by a recipe

Ingredient and packaging references are stored as plain ids (no database
foreign key), so deleting an ingredient or packaging never touches the
recipes that use it. The joined relationship then loads as None and the
pricing engine reports the reference as unresolved.
"""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel


class Recipe(BaseModel):
    """
    Recipe owned by a business profile.

    Attributes:
        profile_id: Owner
        name: Recipe name (required)
        image_ref: Opaque handle of the recipe photo (optional)
        packaging_id: Id of the packaging used per unit (optional)

    Relationships:
        lines: Ordered ingredient lines, replaced wholesale on edit
        packaging: Resolved packaging (None if unset or deleted)
    """

    __tablename__ = "recipes"

    profile_id = Column(
        Integer, ForeignKey("business_profiles.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(200), nullable=False, index=True)
    image_ref = Column(String(500), nullable=True)
    packaging_id = Column(Integer, nullable=True)

    profile = relationship("BusinessProfile", back_populates="recipes")
    lines = relationship(
        "RecipeLine",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeLine.position",
        lazy="joined",
    )
    packaging = relationship(
        "Packaging",
        primaryjoin="foreign(Recipe.packaging_id) == Packaging.id",
        viewonly=True,
        lazy="joined",
    )

    __table_args__ = (Index("idx_recipe_profile_name", "profile_id", "name"),)

    def __repr__(self) -> str:
        """String representation of recipe."""
        return f"Recipe(id={self.id}, name='{self.name}', lines={len(self.lines)})"

    @property
    def has_packaging(self) -> bool:
        """True when the recipe references a packaging (resolved or not)."""
        return self.packaging_id is not None


class RecipeLine(BaseModel):
    """
    Ingredient quantity within a recipe.

    Lines have no life of their own: they are created and deleted together
    with their recipe.

    Attributes:
        recipe_id: Foreign key to Recipe
        ingredient_id: Id of the ingredient (may point at a deleted ingredient)
        quantity: Amount in the ingredient's unit (non-negative)
        position: Order of the line within the recipe
    """

    __tablename__ = "recipe_lines"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    ingredient_id = Column(Integer, nullable=False)
    quantity = Column(Numeric(10, 4), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    recipe = relationship("Recipe", back_populates="lines")
    ingredient = relationship(
        "Ingredient",
        primaryjoin="foreign(RecipeLine.ingredient_id) == Ingredient.id",
        viewonly=True,
        lazy="joined",
    )

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_recipe_line_quantity_non_negative"),
        Index("idx_recipe_line_recipe", "recipe_id"),
        Index("idx_recipe_line_ingredient", "ingredient_id"),
    )

    def __repr__(self) -> str:
        """String representation of recipe line."""
        return (
            f"RecipeLine(recipe_id={self.recipe_id}, "
            f"ingredient_id={self.ingredient_id}, quantity={self.quantity})"
        )
