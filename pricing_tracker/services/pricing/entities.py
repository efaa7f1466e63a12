"""
Plain records consumed by the pricing engine.

The storage layer loads ORM rows and converts them into these frozen
dataclasses once per request; from then on the engine works on in-memory
values only. All money and quantity fields are Decimals.

References from a recipe to its ingredients and packaging are explicit
optional references (IngredientRef, PackagingRef). A reference whose
target could not be loaded stays in the recipe with ``record=None`` so
the zero-cost branch is visible and reported, never mistaken for a real
R$ 0.00 cost.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Tuple

from pricing_tracker.models.enums import MeasurementUnit

ZERO = Decimal("0")


def as_decimal(value: Any) -> Decimal:
    """Convert an already-validated number to Decimal (None becomes 0)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class IngredientRecord:
    """Ingredient as seen by the engine."""

    id: Optional[int]
    name: str
    unit: MeasurementUnit
    cost_per_unit: Decimal

    def __post_init__(self):
        object.__setattr__(self, "cost_per_unit", as_decimal(self.cost_per_unit))
        if not isinstance(self.unit, MeasurementUnit):
            object.__setattr__(self, "unit", MeasurementUnit.parse(self.unit))


@dataclass(frozen=True)
class PackagingRecord:
    """Packaging as seen by the engine."""

    id: Optional[int]
    name: str
    unit_cost: Decimal

    def __post_init__(self):
        object.__setattr__(self, "unit_cost", as_decimal(self.unit_cost))


@dataclass(frozen=True)
class IngredientRef:
    """Reference from a recipe line to an ingredient that may be missing."""

    ingredient_id: Optional[int]
    record: Optional[IngredientRecord] = None

    @property
    def is_resolved(self) -> bool:
        return self.record is not None

    @classmethod
    def to(cls, record: IngredientRecord) -> "IngredientRef":
        """Build a resolved reference."""
        return cls(ingredient_id=record.id, record=record)


@dataclass(frozen=True)
class PackagingRef:
    """Reference from a recipe to a packaging that may be missing."""

    packaging_id: Optional[int]
    record: Optional[PackagingRecord] = None

    @property
    def is_resolved(self) -> bool:
        return self.record is not None

    @classmethod
    def to(cls, record: PackagingRecord) -> "PackagingRef":
        """Build a resolved reference."""
        return cls(packaging_id=record.id, record=record)


@dataclass(frozen=True)
class RecipeLineRecord:
    """Quantity of one ingredient, in that ingredient's unit."""

    ingredient: IngredientRef
    quantity: Decimal

    def __post_init__(self):
        object.__setattr__(self, "quantity", as_decimal(self.quantity))


@dataclass(frozen=True)
class RecipeRecord:
    """
    Recipe as seen by the engine.

    Attributes:
        id: Recipe id (None for unsaved recipes)
        name: Recipe name
        lines: Ordered ingredient lines
        packaging: Optional packaging reference (None = recipe uses no packaging)
        image_ref: Opaque image handle, carried through to reports
    """

    id: Optional[int]
    name: str
    lines: Tuple[RecipeLineRecord, ...] = ()
    packaging: Optional[PackagingRef] = None
    image_ref: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))


@dataclass(frozen=True)
class FixedExpenseRecord:
    """One monthly fixed expense."""

    id: Optional[int]
    name: str
    monthly_value: Optional[Decimal]

    def __post_init__(self):
        if self.monthly_value is not None:
            object.__setattr__(self, "monthly_value", as_decimal(self.monthly_value))


@dataclass(frozen=True)
class BusinessProfileRecord:
    """The parts of a business profile the engine needs."""

    id: Optional[int]
    company_name: str = ""
    monthly_working_hours: Optional[Decimal] = None

    def __post_init__(self):
        if self.monthly_working_hours is not None:
            object.__setattr__(
                self, "monthly_working_hours", as_decimal(self.monthly_working_hours)
            )


@dataclass(frozen=True)
class UnresolvedReference:
    """
    A recipe reference whose target could not be found.

    Attributes:
        kind: "ingredient" or "packaging"
        reference_id: Id that failed to resolve (None if never set)
        recipe_name: Recipe containing the reference
    """

    kind: str
    reference_id: Optional[int]
    recipe_name: str

    @property
    def message(self) -> str:
        return (
            f"Recipe '{self.recipe_name}' references {self.kind} "
            f"{self.reference_id} which could not be found; it was costed as 0"
        )

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class LineCost:
    """Cost of one recipe line, for itemized breakdowns."""

    ingredient_id: Optional[int]
    ingredient_name: Optional[str]
    unit: Optional[MeasurementUnit]
    quantity: Decimal
    cost_per_unit: Decimal
    total: Decimal
    resolved: bool = True


@dataclass(frozen=True)
class RecipeCostBreakdown:
    """Ingredient and packaging totals for one recipe, with per-line detail."""

    recipe_name: str
    lines: Tuple[LineCost, ...]
    ingredient_cost: Decimal
    packaging_cost: Decimal
    unresolved: Tuple[UnresolvedReference, ...] = field(default_factory=tuple)

    @property
    def direct_cost(self) -> Decimal:
        """Ingredient cost plus packaging cost."""
        return self.ingredient_cost + self.packaging_cost

    @property
    def is_complete(self) -> bool:
        return not self.unresolved
