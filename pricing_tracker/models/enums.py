"""
Enumerations shared by models and the pricing engine.

- MeasurementUnit: Fixed set of units an ingredient can be priced in
"""

from enum import Enum


class MeasurementUnit(str, Enum):
    """
    Unit an ingredient's cost_per_unit refers to.

    Recipe line quantities are always expressed in the ingredient's unit;
    no conversion between units is performed.
    """

    KILOGRAM = "kg"
    GRAM = "g"
    MILLIGRAM = "mg"
    LITER = "l"
    MILLILITER = "ml"
    UNIT = "unit"
    DOZEN = "dozen"
    PACKAGE = "package"

    @classmethod
    def parse(cls, value: str) -> "MeasurementUnit":
        """Return the member for a unit string, ignoring case and whitespace."""
        return cls(str(value).strip().lower())
