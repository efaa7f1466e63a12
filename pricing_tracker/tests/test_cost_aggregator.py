"""Tests for recipe cost aggregation.

Pure functions: no database fixture needed.
"""

from decimal import Decimal

import pytest

from pricing_tracker.models.enums import MeasurementUnit
from pricing_tracker.services.pricing import (
    IngredientRecord,
    IngredientRef,
    PackagingRecord,
    PackagingRef,
    RecipeLineRecord,
    RecipeRecord,
    aggregate_recipe_costs,
    ingredient_cost,
    line_cost,
    packaging_cost,
    unresolved_references,
)

FLOUR = IngredientRecord(id=1, name="Wheat flour", unit="kg", cost_per_unit=Decimal("4.50"))
SUGAR = IngredientRecord(id=2, name="Sugar", unit="kg", cost_per_unit=Decimal("3.20"))
BOX = PackagingRecord(id=10, name="Cake box", unit_cost=Decimal("2.50"))


def make_line(record, quantity):
    return RecipeLineRecord(ingredient=IngredientRef.to(record), quantity=quantity)


def make_cake(packaging=PackagingRef.to(BOX)):
    return RecipeRecord(
        id=1,
        name="Chocolate cake",
        lines=[make_line(FLOUR, "2"), make_line(SUGAR, "1")],
        packaging=packaging,
    )


class TestLineCost:
    """Tests for line_cost()."""

    def test_quantity_times_cost_per_unit(self):
        """A line costs quantity x cost_per_unit."""
        assert line_cost(make_line(FLOUR, "2")) == Decimal("9.00")

    def test_zero_quantity_costs_nothing(self):
        """A zero quantity line costs 0."""
        assert line_cost(make_line(FLOUR, 0)) == Decimal("0")

    def test_fractional_quantity_is_not_rounded(self):
        """Fractions of a unit keep full precision."""
        assert line_cost(make_line(SUGAR, "0.125")) == Decimal("0.4")

    def test_unresolved_ingredient_costs_zero(self):
        """A line whose ingredient is missing contributes 0."""
        line = RecipeLineRecord(ingredient=IngredientRef(99), quantity=Decimal("3"))
        assert line_cost(line) == Decimal("0")


class TestIngredientCost:
    """Tests for ingredient_cost()."""

    def test_sums_all_lines(self):
        """Ingredient cost is the sum of the line costs."""
        assert ingredient_cost(make_cake()) == Decimal("12.20")

    def test_recipe_without_lines(self):
        """A recipe without lines has ingredient cost 0."""
        assert ingredient_cost(RecipeRecord(id=1, name="Empty")) == Decimal("0")

    def test_skips_unresolved_lines(self):
        """Only resolved lines are summed."""
        recipe = RecipeRecord(
            id=1,
            name="Partial",
            lines=[make_line(FLOUR, "2"), RecipeLineRecord(IngredientRef(99), "5")],
        )
        assert ingredient_cost(recipe) == Decimal("9.00")

    def test_uses_current_ingredient_cost(self):
        """Costs always come from the ingredient record passed in."""
        pricier_flour = IngredientRecord(1, "Wheat flour", "kg", Decimal("5.00"))
        recipe = RecipeRecord(id=1, name="Cake", lines=[make_line(pricier_flour, "2")])
        assert ingredient_cost(recipe) == Decimal("10.00")

    @pytest.mark.parametrize(
        "quantity,cost,bigger_quantity,bigger_cost",
        [
            ("2", "4.50", "2.001", "4.50"),
            ("2", "4.50", "10", "4.50"),
            ("0", "4.50", "0.5", "4.50"),
            ("2", "4.50", "2", "4.51"),
            ("2", "0", "2", "0.01"),
            ("1.5", "3.20", "1.5", "100"),
        ],
    )
    def test_never_decreases_when_inputs_grow(self, quantity, cost, bigger_quantity, bigger_cost):
        """Raising a quantity or a cost per unit never lowers the ingredient cost."""

        def cost_of(q, c):
            flour = IngredientRecord(1, "Wheat flour", "kg", Decimal(c))
            recipe = RecipeRecord(
                id=1, name="Cake", lines=[make_line(flour, q), make_line(SUGAR, "1")]
            )
            return ingredient_cost(recipe)

        assert cost_of(bigger_quantity, bigger_cost) >= cost_of(quantity, cost)


class TestPackagingCost:
    """Tests for packaging_cost()."""

    def test_packaging_unit_cost(self):
        """Packaging cost is the packaging's unit cost, no multiplier."""
        assert packaging_cost(make_cake()) == Decimal("2.50")

    def test_no_packaging(self):
        """A recipe without packaging has packaging cost 0."""
        assert packaging_cost(make_cake(packaging=None)) == Decimal("0")

    def test_unresolved_packaging(self):
        """A deleted packaging contributes 0."""
        assert packaging_cost(make_cake(packaging=PackagingRef(10))) == Decimal("0")


class TestUnresolvedReferences:
    """Tests for unresolved_references()."""

    def test_complete_recipe_has_none(self):
        """A fully resolved recipe reports nothing."""
        assert unresolved_references(make_cake()) == []

    def test_missing_ingredients_then_packaging(self):
        """Missing ingredients are listed in line order, packaging last."""
        recipe = RecipeRecord(
            id=1,
            name="Broken cake",
            lines=[
                RecipeLineRecord(IngredientRef(7), "1"),
                make_line(FLOUR, "1"),
                RecipeLineRecord(IngredientRef(8), "1"),
            ],
            packaging=PackagingRef(10),
        )

        missing = unresolved_references(recipe)

        assert [(m.kind, m.reference_id) for m in missing] == [
            ("ingredient", 7),
            ("ingredient", 8),
            ("packaging", 10),
        ]
        assert all(m.recipe_name == "Broken cake" for m in missing)

    def test_message_is_actionable(self):
        """The message names the recipe, the kind and the missing id."""
        recipe = RecipeRecord(id=1, name="Cake", lines=[RecipeLineRecord(IngredientRef(7), "1")])
        message = unresolved_references(recipe)[0].message
        assert "Cake" in message
        assert "ingredient 7" in message


class TestAggregateRecipeCosts:
    """Tests for aggregate_recipe_costs()."""

    def test_itemized_breakdown(self):
        """Each line is itemized with its unit and total."""
        breakdown = aggregate_recipe_costs(make_cake())

        assert breakdown.recipe_name == "Chocolate cake"
        assert [line.ingredient_name for line in breakdown.lines] == ["Wheat flour", "Sugar"]
        assert breakdown.lines[0].unit == MeasurementUnit.KILOGRAM
        assert breakdown.lines[0].total == Decimal("9.00")
        assert breakdown.lines[1].total == Decimal("3.20")
        assert breakdown.ingredient_cost == Decimal("12.20")
        assert breakdown.packaging_cost == Decimal("2.50")
        assert breakdown.direct_cost == Decimal("14.70")
        assert breakdown.is_complete

    def test_line_totals_add_up_to_ingredient_cost(self):
        """Per-line totals always sum to the ingredient cost."""
        breakdown = aggregate_recipe_costs(make_cake())
        assert sum(line.total for line in breakdown.lines) == breakdown.ingredient_cost

    def test_unresolved_line_is_flagged(self):
        """An unresolved line is kept, costed 0 and marked unresolved."""
        recipe = RecipeRecord(
            id=1, name="Cake", lines=[make_line(FLOUR, "2"), RecipeLineRecord(IngredientRef(7), "1")]
        )

        breakdown = aggregate_recipe_costs(recipe)

        assert breakdown.lines[1].resolved is False
        assert breakdown.lines[1].ingredient_name is None
        assert breakdown.lines[1].total == Decimal("0")
        assert not breakdown.is_complete
        assert breakdown.unresolved[0].reference_id == 7
