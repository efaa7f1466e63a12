"""Tests for ingredient, packaging and fixed expense services.

The three services share one shape (CRUD keyed by the owning profile), so
their tests live together.
"""

from decimal import Decimal

import pytest

from pricing_tracker.services import (
    fixed_expense_service,
    ingredient_service,
    packaging_service,
    profile_service,
)
from pricing_tracker.services.exceptions import (
    FixedExpenseNotFound,
    IngredientNotFound,
    InvalidInput,
    PackagingNotFound,
    ProfileNotFound,
)


@pytest.fixture
def other_profile(test_db):
    """A second shop whose records must stay invisible to the first."""
    return profile_service.create_profile({"company_name": "Other shop"})


class TestIngredientService:
    """Tests for ingredient CRUD."""

    def test_create_normalizes_values(self, sample_profile):
        """Names are stripped, units lowercased, costs parsed."""
        ingredient = ingredient_service.create_ingredient(
            sample_profile.id, {"name": " Butter ", "unit": "KG", "cost_per_unit": "38,90"}
        )

        assert ingredient.name == "Butter"
        assert ingredient.unit == "kg"
        assert ingredient.cost_per_unit == Decimal("38.90")
        assert ingredient.profile_id == sample_profile.id

    def test_create_rejects_negative_cost(self, sample_profile):
        """Negative costs are rejected, never coerced to 0."""
        with pytest.raises(InvalidInput) as exc_info:
            ingredient_service.create_ingredient(
                sample_profile.id, {"name": "Butter", "unit": "kg", "cost_per_unit": -1}
            )
        assert exc_info.value.errors == ["Cost per unit: Must be zero or greater"]

    def test_create_rejects_non_text_name(self, sample_profile):
        """A numeric name is reported as invalid input."""
        with pytest.raises(InvalidInput) as exc_info:
            ingredient_service.create_ingredient(
                sample_profile.id, {"name": 123, "unit": "kg", "cost_per_unit": 1}
            )
        assert exc_info.value.errors == ["Name: Must be text"]

    def test_create_rejects_unknown_unit(self, sample_profile):
        """Units outside the fixed set are rejected."""
        with pytest.raises(InvalidInput):
            ingredient_service.create_ingredient(
                sample_profile.id, {"name": "Butter", "unit": "cup", "cost_per_unit": 1}
            )

    def test_create_for_missing_profile(self, test_db):
        """Ingredients need an existing owner."""
        with pytest.raises(ProfileNotFound):
            ingredient_service.create_ingredient(
                999, {"name": "Butter", "unit": "kg", "cost_per_unit": 1}
            )

    def test_get_all_ordered_and_searchable(self, sample_profile, sample_ingredients):
        """Ingredients are listed by name and can be searched."""
        names = [i.name for i in ingredient_service.get_all_ingredients(sample_profile.id)]
        assert names == ["Sugar", "Wheat flour"]

        found = ingredient_service.get_all_ingredients(sample_profile.id, name_search="FLOUR")
        assert [i.name for i in found] == ["Wheat flour"]
        assert ingredient_service.count_ingredients(sample_profile.id) == 2

    def test_owner_isolation(self, sample_profile, sample_ingredients, other_profile):
        """Another profile cannot see or change these ingredients."""
        flour_id = sample_ingredients["flour"].id

        assert ingredient_service.get_all_ingredients(other_profile.id) == []
        with pytest.raises(IngredientNotFound):
            ingredient_service.get_ingredient(other_profile.id, flour_id)
        with pytest.raises(IngredientNotFound):
            ingredient_service.update_ingredient(other_profile.id, flour_id, {"cost_per_unit": 0})
        with pytest.raises(IngredientNotFound):
            ingredient_service.delete_ingredient(other_profile.id, flour_id)

    def test_update(self, sample_profile, sample_ingredients):
        """Updates change only the given fields."""
        flour = ingredient_service.update_ingredient(
            sample_profile.id, sample_ingredients["flour"].id, {"cost_per_unit": "5.10"}
        )
        assert flour.cost_per_unit == Decimal("5.10")
        assert flour.name == "Wheat flour"

    def test_update_rejects_invalid_values(self, sample_profile, sample_ingredients):
        """Partial updates are validated too."""
        with pytest.raises(InvalidInput):
            ingredient_service.update_ingredient(
                sample_profile.id, sample_ingredients["flour"].id, {"name": "  "}
            )

    def test_delete(self, sample_profile, sample_ingredients):
        """Deleted ingredients are gone."""
        flour_id = sample_ingredients["flour"].id
        assert ingredient_service.delete_ingredient(sample_profile.id, flour_id) is True
        with pytest.raises(IngredientNotFound):
            ingredient_service.get_ingredient(sample_profile.id, flour_id)


class TestPackagingService:
    """Tests for packaging CRUD."""

    def test_create_and_get(self, sample_profile):
        """A packaging can be created and read back."""
        created = packaging_service.create_packaging(
            sample_profile.id, {"name": "Ribbon bag", "unit_cost": "0.80"}
        )
        loaded = packaging_service.get_packaging(sample_profile.id, created.id)
        assert loaded.name == "Ribbon bag"
        assert loaded.unit_cost == Decimal("0.80")

    def test_zero_cost_allowed(self, sample_profile):
        """A free packaging is valid."""
        packaging = packaging_service.create_packaging(
            sample_profile.id, {"name": "Reused jar", "unit_cost": 0}
        )
        assert packaging.unit_cost == Decimal("0")

    def test_negative_cost_rejected(self, sample_profile):
        """Negative unit costs are rejected."""
        with pytest.raises(InvalidInput):
            packaging_service.create_packaging(sample_profile.id, {"name": "Box", "unit_cost": "-1"})

    def test_update_and_delete(self, sample_profile, sample_packaging):
        """Packagings can be updated and deleted."""
        updated = packaging_service.update_packaging(
            sample_profile.id, sample_packaging.id, {"unit_cost": 3}
        )
        assert updated.unit_cost == Decimal("3")

        assert packaging_service.delete_packaging(sample_profile.id, sample_packaging.id)
        assert packaging_service.count_packagings(sample_profile.id) == 0
        with pytest.raises(PackagingNotFound):
            packaging_service.get_packaging(sample_profile.id, sample_packaging.id)

    def test_owner_isolation(self, sample_packaging, other_profile):
        """Another profile cannot load this packaging."""
        with pytest.raises(PackagingNotFound):
            packaging_service.get_packaging(other_profile.id, sample_packaging.id)
        assert packaging_service.get_all_packagings(other_profile.id) == []


class TestFixedExpenseService:
    """Tests for fixed expense CRUD."""

    def test_listed_in_creation_order(self, sample_profile, sample_expenses):
        """Expenses keep the order they were entered in."""
        expenses = fixed_expense_service.get_all_fixed_expenses(sample_profile.id)
        assert [e.name for e in expenses] == ["Rent", "Electricity"]
        assert sum(e.monthly_value for e in expenses) == Decimal("1900")

    def test_search(self, sample_profile, sample_expenses):
        """Expenses can be filtered by name."""
        found = fixed_expense_service.get_all_fixed_expenses(sample_profile.id, name_search="rent")
        assert [e.name for e in found] == ["Rent"]

    def test_negative_value_rejected(self, sample_profile):
        """Negative monthly values are rejected."""
        with pytest.raises(InvalidInput) as exc_info:
            fixed_expense_service.create_fixed_expense(
                sample_profile.id, {"name": "Refund", "monthly_value": -50}
            )
        assert exc_info.value.errors == ["Monthly value: Must be zero or greater"]

    def test_update_and_delete(self, sample_profile, sample_expenses):
        """Expenses can be updated and deleted."""
        rent = sample_expenses[0]
        updated = fixed_expense_service.update_fixed_expense(
            sample_profile.id, rent.id, {"monthly_value": "1600"}
        )
        assert updated.monthly_value == Decimal("1600")

        assert fixed_expense_service.delete_fixed_expense(sample_profile.id, rent.id)
        with pytest.raises(FixedExpenseNotFound):
            fixed_expense_service.get_fixed_expense(sample_profile.id, rent.id)

    def test_owner_isolation(self, sample_expenses, other_profile):
        """Another profile cannot delete these expenses."""
        with pytest.raises(FixedExpenseNotFound):
            fixed_expense_service.delete_fixed_expense(other_profile.id, sample_expenses[0].id)
