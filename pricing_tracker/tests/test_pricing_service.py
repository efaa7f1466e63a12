"""Tests for pricing service (stored records through the pricing engine)."""

from decimal import Decimal

import pytest

from pricing_tracker.services import (
    fixed_expense_service,
    ingredient_service,
    packaging_service,
    pricing_service,
    profile_service,
    recipe_service,
)
from pricing_tracker.services.exceptions import (
    ConfigurationIncomplete,
    ProfileNotFound,
    RecipeNotFound,
)
from pricing_tracker.services.pricing import PricingParams


class TestPriceRecipe:
    """Tests for price_recipe()."""

    def test_reference_cake(self, sample_profile, sample_recipe, scenario_params):
        """The stored cake prices exactly like the in-memory one."""
        result = pricing_service.price_recipe(sample_profile.id, sample_recipe.id, scenario_params)

        assert result.ingredient_costs == Decimal("12.20")
        assert result.packaging_cost == Decimal("2.50")
        assert result.hourly_rate == Decimal("11.875")
        assert result.fixed_expense_allocation == Decimal("5.9375")
        assert result.base_cost == Decimal("20.6375")
        assert result.variable_expenses.total == Decimal("3.095625")
        assert result.total_cost == Decimal("23.733125")
        assert result.desired_profit == Decimal("7.1199375")
        assert result.suggested_price == Decimal("30.8530625")
        assert result.is_complete

    def test_default_params(self, sample_profile, sample_recipe):
        """Without params the form defaults are used."""
        result = pricing_service.price_recipe(sample_profile.id, sample_recipe.id)
        expected = pricing_service.price_recipe(
            sample_profile.id, sample_recipe.id, PricingParams.defaults()
        )
        assert result == expected

    def test_uses_current_ingredient_cost(self, sample_profile, sample_recipe, sample_ingredients, scenario_params):
        """A new ingredient cost is picked up on the next calculation."""
        ingredient_service.update_ingredient(
            sample_profile.id, sample_ingredients["flour"].id, {"cost_per_unit": "5.00"}
        )

        result = pricing_service.price_recipe(sample_profile.id, sample_recipe.id, scenario_params)

        assert result.ingredient_costs == Decimal("13.20")

    def test_new_expense_changes_allocation(self, sample_profile, sample_recipe, scenario_params):
        """Every fixed expense of the owner feeds the hourly rate."""
        fixed_expense_service.create_fixed_expense(
            sample_profile.id, {"name": "Internet", "monthly_value": "100"}
        )

        result = pricing_service.price_recipe(sample_profile.id, sample_recipe.id, scenario_params)

        assert result.hourly_rate == Decimal("12.5")
        assert result.fixed_expense_allocation == Decimal("6.25")

    def test_deleted_ingredient_reported(self, sample_profile, sample_recipe, sample_ingredients, scenario_params):
        """A deleted ingredient costs 0 and shows up in warnings."""
        sugar_id = sample_ingredients["sugar"].id
        ingredient_service.delete_ingredient(sample_profile.id, sugar_id)

        result = pricing_service.price_recipe(sample_profile.id, sample_recipe.id, scenario_params)

        assert result.ingredient_costs == Decimal("9.00")
        assert not result.is_complete
        assert len(result.warnings) == 1
        assert result.warnings[0].kind == "ingredient"
        assert result.warnings[0].reference_id == sugar_id
        assert result.warnings[0].recipe_name == "Chocolate cake"

    def test_deleted_packaging_reported(self, sample_profile, sample_recipe, sample_packaging, scenario_params):
        """A deleted packaging costs 0 and shows up in warnings."""
        packaging_service.delete_packaging(sample_profile.id, sample_packaging.id)

        result = pricing_service.price_recipe(sample_profile.id, sample_recipe.id, scenario_params)

        assert result.packaging_cost == Decimal("0")
        assert [(w.kind, w.reference_id) for w in result.warnings] == [
            ("packaging", sample_packaging.id)
        ]

    def test_missing_working_hours(self, sample_profile, sample_recipe, scenario_params):
        """Pricing refuses to run until working hours are configured."""
        profile_service.update_profile(sample_profile.id, {"monthly_working_hours": None})

        with pytest.raises(ConfigurationIncomplete) as exc_info:
            pricing_service.price_recipe(sample_profile.id, sample_recipe.id, scenario_params)

        assert exc_info.value.setting == "monthly_working_hours"

    def test_unknown_ids(self, sample_profile, sample_recipe):
        """Unknown profiles and recipes raise NotFound errors."""
        with pytest.raises(ProfileNotFound):
            pricing_service.price_recipe(999, sample_recipe.id)
        with pytest.raises(RecipeNotFound):
            pricing_service.price_recipe(sample_profile.id, 999)

    def test_other_owners_recipe_not_found(self, sample_recipe):
        """A recipe cannot be priced through another profile."""
        other = profile_service.create_profile(
            {"company_name": "Other shop", "monthly_working_hours": 100}
        )
        with pytest.raises(RecipeNotFound):
            pricing_service.price_recipe(other.id, sample_recipe.id)


class TestPriceAllRecipes:
    """Tests for price_all_recipes()."""

    def test_prices_every_recipe_by_name(self, sample_profile, sample_recipe, sample_ingredients, scenario_params):
        """Each recipe is priced with the same parameters, ordered by name."""
        recipe_service.create_recipe(
            sample_profile.id,
            {"name": "Biscuits"},
            [{"ingredient_id": sample_ingredients["flour"].id, "quantity": "0.5"}],
        )

        priced = pricing_service.price_all_recipes(sample_profile.id, scenario_params)

        assert [recipe.name for recipe, _ in priced] == ["Biscuits", "Chocolate cake"]
        assert priced[0][1].ingredient_costs == Decimal("2.25")
        assert priced[1][1].suggested_price == Decimal("30.8530625")

    def test_no_recipes(self, sample_profile):
        """A profile without recipes prices nothing."""
        assert pricing_service.price_all_recipes(sample_profile.id) == []


class TestGetDashboard:
    """Tests for get_dashboard()."""

    def test_dashboard(self, sample_profile, sample_recipe):
        """The dashboard shows counts, direct recipe costs and expenses."""
        view = pricing_service.get_dashboard(sample_profile.id)

        assert view.summary.recipe_count == 1
        assert view.summary.ingredient_count == 2
        assert view.summary.packaging_count == 1
        assert view.summary.total_monthly_fixed_expenses == Decimal("1900")
        assert [(c.name, c.cost) for c in view.recipe_costs] == [
            ("Chocolate cake", Decimal("14.70"))
        ]
        assert view.expense_distribution == [
            ("Rent", Decimal("1500")),
            ("Electricity", Decimal("400")),
        ]

    def test_dashboard_without_working_hours(self, sample_profile, sample_recipe):
        """The dashboard does not need working hours."""
        profile_service.update_profile(sample_profile.id, {"monthly_working_hours": None})
        view = pricing_service.get_dashboard(sample_profile.id)
        assert view.summary.recipe_count == 1

    def test_chart_limit(self, sample_profile, sample_recipe):
        """chart_limit caps both charts."""
        view = pricing_service.get_dashboard(sample_profile.id, chart_limit=1)
        assert len(view.expense_distribution) == 1

    def test_empty_profile(self, sample_profile):
        """A new profile has an empty dashboard."""
        view = pricing_service.get_dashboard(sample_profile.id)
        assert view.summary.recipe_count == 0
        assert view.summary.total_monthly_fixed_expenses == Decimal("0")
        assert view.recipe_costs == []

    def test_unknown_profile(self, test_db):
        """Unknown profiles raise ProfileNotFound."""
        with pytest.raises(ProfileNotFound):
            pricing_service.get_dashboard(999)
