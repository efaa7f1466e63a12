"""Pytest configuration and fixtures for service layer tests."""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session

from pricing_tracker.models.base import Base
from pricing_tracker.services.pricing import PricingParams


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Provides the database to the test
    4. Drops all tables after the test completes
    """
    import pricing_tracker.models  # noqa: F401

    # Create in-memory SQLite database for testing
    engine = create_engine("sqlite:///:memory:", echo=False)

    # Create all tables
    Base.metadata.create_all(engine)

    # Create session factory
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import pricing_tracker.services.database as db_module

    original_get_session = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    # Provide database to test
    yield Session

    # Cleanup
    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    # Restore original session factory
    db_module.get_session_factory = original_get_session


@pytest.fixture(scope="function")
def sample_profile(test_db):
    """Provide a business profile working 160 hours per month."""
    from pricing_tracker.services import profile_service

    return profile_service.create_profile(
        {
            "company_name": "Doce Lar Confeitaria",
            "owner_email": "owner@docelar.example",
            "monthly_working_hours": 160,
        }
    )


@pytest.fixture(scope="function")
def sample_ingredients(sample_profile):
    """Provide flour (R$ 4.50/kg) and sugar (R$ 3.20/kg)."""
    from pricing_tracker.services import ingredient_service

    flour = ingredient_service.create_ingredient(
        sample_profile.id, {"name": "Wheat flour", "unit": "kg", "cost_per_unit": "4.50"}
    )
    sugar = ingredient_service.create_ingredient(
        sample_profile.id, {"name": "Sugar", "unit": "kg", "cost_per_unit": "3.20"}
    )
    return {"flour": flour, "sugar": sugar}


@pytest.fixture(scope="function")
def sample_packaging(sample_profile):
    """Provide a cake box costing R$ 2.50."""
    from pricing_tracker.services import packaging_service

    return packaging_service.create_packaging(
        sample_profile.id, {"name": "Cake box", "unit_cost": "2.50"}
    )


@pytest.fixture(scope="function")
def sample_expenses(sample_profile):
    """Provide fixed expenses totaling R$ 1900 per month."""
    from pricing_tracker.services import fixed_expense_service

    return [
        fixed_expense_service.create_fixed_expense(
            sample_profile.id, {"name": "Rent", "monthly_value": "1500"}
        ),
        fixed_expense_service.create_fixed_expense(
            sample_profile.id, {"name": "Electricity", "monthly_value": "400"}
        ),
    ]


@pytest.fixture(scope="function")
def sample_recipe(sample_profile, sample_ingredients, sample_packaging, sample_expenses):
    """Provide a cake using 2 kg flour, 1 kg sugar and a cake box."""
    from pricing_tracker.services import recipe_service

    return recipe_service.create_recipe(
        sample_profile.id,
        {"name": "Chocolate cake", "packaging_id": sample_packaging.id},
        [
            {"ingredient_id": sample_ingredients["flour"].id, "quantity": 2},
            {"ingredient_id": sample_ingredients["sugar"].id, "quantity": 1},
        ],
    )


@pytest.fixture
def scenario_params():
    """30 minutes, taxes 8%, commissions 5%, others 2%, profit 30%."""
    return PricingParams(
        preparation_minutes=Decimal("30"),
        taxes_percent=Decimal("8"),
        commissions_percent=Decimal("5"),
        others_percent=Decimal("2"),
        desired_profit_percent=Decimal("30"),
    )
