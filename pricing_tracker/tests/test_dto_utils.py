"""Tests for DTO utility functions."""

from decimal import Decimal

from pricing_tracker.services.dto_utils import cost_to_string, format_currency, percent_to_string


class TestCostToString:
    """Tests for cost_to_string function."""

    def test_none_returns_zero(self):
        """None value returns '0.00'."""
        assert cost_to_string(None) == "0.00"

    def test_decimal_rounding(self):
        """Decimal values are rounded to 2 places using ROUND_HALF_UP."""
        assert cost_to_string(Decimal("12.345")) == "12.35"  # Round up
        assert cost_to_string(Decimal("12.344")) == "12.34"  # Round down
        assert cost_to_string(Decimal("30.8530625")) == "30.85"
        assert cost_to_string(Decimal("0.005")) == "0.01"

    def test_int_and_float_values(self):
        """Integers and floats are formatted with two decimals."""
        assert cost_to_string(12) == "12.00"
        assert cost_to_string(12.3) == "12.30"

    def test_string_value(self):
        """String numeric values are parsed and formatted."""
        assert cost_to_string("15.999") == "16.00"

    def test_return_type_is_string(self):
        """Return value is always a string."""
        assert isinstance(cost_to_string(Decimal("12.34")), str)


class TestPercentToString:
    """Tests for percent_to_string function."""

    def test_one_decimal_place(self):
        """Percentages are shown with one decimal."""
        assert percent_to_string(Decimal("23.07692307")) == "23.1"
        assert percent_to_string(Decimal("0")) == "0.0"
        assert percent_to_string(30) == "30.0"

    def test_half_up(self):
        """Halves round away from zero."""
        assert percent_to_string(Decimal("12.25")) == "12.3"


class TestFormatCurrency:
    """Tests for format_currency function."""

    def test_symbol_and_rounding(self):
        """Values get the currency symbol and two decimals."""
        assert format_currency(Decimal("30.8530625")) == "R$ 30.85"
        assert format_currency(None) == "R$ 0.00"
