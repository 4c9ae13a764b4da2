"""Tests for the shared rounding and tolerance helpers."""

import math

import pytest

from expense_splitter.money import (
    SETTLEMENT_TOLERANCE,
    is_creditor,
    is_debtor,
    is_settled,
    round_money,
)


class TestRoundMoney:
    """Tests for round_money."""

    @pytest.mark.parametrize("value, expected", [
        (2.675, 2.68),
        (-2.675, -2.68),
        (0.125, 0.13),
        (-0.125, -0.13),
        (1.6666666666666643, 1.67),
        (-8.333333333333334, -8.33),
        (45.0, 45.0),
    ])
    def test_rounds_half_away_from_zero(self, value, expected):
        """Test half-away-from-zero rounding at two places."""
        assert round_money(value) == expected

    def test_no_negative_zero(self):
        """Test that tiny negatives round to positive zero."""
        result = round_money(-0.001)
        assert result == 0.0
        assert math.copysign(1, result) == 1

    def test_custom_places(self):
        """Test rounding to a different precision."""
        assert round_money(12.5, places=0) == 13.0
        assert round_money(1.23456, places=3) == 1.235

    def test_returns_float(self):
        """Test the return type."""
        assert isinstance(round_money(10), float)

    @pytest.mark.parametrize("value", [1e26, 1e27, -5e26, 1.5e300])
    def test_huge_amounts(self, value):
        """Test amounts wider than the default decimal precision."""
        assert round_money(value) == value


class TestTolerance:
    """Tests for the dead zone around zero."""

    def test_default_tolerance(self):
        """Test the default tolerance value."""
        assert SETTLEMENT_TOLERANCE == 0.01

    def test_is_settled(self):
        """Test the removal check."""
        assert is_settled(0.0)
        assert is_settled(0.009)
        assert is_settled(-0.009)
        assert not is_settled(0.02)

    def test_dead_zone_boundaries(self):
        """Test that exactly one cent is neither debtor nor creditor."""
        assert not is_debtor(-0.01)
        assert not is_creditor(0.01)
        assert is_debtor(-0.011)
        assert is_creditor(0.011)

    def test_custom_tolerance(self):
        """Test a wider band."""
        assert is_settled(0.04, tolerance=0.05)
        assert not is_creditor(0.04, tolerance=0.05)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
