"""Tests for Percent."""

from quoter.entities import Percent


class TestPercent:
    """Tests for percentage rendering and arithmetic."""

    def test_to_fixed(self):
        assert Percent(1, 3).to_fixed(2) == "33.33"

    def test_to_significant(self):
        assert Percent(1, 100).to_significant() == "1"
        assert Percent(1, 3).to_significant(5) == "33.333"

    def test_arithmetic_stays_percent(self):
        total = Percent(1, 100).add(Percent(1, 100))
        assert isinstance(total, Percent)
        assert total.to_fixed() == "2.00"

    def test_subtract_and_multiply(self):
        assert isinstance(Percent(1, 2).subtract(Percent(1, 4)), Percent)
        assert Percent(1, 2).multiply(Percent(1, 2)).to_fixed() == "25.00"
