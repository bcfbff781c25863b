"""Tests for Price."""

import pytest

from quoter.entities import Price
from quoter.errors import InvariantViolation
from quoter.math import Fraction
from tests.helpers import DAI, T0, T1, T2, USDC, amount


class TestPrice:
    """Tests for price construction and chaining."""

    def test_raw_ratio(self):
        """Price(base, quote, denominator, numerator) is numerator/denominator."""
        price = Price(T0, T1, 100, 200)
        assert price.quotient == 2
        assert price.base_currency == T0
        assert price.quote_currency == T1

    def test_invert(self):
        inverted = Price(T0, T1, 100, 200).invert()
        assert inverted.base_currency == T1
        assert inverted.quote_currency == T0
        assert inverted.to_fixed(2) == "0.50"

    def test_multiply_chains_currencies(self):
        chained = Price(T0, T1, 1, 2).multiply(Price(T1, T2, 1, 3))
        assert chained.base_currency == T0
        assert chained.quote_currency == T2
        assert chained.quotient == 6

    def test_multiply_requires_matching_currencies(self):
        with pytest.raises(InvariantViolation, match="TOKEN"):
            Price(T0, T1, 1, 2).multiply(Price(T0, T2, 1, 3))

    def test_from_amounts(self):
        price = Price.from_amounts(amount(T0, 4), amount(T1, 10))
        assert price.to_fixed(1) == "2.5"
        assert price.to_fixed() == "2.5000"


class TestQuote:
    """Tests for converting amounts through a price."""

    def test_quote(self):
        quoted = Price(T0, T1, 1, 2).quote(amount(T0, 10))
        assert quoted == amount(T1, 20)

    def test_quote_wrong_currency(self):
        with pytest.raises(InvariantViolation, match="TOKEN"):
            Price(T0, T1, 1, 2).quote(amount(T1, 10))


class TestDecimals:
    """Tests for decimal-adjusted rendering."""

    def test_adjusted_for_decimals(self):
        """One USDC (1e6 raw) for one DAI (1e18 raw) renders as 1."""
        price = Price(USDC, DAI, 10**6, 10**18)
        assert price.to_significant() == "1"
        assert price.to_fixed(2) == "1.00"

    def test_equality_includes_currencies(self):
        assert Price(T0, T1, 1, 2) == Price(T0, T1, 2, 4)
        assert Price(T0, T1, 1, 2) != Price(T0, T2, 1, 2)

    def test_not_equal_to_plain_fraction(self):
        """A price never equals an untyped fraction of the same value."""
        price = Price(T0, T1, 1, 2)
        assert price != Fraction(2)
        assert Fraction(2) != price
        assert price.equal_to(Fraction(2))

    def test_hashes_with_currencies(self):
        """Equal prices share a hash; a same-valued price on other currencies is a distinct key."""
        keys = {Price(T0, T1, 1, 2), Price(T0, T1, 2, 4), Price(T0, T2, 1, 2)}
        assert len(keys) == 2
