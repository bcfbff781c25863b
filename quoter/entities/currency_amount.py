"""Amounts of a currency, in its smallest indivisible unit."""

from __future__ import annotations

import decimal
from decimal import Decimal

from quoter.constants import UINT256_MAX, Rounding
from quoter.entities.currency import Currency, Token
from quoter.errors import invariant
from quoter.math.fraction import BigintIsh, Fraction, FractionLike

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


class CurrencyAmount(Fraction):
    """A Fraction of raw units bound to a Currency.

    ``CurrencyAmount.from_raw_amount(usdc, 1_500_000)`` is 1.5 USDC.
    Addition and subtraction require the same currency; multiplying or
    dividing by a plain fraction keeps the currency.
    """

    def __init__(self, currency: Currency, numerator: BigintIsh, denominator: BigintIsh = 1) -> None:
        super().__init__(numerator, denominator)
        invariant(self.quotient <= UINT256_MAX, "AMOUNT", f"{self.quotient} overflows uint256")
        self.currency = currency
        self.decimal_scale = 10**currency.decimals

    @classmethod
    def from_raw_amount(cls, currency: Currency, raw_amount: BigintIsh) -> CurrencyAmount:
        """Amount of ``raw_amount`` smallest units of ``currency``."""
        return cls(currency, raw_amount)

    @classmethod
    def from_fractional_amount(
        cls, currency: Currency, numerator: BigintIsh, denominator: BigintIsh
    ) -> CurrencyAmount:
        """Amount from an explicit (possibly fractional) number of raw units."""
        return cls(currency, numerator, denominator)

    def add(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        invariant(self.currency == other.currency, "CURRENCY", f"{self.currency} != {other.currency}")
        added = Fraction.add(self, other)
        return CurrencyAmount(self.currency, added.numerator, added.denominator)

    def subtract(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        invariant(self.currency == other.currency, "CURRENCY", f"{self.currency} != {other.currency}")
        subtracted = Fraction.subtract(self, other)
        return CurrencyAmount(self.currency, subtracted.numerator, subtracted.denominator)

    def multiply(self, other: FractionLike) -> CurrencyAmount:
        multiplied = Fraction.multiply(self, other)
        return CurrencyAmount(self.currency, multiplied.numerator, multiplied.denominator)

    def divide(self, other: FractionLike) -> CurrencyAmount:
        divided = Fraction.divide(self, other)
        return CurrencyAmount(self.currency, divided.numerator, divided.denominator)

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_DOWN,
    ) -> str:
        return self.as_fraction.divide(self.decimal_scale).to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int | None = None,
        rounding: Rounding = Rounding.ROUND_DOWN,
    ) -> str:
        if decimal_places is None:
            decimal_places = self.currency.decimals
        invariant(decimal_places <= self.currency.decimals, "DECIMALS", f"{decimal_places} > {self.currency.decimals}")
        return self.as_fraction.divide(self.decimal_scale).to_fixed(decimal_places, rounding)

    def to_exact(self) -> str:
        """Whole-unit amount with every significant decimal, no rounding."""
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            value = Decimal(self.quotient).scaleb(-self.currency.decimals)
            if value.is_zero():
                return "0"
            return format(value.normalize(), "f")

    @property
    def wrapped(self) -> CurrencyAmount:
        """This amount expressed in the wrapped token (tokens map to themselves)."""
        if isinstance(self.currency, Token):
            return self
        return CurrencyAmount.from_fractional_amount(self.currency.wrapped, self.numerator, self.denominator)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CurrencyAmount):
            return self.currency == other.currency and self.equal_to(other)
        if isinstance(other, (Fraction, int)):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.currency, super().__hash__()))

    def __repr__(self) -> str:
        return f"CurrencyAmount({self.currency!r}, {self.numerator}, {self.denominator})"


__all__ = ["CurrencyAmount", "DECIMAL_HIGH_PREC_CONTEXT"]
