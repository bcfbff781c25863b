"""Prices between two currencies."""

from __future__ import annotations

from quoter.constants import Rounding
from quoter.entities.currency import Currency
from quoter.entities.currency_amount import CurrencyAmount
from quoter.errors import invariant
from quoter.math.fraction import BigintIsh, Fraction


class Price(Fraction):
    """Raw quote units per raw base unit.

    The fraction itself is in raw units. ``scalar`` corrects for the two
    currencies' decimals and is only applied when formatting or quoting.
    """

    def __init__(
        self,
        base_currency: Currency,
        quote_currency: Currency,
        denominator: BigintIsh,
        numerator: BigintIsh,
    ) -> None:
        super().__init__(numerator, denominator)
        self.base_currency = base_currency
        self.quote_currency = quote_currency
        self.scalar = Fraction(10**base_currency.decimals, 10**quote_currency.decimals)

    @classmethod
    def from_amounts(cls, base_amount: CurrencyAmount, quote_amount: CurrencyAmount) -> Price:
        """Price implied by exchanging ``base_amount`` for ``quote_amount``."""
        result = Fraction.divide(quote_amount, base_amount)
        return cls(base_amount.currency, quote_amount.currency, result.denominator, result.numerator)

    def invert(self) -> Price:
        return Price(self.quote_currency, self.base_currency, self.numerator, self.denominator)

    def multiply(self, other: Price) -> Price:  # type: ignore[override]
        """Chain two prices: (A->B) * (B->C) = (A->C)."""
        invariant(
            self.quote_currency == other.base_currency,
            "TOKEN",
            f"{self.quote_currency} != {other.base_currency}",
        )
        product = self.as_fraction.multiply(other)
        return Price(self.base_currency, other.quote_currency, product.denominator, product.numerator)

    def quote(self, currency_amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base currency into the quote currency."""
        invariant(
            currency_amount.currency == self.base_currency,
            "TOKEN",
            f"{currency_amount.currency} != {self.base_currency}",
        )
        result = self.as_fraction.multiply(currency_amount)
        return CurrencyAmount.from_fractional_amount(self.quote_currency, result.numerator, result.denominator)

    @property
    def adjusted_for_decimals(self) -> Fraction:
        """Whole quote units per whole base unit."""
        return self.as_fraction.multiply(self.scalar)

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.adjusted_for_decimals.to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int = 4,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.adjusted_for_decimals.to_fixed(decimal_places, rounding)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Price):
            return (
                self.base_currency == other.base_currency
                and self.quote_currency == other.quote_currency
                and self.equal_to(other)
            )
        if isinstance(other, (Fraction, int)):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.base_currency, self.quote_currency, super().__hash__()))

    def __repr__(self) -> str:
        return f"Price({self.base_currency!s}->{self.quote_currency!s}, {self.numerator}/{self.denominator})"


__all__ = ["Price"]
