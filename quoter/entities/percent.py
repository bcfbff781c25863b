"""Percentages as exact fractions."""

from __future__ import annotations

from quoter.constants import Rounding
from quoter.math.fraction import Fraction, FractionLike

_ONE_HUNDRED = Fraction(100)


def _to_percent(fraction: Fraction) -> Percent:
    return Percent(fraction.numerator, fraction.denominator)


class Percent(Fraction):
    """A Fraction that renders as a percentage (1/100 -> "1.00")."""

    def add(self, other: FractionLike) -> Percent:
        return _to_percent(Fraction.add(self, other))

    def subtract(self, other: FractionLike) -> Percent:
        return _to_percent(Fraction.subtract(self, other))

    def multiply(self, other: FractionLike) -> Percent:
        return _to_percent(Fraction.multiply(self, other))

    def divide(self, other: FractionLike) -> Percent:
        return _to_percent(Fraction.divide(self, other))

    def to_significant(self, significant_digits: int = 5, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.as_fraction.multiply(_ONE_HUNDRED).to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 2, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.as_fraction.multiply(_ONE_HUNDRED).to_fixed(decimal_places, rounding)


__all__ = ["Percent"]
