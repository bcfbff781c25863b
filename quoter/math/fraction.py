"""Arbitrary-precision rational numbers.

All money math in the engine is done on Fraction values built from Python
integers, so no precision is ever lost to floating point. Fractions are
not reduced to lowest terms; equality and ordering compare cross-products.

Rendering to decimal strings honors one of three rounding policies
(see quoter.constants.Rounding).
"""

from __future__ import annotations

import decimal
import fractions
from decimal import Decimal
from typing import Any, Union

from quoter.constants import Rounding
from quoter.errors import FractionParseError, InvariantViolation, invariant

_DECIMAL_ROUNDING = {
    Rounding.ROUND_DOWN: decimal.ROUND_DOWN,
    Rounding.ROUND_HALF_UP: decimal.ROUND_HALF_UP,
    Rounding.ROUND_UP: decimal.ROUND_UP,
}


def _to_int(value: Any) -> int:
    """Coerce an integer-like value (int or integer string) to int."""
    if isinstance(value, bool):
        raise FractionParseError(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith(("0x", "-0x")):
                return int(text, 16)
            return int(text)
        except ValueError as err:
            raise FractionParseError(value) from err
    raise FractionParseError(value)


def parse_fraction(value: Any) -> Fraction:
    """Coerce ``value`` into a Fraction.

    Accepted inputs are integers, integer strings (decimal or 0x-hex), and
    any object exposing integer ``numerator`` and ``denominator`` attributes
    (Fraction and its subclasses, ``fractions.Fraction``).

    Raises:
        FractionParseError: For anything else (floats, bools, None, ...)
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, (bool, float)):
        raise FractionParseError(value)
    if isinstance(value, (int, str)):
        return Fraction(_to_int(value))
    numerator = getattr(value, "numerator", None)
    denominator = getattr(value, "denominator", None)
    if isinstance(numerator, int) and isinstance(denominator, int):
        return Fraction(numerator, denominator)
    raise FractionParseError(value)


BigintIsh = Union[int, str]
FractionLike = Union["Fraction", int, str]


class Fraction:
    """A rational number with integer numerator and denominator.

    The sign is carried by the numerator; the denominator is always
    positive and never zero.
    """

    def __init__(self, numerator: BigintIsh, denominator: BigintIsh = 1) -> None:
        num = _to_int(numerator)
        den = _to_int(denominator)
        if den == 0:
            raise InvariantViolation("DENOMINATOR", "denominator must be non-zero")
        if den < 0:
            num, den = -num, -den
        self.numerator = num
        self.denominator = den

    @property
    def quotient(self) -> int:
        """Floor of numerator / denominator."""
        return self.numerator // self.denominator

    @property
    def remainder(self) -> Fraction:
        """Remainder after floor division, over the same denominator."""
        return Fraction(self.numerator % self.denominator, self.denominator)

    @property
    def as_fraction(self) -> Fraction:
        """This value as a plain Fraction (drops any subclass tagging)."""
        return Fraction(self.numerator, self.denominator)

    def invert(self) -> Fraction:
        return Fraction(self.denominator, self.numerator)

    def add(self, other: FractionLike) -> Fraction:
        o = parse_fraction(other)
        if self.denominator == o.denominator:
            return Fraction(self.numerator + o.numerator, self.denominator)
        return Fraction(
            self.numerator * o.denominator + o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def subtract(self, other: FractionLike) -> Fraction:
        o = parse_fraction(other)
        if self.denominator == o.denominator:
            return Fraction(self.numerator - o.numerator, self.denominator)
        return Fraction(
            self.numerator * o.denominator - o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def multiply(self, other: FractionLike) -> Fraction:
        o = parse_fraction(other)
        return Fraction(self.numerator * o.numerator, self.denominator * o.denominator)

    def divide(self, other: FractionLike) -> Fraction:
        o = parse_fraction(other)
        return Fraction(self.numerator * o.denominator, self.denominator * o.numerator)

    def less_than(self, other: FractionLike) -> bool:
        o = parse_fraction(other)
        return self.numerator * o.denominator < o.numerator * self.denominator

    def equal_to(self, other: FractionLike) -> bool:
        o = parse_fraction(other)
        return self.numerator * o.denominator == o.numerator * self.denominator

    def greater_than(self, other: FractionLike) -> bool:
        o = parse_fraction(other)
        return self.numerator * o.denominator > o.numerator * self.denominator

    def to_significant(
        self,
        significant_digits: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        """Render with ``significant_digits`` significant digits.

        The result is correctly rounded and has no trailing zeros
        (e.g. 1/4 -> "0.25", 100 -> "100").

        Raises:
            InvariantViolation: If significant_digits is not a positive int
        """
        invariant(_is_int(significant_digits), "SIGNIFICANT_DIGITS", f"{significant_digits!r} is not an integer")
        invariant(significant_digits > 0, "SIGNIFICANT_DIGITS", f"{significant_digits} is not positive")

        context = decimal.Context(
            prec=significant_digits,
            rounding=_DECIMAL_ROUNDING[Rounding(rounding)],
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
        )
        value = context.divide(Decimal(self.numerator), Decimal(self.denominator))
        if value.is_zero():
            return "0"
        return format(value.normalize(context), "f")

    def to_fixed(
        self,
        decimal_places: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        """Render with exactly ``decimal_places`` digits after the point.

        Raises:
            InvariantViolation: If decimal_places is not a non-negative int
        """
        invariant(_is_int(decimal_places), "DECIMALS", f"{decimal_places!r} is not an integer")
        invariant(decimal_places >= 0, "DECIMALS", f"{decimal_places} is negative")

        negative = self.numerator < 0
        scaled, rest = divmod(abs(self.numerator) * 10**decimal_places, self.denominator)
        rounding = Rounding(rounding)
        if rest and rounding == Rounding.ROUND_UP:
            scaled += 1
        elif rounding == Rounding.ROUND_HALF_UP and 2 * rest >= self.denominator:
            scaled += 1

        digits = str(scaled).rjust(decimal_places + 1, "0")
        if decimal_places:
            digits = f"{digits[:-decimal_places]}.{digits[-decimal_places:]}"
        return f"-{digits}" if negative and scaled else digits

    # Operator sugar over the named operations

    def __add__(self, other: Any) -> Fraction:
        return self.add(other) if _is_operand(other) else NotImplemented

    def __sub__(self, other: Any) -> Fraction:
        return self.subtract(other) if _is_operand(other) else NotImplemented

    def __mul__(self, other: Any) -> Fraction:
        return self.multiply(other) if _is_operand(other) else NotImplemented

    def __truediv__(self, other: Any) -> Fraction:
        return self.divide(other) if _is_operand(other) else NotImplemented

    def __radd__(self, other: Any) -> Fraction:
        return Fraction(other).add(self) if _is_int(other) else NotImplemented

    def __rmul__(self, other: Any) -> Fraction:
        return Fraction(other).multiply(self) if _is_int(other) else NotImplemented

    def __eq__(self, other: object) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.equal_to(other)  # type: ignore[arg-type]

    def __lt__(self, other: Any) -> bool:
        return self.less_than(other) if _is_operand(other) else NotImplemented

    def __gt__(self, other: Any) -> bool:
        return self.greater_than(other) if _is_operand(other) else NotImplemented

    def __le__(self, other: Any) -> bool:
        return not self.greater_than(other) if _is_operand(other) else NotImplemented

    def __ge__(self, other: Any) -> bool:
        return not self.less_than(other) if _is_operand(other) else NotImplemented

    def __hash__(self) -> int:
        return hash(fractions.Fraction(self.numerator, self.denominator))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.numerator}, {self.denominator})"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_operand(value: Any) -> bool:
    return isinstance(value, Fraction) or _is_int(value)


__all__ = ["BigintIsh", "Fraction", "FractionLike", "parse_fraction"]
