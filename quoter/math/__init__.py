"""Exact arithmetic primitives."""

from quoter.math.fraction import Fraction, parse_fraction
from quoter.math.integer import sqrt, validate_uint256

__all__ = ["Fraction", "parse_fraction", "sqrt", "validate_uint256"]
