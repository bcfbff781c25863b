"""Exception hierarchy for the quoting engine.

Two families of errors exist:

- InvariantViolation: a caller handed the engine inconsistent data
  (mismatched currencies, bad slippage, an invalid address...). These are
  fatal for the call in which they occur.
- PoolError: a pool was asked to swap an amount it cannot serve. These are
  expected outcomes during route search and are treated as dead ends there.
"""

from __future__ import annotations


class QuoterError(Exception):
    """Base class for all quoting errors."""

    pass


class InvariantViolation(QuoterError, ValueError):
    """A precondition of an operation does not hold.

    Attributes:
        code: Short upper-case identifier of the broken invariant
            (e.g. "CURRENCY", "CHAIN_IDS", "PATH").
        detail: Optional human-readable context.
    """

    def __init__(self, code: str, detail: str | None = None) -> None:
        self.code = code
        self.detail = detail
        super().__init__(f"{code}: {detail}" if detail else code)


class FractionParseError(InvariantViolation):
    """A value could not be coerced into a Fraction."""

    def __init__(self, value: object) -> None:
        super().__init__("PARSE", f"could not parse fraction from {value!r}")
        self.value = value


class AddressError(InvariantViolation):
    """An address is malformed or has an invalid checksum."""

    def __init__(self, address: object) -> None:
        super().__init__("ADDRESS", f"{address!r} is not a valid address")
        self.address = address


class PoolError(QuoterError):
    """Base class for swaps a pool cannot perform."""

    pass


class InsufficientReservesError(PoolError):
    """The pool cannot provide the requested amount (empty or too shallow)."""

    pass


class InsufficientInputAmountError(PoolError):
    """The input amount is too small to produce any output."""

    pass


def invariant(condition: object, code: str, detail: str | None = None) -> None:
    """Raise InvariantViolation with ``code`` unless ``condition`` holds."""
    if not condition:
        raise InvariantViolation(code, detail)


__all__ = [
    "AddressError",
    "FractionParseError",
    "InsufficientInputAmountError",
    "InsufficientReservesError",
    "InvariantViolation",
    "PoolError",
    "QuoterError",
    "invariant",
]
