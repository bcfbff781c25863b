"""Integer helpers mirroring on-chain uint256 arithmetic."""

from __future__ import annotations

from quoter.constants import UINT256_MAX
from quoter.errors import invariant


def validate_uint256(value: int) -> None:
    """Check that ``value`` fits in a uint256.

    Raises:
        InvariantViolation: If value is negative or exceeds 2^256-1
    """
    invariant(value >= 0, "UINT256", f"{value} is negative")
    invariant(value <= UINT256_MAX, "UINT256", f"{value} overflows uint256")


def sqrt(y: int) -> int:
    """Floor of the square root of ``y`` by Newton's method.

    Matches the Babylonian loop used by Uniswap V2 pair contracts, so
    liquidity figures agree with what the chain computes.
    """
    validate_uint256(y)
    z = 0
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
    elif y != 0:
        z = 1
    return z


__all__ = ["sqrt", "validate_uint256"]
