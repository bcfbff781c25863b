"""Test helpers module for shared test utilities.

- constants: tokens and addresses
- factories: amount and pair factory functions
"""

from tests.helpers.constants import (
    DAI,
    ETHER,
    RECIPIENT,
    T0,
    T1,
    T2,
    T3,
    USDC,
    WETH9,
)
from tests.helpers.factories import amount, make_pair

__all__ = [
    # Constants
    "DAI",
    "ETHER",
    "RECIPIENT",
    "T0",
    "T1",
    "T2",
    "T3",
    "USDC",
    "WETH9",
    # Factories
    "amount",
    "make_pair",
]
