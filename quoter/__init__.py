"""Exact-arithmetic trade quoting for Uniswap V2 style pools.

Computes swap outcomes, best multi-hop routes and router call parameters,
adjusting trades for a protection fee paid to block producers.
"""

__version__ = "0.1.0"

from quoter.constants import (  # noqa: E402
    ChainId,
    Exchange,
    MethodName,
    Rounding,
    TradeType,
)
from quoter.entities import (  # noqa: E402
    WETH,
    Currency,
    CurrencyAmount,
    NativeCurrency,
    Pair,
    Percent,
    Price,
    Route,
    Token,
    Trade,
)
from quoter.errors import (  # noqa: E402
    InsufficientInputAmountError,
    InsufficientReservesError,
    InvariantViolation,
    QuoterError,
)
from quoter.math import Fraction  # noqa: E402
from quoter.routing import BestTradeOptions  # noqa: E402

__all__ = [
    "BestTradeOptions",
    "ChainId",
    "Currency",
    "CurrencyAmount",
    "Exchange",
    "Fraction",
    "InsufficientInputAmountError",
    "InsufficientReservesError",
    "InvariantViolation",
    "MethodName",
    "NativeCurrency",
    "Pair",
    "Percent",
    "Price",
    "QuoterError",
    "Rounding",
    "Route",
    "Token",
    "Trade",
    "TradeType",
    "WETH",
    "__version__",
]
