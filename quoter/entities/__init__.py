"""Value objects of the quoting engine.

Module structure:
- currency.py: Token, NativeCurrency and the WETH registry
- currency_amount.py, price.py, percent.py: typed fractions
- pair.py: constant-product pair math
- route.py: validated chains of pairs
- trade.py: fee-adjusted trades and their ordering
"""

from quoter.entities.currency import (
    WETH,
    Currency,
    NativeCurrency,
    Token,
    currency_equals,
    wrapped_native,
)
from quoter.entities.currency_amount import CurrencyAmount
from quoter.entities.pair import Pair, SwapOutcome, SwapStatus, compute_pair_address
from quoter.entities.percent import Percent
from quoter.entities.price import Price
from quoter.entities.route import Route
from quoter.entities.trade import Trade, compute_price_impact, input_output_comparator, trade_comparator

__all__ = [
    "Currency",
    "CurrencyAmount",
    "NativeCurrency",
    "Pair",
    "Percent",
    "Price",
    "Route",
    "SwapOutcome",
    "SwapStatus",
    "Token",
    "Trade",
    "WETH",
    "compute_pair_address",
    "compute_price_impact",
    "currency_equals",
    "input_output_comparator",
    "trade_comparator",
    "wrapped_native",
]
