"""Best-route search.

Module structure:
- best_trade.py: BestTradeOptions, best_trade_exact_in/out and
  estimate_min_trade_amounts
"""

from quoter.routing.best_trade import (
    DEFAULT_BEST_TRADE_OPTIONS,
    BestTradeOptions,
    best_trade_exact_in,
    best_trade_exact_out,
    estimate_min_trade_amounts,
)

__all__ = [
    "BestTradeOptions",
    "DEFAULT_BEST_TRADE_OPTIONS",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "estimate_min_trade_amounts",
]
