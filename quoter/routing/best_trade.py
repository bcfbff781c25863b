"""Best-route search over a set of pairs.

Depth-bounded DFS: from the frontier token, a swap is attempted on every pair
touching it; reaching the target currency yields a candidate Trade, otherwise the
search recurses with that pair removed and the path extended. Candidates are
kept in a bounded list ordered by trade_comparator.

Infeasible swaps (empty or shallow pools, dust inputs) and candidates whose
Trade cannot be built (e.g. the protection fee exceeds a native leg) are
dead ends, never errors.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog

from quoter.constants import TradeType
from quoter.entities.currency import Currency
from quoter.entities.currency_amount import CurrencyAmount
from quoter.entities.pair import Pair
from quoter.entities.route import Route
from quoter.entities.trade import Trade, trade_comparator
from quoter.errors import InvariantViolation, PoolError, invariant
from quoter.math.fraction import BigintIsh
from quoter.utils import sorted_insert

logger = structlog.get_logger()


@dataclass(frozen=True)
class BestTradeOptions:
    """Search limits.

    Attributes:
        max_num_results: How many trades to return at most
        max_hops: Maximum number of pairs in a route
        max_visits: Optional cap on the number of pool swap attempts
        timeout: Optional wall-clock limit in seconds
    """

    max_num_results: int = 3
    max_hops: int = 3
    max_visits: int | None = None
    timeout: float | None = None


DEFAULT_BEST_TRADE_OPTIONS = BestTradeOptions()


class _SearchBudget:
    """Counts swap attempts and checks the deadline."""

    def __init__(self, options: BestTradeOptions) -> None:
        self.max_visits = options.max_visits
        self.deadline = time.monotonic() + options.timeout if options.timeout is not None else None
        self.visits = 0
        self.exhausted = False

    def spend(self) -> bool:
        """Account for one swap attempt. Returns False once the budget is gone."""
        if self.exhausted:
            return False
        self.visits += 1
        over_visits = self.max_visits is not None and self.visits > self.max_visits
        over_time = self.deadline is not None and time.monotonic() > self.deadline
        if over_visits or over_time:
            self.exhausted = True
            logger.warning(
                "best_trade_budget_exhausted",
                visits=self.visits - 1,
                max_visits=self.max_visits,
                timed_out=over_time,
            )
            return False
        return True


class _BestTradeSearch:
    """State shared by one search: the fixed amount, target, fee and results."""

    def __init__(
        self,
        amount: CurrencyAmount,
        other_currency: Currency,
        protection_fee_amount: BigintIsh,
        options: BestTradeOptions,
    ) -> None:
        self.amount = amount
        self.other_currency = other_currency
        self.protection_fee_amount = protection_fee_amount
        self.options = options
        self.budget = _SearchBudget(options)
        self.best_trades: list[Trade] = []

    def offer(self, build: Callable[[], Trade]) -> None:
        try:
            trade = build()
        except (InvariantViolation, PoolError) as err:
            logger.debug("trade_candidate_dropped", reason=str(err))
            return
        sorted_insert(self.best_trades, trade, self.options.max_num_results, trade_comparator)

    def exact_in(
        self,
        pairs: tuple[Pair, ...],
        current_pairs: tuple[Pair, ...],
        next_amount_in: CurrencyAmount,
        max_hops: int,
    ) -> None:
        invariant(next_amount_in is self.amount or len(current_pairs) > 0, "INVALID_RECURSION")
        amount_in = next_amount_in.wrapped
        token_out = self.other_currency.wrapped

        for i, pair in enumerate(pairs):
            if not pair.involves_token(amount_in.currency) or pair.has_empty_reserve():
                continue
            if not self.budget.spend():
                return

            outcome = pair.try_output_amount(amount_in)
            if not outcome.is_ok:
                continue
            amount_out = outcome.amount
            assert amount_out is not None

            if amount_out.currency == token_out:
                route_pairs = current_pairs + (pair,)
                self.offer(
                    lambda: Trade(
                        Route(route_pairs, self.amount.currency, self.other_currency),
                        self.amount,
                        TradeType.EXACT_INPUT,
                        self.protection_fee_amount,
                    )
                )
            elif max_hops > 1 and len(pairs) > 1:
                self.exact_in(pairs[:i] + pairs[i + 1 :], current_pairs + (pair,), amount_out, max_hops - 1)

    def exact_out(
        self,
        pairs: tuple[Pair, ...],
        current_pairs: tuple[Pair, ...],
        next_amount_out: CurrencyAmount,
        max_hops: int,
    ) -> None:
        invariant(next_amount_out is self.amount or len(current_pairs) > 0, "INVALID_RECURSION")
        amount_out = next_amount_out.wrapped
        token_in = self.other_currency.wrapped

        for i, pair in enumerate(pairs):
            if not pair.involves_token(amount_out.currency) or pair.has_empty_reserve():
                continue
            if not self.budget.spend():
                return

            outcome = pair.try_input_amount(amount_out)
            if not outcome.is_ok:
                continue
            amount_in = outcome.amount
            assert amount_in is not None

            if amount_in.currency == token_in:
                route_pairs = (pair,) + current_pairs
                self.offer(
                    lambda: Trade(
                        Route(route_pairs, self.other_currency, self.amount.currency),
                        self.amount,
                        TradeType.EXACT_OUTPUT,
                        self.protection_fee_amount,
                    )
                )
            elif max_hops > 1 and len(pairs) > 1:
                self.exact_out(pairs[:i] + pairs[i + 1 :], (pair,) + current_pairs, amount_in, max_hops - 1)


def _validate_options(pairs: Sequence[Pair], options: BestTradeOptions) -> None:
    invariant(len(pairs) > 0, "PAIRS", "no pairs to search")
    invariant(options.max_hops > 0, "MAX_HOPS", f"max_hops is {options.max_hops}")
    invariant(options.max_num_results > 0, "MAX_NUM_RESULTS", f"max_num_results is {options.max_num_results}")


def best_trade_exact_in(
    pairs: Sequence[Pair],
    currency_amount_in: CurrencyAmount,
    currency_out: Currency,
    protection_fee_amount: BigintIsh = 0,
    options: BestTradeOptions | None = None,
) -> list[Trade]:
    """Best trades selling exactly ``currency_amount_in`` for ``currency_out``.

    Args:
        pairs: Pairs that may be used
        currency_amount_in: The fixed input amount
        currency_out: Desired output currency
        protection_fee_amount: Raw protection fee in wrapped native units
        options: Search limits (defaults: 3 results, 3 hops)

    Returns:
        Up to ``max_num_results`` trades, best first

    Raises:
        InvariantViolation: If pairs is empty or the options are invalid
    """
    options = options or DEFAULT_BEST_TRADE_OPTIONS
    _validate_options(pairs, options)

    search = _BestTradeSearch(currency_amount_in, currency_out, protection_fee_amount, options)
    search.exact_in(tuple(pairs), (), currency_amount_in, options.max_hops)
    logger.debug(
        "best_trade_exact_in",
        currency_in=str(currency_amount_in.currency),
        currency_out=str(currency_out),
        num_pairs=len(pairs),
        visits=search.budget.visits,
        num_results=len(search.best_trades),
    )
    return search.best_trades


def best_trade_exact_out(
    pairs: Sequence[Pair],
    currency_in: Currency,
    currency_amount_out: CurrencyAmount,
    protection_fee_amount: BigintIsh = 0,
    options: BestTradeOptions | None = None,
) -> list[Trade]:
    """Best trades buying exactly ``currency_amount_out`` with ``currency_in``.

    Mirror of best_trade_exact_in, searching backward from the output.
    """
    options = options or DEFAULT_BEST_TRADE_OPTIONS
    _validate_options(pairs, options)

    search = _BestTradeSearch(currency_amount_out, currency_in, protection_fee_amount, options)
    search.exact_out(tuple(pairs), (), currency_amount_out, options.max_hops)
    logger.debug(
        "best_trade_exact_out",
        currency_in=str(currency_in),
        currency_out=str(currency_amount_out.currency),
        num_pairs=len(pairs),
        visits=search.budget.visits,
        num_results=len(search.best_trades),
    )
    return search.best_trades


def estimate_min_trade_amounts(
    pairs: Sequence[Pair],
    currency_in: Currency,
    currency_out: Currency,
    protection_fee_amount: BigintIsh,
) -> dict[TradeType, CurrencyAmount] | None:
    """Smallest trade sizes whose native leg covers the protection fee.

    For a native-input trade the exact-input minimum is the fee itself and
    the exact-output minimum is the amount of the output token priced at the
    fee. For a native-output trade the exact-input minimum is the amount of
    the input token the fee is worth and the exact-output minimum is the fee
    itself.

    Returns:
        Minimum amounts keyed by trade type, or None when neither leg is
        native or no route exists
    """
    if currency_in.is_native:
        fee_amount = CurrencyAmount.from_raw_amount(currency_in, protection_fee_amount)
        trades = best_trade_exact_out(pairs, currency_out, fee_amount, 0)
        if not trades:
            return None
        return {TradeType.EXACT_INPUT: fee_amount, TradeType.EXACT_OUTPUT: trades[0].input_amount}

    if currency_out.is_native:
        fee_amount = CurrencyAmount.from_raw_amount(currency_out, protection_fee_amount)
        trades = best_trade_exact_in(pairs, fee_amount, currency_in, 0)
        if not trades:
            return None
        return {TradeType.EXACT_INPUT: trades[0].output_amount, TradeType.EXACT_OUTPUT: fee_amount}

    return None


__all__ = [
    "BestTradeOptions",
    "DEFAULT_BEST_TRADE_OPTIONS",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "estimate_min_trade_amounts",
]
