"""Trades along a route, adjusted for the protection fee.

The protection fee (a miner bribe, denominated in the chain's wrapped
native token) is taken from the native leg of a trade:

- native input: the fee is deducted from what the trader sends before it
  reaches the first pool (exact input), or added on top of what the first
  pool needs (exact output);
- native output: the fee is deducted from what the last pool pays out
  (exact input), or the last pool must pay out the requested amount plus
  the fee (exact output).

``input_amount``/``output_amount`` are what the trader sends and receives.
The amounts that actually cross the pools drive ``execution_price`` and
``price_impact``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from quoter.constants import MethodName, TradeType
from quoter.entities.currency import Currency, wrapped_native
from quoter.entities.currency_amount import CurrencyAmount
from quoter.entities.pair import Pair
from quoter.entities.percent import Percent
from quoter.entities.price import Price
from quoter.entities.route import Route
from quoter.errors import invariant
from quoter.math.fraction import BigintIsh, Fraction

if TYPE_CHECKING:
    from quoter.routing.best_trade import BestTradeOptions

_ONE = Percent(1)


def compute_price_impact(mid_price: Price, input_amount: CurrencyAmount, output_amount: CurrencyAmount) -> Percent:
    """Relative shortfall of ``output_amount`` against the mid-price quote."""
    quoted_output = mid_price.quote(input_amount)
    impact = Fraction.subtract(quoted_output, output_amount).divide(quoted_output)
    return Percent(impact.numerator, impact.denominator)


def input_output_comparator(a: Trade, b: Trade) -> int:
    """Order trades by output (more first), then by input (less first).

    Raises:
        InvariantViolation: If the trades are between different currencies
    """
    invariant(a.input_amount.currency == b.input_amount.currency, "INPUT_CURRENCY")
    invariant(a.output_amount.currency == b.output_amount.currency, "OUTPUT_CURRENCY")
    if a.output_amount.equal_to(b.output_amount):
        if a.input_amount.equal_to(b.input_amount):
            return 0
        return -1 if a.input_amount.less_than(b.input_amount) else 1
    return -1 if a.output_amount.greater_than(b.output_amount) else 1


def trade_comparator(a: Trade, b: Trade) -> int:
    """input_output_comparator, then lower price impact, then fewer hops."""
    ios = input_output_comparator(a, b)
    if ios != 0:
        return ios
    if a.price_impact.less_than(b.price_impact):
        return -1
    if a.price_impact.greater_than(b.price_impact):
        return 1
    return len(a.route.path) - len(b.route.path)


class Trade:
    """A fully simulated swap along a Route.

    Attributes:
        route: The route the trade follows
        trade_type: Whether the input or the output amount was fixed
        input_amount: Amount the trader sends
        output_amount: Amount the trader receives
        protection_fee: Fee paid to the block producer, in wrapped native
        execution_price: Pool-side output per pool-side input
        price_impact: Shortfall of the pool-side output against the mid price
        exchange: Exchange of the route's first pair
    """

    def __init__(
        self,
        route: Route,
        amount: CurrencyAmount,
        trade_type: TradeType,
        protection_fee_amount: BigintIsh = 0,
    ) -> None:
        self.route = route
        self.trade_type = TradeType(trade_type)
        self.protection_fee = CurrencyAmount.from_raw_amount(wrapped_native(route.chain_id), protection_fee_amount)

        fee = self.protection_fee
        native_in = route.input.is_native
        native_out = route.output.is_native
        pairs = route.pairs
        last = len(pairs) - 1
        amounts: list[CurrencyAmount | None] = [None] * len(route.path)

        if self.trade_type == TradeType.EXACT_INPUT:
            invariant(amount.currency == route.input, "INPUT", f"{amount.currency} != {route.input}")
            amounts[0] = amount.wrapped
            modified_input = amount.wrapped
            modified_output = amount.wrapped
            for i, pair in enumerate(pairs):
                input_amount = amounts[i]
                if native_in and i == 0:
                    invariant(input_amount.greater_than(fee), "PROTECTION_FEE", "fee exceeds the input amount")
                    input_amount = input_amount.subtract(fee)
                    modified_input = input_amount
                output_amount, _ = pair.get_output_amount(input_amount)
                if native_out and i == last:
                    invariant(output_amount.greater_than(fee), "PROTECTION_FEE", "fee exceeds the output amount")
                    amounts[i + 1] = output_amount.subtract(fee)
                else:
                    amounts[i + 1] = output_amount
                modified_output = output_amount
        else:
            invariant(amount.currency == route.output, "OUTPUT", f"{amount.currency} != {route.output}")
            amounts[-1] = amount.wrapped
            modified_input = amount.wrapped
            modified_output = amount.wrapped
            for i in range(len(route.path) - 1, 0, -1):
                output_amount = amounts[i]
                if i == len(route.path) - 1:
                    if native_out:
                        output_amount = output_amount.add(fee)
                    modified_output = output_amount
                input_amount, _ = pairs[i - 1].get_input_amount(output_amount)
                if i == 1:
                    modified_input = input_amount
                    amounts[0] = input_amount.add(fee) if native_in else input_amount
                else:
                    amounts[i - 1] = input_amount

        first, final = amounts[0], amounts[-1]
        self.input_amount = CurrencyAmount.from_fractional_amount(route.input, first.numerator, first.denominator)
        self.output_amount = CurrencyAmount.from_fractional_amount(route.output, final.numerator, final.denominator)
        self.modified_input = CurrencyAmount.from_fractional_amount(
            route.input, modified_input.numerator, modified_input.denominator
        )
        self.modified_output = CurrencyAmount.from_fractional_amount(
            route.output, modified_output.numerator, modified_output.denominator
        )
        self.execution_price = Price(
            route.input, route.output, self.modified_input.quotient, self.modified_output.quotient
        )
        self.price_impact = compute_price_impact(route.mid_price, self.modified_input, self.modified_output)
        self.exchange = pairs[0].exchange

    @classmethod
    def exact_in(cls, route: Route, amount_in: CurrencyAmount, protection_fee_amount: BigintIsh = 0) -> Trade:
        """Trade selling exactly ``amount_in`` along ``route``."""
        return cls(route, amount_in, TradeType.EXACT_INPUT, protection_fee_amount)

    @classmethod
    def exact_out(cls, route: Route, amount_out: CurrencyAmount, protection_fee_amount: BigintIsh = 0) -> Trade:
        """Trade buying exactly ``amount_out`` along ``route``."""
        return cls(route, amount_out, TradeType.EXACT_OUTPUT, protection_fee_amount)

    def minimum_amount_out(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Least output acceptable under ``slippage_tolerance``.

        Raises:
            InvariantViolation: If the tolerance is negative
        """
        invariant(not slippage_tolerance.less_than(0), "SLIPPAGE_TOLERANCE", "slippage tolerance is negative")
        if self.trade_type == TradeType.EXACT_OUTPUT:
            return self.output_amount
        slippage_adjusted = _ONE.add(slippage_tolerance).invert().multiply(self.output_amount.quotient).quotient
        return CurrencyAmount.from_raw_amount(self.output_amount.currency, slippage_adjusted)

    def maximum_amount_in(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Most input acceptable under ``slippage_tolerance``.

        Raises:
            InvariantViolation: If the tolerance is negative
        """
        invariant(not slippage_tolerance.less_than(0), "SLIPPAGE_TOLERANCE", "slippage tolerance is negative")
        if self.trade_type == TradeType.EXACT_INPUT:
            return self.input_amount
        slippage_adjusted = _ONE.add(slippage_tolerance).multiply(self.input_amount.quotient).quotient
        return CurrencyAmount.from_raw_amount(self.input_amount.currency, slippage_adjusted)

    def method_name(self, fee_on_transfer: bool = False) -> MethodName:
        """Router entry point that executes this trade."""
        return Trade.method_name_for_trade_type(
            self.trade_type, self.route.input.is_native, self.route.output.is_native, fee_on_transfer
        )

    @property
    def estimated_gas(self) -> int:
        """Gas estimate for executing this trade through the router."""
        from quoter.fees.bribe import estimated_gas_for_method

        return estimated_gas_for_method(self.method_name(), len(self.route.pairs))

    @staticmethod
    def method_name_for_trade_type(
        trade_type: TradeType,
        ether_in: bool,
        ether_out: bool,
        use_fee_on_transfer: bool = False,
    ) -> MethodName:
        """Pick the router entry point for a trade shape.

        Raises:
            InvariantViolation: For fee-on-transfer exact-output trades, which
                the router does not support
        """
        if trade_type == TradeType.EXACT_INPUT:
            if ether_in:
                return MethodName.SWAP_EXACT_ETH_FOR_TOKENS
            if ether_out:
                return MethodName.SWAP_EXACT_TOKENS_FOR_ETH
            return MethodName.SWAP_EXACT_TOKENS_FOR_TOKENS

        invariant(not use_fee_on_transfer, "EXACT_OUT_FOT", "fee-on-transfer tokens need an exact-input trade")
        if ether_in:
            return MethodName.SWAP_ETH_FOR_EXACT_TOKENS
        if ether_out:
            return MethodName.SWAP_TOKENS_FOR_EXACT_ETH
        return MethodName.SWAP_TOKENS_FOR_EXACT_TOKENS

    @staticmethod
    def best_trade_exact_in(
        pairs: Sequence[Pair],
        currency_amount_in: CurrencyAmount,
        currency_out: Currency,
        protection_fee_amount: BigintIsh = 0,
        options: BestTradeOptions | None = None,
    ) -> list[Trade]:
        """See quoter.routing.best_trade.best_trade_exact_in."""
        from quoter.routing.best_trade import best_trade_exact_in

        return best_trade_exact_in(pairs, currency_amount_in, currency_out, protection_fee_amount, options)

    @staticmethod
    def best_trade_exact_out(
        pairs: Sequence[Pair],
        currency_in: Currency,
        currency_amount_out: CurrencyAmount,
        protection_fee_amount: BigintIsh = 0,
        options: BestTradeOptions | None = None,
    ) -> list[Trade]:
        """See quoter.routing.best_trade.best_trade_exact_out."""
        from quoter.routing.best_trade import best_trade_exact_out

        return best_trade_exact_out(pairs, currency_in, currency_amount_out, protection_fee_amount, options)

    @staticmethod
    def estimate_min_trade_amounts(
        pairs: Sequence[Pair],
        currency_in: Currency,
        currency_out: Currency,
        protection_fee_amount: BigintIsh,
    ) -> dict[TradeType, CurrencyAmount] | None:
        """See quoter.routing.best_trade.estimate_min_trade_amounts."""
        from quoter.routing.best_trade import estimate_min_trade_amounts

        return estimate_min_trade_amounts(pairs, currency_in, currency_out, protection_fee_amount)

    def __repr__(self) -> str:
        return (
            f"Trade({self.trade_type.name}, {self.route!r}, in={self.input_amount.quotient}, "
            f"out={self.output_amount.quotient})"
        )


__all__ = ["Trade", "compute_price_impact", "input_output_comparator", "trade_comparator"]
