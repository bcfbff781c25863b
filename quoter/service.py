"""Quote service: turns API requests into engine calls.

The HTTP layer stays thin; everything that knows about both the pydantic
models and the entities lives here.
"""

from __future__ import annotations

import structlog

from quoter.constants import TradeType
from quoter.entities.currency import Currency, NativeCurrency, Token
from quoter.entities.currency_amount import CurrencyAmount
from quoter.entities.pair import Pair
from quoter.entities.percent import Percent
from quoter.entities.trade import Trade
from quoter.fees.bribe import estimate_bribe_amounts
from quoter.models.quote import (
    BribeRequest,
    BribeResponse,
    CurrencyModel,
    ExchangeName,
    PoolModel,
    QuoteRequest,
    QuoteResponse,
    TradeQuote,
)
from quoter.routing.best_trade import BestTradeOptions, best_trade_exact_in, best_trade_exact_out

logger = structlog.get_logger()


def _to_currency(model: CurrencyModel, chain_id: int) -> Currency:
    if model.address is None:
        return NativeCurrency.on_chain(chain_id)
    return Token(chain_id, model.address, model.decimals, model.symbol, model.name)


def _to_pair(pool: PoolModel, chain_id: int) -> Pair:
    token0 = Token(chain_id, pool.token0.address, pool.token0.decimals, pool.token0.symbol, pool.token0.name)
    token1 = Token(chain_id, pool.token1.address, pool.token1.decimals, pool.token1.symbol, pool.token1.name)
    return Pair.from_reserves(token0, int(pool.reserve0), token1, int(pool.reserve1), pool.exchange.exchange)


def _to_trade_quote(trade: Trade, slippage: Percent) -> TradeQuote:
    return TradeQuote(
        path=[token.address for token in trade.route.path],
        exchange=ExchangeName[trade.exchange.name],
        input_amount=str(trade.input_amount.quotient),
        output_amount=str(trade.output_amount.quotient),
        minimum_amount_out=str(trade.minimum_amount_out(slippage).quotient),
        maximum_amount_in=str(trade.maximum_amount_in(slippage).quotient),
        execution_price=trade.execution_price.to_significant(6),
        price_impact=trade.price_impact.to_fixed(2),
        protection_fee=str(trade.protection_fee.quotient),
        method_name=trade.method_name().value,
        estimated_gas=trade.estimated_gas,
    )


class QuoteService:
    """Answers quote and protection fee requests.

    Args:
        search_timeout: Wall-clock limit for one route search, in seconds
        max_visits: Optional cap on pool swap attempts per search
    """

    def __init__(self, search_timeout: float | None = None, max_visits: int | None = None) -> None:
        self.search_timeout = search_timeout
        self.max_visits = max_visits

    def quote(self, request: QuoteRequest) -> QuoteResponse:
        """Best trades for ``request``, best first.

        Raises:
            InvariantViolation: If the request is inconsistent (a native
                currency on a chain without wrapped token, a pool listing
                the same token twice, ...)
        """
        chain_id = request.chain_id
        currency_in = _to_currency(request.currency_in, chain_id)
        currency_out = _to_currency(request.currency_out, chain_id)
        pairs = [_to_pair(pool, chain_id) for pool in request.pools]
        if not pairs:
            return QuoteResponse.empty()

        options = BestTradeOptions(
            max_num_results=request.max_num_results,
            max_hops=request.max_hops,
            max_visits=self.max_visits,
            timeout=self.search_timeout,
        )
        trade_type = request.kind.trade_type
        if trade_type == TradeType.EXACT_INPUT:
            amount = CurrencyAmount.from_raw_amount(currency_in, int(request.amount))
            trades = best_trade_exact_in(pairs, amount, currency_out, int(request.protection_fee), options)
        else:
            amount = CurrencyAmount.from_raw_amount(currency_out, int(request.amount))
            trades = best_trade_exact_out(pairs, currency_in, amount, int(request.protection_fee), options)

        logger.info(
            "quote_computed",
            kind=request.kind.value,
            chain_id=chain_id,
            currency_in=str(currency_in),
            currency_out=str(currency_out),
            pool_count=len(pairs),
            trade_count=len(trades),
        )
        slippage = Percent(request.slippage_bps, 10_000)
        return QuoteResponse(trades=[_to_trade_quote(trade, slippage) for trade in trades])

    def estimate_bribes(self, request: BribeRequest) -> BribeResponse:
        """Protection fee for every router method at the given gas price."""
        estimate = estimate_bribe_amounts(request.gas_price_to_beat, request.margin, request.chain_id)
        return BribeResponse(
            estimates={method.value: str(amount.quotient) for method, amount in estimate.estimates.items()},
            min_bribe=str(estimate.min_bribe.quotient),
            max_bribe=str(estimate.max_bribe.quotient),
            mean_bribe=str(estimate.mean_bribe.quotient),
        )


__all__ = ["QuoteService"]
