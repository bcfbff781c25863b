"""Pydantic models for the quote API.

Big integers travel as decimal strings; field names are camelCase on the
wire.
"""

from enum import Enum

from pydantic import BaseModel, Field

from quoter.constants import ChainId, Exchange, TradeType
from quoter.models.types import Address, Uint256


class TradeKind(str, Enum):
    """Which side of the quote is fixed."""

    EXACT_IN = "exactIn"
    EXACT_OUT = "exactOut"

    @property
    def trade_type(self) -> TradeType:
        return TradeType.EXACT_INPUT if self is TradeKind.EXACT_IN else TradeType.EXACT_OUTPUT


class ExchangeName(str, Enum):
    """Deployment a pool belongs to."""

    UNI = "uni"
    SUSHI = "sushi"

    @property
    def exchange(self) -> Exchange:
        return Exchange[self.name]


class CurrencyModel(BaseModel):
    """A token, or the chain's native currency when ``address`` is omitted."""

    address: Address | None = None
    decimals: int = Field(default=18, ge=0, le=254)
    symbol: str | None = None
    name: str | None = None


class TokenModel(BaseModel):
    """Token metadata for a pool reserve."""

    address: Address
    decimals: int = Field(default=18, ge=0, le=254)
    symbol: str | None = None
    name: str | None = None


class PoolModel(BaseModel):
    """A constant-product pool and its reserves."""

    token0: TokenModel
    token1: TokenModel
    reserve0: Uint256
    reserve1: Uint256
    exchange: ExchangeName = ExchangeName.UNI


class QuoteRequest(BaseModel):
    """Request for the best trades between two currencies."""

    chain_id: int = Field(default=ChainId.MAINNET, alias="chainId")
    kind: TradeKind
    currency_in: CurrencyModel = Field(alias="currencyIn")
    currency_out: CurrencyModel = Field(alias="currencyOut")
    amount: Uint256 = Field(description="Fixed input (exactIn) or output (exactOut) amount")
    pools: list[PoolModel] = Field(default_factory=list)
    protection_fee: Uint256 = Field(default="0", alias="protectionFee")
    slippage_bps: int = Field(default=50, ge=0, alias="slippageBps")
    max_hops: int = Field(default=3, ge=1, le=6, alias="maxHops")
    max_num_results: int = Field(default=3, ge=1, le=20, alias="maxNumResults")

    model_config = {"populate_by_name": True}


class TradeQuote(BaseModel):
    """One candidate trade."""

    path: list[Address]
    exchange: ExchangeName
    input_amount: Uint256 = Field(alias="inputAmount")
    output_amount: Uint256 = Field(alias="outputAmount")
    minimum_amount_out: Uint256 = Field(alias="minimumAmountOut")
    maximum_amount_in: Uint256 = Field(alias="maximumAmountIn")
    execution_price: str = Field(alias="executionPrice", description="Output per input, 6 significant digits")
    price_impact: str = Field(alias="priceImpact", description="Percent with 2 decimals")
    protection_fee: Uint256 = Field(alias="protectionFee")
    method_name: str = Field(alias="methodName")
    estimated_gas: int = Field(alias="estimatedGas")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    """Best trades, best first."""

    trades: list[TradeQuote] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "QuoteResponse":
        return cls(trades=[])


class BribeRequest(BaseModel):
    """Request for protection fee estimates."""

    chain_id: int = Field(default=ChainId.MAINNET, alias="chainId")
    gas_price_to_beat: Uint256 = Field(alias="gasPriceToBeat")
    margin: int = Field(default=10, ge=0, description="Premium over the gas price to beat, in percent")

    model_config = {"populate_by_name": True}


class BribeResponse(BaseModel):
    """Protection fee per router method, in wei."""

    estimates: dict[str, Uint256]
    min_bribe: Uint256 = Field(alias="minBribe")
    max_bribe: Uint256 = Field(alias="maxBribe")
    mean_bribe: Uint256 = Field(alias="meanBribe")

    model_config = {"populate_by_name": True}


__all__ = [
    "BribeRequest",
    "BribeResponse",
    "CurrencyModel",
    "ExchangeName",
    "PoolModel",
    "QuoteRequest",
    "QuoteResponse",
    "TokenModel",
    "TradeKind",
    "TradeQuote",
]
