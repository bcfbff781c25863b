"""Protection fee (miner bribe) estimation.

The fee is sized so that the bundle outbids the gas price it has to beat
by ``margin`` percent:

    bribe = (gas_price * (100 + margin) / 100 - gas_price) * gas

i.e. only the premium above the competing gas price is paid as a bribe.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from quoter.constants import ChainId, MethodName
from quoter.entities.currency import NativeCurrency
from quoter.entities.currency_amount import CurrencyAmount
from quoter.errors import invariant
from quoter.fees.config import DEFAULT_BRIBE_CONFIG, BribeConfig
from quoter.math.fraction import BigintIsh, parse_fraction

logger = structlog.get_logger()

# Margins are whole percentages applied in basis points
_BPS = 10_000


def calculate_margin(value: BigintIsh, margin: BigintIsh) -> int:
    """``value`` increased by ``margin`` percent, rounded down."""
    value_int = parse_fraction(value).quotient
    margin_int = parse_fraction(margin).quotient
    invariant(margin_int >= 0, "MARGIN", f"margin is {margin_int}")
    return value_int * (_BPS + margin_int * 100) // _BPS


def calculate_miner_bribe(gas_price_to_beat: BigintIsh, estimated_gas: BigintIsh, margin: BigintIsh) -> int:
    """Bribe (in wei) that outbids ``gas_price_to_beat`` by ``margin`` percent.

    Args:
        gas_price_to_beat: Competing gas price in wei
        estimated_gas: Gas used by the transaction
        margin: Premium over the competing gas price, in whole percent

    Returns:
        The bribe in wei
    """
    gas_price = parse_fraction(gas_price_to_beat).quotient
    invariant(gas_price >= 0, "GAS_PRICE", f"gas price is {gas_price}")
    gas = parse_fraction(estimated_gas).quotient
    return (calculate_margin(gas_price, margin) - gas_price) * gas


def estimated_gas_for_method(
    method_name: MethodName = MethodName.SWAP_TOKENS_FOR_EXACT_ETH,
    num_hops: int = 1,
    config: BribeConfig = DEFAULT_BRIBE_CONFIG,
) -> int:
    """Gas estimate for a router call over ``num_hops`` pairs."""
    return config.gas_estimates[MethodName(method_name)] + num_hops * config.gas_per_hop


@dataclass(frozen=True)
class BribeEstimate:
    """Protection fee per router entry point, in the native currency.

    Attributes:
        estimates: Fee for each method name
        min_bribe: Cheapest fee across methods
        max_bribe: Most expensive fee across methods
        mean_bribe: Average fee (may be fractional)
    """

    estimates: dict[MethodName, CurrencyAmount]
    min_bribe: CurrencyAmount
    max_bribe: CurrencyAmount
    mean_bribe: CurrencyAmount


def estimate_bribe_amounts(
    gas_price_to_beat: BigintIsh,
    margin: BigintIsh,
    chain_id: int = ChainId.MAINNET,
    config: BribeConfig = DEFAULT_BRIBE_CONFIG,
) -> BribeEstimate:
    """Protection fee for every router entry point at a given gas price."""
    native = NativeCurrency.on_chain(chain_id)
    raw = {
        method: calculate_miner_bribe(gas_price_to_beat, estimated_gas_for_method(method, config=config), margin)
        for method in config.gas_estimates
    }
    invariant(len(raw) > 0, "GAS_ESTIMATES", "no gas estimates configured")

    estimates = {method: CurrencyAmount.from_raw_amount(native, amount) for method, amount in raw.items()}
    result = BribeEstimate(
        estimates=estimates,
        min_bribe=CurrencyAmount.from_raw_amount(native, min(raw.values())),
        max_bribe=CurrencyAmount.from_raw_amount(native, max(raw.values())),
        mean_bribe=CurrencyAmount.from_fractional_amount(native, sum(raw.values()), len(raw)),
    )
    logger.debug(
        "bribe_estimated",
        gas_price_to_beat=str(gas_price_to_beat),
        margin=str(margin),
        min_bribe=str(result.min_bribe.quotient),
        max_bribe=str(result.max_bribe.quotient),
    )
    return result


__all__ = [
    "BribeEstimate",
    "calculate_margin",
    "calculate_miner_bribe",
    "estimate_bribe_amounts",
    "estimated_gas_for_method",
]
