"""Protection fee estimation.

Usage:
    from quoter.fees import calculate_miner_bribe, estimated_gas_for_method

    gas = estimated_gas_for_method(MethodName.SWAP_EXACT_ETH_FOR_TOKENS, num_hops=2)
    fee = calculate_miner_bribe(gas_price_to_beat, gas, margin=10)
"""

from quoter.fees.bribe import (
    BribeEstimate,
    calculate_margin,
    calculate_miner_bribe,
    estimate_bribe_amounts,
    estimated_gas_for_method,
)
from quoter.fees.config import DEFAULT_BRIBE_CONFIG, BribeConfig

__all__ = [
    "DEFAULT_BRIBE_CONFIG",
    "BribeConfig",
    "BribeEstimate",
    "calculate_margin",
    "calculate_miner_bribe",
    "estimate_bribe_amounts",
    "estimated_gas_for_method",
]
