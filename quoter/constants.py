"""Protocol constants for the quoting engine.

Centralizes chain ids, exchange deployments and gas parameters.
"""

from enum import Enum, IntEnum

from eth_utils import to_checksum_address

from quoter.models.types import UINT256_MAX, is_valid_address


class ChainId(IntEnum):
    """Chains with a registered wrapped native token."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    KOVAN = 42
    HARDHAT = 1337


class Exchange(IntEnum):
    """Uniswap V2 style deployments a pair can belong to."""

    UNI = 0
    SUSHI = 1


class TradeType(IntEnum):
    """Which side of a trade is fixed."""

    EXACT_INPUT = 0
    EXACT_OUTPUT = 1


class Rounding(IntEnum):
    """Rounding policies used when rendering fractions."""

    ROUND_DOWN = 0
    ROUND_HALF_UP = 1
    ROUND_UP = 2


class MethodName(str, Enum):
    """Router entry points, one per combination of trade type and native leg."""

    SWAP_ETH_FOR_EXACT_TOKENS = "swapETHForExactTokens"
    SWAP_EXACT_ETH_FOR_TOKENS = "swapExactETHForTokens"
    SWAP_EXACT_TOKENS_FOR_ETH = "swapExactTokensForETH"
    SWAP_EXACT_TOKENS_FOR_TOKENS = "swapExactTokensForTokens"
    SWAP_TOKENS_FOR_EXACT_ETH = "swapTokensForExactETH"
    SWAP_TOKENS_FOR_EXACT_TOKENS = "swapTokensForExactTokens"


def _validate_address(name: str, address: str) -> str:
    """Validate and return a contract address.

    Args:
        name: Name of the contract (for error messages)
        address: The address to validate

    Returns:
        The checksummed address

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address}")
    return to_checksum_address(address)


# Factory, router and pair init-code hash per exchange.
# Addresses are validated at import time to catch typos early.
FACTORY_ADDRESS: dict[Exchange, str] = {
    Exchange.UNI: _validate_address("UNI factory", "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"),
    Exchange.SUSHI: _validate_address("SUSHI factory", "0xC0AEe478e3658e2610c5F7A4A2E1777cE9e4f2Ac"),
}

ROUTER_ADDRESS: dict[Exchange, str] = {
    Exchange.UNI: _validate_address("UNI router", "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"),
    Exchange.SUSHI: _validate_address("SUSHI router", "0xd9e1ce17f2641f24ae83637ab66a2cca9c378b9f"),
}

INIT_CODE_HASH: dict[Exchange, str] = {
    Exchange.UNI: "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f",
    Exchange.SUSHI: "0xe18a34eb0e04b04f7a0ac29a6e80748dca96319b42c54d679cb821dca90c6303",
}

# Liquidity locked forever on the first mint of a pair
MINIMUM_LIQUIDITY = 1000

# 0.3% LP fee expressed as an integer ratio
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Measured gas usage of each router entry point (single hop)
GAS_ESTIMATES: dict[MethodName, int] = {
    MethodName.SWAP_ETH_FOR_EXACT_TOKENS: 174_552,
    MethodName.SWAP_EXACT_ETH_FOR_TOKENS: 161_308,
    MethodName.SWAP_EXACT_TOKENS_FOR_ETH: 146_057,
    MethodName.SWAP_EXACT_TOKENS_FOR_TOKENS: 143_216,
    MethodName.SWAP_TOKENS_FOR_EXACT_ETH: 189_218,
    MethodName.SWAP_TOKENS_FOR_EXACT_TOKENS: 185_096,
}


__all__ = [
    "ChainId",
    "Exchange",
    "FACTORY_ADDRESS",
    "FEE_DENOMINATOR",
    "FEE_NUMERATOR",
    "GAS_ESTIMATES",
    "INIT_CODE_HASH",
    "MINIMUM_LIQUIDITY",
    "MethodName",
    "ROUTER_ADDRESS",
    "Rounding",
    "TradeType",
    "UINT256_MAX",
]
