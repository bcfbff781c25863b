"""Call parameters for executing a Trade through the protected router.

The router's entry points all take the same argument shape:

    method((amount0, amount1, path, to, deadline), router_address, miner_bribe)

``amount0``/``amount1`` are (amountIn, amountOutMin) for exact-input methods
and (amountOut, amountInMax) for the token-input exact-output methods.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import structlog
from eth_abi import encode  # type: ignore[attr-defined]
from eth_hash.auto import keccak
from eth_utils import to_canonical_address

from quoter.constants import ROUTER_ADDRESS, MethodName
from quoter.entities.percent import Percent
from quoter.entities.trade import Trade
from quoter.errors import invariant
from quoter.models.types import validate_and_parse_address
from quoter.utils import to_hex

logger = structlog.get_logger()

ZERO_HEX = "0x0"

# ABI type of the swap data tuple and the full argument list
SWAP_DATA_ABI = "(uint256,uint256,address[],address,uint256)"
SWAP_ARGS_ABI = [SWAP_DATA_ABI, "address", "uint256"]


@dataclass(frozen=True)
class TradeOptions:
    """How a trade should be executed.

    Exactly one of ``ttl`` (seconds from now) or ``deadline`` (unix
    timestamp) must be given.

    Attributes:
        allowed_slippage: Tolerance applied to the non-fixed amount
        recipient: Address receiving the output
        ttl: Seconds until the transaction expires
        deadline: Absolute expiry timestamp
        fee_on_transfer: Whether the input token takes a fee on transfer
    """

    allowed_slippage: Percent
    recipient: str
    ttl: int | None = None
    deadline: int | None = None
    fee_on_transfer: bool = False


@dataclass(frozen=True)
class SwapData:
    """First argument of every router entry point."""

    amount0: str
    amount1: str
    path: list[str]
    to: str
    deadline: str

    def as_list(self) -> list:
        return [self.amount0, self.amount1, self.path, self.to, self.deadline]


@dataclass(frozen=True)
class SwapParameters:
    """Everything needed to build the router transaction.

    Attributes:
        method_name: Router entry point
        swap_data: The swap data tuple
        router_address: The exchange router the protected router forwards to
        miner_bribe: Protection fee as 0x hex
        value: Native value to attach, as 0x hex
    """

    method_name: MethodName
    swap_data: SwapData
    router_address: str
    miner_bribe: str
    value: str

    @property
    def args(self) -> list:
        return [self.swap_data.as_list(), self.router_address, self.miner_bribe]


def swap_call_parameters(trade: Trade, options: TradeOptions, now: int | None = None) -> SwapParameters:
    """Build router call parameters for ``trade``.

    Args:
        trade: The trade to execute
        options: Slippage, recipient and expiry
        now: Current unix time, used with ``ttl`` (defaults to the clock)

    Returns:
        SwapParameters with every amount encoded as 0x hex

    Raises:
        InvariantViolation: If both legs are native, the ttl is not
            positive, the expiry is ambiguous, or the recipient is invalid
    """
    ether_in = trade.input_amount.currency.is_native
    ether_out = trade.output_amount.currency.is_native
    invariant(not (ether_in and ether_out), "ETHER_IN_OUT", "the router cannot swap native for native")
    invariant((options.ttl is None) != (options.deadline is None), "DEADLINE", "give exactly one of ttl or deadline")
    invariant(options.ttl is None or options.ttl > 0, "TTL", f"ttl is {options.ttl}")

    to = validate_and_parse_address(options.recipient)
    amount_in = to_hex(trade.maximum_amount_in(options.allowed_slippage))
    amount_out = to_hex(trade.minimum_amount_out(options.allowed_slippage))
    miner_bribe = to_hex(trade.protection_fee)
    path = [token.address for token in trade.route.path]
    if options.ttl is not None:
        deadline = to_hex((int(time.time()) if now is None else now) + options.ttl)
    else:
        deadline = to_hex(options.deadline)  # type: ignore[arg-type]

    method_name = Trade.method_name_for_trade_type(trade.trade_type, ether_in, ether_out, options.fee_on_transfer)

    if method_name in (MethodName.SWAP_TOKENS_FOR_EXACT_ETH, MethodName.SWAP_TOKENS_FOR_EXACT_TOKENS):
        swap_data = SwapData(amount_out, amount_in, path, to, deadline)
        value = miner_bribe
    else:
        swap_data = SwapData(amount_in, amount_out, path, to, deadline)
        if method_name in (MethodName.SWAP_EXACT_ETH_FOR_TOKENS, MethodName.SWAP_ETH_FOR_EXACT_TOKENS):
            value = amount_in
        else:
            value = ZERO_HEX

    return SwapParameters(
        method_name=method_name,
        swap_data=swap_data,
        router_address=ROUTER_ADDRESS[trade.exchange],
        miner_bribe=miner_bribe,
        value=value,
    )


def method_selector(method_name: MethodName) -> str:
    """4-byte selector of a router entry point, 0x-prefixed."""
    signature = f"{MethodName(method_name).value}({SWAP_DATA_ABI},address,uint256)"
    return "0x" + keccak(signature.encode()).hex()[:8]


def encode_swap_call(parameters: SwapParameters) -> str:
    """ABI-encode the router call as calldata.

    Returns:
        0x-prefixed calldata (selector + encoded arguments)
    """
    data = parameters.swap_data
    encoded_args = encode(
        SWAP_ARGS_ABI,
        [
            (
                int(data.amount0, 16),
                int(data.amount1, 16),
                [to_canonical_address(address) for address in data.path],
                to_canonical_address(data.to),
                int(data.deadline, 16),
            ),
            to_canonical_address(parameters.router_address),
            int(parameters.miner_bribe, 16),
        ],
    )
    calldata = method_selector(parameters.method_name) + encoded_args.hex()
    logger.debug(
        "swap_call_encoded",
        method=parameters.method_name.value,
        hops=len(data.path) - 1,
        calldata_bytes=len(calldata) // 2 - 1,
    )
    return calldata


__all__ = [
    "SwapData",
    "SwapParameters",
    "TradeOptions",
    "ZERO_HEX",
    "encode_swap_call",
    "method_selector",
    "swap_call_parameters",
]
