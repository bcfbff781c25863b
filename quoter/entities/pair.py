"""Uniswap V2 constant-product pair.

A Pair holds the reserves of two tokens, sorted so that token0 sorts
before token1. All swap math is integer math identical to the pair
contract, including the 0.3% LP fee:

    amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)
    amount_in = (reserve_in * amount_out * 1000) / ((reserve_out - amount_out) * 997) + 1

Swaps never mutate a Pair; they return a new Pair with post-trade reserves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property, lru_cache

from eth_hash.auto import keccak
from eth_utils import decode_hex, to_canonical_address, to_checksum_address

from quoter.constants import (
    FACTORY_ADDRESS,
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    INIT_CODE_HASH,
    MINIMUM_LIQUIDITY,
    Exchange,
)
from quoter.entities.currency import Token
from quoter.entities.currency_amount import CurrencyAmount
from quoter.entities.price import Price
from quoter.errors import (
    InsufficientInputAmountError,
    InsufficientReservesError,
    InvariantViolation,
    PoolError,
    invariant,
)
from quoter.math.fraction import BigintIsh, parse_fraction
from quoter.math.integer import sqrt


@lru_cache(maxsize=4096)
def compute_pair_address(factory_address: str, token_a: Token, token_b: Token, init_code_hash: str) -> str:
    """Deterministic CREATE2 address of the pair contract for two tokens.

    Args:
        factory_address: The exchange's pair factory
        token_a: One token of the pair (order does not matter)
        token_b: The other token
        init_code_hash: keccak256 of the pair contract's creation code

    Returns:
        Checksummed pair address
    """
    token0, token1 = (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)
    salt = keccak(to_canonical_address(token0.address) + to_canonical_address(token1.address))
    digest = keccak(b"\xff" + to_canonical_address(factory_address) + salt + decode_hex(init_code_hash))
    return to_checksum_address(digest[12:])


class SwapStatus(Enum):
    """Outcome of a non-raising swap attempt."""

    OK = "ok"
    INSUFFICIENT_RESERVES = "insufficient_reserves"
    INSUFFICIENT_INPUT_AMOUNT = "insufficient_input_amount"


@dataclass(frozen=True)
class SwapOutcome:
    """Result of a non-raising swap attempt.

    Attributes:
        status: Whether the swap succeeded, and if not, why
        amount: The computed amount (output for try_output_amount, input for
            try_input_amount), or None on failure
        pair: The pair with post-trade reserves, or None on failure
    """

    status: SwapStatus
    amount: CurrencyAmount | None = None
    pair: Pair | None = None

    @property
    def is_ok(self) -> bool:
        return self.status is SwapStatus.OK

    @classmethod
    def from_error(cls, error: PoolError) -> SwapOutcome:
        if isinstance(error, InsufficientInputAmountError):
            return cls(SwapStatus.INSUFFICIENT_INPUT_AMOUNT)
        return cls(SwapStatus.INSUFFICIENT_RESERVES)


class Pair:
    """Reserves of a Uniswap V2 style pool."""

    def __init__(
        self,
        currency_amount_a: CurrencyAmount,
        token_amount_b: CurrencyAmount,
        exchange: Exchange = Exchange.UNI,
    ) -> None:
        invariant(isinstance(currency_amount_a.currency, Token), "TOKEN", "pair reserves must be tokens")
        invariant(isinstance(token_amount_b.currency, Token), "TOKEN", "pair reserves must be tokens")
        if currency_amount_a.currency.sorts_before(token_amount_b.currency):  # type: ignore[arg-type]
            self.token_amounts = (currency_amount_a, token_amount_b)
        else:
            self.token_amounts = (token_amount_b, currency_amount_a)
        self.exchange = Exchange(exchange)

    @classmethod
    def from_reserves(
        cls,
        token_a: Token,
        reserve_a: BigintIsh,
        token_b: Token,
        reserve_b: BigintIsh,
        exchange: Exchange = Exchange.UNI,
    ) -> Pair:
        """Build a pair from two tokens and their raw reserves."""
        return cls(
            CurrencyAmount.from_raw_amount(token_a, reserve_a),
            CurrencyAmount.from_raw_amount(token_b, reserve_b),
            exchange,
        )

    @staticmethod
    def get_address(token_a: Token, token_b: Token, exchange: Exchange = Exchange.UNI) -> str:
        return compute_pair_address(FACTORY_ADDRESS[exchange], token_a, token_b, INIT_CODE_HASH[exchange])

    @cached_property
    def liquidity_token(self) -> Token:
        """The pair's LP token."""
        address = Pair.get_address(self.token0, self.token1, self.exchange)
        return Token(self.chain_id, address, 18, "UNI-V2", "Uniswap V2")

    @property
    def token0(self) -> Token:
        return self.token_amounts[0].currency  # type: ignore[return-value]

    @property
    def token1(self) -> Token:
        return self.token_amounts[1].currency  # type: ignore[return-value]

    @property
    def reserve0(self) -> CurrencyAmount:
        return self.token_amounts[0]

    @property
    def reserve1(self) -> CurrencyAmount:
        return self.token_amounts[1]

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    def involves_token(self, token: object) -> bool:
        return token == self.token0 or token == self.token1

    @cached_property
    def token0_price(self) -> Price:
        """Current mid price of token0 in terms of token1."""
        return Price(self.token0, self.token1, self.reserve0.quotient, self.reserve1.quotient)

    @cached_property
    def token1_price(self) -> Price:
        """Current mid price of token1 in terms of token0."""
        return Price(self.token1, self.token0, self.reserve1.quotient, self.reserve0.quotient)

    def price_of(self, token: Token) -> Price:
        invariant(self.involves_token(token), "TOKEN", f"{token} is not in the pair")
        return self.token0_price if token == self.token0 else self.token1_price

    def reserve_of(self, token: Token) -> CurrencyAmount:
        invariant(self.involves_token(token), "TOKEN", f"{token} is not in the pair")
        return self.reserve0 if token == self.token0 else self.reserve1

    def other_token(self, token: Token) -> Token:
        invariant(self.involves_token(token), "TOKEN", f"{token} is not in the pair")
        return self.token1 if token == self.token0 else self.token0

    def has_empty_reserve(self) -> bool:
        return self.reserve0.quotient == 0 or self.reserve1.quotient == 0

    def get_output_amount(self, input_amount: CurrencyAmount) -> tuple[CurrencyAmount, Pair]:
        """Amount received for selling ``input_amount`` into the pool.

        Returns:
            The output amount and the pair with post-trade reserves

        Raises:
            InsufficientReservesError: If either reserve is empty
            InsufficientInputAmountError: If the output rounds down to zero
        """
        invariant(self.involves_token(input_amount.currency), "TOKEN", f"{input_amount.currency} is not in the pair")
        if self.has_empty_reserve():
            raise InsufficientReservesError(f"pair {self.token0}/{self.token1} has an empty reserve")

        input_reserve = self.reserve_of(input_amount.currency)  # type: ignore[arg-type]
        output_token = self.other_token(input_amount.currency)  # type: ignore[arg-type]
        output_reserve = self.reserve_of(output_token)

        input_with_fee = input_amount.quotient * FEE_NUMERATOR
        numerator = input_with_fee * output_reserve.quotient
        denominator = input_reserve.quotient * FEE_DENOMINATOR + input_with_fee
        output_amount = CurrencyAmount.from_raw_amount(output_token, numerator // denominator)
        if output_amount.quotient == 0:
            raise InsufficientInputAmountError(f"{input_amount.quotient} {input_amount.currency} yields no output")

        return output_amount, Pair(
            input_reserve.add(input_amount),
            output_reserve.subtract(output_amount),
            self.exchange,
        )

    def get_input_amount(self, output_amount: CurrencyAmount) -> tuple[CurrencyAmount, Pair]:
        """Amount that must be sold into the pool to receive ``output_amount``.

        Returns:
            The required input amount and the pair with post-trade reserves

        Raises:
            InsufficientReservesError: If a reserve is empty or the pool does
                not hold more than ``output_amount``
        """
        invariant(self.involves_token(output_amount.currency), "TOKEN", f"{output_amount.currency} is not in the pair")
        output_reserve = self.reserve_of(output_amount.currency)  # type: ignore[arg-type]
        if self.has_empty_reserve() or output_amount.quotient >= output_reserve.quotient:
            raise InsufficientReservesError(
                f"pair {self.token0}/{self.token1} cannot provide {output_amount.quotient} {output_amount.currency}"
            )

        input_token = self.other_token(output_amount.currency)  # type: ignore[arg-type]
        input_reserve = self.reserve_of(input_token)

        numerator = input_reserve.quotient * output_amount.quotient * FEE_DENOMINATOR
        denominator = (output_reserve.quotient - output_amount.quotient) * FEE_NUMERATOR
        input_amount = CurrencyAmount.from_raw_amount(input_token, numerator // denominator + 1)

        return input_amount, Pair(
            input_reserve.add(input_amount),
            output_reserve.subtract(output_amount),
            self.exchange,
        )

    def try_output_amount(self, input_amount: CurrencyAmount) -> SwapOutcome:
        """Non-raising form of get_output_amount.

        An amount or post-trade reserve beyond uint256 is reported as
        INSUFFICIENT_RESERVES.
        """
        try:
            amount, pair = self.get_output_amount(input_amount)
        except PoolError as err:
            return SwapOutcome.from_error(err)
        except InvariantViolation as err:
            if err.code != "AMOUNT":
                raise
            return SwapOutcome(SwapStatus.INSUFFICIENT_RESERVES)
        return SwapOutcome(SwapStatus.OK, amount, pair)

    def try_input_amount(self, output_amount: CurrencyAmount) -> SwapOutcome:
        """Non-raising form of get_input_amount. Overflows map as in try_output_amount."""
        try:
            amount, pair = self.get_input_amount(output_amount)
        except PoolError as err:
            return SwapOutcome.from_error(err)
        except InvariantViolation as err:
            if err.code != "AMOUNT":
                raise
            return SwapOutcome(SwapStatus.INSUFFICIENT_RESERVES)
        return SwapOutcome(SwapStatus.OK, amount, pair)

    def get_liquidity_minted(
        self,
        total_supply: CurrencyAmount,
        token_amount_a: CurrencyAmount,
        token_amount_b: CurrencyAmount,
    ) -> CurrencyAmount:
        """LP tokens minted for depositing the two amounts.

        Raises:
            InvariantViolation: If the amounts do not match the pair's tokens
            InsufficientInputAmountError: If no liquidity would be minted
        """
        invariant(total_supply.currency == self.liquidity_token, "LIQUIDITY", "total supply is not of the LP token")
        if token_amount_a.currency.sorts_before(token_amount_b.currency):  # type: ignore[union-attr, arg-type]
            amount0, amount1 = token_amount_a, token_amount_b
        else:
            amount0, amount1 = token_amount_b, token_amount_a
        invariant(
            amount0.currency == self.token0 and amount1.currency == self.token1,
            "TOKEN",
            "deposit tokens do not match the pair",
        )

        if total_supply.quotient == 0:
            liquidity = sqrt(amount0.quotient * amount1.quotient) - MINIMUM_LIQUIDITY
        else:
            liquidity = min(
                amount0.quotient * total_supply.quotient // self.reserve0.quotient,
                amount1.quotient * total_supply.quotient // self.reserve1.quotient,
            )
        if liquidity <= 0:
            raise InsufficientInputAmountError(f"deposit mints {liquidity} liquidity")
        return CurrencyAmount.from_raw_amount(self.liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: CurrencyAmount,
        liquidity: CurrencyAmount,
        fee_on: bool = False,
        k_last: BigintIsh | None = None,
    ) -> CurrencyAmount:
        """Amount of ``token`` redeemable for ``liquidity`` LP tokens.

        With ``fee_on`` the protocol fee that would be minted on the next
        liquidity event (1/6 of the growth in sqrt(k) since ``k_last``) is
        added to the supply first.
        """
        invariant(self.involves_token(token), "TOKEN", f"{token} is not in the pair")
        invariant(total_supply.currency == self.liquidity_token, "TOTAL_SUPPLY", "total supply is not of the LP token")
        invariant(liquidity.currency == self.liquidity_token, "LIQUIDITY", "liquidity is not of the LP token")
        invariant(liquidity.quotient <= total_supply.quotient, "LIQUIDITY", "liquidity exceeds total supply")

        adjusted_supply = total_supply
        if fee_on:
            invariant(k_last is not None, "K_LAST", "k_last is required when the fee is on")
            k_last_value = parse_fraction(k_last).quotient
            if k_last_value != 0:
                root_k = sqrt(self.reserve0.quotient * self.reserve1.quotient)
                root_k_last = sqrt(k_last_value)
                if root_k > root_k_last:
                    numerator = total_supply.quotient * (root_k - root_k_last)
                    denominator = root_k * 5 + root_k_last
                    fee_liquidity = CurrencyAmount.from_raw_amount(self.liquidity_token, numerator // denominator)
                    adjusted_supply = total_supply.add(fee_liquidity)

        return CurrencyAmount.from_raw_amount(
            token,
            liquidity.quotient * self.reserve_of(token).quotient // adjusted_supply.quotient,
        )

    def __repr__(self) -> str:
        return (
            f"Pair({self.token0}:{self.reserve0.quotient}, {self.token1}:{self.reserve1.quotient}, "
            f"{self.exchange.name})"
        )


__all__ = ["Pair", "SwapOutcome", "SwapStatus", "compute_pair_address"]
