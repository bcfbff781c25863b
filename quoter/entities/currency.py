"""Currencies: ERC-20 tokens and a chain's native asset.

A Currency is either a Token (identity = chain id + address) or a
NativeCurrency (identity = chain id). Pool math only ever sees tokens; a
native currency is projected onto its wrapped token through ``wrapped``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Union

from quoter.constants import ChainId
from quoter.errors import invariant
from quoter.models.types import validate_and_parse_address


def _validate_currency_fields(chain_id: int, decimals: int) -> None:
    invariant(isinstance(chain_id, int) and not isinstance(chain_id, bool), "CHAIN_ID", f"{chain_id!r}")
    invariant(isinstance(decimals, int) and 0 <= decimals < 255, "DECIMALS", f"{decimals!r}")


@dataclass(frozen=True)
class Token:
    """An ERC-20 token on a specific chain.

    The address is checksummed on construction; equality and hashing use
    only the chain id and address.
    """

    chain_id: int
    address: str
    decimals: int = field(compare=False)
    symbol: str | None = field(default=None, compare=False)
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _validate_currency_fields(self.chain_id, self.decimals)
        object.__setattr__(self, "address", validate_and_parse_address(self.address))

    @property
    def is_native(self) -> bool:
        return False

    @property
    def is_token(self) -> bool:
        return True

    @property
    def wrapped(self) -> Token:
        return self

    def equals(self, other: object) -> bool:
        return self == other

    def sorts_before(self, other: Token) -> bool:
        """Whether this token is token0 of a pair with ``other``.

        Raises:
            InvariantViolation: On different chains or identical addresses
        """
        invariant(self.chain_id == other.chain_id, "CHAIN_IDS", f"{self.chain_id} != {other.chain_id}")
        invariant(self.address != other.address, "ADDRESSES", f"{self.address} appears twice")
        return self.address.lower() < other.address.lower()

    def __str__(self) -> str:
        return self.symbol or self.address


@dataclass(frozen=True)
class NativeCurrency:
    """The gas asset of a chain (ETH on Ethereum networks)."""

    chain_id: int
    decimals: int = field(default=18, compare=False)
    symbol: str | None = field(default="ETH", compare=False)
    name: str | None = field(default="Ether", compare=False)

    def __post_init__(self) -> None:
        _validate_currency_fields(self.chain_id, self.decimals)

    @classmethod
    def on_chain(cls, chain_id: int) -> NativeCurrency:
        """Shared instance for ``chain_id``."""
        return _native_on_chain(chain_id)

    @property
    def is_native(self) -> bool:
        return True

    @property
    def is_token(self) -> bool:
        return False

    @property
    def wrapped(self) -> Token:
        """The registered wrapped token for this chain.

        Raises:
            InvariantViolation: If no wrapped token is registered for the chain
        """
        weth = WETH.get(self.chain_id)
        invariant(weth is not None, "WRAPPED", f"no wrapped native token on chain {self.chain_id}")
        return weth  # type: ignore[return-value]

    def equals(self, other: object) -> bool:
        return self == other

    def __str__(self) -> str:
        return self.symbol or "NATIVE"


@lru_cache(maxsize=None)
def _native_on_chain(chain_id: int) -> NativeCurrency:
    return NativeCurrency(chain_id)


Currency = Union[Token, NativeCurrency]


def currency_equals(currency_a: Currency, currency_b: Currency) -> bool:
    """Identity comparison: variant plus chain id (and address for tokens)."""
    return currency_a == currency_b


def _weth(chain_id: ChainId, address: str) -> Token:
    return Token(chain_id, address, 18, "WETH", "Wrapped Ether")


# Wrapped native token per chain
WETH: dict[int, Token] = {
    ChainId.MAINNET: _weth(ChainId.MAINNET, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"),
    ChainId.ROPSTEN: _weth(ChainId.ROPSTEN, "0xc778417E063141139Fce010982780140Aa0cD5Ab"),
    ChainId.RINKEBY: _weth(ChainId.RINKEBY, "0xc778417E063141139Fce010982780140Aa0cD5Ab"),
    ChainId.GOERLI: _weth(ChainId.GOERLI, "0xB4FBF271143F4FBf7B91A5ded31805e42b2208d6"),
    ChainId.KOVAN: _weth(ChainId.KOVAN, "0xd0A1E359811322d97991E03f863a0C30C2cF029C"),
    ChainId.HARDHAT: _weth(ChainId.HARDHAT, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"),
}


def wrapped_native(chain_id: int) -> Token:
    """The wrapped native token of ``chain_id``."""
    return NativeCurrency.on_chain(chain_id).wrapped


__all__ = [
    "Currency",
    "NativeCurrency",
    "Token",
    "WETH",
    "currency_equals",
    "wrapped_native",
]
