"""Shared type definitions: addresses and 256-bit integers.

Addresses are normalized to their EIP-55 checksummed form. The pydantic
annotated types are used by the HTTP request/response models.
"""

from typing import Annotated, Any

from eth_utils import is_address, to_checksum_address
from pydantic import AfterValidator, BeforeValidator, Field

from quoter.errors import AddressError

# Maximum uint256 value
UINT256_MAX = 2**256 - 1


def is_valid_address(address: Any) -> bool:
    """Check if a value is a valid Ethereum address.

    Lowercase and uppercase hex are accepted. Mixed-case input must carry a
    valid EIP-55 checksum.

    Args:
        address: Value to validate

    Returns:
        True if valid Ethereum address
    """
    if not isinstance(address, str) or not address.startswith("0x"):
        return False
    return bool(is_address(address))


def validate_and_parse_address(address: str) -> str:
    """Validate an address and return it checksummed.

    Args:
        address: An Ethereum address with 0x prefix

    Returns:
        EIP-55 checksummed address

    Raises:
        AddressError: If the address is malformed or its checksum is wrong
    """
    if not is_valid_address(address):
        raise AddressError(address)
    return to_checksum_address(address)


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return str(int_value)


# Ethereum address, returned checksummed
Address = Annotated[
    str,
    Field(pattern=r"^0x[a-fA-F0-9]{40}$"),
    AfterValidator(validate_and_parse_address),
]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


__all__ = [
    "Address",
    "UINT256_MAX",
    "Uint256",
    "is_valid_address",
    "validate_and_parse_address",
    "validate_uint256",
]
