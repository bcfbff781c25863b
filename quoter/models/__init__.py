"""Address handling and pydantic models for the HTTP API."""

from quoter.models.types import (
    Address,
    Uint256,
    is_valid_address,
    validate_and_parse_address,
    validate_uint256,
)

__all__ = [
    "Address",
    "Uint256",
    "is_valid_address",
    "validate_and_parse_address",
    "validate_uint256",
]
