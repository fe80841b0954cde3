"""Shared models for the swap router."""

from swaprouter.models.types import (
    ADDRESS_PATTERN,
    UINT256_MAX,
    Address,
    HexString,
    Uint256,
    is_valid_address,
    normalize_address,
    validate_uint256,
)

__all__ = [
    "ADDRESS_PATTERN",
    "UINT256_MAX",
    "Address",
    "HexString",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    "validate_uint256",
]
