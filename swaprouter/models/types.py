"""Address and on-chain integer types.

Addresses are compared in lowercase everywhere (pool keys, graph nodes,
edge keys). Amounts cross the HTTP boundary as decimal strings so that
uint256 values survive JSON clients that only have doubles.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

UINT256_MAX = 2**256 - 1

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def validate_uint256(value: Any) -> str:
    """Coerce an int or decimal string to a canonical uint256 string.

    Raises:
        ValueError: If the value is not an integer in [0, 2^256-1]
    """
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    try:
        amount = int(value)
    except ValueError as err:
        raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err

    if not 0 <= amount <= UINT256_MAX:
        raise ValueError(f"Uint256 out of range: {value}")
    return str(amount)


Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

# Raw token amount, serialized as a decimal string
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# 0x-prefixed hex payload (encoded paths, router commands and inputs)
HexString = Annotated[str, Field(pattern=r"^0x([a-fA-F0-9]{2})*$")]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Lowercase an address and ensure the 0x prefix.

    Raises:
        ValueError: If validate is True and the result is not a valid address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")
    return addr


def is_valid_address(address: str) -> bool:
    """Check for 0x followed by exactly 40 hex characters."""
    return isinstance(address, str) and _ADDRESS_RE.fullmatch(address) is not None


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
