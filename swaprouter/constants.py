"""Protocol constants for the swap router.

Centralizes well-known addresses and routing parameters.
"""

from swaprouter.models.types import is_valid_address, normalize_address


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a lowercase token address.

    Args:
        name: Name of the token (for error messages)
        address: The address to validate

    Returns:
        The validated, lowercased address

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return normalize_address(address)


# Chain the default addresses below live on (Optimism)
CHAIN_ID = 10

# Universal router that executes V2/V3 swap commands
UNIVERSAL_ROUTER = _validate_token_address(
    "UNIVERSAL_ROUTER", "0x6Cb442acF35158D5eDa88fe602221b67B400Be3E"
)

# Liquidity index ("sugar") contract exposing all(limit, offset)
POOL_INDEX_ADDRESS = _validate_token_address(
    "POOL_INDEX_ADDRESS", "0x63a73829C74e936C1D2EEbE64164694f16700138"
)

# Path-encoding fee sentinels for legacy constant-product pools.
# Concentrated pools encode their tick spacing instead.
STABLE_POOL_FEE = 0x200000
VOLATILE_POOL_FEE = 0x400000

# Raw pool "type" values reported by the index contract
RAW_POOL_TYPE_STABLE = -1
RAW_POOL_TYPE_VOLATILE = 0

# Byte widths in an encoded path
ADDRESS_SIZE = 20
FEE_SIZE = 3

# Largest value a path fee field can hold (tick spacing must fit)
MAX_FEE_FIELD = 2 ** (8 * FEE_SIZE) - 1

# Pool index paging
POOL_PAGE_SIZE = 500
MAX_POOLS_TO_FETCH = 8000

# Routing defaults
DEFAULT_MAX_HOPS = 3
DEFAULT_MAX_ROUTES = 25
DEFAULT_QUOTE_CHUNK_SIZE = 10
DEFAULT_SLIPPAGE_PERCENT = 5

# Well-known token addresses (lowercase for consistency)
USDT = _validate_token_address("USDT", "0x94b008aA00579c1307B0EF2c499aD98a8ce58e58")
VELO = _validate_token_address("VELO", "0x9560e827aF36c94D2Ac33a39bCE1Fe78631088Db")
OP = _validate_token_address("OP", "0x4200000000000000000000000000000000000042")
USDC = _validate_token_address("USDC", "0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85")
WETH = _validate_token_address("WETH", "0x4200000000000000000000000000000000000006")
ETH = _validate_token_address("ETH", "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE")
WLD = _validate_token_address("WLD", "0xdC6fF44d5d932Cbd77B52E5612Ba0529DC6226F1")

# (symbol, decimals) for tokens the router knows how to scale and display
TOKEN_INFO: dict[str, tuple[str, int]] = {
    USDC: ("USDC", 6),
    OP: ("OP", 18),
    USDT: ("USDT", 6),
    VELO: ("VELO", 18),
    WLD: ("WLD", 18),
    WETH: ("WETH", 18),
    ETH: ("ETH", 18),
}

# Intermediate tokens deep enough to route through
HIGH_LIQUIDITY_TOKENS = [USDC, USDT, WETH, OP, VELO]

__all__ = [
    "CHAIN_ID",
    "UNIVERSAL_ROUTER",
    "POOL_INDEX_ADDRESS",
    "STABLE_POOL_FEE",
    "VOLATILE_POOL_FEE",
    "RAW_POOL_TYPE_STABLE",
    "RAW_POOL_TYPE_VOLATILE",
    "ADDRESS_SIZE",
    "FEE_SIZE",
    "MAX_FEE_FIELD",
    "POOL_PAGE_SIZE",
    "MAX_POOLS_TO_FETCH",
    "DEFAULT_MAX_HOPS",
    "DEFAULT_MAX_ROUTES",
    "DEFAULT_QUOTE_CHUNK_SIZE",
    "DEFAULT_SLIPPAGE_PERCENT",
    "USDT",
    "VELO",
    "OP",
    "USDC",
    "WETH",
    "ETH",
    "WLD",
    "TOKEN_INFO",
    "HIGH_LIQUIDITY_TOKENS",
]
