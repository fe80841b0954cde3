"""Path encoding for router swap commands and quoter calls.

An encoded path is the packed byte string

    token0 | fee0 | token1 | fee1 | token2 ...

where each token is a 20-byte address and each fee a 3-byte big-endian
field. Concentrated pools put their tick spacing in the fee field;
legacy pools use the stable/volatile sentinels.
"""

from __future__ import annotations

from collections.abc import Mapping

from eth_abi.packed import encode_packed

from swaprouter.constants import ADDRESS_SIZE, FEE_SIZE, STABLE_POOL_FEE, VOLATILE_POOL_FEE
from swaprouter.errors import PathDecodeError
from swaprouter.models.types import normalize_address

from .types import Route

EMPTY_PATH = "0x"


def encode_route_to_path(route: Route, exact_output: bool = False) -> str:
    """Encode a route as a packed token/fee path.

    Args:
        route: Hops to encode, in swap order
        exact_output: Reverse the path (exact-output swaps are specified
                      from the output token back to the input token)

    Returns:
        0x-prefixed hex path, or "0x" for an empty route
    """
    if not route:
        return EMPTY_PATH

    elements: list[str | int] = [route[0].from_token]
    for segment in route:
        elements.append(segment.fee)
        elements.append(segment.to_token)

    if exact_output:
        elements.reverse()

    types: list[str] = []
    values: list[bytes | int] = []
    for i, element in enumerate(elements):
        if i % 2 == 0:
            types.append("address")
            values.append(bytes.fromhex(normalize_address(str(element))[2:]))
        else:
            types.append("uint24")
            values.append(int(element))

    return "0x" + encode_packed(types, values).hex()


def split_path(path: str) -> tuple[list[str], list[int]]:
    """Split an encoded path into its token and fee fields.

    Args:
        path: 0x-prefixed hex path

    Returns:
        Tuple of (tokens, fees) with len(tokens) == len(fees) + 1, or
        ([], []) for the empty path

    Raises:
        PathDecodeError: If the path is not valid hex or has a bad length
    """
    body = path[2:] if path.startswith("0x") else path
    if not body:
        return [], []

    try:
        raw = bytes.fromhex(body)
    except ValueError as err:
        raise PathDecodeError(f"Path is not valid hex: {path}") from err

    hop_size = ADDRESS_SIZE + FEE_SIZE
    if len(raw) < ADDRESS_SIZE or (len(raw) - ADDRESS_SIZE) % hop_size != 0:
        raise PathDecodeError(f"Path has invalid length {len(raw)} bytes")

    tokens: list[str] = []
    fees: list[int] = []
    offset = 0
    while True:
        tokens.append("0x" + raw[offset : offset + ADDRESS_SIZE].hex())
        offset += ADDRESS_SIZE
        if offset == len(raw):
            break
        fees.append(int.from_bytes(raw[offset : offset + FEE_SIZE], "big"))
        offset += FEE_SIZE

    return tokens, fees


def describe_fee(fee: int) -> str:
    """Best-effort label for a path fee field.

    A bare fee cannot always tell pool kinds apart, so anything that is
    not a legacy sentinel is reported as a concentrated tick spacing.
    """
    if fee == STABLE_POOL_FEE:
        return "stable"
    if fee == VOLATILE_POOL_FEE:
        return "volatile"
    return f"CL-{fee}"


def decode_path(path: str) -> str:
    """Render an encoded path for diagnostics.

    Example: "0xaaaa... --[volatile]--> 0xbbbb... --[CL-100]--> 0xcccc..."
    """
    tokens, fees = split_path(path)
    if not tokens:
        return "(empty path)"

    parts = [tokens[0]]
    for fee, token in zip(fees, tokens[1:], strict=True):
        parts.append(f"--[{describe_fee(fee)}]--> {token}")
    return " ".join(parts)


def format_route_path(route: Route, symbols: Mapping[str, str] | None = None) -> str:
    """Render a route with token symbols where known.

    Example: "USDC -(CL-100)-> WETH -(volatile)-> OP"
    """
    if not route:
        return "(empty route)"

    def name(token: str) -> str:
        if symbols is None:
            return token
        return symbols.get(token, token)

    parts = [name(route[0].from_token)]
    for segment in route:
        parts.append(f"-({segment.pool.label})-> {name(segment.to_token)}")
    return " ".join(parts)


__all__ = [
    "EMPTY_PATH",
    "decode_path",
    "describe_fee",
    "encode_route_to_path",
    "format_route_path",
    "split_path",
]
