"""Token amount scaling, slippage and sanity checks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal

from swaprouter.constants import DEFAULT_SLIPPAGE_PERCENT, TOKEN_INFO, USDC, USDT, WETH
from swaprouter.errors import UnknownTokenError
from swaprouter.models.types import normalize_address
from swaprouter.pools.types import Token


class TokenRegistry:
    """Decimals and symbols for the tokens a swap may touch."""

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._tokens: dict[str, Token] = {}
        for token in tokens:
            self.add(token)

    @classmethod
    def default(cls) -> TokenRegistry:
        """Registry of the well-known tokens in constants.TOKEN_INFO."""
        return cls(
            Token(address=address, symbol=symbol, decimals=decimals)
            for address, (symbol, decimals) in TOKEN_INFO.items()
        )

    def add(self, token: Token) -> None:
        self._tokens[token.address] = token

    def get(self, address: str) -> Token:
        """Look up a token.

        Raises:
            UnknownTokenError: If the token is not registered
        """
        token = self._tokens.get(normalize_address(address))
        if token is None:
            raise UnknownTokenError(f"Token not found: {address}")
        return token

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_address(address) in self._tokens

    def symbols(self) -> dict[str, str]:
        """Address -> symbol mapping for display."""
        return {address: token.symbol for address, token in self._tokens.items()}


def calculate_amount_out_minimum(
    amount_out: int, slippage_percent: int = DEFAULT_SLIPPAGE_PERCENT
) -> int:
    """Apply a slippage tolerance to an expected output.

    Args:
        amount_out: Expected output in raw units
        slippage_percent: Tolerance in whole percent (e.g., 5 for 5%)

    Returns:
        floor(amount_out * (100 - slippage_percent) / 100)
    """
    if not 0 <= slippage_percent < 100:
        raise ValueError(f"slippage_percent must be in [0, 100), got {slippage_percent}")
    if amount_out < 0:
        raise ValueError(f"amount_out cannot be negative: {amount_out}")
    return amount_out * (100 - slippage_percent) // 100


def format_token_amount(amount: int, token: Token) -> str:
    """Format a raw amount in whole-token units (e.g., 1500000 USDC -> "1.5")."""
    value = Decimal(amount).scaleb(-token.decimals)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_token_units(amount: Decimal | int | str, token: Token) -> int:
    """Convert a whole-token amount to raw units, rounding down."""
    scaled = Decimal(amount).scaleb(token.decimals)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def exchange_rate(amount_in: int, token_in: Token, amount_out: int, token_out: Token) -> Decimal:
    """Output tokens per input token, in whole-token units."""
    if amount_in <= 0:
        raise ValueError(f"amount_in must be positive, got {amount_in}")
    return Decimal(amount_out).scaleb(-token_out.decimals) / Decimal(amount_in).scaleb(
        -token_in.decimals
    )


@dataclass(frozen=True)
class RateValidation:
    """Outcome of an exchange rate sanity check."""

    is_valid: bool
    expected_rate: Decimal | None = None
    message: str | None = None


# (from, to) -> (expected rate, minimum acceptable rate)
RATE_BOUNDS: dict[tuple[str, str], tuple[Decimal, Decimal]] = {
    (USDT, WETH): (Decimal("0.0005"), Decimal("0.0001")),
    (USDC, WETH): (Decimal("0.0005"), Decimal("0.0001")),
}


def validate_exchange_rate(
    from_token: str,
    to_token: str,
    rate: Decimal,
    bounds: dict[tuple[str, str], tuple[Decimal, Decimal]] | None = None,
) -> RateValidation:
    """Flag quotes whose rate is far below a known reference.

    Pairs without configured bounds always pass.
    """
    table = RATE_BOUNDS if bounds is None else bounds
    key = (normalize_address(from_token), normalize_address(to_token))
    if key not in table:
        return RateValidation(is_valid=True)

    expected, minimum = table[key]
    if rate < minimum:
        return RateValidation(
            is_valid=False,
            expected_rate=expected,
            message=f"Exchange rate seems unusually low: expected ~{expected}, got {rate:.6f}",
        )
    return RateValidation(is_valid=True, expected_rate=expected)


__all__ = [
    "RATE_BOUNDS",
    "RateValidation",
    "TokenRegistry",
    "calculate_amount_out_minimum",
    "exchange_rate",
    "format_token_amount",
    "to_token_units",
    "validate_exchange_rate",
]
