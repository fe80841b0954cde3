"""Token and pool value types.

Pools are immutable snapshots taken once per routing session. The pool
kind is resolved at ingestion so routing code never branches on raw
index sentinels.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from swaprouter.constants import MAX_FEE_FIELD, STABLE_POOL_FEE, VOLATILE_POOL_FEE
from swaprouter.errors import InvalidPoolError
from swaprouter.models.types import normalize_address


@dataclass(frozen=True)
class Token:
    """An ERC20 token known to the router."""

    address: str
    decimals: int
    symbol: str

    def __post_init__(self) -> None:
        if self.decimals < 0:
            raise ValueError(f"Token decimals cannot be negative: {self.decimals}")
        object.__setattr__(self, "address", normalize_address(self.address))


class PoolKind(str, Enum):
    """Swap-math category of a pool."""

    STABLE = "stable"
    VOLATILE = "volatile"
    CONCENTRATED = "concentrated"


class PoolFamily(str, Enum):
    """Router protocol family a pool is swapped through."""

    LEGACY = "v2"  # Constant-product pools (stable and volatile)
    TICK = "v3"  # Concentrated liquidity pools


@dataclass(frozen=True)
class Pool:
    """A single liquidity venue between two tokens.

    Attributes:
        address: Pool address (lowercase, unique key)
        token0: First token address (lowercase)
        token1: Second token address (lowercase)
        kind: Stable, volatile or concentrated
        tick_spacing: Tick spacing for concentrated pools, 0 otherwise
        factory: Factory that deployed the pool, if reported
    """

    address: str
    token0: str
    token1: str
    kind: PoolKind
    tick_spacing: int = 0
    factory: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalize_address(self.address))
        object.__setattr__(self, "token0", normalize_address(self.token0))
        object.__setattr__(self, "token1", normalize_address(self.token1))
        if self.factory is not None:
            object.__setattr__(self, "factory", normalize_address(self.factory))

        if self.token0 == self.token1:
            raise InvalidPoolError(f"Pool {self.address} has identical tokens {self.token0}")
        if self.kind == PoolKind.CONCENTRATED and self.tick_spacing <= 0:
            raise InvalidPoolError(
                f"Concentrated pool {self.address} needs positive tick spacing, "
                f"got {self.tick_spacing}"
            )
        if self.tick_spacing > MAX_FEE_FIELD:
            raise InvalidPoolError(
                f"Pool {self.address} tick spacing {self.tick_spacing} exceeds the "
                f"path fee field maximum {MAX_FEE_FIELD:#x}"
            )

    @property
    def stable(self) -> bool:
        """True for stable constant-product pools."""
        return self.kind == PoolKind.STABLE

    @property
    def is_concentrated(self) -> bool:
        return self.kind == PoolKind.CONCENTRATED

    @property
    def family(self) -> PoolFamily:
        return PoolFamily.TICK if self.is_concentrated else PoolFamily.LEGACY

    @property
    def fee(self) -> int:
        """Fee field used when this pool appears in an encoded path."""
        if self.kind == PoolKind.STABLE:
            return STABLE_POOL_FEE
        if self.kind == PoolKind.VOLATILE:
            return VOLATILE_POOL_FEE
        return self.tick_spacing

    @property
    def label(self) -> str:
        """Short pool kind label (e.g., "volatile", "CL-100")."""
        if self.is_concentrated:
            return f"CL-{self.tick_spacing}"
        return self.kind.value

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token0:
            return self.token1
        elif token_in_norm == self.token1:
            return self.token0
        else:
            raise ValueError(f"Token {token_in} not in pool")


__all__ = ["Token", "PoolKind", "PoolFamily", "Pool"]
