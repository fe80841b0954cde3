"""Routing configuration for the swap router."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from swaprouter.constants import (
    DEFAULT_MAX_HOPS,
    DEFAULT_MAX_ROUTES,
    DEFAULT_QUOTE_CHUNK_SIZE,
    DEFAULT_SLIPPAGE_PERCENT,
    HIGH_LIQUIDITY_TOKENS,
    MAX_POOLS_TO_FETCH,
    POOL_INDEX_ADDRESS,
    POOL_PAGE_SIZE,
    UNIVERSAL_ROUTER,
)
from swaprouter.models.types import normalize_address

ENV_PREFIX = "SWAPROUTER_"


@dataclass(frozen=True)
class RoutingConfig:
    """Centralized configuration for route discovery and execution planning.

    Attributes:
        max_hops: Maximum number of pools a route may traverse (default: 3)
        max_routes: Cap on routes returned by route discovery (default: 25)
        quote_chunk_size: Number of routes quoted concurrently per batch (default: 10)
        slippage_percent: Slippage tolerance applied to the best quote (default: 5)
        high_liquidity_tokens: Tokens allowed as route intermediates
        pool_page_size: Records requested per pool index page (default: 500)
        max_pools: Upper bound on pools fetched per routing session (default: 8000)
        router_address: Universal router that holds funds between hops
        pool_index_address: Liquidity index contract queried for pools
        quoter_address: Route quoter contract, if quoting over RPC
        rpc_url: JSON-RPC endpoint, if any
    """

    max_hops: int = DEFAULT_MAX_HOPS
    max_routes: int = DEFAULT_MAX_ROUTES
    quote_chunk_size: int = DEFAULT_QUOTE_CHUNK_SIZE
    slippage_percent: int = DEFAULT_SLIPPAGE_PERCENT
    high_liquidity_tokens: tuple[str, ...] = field(
        default_factory=lambda: tuple(HIGH_LIQUIDITY_TOKENS)
    )
    pool_page_size: int = POOL_PAGE_SIZE
    max_pools: int = MAX_POOLS_TO_FETCH
    router_address: str = UNIVERSAL_ROUTER
    pool_index_address: str = POOL_INDEX_ADDRESS
    quoter_address: str | None = None
    rpc_url: str | None = None

    def __post_init__(self) -> None:
        if self.max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {self.max_hops}")
        if self.max_routes < 1:
            raise ValueError(f"max_routes must be at least 1, got {self.max_routes}")
        if self.quote_chunk_size < 1:
            raise ValueError(f"quote_chunk_size must be at least 1, got {self.quote_chunk_size}")
        if not 0 <= self.slippage_percent < 100:
            raise ValueError(f"slippage_percent must be in [0, 100), got {self.slippage_percent}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> RoutingConfig:
        """Build a config from SWAPROUTER_* environment variables.

        Unset variables keep their defaults. SWAPROUTER_HIGH_LIQUIDITY_TOKENS
        is a comma-separated list of addresses.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            RoutingConfig with overrides applied
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        int_fields = {
            "MAX_HOPS": "max_hops",
            "MAX_ROUTES": "max_routes",
            "QUOTE_CHUNK_SIZE": "quote_chunk_size",
            "SLIPPAGE_PERCENT": "slippage_percent",
            "POOL_PAGE_SIZE": "pool_page_size",
            "MAX_POOLS": "max_pools",
        }
        for suffix, name in int_fields.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw:
                overrides[name] = int(raw)

        address_fields = {
            "ROUTER_ADDRESS": "router_address",
            "POOL_INDEX_ADDRESS": "pool_index_address",
            "QUOTER_ADDRESS": "quoter_address",
        }
        for suffix, name in address_fields.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw:
                overrides[name] = normalize_address(raw, validate=True)

        tokens = env.get(ENV_PREFIX + "HIGH_LIQUIDITY_TOKENS")
        if tokens:
            overrides["high_liquidity_tokens"] = tuple(
                normalize_address(t.strip(), validate=True) for t in tokens.split(",") if t.strip()
            )

        rpc_url = env.get(ENV_PREFIX + "RPC_URL")
        if rpc_url:
            overrides["rpc_url"] = rpc_url

        return cls(**overrides)  # type: ignore[arg-type]


# Default configuration instance
DEFAULT_ROUTING_CONFIG = RoutingConfig()

__all__ = ["ENV_PREFIX", "RoutingConfig", "DEFAULT_ROUTING_CONFIG"]
