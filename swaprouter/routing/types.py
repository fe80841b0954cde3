"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from swaprouter.pools.types import Pool, PoolFamily, PoolKind


@dataclass(frozen=True)
class RouteSegment:
    """One directed hop across a single pool."""

    from_token: str
    to_token: str
    stable: bool
    kind: PoolKind
    fee: int  # Path-encoding fee field (sentinel or tick spacing)
    pool_address: str
    pool: Pool

    @classmethod
    def from_pool(cls, pool: Pool, reverse: bool = False) -> RouteSegment:
        """Build the hop token0 -> token1 (or token1 -> token0 if reverse)."""
        from_token, to_token = (pool.token1, pool.token0) if reverse else (pool.token0, pool.token1)
        return cls(
            from_token=from_token,
            to_token=to_token,
            stable=pool.stable,
            kind=pool.kind,
            fee=pool.fee,
            pool_address=pool.address,
            pool=pool,
        )

    @property
    def family(self) -> PoolFamily:
        return self.pool.family


# A contiguous, acyclic sequence of hops
Route: TypeAlias = list[RouteSegment]


@dataclass(frozen=True)
class Quote:
    """Quoted output for one candidate route."""

    route: Route
    amount_in: int
    amount_out: int
    raw_segment_outputs: list[int] = field(default_factory=list)

    @property
    def hop_count(self) -> int:
        return len(self.route)


def route_tokens(route: Route) -> list[str]:
    """Token sequence visited by a route (start token first)."""
    if not route:
        return []
    return [route[0].from_token] + [segment.to_token for segment in route]


def is_contiguous(route: Route) -> bool:
    """Check that every hop starts where the previous one ended."""
    return all(a.to_token == b.from_token for a, b in zip(route, route[1:], strict=False))


__all__ = ["RouteSegment", "Route", "Quote", "route_tokens", "is_contiguous"]
