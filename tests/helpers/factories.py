"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pool, make_route
    # or
    from tests.helpers.factories import make_pool, make_route

    pool = make_pool(TOKEN_A, TOKEN_B, kind="concentrated", tick_spacing=100)
"""

from swaprouter.pools.types import Pool, PoolKind
from swaprouter.routing.types import Route, RouteSegment


def make_pool(
    token0: str,
    token1: str,
    address_suffix: str = "01",
    kind: PoolKind | str = PoolKind.VOLATILE,
    tick_spacing: int = 0,
    factory: str | None = None,
) -> Pool:
    """Create a test pool.

    Args:
        token0: First token address
        token1: Second token address
        address_suffix: Leading byte of the pool address, keeps addresses unique
        kind: "stable", "volatile" or "concentrated" (or PoolKind)
        tick_spacing: Tick spacing for concentrated pools (default: 100 if
                      kind is concentrated and none given)
        factory: Optional factory address

    Returns:
        Pool instance ready for testing
    """
    pool_kind = PoolKind(kind) if isinstance(kind, str) else kind
    if pool_kind == PoolKind.CONCENTRATED and tick_spacing == 0:
        tick_spacing = 100

    return Pool(
        address=f"0x{address_suffix}{'11' * 19}",
        token0=token0,
        token1=token1,
        kind=pool_kind,
        tick_spacing=tick_spacing,
        factory=factory,
    )


def make_segment(pool: Pool, reverse: bool = False) -> RouteSegment:
    """Create the hop across `pool` (token0 -> token1 unless reverse)."""
    return RouteSegment.from_pool(pool, reverse=reverse)


def make_route(tokens: list[str], kinds: list[str], start_suffix: int = 1) -> Route:
    """Create a contiguous route through fresh pools.

    Args:
        tokens: Token sequence, len(kinds) + 1 entries
        kinds: Pool kind per hop ("stable", "volatile" or "concentrated")
        start_suffix: First pool address suffix; later hops count up

    Returns:
        Route with one segment per hop
    """
    if len(tokens) != len(kinds) + 1:
        raise ValueError("tokens must have exactly one more entry than kinds")

    route: Route = []
    for i, kind in enumerate(kinds):
        pool = make_pool(tokens[i], tokens[i + 1], f"{start_suffix + i:02x}", kind=kind)
        route.append(make_segment(pool))
    return route


def make_record(
    token0: str,
    token1: str,
    address_suffix: str = "01",
    pool_type: int = 0,
    factory: str | None = None,
) -> dict[str, object]:
    """Create a raw pool record as returned by the liquidity index."""
    record: dict[str, object] = {
        "lp": f"0x{address_suffix}{'11' * 19}",
        "token0": token0,
        "token1": token1,
        "type": pool_type,
    }
    if factory is not None:
        record["factory"] = factory
    return record
