"""Route discovery over the liquidity graph.

Routes are enumerated as simple token paths (no token visited twice) of
at most `max_hops` pools. Where several pools connect the same pair, each
hop contributes one edge group and every combination of pool choices
becomes its own route.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import product

import structlog

from swaprouter.constants import DEFAULT_MAX_HOPS, DEFAULT_MAX_ROUTES
from swaprouter.models.types import normalize_address
from swaprouter.pools.types import Pool

from .graph import FORWARD, GraphEdge, LiquidityGraph, build_graph, parse_edge_key
from .types import Route, RouteSegment

logger = structlog.get_logger()


def iter_edge_group_paths(
    graph: LiquidityGraph,
    source: str,
    target: str,
    max_hops: int,
) -> Iterator[list[list[GraphEdge]]]:
    """Yield simple paths from source to target as lists of edge groups.

    Depth-first backtracking with a visited set. Each yielded path holds,
    per hop, every parallel edge between the two tokens of that hop.

    Args:
        graph: Liquidity graph
        source: Normalized start token
        target: Normalized end token
        max_hops: Maximum path length in edges
    """
    visited = {source}
    groups: list[list[GraphEdge]] = []

    def walk(current: str) -> Iterator[list[list[GraphEdge]]]:
        for neighbor in graph.neighbors(current):
            if neighbor in visited:
                continue
            groups.append(graph.edges_between(current, neighbor))
            if neighbor == target:
                yield list(groups)
            elif len(groups) < max_hops:
                visited.add(neighbor)
                yield from walk(neighbor)
                visited.discard(neighbor)
            groups.pop()

    if max_hops >= 1:
        yield from walk(source)


def _segment_for_edge(edge: GraphEdge, pools_by_address: dict[str, Pool]) -> RouteSegment | None:
    direction, pool_address = parse_edge_key(edge.key)
    pool = pools_by_address.get(pool_address)
    if pool is None:
        return None
    return RouteSegment.from_pool(pool, reverse=direction != FORWARD)


def expand_edge_groups(
    edge_groups: list[list[GraphEdge]],
    pools_by_address: dict[str, Pool],
) -> list[Route]:
    """Expand one edge-group path into concrete routes.

    Edges whose pool is missing from the lookup are dropped; a hop left
    with no usable edge yields no routes.
    """
    segment_choices: list[list[RouteSegment]] = []
    for group in edge_groups:
        segments = [
            segment
            for segment in (_segment_for_edge(edge, pools_by_address) for edge in group)
            if segment is not None
        ]
        if not segments:
            return []
        segment_choices.append(segments)

    return [list(combination) for combination in product(*segment_choices)]


def filter_by_liquidity(routes: Iterable[Route], allowed_tokens: set[str]) -> list[Route]:
    """Keep routes whose every hop stays inside the allowed token set."""
    return [
        route
        for route in routes
        if all(
            segment.from_token in allowed_tokens and segment.to_token in allowed_tokens
            for segment in route
        )
    ]


def limit_routes(routes: list[Route], max_routes: int) -> list[Route]:
    """Cap the route count, never dropping direct routes for multi-hop ones.

    All single-hop routes are kept (even past the cap); remaining
    capacity goes to multi-hop routes in discovery order.
    """
    if len(routes) <= max_routes:
        return routes

    direct = [route for route in routes if len(route) == 1]
    multi_hop = [route for route in routes if len(route) > 1]
    capacity = max(max_routes - len(direct), 0)
    return direct + multi_hop[:capacity]


def find_routes(
    graph: LiquidityGraph,
    pools_by_address: dict[str, Pool],
    from_token: str,
    to_token: str,
    high_liquidity_tokens: Iterable[str],
    max_hops: int = DEFAULT_MAX_HOPS,
    max_routes: int = DEFAULT_MAX_ROUTES,
) -> list[Route]:
    """Find candidate routes from from_token to to_token.

    Eg. for A -> B:
        [
            [A -> B (pool 1)],
            [A -> B (pool 2)],
            [A -> X, X -> B],
            [A -> Y, Y -> X, X -> B],
        ]

    Args:
        graph: Liquidity graph built from the current pool snapshot
        pools_by_address: Pool lookup returned by build_graph
        from_token: Token to sell (any case)
        to_token: Token to buy (any case)
        high_liquidity_tokens: Tokens allowed as intermediates
        max_hops: Maximum pools per route (default 3)
        max_routes: Maximum routes to return, direct routes excepted (default 25)

    Returns:
        List of routes; empty when no route exists. Enumeration errors are
        logged and also yield an empty list.
    """
    if not from_token or not to_token or graph.is_empty:
        return []

    source = normalize_address(from_token)
    target = normalize_address(to_token)

    if source == target or not graph.has_token(source) or not graph.has_token(target):
        return []

    try:
        routes: list[Route] = []
        for edge_groups in iter_edge_group_paths(graph, source, target, max_hops):
            routes.extend(expand_edge_groups(edge_groups, pools_by_address))
    except Exception:
        logger.exception(
            "route_enumeration_failed",
            from_token=source,
            to_token=target,
            max_hops=max_hops,
        )
        return []

    allowed = {normalize_address(t) for t in high_liquidity_tokens} | {source, target}
    filtered = filter_by_liquidity(routes, allowed)
    result = limit_routes(filtered, max_routes)

    logger.debug(
        "routes_found",
        from_token=source,
        to_token=target,
        enumerated=len(routes),
        allowed=len(filtered),
        returned=len(result),
    )
    return result


class RouteFinder:
    """Facade for repeated route queries over one pool snapshot.

    Usage:
        finder = RouteFinder.from_pools(pools, high_liquidity_tokens=[USDC, WETH])
        routes = finder.find_routes(token_in, token_out)
    """

    def __init__(
        self,
        graph: LiquidityGraph,
        pools_by_address: dict[str, Pool],
        high_liquidity_tokens: Iterable[str] = (),
        max_hops: int = DEFAULT_MAX_HOPS,
        max_routes: int = DEFAULT_MAX_ROUTES,
    ) -> None:
        self.graph = graph
        self.pools_by_address = pools_by_address
        self.high_liquidity_tokens = [normalize_address(t) for t in high_liquidity_tokens]
        self.max_hops = max_hops
        self.max_routes = max_routes

    @classmethod
    def from_pools(cls, pools: Iterable[Pool], **kwargs: object) -> RouteFinder:
        """Build a RouteFinder from a pool snapshot."""
        graph, pools_by_address = build_graph(pools)
        return cls(graph, pools_by_address, **kwargs)  # type: ignore[arg-type]

    def find_routes(
        self,
        from_token: str,
        to_token: str,
        max_hops: int | None = None,
        max_routes: int | None = None,
    ) -> list[Route]:
        """Find routes using this finder's allow-list and limits."""
        return find_routes(
            self.graph,
            self.pools_by_address,
            from_token,
            to_token,
            self.high_liquidity_tokens,
            max_hops=self.max_hops if max_hops is None else max_hops,
            max_routes=self.max_routes if max_routes is None else max_routes,
        )


__all__ = [
    "RouteFinder",
    "expand_edge_groups",
    "filter_by_liquidity",
    "find_routes",
    "iter_edge_group_paths",
    "limit_routes",
]
