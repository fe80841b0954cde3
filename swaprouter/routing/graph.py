"""Liquidity graph for multi-hop route discovery.

Tokens are nodes and each pool contributes two directed edges, one per
swap direction. Several pools may connect the same token pair, so the
graph is a multigraph: parallel edges are kept side by side and keyed by
direction and pool address.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from swaprouter.models.types import normalize_address
from swaprouter.pools.types import Pool, PoolKind

logger = structlog.get_logger()

FORWARD = "forward"
REVERSE = "reverse"


def edge_key(direction: str, pool_address: str) -> str:
    """Edge key for a pool traversal (e.g., "forward:0xabc...")."""
    return f"{direction}:{normalize_address(pool_address)}"


def parse_edge_key(key: str) -> tuple[str, str]:
    """Split an edge key into (direction, pool_address)."""
    direction, _, pool_address = key.partition(":")
    if direction not in (FORWARD, REVERSE) or not pool_address:
        raise ValueError(f"Malformed edge key: {key}")
    return direction, pool_address


@dataclass(frozen=True)
class GraphEdge:
    """A directed pool traversal between two tokens."""

    key: str
    source: str
    target: str
    stable: bool
    kind: PoolKind
    fee: int
    pool_address: str


class LiquidityGraph:
    """Directed multigraph of tokens connected by pools.

    Adjacency is stored as token -> neighbor -> edge key -> edge, so the
    parallel edges between a token pair come back in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._adjacency: dict[str, dict[str, dict[str, GraphEdge]]] = {}
        self._edges: dict[str, GraphEdge] = {}

    def add_node(self, token: str) -> None:
        token_norm = normalize_address(token)
        if token_norm not in self._adjacency:
            self._adjacency[token_norm] = {}

    def add_pool(self, pool: Pool) -> None:
        """Add the forward and reverse edges for a pool."""
        self.add_node(pool.token0)
        self.add_node(pool.token1)
        self._add_edge(edge_key(FORWARD, pool.address), pool.token0, pool.token1, pool)
        self._add_edge(edge_key(REVERSE, pool.address), pool.token1, pool.token0, pool)

    def _add_edge(self, key: str, source: str, target: str, pool: Pool) -> None:
        # Re-adding a key replaces the old edge, wherever it pointed
        previous = self._edges.get(key)
        if previous is not None:
            neighbors = self._adjacency[previous.source]
            neighbors[previous.target].pop(key, None)
            if not neighbors[previous.target]:
                del neighbors[previous.target]

        edge = GraphEdge(
            key=key,
            source=source,
            target=target,
            stable=pool.stable,
            kind=pool.kind,
            fee=pool.fee,
            pool_address=pool.address,
        )
        self._adjacency[source].setdefault(target, {})[key] = edge
        self._edges[key] = edge

    def has_token(self, token: str) -> bool:
        """Check if a token exists in the graph."""
        return normalize_address(token) in self._adjacency

    def neighbors(self, token: str) -> list[str]:
        """Tokens reachable from `token` in one hop, in insertion order."""
        return list(self._adjacency.get(normalize_address(token), {}))

    def edges_between(self, source: str, target: str) -> list[GraphEdge]:
        """All parallel edges from source to target."""
        targets = self._adjacency.get(normalize_address(source), {})
        return list(targets.get(normalize_address(target), {}).values())

    def edges_from(self, token: str) -> list[GraphEdge]:
        """All outgoing edges of a token."""
        targets = self._adjacency.get(normalize_address(token), {})
        return [edge for group in targets.values() for edge in group.values()]

    def get_edge(self, key: str) -> GraphEdge | None:
        return self._edges.get(key)

    @property
    def token_count(self) -> int:
        """Number of unique tokens in the graph."""
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        """Number of directed edges in the graph."""
        return len(self._edges)

    @property
    def is_empty(self) -> bool:
        return not self._edges


def build_graph(pools: Iterable[Pool]) -> tuple[LiquidityGraph, dict[str, Pool]]:
    """Build the liquidity graph and pool lookup from a pool snapshot.

    Duplicate pool addresses replace earlier entries (last write wins).

    Args:
        pools: Pools to index

    Returns:
        Tuple of (graph, pools keyed by lowercase address)
    """
    graph = LiquidityGraph()
    pools_by_address: dict[str, Pool] = {}

    for pool in pools:
        if pool.address in pools_by_address:
            logger.debug("pool_address_duplicate", pool=pool.address)
        graph.add_pool(pool)
        pools_by_address[pool.address] = pool

    logger.debug(
        "liquidity_graph_built",
        tokens=graph.token_count,
        edges=graph.edge_count,
        pools=len(pools_by_address),
    )
    return graph, pools_by_address


__all__ = [
    "FORWARD",
    "REVERSE",
    "GraphEdge",
    "LiquidityGraph",
    "build_graph",
    "edge_key",
    "parse_edge_key",
]
