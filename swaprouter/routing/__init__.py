"""Route discovery and quoting.

Module structure:
- types.py: RouteSegment, Route and Quote
- graph.py: LiquidityGraph multigraph and build_graph
- pathfinding.py: find_routes and the RouteFinder facade
- encoding.py: packed path encoding and diagnostic decoding
- quoter.py: route quoters and best-quote aggregation
"""

from swaprouter.routing.encoding import (
    decode_path,
    encode_route_to_path,
    format_route_path,
    split_path,
)
from swaprouter.routing.graph import GraphEdge, LiquidityGraph, build_graph
from swaprouter.routing.pathfinding import RouteFinder, find_routes
from swaprouter.routing.quoter import (
    MockRouteQuoter,
    QuoterResult,
    RouteQuoter,
    Web3RouteQuoter,
    fetch_best_quote,
    select_best_quote,
)
from swaprouter.routing.types import Quote, Route, RouteSegment

__all__ = [
    "GraphEdge",
    "LiquidityGraph",
    "MockRouteQuoter",
    "Quote",
    "QuoterResult",
    "Route",
    "RouteFinder",
    "RouteQuoter",
    "RouteSegment",
    "Web3RouteQuoter",
    "build_graph",
    "decode_path",
    "encode_route_to_path",
    "fetch_best_quote",
    "find_routes",
    "format_route_path",
    "select_best_quote",
    "split_path",
]
