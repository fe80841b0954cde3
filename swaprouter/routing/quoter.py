"""Route quoting and best-quote selection.

Each candidate route is quoted by an external quoter (an on-chain
mixed-route quoter reached over RPC, or a mock in tests). Failed and
zero quotes are routine for thin pools and are simply dropped.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import reduce
from typing import Protocol

import structlog

from swaprouter.constants import DEFAULT_QUOTE_CHUNK_SIZE

from .encoding import encode_route_to_path
from .types import Quote, Route

logger = structlog.get_logger()


@dataclass(frozen=True)
class QuoterResult:
    """Raw quoter response for one path."""

    amount_out: int
    raw_outputs: list[int] = field(default_factory=list)


class RouteQuoter(Protocol):
    """Protocol for route quoter implementations.

    This allows swapping between real RPC-based quoter and mock quoter for testing.
    """

    def quote_exact_input(self, path: str, amount_in: int) -> QuoterResult | None:
        """Get output amount for an exact input along an encoded path.

        Args:
            path: Encoded path (see encode_route_to_path)
            amount_in: Input amount in raw token units

        Returns:
            QuoterResult, or None if the quote fails
        """
        ...


class MockRouteQuoter:
    """Mock quoter for testing without RPC calls.

    Configure with per-path outputs, and track calls for assertions.
    """

    def __init__(
        self,
        outputs: dict[str, int] | None = None,
        failing_paths: Iterable[str] = (),
        default_output: int | None = None,
    ):
        """Initialize mock quoter.

        Args:
            outputs: Mapping of encoded path -> amount out
            failing_paths: Paths for which quote_exact_input raises
            default_output: Amount out for unconfigured paths (None = quote fails)
        """
        self.outputs = outputs or {}
        self.failing_paths = set(failing_paths)
        self.default_output = default_output
        self.calls: list[tuple[str, int]] = []

    def quote_exact_input(self, path: str, amount_in: int) -> QuoterResult | None:
        self.calls.append((path, amount_in))

        if path in self.failing_paths:
            raise RuntimeError(f"execution reverted for path {path}")

        amount_out = self.outputs.get(path, self.default_output)
        if amount_out is None:
            return None
        return QuoterResult(amount_out=amount_out, raw_outputs=[amount_out])


# Mixed-route quoter ABI - minimal, just the exact input path quote
MIXED_ROUTE_QUOTER_ABI = [
    {
        "name": "quoteExactInput",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "path", "type": "bytes"},
            {"name": "amountIn", "type": "uint256"},
        ],
        "outputs": [
            {"name": "amountOut", "type": "uint256"},
            {"name": "v3SqrtPriceX96AfterList", "type": "uint160[]"},
            {"name": "v3InitializedTicksCrossedList", "type": "uint32[]"},
            {"name": "v3SwapGasEstimate", "type": "uint256"},
        ],
    },
]


class Web3RouteQuoter:
    """Real quoter that calls a mixed-route quoter contract via RPC.

    This makes actual eth_call requests to the quoter contract.
    """

    def __init__(self, web3_provider: str, quoter_address: str):
        """Initialize quoter with web3 provider.

        Args:
            web3_provider: HTTP RPC URL
            quoter_address: Mixed-route quoter contract address
        """
        from web3 import Web3

        self.w3 = Web3(Web3.HTTPProvider(web3_provider))
        self.quoter = self.w3.eth.contract(
            address=Web3.to_checksum_address(quoter_address),
            abi=MIXED_ROUTE_QUOTER_ABI,
        )

    def quote_exact_input(self, path: str, amount_in: int) -> QuoterResult | None:
        """Get output amount for exact input via RPC call."""
        try:
            result = self.quoter.functions.quoteExactInput(
                bytes.fromhex(path[2:]), amount_in
            ).call()

            # (amountOut, sqrtPriceX96AfterList, initializedTicksCrossedList, gasEstimate)
            return QuoterResult(
                amount_out=int(result[0]),
                raw_outputs=[int(v) for v in result[1]],
            )
        except Exception as e:
            logger.warning(
                "route_quote_failed",
                path=path,
                amount_in=amount_in,
                error=str(e),
            )
            return None


def chunked(routes: Sequence[Route], size: int) -> Iterator[Sequence[Route]]:
    """Split routes into consecutive chunks of at most `size`."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(routes), size):
        yield routes[start : start + size]


def _better_quote(best: Quote | None, candidate: Quote | None) -> Quote | None:
    if candidate is None:
        return best
    if best is None or candidate.amount_out > best.amount_out:
        return candidate
    return best


def select_best_quote(quotes: Iterable[Quote | None]) -> Quote | None:
    """Fold quotes down to the one with the greatest output.

    Missing quotes are skipped. Ties keep the earliest quote.
    """
    return reduce(_better_quote, quotes, None)


def _to_quote(route: Route, amount_in: int, outcome: object) -> Quote | None:
    if isinstance(outcome, BaseException):
        logger.warning(
            "route_quote_error",
            hops=len(route),
            error=str(outcome),
        )
        return None
    if not isinstance(outcome, QuoterResult) or outcome.amount_out <= 0:
        logger.debug("route_quote_unusable", hops=len(route))
        return None
    return Quote(
        route=route,
        amount_in=amount_in,
        amount_out=outcome.amount_out,
        raw_segment_outputs=list(outcome.raw_outputs),
    )


async def quote_routes(
    routes: Sequence[Route],
    amount_in: int,
    quoter: RouteQuoter,
    chunk_size: int = DEFAULT_QUOTE_CHUNK_SIZE,
) -> list[Quote | None]:
    """Quote every route, one chunk of concurrent calls at a time.

    Quoter calls are blocking, so each runs in the default executor. A
    chunk is awaited as a whole before the next one starts.

    Returns:
        One entry per route, in input order; None where the quote failed
        or came back as zero
    """
    loop = asyncio.get_running_loop()
    quotes: list[Quote | None] = []

    for chunk in chunked(routes, chunk_size):
        calls = [
            loop.run_in_executor(
                None, quoter.quote_exact_input, encode_route_to_path(route), amount_in
            )
            for route in chunk
        ]
        outcomes = await asyncio.gather(*calls, return_exceptions=True)
        quotes.extend(
            _to_quote(route, amount_in, outcome)
            for route, outcome in zip(chunk, outcomes, strict=True)
        )

    return quotes


async def fetch_best_quote(
    routes: Sequence[Route],
    amount_in: int,
    quoter: RouteQuoter,
    chunk_size: int = DEFAULT_QUOTE_CHUNK_SIZE,
) -> Quote | None:
    """Quote all candidate routes and return the best one.

    Args:
        routes: Candidate routes from find_routes
        amount_in: Exact input amount in raw token units
        quoter: Quoter used for each route's encoded path
        chunk_size: Routes quoted concurrently per batch (default 10)

    Returns:
        Quote with the greatest amount out, or None if no route produced
        a nonzero quote
    """
    if not routes:
        return None

    quotes = await quote_routes(routes, amount_in, quoter, chunk_size)
    best = select_best_quote(quotes)

    logger.info(
        "best_quote_selected" if best is not None else "no_usable_quote",
        routes=len(routes),
        usable=sum(1 for q in quotes if q is not None),
        amount_in=amount_in,
        amount_out=best.amount_out if best is not None else 0,
    )
    return best


__all__ = [
    "MIXED_ROUTE_QUOTER_ABI",
    "MockRouteQuoter",
    "QuoterResult",
    "RouteQuoter",
    "Web3RouteQuoter",
    "chunked",
    "fetch_best_quote",
    "quote_routes",
    "select_best_quote",
]
