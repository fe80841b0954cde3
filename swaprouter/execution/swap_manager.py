"""Swap orchestration from pool snapshot to submitted transaction.

SwapManager wires the pieces together for one swap:

    PoolRepository -> build_graph -> find_routes -> fetch_best_quote
        -> calculate_amount_out_minimum -> build_commands -> submitter

Every call starts from a fresh pool snapshot.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

import structlog

from swaprouter.config import DEFAULT_ROUTING_CONFIG, RoutingConfig
from swaprouter.errors import ExchangeRateError, NoRouteError
from swaprouter.models.types import normalize_address
from swaprouter.pools.repository import PoolRepository
from swaprouter.routing.encoding import format_route_path
from swaprouter.routing.graph import build_graph
from swaprouter.routing.pathfinding import find_routes
from swaprouter.routing.quoter import RouteQuoter, fetch_best_quote
from swaprouter.routing.types import Quote, Route

from .amounts import (
    TokenRegistry,
    calculate_amount_out_minimum,
    exchange_rate,
    to_token_units,
    validate_exchange_rate,
)
from .planner import SwapCommands, build_commands
from .submitter import TransactionSubmitter

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapPlan:
    """Everything needed to submit one swap."""

    from_token: str
    to_token: str
    quote: Quote
    amount_out_minimum: int
    caller: str
    commands: SwapCommands
    route_description: str

    @property
    def amount_in(self) -> int:
        return self.quote.amount_in

    @property
    def route(self) -> Route:
        return self.quote.route


@dataclass(frozen=True)
class SwapExecution:
    """Outcome of a submitted swap."""

    plan: SwapPlan
    tx_hash: str
    final_balance: int


class SwapManager:
    """Manages the swap process from start to finish.

    Args:
        repository: Source of pool snapshots
        quoter: Quoter used to price candidate routes
        submitter: Account used to approve and submit swaps. Optional for
                   planning-only use, in which case a caller address must
                   be passed to plan_swap.
        config: Routing limits and addresses
        tokens: Known token decimals and symbols
    """

    def __init__(
        self,
        repository: PoolRepository,
        quoter: RouteQuoter,
        submitter: TransactionSubmitter | None = None,
        config: RoutingConfig = DEFAULT_ROUTING_CONFIG,
        tokens: TokenRegistry | None = None,
    ) -> None:
        self.repository = repository
        self.quoter = quoter
        self.submitter = submitter
        self.config = config
        self.tokens = tokens if tokens is not None else TokenRegistry.default()

    async def discover_routes(self, from_token: str, to_token: str) -> list[Route]:
        """Fetch a pool snapshot and enumerate allow-listed routes."""
        loop = asyncio.get_running_loop()
        pools = await loop.run_in_executor(None, self.repository.fetch_pools)
        graph, pools_by_address = build_graph(pools)
        return find_routes(
            graph,
            pools_by_address,
            from_token,
            to_token,
            self.config.high_liquidity_tokens,
            max_hops=self.config.max_hops,
            max_routes=self.config.max_routes,
        )

    async def best_quote(self, from_token: str, to_token: str, amount_in: int) -> Quote:
        """Find the best-priced route for an exact input.

        Raises:
            UnknownTokenError: If either token is not registered
            NoRouteError: If no route exists or none produced a usable quote
        """
        if amount_in <= 0:
            raise ValueError(f"amount_in must be positive, got {amount_in}")
        self.tokens.get(from_token)
        self.tokens.get(to_token)

        routes = await self.discover_routes(from_token, to_token)
        logger.info(
            "routes_discovered",
            from_token=normalize_address(from_token),
            to_token=normalize_address(to_token),
            count=len(routes),
        )
        if not routes:
            raise NoRouteError(f"No route from {from_token} to {to_token}")

        quote = await fetch_best_quote(
            routes, amount_in, self.quoter, chunk_size=self.config.quote_chunk_size
        )
        if quote is None:
            raise NoRouteError(f"No quote found for swap {from_token} -> {to_token}")
        return quote

    def _expected_amount_out(
        self, from_token: str, to_token: str, quote: Quote, force_execute: bool
    ) -> int:
        token_in = self.tokens.get(from_token)
        token_out = self.tokens.get(to_token)
        rate = exchange_rate(quote.amount_in, token_in, quote.amount_out, token_out)
        validation = validate_exchange_rate(token_in.address, token_out.address, rate)

        if validation.is_valid or validation.expected_rate is None:
            return quote.amount_out

        logger.warning(
            "exchange_rate_suspicious",
            from_token=token_in.symbol,
            to_token=token_out.symbol,
            rate=str(rate),
            expected_rate=str(validation.expected_rate),
        )
        if not force_execute:
            raise ExchangeRateError(
                f"{validation.message} - aborting swap. Set force_execute=True to override."
            )

        amount_in_tokens = Decimal(quote.amount_in).scaleb(-token_in.decimals)
        return to_token_units(amount_in_tokens * validation.expected_rate, token_out)

    async def plan_swap(
        self,
        from_token: str,
        to_token: str,
        amount_in: int,
        caller: str | None = None,
        force_execute: bool = False,
    ) -> SwapPlan:
        """Quote a swap and build its router commands.

        Args:
            from_token: Token to sell
            to_token: Token to buy
            amount_in: Exact input in raw units
            caller: Address funding the swap (default: the submitter's address)
            force_execute: Plan against the reference rate when the quoted
                           rate fails the sanity check, instead of raising

        Raises:
            UnknownTokenError: If either token is not registered
            NoRouteError: If no usable route was found
            ExchangeRateError: If the quote fails the rate check and
                               force_execute is False
        """
        if caller is None:
            if self.submitter is None:
                raise ValueError("caller is required when no submitter is configured")
            caller = self.submitter.address

        quote = await self.best_quote(from_token, to_token, amount_in)
        expected_out = self._expected_amount_out(from_token, to_token, quote, force_execute)
        amount_out_minimum = calculate_amount_out_minimum(
            expected_out, self.config.slippage_percent
        )

        commands = build_commands(
            quote.route,
            amount_in,
            amount_out_minimum,
            caller=caller,
            router=self.config.router_address,
        )
        description = format_route_path(quote.route, self.tokens.symbols())

        logger.info(
            "swap_planned",
            route=description,
            amount_in=amount_in,
            amount_out=quote.amount_out,
            amount_out_minimum=amount_out_minimum,
            commands=commands.commands,
        )
        return SwapPlan(
            from_token=normalize_address(from_token),
            to_token=normalize_address(to_token),
            quote=quote,
            amount_out_minimum=amount_out_minimum,
            caller=normalize_address(caller),
            commands=commands,
            route_description=description,
        )

    async def execute_swap(
        self,
        from_token: str,
        to_token: str,
        amount_in: int,
        force_execute: bool = False,
    ) -> SwapExecution:
        """Plan, approve and submit a swap.

        Submission failures propagate to the caller.

        Returns:
            SwapExecution with the transaction hash and the account's
            final balance of to_token
        """
        if self.submitter is None:
            raise ValueError("execute_swap requires a transaction submitter")
        submitter = self.submitter

        plan = await self.plan_swap(from_token, to_token, amount_in, force_execute=force_execute)
        loop = asyncio.get_running_loop()

        await loop.run_in_executor(None, submitter.approve, plan.from_token, amount_in)
        tx_hash = await loop.run_in_executor(
            None, submitter.submit, plan.commands.commands, plan.commands.inputs
        )
        final_balance = await loop.run_in_executor(None, submitter.balance_of, plan.to_token)

        logger.info(
            "swap_executed",
            tx_hash=tx_hash,
            route=plan.route_description,
            final_balance=final_balance,
        )
        return SwapExecution(plan=plan, tx_hash=tx_hash, final_balance=final_balance)

    async def execute_swap_chain(
        self,
        swap_chain: Sequence[tuple[str, str]],
        initial_amount: int | None = None,
        force_execute: bool = False,
    ) -> int:
        """Execute a chain of swaps, each spending the previous output.

        Args:
            swap_chain: (from_token, to_token) pairs in order
            initial_amount: Amount of the first from_token to swap
                            (default: the account's whole balance)

        Returns:
            Final balance of the last to_token
        """
        if not swap_chain:
            raise ValueError("Swap chain cannot be empty")
        if self.submitter is None:
            raise ValueError("execute_swap_chain requires a transaction submitter")

        current = initial_amount
        if current is None:
            loop = asyncio.get_running_loop()
            current = await loop.run_in_executor(None, self.submitter.balance_of, swap_chain[0][0])

        logger.info("swap_chain_started", swaps=len(swap_chain), initial_amount=current)
        for from_token, to_token in swap_chain:
            execution = await self.execute_swap(
                from_token, to_token, current, force_execute=force_execute
            )
            current = execution.final_balance

        return current


__all__ = ["SwapExecution", "SwapManager", "SwapPlan"]
