"""Execution planning: turn a route into universal router commands.

Consecutive hops of the same pool family form a batch. The first batch
spends the caller's input and every later batch spends what the router
received from the batch before it, so only the first command pulls
funds from the caller and only the final one enforces the slippage
minimum.

Concentrated (V3) hops inside a route that also has legacy (V2) hops are
planned one command per hop so each hop's custody is explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import structlog

from swaprouter.errors import EmptyRouteError
from swaprouter.models.types import normalize_address
from swaprouter.pools.types import PoolFamily
from swaprouter.routing.encoding import encode_route_to_path
from swaprouter.routing.types import Route, RouteSegment

from .commands import CommandType, PlannedCommand, RoutePlanner

logger = structlog.get_logger()


class HopStrategy(str, Enum):
    """How the hops of a concentrated-liquidity batch become commands."""

    BATCH = "batch"  # One command for the whole batch
    PER_HOP = "per_hop"  # One command per hop


@dataclass
class ExecutionBatch:
    """A maximal run of consecutive same-family hops."""

    family: PoolFamily
    segments: list[RouteSegment]
    amount_in: int = 0
    amount_out_minimum: int = 0
    recipient: str = ""
    payer_is_caller: bool = False


@dataclass(frozen=True)
class SwapCommands:
    """Router call arguments for one swap."""

    commands: str
    inputs: list[str]
    planned: list[PlannedCommand] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.planned)


def group_by_family(route: Route) -> list[ExecutionBatch]:
    """Partition a route into maximal same-family runs, preserving order."""
    batches: list[ExecutionBatch] = []
    for segment in route:
        if batches and batches[-1].family == segment.family:
            batches[-1].segments.append(segment)
        else:
            batches.append(ExecutionBatch(family=segment.family, segments=[segment]))
    return batches


def plan_batches(
    route: Route,
    amount_in: int,
    amount_out_minimum: int,
    caller: str,
    router: str,
) -> list[ExecutionBatch]:
    """Group a route into batches and assign amounts and custody.

    - First batch spends amount_in; later batches use 0 (the router's
      balance from the previous batch).
    - Last batch carries amount_out_minimum; earlier batches use 0.
    - Last batch pays out to the caller; earlier batches to the router.
    - Only the first batch is funded by the caller.

    Raises:
        EmptyRouteError: If the route has no hops
    """
    if not route:
        raise EmptyRouteError("Cannot plan an empty route")

    caller_norm = normalize_address(caller)
    router_norm = normalize_address(router)
    batches = group_by_family(route)
    last_index = len(batches) - 1

    for index, batch in enumerate(batches):
        is_first = index == 0
        is_last = index == last_index
        batch.amount_in = amount_in if is_first else 0
        batch.amount_out_minimum = amount_out_minimum if is_last else 0
        batch.recipient = caller_norm if is_last else router_norm
        batch.payer_is_caller = is_first

    return batches


def _batch_command(batch: ExecutionBatch) -> PlannedCommand:
    if batch.family == PoolFamily.TICK:
        return PlannedCommand(
            command_type=CommandType.V3_SWAP_EXACT_IN,
            recipient=batch.recipient,
            amount_in=batch.amount_in,
            amount_out_minimum=batch.amount_out_minimum,
            payer_is_caller=batch.payer_is_caller,
            segments=list(batch.segments),
            path=encode_route_to_path(batch.segments),
        )
    return PlannedCommand(
        command_type=CommandType.V2_SWAP_EXACT_IN,
        recipient=batch.recipient,
        amount_in=batch.amount_in,
        amount_out_minimum=batch.amount_out_minimum,
        payer_is_caller=batch.payer_is_caller,
        segments=list(batch.segments),
    )


def _per_hop_commands(batch: ExecutionBatch, router: str) -> list[PlannedCommand]:
    commands: list[PlannedCommand] = []
    last_hop = len(batch.segments) - 1

    for i, segment in enumerate(batch.segments):
        is_first_hop = i == 0
        is_last_hop = i == last_hop
        commands.append(
            PlannedCommand(
                command_type=CommandType.V3_SWAP_EXACT_IN,
                recipient=batch.recipient if is_last_hop else router,
                amount_in=batch.amount_in if is_first_hop else 0,
                amount_out_minimum=batch.amount_out_minimum if is_last_hop else 0,
                payer_is_caller=batch.payer_is_caller and is_first_hop,
                segments=[segment],
                path=encode_route_to_path([segment]),
            )
        )

    return commands


def select_hop_strategy(batches: list[ExecutionBatch]) -> HopStrategy:
    """Per-hop commands for concentrated batches only in mixed routes."""
    return HopStrategy.PER_HOP if len(batches) > 1 else HopStrategy.BATCH


def build_commands(
    route: Route,
    amount_in: int,
    amount_out_minimum: int,
    caller: str,
    router: str,
) -> SwapCommands:
    """Plan router commands for an exact-input swap along a route.

    Args:
        route: Hops to execute, in order
        amount_in: Exact input amount taken from the caller
        amount_out_minimum: Least acceptable final output
        caller: Address that funds the swap and receives the output
        router: Universal router address (holds funds between batches)

    Returns:
        SwapCommands with the opcode string, encoded inputs and the
        planned commands

    Raises:
        EmptyRouteError: If the route has no hops
    """
    batches = plan_batches(route, amount_in, amount_out_minimum, caller, router)
    strategy = select_hop_strategy(batches)
    router_norm = normalize_address(router)
    planner = RoutePlanner()

    for batch in batches:
        if batch.family == PoolFamily.TICK and strategy == HopStrategy.PER_HOP:
            for command in _per_hop_commands(batch, router_norm):
                planner.add_command(command)
        else:
            planner.add_command(_batch_command(batch))

        logger.debug(
            "batch_planned",
            family=batch.family.value,
            hops=len(batch.segments),
            amount_in=batch.amount_in,
            amount_out_minimum=batch.amount_out_minimum,
            recipient=batch.recipient,
            payer_is_caller=batch.payer_is_caller,
        )

    logger.info(
        "swap_commands_built",
        hops=len(route),
        batches=len(batches),
        commands=planner.commands,
        strategy=strategy.value,
    )
    return SwapCommands(
        commands=planner.commands,
        inputs=list(planner.inputs),
        planned=list(planner.planned),
    )


__all__ = [
    "ExecutionBatch",
    "HopStrategy",
    "SwapCommands",
    "build_commands",
    "group_by_family",
    "plan_batches",
    "select_hop_strategy",
]
