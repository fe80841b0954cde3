"""Tests for execution batch planning."""

import pytest
from eth_abi import decode

from swaprouter.errors import EmptyRouteError
from swaprouter.execution.commands import COMMAND_ABI_DEFINITION, CommandType
from swaprouter.execution.planner import (
    HopStrategy,
    build_commands,
    group_by_family,
    plan_batches,
    select_hop_strategy,
)
from swaprouter.pools.types import PoolFamily
from swaprouter.routing.encoding import encode_route_to_path
from tests.helpers import (
    CALLER,
    ROUTER,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
    make_route,
)

AMOUNT_IN = 1_000_000
MIN_OUT = 900_000


def plan(route):
    return build_commands(route, AMOUNT_IN, MIN_OUT, caller=CALLER, router=ROUTER)


def summary(commands) -> list[tuple[CommandType, int, int, str, bool]]:
    """(opcode, amount in, minimum, recipient, payer) per planned command."""
    return [
        (c.command_type, c.amount_in, c.amount_out_minimum, c.recipient, c.payer_is_caller)
        for c in commands.planned
    ]


class TestGroupByFamily:
    """Tests for group_by_family."""

    def test_single_family(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], ["volatile", "stable"])
        batches = group_by_family(route)

        assert len(batches) == 1
        assert batches[0].family == PoolFamily.LEGACY
        assert batches[0].segments == route

    def test_interleaved_families(self) -> None:
        route = make_route(
            [TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D], ["volatile", "concentrated", "stable"]
        )
        batches = group_by_family(route)

        assert [b.family for b in batches] == [PoolFamily.LEGACY, PoolFamily.TICK, PoolFamily.LEGACY]
        # Segments preserved in order
        assert [s for b in batches for s in b.segments] == route

    def test_empty(self) -> None:
        assert group_by_family([]) == []


class TestPlanBatches:
    """Tests for amount and custody assignment."""

    def test_empty_route_rejected(self) -> None:
        with pytest.raises(EmptyRouteError):
            plan_batches([], AMOUNT_IN, MIN_OUT, CALLER, ROUTER)

    def test_single_batch_gets_everything(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B], ["concentrated"])
        (batch,) = plan_batches(route, AMOUNT_IN, MIN_OUT, CALLER, ROUTER)

        assert batch.amount_in == AMOUNT_IN
        assert batch.amount_out_minimum == MIN_OUT
        assert batch.recipient == CALLER
        assert batch.payer_is_caller is True

    def test_intermediate_batches_use_router(self) -> None:
        route = make_route(
            [TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D], ["concentrated", "volatile", "concentrated"]
        )
        first, middle, last = plan_batches(route, AMOUNT_IN, MIN_OUT, CALLER, ROUTER)

        assert (first.amount_in, first.amount_out_minimum, first.recipient) == (AMOUNT_IN, 0, ROUTER)
        assert (middle.amount_in, middle.amount_out_minimum, middle.recipient) == (0, 0, ROUTER)
        assert (last.amount_in, last.amount_out_minimum, last.recipient) == (0, MIN_OUT, CALLER)
        assert [b.payer_is_caller for b in (first, middle, last)] == [True, False, False]


class TestSelectHopStrategy:
    """Tests for select_hop_strategy."""

    def test_single_batch_is_batched(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], ["concentrated", "concentrated"])
        assert select_hop_strategy(group_by_family(route)) == HopStrategy.BATCH

    def test_mixed_route_is_per_hop(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], ["concentrated", "volatile"])
        assert select_hop_strategy(group_by_family(route)) == HopStrategy.PER_HOP


class TestBuildCommands:
    """Tests for build_commands."""

    def test_empty_route_rejected(self) -> None:
        with pytest.raises(EmptyRouteError):
            plan([])

    def test_single_legacy_hop(self) -> None:
        commands = plan(make_route([TOKEN_A, TOKEN_B], ["volatile"]))

        assert commands.commands == "0x08"
        assert summary(commands) == [
            (CommandType.V2_SWAP_EXACT_IN, AMOUNT_IN, MIN_OUT, CALLER, True),
        ]

    def test_two_concentrated_hops_single_command(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], ["concentrated", "concentrated"])
        commands = plan(route)

        assert commands.commands == "0x00"
        (command,) = commands.planned
        assert command.payer_is_caller is True
        assert command.path == encode_route_to_path(route)
        assert summary(commands) == [
            (CommandType.V3_SWAP_EXACT_IN, AMOUNT_IN, MIN_OUT, CALLER, True),
        ]

    def test_two_legacy_hops_single_command(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], ["volatile", "stable"])
        commands = plan(route)

        assert commands.commands == "0x08"
        assert commands.planned[0].v2_routes == [
            (TOKEN_A, TOKEN_B, False),
            (TOKEN_B, TOKEN_C, True),
        ]

    def test_interleaved_families(self) -> None:
        route = make_route(
            [TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D], ["volatile", "concentrated", "volatile"]
        )
        commands = plan(route)

        assert commands.commands == "0x080008"
        assert summary(commands) == [
            (CommandType.V2_SWAP_EXACT_IN, AMOUNT_IN, 0, ROUTER, True),
            (CommandType.V3_SWAP_EXACT_IN, 0, 0, ROUTER, False),
            (CommandType.V2_SWAP_EXACT_IN, 0, MIN_OUT, CALLER, False),
        ]

    def test_legacy_run_around_two_concentrated_hops(self) -> None:
        route = make_route(
            [TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D, TOKEN_E],
            ["volatile", "concentrated", "concentrated", "stable"],
        )
        commands = plan(route)

        # Two legacy batches plus one command per concentrated hop
        assert commands.commands == "0x08000008"
        assert [c.payer_is_caller for c in commands.planned] == [True, False, False, False]
        assert [c.amount_out_minimum for c in commands.planned] == [0, 0, 0, MIN_OUT]
        assert [c.amount_in for c in commands.planned] == [AMOUNT_IN, 0, 0, 0]
        assert [c.recipient for c in commands.planned] == [ROUTER, ROUTER, ROUTER, CALLER]

    def test_mixed_route_splits_concentrated_hops(self) -> None:
        route = make_route(
            [TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D], ["stable", "concentrated", "concentrated"]
        )
        commands = plan(route)

        assert commands.commands == "0x080000"
        assert summary(commands) == [
            (CommandType.V2_SWAP_EXACT_IN, AMOUNT_IN, 0, ROUTER, True),
            (CommandType.V3_SWAP_EXACT_IN, 0, 0, ROUTER, False),
            (CommandType.V3_SWAP_EXACT_IN, 0, MIN_OUT, CALLER, False),
        ]
        assert commands.planned[1].path == encode_route_to_path(route[1:2])
        assert commands.planned[2].path == encode_route_to_path(route[2:3])

    def test_concentrated_first_then_legacy(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], ["concentrated", "volatile"])
        commands = plan(route)

        assert commands.commands == "0x0008"
        assert summary(commands) == [
            (CommandType.V3_SWAP_EXACT_IN, AMOUNT_IN, 0, ROUTER, True),
            (CommandType.V2_SWAP_EXACT_IN, 0, MIN_OUT, CALLER, False),
        ]

    def test_payer_flag_only_on_first_command(self) -> None:
        route = make_route(
            [TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D], ["concentrated", "concentrated", "volatile"]
        )
        commands = plan(route)

        assert [c.payer_is_caller for c in commands.planned] == [True, False, False]

    def test_inputs_decode_to_planned_values(self) -> None:
        route = make_route(
            [TOKEN_A, TOKEN_B, TOKEN_C], ["volatile", "concentrated"]
        )
        commands = plan(route)

        assert len(commands.inputs) == len(commands.planned) == len(commands)
        for planned, blob in zip(commands.planned, commands.inputs, strict=True):
            types = COMMAND_ABI_DEFINITION[planned.command_type]
            recipient, amount_in, amount_out_min, _, payer = decode(
                types, bytes.fromhex(blob[2:])
            )
            assert recipient.lower() == planned.recipient
            assert amount_in == planned.amount_in
            assert amount_out_min == planned.amount_out_minimum
            assert payer is planned.payer_is_caller

    def test_addresses_normalized(self) -> None:
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], ["volatile", "concentrated"])
        commands = build_commands(
            route,
            AMOUNT_IN,
            MIN_OUT,
            caller=CALLER.upper().replace("0X", "0x"),
            router=ROUTER.upper().replace("0X", "0x"),
        )

        assert [c.recipient for c in commands.planned] == [ROUTER, CALLER]
