"""Universal router command encoding.

The router's execute(bytes commands, bytes[] inputs) takes one opcode
byte per command and, for each, an ABI-encoded input blob whose layout
depends on the opcode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from eth_abi import encode  # type: ignore[attr-defined]

from swaprouter.models.types import normalize_address
from swaprouter.routing.types import RouteSegment


class CommandType(IntEnum):
    """Universal router opcodes used for swaps."""

    V3_SWAP_EXACT_IN = 0x00
    V2_SWAP_EXACT_IN = 0x08


# Input layout per opcode
COMMAND_ABI_DEFINITION: dict[CommandType, list[str]] = {
    # recipient, amountIn, amountOutMin, path, payerIsUser
    CommandType.V3_SWAP_EXACT_IN: ["address", "uint256", "uint256", "bytes", "bool"],
    # recipient, amountIn, amountOutMin, routes (from, to, stable), payerIsUser
    CommandType.V2_SWAP_EXACT_IN: [
        "address",
        "uint256",
        "uint256",
        "(address,address,bool)[]",
        "bool",
    ],
}


def _address_bytes(address: str) -> bytes:
    return bytes.fromhex(normalize_address(address, validate=True)[2:])


@dataclass(frozen=True)
class PlannedCommand:
    """A swap command as planned, before ABI encoding."""

    command_type: CommandType
    recipient: str
    amount_in: int
    amount_out_minimum: int
    payer_is_caller: bool
    segments: list[RouteSegment]
    path: str | None = None  # Encoded path for V3 swaps

    @property
    def v2_routes(self) -> list[tuple[str, str, bool]]:
        """(from, to, stable) hops for V2 swaps."""
        return [(s.from_token, s.to_token, s.stable) for s in self.segments]


@dataclass
class RoutePlanner:
    """Accumulates router commands and their encoded inputs."""

    planned: list[PlannedCommand] = field(default_factory=list)
    inputs: list[str] = field(default_factory=list)

    @property
    def commands(self) -> str:
        """Opcode string, one byte per command (e.g., "0x0800")."""
        return "0x" + bytes(int(c.command_type) for c in self.planned).hex()

    def add_command(self, command: PlannedCommand) -> None:
        """Encode a planned command and append it."""
        self.inputs.append("0x" + encode_command_input(command).hex())
        self.planned.append(command)

    def __len__(self) -> int:
        return len(self.planned)


def encode_command_input(command: PlannedCommand) -> bytes:
    """ABI-encode the input blob for a planned command.

    Raises:
        ValueError: If a V3 command has no path or the opcode is unsupported
    """
    types = COMMAND_ABI_DEFINITION.get(command.command_type)
    if types is None:
        raise ValueError(f"Unsupported command type: {command.command_type!r}")

    recipient = _address_bytes(command.recipient)
    payload: Any
    if command.command_type == CommandType.V3_SWAP_EXACT_IN:
        if not command.path or command.path == "0x":
            raise ValueError("V3 swap command requires an encoded path")
        payload = bytes.fromhex(command.path[2:])
    else:
        payload = [
            (_address_bytes(from_token), _address_bytes(to_token), stable)
            for from_token, to_token, stable in command.v2_routes
        ]

    return encode(
        types,
        [
            recipient,
            command.amount_in,
            command.amount_out_minimum,
            payload,
            command.payer_is_caller,
        ],
    )


__all__ = [
    "COMMAND_ABI_DEFINITION",
    "CommandType",
    "PlannedCommand",
    "RoutePlanner",
    "encode_command_input",
]
