"""Execution planning and swap submission.

Module structure:
- commands.py: universal router opcodes and input encoding
- planner.py: family batching and command planning
- amounts.py: token scaling, slippage and rate checks
- submitter.py: TransactionSubmitter protocol and web3 implementation
- swap_manager.py: end-to-end swap orchestration
"""

from swaprouter.execution.amounts import (
    TokenRegistry,
    calculate_amount_out_minimum,
    format_token_amount,
    to_token_units,
    validate_exchange_rate,
)
from swaprouter.execution.commands import CommandType, PlannedCommand, RoutePlanner
from swaprouter.execution.planner import (
    ExecutionBatch,
    HopStrategy,
    SwapCommands,
    build_commands,
    group_by_family,
    plan_batches,
)
from swaprouter.execution.submitter import TransactionSubmitter, Web3TransactionSubmitter
from swaprouter.execution.swap_manager import SwapExecution, SwapManager, SwapPlan

__all__ = [
    "CommandType",
    "ExecutionBatch",
    "HopStrategy",
    "PlannedCommand",
    "RoutePlanner",
    "SwapCommands",
    "SwapExecution",
    "SwapManager",
    "SwapPlan",
    "TokenRegistry",
    "TransactionSubmitter",
    "Web3TransactionSubmitter",
    "build_commands",
    "calculate_amount_out_minimum",
    "format_token_amount",
    "group_by_family",
    "plan_batches",
    "to_token_units",
    "validate_exchange_rate",
]
