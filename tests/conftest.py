"""Pytest configuration and fixtures."""

import os
from collections.abc import Mapping
from typing import Any

import pytest

from swaprouter.errors import SubmissionError
from swaprouter.execution.amounts import TokenRegistry
from swaprouter.pools.types import Pool, Token
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D, make_pool


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip RPC-backed tests unless RPC_URL is set."""
    if os.environ.get("RPC_URL"):
        return
    skip_rpc = pytest.mark.skip(reason="RPC_URL not set")
    for item in items:
        if "requires_rpc" in item.keywords:
            item.add_marker(skip_rpc)


# =============================================================================
# Mock classes for dependency injection
# =============================================================================


class MockPoolSource:
    """Paged pool record source backed by a list.

    Usage:
        # Serve records in pages
        source = MockPoolSource([make_record(TOKEN_A, TOKEN_B)])

        # Raise when a given offset is requested
        source = MockPoolSource(records, fail_at_offset=500)
    """

    def __init__(
        self,
        records: list[Mapping[str, Any]] | None = None,
        fail_at_offset: int | None = None,
    ) -> None:
        self.records = records or []
        self.fail_at_offset = fail_at_offset
        self.calls: list[tuple[int, int]] = []  # (limit, offset) per page request

    def fetch_page(self, limit: int, offset: int) -> list[Mapping[str, Any]]:
        self.calls.append((limit, offset))
        if self.fail_at_offset is not None and offset >= self.fail_at_offset:
            raise ConnectionError(f"RPC unavailable at offset {offset}")
        return self.records[offset : offset + limit]


class MockSubmitter:
    """Transaction submitter that records calls instead of sending.

    Usage:
        submitter = MockSubmitter(balances={TOKEN_B: 500})
        # or make submit() fail
        submitter = MockSubmitter(fail_submit=True)
    """

    def __init__(
        self,
        address: str = "0x" + "c0" * 20,
        balances: dict[str, int] | None = None,
        fail_submit: bool = False,
    ) -> None:
        self.address = address
        self.balances = balances or {}
        self.fail_submit = fail_submit
        self.approvals: list[tuple[str, int]] = []
        self.submissions: list[tuple[str, list[str]]] = []

    def balance_of(self, token: str) -> int:
        return self.balances.get(token, 0)

    def approve(self, token: str, amount: int) -> bool:
        self.approvals.append((token, amount))
        return True

    def submit(self, commands: str, inputs: list[str]) -> str:
        if self.fail_submit:
            raise SubmissionError("Transaction failed: status 0")
        self.submissions.append((commands, inputs))
        return "0x" + f"{len(self.submissions):064x}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def diamond_pools() -> list[Pool]:
    """A -> B direct plus the A -> C -> B and A -> D -> B detours.

    C -> B is concentrated (tick spacing 100), A -> D is stable.
    """
    return [
        make_pool(TOKEN_A, TOKEN_B, "01"),
        make_pool(TOKEN_A, TOKEN_C, "02"),
        make_pool(TOKEN_C, TOKEN_B, "03", kind="concentrated", tick_spacing=100),
        make_pool(TOKEN_A, TOKEN_D, "04", kind="stable"),
        make_pool(TOKEN_D, TOKEN_B, "05"),
    ]


@pytest.fixture
def token_registry() -> TokenRegistry:
    """Registry with 18-decimal synthetic tokens A-D."""
    return TokenRegistry(
        [
            Token(address=TOKEN_A, decimals=18, symbol="AAA"),
            Token(address=TOKEN_B, decimals=18, symbol="BBB"),
            Token(address=TOKEN_C, decimals=18, symbol="CCC"),
            Token(address=TOKEN_D, decimals=18, symbol="DDD"),
        ]
    )
