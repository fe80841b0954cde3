"""Pool repository backed by a paged liquidity index.

The index contract exposes ``all(limit, offset)`` returning one page of
raw pool records. PoolRepository walks those pages, parses each record
into an immutable Pool and hands the snapshot to the routing layer.
Nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import structlog

from swaprouter.constants import MAX_POOLS_TO_FETCH, POOL_INDEX_ADDRESS, POOL_PAGE_SIZE

from .parsing import parse_pool_record
from .types import Pool

logger = structlog.get_logger()


class PoolDataSource(Protocol):
    """Protocol for paged sources of raw pool records."""

    def fetch_page(self, limit: int, offset: int) -> list[Mapping[str, Any]]:
        """Return up to `limit` raw pool records starting at `offset`."""
        ...


class PoolRepository:
    """Fetches and normalizes pools from a paged data source.

    Usage:
        repository = PoolRepository(Web3PoolSource(rpc_url))
        pools = repository.fetch_pools()
    """

    def __init__(
        self,
        source: PoolDataSource,
        page_size: int = POOL_PAGE_SIZE,
        max_pools: int = MAX_POOLS_TO_FETCH,
        concentrated_only: bool = False,
    ) -> None:
        """Initialize the repository.

        Args:
            source: Paged raw pool record source
            page_size: Records requested per page (default: 500)
            max_pools: Upper bound on records read per fetch (default: 8000)
            concentrated_only: Keep only concentrated liquidity pools
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.source = source
        self.page_size = page_size
        self.max_pools = max_pools
        self.concentrated_only = concentrated_only

    def fetch_raw_records(self) -> list[Mapping[str, Any]]:
        """Read raw records page by page.

        Stops at the first empty or short page, at max_pools, or at the
        first page that fails. Records fetched before a failure are kept.
        """
        records: list[Mapping[str, Any]] = []
        offset = 0

        while offset < self.max_pools:
            limit = min(self.page_size, self.max_pools - offset)
            try:
                page = self.source.fetch_page(limit, offset)
            except Exception as e:
                logger.warning(
                    "pool_page_fetch_failed",
                    offset=offset,
                    limit=limit,
                    error=str(e),
                )
                break

            logger.debug("pool_page_fetched", offset=offset, count=len(page))
            if not page:
                break

            records.extend(page)
            if len(page) < limit:
                break
            offset += limit

        return records

    def fetch_pools(self) -> list[Pool]:
        """Fetch a fresh snapshot of all parseable pools.

        Returns:
            Pools in index order; malformed records are skipped
        """
        records = self.fetch_raw_records()
        pools: list[Pool] = []
        skipped = 0

        for record in records:
            pool = parse_pool_record(record)
            if pool is None:
                skipped += 1
                continue
            if self.concentrated_only and not pool.is_concentrated:
                continue
            pools.append(pool)

        logger.info(
            "pools_fetched",
            records=len(records),
            pools=len(pools),
            skipped=skipped,
        )
        return pools


# Pool record layout returned by the index contract's all(limit, offset)
POOL_RECORD_COMPONENTS = [
    {"name": "lp", "type": "address"},
    {"name": "symbol", "type": "string"},
    {"name": "decimals", "type": "uint8"},
    {"name": "liquidity", "type": "uint256"},
    {"name": "type", "type": "int24"},
    {"name": "tick", "type": "int24"},
    {"name": "sqrt_ratio", "type": "uint160"},
    {"name": "token0", "type": "address"},
    {"name": "reserve0", "type": "uint256"},
    {"name": "staked0", "type": "uint256"},
    {"name": "token1", "type": "address"},
    {"name": "reserve1", "type": "uint256"},
    {"name": "staked1", "type": "uint256"},
    {"name": "gauge", "type": "address"},
    {"name": "gauge_liquidity", "type": "uint256"},
    {"name": "gauge_alive", "type": "bool"},
    {"name": "fee", "type": "address"},
    {"name": "bribe", "type": "address"},
    {"name": "factory", "type": "address"},
    {"name": "emissions", "type": "uint256"},
    {"name": "emissions_token", "type": "address"},
    {"name": "pool_fee", "type": "uint256"},
    {"name": "unstaked_fee", "type": "uint256"},
    {"name": "token0_fees", "type": "uint256"},
    {"name": "token1_fees", "type": "uint256"},
    {"name": "nfpm", "type": "address"},
    {"name": "alm", "type": "address"},
]

# Liquidity index ABI - minimal, just the paged listing
POOL_INDEX_ABI = [
    {
        "name": "all",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "_limit", "type": "uint256"},
            {"name": "_offset", "type": "uint256"},
        ],
        "outputs": [
            {
                "name": "",
                "type": "tuple[]",
                "components": POOL_RECORD_COMPONENTS,
            }
        ],
    },
]


class Web3PoolSource:
    """Pool source that pages through the liquidity index via RPC."""

    def __init__(self, web3_provider: str, index_address: str = POOL_INDEX_ADDRESS):
        """Initialize the source with a web3 provider.

        Args:
            web3_provider: HTTP RPC URL
            index_address: Liquidity index contract address
        """
        from web3 import Web3

        self.w3 = Web3(Web3.HTTPProvider(web3_provider))
        self.index = self.w3.eth.contract(
            address=Web3.to_checksum_address(index_address),
            abi=POOL_INDEX_ABI,
        )
        self._field_names = [c["name"] for c in POOL_RECORD_COMPONENTS]

    def fetch_page(self, limit: int, offset: int) -> list[Mapping[str, Any]]:
        """Call all(limit, offset) and return records keyed by field name."""
        rows = self.index.functions.all(limit, offset).call()
        return [dict(zip(self._field_names, row, strict=True)) for row in rows]


__all__ = [
    "PoolDataSource",
    "PoolRepository",
    "POOL_INDEX_ABI",
    "POOL_RECORD_COMPONENTS",
    "Web3PoolSource",
]
