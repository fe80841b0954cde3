"""Pool ingestion package.

Provides the Pool snapshot types and PoolRepository for fetching pools
from the liquidity index.
"""

from .parsing import parse_pool_kind, parse_pool_record
from .repository import PoolDataSource, PoolRepository, Web3PoolSource
from .types import Pool, PoolFamily, PoolKind, Token

__all__ = [
    "Pool",
    "PoolDataSource",
    "PoolFamily",
    "PoolKind",
    "PoolRepository",
    "Token",
    "Web3PoolSource",
    "parse_pool_kind",
    "parse_pool_record",
]
