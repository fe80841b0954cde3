"""Parsing functions for raw pool records from the liquidity index."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from swaprouter.constants import MAX_FEE_FIELD, RAW_POOL_TYPE_STABLE, RAW_POOL_TYPE_VOLATILE
from swaprouter.errors import InvalidPoolError
from swaprouter.models.types import is_valid_address, normalize_address

from .types import Pool, PoolKind

logger = structlog.get_logger()

# Field aliases accepted for each pool attribute (index name first)
_ADDRESS_FIELDS = ("lp", "poolAddress", "address")
_TYPE_FIELDS = ("type", "poolKindRaw")


def parse_pool_kind(raw_type: int) -> tuple[PoolKind, int]:
    """Map the index contract's raw pool type to a PoolKind.

    Args:
        raw_type: -1 for stable, 0 for volatile, tick spacing (> 0) for
                  concentrated liquidity pools

    Returns:
        Tuple of (PoolKind, tick_spacing); tick spacing is 0 for legacy pools

    Raises:
        InvalidPoolError: If raw_type is below -1 or too large to encode as a
                          path fee field
    """
    if raw_type == RAW_POOL_TYPE_STABLE:
        return PoolKind.STABLE, 0
    if raw_type == RAW_POOL_TYPE_VOLATILE:
        return PoolKind.VOLATILE, 0
    if 0 < raw_type <= MAX_FEE_FIELD:
        return PoolKind.CONCENTRATED, raw_type
    raise InvalidPoolError(f"Unknown pool type: {raw_type}")


def _first_field(record: Mapping[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = record.get(name)
        if value is not None:
            return value
    return None


def parse_pool_record(record: Mapping[str, Any]) -> Pool | None:
    """Parse a Pool from a raw index record.

    Args:
        record: Raw record with token0, token1, lp/poolAddress,
                type/poolKindRaw and optionally factory

    Returns:
        Pool if the record is well formed, None otherwise
    """
    address = _first_field(record, _ADDRESS_FIELDS)
    token0 = record.get("token0")
    token1 = record.get("token1")
    raw_type = _first_field(record, _TYPE_FIELDS)

    if address is None or token0 is None or token1 is None or raw_type is None:
        logger.debug("pool_record_missing_fields", record_keys=sorted(record.keys()))
        return None

    if not all(is_valid_address(str(a)) for a in (address, token0, token1)):
        logger.debug("pool_record_invalid_address", pool=str(address))
        return None

    try:
        kind, tick_spacing = parse_pool_kind(int(raw_type))
    except (InvalidPoolError, ValueError, TypeError) as e:
        logger.debug("pool_record_invalid_type", pool=str(address), error=str(e))
        return None

    factory = record.get("factory")
    if factory is not None and not is_valid_address(str(factory)):
        factory = None

    try:
        return Pool(
            address=normalize_address(str(address)),
            token0=str(token0),
            token1=str(token1),
            kind=kind,
            tick_spacing=tick_spacing,
            factory=str(factory) if factory is not None else None,
        )
    except InvalidPoolError as e:
        logger.debug("pool_record_rejected", pool=str(address), error=str(e))
        return None


__all__ = ["parse_pool_kind", "parse_pool_record"]
