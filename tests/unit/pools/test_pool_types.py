"""Tests for Token and Pool value types."""

import pytest

from swaprouter.constants import MAX_FEE_FIELD, STABLE_POOL_FEE, VOLATILE_POOL_FEE
from swaprouter.errors import InvalidPoolError
from swaprouter.pools.types import Pool, PoolFamily, PoolKind, Token
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, make_pool


class TestToken:
    """Tests for Token."""

    def test_address_is_lowercased(self) -> None:
        token = Token(address="0x" + "AB" * 20, decimals=6, symbol="USDC")
        assert token.address == "0x" + "ab" * 20

    def test_negative_decimals_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            Token(address=TOKEN_A, decimals=-1, symbol="BAD")


class TestPool:
    """Tests for Pool."""

    def test_addresses_normalized(self) -> None:
        pool = Pool(
            address="0x" + "1F" * 20,
            token0=TOKEN_A.upper().replace("0X", "0x"),
            token1=TOKEN_B,
            kind=PoolKind.VOLATILE,
        )
        assert pool.address == "0x" + "1f" * 20
        assert pool.token0 == TOKEN_A

    def test_identical_tokens_rejected(self) -> None:
        with pytest.raises(InvalidPoolError, match="identical tokens"):
            make_pool(TOKEN_A, TOKEN_A)

    def test_concentrated_requires_tick_spacing(self) -> None:
        with pytest.raises(InvalidPoolError, match="tick spacing"):
            Pool(
                address="0x" + "01" * 20,
                token0=TOKEN_A,
                token1=TOKEN_B,
                kind=PoolKind.CONCENTRATED,
                tick_spacing=0,
            )

    def test_tick_spacing_must_fit_fee_field(self) -> None:
        with pytest.raises(InvalidPoolError, match="fee field"):
            make_pool(TOKEN_A, TOKEN_B, kind="concentrated", tick_spacing=MAX_FEE_FIELD + 1)

    def test_largest_encodable_tick_spacing(self) -> None:
        pool = make_pool(TOKEN_A, TOKEN_B, kind="concentrated", tick_spacing=MAX_FEE_FIELD)
        assert pool.fee == 0xFFFFFF

    def test_fee_field_per_kind(self) -> None:
        assert make_pool(TOKEN_A, TOKEN_B, kind="stable").fee == STABLE_POOL_FEE
        assert make_pool(TOKEN_A, TOKEN_B, kind="volatile").fee == VOLATILE_POOL_FEE
        cl_pool = make_pool(TOKEN_A, TOKEN_B, kind="concentrated", tick_spacing=200)
        assert cl_pool.fee == 200

    def test_family_and_flags(self) -> None:
        stable = make_pool(TOKEN_A, TOKEN_B, kind="stable")
        cl_pool = make_pool(TOKEN_A, TOKEN_B, kind="concentrated")

        assert stable.stable is True
        assert stable.family == PoolFamily.LEGACY
        assert stable.is_concentrated is False
        assert cl_pool.stable is False
        assert cl_pool.family == PoolFamily.TICK
        assert cl_pool.label == "CL-100"

    def test_get_token_out(self) -> None:
        pool = make_pool(TOKEN_A, TOKEN_B)
        assert pool.get_token_out(TOKEN_A) == TOKEN_B
        assert pool.get_token_out(TOKEN_B.upper().replace("0X", "0x")) == TOKEN_A

    def test_get_token_out_unknown_token(self) -> None:
        pool = make_pool(TOKEN_A, TOKEN_B)
        with pytest.raises(ValueError, match="not in pool"):
            pool.get_token_out(TOKEN_C)
