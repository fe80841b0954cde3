"""Tests for shared address and uint256 types."""

import pytest
from pydantic import BaseModel, ValidationError

from swaprouter.models.types import (
    UINT256_MAX,
    Address,
    HexString,
    Uint256,
    is_valid_address,
    normalize_address,
    validate_uint256,
)


class Holder(BaseModel):
    address: Address
    amount: Uint256
    payload: HexString = "0x"


class TestValidateUint256:
    """Tests for validate_uint256."""

    def test_int_and_string(self) -> None:
        assert validate_uint256(5) == "5"
        assert validate_uint256("123") == "123"
        assert validate_uint256(UINT256_MAX) == str(UINT256_MAX)

    def test_canonical_string(self) -> None:
        assert validate_uint256("007") == "7"

    @pytest.mark.parametrize("value", [-1, "-5", UINT256_MAX + 1, str(UINT256_MAX + 1)])
    def test_out_of_range(self, value: object) -> None:
        with pytest.raises(ValueError):
            validate_uint256(value)

    @pytest.mark.parametrize("value", [True, 1.5, "abc", None])
    def test_wrong_type(self, value: object) -> None:
        with pytest.raises(ValueError):
            validate_uint256(value)


class TestAddressHelpers:
    """Tests for normalize_address and is_valid_address."""

    def test_normalize(self) -> None:
        assert normalize_address("0x" + "AB" * 20) == "0x" + "ab" * 20
        assert normalize_address("AB" * 20) == "0x" + "ab" * 20

    def test_normalize_validates_on_request(self) -> None:
        assert normalize_address("0x12") == "0x12"
        with pytest.raises(ValueError, match="Invalid address"):
            normalize_address("0x12", validate=True)

    def test_is_valid_address(self) -> None:
        assert is_valid_address("0x" + "ab" * 20)
        assert not is_valid_address("ab" * 20)
        assert not is_valid_address("0x" + "zz" * 20)
        assert not is_valid_address("0x" + "ab" * 19)
        assert not is_valid_address("0x" + "ab" * 20 + "\n")


class TestPydanticTypes:
    """Tests for the annotated pydantic types."""

    def test_valid(self) -> None:
        holder = Holder(address="0x" + "ab" * 20, amount=10)
        assert holder.amount == "10"

    def test_invalid_address(self) -> None:
        with pytest.raises(ValidationError):
            Holder(address="0x1234", amount="1")

    def test_invalid_amount(self) -> None:
        with pytest.raises(ValidationError):
            Holder(address="0x" + "ab" * 20, amount="-1")

    def test_hex_payload(self) -> None:
        holder = Holder(address="0x" + "ab" * 20, amount="1", payload="0x0800")
        assert holder.payload == "0x0800"

    @pytest.mark.parametrize("payload", ["0800", "0x080", "0xzz"])
    def test_invalid_hex_payload(self, payload: str) -> None:
        with pytest.raises(ValidationError):
            Holder(address="0x" + "ab" * 20, amount="1", payload=payload)
