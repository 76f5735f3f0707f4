from __future__ import annotations

import pytest

import jpycpay.checksum as cs
from jpycpay.checksum import (
    is_valid_address_format,
    is_valid_checksum_address,
    to_checksum_address,
)
from jpycpay.errors import ErrorCode, JPYCPaymentError

JPYC_LOWER = "0xe7c3d8c9a439fede00d2600032d5db0be71c3c29"
JPYC_CHECKSUM = "0xE7C3D8C9a439feDe00D2600032D5dB0Be71C3c29"


def test_checksum_known_answer() -> None:
    assert to_checksum_address(JPYC_LOWER) == JPYC_CHECKSUM


@pytest.mark.parametrize(
    "checksummed",
    [
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
        "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
        "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
    ],
)
def test_checksum_matches_eip55_vectors(checksummed: str) -> None:
    assert to_checksum_address(checksummed.lower()) == checksummed
    assert is_valid_checksum_address(checksummed) is True


def test_checksum_ignores_input_case() -> None:
    upper = "0x" + JPYC_LOWER[2:].upper()
    assert to_checksum_address(upper) == JPYC_CHECKSUM
    assert to_checksum_address(JPYC_CHECKSUM) == JPYC_CHECKSUM


def test_checksum_is_idempotent() -> None:
    once = to_checksum_address(JPYC_LOWER)
    assert to_checksum_address(once) == once


def test_checksum_digit_only_address_unchanged() -> None:
    addr = "0x1234567890123456789012345678901234567890"
    assert to_checksum_address(addr) == addr


def test_checksum_rejects_missing_prefix() -> None:
    with pytest.raises(JPYCPaymentError) as ei:
        to_checksum_address(JPYC_LOWER[2:] + "00")
    assert ei.value.code is ErrorCode.INVALID_ADDRESS
    assert "0x" in ei.value.message


def test_checksum_rejects_wrong_length() -> None:
    with pytest.raises(JPYCPaymentError) as ei:
        to_checksum_address("0x123")
    assert ei.value.code is ErrorCode.INVALID_ADDRESS
    assert ei.value.details == {"address": "0x123", "length": 5}


def test_checksum_rejects_non_hex() -> None:
    bad = "0x" + "g" * 40
    with pytest.raises(JPYCPaymentError) as ei:
        to_checksum_address(bad)
    assert ei.value.code is ErrorCode.INVALID_ADDRESS
    assert ei.value.details == {"address": bad}


def test_checksum_rejects_non_string() -> None:
    with pytest.raises(JPYCPaymentError) as ei:
        to_checksum_address(None)  # type: ignore[arg-type]
    assert ei.value.code is ErrorCode.INVALID_ADDRESS


def test_checksum_hash_failure_is_checksum_failed(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(_: bytes) -> bytes:
        raise RuntimeError("backend down")

    cs._checksum_digits.cache_clear()
    monkeypatch.setattr(cs, "keccak", boom)
    try:
        with pytest.raises(JPYCPaymentError) as ei:
            to_checksum_address("0x" + "ab" * 20)
        assert ei.value.code is ErrorCode.CHECKSUM_FAILED
        assert isinstance(ei.value.__cause__, RuntimeError)
    finally:
        cs._checksum_digits.cache_clear()


def test_is_valid_checksum_address() -> None:
    assert is_valid_checksum_address(JPYC_CHECKSUM) is True
    assert is_valid_checksum_address(JPYC_LOWER) is False
    assert is_valid_checksum_address("0x123") is False
    assert is_valid_checksum_address("not-an-address") is False
    assert is_valid_checksum_address(None) is False  # type: ignore[arg-type]


def test_is_valid_address_format() -> None:
    assert is_valid_address_format(JPYC_LOWER) is True
    assert is_valid_address_format("0x" + JPYC_LOWER[2:].upper()) is True
    assert is_valid_address_format("0x123") is False
    assert is_valid_address_format(JPYC_LOWER[2:]) is False
    assert is_valid_address_format("0xGGGG") is False
    assert is_valid_address_format(JPYC_LOWER + "\n") is False
    assert is_valid_address_format(12345) is False  # type: ignore[arg-type]
