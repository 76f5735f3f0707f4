"""
Tests for high-level payment URI helpers.
"""

from __future__ import annotations

import logging

import pytest

from jpycpay.errors import ErrorCode, JPYCPaymentError
from jpycpay.models import PaymentURIOptions, SupportedNetwork
from jpycpay.protocol import generate_payment_uri, parse_payment_uri

MERCHANT = "0x1234567890123456789012345678901234567890"
CUSTOM_CONTRACT = "0xabcdef1234567890abcdef1234567890abcdef12"


def test_generate_basic_uri() -> None:
    result = generate_payment_uri(PaymentURIOptions(merchant_address=MERCHANT, amount=100))

    assert result.uri == (
        "ethereum:0xE7C3D8C9a439feDe00D2600032D5dB0Be71C3c29@137/transfer"
        f"?address={MERCHANT}&uint256=100000000000000000000"
    )
    assert result.chain_id == 137
    assert result.network is SupportedNetwork.POLYGON
    assert result.jpyc_contract_address == "0xe7c3d8c9a439fede00d2600032d5db0be71c3c29"
    assert result.amount_wei == "100000000000000000000"
    assert result.amount_jpy == "100"
    assert result.decimals == 18
    assert result.warnings == ()


@pytest.mark.parametrize(
    "network, chain_id",
    [("ethereum", 1), ("polygon", 137), ("avalanche", 43114), (SupportedNetwork.ETHEREUM, 1)],
)
def test_generate_for_each_network(network: object, chain_id: int) -> None:
    result = generate_payment_uri(
        PaymentURIOptions(merchant_address=MERCHANT, amount=1, network=network)  # type: ignore[arg-type]
    )
    assert f"@{chain_id}/transfer" in result.uri
    assert result.chain_id == chain_id


def test_generate_string_amount() -> None:
    result = generate_payment_uri(PaymentURIOptions(merchant_address=MERCHANT, amount="123.456"))
    assert result.amount_jpy == "123.456"
    assert result.amount_wei == "123456000000000000000"


def test_generate_custom_contract_and_decimals() -> None:
    result = generate_payment_uri(
        PaymentURIOptions(
            merchant_address=MERCHANT,
            amount=100,
            jpyc_contract_address=CUSTOM_CONTRACT,
            decimals=6,
        )
    )
    assert result.jpyc_contract_address == CUSTOM_CONTRACT
    assert result.decimals == 6
    assert result.amount_wei == "100000000"
    assert [w.code for w in result.warnings] == ["CUSTOM_CONTRACT", "CUSTOM_DECIMALS"]


def test_generate_returns_warnings(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="jpycpay.protocol"):
        result = generate_payment_uri(PaymentURIOptions(merchant_address=MERCHANT, amount=0.5))
    assert result.warnings[0].code == "SMALL_AMOUNT"
    assert "SMALL_AMOUNT" in caplog.text


def test_generate_accepts_mapping() -> None:
    result = generate_payment_uri({"merchant_address": MERCHANT, "amount": "1", "network": "ethereum"})
    assert result.chain_id == 1


def test_generate_rejects_unknown_mapping_keys() -> None:
    with pytest.raises(JPYCPaymentError) as ei:
        generate_payment_uri({"merchant_address": MERCHANT, "amount": 1, "netwrok": "ethereum"})
    assert ei.value.code is ErrorCode.VALIDATION_FAILED


def test_generate_rejects_non_options() -> None:
    with pytest.raises(JPYCPaymentError) as ei:
        generate_payment_uri("amount=1")  # type: ignore[arg-type]
    assert ei.value.code is ErrorCode.VALIDATION_FAILED
    assert ei.value.details["errors"] == ["options must be PaymentURIOptions or a mapping: str"]


def test_generate_amount_with_many_leading_zeros() -> None:
    result = generate_payment_uri(
        PaymentURIOptions(merchant_address=MERCHANT, amount="0" * 5000 + "1")
    )
    assert result.amount_wei == "1000000000000000000"
    assert result.uri.endswith("&uint256=1000000000000000000")


def test_generate_validation_failure_lists_every_error() -> None:
    with pytest.raises(JPYCPaymentError) as ei:
        generate_payment_uri(PaymentURIOptions(merchant_address="", amount=None))

    err = ei.value
    assert err.code is ErrorCode.VALIDATION_FAILED
    assert err.details["errors"] == ["merchant_address is required", "amount is required"]
    assert "merchant_address is required" in str(err)
    assert "amount is required" in str(err)


@pytest.mark.parametrize("amount", [0, "0", -5])
def test_generate_rejects_non_positive_amount(amount: object) -> None:
    with pytest.raises(JPYCPaymentError) as ei:
        generate_payment_uri(PaymentURIOptions(merchant_address=MERCHANT, amount=amount))  # type: ignore[arg-type]
    assert ei.value.code is ErrorCode.VALIDATION_FAILED


def test_generate_uses_env_default_network(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JPYCPAY_DEFAULT_NETWORK", " Avalanche ")
    result = generate_payment_uri(PaymentURIOptions(merchant_address=MERCHANT, amount=1))
    assert result.network is SupportedNetwork.AVALANCHE
    assert result.chain_id == 43114


def test_generate_explicit_network_beats_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JPYCPAY_DEFAULT_NETWORK", "avalanche")
    result = generate_payment_uri(
        PaymentURIOptions(merchant_address=MERCHANT, amount=1, network="ethereum")
    )
    assert result.chain_id == 1


def test_generate_bad_env_network_fails_closed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JPYCPAY_DEFAULT_NETWORK", "bitcoin")
    with pytest.raises(JPYCPaymentError) as ei:
        generate_payment_uri(PaymentURIOptions(merchant_address=MERCHANT, amount=1))
    assert ei.value.code is ErrorCode.INVALID_NETWORK


def test_parse_payment_uri_roundtrip() -> None:
    result = generate_payment_uri(PaymentURIOptions(merchant_address=MERCHANT, amount="2500"))
    decoded = parse_payment_uri(result.uri)
    assert decoded.chain_id == result.chain_id
    assert decoded.amount == result.amount_wei
    assert decoded.recipient_address == MERCHANT
