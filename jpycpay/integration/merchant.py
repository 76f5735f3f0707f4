from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..checksum import is_valid_address_format, to_checksum_address
from ..constants import EIP681_SCHEME, JPYC_DECIMALS, TRANSFER_FUNCTION, UINT256_MAX
from ..errors import ErrorCode, JPYCPaymentError
from ..models import Amount, PaymentURIOptions, PaymentURIResult, SupportedNetwork
from ..networks import (
    CHAIN_CONFIGS,
    network_for_chain_id,
    resolve_network,
    selected_default_network,
)
from ..protocol import generate_payment_uri, parse_payment_uri
from ..units import wei_to_jpy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerchantConfig:
    """
    Payment settings for one merchant (point of sale / shop).

    - merchant_address: address that receives the JPYC transfer
    - network: target network, None means the configured default
    - jpyc_contract_address / decimals: override for test deployments
    """

    merchant_address: str
    network: Optional[str] = None
    jpyc_contract_address: Optional[str] = None
    decimals: Optional[int] = None


@dataclass(frozen=True)
class PaymentRequest:
    """
    A decoded and re-validated payment request, as a wallet sees it.
    """

    network: SupportedNetwork
    chain_id: int
    contract_address: str
    recipient_address: str
    amount_wei: str
    amount_jpy: str
    decimals: int


def build_merchant_payment_uri(merchant: MerchantConfig, amount: Amount) -> PaymentURIResult:
    """
    Build a payment URI for `amount` JPY to this merchant.

    This is what a shop would show as a QR code at checkout.
    """
    return generate_payment_uri(
        PaymentURIOptions(
            merchant_address=merchant.merchant_address,
            amount=amount,
            network=merchant.network,
            jpyc_contract_address=merchant.jpyc_contract_address,
            decimals=merchant.decimals,
        )
    )


def _reject(message: str, code: ErrorCode, uri: str) -> JPYCPaymentError:
    return JPYCPaymentError(message, code, {"uri": uri})


def parse_payment_request(
    uri: str,
    *,
    expected_network: Optional[Union[str, SupportedNetwork]] = None,
    decimals: int = JPYC_DECIMALS,
) -> PaymentRequest:
    """
    Wallet-side helper: decode a payment URI and re-validate what it says.

    Steps:
    1. Structural decode (decode_eip681).
    2. Scheme must be `ethereum`, function must be `transfer`.
    3. Both addresses must be well-formed; mixed-case addresses must carry
       a correct EIP-55 checksum.
    4. Chain id must belong to a known network (or to `expected_network`).
    5. Convert the wei amount back to JPY; it must fit in a uint256.
    """
    decoded = parse_payment_uri(uri)

    if decoded.scheme != EIP681_SCHEME:
        raise _reject(f"Unsupported URI scheme: {decoded.scheme!r}", ErrorCode.ENCODING_FAILED, uri)
    if decoded.function_name != TRANSFER_FUNCTION:
        raise _reject(
            f"Unsupported contract function: {decoded.function_name!r}",
            ErrorCode.ENCODING_FAILED,
            uri,
        )

    for address in (decoded.contract_address, decoded.recipient_address):
        if not is_valid_address_format(address):
            raise _reject(f"Invalid address in payment URI: {address}", ErrorCode.INVALID_ADDRESS, uri)
        digits = address[2:]
        # all-lowercase / all-uppercase addresses carry no checksum
        if digits not in (digits.lower(), digits.upper()) and to_checksum_address(address) != address:
            raise JPYCPaymentError(
                f"Checksum mismatch for address: {address}",
                ErrorCode.INVALID_ADDRESS,
                {"uri": uri, "address": address},
            )

    network = network_for_chain_id(decoded.chain_id)
    if network is None:
        raise _reject(f"Unknown chain id: {decoded.chain_id}", ErrorCode.INVALID_NETWORK, uri)
    if expected_network is not None and network is not resolve_network(expected_network):
        raise _reject(
            f"Payment URI targets {network.value}, expected {expected_network}",
            ErrorCode.INVALID_NETWORK,
            uri,
        )

    amount_jpy = wei_to_jpy(decoded.amount, decimals)
    wei_digits = decoded.amount.lstrip("0") or "0"
    if len(wei_digits) > len(str(UINT256_MAX)) or int(wei_digits) > UINT256_MAX:
        raise JPYCPaymentError(
            "Payment amount does not fit in uint256",
            ErrorCode.INVALID_AMOUNT,
            {"uri": uri, "digits": len(wei_digits)},
        )

    return PaymentRequest(
        network=network,
        chain_id=decoded.chain_id,
        contract_address=to_checksum_address(decoded.contract_address),
        recipient_address=to_checksum_address(decoded.recipient_address),
        amount_wei=decoded.amount,
        amount_jpy=amount_jpy,
        decimals=decimals,
    )


def verify_payment_request(merchant: MerchantConfig, uri: str) -> bool:
    """
    Reference merchant-side check that a URI pays this merchant.

    It performs:
    - parse_payment_request() with the merchant network (or the default)
    - recipient match (case-insensitive)
    - contract match against the merchant override or the network default

    Fail-closed: any error returns False.
    """
    try:
        expected_network = merchant.network or selected_default_network()
        request = parse_payment_request(
            uri,
            expected_network=expected_network,
            decimals=merchant.decimals if merchant.decimals is not None else JPYC_DECIMALS,
        )
    except JPYCPaymentError as exc:
        logger.info("rejected payment URI: %s (%s)", exc.message, exc.code.value)
        return False
    except ValueError as exc:
        logger.info("rejected payment URI: %s", exc)
        return False

    if request.recipient_address.lower() != merchant.merchant_address.lower():
        return False

    expected_contract = merchant.jpyc_contract_address or CHAIN_CONFIGS[request.network].jpyc_address
    return request.contract_address.lower() == expected_contract.lower()
