"""
High-level JPYC payment URI helpers.

This module provides:

- generate_payment_uri(options)
    validate -> resolve network/contract/decimals -> jpy_to_wei -> encode_eip681
- parse_payment_uri(uri)
    decode_eip681 (structural parse only)

Rendering the URI as a QR code lives in jpycpay/qr_payloads.py.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping, Union

from .constants import JPYC_DECIMALS
from .errors import ErrorCode, JPYCPaymentError
from .models import DecodedPaymentURI, PaymentURIOptions, PaymentURIResult
from .networks import CHAIN_CONFIGS, resolve_network, selected_default_network
from .units import jpy_to_wei, normalize_amount
from .uri_scheme import decode_eip681, encode_eip681
from .validator import validate_generate_options

logger = logging.getLogger(__name__)

OptionsLike = Union[PaymentURIOptions, Mapping[str, Any]]

_OPTION_FIELDS = frozenset(f.name for f in fields(PaymentURIOptions))


def coerce_options(options: OptionsLike) -> PaymentURIOptions:
    """
    Accept a PaymentURIOptions or a plain mapping with the same keys.

    Anything else, and unknown mapping keys, raise VALIDATION_FAILED.
    """
    if isinstance(options, PaymentURIOptions):
        return options
    if not isinstance(options, Mapping):
        reason = f"options must be PaymentURIOptions or a mapping: {type(options).__name__}"
        raise JPYCPaymentError(reason, ErrorCode.VALIDATION_FAILED, {"errors": [reason]})

    unknown = set(options) - _OPTION_FIELDS
    if unknown:
        raise JPYCPaymentError(
            f"Unknown payment option(s): {', '.join(sorted(map(str, unknown)))}",
            ErrorCode.VALIDATION_FAILED,
            {"errors": [f"unknown option: {k}" for k in sorted(map(str, unknown))]},
        )

    return PaymentURIOptions(
        merchant_address=options.get("merchant_address", ""),
        amount=options.get("amount"),
        network=options.get("network"),
        jpyc_contract_address=options.get("jpyc_contract_address"),
        decimals=options.get("decimals"),
    )


def generate_payment_uri(options: OptionsLike) -> PaymentURIResult:
    """
    Build an EIP-681 JPYC payment URI.

    Raises JPYCPaymentError:
    - VALIDATION_FAILED with every blocking error in details["errors"]
    - INVALID_NETWORK when the configured default network is unknown
    - INVALID_AMOUNT / INVALID_ADDRESS / ENCODING_FAILED from the codec
    """
    opts = coerce_options(options)

    validation = validate_generate_options(opts)
    if not validation.valid:
        raise JPYCPaymentError(
            f"Validation failed: {', '.join(validation.errors)}",
            ErrorCode.VALIDATION_FAILED,
            {"errors": list(validation.errors)},
        )

    for w in validation.warnings:
        logger.warning("payment option warning %s: %s", w.code, w.message)

    if opts.network is not None:
        network = resolve_network(opts.network)
    else:
        network = selected_default_network()
    chain_config = CHAIN_CONFIGS[network]

    contract_address = opts.jpyc_contract_address or chain_config.jpyc_address
    decimals = opts.decimals if opts.decimals is not None else JPYC_DECIMALS

    amount_wei = jpy_to_wei(opts.amount, decimals)  # type: ignore[arg-type]
    uri = encode_eip681(contract_address, opts.merchant_address, amount_wei, chain_config.chain_id)

    logger.debug("built payment URI network=%s chain_id=%d", network.value, chain_config.chain_id)

    return PaymentURIResult(
        uri=uri,
        chain_id=chain_config.chain_id,
        network=network,
        jpyc_contract_address=contract_address,
        amount_wei=amount_wei,
        amount_jpy=normalize_amount(opts.amount),  # type: ignore[arg-type]
        decimals=decimals,
        warnings=validation.warnings,
    )


def parse_payment_uri(uri: str) -> DecodedPaymentURI:
    """
    Decode an EIP-681 payment URI back into its fields.

    No checksum or network checks; see
    jpycpay.integration.merchant.parse_payment_request for the wallet-side
    flow that re-validates decoded values.
    """
    return decode_eip681(uri)
