"""
Integration helpers for JPYC payment URIs.

This package hosts the two ends of a payment:
- merchant side: building and verifying URIs for a configured shop
- wallet side: decoding a scanned URI and re-validating its contents
"""

from .merchant import (
    MerchantConfig,
    PaymentRequest,
    build_merchant_payment_uri,
    parse_payment_request,
    verify_payment_request,
)

__all__: list[str] = [
    "MerchantConfig",
    "PaymentRequest",
    "build_merchant_payment_uri",
    "parse_payment_request",
    "verify_payment_request",
]
