"""
EIP-55 checksum addresses.

Rules:
- Input MUST be "0x" + 40 hex digits (any case).
- Hash is Keccak-256 (the pre-NIST variant, not hashlib.sha3_256) over the
  ASCII bytes of the 40 lower-cased hex digits.
- Digit i is upper-cased when hash nibble i is >= 8.
- Predicates never raise; to_checksum_address() fails closed with
  JPYCPaymentError.
"""

from __future__ import annotations

from functools import lru_cache

from eth_hash.auto import keccak

from .constants import ADDRESS_LENGTH, ADDRESS_PREFIX, ADDRESS_REGEX
from .errors import ErrorCode, JPYCPaymentError


def _require_address_format(address: str) -> None:
    if not isinstance(address, str):
        raise JPYCPaymentError(
            "Address must be a string",
            ErrorCode.INVALID_ADDRESS,
            {"address": address},
        )
    if not address.startswith(ADDRESS_PREFIX):
        raise JPYCPaymentError(
            "Address must start with 0x",
            ErrorCode.INVALID_ADDRESS,
            {"address": address},
        )
    if len(address) != ADDRESS_LENGTH:
        raise JPYCPaymentError(
            "Address must be 42 characters (0x + 40 hex digits)",
            ErrorCode.INVALID_ADDRESS,
            {"address": address, "length": len(address)},
        )
    if not ADDRESS_REGEX.fullmatch(address):
        raise JPYCPaymentError(
            "Address must contain only hex digits after 0x",
            ErrorCode.INVALID_ADDRESS,
            {"address": address},
        )


@lru_cache(maxsize=1024)
def _checksum_digits(lower_hex: str) -> str:
    try:
        digest = keccak(lower_hex.encode("utf-8")).hex()
    except Exception as exc:  # noqa: BLE001
        raise JPYCPaymentError(
            "Keccak-256 hashing failed",
            ErrorCode.CHECKSUM_FAILED,
            {"address": ADDRESS_PREFIX + lower_hex, "error": repr(exc)},
        ) from exc

    return "".join(
        ch.upper() if int(nibble, 16) >= 8 else ch
        for ch, nibble in zip(lower_hex, digest)
    )


def to_checksum_address(address: str) -> str:
    """
    Return the EIP-55 mixed-case rendering of `address`.

    Raises JPYCPaymentError(INVALID_ADDRESS) on malformed input.
    """
    _require_address_format(address)
    return ADDRESS_PREFIX + _checksum_digits(address[2:].lower())


def is_valid_checksum_address(address: str) -> bool:
    """True iff `address` is already in its exact EIP-55 form."""
    try:
        return address == to_checksum_address(address)
    except Exception:
        return False


def is_valid_address_format(address: str) -> bool:
    """Syntax-only check: 0x + 40 hex digits, case not verified."""
    if not isinstance(address, str):
        return False
    return ADDRESS_REGEX.fullmatch(address) is not None
