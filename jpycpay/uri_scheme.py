"""
EIP-681 URI scheme for JPYC transfers (contract-locked).

This module is the single source of truth for payment URIs.

Format:
    ethereum:<contract>@<chainId>/transfer?address=<recipient>&uint256=<wei>

Rules:
- Addresses are emitted in EIP-55 checksum form.
- `uint256` is the wei amount as plain decimal digits, emitted verbatim.
- Decoding is a structural parse only: no checksum verification, no
  re-encoding, unknown query parameters ignored. Query keys and values are
  form-decoded (percent escapes, "+" as space).
- Fail-closed decoding (raise JPYCPaymentError(ENCODING_FAILED)).
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Union
from urllib.parse import unquote_plus

from .checksum import to_checksum_address
from .constants import EIP681_SCHEME, TRANSFER_FUNCTION
from .errors import ErrorCode, JPYCPaymentError
from .models import DecodedPaymentURI

_SCHEME_RE = re.compile(r"^([^:]+):")
_CONTRACT_RE = re.compile(r":([^@]+)@")
_CHAIN_ID_RE = re.compile(r"@([0-9]+)/")
_FUNCTION_RE = re.compile(r"/([^?]+)\?")
_DIGITS_RE = re.compile(r"[0-9]+")

# uint256 chain ids have at most 78 decimal digits.
_MAX_CHAIN_ID_DIGITS = 78


def _extract_query_param(query: str, key: str) -> str | None:
    for pair in query.split("&"):
        if not pair:
            continue
        k, _, v = pair.partition("=")
        if unquote_plus(k) == key:
            return unquote_plus(v)
    return None


def _encoding_failed(message: str, **details: object) -> JPYCPaymentError:
    return JPYCPaymentError(message, ErrorCode.ENCODING_FAILED, details)


def encode_eip681(
    contract_address: str,
    recipient_address: str,
    amount: Union[str, int],
    chain_id: int,
) -> str:
    """
    Build an EIP-681 transfer URI.

    Address errors from the checksum engine propagate unchanged; anything
    unexpected is wrapped as ENCODING_FAILED.
    """
    try:
        checksummed_contract = to_checksum_address(contract_address)
        checksummed_recipient = to_checksum_address(recipient_address)

        if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id <= 0:
            raise _encoding_failed(
                f"chain_id must be a positive integer: {chain_id!r}", chain_id=chain_id
            )

        if isinstance(amount, int) and not isinstance(amount, bool) and amount >= 0:
            amount_str = format(Decimal(amount), "f")
        elif isinstance(amount, str) and _DIGITS_RE.fullmatch(amount):
            amount_str = amount
        else:
            raise _encoding_failed(
                f"uint256 amount must be a non-negative integer: {amount!r}", amount=amount
            )

        return (
            f"{EIP681_SCHEME}:{checksummed_contract}@{chain_id}/{TRANSFER_FUNCTION}"
            f"?address={checksummed_recipient}&uint256={amount_str}"
        )
    except JPYCPaymentError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise _encoding_failed("Failed to encode EIP-681 URI.", error=exc) from exc


def decode_eip681(uri: str) -> DecodedPaymentURI:
    """
    Parse an EIP-681 transfer URI into its six fields.

    Every field is mandatory. The source string is never modified.
    """
    if not isinstance(uri, str):
        raise _encoding_failed("EIP-681 URI must be a string.", uri=uri, cause="not a string")

    def fail(cause: str) -> JPYCPaymentError:
        return _encoding_failed(f"Failed to decode EIP-681 URI: {cause}", uri=uri, cause=cause)

    m = _SCHEME_RE.search(uri)
    if m is None:
        raise fail("scheme not found")
    scheme = m.group(1)

    m = _CONTRACT_RE.search(uri)
    if m is None:
        raise fail("contract address not found")
    contract_address = m.group(1)

    m = _CHAIN_ID_RE.search(uri)
    if m is None:
        raise fail("chain id not found")
    chain_digits = m.group(1).lstrip("0") or "0"
    if len(chain_digits) > _MAX_CHAIN_ID_DIGITS:
        raise fail("chain id out of range")
    chain_id = int(chain_digits)

    m = _FUNCTION_RE.search(uri)
    if m is None:
        raise fail("function name not found")
    function_name = m.group(1)

    _, sep, query = uri.partition("?")
    if not sep or not query:
        raise fail("query parameters not found")

    recipient_address = _extract_query_param(query, "address")
    if not recipient_address:
        raise fail("recipient address not found")

    amount = _extract_query_param(query, "uint256")
    if not amount:
        raise fail("amount not found")

    return DecodedPaymentURI(
        scheme=scheme,
        contract_address=contract_address,
        chain_id=chain_id,
        function_name=function_name,
        recipient_address=recipient_address,
        amount=amount,
    )
