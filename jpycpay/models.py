"""
Core data models for JPYC payment URIs.

These describe the records passed between the layers:
- networks and their chain configuration
- URI generation options and results
- validation results and warnings
- decoded EIP-681 fields
- QR rendering options and results

All records are frozen; builders return fresh instances instead of
mutating their inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, Union

Amount = Union[int, float, Decimal, str]


class SupportedNetwork(str, Enum):
    ETHEREUM = "ethereum"
    POLYGON = "polygon"
    AVALANCHE = "avalanche"


class QROutputFormat(str, Enum):
    PNG = "png"
    SVG = "svg"
    UTF8 = "utf8"
    TERMINAL = "terminal"


class ErrorCorrectionLevel(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"


@dataclass(frozen=True)
class ChainConfig:
    """
    Chain settings for one network.

    `chain_id` is the EIP-155 identifier embedded in the URI.
    """
    chain_id: int
    name: str
    jpyc_address: str
    explorer_url: str


@dataclass(frozen=True)
class PaymentURIOptions:
    """
    Options for generate_payment_uri().

    `decimals` is only meaningful together with `jpyc_contract_address`;
    the canonical JPYC contract always uses 18.
    """
    merchant_address: str
    amount: Optional[Amount]
    network: Optional[str] = None
    jpyc_contract_address: Optional[str] = None
    decimals: Optional[int] = None


@dataclass(frozen=True)
class ValidationWarning:
    code: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[str, ...] = ()
    warnings: Tuple[ValidationWarning, ...] = ()


@dataclass(frozen=True)
class PaymentURIResult:
    uri: str
    chain_id: int
    network: SupportedNetwork
    jpyc_contract_address: str
    amount_wei: str
    amount_jpy: str
    decimals: int
    warnings: Tuple[ValidationWarning, ...] = ()


@dataclass(frozen=True)
class DecodedPaymentURI:
    """
    Fields extracted from an EIP-681 transfer URI.

    Addresses keep whatever casing the source URI used.
    """
    scheme: str
    contract_address: str
    chain_id: int
    function_name: str
    recipient_address: str
    amount: str


@dataclass(frozen=True)
class QRCodeOptions:
    """
    QR rendering options. Unset fields fall back to the defaults in
    jpycpay/qr_payloads.py.
    """
    error_correction_level: Optional[ErrorCorrectionLevel] = None
    width: Optional[int] = None
    margin: Optional[int] = None
    dark: Optional[str] = None
    light: Optional[str] = None


@dataclass(frozen=True)
class QRCodeResult:
    data: str
    format: QROutputFormat
    uri: str
