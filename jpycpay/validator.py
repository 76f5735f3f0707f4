"""
Validation of payment URI options.

validate_generate_options() runs every check and reports all blocking
errors at once, together with non-blocking warnings. It never raises for
bad input; generate_payment_uri() turns a failed result into
JPYCPaymentError(VALIDATION_FAILED).
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import List

from .checksum import is_valid_address_format
from .constants import (
    JPYC_DECIMALS,
    LARGE_AMOUNT_THRESHOLD,
    MAX_DECIMALS,
    MAX_SAFE_AMOUNT,
    MIN_DECIMALS,
    SMALL_AMOUNT_THRESHOLD,
)
from .models import Amount, PaymentURIOptions, ValidationResult, ValidationWarning
from .networks import is_supported_network, supported_networks

SMALL_AMOUNT = "SMALL_AMOUNT"
LARGE_AMOUNT = "LARGE_AMOUNT"
CUSTOM_CONTRACT = "CUSTOM_CONTRACT"
CUSTOM_DECIMALS = "CUSTOM_DECIMALS"


def _amount_as_float(amount: Amount) -> float:
    """
    Lenient numeric reading of an amount, NaN when it is not a number.

    Only used for range checks and advisories; conversion to wei goes
    through jpycpay.units and never touches floats.
    """
    if isinstance(amount, bool):
        return math.nan
    if isinstance(amount, (int, float, Decimal)):
        try:
            return float(amount)
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan
    if isinstance(amount, str):
        try:
            return float(amount)
        except ValueError:
            return math.nan
    return math.nan


def _is_blank(value: object) -> bool:
    return value is None or value == ""


def validate_generate_options(options: PaymentURIOptions) -> ValidationResult:
    errors: List[str] = []
    warnings: List[ValidationWarning] = []

    # merchant address
    if _is_blank(options.merchant_address):
        errors.append("merchant_address is required")
    elif not is_valid_address_format(options.merchant_address):
        errors.append(
            f"Invalid merchant address format: {options.merchant_address}. "
            "Expected 0x followed by 40 hex characters"
        )

    # amount
    if _is_blank(options.amount):
        errors.append("amount is required")
    else:
        value = _amount_as_float(options.amount)
        if math.isnan(value):
            errors.append(f"Invalid amount format: {options.amount}")
        else:
            if value <= 0:
                errors.append(f"Amount must be a positive number: {options.amount}")
            elif not math.isfinite(value):
                errors.append("Amount must be a finite number")
            elif value > MAX_SAFE_AMOUNT:
                errors.append(
                    f"Amount is too large: {options.amount}. Maximum is {MAX_SAFE_AMOUNT} JPY"
                )

            if 0 < value < SMALL_AMOUNT_THRESHOLD:
                warnings.append(
                    ValidationWarning(
                        SMALL_AMOUNT,
                        f"Amount is below {SMALL_AMOUNT_THRESHOLD} JPY: {options.amount}. "
                        "Please confirm this is intended",
                    )
                )
            if value > LARGE_AMOUNT_THRESHOLD:
                warnings.append(
                    ValidationWarning(
                        LARGE_AMOUNT,
                        f"Amount exceeds {LARGE_AMOUNT_THRESHOLD:,} JPY: {options.amount}. "
                        "Please confirm this is intended",
                    )
                )

    # network
    if options.network is not None and not is_supported_network(options.network):
        errors.append(
            f"Unsupported network: {options.network}. "
            f"Supported networks: {', '.join(supported_networks())}"
        )

    # custom contract
    if options.jpyc_contract_address is not None:
        if not is_valid_address_format(options.jpyc_contract_address):
            errors.append(
                f"Invalid contract address format: {options.jpyc_contract_address}. "
                "Expected 0x followed by 40 hex characters"
            )
        else:
            warnings.append(
                ValidationWarning(
                    CUSTOM_CONTRACT,
                    "A custom contract address is set. "
                    "Make sure it is the intended JPYC contract",
                )
            )

    # decimals
    if options.decimals is not None:
        d = options.decimals
        if isinstance(d, bool) or not isinstance(d, int) or not MIN_DECIMALS <= d <= MAX_DECIMALS:
            errors.append(
                f"decimals must be an integer between {MIN_DECIMALS} and {MAX_DECIMALS}: {d}"
            )

        # the canonical contract has fixed decimals
        if not options.jpyc_contract_address:
            errors.append("decimals can only be set together with jpyc_contract_address")

        if d != JPYC_DECIMALS:
            warnings.append(
                ValidationWarning(
                    CUSTOM_DECIMALS,
                    f"Non-standard decimals: {d}. Make sure it matches the contract",
                )
            )

    return ValidationResult(valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def is_valid_address(address: str) -> bool:
    return is_valid_address_format(address)


def is_valid_amount(amount: Amount) -> bool:
    value = _amount_as_float(amount)
    return math.isfinite(value) and 0 < value <= MAX_SAFE_AMOUNT
