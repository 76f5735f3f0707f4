"""
JPY <-> wei conversion.

Amounts are handled as decimal digit strings end to end, so magnitudes are
unbounded and no float arithmetic touches the result. Fractional digits
beyond `decimals` are truncated, never rounded.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Union

from .constants import (
    JPYC_DECIMALS,
    MAX_DECIMALS,
    MAX_EXPANDED_AMOUNT_DIGITS,
    MIN_DECIMALS,
)
from .errors import ErrorCode, JPYCPaymentError
from .models import Amount

_PLAIN_DECIMAL = re.compile(r"^[0-9]*\.?[0-9]*$")
_DIGITS = re.compile(r"^[0-9]+$")


def validate_decimals(decimals: int) -> int:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise JPYCPaymentError(
            f"decimals must be an integer between {MIN_DECIMALS} and {MAX_DECIMALS}: {decimals!r}",
            ErrorCode.INVALID_DECIMALS,
            {"decimals": decimals, "min": MIN_DECIMALS, "max": MAX_DECIMALS},
        )
    if decimals < MIN_DECIMALS or decimals > MAX_DECIMALS:
        raise JPYCPaymentError(
            f"decimals must be an integer between {MIN_DECIMALS} and {MAX_DECIMALS}: {decimals}",
            ErrorCode.INVALID_DECIMALS,
            {"decimals": decimals, "min": MIN_DECIMALS, "max": MAX_DECIMALS},
        )
    return decimals


def _invalid_amount(message: str, amount: object) -> JPYCPaymentError:
    return JPYCPaymentError(message, ErrorCode.INVALID_AMOUNT, {"amount": amount})


def _amount_to_str(amount: Amount) -> str:
    if isinstance(amount, bool):
        raise _invalid_amount(f"Invalid amount: {amount!r}", amount)
    if isinstance(amount, str):
        return amount
    if isinstance(amount, int):
        return format(Decimal(amount), "f")
    if isinstance(amount, float):
        # repr() is the shortest string that round-trips the float
        return repr(amount)
    if isinstance(amount, Decimal):
        return str(amount)
    raise _invalid_amount(f"Invalid amount: {amount!r}", amount)


def normalize_amount(amount: Amount) -> str:
    """
    Return `amount` as a plain non-negative decimal string ("123", "0.5", ".5").

    Raises JPYCPaymentError(INVALID_AMOUNT) for negative, non-numeric,
    non-finite or multi-separator input.
    """
    s = _amount_to_str(amount)

    if s.startswith("-"):
        raise _invalid_amount("Amount must not be negative", s)

    if s.count(".") > 1:
        raise _invalid_amount(f"Amount contains more than one decimal point: {s}", s)

    try:
        value = Decimal(s)
    except InvalidOperation:
        raise _invalid_amount(f"Invalid amount format: {s}", s) from None

    if value.is_nan():
        raise _invalid_amount(f"Invalid amount format: {s}", s)
    if value.is_infinite():
        raise _invalid_amount("Amount must be a finite number", s)
    if value.is_signed():
        raise _invalid_amount("Amount must not be negative", s)

    if _PLAIN_DECIMAL.fullmatch(s):
        return s

    # Exponent notation, surrounding whitespace, "+" sign, underscores.
    _, digits, exponent = value.as_tuple()
    if len(digits) + abs(exponent) > MAX_EXPANDED_AMOUNT_DIGITS:  # type: ignore[arg-type]
        raise _invalid_amount(f"Amount exponent is out of range: {s}", s)
    return format(value, "f")


def jpy_to_wei(amount: Amount, decimals: int = JPYC_DECIMALS) -> str:
    """
    Convert a JPY amount to its minor-unit (wei) integer string.

    The result is built digit by digit, so its magnitude is unbounded.

    >>> jpy_to_wei("0.5")
    '500000000000000000'
    """
    validate_decimals(decimals)
    s = normalize_amount(amount)

    int_part, _, frac_part = s.partition(".")
    frac_part = frac_part.ljust(decimals, "0")[:decimals]

    return (int_part + frac_part).lstrip("0") or "0"


def _wei_digits(wei_amount: Union[int, str]) -> str:
    if isinstance(wei_amount, bool):
        raise _invalid_amount(f"Invalid wei amount: {wei_amount!r}", wei_amount)
    if isinstance(wei_amount, int):
        if wei_amount < 0:
            raise _invalid_amount("Wei amount must not be negative", wei_amount)
        # str(int) is capped by sys.get_int_max_str_digits(); Decimal is not.
        return format(Decimal(wei_amount), "f")
    if isinstance(wei_amount, str) and _DIGITS.fullmatch(wei_amount):
        return wei_amount.lstrip("0") or "0"
    raise _invalid_amount(f"Invalid wei amount: {wei_amount!r}", wei_amount)


def wei_to_jpy(wei_amount: Union[int, str], decimals: int = JPYC_DECIMALS) -> str:
    """
    Convert a minor-unit (wei) amount back to a JPY decimal string.

    Trailing fractional zeros are dropped, and so is the separator when
    nothing is left after it.
    """
    validate_decimals(decimals)
    digits = _wei_digits(wei_amount)

    if decimals == 0:
        return digits

    digits = digits.rjust(decimals + 1, "0")
    int_part = digits[:-decimals]
    frac_part = digits[-decimals:].rstrip("0")
    return f"{int_part}.{frac_part}" if frac_part else int_part
