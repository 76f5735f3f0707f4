"""
MIT License
Copyright (c) 2025 DarekDGB

Error type for JPYC payment operations.

A single exception class carries a machine-readable `code` so callers can
branch on the kind of failure without an exception hierarchy:

    try:
        generate_payment_uri(options)
    except JPYCPaymentError as exc:
        if exc.code is ErrorCode.VALIDATION_FAILED:
            ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_NETWORK = "INVALID_NETWORK"
    INVALID_DECIMALS = "INVALID_DECIMALS"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    ENCODING_FAILED = "ENCODING_FAILED"
    QR_GENERATION_FAILED = "QR_GENERATION_FAILED"
    CHECKSUM_FAILED = "CHECKSUM_FAILED"


class JPYCPaymentError(ValueError):
    """
    Raised by every public helper in this package.

    - code: ErrorCode naming the failure kind
    - details: optional structured context (offending value, bounds, cause)
    """

    def __init__(self, message: str, code: ErrorCode, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code.value,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value!r})"
