"""
Shared constants for JPYC payment URIs.

Network-specific values (chain ids, contract addresses) live in
jpycpay/networks.py.
"""

from __future__ import annotations

import re

# JPYC is a standard 18-decimals ERC-20 token.
JPYC_DECIMALS = 18

MIN_DECIMALS = 0
MAX_DECIMALS = 18

# EIP-681 scheme prefix and the ERC-20 function every URI invokes.
EIP681_SCHEME = "ethereum"
TRANSFER_FUNCTION = "transfer"

ADDRESS_PREFIX = "0x"
ADDRESS_LENGTH = 42
ADDRESS_REGEX = re.compile(r"^0x[a-fA-F0-9]{40}$")

# Upper bound on a single payment, in JPY.
MAX_SAFE_AMOUNT = 10**15

# Advisory thresholds, in JPY (not scaled by decimals).
SMALL_AMOUNT_THRESHOLD = 1
LARGE_AMOUNT_THRESHOLD = 1_000_000

# Largest value an EIP-681 `uint256` parameter can carry.
UINT256_MAX = 2**256 - 1

# Longest plain-digit expansion accepted for exponent-notation amounts ("1e5").
MAX_EXPANDED_AMOUNT_DIGITS = 1000
