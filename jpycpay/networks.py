"""
Network registry for JPYC payments.

The registry is read-only. The default network is `polygon` unless the
JPYCPAY_DEFAULT_NETWORK environment variable selects another one.
"""

from __future__ import annotations

import os
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .errors import ErrorCode, JPYCPaymentError
from .models import ChainConfig, SupportedNetwork

# Same contract address on every supported chain.
JPYC_CONTRACT_ADDRESS = "0xe7c3d8c9a439fede00d2600032d5db0be71c3c29"

DEFAULT_NETWORK = SupportedNetwork.POLYGON

DEFAULT_NETWORK_ENV = "JPYCPAY_DEFAULT_NETWORK"

CHAIN_CONFIGS: Mapping[SupportedNetwork, ChainConfig] = MappingProxyType(
    {
        SupportedNetwork.ETHEREUM: ChainConfig(
            chain_id=1,
            name="Ethereum Mainnet",
            jpyc_address=JPYC_CONTRACT_ADDRESS,
            explorer_url="https://etherscan.io",
        ),
        SupportedNetwork.POLYGON: ChainConfig(
            chain_id=137,
            name="Polygon",
            jpyc_address=JPYC_CONTRACT_ADDRESS,
            explorer_url="https://polygonscan.com",
        ),
        SupportedNetwork.AVALANCHE: ChainConfig(
            chain_id=43114,
            name="Avalanche C-Chain",
            jpyc_address=JPYC_CONTRACT_ADDRESS,
            explorer_url="https://snowtrace.io",
        ),
    }
)


def supported_networks() -> list[str]:
    return [n.value for n in CHAIN_CONFIGS]


def is_supported_network(network: object) -> bool:
    try:
        resolve_network(network)  # type: ignore[arg-type]
    except JPYCPaymentError:
        return False
    return True


def resolve_network(network: Union[str, SupportedNetwork]) -> SupportedNetwork:
    """
    Map a network token to SupportedNetwork.

    Raises JPYCPaymentError(INVALID_NETWORK) for anything not in the registry.
    """
    try:
        resolved = SupportedNetwork(network)
    except (TypeError, ValueError):
        resolved = None

    if resolved is None or resolved not in CHAIN_CONFIGS:
        raise JPYCPaymentError(
            f"Unsupported network: {network}. "
            f"Supported networks: {', '.join(supported_networks())}",
            ErrorCode.INVALID_NETWORK,
            {"network": network},
        )
    return resolved


def get_chain_config(network: Union[str, SupportedNetwork]) -> ChainConfig:
    return CHAIN_CONFIGS[resolve_network(network)]


def network_for_chain_id(chain_id: int) -> Optional[SupportedNetwork]:
    for network, config in CHAIN_CONFIGS.items():
        if config.chain_id == chain_id:
            return network
    return None


def selected_default_network() -> SupportedNetwork:
    """
    Return the default network, honouring JPYCPAY_DEFAULT_NETWORK.

    - unset or blank means DEFAULT_NETWORK
    - an unknown value raises INVALID_NETWORK (no silent fallback)
    """
    raw = os.getenv(DEFAULT_NETWORK_ENV)
    if raw is None:
        return DEFAULT_NETWORK
    s = raw.strip().lower()
    if not s:
        return DEFAULT_NETWORK
    return resolve_network(s)
