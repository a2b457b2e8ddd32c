from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

__all__ = ["Network", "NetworkConfig", "NETWORKS", "get_network_config"]


class Network(str, Enum):
    CROSSBELL = "crossbell"


@dataclass(frozen=True)
class NetworkConfig:
    name: Network
    chain_id: int
    rpc_url: str
    entry: str
    periphery: str
    tips: str
    mira_token: str


NETWORKS: dict[Network, NetworkConfig] = {
    Network.CROSSBELL: NetworkConfig(
        name=Network.CROSSBELL,
        chain_id=3737,
        rpc_url="https://rpc.crossbell.io",
        # Lowercase on purpose; checksummed when contracts are bound
        entry="0xa6f969045641cf486a747a2688f3a5a6d43cd0d8",
        periphery="0x96e96b7af62d628ce7eb2016d2c1d2786614ea73",
        tips="0x0058be0845952d887d1668b5545de995e12e8783",
        mira_token="0xafb95cc0bd320648b3e8df6223d9cdd05ebedc64",
    ),
}


def get_network_config(network: Network, rpc_url: Optional[str] = None) -> NetworkConfig:
    cfg = NETWORKS[network]
    if rpc_url:
        return replace(cfg, rpc_url=rpc_url)
    return cfg
