"""Crossbell contract client.

Bundles the chain connection, the guarded transaction executor, the content
resolver and the per-domain operation groups behind one object.

Example:
    >>> from crossbell import CrossbellClient, CharacterTarget
    >>> client = CrossbellClient.from_private_key("0x...")
    >>> result = await client.link.link(1, CharacterTarget(2), "follow")
    >>> print(result.data, result.transaction_hash)
"""

from typing import Optional

from crossbell.constants import RECEIPT_TIMEOUT_SECONDS
from crossbell.contract.chain import ChainClient, Web3ChainClient
from crossbell.contract.config import Network, NetworkConfig, get_network_config
from crossbell.contract.executor import TransactionExecutor
from crossbell.contract.subcontracts import (
    CharacterOperations,
    LinkOperations,
    NoteOperations,
    TipsOperations,
)
from crossbell.storage import ContentResolver

__all__ = ["CrossbellClient"]


class CrossbellClient:
    """Entry point for Crossbell contract operations.

    Attributes:
        executor: Guarded transaction executor shared by all operation groups
        resolver: IPFS content resolver
        link: Link operations
        note: Note operations
        character: Character operations
        tips: MIRA tips
    """

    def __init__(
        self,
        chain: ChainClient,
        network_config: Optional[NetworkConfig] = None,
        resolver: Optional[ContentResolver] = None,
        receipt_timeout: float = RECEIPT_TIMEOUT_SECONDS,
    ):
        self.chain = chain
        self.config = network_config or get_network_config(Network.CROSSBELL)
        self.resolver = resolver or ContentResolver()
        self.executor = TransactionExecutor(chain, self.config.chain_id, receipt_timeout)

        self.character = CharacterOperations(self.executor, self.resolver)
        self.link = LinkOperations(self.executor, self.resolver, self.character)
        self.note = NoteOperations(self.executor, self.resolver)
        self.tips = TipsOperations(self.executor, self.resolver, self.config.tips)

    @classmethod
    def from_private_key(
        cls,
        private_key: str,
        network: Network = Network.CROSSBELL,
        rpc_url: Optional[str] = None,
        resolver: Optional[ContentResolver] = None,
        tx_overrides: Optional[dict] = None,
    ) -> "CrossbellClient":
        """Build a client that signs locally with ``private_key``.

        Args:
            private_key: Hex private key of the signer
            network: Deployment to use
            rpc_url: Override the network's default RPC endpoint
            resolver: Content resolver; defaults to the Crossbell IPFS relay
            tx_overrides: Extra transaction fields (gas, fees) for every write
        """
        config = get_network_config(network, rpc_url=rpc_url)
        chain = Web3ChainClient(config, private_key=private_key, tx_overrides=tx_overrides)
        return cls(chain, config, resolver=resolver)

    def __repr__(self) -> str:
        return f"CrossbellClient(network={self.config.name.value}, chain_id={self.config.chain_id})"
