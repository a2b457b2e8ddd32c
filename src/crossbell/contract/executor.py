"""Transaction executor - submit, confirm and return the receipt.

Every mutating SDK operation goes through :meth:`TransactionExecutor.execute`,
which is registered behind the network guard so that a call is never
submitted while the signer is connected to another chain.

Mutating calls are never retried: a resubmission after an ambiguous failure
could apply the same effect twice.
"""

import asyncio
from typing import Any

from crossbell.constants import RECEIPT_TIMEOUT_SECONDS
from crossbell.contract.chain import ChainClient
from crossbell.contract.events import TransactionReceipt
from crossbell.contract.models import ContractCall
from crossbell.contract.network import with_network_guard
from crossbell.errors import TransactionTimeoutError, WrongNetworkError
from crossbell.utils.logging import get_logger

__all__ = ["TransactionExecutor"]

_logger = get_logger(__name__)


class TransactionExecutor:
    """Runs contract calls against one chain client.

    Args:
        chain: Chain connection used for submission and confirmation
        chain_id: Chain id the contracts are deployed on
        receipt_timeout: Seconds to wait for confirmation before giving up

    Note:
        The network check is not atomic with the submission. A wallet that
        switches chains between the check and the submit is not detected.
    """

    def __init__(
        self,
        chain: ChainClient,
        chain_id: int,
        receipt_timeout: float = RECEIPT_TIMEOUT_SECONDS,
    ):
        self.chain = chain
        self.chain_id = chain_id
        self.receipt_timeout = receipt_timeout
        self.execute = with_network_guard(self._execute, self.ensure_network)

    async def ensure_network(self) -> None:
        """Make sure the signer is on ``chain_id``, switching if needed.

        Raises:
            WrongNetworkError: If the signer is elsewhere and refused (or
                does not support) switching
        """
        current = await self.chain.current_network_id()
        if current == self.chain_id:
            return

        _logger.info(
            "Switching network",
            extra={"from_chain_id": current, "to_chain_id": self.chain_id},
        )
        if not await self.chain.switch_network(self.chain_id):
            raise WrongNetworkError(self.chain_id, current)

    async def _execute(self, call: ContractCall) -> TransactionReceipt:
        tx_hash = await self.chain.submit(call)
        _logger.info(
            "Transaction submitted",
            extra={"contract": call.contract, "function": call.function, "tx_hash": tx_hash},
        )

        try:
            receipt = await asyncio.wait_for(
                self.chain.wait_for_receipt(tx_hash), timeout=self.receipt_timeout
            )
        except asyncio.TimeoutError:
            raise TransactionTimeoutError(tx_hash, self.receipt_timeout) from None

        _logger.info(
            "Transaction confirmed",
            extra={
                "function": call.function,
                "tx_hash": receipt.transaction_hash,
                "block_number": receipt.block_number,
                "events": len(receipt.events),
            },
        )
        return receipt

    async def receipt(self, tx_hash: str) -> TransactionReceipt:
        """Fetch the receipt of an earlier transaction. No network guard."""
        return await self.chain.get_receipt(tx_hash)

    async def read(self, call: ContractCall) -> Any:
        """Evaluate a view function. No network guard."""
        return await self.chain.call(call)

    def __repr__(self) -> str:
        return f"TransactionExecutor(chain_id={self.chain_id}, receipt_timeout={self.receipt_timeout})"
