from typing import Any

from crossbell.contract.events import TransactionReceipt
from crossbell.contract.executor import TransactionExecutor
from crossbell.contract.models import ContractCall
from crossbell.storage import ContentResolver

__all__ = ["BaseOperations"]


class BaseOperations:
    """Shared plumbing for the per-domain operation groups.

    Writes go through the guarded executor, reads go straight to the chain.
    """

    def __init__(self, executor: TransactionExecutor, resolver: ContentResolver):
        self.executor = executor
        self.resolver = resolver

    async def _write(self, contract: str, function: str, *args: Any, value: int = 0) -> TransactionReceipt:
        return await self.executor.execute(ContractCall(contract, function, args, value))

    async def _read(self, contract: str, function: str, *args: Any) -> Any:
        return await self.executor.read(ContractCall(contract, function, args))
