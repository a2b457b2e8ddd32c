"""Tips in MIRA.

Tipping is an ERC-777 ``send`` of MIRA to the Tips contract. The contract's
``tokensReceived`` hook reads the sender and recipient from the ABI-encoded
user data and forwards the tokens.
"""

from eth_abi import encode

from crossbell.contract.codec import Numberish, to_int
from crossbell.contract.executor import TransactionExecutor
from crossbell.contract.models import Result
from crossbell.contract.subcontracts.base import BaseOperations
from crossbell.errors import ValidationError
from crossbell.storage import ContentResolver
from crossbell.utils.validation import validate_address

__all__ = ["TipsOperations"]


def _validate_amount(amount: Numberish) -> int:
    value = to_int(amount, "amount")
    if value == 0:
        raise ValidationError("amount must be positive", field="amount")
    return value


class TipsOperations(BaseOperations):
    def __init__(self, executor: TransactionExecutor, resolver: ContentResolver, tips_address: str):
        super().__init__(executor, resolver)
        self.tips_address = validate_address(tips_address, "tips_address")

    async def tip_character(
        self,
        from_character_id: Numberish,
        to_character_id: Numberish,
        amount: Numberish,
    ) -> Result[None]:
        """Tip a character.

        Args:
            from_character_id: Tipping character; must be owned by the signer
            to_character_id: Character receiving the tip
            amount: MIRA amount in wei

        Returns:
            Result with the transaction hash only
        """
        user_data = encode(
            ["uint256", "uint256"],
            [
                to_int(from_character_id, "from_character_id"),
                to_int(to_character_id, "to_character_id"),
            ],
        )
        return await self._send(_validate_amount(amount), user_data)

    async def tip_character_for_note(
        self,
        from_character_id: Numberish,
        to_character_id: Numberish,
        to_note_id: Numberish,
        amount: Numberish,
    ) -> Result[None]:
        """Tip a character for one of its notes."""
        user_data = encode(
            ["uint256", "uint256", "uint256"],
            [
                to_int(from_character_id, "from_character_id"),
                to_int(to_character_id, "to_character_id"),
                to_int(to_note_id, "to_note_id"),
            ],
        )
        return await self._send(_validate_amount(amount), user_data)

    async def _send(self, amount: int, user_data: bytes) -> Result[None]:
        receipt = await self._write("mira_token", "send", self.tips_address, amount, user_data)
        return Result(None, receipt.transaction_hash)
