from typing import Optional

from crossbell.constants import NIL_ADDRESS
from crossbell.contract.codec import Numberish, to_int
from crossbell.contract.events import match_event
from crossbell.contract.models import Character, Result
from crossbell.contract.subcontracts.base import BaseOperations
from crossbell.errors import ValidationError
from crossbell.storage import CharacterMetadata, MetadataOrUri
from crossbell.utils.validation import validate_address

__all__ = ["CharacterOperations"]


class CharacterOperations(BaseOperations):
    async def create(
        self,
        owner: str,
        handle: str,
        metadata_or_uri: MetadataOrUri,
    ) -> Result[int]:
        """Create a character owned by ``owner``.

        Args:
            owner: Address that will own the character
            handle: Unique handle; uniqueness and format are enforced on chain
            metadata_or_uri: Character document (published first) or its URI

        Returns:
            Result with the new character id
        """
        to = validate_address(owner, "owner")
        if not handle:
            raise ValidationError("handle must not be empty", field="handle")
        content = await self.resolver.resolve_or_passthrough(metadata_or_uri, "character")

        receipt = await self._write(
            "entry",
            "createCharacter",
            (to, handle, content.uri, NIL_ADDRESS, b""),
        )
        event = match_event(receipt.events, "CharacterCreated", tx_hash=receipt.transaction_hash)
        return Result(int(event["characterId"]), receipt.transaction_hash)

    async def get_id_by_transaction(self, tx_hash: str) -> Result[int]:
        """Recover the id of a character created by an earlier transaction."""
        receipt = await self.executor.receipt(tx_hash)
        event = match_event(receipt.events, "CharacterCreated", tx_hash=tx_hash)
        return Result(int(event["characterId"]))

    async def get(self, character_id: Numberish, fetch_metadata: bool = False) -> Result[Character]:
        """Read a character; its profile document is fetched only on request."""
        (
            on_chain_id,
            handle,
            uri,
            note_count,
            social_token,
            link_module,
        ) = await self._read("entry", "getCharacter", to_int(character_id, "character_id"))

        metadata: Optional[CharacterMetadata] = None
        if fetch_metadata and uri:
            metadata = await self.resolver.resolve(uri, CharacterMetadata)

        return Result(
            Character(
                character_id=int(on_chain_id),
                handle=handle,
                uri=uri,
                note_count=int(note_count),
                social_token=social_token,
                link_module=link_module,
                metadata=metadata,
            )
        )
