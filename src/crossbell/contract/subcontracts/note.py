from typing import Optional, Union

from web3 import Web3

from crossbell.constants import NIL_ADDRESS
from crossbell.contract.codec import Numberish, decode_link_type, to_bytes, to_int
from crossbell.contract.events import match_event
from crossbell.contract.models import MintNoteResult, Note, PostNoteResult, Result, SetUriResult
from crossbell.contract.subcontracts.base import BaseOperations
from crossbell.storage import MetadataOrUri, NoteMetadata
from crossbell.utils.validation import validate_address

__all__ = ["NoteOperations"]


class NoteOperations(BaseOperations):
    """Post, read, mint and manage notes."""

    async def post(
        self,
        character_id: Numberish,
        metadata_or_uri: MetadataOrUri,
        locked: bool = False,
    ) -> Result[PostNoteResult]:
        """Post a note.

        Args:
            character_id: Owner of the note; must be owned by the signer
            metadata_or_uri: Note document (published first) or its URI
            locked: Post the note as locked (no later edits)

        Returns:
            Result with the character and note ids
        """
        owner = to_int(character_id, "character_id")
        content = await self.resolver.resolve_or_passthrough(metadata_or_uri, "note")

        receipt = await self._write(
            "entry",
            "postNote",
            (owner, content.uri, NIL_ADDRESS, b"", NIL_ADDRESS, b"", locked),
        )
        event = match_event(receipt.events, "PostNote", tx_hash=receipt.transaction_hash)
        return Result(
            PostNoteResult(character_id=int(event["characterId"]), note_id=int(event["noteId"])),
            receipt.transaction_hash,
        )

    async def get(
        self,
        character_id: Numberish,
        note_id: Numberish,
        fetch_metadata: bool = True,
    ) -> Result[Note]:
        """Read a note, resolving its metadata unless told not to."""
        owner = to_int(character_id, "character_id")
        note = to_int(note_id, "note_id")
        (
            link_item_type,
            link_key,
            content_uri,
            link_module,
            mint_module,
            mint_nft,
            deleted,
            locked,
        ) = await self._read("entry", "getNote", owner, note)

        metadata: Optional[NoteMetadata] = None
        if fetch_metadata and content_uri:
            metadata = await self.resolver.resolve(content_uri, NoteMetadata)

        return Result(
            Note(
                character_id=owner,
                note_id=note,
                content_uri=content_uri,
                metadata=metadata,
                link_item_type=Web3.to_hex(link_item_type),
                link_item_type_string=decode_link_type(link_item_type) or None,
                link_key=Web3.to_hex(link_key),
                link_module=link_module,
                contract_address=mint_nft,
                mint_module=mint_module,
                deleted=deleted,
                locked=locked,
            )
        )

    async def mint(
        self,
        character_id: Numberish,
        note_id: Numberish,
        to_address: str,
        mint_module_data: Union[bytes, str, None] = None,
    ) -> Result[MintNoteResult]:
        """Mint a note as an NFT to ``to_address``."""
        owner = to_int(character_id, "character_id")
        note = to_int(note_id, "note_id")
        recipient = validate_address(to_address, "to_address")

        receipt = await self._write(
            "entry",
            "mintNote",
            (owner, note, recipient, to_bytes(mint_module_data, "mint_module_data")),
        )
        event = match_event(receipt.events, "MintNote", tx_hash=receipt.transaction_hash)
        return Result(
            MintNoteResult(
                contract_address=event["tokenAddress"],
                token_id=int(event["tokenId"]),
            ),
            receipt.transaction_hash,
        )

    async def set_uri(
        self,
        character_id: Numberish,
        note_id: Numberish,
        metadata_or_uri: MetadataOrUri,
    ) -> Result[SetUriResult]:
        owner = to_int(character_id, "character_id")
        note = to_int(note_id, "note_id")
        content = await self.resolver.resolve_or_passthrough(metadata_or_uri, "note")

        receipt = await self._write("entry", "setNoteUri", owner, note, content.uri)
        return Result(SetUriResult(content.uri, content.metadata), receipt.transaction_hash)

    async def delete(self, character_id: Numberish, note_id: Numberish) -> Result[None]:
        receipt = await self._write(
            "entry",
            "deleteNote",
            to_int(character_id, "character_id"),
            to_int(note_id, "note_id"),
        )
        return Result(None, receipt.transaction_hash)

    async def lock(self, character_id: Numberish, note_id: Numberish) -> Result[None]:
        """Lock a note. Locked notes can no longer be edited or unlocked."""
        receipt = await self._write(
            "entry",
            "lockNote",
            to_int(character_id, "character_id"),
            to_int(note_id, "note_id"),
        )
        return Result(None, receipt.transaction_hash)
