"""Link operations.

A link is a typed edge from a character to a target: another character, an
address, an arbitrary URI, an ERC-721 token, a note or a linklist. All links
of one type from one character share a linklist, whose id is what a link
call returns.

Every target variant is turned into a :class:`TargetBinding` in exactly one
place (:func:`bind_target`); the submit/match/assemble sequence is shared.
Whether linking twice is a no-op or a revert is up to the contract.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union

from crossbell.contract.codec import Numberish, encode_link_type, to_bytes, to_int
from crossbell.contract.events import match_event
from crossbell.contract.models import (
    AddressTarget,
    AnyUriTarget,
    Character,
    CharacterTarget,
    CreateThenLinkResult,
    Erc721Target,
    LinklistTarget,
    LinkTarget,
    NoteTarget,
    Result,
    SetUriResult,
)
from crossbell.contract.executor import TransactionExecutor
from crossbell.contract.subcontracts.base import BaseOperations
from crossbell.contract.subcontracts.character import CharacterOperations
from crossbell.errors import ValidationError
from crossbell.storage import ContentResolver, MetadataOrUri
from crossbell.utils.logging import get_logger
from crossbell.utils.validation import validate_address, validate_same_length

__all__ = ["LinkOperations", "TargetBinding", "bind_target"]

_logger = get_logger(__name__)

ModuleData = Union[bytes, str, None]


@dataclass(frozen=True)
class TargetBinding:
    """How one link target maps onto the Entry contract.

    Attributes:
        kind: Suffix of the contract functions (``link<kind>`` /
            ``unlink<kind>``)
        fields: Target fields as they appear in the call struct, between
            ``fromCharacterId`` and ``linkType``
        event_name: Event emitted on a successful link
    """

    kind: str
    fields: Tuple[Any, ...]
    event_name: str

    @property
    def link_function(self) -> str:
        return f"link{self.kind}"

    @property
    def unlink_function(self) -> str:
        return f"unlink{self.kind}"


def bind_target(target: LinkTarget) -> TargetBinding:
    """Validate a link target and bind it to its contract entry points.

    Raises:
        ValidationError: For malformed ids or an unknown target type
        InvalidAddressError: For malformed addresses
    """
    if isinstance(target, CharacterTarget):
        return TargetBinding(
            "Character",
            (to_int(target.character_id, "character_id"),),
            "LinkCharacter",
        )
    if isinstance(target, AddressTarget):
        return TargetBinding(
            "Address",
            (validate_address(target.address, "address"),),
            "LinkAddress",
        )
    if isinstance(target, AnyUriTarget):
        return TargetBinding("AnyUri", (target.uri,), "LinkAnyUri")
    if isinstance(target, Erc721Target):
        return TargetBinding(
            "ERC721",
            (
                validate_address(target.contract_address, "contract_address"),
                to_int(target.token_id, "token_id"),
            ),
            "LinkERC721",
        )
    if isinstance(target, NoteTarget):
        return TargetBinding(
            "Note",
            (to_int(target.character_id, "character_id"), to_int(target.note_id, "note_id")),
            "LinkNote",
        )
    if isinstance(target, LinklistTarget):
        return TargetBinding(
            "Linklist",
            (to_int(target.linklist_id, "linklist_id"),),
            "LinkLinklist",
        )
    raise ValidationError(f"Unsupported link target: {type(target).__name__}", field="target")


class LinkOperations(BaseOperations):
    """Create and remove links, and query them.

    Example:
        >>> result = await client.link.link(1, CharacterTarget(2), "follow")
        >>> result.data, result.transaction_hash
        (5, '0x...')
    """

    def __init__(
        self,
        executor: TransactionExecutor,
        resolver: ContentResolver,
        characters: Optional[CharacterOperations] = None,
    ):
        super().__init__(executor, resolver)
        self.characters = characters or CharacterOperations(executor, resolver)

    async def link(
        self,
        from_character_id: Numberish,
        target: LinkTarget,
        link_type: str,
        data: ModuleData = None,
    ) -> Result[int]:
        """Link ``from_character_id`` to ``target``.

        Args:
            from_character_id: Linking character; must be owned by the signer
            target: What to link to
            link_type: Link type, at most 32 bytes of UTF-8 (e.g. "follow")
            data: Data for the target's link module, if it has one

        Returns:
            Result with the linklist id and the transaction hash
        """
        from_id = to_int(from_character_id, "from_character_id")
        binding = bind_target(target)
        encoded = encode_link_type(link_type)
        return await self._link_via(binding, from_id, encoded, to_bytes(data))

    async def unlink(
        self,
        from_character_id: Numberish,
        target: LinkTarget,
        link_type: str,
    ) -> Result[None]:
        """Remove the ``link_type`` link from ``from_character_id`` to ``target``."""
        from_id = to_int(from_character_id, "from_character_id")
        binding = bind_target(target)
        encoded = encode_link_type(link_type)
        return await self._unlink_via(binding, from_id, encoded)

    async def link_batch(
        self,
        from_character_id: Numberish,
        targets: Sequence[LinkTarget],
        link_type: str,
        data: Optional[Sequence[ModuleData]] = None,
    ) -> Result[int]:
        """Link to several characters and addresses in one transaction.

        Address targets without a character get one created for them. All
        targets land in the same linklist; the id of the first
        ``LinkCharacter`` event in the receipt is returned.

        Args:
            from_character_id: Linking character
            targets: Character and address targets
            link_type: Link type shared by all links
            data: Link module data, one entry per target when given. Entries
                for address targets are not sent.

        Raises:
            LengthMismatchError: If ``data`` and ``targets`` differ in length
            InvalidAddressError: If an address target is malformed
            ValidationError: For an empty batch or another target type
        """
        from_id = to_int(from_character_id, "from_character_id")
        encoded = encode_link_type(link_type)
        if not targets:
            raise ValidationError("targets must not be empty", field="targets")
        if data is not None:
            validate_same_length(targets, data, "data")

        character_ids: List[int] = []
        character_data: List[bytes] = []
        addresses: List[str] = []
        for i, target in enumerate(targets):
            binding = bind_target(target)
            if binding.kind == "Character":
                character_ids.append(binding.fields[0])
                character_data.append(to_bytes(data[i] if data is not None else None, f"data[{i}]"))
            elif binding.kind == "Address":
                addresses.append(binding.fields[0])
            else:
                raise ValidationError(
                    f"targets[{i}] must be a character or an address, got {binding.kind}",
                    field="targets",
                )

        receipt = await self._write(
            "periphery",
            "linkCharactersInBatch",
            (from_id, character_ids, character_data, addresses, encoded),
        )
        events = match_event(
            receipt.events,
            "LinkCharacter",
            allow_multiple=True,
            tx_hash=receipt.transaction_hash,
        )
        if len(events) > 1:
            _logger.debug(
                "Batch emitted several link events, using the first",
                extra={"tx_hash": receipt.transaction_hash, "events": len(events)},
            )
        return Result(int(events[0]["linklistId"]), receipt.transaction_hash)

    async def create_then_link(
        self,
        from_character_id: Numberish,
        to_address: str,
        link_type: str,
    ) -> Result[CreateThenLinkResult]:
        """Create a character for ``to_address`` and link to it.

        Fails on chain when ``to_address`` already owns a character.
        """
        from_id = to_int(from_character_id, "from_character_id")
        address = validate_address(to_address, "to_address")
        encoded = encode_link_type(link_type)

        receipt = await self._write(
            "entry", "createThenLinkCharacter", (from_id, address, encoded)
        )
        created = match_event(receipt.events, "CharacterCreated", tx_hash=receipt.transaction_hash)
        linked = match_event(receipt.events, "LinkCharacter", tx_hash=receipt.transaction_hash)
        return Result(
            CreateThenLinkResult(
                to_character_id=int(created["characterId"]),
                linklist_id=int(linked["linklistId"]),
            ),
            receipt.transaction_hash,
        )

    async def get_linklist_id_by_transaction(
        self,
        tx_hash: str,
        event_name: str = "LinkCharacter",
    ) -> Result[int]:
        """Recover the linklist id of an earlier link transaction."""
        receipt = await self.executor.receipt(tx_hash)
        event = match_event(receipt.events, event_name, tx_hash=tx_hash)
        return Result(int(event["linklistId"]))

    async def get_linking_character_ids(
        self,
        from_character_id: Numberish,
        link_type: str,
    ) -> Result[List[int]]:
        """Ids of the characters ``from_character_id`` currently links to."""
        ids = await self._read(
            "periphery",
            "getLinkingCharacterIds",
            to_int(from_character_id, "from_character_id"),
            encode_link_type(link_type),
        )
        return Result([int(i) for i in ids])

    async def get_linking_characters(
        self,
        from_character_id: Numberish,
        link_type: str,
    ) -> Result[List[Character]]:
        """Characters ``from_character_id`` currently links to, read concurrently."""
        ids = await self.get_linking_character_ids(from_character_id, link_type)
        results = await asyncio.gather(*(self.characters.get(i) for i in ids.data))
        return Result([r.data for r in results])

    async def set_linklist_uri(
        self,
        linklist_id: Numberish,
        metadata_or_uri: MetadataOrUri,
    ) -> Result[SetUriResult]:
        linklist = to_int(linklist_id, "linklist_id")
        content = await self.resolver.resolve_or_passthrough(metadata_or_uri, "linklist")
        receipt = await self._write("entry", "setLinklistUri", linklist, content.uri)
        return Result(SetUriResult(content.uri, content.metadata), receipt.transaction_hash)

    async def get_linklist_uri(self, linklist_id: Numberish) -> Result[str]:
        uri = await self._read("entry", "getLinklistUri", to_int(linklist_id, "linklist_id"))
        return Result(uri)

    # ------------------------------------------------------------------
    # Shared submit/match/assemble
    # ------------------------------------------------------------------
    async def _link_via(
        self,
        binding: TargetBinding,
        from_id: int,
        link_type: bytes,
        data: bytes,
    ) -> Result[int]:
        receipt = await self._write(
            "entry",
            binding.link_function,
            (from_id, *binding.fields, link_type, data),
        )
        event = match_event(receipt.events, binding.event_name, tx_hash=receipt.transaction_hash)
        return Result(int(event["linklistId"]), receipt.transaction_hash)

    async def _unlink_via(
        self,
        binding: TargetBinding,
        from_id: int,
        link_type: bytes,
    ) -> Result[None]:
        receipt = await self._write(
            "entry",
            binding.unlink_function,
            (from_id, *binding.fields, link_type),
        )
        return Result(None, receipt.transaction_hash)
