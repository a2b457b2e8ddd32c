from dataclasses import dataclass, field
from typing import Any, Generic, Optional, Tuple, TypeVar, Union

from crossbell.storage.types import Metadata

__all__ = [
    "Result",
    "ContractCall",
    "CharacterTarget",
    "AddressTarget",
    "AnyUriTarget",
    "Erc721Target",
    "NoteTarget",
    "LinklistTarget",
    "LinkTarget",
    "CreateThenLinkResult",
    "PostNoteResult",
    "MintNoteResult",
    "SetUriResult",
    "Note",
    "Character",
]

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Return envelope of every SDK operation.

    Read-only operations never carry a transaction hash. Mutating operations
    always do, even when ``data`` is ``None``.
    """

    data: T
    transaction_hash: Optional[str] = None

    @property
    def has_hash(self) -> bool:
        return self.transaction_hash is not None


@dataclass(frozen=True)
class ContractCall:
    """A contract function invocation, independent of any web3 binding.

    Attributes:
        contract: Which deployed contract to call ("entry", "periphery",
            "tips" or "mira_token")
        function: ABI function name
        args: Positional arguments; structs are passed as tuples
        value: Native token amount to attach, in wei
    """

    contract: str
    function: str
    args: Tuple[Any, ...] = ()
    value: int = 0


# ------------------------------------------------------------------
# Link targets
# ------------------------------------------------------------------

@dataclass(frozen=True)
class CharacterTarget:
    character_id: int


@dataclass(frozen=True)
class AddressTarget:
    address: str


@dataclass(frozen=True)
class AnyUriTarget:
    uri: str


@dataclass(frozen=True)
class Erc721Target:
    contract_address: str
    token_id: int


@dataclass(frozen=True)
class NoteTarget:
    character_id: int
    note_id: int


@dataclass(frozen=True)
class LinklistTarget:
    linklist_id: int


LinkTarget = Union[
    CharacterTarget,
    AddressTarget,
    AnyUriTarget,
    Erc721Target,
    NoteTarget,
    LinklistTarget,
]


# ------------------------------------------------------------------
# Operation payloads
# ------------------------------------------------------------------

@dataclass(frozen=True)
class CreateThenLinkResult:
    to_character_id: int
    linklist_id: int


@dataclass(frozen=True)
class PostNoteResult:
    character_id: int
    note_id: int


@dataclass(frozen=True)
class MintNoteResult:
    contract_address: str
    token_id: int


@dataclass(frozen=True)
class SetUriResult:
    uri: str
    metadata: Optional[Metadata] = None


@dataclass
class Note:
    """A note as stored on chain, plus its resolved metadata.

    Attributes:
        character_id: Owner of the note
        note_id: Id, unique per character
        content_uri: URI of the note's metadata document
        metadata: Resolved document, when fetched
        link_item_type: bytes32 hex of the linked item's type, if any
        link_item_type_string: Decoded link item type (e.g. "Character")
        link_key: keccak256 key of the linking target
        link_module: Link module address
        contract_address: NFT contract, when the note has been minted
        mint_module: Mint module address
        deleted: Whether the note has been deleted
        locked: Whether the note can no longer be edited
    """

    character_id: int
    note_id: int
    content_uri: str
    link_item_type: str
    link_key: str
    link_module: str
    contract_address: str
    mint_module: str
    deleted: bool
    locked: bool
    metadata: Optional[Metadata] = None
    link_item_type_string: Optional[str] = field(default=None)


@dataclass
class Character:
    """A character as stored on chain, plus its resolved profile."""

    character_id: int
    handle: str
    uri: str
    note_count: int
    social_token: str
    link_module: str
    metadata: Optional[Metadata] = None
